"""Aplicacion CLI principal: sueldo neto para Peru, Ecuador y Chile.

Usage:
    sueldo peru 5000 --asignacion-familiar --vales 300 --bono-multiplos 1
    sueldo peru 5000 --regimen RIA --salud EPS --detalle
    sueldo ecuador 1000 --anio 2024
    sueldo chile 2000000 --contrato PLAZO_FIJO
    sueldo parametros PE
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from decimal import Decimal
from typing import Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

import sueldoneto
from sueldoneto.calculo import (
    calcular_bono_bruto,
    calcular_bono_neto,
    calcular_sueldo_chile,
    calcular_sueldo_ecuador,
    calcular_sueldo_peru,
    validar_entrada_chile,
    validar_entrada_ecuador,
    validar_entrada_peru,
)
from sueldoneto.calculo.desglose import Desglose
from sueldoneto.calculo.validacion import convertir_enum, validar_monto
from sueldoneto.config import obtener_configuracion
from sueldoneto.errores import AdvertenciaParametrosAnteriores, ErrorConfiguracion, ErrorEntrada
from sueldoneto.modelos import Pais, Regimen
from sueldoneto.montos import formatear_moneda, formatear_porcentaje
from sueldoneto.parametros import almacen_por_defecto

app = typer.Typer(
    name="sueldo",
    help="Sueldo neto y costo empleador - Peru, Ecuador y Chile",
    no_args_is_help=True,
)

console = Console()

T = TypeVar("T")


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sueldoneto version {sueldoneto.__version__}")
        raise typer.Exit()


def _configurar_logging(nivel: str) -> None:
    logging.basicConfig(
        level=nivel,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", help="Mostrar el detalle de los calculos en el log (DEBUG)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Mostrar la version de sueldoneto",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Sueldo neto - calculo de sueldo neto y costo empleador por pais."""
    configuracion = _ejecutar(obtener_configuracion)
    _configurar_logging("DEBUG" if verbose else configuracion.nivel_log)


# =============================================================================
# Ejecucion y presentacion
# =============================================================================
def _ejecutar(calculo: Callable[[], T]) -> T:
    """Ejecuta un calculo: avisos en amarillo, errores en rojo con salida 1."""
    try:
        with warnings.catch_warnings(record=True) as avisos:
            warnings.simplefilter("always", AdvertenciaParametrosAnteriores)
            resultado = calculo()
    except (ErrorConfiguracion, ErrorEntrada) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    for aviso in avisos:
        if issubclass(aviso.category, AdvertenciaParametrosAnteriores):
            console.print(f"[yellow]Aviso: {escape(str(aviso.message))}[/yellow]")
    return resultado


def _tabla_montos(titulo: str, filas: list[tuple[str, Decimal]], pais: Pais) -> Table:
    table = Table(title=titulo)
    table.add_column("Concepto", style="cyan")
    table.add_column("Monto", justify="right")
    for concepto, monto in filas:
        texto = formatear_moneda(monto, pais)
        table.add_row(concepto, f"[red]{texto}[/red]" if monto < 0 else texto)
    return table


def _mostrar_desglose(desglose: Desglose, pais: Pais) -> None:
    for titulo, pasos in (("Calculo mensual", desglose.mensual), ("Calculo anual", desglose.anual)):
        if not pasos:
            continue
        table = Table(title=titulo)
        table.add_column("Paso", justify="right")
        table.add_column("Descripcion")
        table.add_column("Monto", justify="right")
        table.add_column("Formula", style="dim")
        for paso in pasos:
            table.add_row(paso.paso, paso.descripcion, formatear_moneda(paso.monto, pais), paso.formula or "")
        console.print(table)

    if desglose.impuesto:
        table = Table(title="Detalle del impuesto por tramos")
        table.add_column("Tramo")
        table.add_column("Rango")
        table.add_column("Base gravada", justify="right")
        table.add_column("Impuesto", justify="right")
        for tramo in desglose.impuesto:
            table.add_row(
                tramo.etiqueta,
                tramo.rango,
                formatear_moneda(tramo.base_gravada, pais),
                formatear_moneda(tramo.monto, pais),
            )
        console.print(table)


def _anio(anio: Optional[int]) -> int:
    return anio if anio is not None else obtener_configuracion().anio_defecto


# =============================================================================
# Comandos
# =============================================================================
@app.command("peru")
def peru(
    monto: str = typer.Argument(..., help="Sueldo basico mensual (S/)"),
    anio: Optional[int] = typer.Option(None, "--anio", "-a", help="Anio de los parametros"),
    regimen: str = typer.Option("NORMAL", "--regimen", "-r", help="NORMAL o RIA"),
    salud: str = typer.Option("ESSALUD", "--salud", "-s", help="ESSALUD o EPS"),
    asignacion_familiar: bool = typer.Option(
        False, "--asignacion-familiar", help="Incluir la asignacion familiar",
    ),
    vales: str = typer.Option("0", "--vales", help="Vales de alimentos mensuales"),
    bono_multiplos: Optional[str] = typer.Option(
        None, "--bono-multiplos", help="Calcular un bono de N x (basico + vales)",
    ),
    detalle: bool = typer.Option(False, "--detalle", "-d", help="Mostrar el desglose completo"),
) -> None:
    """Calcular el sueldo neto en Peru (regimen NORMAL o RIA)."""
    entrada = _ejecutar(
        lambda: validar_entrada_peru(
            monto, vales, asignacion_familiar, _anio(anio), salud, regimen,
        )
    )
    resultado = _ejecutar(lambda: calcular_sueldo_peru(entrada))
    pais = Pais.PERU

    console.print(
        f"[bold]Peru {resultado.regimen.value} - {resultado.regimen_salud.value} "
        f"(parametros {resultado.anio_parametros})[/bold]"
    )
    console.print(_tabla_montos("Mensual", [
        ("Sueldo bruto (sin vales)", resultado.bruto_mensual),
        ("AFP", -resultado.afp),
        ("Impuesto 5ta categoria", -resultado.impuesto_quinta_mensual),
        ("Sueldo neto", resultado.neto_mensual),
    ], pais))

    filas_anuales = [("Sueldos x 12", resultado.bruto_anual)]
    if resultado.regimen == Regimen.NORMAL:
        filas_anuales += [
            ("Gratificacion julio", resultado.gratificacion_julio),
            ("Gratificacion diciembre", resultado.gratificacion_diciembre),
            ("Bono salud", resultado.bono_salud),
        ]
    filas_anuales += [
        ("Ingreso total", resultado.ingreso_total_anual),
        ("AFP anual", -resultado.afp_anual),
        ("Impuesto 5ta anual", -resultado.impuesto_quinta_anual),
        ("Neto anual", resultado.neto_anual),
    ]
    console.print(_tabla_montos("Anual", filas_anuales, pais))

    if resultado.alicuotas is not None:
        a = resultado.alicuotas
        console.print(_tabla_montos(
            f"Alicuotas RIA (salud {formatear_porcentaje(a.tasa_salud)})", [
                ("Gratificacion", a.gratificacion),
                ("Bono extraordinario", a.bono_salud),
                ("CTS", a.cts),
            ], pais,
        ))

    if bono_multiplos is not None:
        multiplos = _ejecutar(lambda: validar_monto(bono_multiplos, "bono_multiplos"))
        bruto_bono = calcular_bono_bruto(entrada.sueldo_basico, entrada.vales_alimentos, multiplos)
        bono = _ejecutar(lambda: calcular_bono_neto(entrada, bruto_bono))
        console.print(_tabla_montos("Bono extraordinario (solo 5ta, sin AFP)", [
            ("Bono bruto", bono.bono_bruto),
            ("Mayor impuesto mensual", -bono.diferencia_mensual),
            ("Bono neto", bono.bono_neto),
        ], pais))

    if detalle:
        _mostrar_desglose(resultado.desglose, pais)


@app.command("ecuador")
def ecuador(
    monto: str = typer.Argument(..., help="Sueldo basico mensual (USD)"),
    anio: Optional[int] = typer.Option(None, "--anio", "-a", help="Anio de los parametros"),
    detalle: bool = typer.Option(False, "--detalle", "-d", help="Mostrar el desglose completo"),
) -> None:
    """Calcular sueldo neto, decimos, fondo de reserva y costo empleador en Ecuador."""
    entrada = _ejecutar(lambda: validar_entrada_ecuador(monto, _anio(anio)))
    resultado = _ejecutar(lambda: calcular_sueldo_ecuador(entrada))
    pais = Pais.ECUADOR

    console.print(f"[bold]Ecuador (parametros {resultado.anio_parametros})[/bold]")
    console.print(_tabla_montos("Mensual", [
        ("Sueldo bruto", resultado.bruto_mensual),
        ("Aporte personal IESS", -resultado.iess_personal),
        ("Impuesto a la renta", -resultado.impuesto_renta_mensual),
        ("Sueldo neto", resultado.neto_mensual),
        ("Sueldo neto desde el 2do anio", resultado.neto_mensual_anio2),
    ], pais))
    console.print(_tabla_montos("Anual", [
        ("Sueldos x 12", resultado.bruto_anual),
        ("Decimo tercero", resultado.decimo_tercero),
        ("Decimo cuarto", resultado.decimo_cuarto),
        ("IESS anual", -resultado.iess_personal_anual),
        ("Impuesto a la renta anual", -resultado.impuesto_renta_anual),
        ("Neto anual", resultado.neto_anual),
    ], pais))
    console.print(_tabla_montos("Empleador", [
        ("Aporte patronal IESS", resultado.iess_patronal),
        ("Fondo de reserva", resultado.fondo_reserva),
        ("Costo anual", resultado.costo_empleador_anual),
        ("Costo mensual promedio", resultado.costo_empleador_mensual),
    ], pais))

    if detalle:
        _mostrar_desglose(resultado.desglose, pais)


@app.command("chile")
def chile(
    monto: str = typer.Argument(..., help="Sueldo bruto mensual (CLP)"),
    anio: Optional[int] = typer.Option(None, "--anio", "-a", help="Anio de la UTM"),
    contrato: str = typer.Option(
        "INDEFINIDO", "--contrato", "-c", help="INDEFINIDO o PLAZO_FIJO",
    ),
    detalle: bool = typer.Option(False, "--detalle", "-d", help="Mostrar el desglose completo"),
) -> None:
    """Calcular sueldo liquido, impuesto unico y costo empresa en Chile."""
    entrada = _ejecutar(lambda: validar_entrada_chile(monto, _anio(anio), contrato))
    resultado = _ejecutar(lambda: calcular_sueldo_chile(entrada))
    pais = Pais.CHILE

    console.print(
        f"[bold]Chile {resultado.tipo_contrato.value} "
        f"(UTM {resultado.anio_parametros}: {formatear_moneda(resultado.utm, pais)})[/bold]"
    )
    console.print(_tabla_montos("Mensual", [
        ("Sueldo bruto", resultado.sueldo_bruto),
        ("AFP", -resultado.afp),
        ("Salud", -resultado.salud),
        ("Seguro de cesantia", -resultado.cesantia),
        ("Impuesto segunda categoria", -resultado.impuesto_segunda_categoria),
        ("Sueldo liquido", resultado.neto_mensual),
    ], pais))
    console.print(f"Base tributable: {resultado.base_tributable_utm} UTM")
    console.print(_tabla_montos("Empresa", [
        ("Seguro de cesantia empleador", resultado.cesantia_empleador),
        ("SIS", resultado.sis),
        ("Costo mensual", resultado.costo_empleador_mensual),
        ("Costo anual", resultado.costo_empleador_anual),
        ("Neto anual trabajador", resultado.neto_anual),
    ], pais))

    if detalle:
        _mostrar_desglose(resultado.desglose, pais)


@app.command("parametros")
def parametros(
    pais: str = typer.Argument(..., help="PE, EC o CL"),
    regimen: Optional[str] = typer.Option(None, "--regimen", "-r", help="NORMAL o RIA (Peru)"),
) -> None:
    """Listar los anios con parametros disponibles para un pais."""
    codigo = _ejecutar(lambda: convertir_enum(Pais, pais, "pais"))
    almacen = _ejecutar(almacen_por_defecto)

    if codigo == Pais.PERU:
        regimenes = (
            [_ejecutar(lambda: convertir_enum(Regimen, regimen, "regimen"))]
            if regimen else list(Regimen)
        )
    else:
        regimenes = [None]

    table = Table(title=f"Parametros disponibles ({codigo.value})")
    table.add_column("Regimen")
    table.add_column("Anios")
    for r in regimenes:
        anios = almacen.anios_disponibles(codigo, r)
        table.add_row(r.value if r else "-", ", ".join(str(a) for a in anios) or "(ninguno)")
    console.print(table)
