"""Motor de sueldo neto y costo empleador para Ecuador.

1. Bruto anual = basico x 12
2. Aporte personal IESS = tasa x basico (mensual), x 12 (anual)
3. Decimo tercero = 1 sueldo; decimo cuarto = SBU del anio
4. Fondo de reserva = tasa x bruto anual (se asume siempre aplicable)
5. Aporte patronal IESS = tasa patronal x bruto anual
6. Costo empleador anual = bruto anual + patronal + fondo de reserva + decimo cuarto
7. Impuesto a la renta (si el anio tiene tabla): base = bruto anual - IESS anual,
   tramos acumulativos en USD. Los decimos estan exentos.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from sueldoneto.calculo.desglose import ConstructorDesglose, Desglose
from sueldoneto.calculo.tramos import EstrategiaTramos, ResultadoTramos, TramosAcumulativos
from sueldoneto.calculo.validacion import validar_anio, validar_monto
from sueldoneto.modelos import Pais
from sueldoneto.montos import CERO, a_decimal, formatear_moneda, formatear_porcentaje, redondear
from sueldoneto.parametros.almacen import AlmacenParametros, almacen_por_defecto
from sueldoneto.parametros.modelos import TramoUnidades

logger = logging.getLogger(__name__)

MESES = Decimal("12")
UNIDAD_USD = Decimal("1")


def _rango_dolares(tramo: TramoUnidades, unidad: Decimal) -> str:
    desde = formatear_moneda(tramo.desde * unidad, Pais.ECUADOR)
    if tramo.hasta is None:
        return f"{desde} en adelante"
    return f"{desde} - {formatear_moneda(tramo.hasta * unidad, Pais.ECUADOR)}"


IMPUESTO_RENTA: EstrategiaTramos = TramosAcumulativos(formatear_rango=_rango_dolares)


@dataclass(frozen=True)
class EntradaEcuador:
    sueldo_basico: Decimal
    anio: int = 2025


@dataclass(frozen=True)
class ResultadoEcuador:
    """Resultado completo de un calculo de sueldo ecuatoriano."""

    anio_parametros: int
    sueldo_basico: Decimal

    # Mensual
    bruto_mensual: Decimal
    iess_personal: Decimal
    impuesto_renta_mensual: Decimal
    neto_mensual: Decimal
    neto_mensual_anio2: Decimal  # Con fondo de reserva mensualizado

    # Anual
    bruto_anual: Decimal  # 12 sueldos
    bruto_anual_13: Decimal  # 12 sueldos + decimo tercero
    decimo_tercero: Decimal
    decimo_cuarto: Decimal
    fondo_reserva: Decimal
    iess_personal_anual: Decimal
    base_imponible_renta: Decimal
    impuesto_renta_anual: Decimal
    neto_anual: Decimal

    # Empleador
    iess_patronal: Decimal
    costo_empleador_anual: Decimal
    costo_empleador_mensual: Decimal

    desglose: Desglose
    pais: Pais = field(default=Pais.ECUADOR, init=False)


def calcular_sueldo_ecuador(
    entrada: EntradaEcuador, almacen: AlmacenParametros | None = None,
) -> ResultadoEcuador:
    """Calcula sueldo neto, decimos, fondo de reserva y costo empleador en Ecuador.

    Raises:
        ErrorConfiguracion: Si ningun anio tiene parametros para Ecuador.
        ErrorEntrada: Si el anio de la entrada no es un anio valido.
    """
    almacen = almacen or almacen_por_defecto()
    anio = validar_anio(entrada.anio)
    seleccion = almacen.obtener_ecuador(anio)
    p = seleccion.parametros

    basico = a_decimal(entrada.sueldo_basico)
    bruto_anual = basico * MESES

    iess_mensual = basico * p.iess_tasa_personal
    iess_anual = iess_mensual * MESES

    decimo_tercero = basico
    decimo_cuarto = p.salario_basico_unificado
    fondo_reserva = bruto_anual * p.fondo_reserva_tasa
    iess_patronal = bruto_anual * p.iess_tasa_patronal
    costo_anual = bruto_anual + iess_patronal + fondo_reserva + decimo_cuarto

    base_renta = CERO
    renta = ResultadoTramos(impuesto=CERO)
    if p.tramos_renta is not None:
        base_renta = max(CERO, bruto_anual - iess_anual)
        renta = IMPUESTO_RENTA.evaluar(base_renta, p.tramos_renta, UNIDAD_USD)
    impuesto_mensual = redondear(renta.impuesto / MESES)

    neto_mensual = basico - iess_mensual - impuesto_mensual
    neto_anual = bruto_anual + decimo_tercero + decimo_cuarto - iess_anual - renta.impuesto
    # Desde el segundo anio el fondo de reserva se paga mes a mes con el sueldo
    neto_mensual_anio2 = neto_mensual + fondo_reserva / MESES

    desglose = ConstructorDesglose()
    desglose.mensual("Sueldo basico", basico)
    desglose.mensual(
        "Aporte personal IESS", -iess_mensual,
        f"{formatear_porcentaje(p.iess_tasa_personal)} x sueldo",
    )
    if p.tramos_renta is not None:
        desglose.mensual("Impuesto a la renta (mensual)", -impuesto_mensual, "Impuesto anual / 12")
    desglose.mensual("Sueldo neto mensual", neto_mensual)
    desglose.mensual(
        "Fondo de reserva mensualizado (desde el 2do anio)", fondo_reserva / MESES,
        f"{formatear_porcentaje(p.fondo_reserva_tasa)} x sueldo",
    )

    desglose.anual("Sueldo x 12", bruto_anual)
    desglose.anual("Decimo tercero", decimo_tercero, "1 sueldo")
    desglose.anual(
        "Decimo cuarto", decimo_cuarto,
        f"SBU {formatear_moneda(p.salario_basico_unificado, Pais.ECUADOR)}",
    )
    desglose.anual("Aporte personal IESS anual", -iess_anual)
    if p.tramos_renta is not None:
        desglose.anual("Base imponible renta", base_renta, "Sueldo x 12 - IESS anual")
        desglose.anual("Impuesto a la renta anual", -renta.impuesto)
    desglose.anual("Neto anual", neto_anual)
    desglose.anual(
        "Aporte patronal IESS", iess_patronal,
        f"{formatear_porcentaje(p.iess_tasa_patronal)} x sueldo x 12",
    )
    desglose.anual(
        "Fondo de reserva", fondo_reserva,
        f"{formatear_porcentaje(p.fondo_reserva_tasa)} x sueldo x 12",
    )
    desglose.anual(
        "Costo empleador anual", costo_anual,
        "Sueldo x 12 + patronal + fondo de reserva + decimo cuarto",
    )

    logger.debug(
        "Ecuador %s (params %s): bruto=%s neto=%s costo=%s",
        anio, seleccion.anio_aplicado, basico, neto_mensual, costo_anual,
    )

    return ResultadoEcuador(
        anio_parametros=seleccion.anio_aplicado,
        sueldo_basico=redondear(basico),
        bruto_mensual=redondear(basico),
        iess_personal=redondear(iess_mensual),
        impuesto_renta_mensual=impuesto_mensual,
        neto_mensual=redondear(neto_mensual),
        neto_mensual_anio2=redondear(neto_mensual_anio2),
        bruto_anual=redondear(bruto_anual),
        bruto_anual_13=redondear(bruto_anual + decimo_tercero),
        decimo_tercero=redondear(decimo_tercero),
        decimo_cuarto=redondear(decimo_cuarto),
        fondo_reserva=redondear(fondo_reserva),
        iess_personal_anual=redondear(iess_anual),
        base_imponible_renta=redondear(base_renta),
        impuesto_renta_anual=redondear(renta.impuesto),
        neto_anual=redondear(neto_anual),
        iess_patronal=redondear(iess_patronal),
        costo_empleador_anual=redondear(costo_anual),
        costo_empleador_mensual=redondear(costo_anual / MESES),
        desglose=desglose.construir(renta.detalle),
    )


def validar_entrada_ecuador(sueldo_basico: object, anio: object = 2025) -> EntradaEcuador:
    """Valida valores crudos y construye una EntradaEcuador.

    Raises:
        ErrorEntrada: Monto negativo o no numerico, o anio invalido.
    """
    return EntradaEcuador(
        sueldo_basico=validar_monto(sueldo_basico, "sueldo_basico"),
        anio=validar_anio(anio),
    )
