"""Motor de sueldo liquido y costo empresa para Chile.

1. Cotizaciones del trabajador sobre el bruto: AFP (pension), salud 7%,
   seguro de cesantia (segun tipo de contrato)
2. Base tributable = bruto - cotizaciones, expresada tambien en UTM
3. Impuesto unico de segunda categoria: tramo unico en UTM
   (fijo del tramo + excedente x tasa marginal)
4. Liquido = bruto - cotizaciones - impuesto
5. Costo empresa = bruto + cesantia empleador + SIS
Anual = mensual x 12 (sin meses adicionales).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from sueldoneto.calculo.desglose import ConstructorDesglose, Desglose
from sueldoneto.calculo.tramos import EstrategiaTramos, TramoUnico
from sueldoneto.calculo.validacion import convertir_enum, validar_anio, validar_monto
from sueldoneto.modelos import Pais, TipoContrato
from sueldoneto.montos import a_decimal, formatear_moneda, formatear_porcentaje, redondear
from sueldoneto.parametros.almacen import AlmacenParametros, almacen_por_defecto
from sueldoneto.parametros.modelos import TramoUnidades

logger = logging.getLogger(__name__)

MESES = Decimal("12")


def _rango_utm(tramo: TramoUnidades, utm: Decimal) -> str:
    desde = f"{tramo.desde.normalize():f}"
    if tramo.hasta is None:
        return f"mas de {desde} UTM"
    return f"{desde} - {tramo.hasta.normalize():f} UTM"


SEGUNDA_CATEGORIA: EstrategiaTramos = TramoUnico(formatear_rango=_rango_utm)


@dataclass(frozen=True)
class EntradaChile:
    sueldo_bruto: Decimal
    anio: int = 2025
    tipo_contrato: TipoContrato = TipoContrato.INDEFINIDO


@dataclass(frozen=True)
class ResultadoChile:
    """Resultado completo de un calculo de sueldo chileno."""

    tipo_contrato: TipoContrato
    anio_parametros: int
    utm: Decimal

    # Trabajador (mensual)
    sueldo_bruto: Decimal
    afp: Decimal  # Solo pension
    salud: Decimal
    cesantia: Decimal
    total_cotizaciones: Decimal  # afp + salud + cesantia
    base_tributable: Decimal
    base_tributable_utm: Decimal
    impuesto_segunda_categoria: Decimal
    impuesto_utm: Decimal
    neto_mensual: Decimal

    # Empleador (mensual)
    cesantia_empleador: Decimal
    sis: Decimal
    costo_empleador_mensual: Decimal

    # Anual
    bruto_anual: Decimal
    cotizaciones_anual: Decimal
    impuesto_anual: Decimal
    neto_anual: Decimal
    costo_empleador_anual: Decimal

    desglose: Desglose
    pais: Pais = field(default=Pais.CHILE, init=False)


def calcular_sueldo_chile(
    entrada: EntradaChile, almacen: AlmacenParametros | None = None,
) -> ResultadoChile:
    """Calcula sueldo liquido, impuesto de segunda categoria y costo empresa.

    Ejemplo (2025, UTM 68.306, bruto 2.000.000, indefinido):
        cotizaciones 17,6% = 352.000; base 1.648.000 (24,13 UTM, tramo 4%)
        impuesto = (1.648.000 - 13,5 x 68.306) x 4% = 29.034,76

    Raises:
        ErrorConfiguracion: Si no hay UTM para el anio exacto.
        ErrorEntrada: Si el anio de la entrada no es un anio valido.
    """
    almacen = almacen or almacen_por_defecto()
    tipo_contrato = convertir_enum(TipoContrato, entrada.tipo_contrato, "tipo_contrato")

    anio = validar_anio(entrada.anio)

    seleccion = almacen.obtener_chile(anio)
    p = seleccion.parametros
    utm = p.utm_del_anio(anio)
    trabajador = p.seguridad_social.trabajador
    empleador = p.seguridad_social.empleador

    bruto = a_decimal(entrada.sueldo_bruto)

    # --- Cotizaciones del trabajador ---
    afp = bruto * trabajador.afp
    salud = bruto * trabajador.salud
    cesantia = bruto * trabajador.cesantia.tasa(tipo_contrato)
    cotizaciones = afp + salud + cesantia

    # --- Impuesto unico ---
    base = bruto - cotizaciones
    impuesto = SEGUNDA_CATEGORIA.evaluar(base, p.impuesto_segunda_categoria.tramos, utm)
    neto = bruto - cotizaciones - impuesto.impuesto

    # --- Costo empresa ---
    cesantia_empleador = bruto * empleador.cesantia.tasa(tipo_contrato)
    sis = bruto * empleador.sis
    costo_mensual = bruto + cesantia_empleador + sis

    desglose = ConstructorDesglose()
    desglose.mensual("Sueldo bruto", bruto)
    desglose.mensual("AFP trabajador", -afp, f"{formatear_porcentaje(trabajador.afp)} x bruto")
    desglose.mensual("Salud", -salud, f"{formatear_porcentaje(trabajador.salud)} x bruto")
    desglose.mensual(
        "Seguro de cesantia trabajador", -cesantia,
        f"{formatear_porcentaje(trabajador.cesantia.tasa(tipo_contrato))} x bruto",
    )
    desglose.mensual(
        "Base tributable", base,
        f"{redondear(base / utm)} UTM de {formatear_moneda(utm, Pais.CHILE)}",
    )
    desglose.mensual("Impuesto segunda categoria", -impuesto.impuesto)
    desglose.mensual("Sueldo liquido", neto)

    desglose.anual("Sueldo bruto anual", bruto * MESES, "Bruto x 12")
    desglose.anual("Cotizaciones anuales", -cotizaciones * MESES)
    desglose.anual("Impuesto anual", -impuesto.impuesto * MESES)
    desglose.anual("Neto anual trabajador", neto * MESES)
    desglose.anual(
        "Seguro de cesantia empleador", cesantia_empleador * MESES,
        f"{formatear_porcentaje(empleador.cesantia.tasa(tipo_contrato))} x bruto x 12",
    )
    desglose.anual("SIS", sis * MESES, f"{formatear_porcentaje(empleador.sis)} x bruto x 12")
    desglose.anual("Costo anual empresa", costo_mensual * MESES)

    logger.debug(
        "Chile %s %s (UTM %s): bruto=%s liquido=%s costo=%s",
        tipo_contrato.value, anio, utm, bruto, neto, costo_mensual,
    )

    return ResultadoChile(
        tipo_contrato=tipo_contrato,
        anio_parametros=seleccion.anio_aplicado,
        utm=utm,
        sueldo_bruto=redondear(bruto),
        afp=redondear(afp),
        salud=redondear(salud),
        cesantia=redondear(cesantia),
        total_cotizaciones=redondear(cotizaciones),
        base_tributable=redondear(base),
        base_tributable_utm=redondear(base / utm),
        impuesto_segunda_categoria=redondear(impuesto.impuesto),
        impuesto_utm=redondear(impuesto.impuesto / utm),
        neto_mensual=redondear(neto),
        cesantia_empleador=redondear(cesantia_empleador),
        sis=redondear(sis),
        costo_empleador_mensual=redondear(costo_mensual),
        bruto_anual=redondear(bruto * MESES),
        cotizaciones_anual=redondear(cotizaciones * MESES),
        impuesto_anual=redondear(impuesto.impuesto * MESES),
        neto_anual=redondear(neto * MESES),
        costo_empleador_anual=redondear(costo_mensual * MESES),
        desglose=desglose.construir(impuesto.detalle),
    )


def validar_entrada_chile(
    sueldo_bruto: object,
    anio: object = 2025,
    tipo_contrato: object = TipoContrato.INDEFINIDO,
) -> EntradaChile:
    """Valida valores crudos y construye una EntradaChile.

    Raises:
        ErrorEntrada: Monto negativo o no numerico, anio invalido o contrato desconocido.
    """
    return EntradaChile(
        sueldo_bruto=validar_monto(sueldo_bruto, "sueldo_bruto"),
        anio=validar_anio(anio),
        tipo_contrato=convertir_enum(TipoContrato, tipo_contrato, "tipo_contrato"),
    )
