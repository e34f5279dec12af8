"""Motor de sueldo neto para Peru: regimen NORMAL y RIA, mas bono extraordinario.

Regimen NORMAL:
1. baseSF = basico + asignacion familiar (si corresponde)
2. AFP = baseSF x tasa base + min(baseSF, tope) x tasa extra (prima de seguros)
3. Gratificaciones julio y diciembre = 1 sueldo cada una
4. Bono extraordinario de salud = gratificaciones x tasa (EsSalud 9% / EPS 6.75%)
5. Base anual 5ta = (baseSF + vales) x 12 + gratificaciones + bono salud
6. Renta neta = max(0, base anual - 7 UIT); impuesto por tramos acumulativos
7. Impuesto mensual = anual / 12

Regimen RIA (remuneracion integral anual): gratificaciones, bono y CTS se
prorratean en la cuota mensual como alicuotas. Para la 5ta se usan los
equivalentes anuales (2 sueldos + bono salud equivalente), no las alicuotas.

Todos los montos son Decimal; solo se redondean los campos reportados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from sueldoneto.calculo.desglose import ConstructorDesglose, Desglose
from sueldoneto.calculo.tramos import EstrategiaTramos, ResultadoTramos, TramosAcumulativos
from sueldoneto.calculo.validacion import convertir_enum, validar_anio, validar_monto
from sueldoneto.modelos import Pais, Regimen, RegimenSalud
from sueldoneto.montos import CERO, a_decimal, formatear_moneda, formatear_porcentaje, redondear
from sueldoneto.parametros.almacen import AlmacenParametros, almacen_por_defecto
from sueldoneto.parametros.modelos import ParametrosPeru, TramoUnidades

logger = logging.getLogger(__name__)

MESES = Decimal("12")


def _rango_soles(tramo: TramoUnidades, uit: Decimal) -> str:
    desde = formatear_moneda(tramo.desde * uit, Pais.PERU)
    if tramo.hasta is None:
        return f"{desde} - sin limite"
    return f"{desde} - {formatear_moneda(tramo.hasta * uit, Pais.PERU)}"


QUINTA_CATEGORIA: EstrategiaTramos = TramosAcumulativos(formatear_rango=_rango_soles)


# =============================================================================
# Entradas y resultados
# =============================================================================
@dataclass(frozen=True)
class EntradaPeru:
    sueldo_basico: Decimal
    vales_alimentos: Decimal = Decimal("0")  # No remunerativo: no entra al neto
    asignacion_familiar: bool = False
    anio: int = 2025
    regimen_salud: RegimenSalud = RegimenSalud.ESSALUD
    regimen: Regimen = Regimen.NORMAL


@dataclass(frozen=True)
class AlicuotasRIA:
    """Alicuotas mensuales integradas en la cuota RIA."""

    base_sf: Decimal
    gratificacion: Decimal
    bono_salud: Decimal
    cts: Decimal
    tasa_salud: Decimal


@dataclass(frozen=True)
class ResultadoPeru:
    """Resultado completo de un calculo de sueldo peruano."""

    regimen: Regimen
    regimen_salud: RegimenSalud
    anio_parametros: int

    # Entradas normalizadas
    sueldo_basico: Decimal
    vales_alimentos: Decimal
    asignacion_familiar: Decimal

    # Mensual (sin vales)
    bruto_mensual: Decimal
    afp: Decimal
    impuesto_quinta_mensual: Decimal
    neto_mensual: Decimal

    # Anual
    bruto_anual: Decimal  # 12 sueldos
    gratificacion_julio: Decimal
    gratificacion_diciembre: Decimal
    bono_salud: Decimal
    ingreso_total_anual: Decimal
    vales_anual: Decimal
    afp_anual: Decimal
    renta_neta_imponible: Decimal  # Base anual 5ta menos la deduccion de UIT
    impuesto_quinta_anual: Decimal
    neto_anual: Decimal

    alicuotas: AlicuotasRIA | None
    desglose: Desglose
    pais: Pais = field(default=Pais.PERU, init=False)


@dataclass(frozen=True)
class ResultadoBono:
    """Bono extraordinario neto de 5ta categoria (sin AFP)."""

    bono_bruto: Decimal
    bono_neto: Decimal
    impuesto_mensual_sin_bono: Decimal
    impuesto_mensual_con_bono: Decimal
    impuesto_anual_con_bono: Decimal
    diferencia_mensual: Decimal
    anio_parametros: int


# =============================================================================
# Piezas del calculo
# =============================================================================
def calcular_afp(base: Decimal, params: ParametrosPeru) -> Decimal:
    """Aporte AFP mensual: tasa base sobre todo, tasa extra hasta el tope. Redondeado."""
    base_extra = min(base, params.afp_tope_extra)
    return redondear(base * params.afp_tasa_base + base_extra * params.afp_tasa_extra)


def _bonos_para_quinta(
    base_sf: Decimal, tasa_salud: Decimal, params: ParametrosPeru, regimen: Regimen,
) -> tuple[Decimal, Decimal]:
    """Gratificaciones (o sus equivalentes RIA) y bono de salud para la base de 5ta."""
    gratificaciones = base_sf * 2
    if regimen == Regimen.RIA and not params.incluir_bono_salud_equivalente:
        return gratificaciones, CERO
    return gratificaciones, gratificaciones * tasa_salud


def _base_anual_quinta(
    base_sf: Decimal, vales: Decimal, tasa_salud: Decimal,
    params: ParametrosPeru, regimen: Regimen,
) -> Decimal:
    gratificaciones, bono_salud = _bonos_para_quinta(base_sf, tasa_salud, params, regimen)
    return (base_sf + vales) * MESES + gratificaciones + bono_salud


def _impuesto_quinta(
    base_anual: Decimal, params: ParametrosPeru,
) -> tuple[Decimal, Decimal, ResultadoTramos]:
    """Retorna (deduccion, renta neta imponible, resultado de tramos)."""
    deduccion = params.deduccion_uit * params.uit
    renta_neta = max(CERO, base_anual - deduccion)
    return deduccion, renta_neta, QUINTA_CATEGORIA.evaluar(renta_neta, params.tramos_quinta, params.uit)


def _formula_afp(params: ParametrosPeru) -> str:
    return (
        f"{formatear_porcentaje(params.afp_tasa_base)} + prima "
        f"{formatear_porcentaje(params.afp_tasa_extra)} "
        f"(tope {formatear_moneda(params.afp_tope_extra, Pais.PERU)}) sobre baseSF"
    )


# =============================================================================
# Calculo principal
# =============================================================================
def calcular_sueldo_peru(
    entrada: EntradaPeru, almacen: AlmacenParametros | None = None,
) -> ResultadoPeru:
    """Calcula sueldo neto mensual y anual en Peru.

    Args:
        entrada: Sueldo basico, vales, asignacion familiar, anio, salud y regimen.
        almacen: Parametros legales (por defecto, los incluidos en el paquete).

    Returns:
        ResultadoPeru con montos redondeados al centimo y desglose.

    Raises:
        ErrorConfiguracion: Si el regimen no tiene parametros en ningun anio.
        ErrorEntrada: Si el anio de la entrada no es un anio valido.
    """
    almacen = almacen or almacen_por_defecto()
    regimen = convertir_enum(Regimen, entrada.regimen, "regimen")
    regimen_salud = convertir_enum(RegimenSalud, entrada.regimen_salud, "regimen_salud")
    anio = validar_anio(entrada.anio)

    seleccion = almacen.obtener_peru(anio, regimen)
    p = seleccion.parametros

    sueldo_basico = a_decimal(entrada.sueldo_basico)
    vales = a_decimal(entrada.vales_alimentos)
    asignacion = p.asignacion_familiar if entrada.asignacion_familiar else CERO
    base_sf = sueldo_basico + asignacion
    tasa_salud = p.bono_salud.tasa(regimen_salud)

    afp = calcular_afp(base_sf, p)
    base_anual = _base_anual_quinta(base_sf, vales, tasa_salud, p, regimen)
    deduccion, renta_neta, quinta = _impuesto_quinta(base_anual, p)
    impuesto_mensual = redondear(quinta.impuesto / MESES)

    desglose = ConstructorDesglose()

    if regimen == Regimen.RIA:
        ali_grati = base_sf / 6
        ali_bono = base_sf * tasa_salud / 6 if p.incluir_bono_salud_equivalente else CERO
        ali_cts = (base_sf + base_sf / 6) / MESES

        if p.construir_desde_componentes:
            bruto_mensual = base_sf + ali_grati + ali_bono + ali_cts
        else:
            bruto_mensual = base_sf * (MESES + p.meses_gratificacion + p.meses_cts) / MESES

        gratificaciones = CERO
        bono_salud = CERO
        ingreso_total = bruto_mensual * MESES
        alicuotas = AlicuotasRIA(
            base_sf=redondear(base_sf),
            gratificacion=redondear(ali_grati),
            bono_salud=redondear(ali_bono),
            cts=redondear(ali_cts),
            tasa_salud=tasa_salud,
        )

        desglose.mensual("Base pensionable (baseSF)", base_sf)
        desglose.mensual("Alicuota gratificacion", ali_grati, "baseSF / 6")
        desglose.mensual(
            f"Alicuota bono extraordinario ({formatear_porcentaje(tasa_salud)})",
            ali_bono, "(baseSF x tasa) / 6",
        )
        desglose.mensual("Alicuota CTS", ali_cts, "(baseSF + baseSF/6) / 12")
        desglose.mensual("Cuota RIA pensionable (bruto sin vales)", bruto_mensual)
    else:
        bruto_mensual = base_sf
        gratificaciones, bono_salud = _bonos_para_quinta(base_sf, tasa_salud, p, regimen)
        ingreso_total = bruto_mensual * MESES + gratificaciones + bono_salud
        alicuotas = None

        desglose.mensual("Sueldo basico", sueldo_basico)
        if entrada.asignacion_familiar:
            desglose.mensual("Asignacion familiar", asignacion)
        desglose.mensual("Sueldo bruto mensual (sin vales)", bruto_mensual, "Basico + Familiar")

    neto_mensual = bruto_mensual - afp - impuesto_mensual
    afp_anual = afp * MESES
    neto_anual = ingreso_total - afp_anual - quinta.impuesto

    desglose.mensual("Vales de alimentos (no remunerativo, fuera del neto)", vales)
    desglose.mensual("Descuento AFP", -afp, _formula_afp(p))
    desglose.mensual("Impuesto 5ta categoria (mensual)", -impuesto_mensual, "Impuesto anual / 12")
    desglose.mensual("Sueldo neto mensual (sin vales)", neto_mensual)

    desglose.anual("Bruto mensual sin vales x 12", bruto_mensual * MESES)
    if regimen == Regimen.NORMAL:
        desglose.anual("Gratificacion julio", base_sf)
        desglose.anual("Gratificacion diciembre", base_sf)
        desglose.anual(
            f"Bono salud ({regimen_salud.value})", bono_salud,
            f"{formatear_moneda(gratificaciones, Pais.PERU)} x {formatear_porcentaje(tasa_salud)}",
        )
    desglose.anual("Vales de alimentos (anual)", vales * MESES)
    desglose.anual("Base anual para 5ta", base_anual)
    desglose.anual(
        f"Deduccion {p.deduccion_uit.normalize():f} UIT", -deduccion,
        f"{p.deduccion_uit.normalize():f} x {formatear_moneda(p.uit, Pais.PERU)}",
    )
    desglose.anual("Renta neta imponible", renta_neta)
    desglose.anual("Impuesto 5ta categoria anual", quinta.impuesto)

    logger.debug(
        "Peru %s %s (params %s): bruto=%s neto=%s",
        regimen.value, anio, seleccion.anio_aplicado, bruto_mensual, neto_mensual,
    )

    return ResultadoPeru(
        regimen=regimen,
        regimen_salud=regimen_salud,
        anio_parametros=seleccion.anio_aplicado,
        sueldo_basico=redondear(sueldo_basico),
        vales_alimentos=redondear(vales),
        asignacion_familiar=redondear(asignacion),
        bruto_mensual=redondear(bruto_mensual),
        afp=afp,
        impuesto_quinta_mensual=impuesto_mensual,
        neto_mensual=redondear(neto_mensual),
        bruto_anual=redondear(bruto_mensual * MESES),
        gratificacion_julio=redondear(gratificaciones / 2),
        gratificacion_diciembre=redondear(gratificaciones / 2),
        bono_salud=redondear(bono_salud),
        ingreso_total_anual=redondear(ingreso_total),
        vales_anual=redondear(vales * MESES),
        afp_anual=redondear(afp_anual),
        renta_neta_imponible=redondear(renta_neta),
        impuesto_quinta_anual=redondear(quinta.impuesto),
        neto_anual=redondear(neto_anual),
        alicuotas=alicuotas,
        desglose=desglose.construir(quinta.detalle),
    )


# =============================================================================
# Bono extraordinario
# =============================================================================
def calcular_bono_bruto(sueldo_basico: object, vales: object, multiplos: object) -> Decimal:
    """Bono bruto = (basico + vales) x multiplos. Valores no numericos o negativos valen 0."""
    bruto = (a_decimal(sueldo_basico) + a_decimal(vales)) * a_decimal(multiplos)
    return redondear(max(CERO, bruto))


def calcular_bono_neto(
    entrada: EntradaPeru,
    bono_bruto: object,
    almacen: AlmacenParametros | None = None,
) -> ResultadoBono:
    """Bono neto de 5ta categoria.

    Se calcula la 5ta anual con y sin el bono; el bono paga la diferencia del
    impuesto mensual. No se descuenta AFP del bono (solo 5ta categoria).
    Un bono negativo o no numerico cuenta como 0.

    Ejemplo (2025, NORMAL, 5000 + bono 5000):
        sin bono: renta 33,450 -> 3,078/anio -> 256.50/mes
        con bono: renta 38,450 -> 3,778/anio -> 314.83/mes
        neto = 5,000 - 700/12 = 4,941.67
    """
    almacen = almacen or almacen_por_defecto()
    regimen = convertir_enum(Regimen, entrada.regimen, "regimen")
    regimen_salud = convertir_enum(RegimenSalud, entrada.regimen_salud, "regimen_salud")
    anio = validar_anio(entrada.anio)

    seleccion = almacen.obtener_peru(anio, regimen)
    p = seleccion.parametros

    bono = max(CERO, a_decimal(bono_bruto))
    asignacion = p.asignacion_familiar if entrada.asignacion_familiar else CERO
    base_sf = a_decimal(entrada.sueldo_basico) + asignacion
    tasa_salud = p.bono_salud.tasa(regimen_salud)

    base_sin_bono = _base_anual_quinta(
        base_sf, a_decimal(entrada.vales_alimentos), tasa_salud, p, regimen,
    )
    _, _, sin_bono = _impuesto_quinta(base_sin_bono, p)
    _, _, con_bono = _impuesto_quinta(base_sin_bono + bono, p)

    diferencia = (con_bono.impuesto - sin_bono.impuesto) / MESES
    bono_neto = max(CERO, bono - diferencia)

    return ResultadoBono(
        bono_bruto=redondear(bono),
        bono_neto=redondear(bono_neto),
        impuesto_mensual_sin_bono=redondear(sin_bono.impuesto / MESES),
        impuesto_mensual_con_bono=redondear(con_bono.impuesto / MESES),
        impuesto_anual_con_bono=redondear(con_bono.impuesto),
        diferencia_mensual=redondear(diferencia),
        anio_parametros=seleccion.anio_aplicado,
    )


def validar_entrada_peru(
    sueldo_basico: object,
    vales_alimentos: object = 0,
    asignacion_familiar: bool = False,
    anio: object = 2025,
    regimen_salud: object = RegimenSalud.ESSALUD,
    regimen: object = Regimen.NORMAL,
) -> EntradaPeru:
    """Valida valores crudos (CLI, formularios) y construye una EntradaPeru.

    Raises:
        ErrorEntrada: Monto negativo o no numerico, anio invalido o enum desconocido.
    """
    return EntradaPeru(
        sueldo_basico=validar_monto(sueldo_basico, "sueldo_basico"),
        vales_alimentos=validar_monto(vales_alimentos, "vales_alimentos"),
        asignacion_familiar=bool(asignacion_familiar),
        anio=validar_anio(anio),
        regimen_salud=convertir_enum(RegimenSalud, regimen_salud, "regimen_salud"),
        regimen=convertir_enum(Regimen, regimen, "regimen"),
    )
