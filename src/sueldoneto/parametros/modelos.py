"""Modelos Pydantic de los parametros legales por pais y por anio.

Los YAML de parametros se validan aqui al cargarse. Todos los modelos son
inmutables (frozen) y los montos son Decimal -- los float se rechazan.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from sueldoneto.errores import ErrorConfiguracion
from sueldoneto.modelos import Pais, Regimen, RegimenSalud, TipoContrato


def _rechazar_float(v: Any) -> Any:
    """Rechaza los float: los parametros se escriben como texto en el YAML."""
    if isinstance(v, float):
        raise ValueError(
            "Los parametros deben ser Decimal, int o str, nunca float. "
            "Escriba el valor entre comillas en el YAML (ej: \"0.0675\")."
        )
    return v


Monto = Annotated[Decimal, BeforeValidator(_rechazar_float), Field(ge=0)]


class _Modelo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# =============================================================================
# Tramos de impuesto
# =============================================================================
class TramoUnidades(_Modelo):
    """Tramo de impuesto expresado en unidades legales (UIT, UTM o USD)."""

    desde: Monto
    hasta: Monto | None = None  # None = sin limite superior
    tasa: Monto
    fijo: Monto = Decimal("0")  # Impuesto acumulado al piso del tramo (tramo unico)

    @model_validator(mode="after")
    def _rango_valido(self) -> TramoUnidades:
        if self.hasta is not None and self.hasta <= self.desde:
            raise ValueError(f"Tramo invalido: hasta ({self.hasta}) <= desde ({self.desde})")
        return self


def validar_tramos(tramos: tuple[TramoUnidades, ...]) -> tuple[TramoUnidades, ...]:
    """Verifica que los tramos sean ascendentes, contiguos y que solo el ultimo sea ilimitado."""
    if not tramos:
        raise ValueError("La tabla de tramos esta vacia")
    for anterior, siguiente in zip(tramos, tramos[1:]):
        if anterior.hasta is None:
            raise ValueError("Solo el ultimo tramo puede no tener limite superior")
        if siguiente.desde != anterior.hasta:
            raise ValueError(
                f"Tramos no contiguos: {anterior.desde}-{anterior.hasta} "
                f"seguido de {siguiente.desde}"
            )
    if tramos[-1].hasta is not None:
        raise ValueError("El ultimo tramo debe ser ilimitado (hasta: null)")
    return tramos


TablaTramos = Annotated[tuple[TramoUnidades, ...], AfterValidator(validar_tramos)]


def _anios_vacios_a_none(por_anio: Any) -> Any:
    """Un anio con {} en el YAML se trata como anio sin datos."""
    if not isinstance(por_anio, dict):
        return por_anio
    return {anio: (valor or None) for anio, valor in por_anio.items()}


# =============================================================================
# Peru
# =============================================================================
class TasasBonoSalud(_Modelo):
    """Tasa del bono extraordinario segun el regimen de salud (Ley 30334)."""

    essalud: Monto = Decimal("0.09")
    eps: Monto = Decimal("0.0675")

    def tasa(self, regimen_salud: RegimenSalud) -> Decimal:
        if regimen_salud == RegimenSalud.EPS:
            return self.eps
        return self.essalud


class ParametrosPeru(_Modelo):
    """Parametros de un anio para un regimen peruano."""

    uit: Monto
    asignacion_familiar: Monto
    bono_salud: TasasBonoSalud = TasasBonoSalud()

    afp_tasa_base: Monto  # Aporte obligatorio (10%)
    afp_tasa_extra: Monto  # Prima de seguros
    afp_tope_extra: Monto  # Remuneracion maxima asegurable

    tramos_quinta: TablaTramos  # En UIT
    deduccion_uit: Monto = Decimal("7")

    # Solo RIA
    construir_desde_componentes: bool = False
    meses_gratificacion: Monto = Decimal("0")
    meses_cts: Monto = Decimal("0")
    incluir_bono_salud_equivalente: bool = True


class TablasPeru(_Modelo):
    """Contenido de peru.yaml: {regimenes: {NORMAL: {anio: ...}, RIA: {...}}}."""

    regimenes: dict[Regimen, dict[int, ParametrosPeru | None]]

    @field_validator("regimenes", mode="before")
    @classmethod
    def _vaciar_anios(cls, v: Any) -> Any:
        if not isinstance(v, dict):
            return v
        return {regimen: _anios_vacios_a_none(por_anio) for regimen, por_anio in v.items()}


# =============================================================================
# Ecuador
# =============================================================================
class ParametrosEcuador(_Modelo):
    """Parametros de un anio para Ecuador."""

    salario_basico_unificado: Monto  # = decimo cuarto sueldo
    iess_tasa_personal: Monto  # 9.45%
    iess_tasa_patronal: Monto  # 11.15% + IECE 0.5% + SECAP 0.5%
    fondo_reserva_tasa: Monto  # 8.33%
    tramos_renta: TablaTramos | None = None  # En USD (unidad = 1)


class TablasEcuador(_Modelo):
    """Contenido de ecuador.yaml: {anios: {anio: ...}}."""

    anios: dict[int, ParametrosEcuador | None]

    @field_validator("anios", mode="before")
    @classmethod
    def _vaciar_anios(cls, v: Any) -> Any:
        return _anios_vacios_a_none(v)


# =============================================================================
# Chile
# =============================================================================
class TasasCesantia(_Modelo):
    """Seguro de cesantia segun tipo de contrato."""

    indefinido: Monto
    plazo_fijo: Monto

    def tasa(self, tipo_contrato: TipoContrato) -> Decimal:
        if tipo_contrato == TipoContrato.PLAZO_FIJO:
            return self.plazo_fijo
        return self.indefinido


class CotizacionesTrabajador(_Modelo):
    afp: Monto
    salud: Monto
    cesantia: TasasCesantia


class CotizacionesEmpleador(_Modelo):
    sis: Monto  # Seguro de invalidez y sobrevivencia
    cesantia: TasasCesantia


class SeguridadSocialChile(_Modelo):
    trabajador: CotizacionesTrabajador
    empleador: CotizacionesEmpleador


class ImpuestoSegundaCategoria(_Modelo):
    tramos: TablaTramos  # En UTM, con impuesto fijo acumulado por tramo


class ParametrosChile(_Modelo):
    """Contenido de chile.yaml. Solo la UTM depende del anio."""

    utm: dict[int, Monto]
    impuesto_segunda_categoria: ImpuestoSegundaCategoria
    seguridad_social: SeguridadSocialChile

    def utm_del_anio(self, anio: int) -> Decimal:
        """Retorna la UTM del anio, sin sustitucion por otro anio.

        Raises:
            ErrorConfiguracion: Si no hay UTM (o vale 0) para el anio solicitado.
        """
        valor = self.utm.get(anio)
        if not valor:
            raise ErrorConfiguracion(
                f"UTM no disponible para el anio {anio}. "
                f"Anios disponibles: {sorted(self.utm)}",
                pais=Pais.CHILE.value,
                anio=anio,
            )
        return valor
