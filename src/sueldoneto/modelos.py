"""Enumeraciones compartidas por los motores de calculo y el CLI."""

from enum import Enum


class Pais(str, Enum):
    """Paises soportados (codigo ISO 3166-1 alfa-2)."""

    PERU = "PE"
    ECUADOR = "EC"
    CHILE = "CL"


class Regimen(str, Enum):
    """Regimen remunerativo peruano."""

    NORMAL = "NORMAL"
    RIA = "RIA"  # Remuneracion Integral Anual (cuota integrada)


class RegimenSalud(str, Enum):
    """Regimen de salud peruano que fija la tasa del bono extraordinario."""

    ESSALUD = "ESSALUD"  # 9%
    EPS = "EPS"  # 6.75%


class TipoContrato(str, Enum):
    """Tipo de contrato chileno (determina la tasa del seguro de cesantia)."""

    INDEFINIDO = "INDEFINIDO"
    PLAZO_FIJO = "PLAZO_FIJO"
