"""Utilidades de montos: redondeo, conversion defensiva y formato de moneda.

Todos los montos son Decimal -- nunca float.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from sueldoneto.modelos import Pais

DOS_DECIMALES = Decimal("0.01")
CERO = Decimal("0")


def redondear(monto: Decimal) -> Decimal:
    """Redondea al centimo (ROUND_HALF_UP: la mitad se aleja de cero)."""
    return monto.quantize(DOS_DECIMALES, rounding=ROUND_HALF_UP)


def a_decimal(valor: object) -> Decimal:
    """Convierte un valor numerico a Decimal.

    None, NaN, infinitos, booleanos y textos no numericos valen 0, para que
    nunca se propague un NaN hasta el desglose.
    """
    if valor is None or isinstance(valor, bool):
        return CERO
    if isinstance(valor, Decimal):
        numero = valor
    elif isinstance(valor, (int, float, str)):
        try:
            numero = Decimal(str(valor).strip())
        except InvalidOperation:
            return CERO
    else:
        return CERO
    if not numero.is_finite():
        return CERO
    return numero


def _sin_ceros_finales(texto: str) -> str:
    if "." in texto:
        texto = texto.rstrip("0").rstrip(".")
    return texto


def formatear_porcentaje(tasa: Decimal) -> str:
    """Formatea una tasa como porcentaje compacto: 0.09 -> '9%', 0.0675 -> '6.75%'."""
    porcentaje = (tasa * 100).quantize(DOS_DECIMALES, rounding=ROUND_HALF_UP)
    return f"{_sin_ceros_finales(f'{porcentaje:f}')}%"


@dataclass(frozen=True)
class FormatoMoneda:
    """Convencion de presentacion de montos para un pais."""

    locale: str
    moneda: str
    simbolo: str
    decimales_max: int
    separador_miles: str
    separador_decimal: str


FORMATOS_MONEDA: dict[Pais, FormatoMoneda] = {
    Pais.PERU: FormatoMoneda("es-PE", "PEN", "S/ ", 2, ",", "."),
    Pais.ECUADOR: FormatoMoneda("es-EC", "USD", "$", 2, ".", ","),
    # El peso chileno no tiene subunidad en la practica
    Pais.CHILE: FormatoMoneda("es-CL", "CLP", "$", 0, ".", ","),
}


def formatear_moneda(monto: object, pais: Pais | str = Pais.PERU) -> str:
    """Formatea un monto segun la convencion del pais (0 a N decimales).

    Un pais desconocido usa la convencion peruana.

    Ejemplos:
        formatear_moneda(Decimal("2000"), Pais.PERU) -> 'S/ 2,000'
        formatear_moneda(Decimal("1234.5"), Pais.ECUADOR) -> '$1.234,5'
        formatear_moneda(Decimal("1618965.24"), Pais.CHILE) -> '$1.618.965'
    """
    formato = FORMATOS_MONEDA.get(pais, FORMATOS_MONEDA[Pais.PERU])
    valor = a_decimal(monto)
    cuantizado = valor.quantize(
        Decimal(1).scaleb(-formato.decimales_max), rounding=ROUND_HALF_UP
    )

    texto = _sin_ceros_finales(f"{abs(cuantizado):,.{formato.decimales_max}f}")
    texto = texto.translate(
        str.maketrans({",": formato.separador_miles, ".": formato.separador_decimal})
    )
    signo = "-" if cuantizado < 0 else ""
    return f"{signo}{formato.simbolo}{texto}"
