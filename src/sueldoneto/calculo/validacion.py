"""Validacion de entradas antes de llamar a los motores.

Los motores convierten defensivamente los montos (a_decimal), pero no rechazan
nada: el rechazo (montos negativos, no numericos, enums desconocidos) es
responsabilidad de quien llama, via los validar_entrada_* de cada pais.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import TypeVar

from sueldoneto.errores import ErrorEntrada

E = TypeVar("E", bound=Enum)


def validar_monto(valor: object, campo: str) -> Decimal:
    """Convierte un monto y verifica que sea finito y no negativo.

    Raises:
        ErrorEntrada: Si el valor no es numerico, es NaN/infinito o es negativo.
    """
    if isinstance(valor, bool) or valor is None:
        raise ErrorEntrada(f"{campo}: se esperaba un monto, se recibio {valor!r}")
    try:
        monto = valor if isinstance(valor, Decimal) else Decimal(str(valor).strip())
    except InvalidOperation as e:
        raise ErrorEntrada(f"{campo}: monto no numerico {valor!r}") from e
    if not monto.is_finite():
        raise ErrorEntrada(f"{campo}: monto no finito {valor!r}")
    if monto < 0:
        raise ErrorEntrada(f"{campo}: el monto no puede ser negativo ({monto})")
    return monto


def convertir_enum(tipo: type[E], valor: object, campo: str) -> E:
    """Convierte un texto (o miembro) al enum indicado, sin distinguir mayusculas.

    Raises:
        ErrorEntrada: Si el valor no corresponde a ningun miembro.
    """
    if isinstance(valor, tipo):
        return valor
    texto = str(valor).strip().upper()
    for miembro in tipo:
        if texto in (str(miembro.value).upper(), miembro.name):
            return miembro
    opciones = ", ".join(m.name for m in tipo)
    raise ErrorEntrada(f"{campo}: valor no soportado {valor!r} (opciones: {opciones})")


def validar_anio(valor: object) -> int:
    if isinstance(valor, bool):
        raise ErrorEntrada(f"anio: valor invalido {valor!r}")
    try:
        anio = int(str(valor))
    except ValueError as e:
        raise ErrorEntrada(f"anio: valor invalido {valor!r}") from e
    if anio < 1900 or anio > 2100:
        raise ErrorEntrada(f"anio fuera de rango: {anio}")
    return anio
