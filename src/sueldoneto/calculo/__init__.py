"""Motores de calculo de sueldo neto por pais y despacho segun el tipo de entrada."""

from __future__ import annotations

from sueldoneto.calculo.chile import (
    EntradaChile,
    ResultadoChile,
    calcular_sueldo_chile,
    validar_entrada_chile,
)
from sueldoneto.calculo.ecuador import (
    EntradaEcuador,
    ResultadoEcuador,
    calcular_sueldo_ecuador,
    validar_entrada_ecuador,
)
from sueldoneto.calculo.peru import (
    AlicuotasRIA,
    EntradaPeru,
    ResultadoBono,
    ResultadoPeru,
    calcular_bono_bruto,
    calcular_bono_neto,
    calcular_sueldo_peru,
    validar_entrada_peru,
)
from sueldoneto.errores import ErrorEntrada
from sueldoneto.parametros.almacen import AlmacenParametros

Entrada = EntradaPeru | EntradaEcuador | EntradaChile
Resultado = ResultadoPeru | ResultadoEcuador | ResultadoChile


def calcular(entrada: Entrada, almacen: AlmacenParametros | None = None) -> Resultado:
    """Calcula el sueldo con el motor del pais que corresponde a la entrada.

    Raises:
        ErrorEntrada: Si la entrada no es de ningun pais soportado.
        ErrorConfiguracion: Si faltan parametros para el pais/anio.
    """
    if isinstance(entrada, EntradaPeru):
        return calcular_sueldo_peru(entrada, almacen)
    if isinstance(entrada, EntradaEcuador):
        return calcular_sueldo_ecuador(entrada, almacen)
    if isinstance(entrada, EntradaChile):
        return calcular_sueldo_chile(entrada, almacen)
    raise ErrorEntrada(f"Tipo de entrada no soportado: {type(entrada).__name__}")


__all__ = [
    "AlicuotasRIA",
    "Entrada",
    "EntradaChile",
    "EntradaEcuador",
    "EntradaPeru",
    "Resultado",
    "ResultadoBono",
    "ResultadoChile",
    "ResultadoEcuador",
    "ResultadoPeru",
    "calcular",
    "calcular_bono_bruto",
    "calcular_bono_neto",
    "calcular_sueldo_chile",
    "calcular_sueldo_ecuador",
    "calcular_sueldo_peru",
    "validar_entrada_chile",
    "validar_entrada_ecuador",
    "validar_entrada_peru",
]
