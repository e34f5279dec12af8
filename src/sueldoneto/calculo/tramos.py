"""Evaluador de impuesto por tramos progresivos.

Dos politicas distintas, elegidas por pais (no se unifican: responden a
disenos legales diferentes):

- TramosAcumulativos (Peru 5ta categoria, Ecuador renta): se recorren los
  tramos en orden y cada porcion de la base paga la tasa de su tramo.
  Una entrada de traza por tramo recorrido.
- TramoUnico (Chile 2da categoria): se ubica el unico tramo que contiene la
  base y se aplica fijo + (base - piso) x tasa. Una sola entrada de traza.

Los limites de los tramos estan en unidades legales (UIT, UTM, o USD con
unidad = 1) y se convierten a moneda multiplicando por valor_unidad.
El impuesto retornado NO se redondea; la traza si (solo presentacion).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from sueldoneto.calculo.desglose import DetalleTramo
from sueldoneto.montos import CERO, formatear_porcentaje, redondear
from sueldoneto.parametros.modelos import TramoUnidades

FormateadorRango = Callable[[TramoUnidades, Decimal], str]


def rango_por_defecto(tramo: TramoUnidades, valor_unidad: Decimal) -> str:
    """Describe el rango del tramo en moneda: '0.00 - 26,750.00' o 'mas de 240,750.00'."""
    desde = f"{tramo.desde * valor_unidad:,.2f}"
    if tramo.hasta is None:
        return f"mas de {desde}"
    return f"{desde} - {tramo.hasta * valor_unidad:,.2f}"


def etiqueta_tramo(tramo: TramoUnidades) -> str:
    return f"Tramo {formatear_porcentaje(tramo.tasa)}"


@dataclass(frozen=True)
class ResultadoTramos:
    impuesto: Decimal  # Sin redondear
    detalle: tuple[DetalleTramo, ...] = ()


class EstrategiaTramos(Protocol):
    """Interfaz comun de las politicas de evaluacion por tramos."""

    nombre: str

    def evaluar(
        self,
        base_imponible: Decimal,
        tramos: Sequence[TramoUnidades],
        valor_unidad: Decimal,
    ) -> ResultadoTramos: ...


class TramosAcumulativos:
    """Politica acumulativa: suma el impuesto de cada tramo que alcanza la base."""

    nombre = "acumulativa"

    def __init__(self, formatear_rango: FormateadorRango = rango_por_defecto) -> None:
        self.formatear_rango = formatear_rango

    def evaluar(
        self,
        base_imponible: Decimal,
        tramos: Sequence[TramoUnidades],
        valor_unidad: Decimal,
    ) -> ResultadoTramos:
        if base_imponible <= CERO:
            return ResultadoTramos(impuesto=CERO)

        impuesto = CERO
        restante = base_imponible
        detalle: list[DetalleTramo] = []

        for tramo in tramos:
            if restante <= CERO:
                break

            if tramo.hasta is None:
                ancho = restante
            else:
                ancho = max(CERO, min(restante, (tramo.hasta - tramo.desde) * valor_unidad))
            if ancho <= CERO:
                continue

            impuesto_tramo = ancho * tramo.tasa
            impuesto += impuesto_tramo
            restante -= ancho

            detalle.append(
                DetalleTramo(
                    etiqueta=etiqueta_tramo(tramo),
                    rango=self.formatear_rango(tramo, valor_unidad),
                    base_gravada=redondear(ancho),
                    tasa=tramo.tasa,
                    monto=redondear(impuesto_tramo),
                )
            )

        return ResultadoTramos(impuesto=impuesto, detalle=tuple(detalle))


class TramoUnico:
    """Politica de tramo unico: fijo del tramo + excedente sobre el piso x tasa marginal."""

    nombre = "tramo_unico"

    def __init__(self, formatear_rango: FormateadorRango = rango_por_defecto) -> None:
        self.formatear_rango = formatear_rango

    def evaluar(
        self,
        base_imponible: Decimal,
        tramos: Sequence[TramoUnidades],
        valor_unidad: Decimal,
    ) -> ResultadoTramos:
        if base_imponible <= CERO:
            return ResultadoTramos(impuesto=CERO)

        for tramo in tramos:
            piso = tramo.desde * valor_unidad
            techo = None if tramo.hasta is None else tramo.hasta * valor_unidad
            # Limites inclusivos en ambos extremos; gana el primer tramo que calza
            if base_imponible >= piso and (techo is None or base_imponible <= techo):
                excedente = base_imponible - piso
                impuesto = tramo.fijo * valor_unidad + excedente * tramo.tasa
                detalle = DetalleTramo(
                    etiqueta=etiqueta_tramo(tramo),
                    rango=self.formatear_rango(tramo, valor_unidad),
                    base_gravada=redondear(excedente),
                    tasa=tramo.tasa,
                    monto=redondear(impuesto),
                )
                return ResultadoTramos(impuesto=impuesto, detalle=(detalle,))

        return ResultadoTramos(impuesto=CERO)
