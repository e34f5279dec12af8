"""Desglose del calculo: pasos numerados con montos y formulas (auditoria/presentacion).

Convencion de signos:
- Ingresos y subtotales: positivos
- Descuentos e impuestos del trabajador: negativos
Todo monto del desglose se redondea al centimo al registrarse.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from sueldoneto.montos import redondear


@dataclass(frozen=True)
class PasoCalculo:
    """Un paso del calculo mensual o anual."""

    paso: str
    descripcion: str
    monto: Decimal
    formula: str | None = None


@dataclass(frozen=True)
class DetalleTramo:
    """Traza de un tramo de impuesto recorrido por el evaluador."""

    etiqueta: str  # "Tramo 8%"
    rango: str  # "S/ 0 - S/ 26,750"
    base_gravada: Decimal  # Porcion de la base gravada en este tramo
    tasa: Decimal
    monto: Decimal  # Impuesto de este tramo


@dataclass(frozen=True)
class Desglose:
    mensual: tuple[PasoCalculo, ...] = ()
    anual: tuple[PasoCalculo, ...] = ()
    impuesto: tuple[DetalleTramo, ...] = ()


class ConstructorDesglose:
    """Acumula pasos numerados (1, 2, 3...) y produce un Desglose inmutable."""

    def __init__(self) -> None:
        self._mensual: list[PasoCalculo] = []
        self._anual: list[PasoCalculo] = []

    @staticmethod
    def _paso(pasos: list[PasoCalculo], descripcion: str, monto: Decimal, formula: str | None) -> None:
        pasos.append(
            PasoCalculo(
                paso=str(len(pasos) + 1),
                descripcion=descripcion,
                monto=redondear(monto),
                formula=formula,
            )
        )

    def mensual(self, descripcion: str, monto: Decimal, formula: str | None = None) -> None:
        self._paso(self._mensual, descripcion, monto, formula)

    def anual(self, descripcion: str, monto: Decimal, formula: str | None = None) -> None:
        self._paso(self._anual, descripcion, monto, formula)

    def construir(self, impuesto: tuple[DetalleTramo, ...] = ()) -> Desglose:
        return Desglose(
            mensual=tuple(self._mensual),
            anual=tuple(self._anual),
            impuesto=impuesto,
        )
