"""Parametros legales por pais y por anio (almacen inmutable cargado desde YAML)."""

from sueldoneto.parametros.almacen import (
    AlmacenParametros,
    Seleccion,
    almacen_por_defecto,
    cargar_almacen,
)
from sueldoneto.parametros.modelos import (
    ParametrosChile,
    ParametrosEcuador,
    ParametrosPeru,
    TramoUnidades,
)

__all__ = [
    "AlmacenParametros",
    "Seleccion",
    "almacen_por_defecto",
    "cargar_almacen",
    "ParametrosChile",
    "ParametrosEcuador",
    "ParametrosPeru",
    "TramoUnidades",
]
