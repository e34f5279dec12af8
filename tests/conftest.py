"""Fixtures compartidas: almacen de parametros del paquete y caches limpias."""

from __future__ import annotations

import pytest

from sueldoneto.config import obtener_configuracion
from sueldoneto.parametros import almacen_por_defecto, cargar_almacen


@pytest.fixture
def almacen():
    """Almacen cargado desde los YAML incluidos en el paquete."""
    return cargar_almacen()


@pytest.fixture(autouse=True)
def _limpiar_caches(monkeypatch):
    """Cada test ve una configuracion y un almacen recien leidos."""
    monkeypatch.delenv("SUELDONETO_PARAMETROS", raising=False)
    monkeypatch.delenv("SUELDONETO_ANIO", raising=False)
    monkeypatch.delenv("SUELDONETO_LOG", raising=False)
    obtener_configuracion.cache_clear()
    almacen_por_defecto.cache_clear()
    yield
    obtener_configuracion.cache_clear()
    almacen_por_defecto.cache_clear()
