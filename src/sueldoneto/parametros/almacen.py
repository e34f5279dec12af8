"""Almacen inmutable de parametros legales por pais, anio y regimen.

Los parametros se leen de YAML (peru.yaml, ecuador.yaml, chile.yaml), se validan
con Pydantic y no se modifican nunca despues de la carga. Los motores reciben el
almacen como argumento; almacen_por_defecto() es solo una cache de conveniencia.

Seleccion del anio:
1. Si el anio solicitado tiene datos, se usa tal cual.
2. Si no, se ordenan los anios con datos y se toma el ultimo, con advertencia
   (AdvertenciaParametrosAnteriores + log WARNING).
3. Si ningun anio tiene datos: ErrorConfiguracion.
La UTM chilena es la excepcion: sin UTM para el anio exacto, ErrorConfiguracion.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Generic, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from sueldoneto.config import obtener_configuracion
from sueldoneto.errores import AdvertenciaParametrosAnteriores, ErrorConfiguracion
from sueldoneto.modelos import Pais, Regimen
from sueldoneto.parametros.modelos import (
    ParametrosChile,
    ParametrosEcuador,
    ParametrosPeru,
    TablasEcuador,
    TablasPeru,
)

logger = logging.getLogger(__name__)

P = TypeVar("P")
M = TypeVar("M", bound=BaseModel)

ARCHIVOS_PARAMETROS: dict[Pais, str] = {
    Pais.PERU: "peru.yaml",
    Pais.ECUADOR: "ecuador.yaml",
    Pais.CHILE: "chile.yaml",
}


@dataclass(frozen=True)
class Seleccion(Generic[P]):
    """Parametros elegidos para un calculo, con el anio realmente aplicado."""

    pais: Pais
    anio_solicitado: int
    anio_aplicado: int
    parametros: P
    regimen: Regimen | None = None

    @property
    def sustituido(self) -> bool:
        """True si se aplicaron parametros de otro anio."""
        return self.anio_aplicado != self.anio_solicitado


def seleccionar_anio(
    por_anio: Mapping[int, P | None],
    anio: int,
    pais: Pais,
    regimen: Regimen | None = None,
) -> tuple[int, P]:
    """Elige los parametros del anio solicitado o del ultimo anio con datos.

    Returns:
        Tupla (anio_aplicado, parametros).

    Raises:
        ErrorConfiguracion: Si ningun anio tiene datos.
    """
    exacto = por_anio.get(anio)
    if exacto is not None:
        return anio, exacto

    contexto = f"{pais.value}/{regimen.value}" if regimen else pais.value
    anios_con_datos = sorted(a for a, valor in por_anio.items() if valor is not None)
    if not anios_con_datos:
        raise ErrorConfiguracion(
            f"No hay parametros para {contexto} en ningun anio.",
            pais=pais.value,
            anio=anio,
            regimen=regimen.value if regimen else None,
        )

    ultimo = anios_con_datos[-1]
    mensaje = f"Usando parametros de {ultimo} (no hay datos para {anio}) en {contexto}."
    logger.warning(mensaje)
    warnings.warn(mensaje, AdvertenciaParametrosAnteriores, stacklevel=3)
    return ultimo, por_anio[ultimo]  # type: ignore[return-value]


@dataclass(frozen=True)
class AlmacenParametros:
    """Tablas de parametros de los tres paises (None = pais sin tabla)."""

    peru: TablasPeru | None = None
    ecuador: TablasEcuador | None = None
    chile: ParametrosChile | None = None

    @classmethod
    def desde_datos(
        cls,
        peru: dict[str, Any] | None = None,
        ecuador: dict[str, Any] | None = None,
        chile: dict[str, Any] | None = None,
    ) -> AlmacenParametros:
        """Construye un almacen a partir de dicts ya leidos (mismo esquema que los YAML)."""
        return cls(
            peru=_validar(TablasPeru, peru, "peru") if peru is not None else None,
            ecuador=_validar(TablasEcuador, ecuador, "ecuador") if ecuador is not None else None,
            chile=_validar(ParametrosChile, chile, "chile") if chile is not None else None,
        )

    def obtener(
        self, pais: Pais, anio: int, regimen: Regimen | None = None,
    ) -> Seleccion:
        """Retorna los parametros de un pais para un anio (y regimen, en Peru)."""
        if pais == Pais.PERU:
            return self.obtener_peru(anio, regimen or Regimen.NORMAL)
        if pais == Pais.ECUADOR:
            return self.obtener_ecuador(anio)
        if pais == Pais.CHILE:
            return self.obtener_chile(anio)
        raise ErrorConfiguracion(f"Pais no soportado: {pais}", pais=str(pais), anio=anio)

    def obtener_peru(self, anio: int, regimen: Regimen) -> Seleccion[ParametrosPeru]:
        por_anio = self.peru.regimenes.get(regimen, {}) if self.peru else {}
        anio_aplicado, parametros = seleccionar_anio(por_anio, anio, Pais.PERU, regimen)
        return Seleccion(Pais.PERU, anio, anio_aplicado, parametros, regimen)

    def obtener_ecuador(self, anio: int) -> Seleccion[ParametrosEcuador]:
        por_anio = self.ecuador.anios if self.ecuador else {}
        anio_aplicado, parametros = seleccionar_anio(por_anio, anio, Pais.ECUADOR)
        return Seleccion(Pais.ECUADOR, anio, anio_aplicado, parametros)

    def obtener_chile(self, anio: int) -> Seleccion[ParametrosChile]:
        if self.chile is None:
            raise ErrorConfiguracion(
                "No hay parametros para CL.", pais=Pais.CHILE.value, anio=anio,
            )
        # Falla si no hay UTM exacta: nunca dividir por una unidad indefinida
        self.chile.utm_del_anio(anio)
        return Seleccion(Pais.CHILE, anio, anio, self.chile)

    def anios_disponibles(self, pais: Pais, regimen: Regimen | None = None) -> list[int]:
        """Lista ordenada de los anios con datos para un pais (y regimen)."""
        if pais == Pais.PERU:
            if self.peru is None:
                return []
            por_anio = self.peru.regimenes.get(regimen or Regimen.NORMAL, {})
            return sorted(a for a, valor in por_anio.items() if valor is not None)
        if pais == Pais.ECUADOR:
            if self.ecuador is None:
                return []
            return sorted(a for a, valor in self.ecuador.anios.items() if valor is not None)
        if pais == Pais.CHILE:
            return sorted(a for a, valor in self.chile.utm.items() if valor) if self.chile else []
        return []


# =============================================================================
# Carga desde YAML
# =============================================================================
def _validar(modelo: type[M], datos: Any, origen: str) -> M:
    try:
        return modelo.model_validate(datos)
    except ValidationError as e:
        raise ErrorConfiguracion(f"Parametros invalidos ({origen}): {e}") from e


def _leer_yaml(ruta: Path) -> dict[str, Any]:
    """Lee un YAML de parametros; las claves '_...' (anclas) se descartan."""
    if not ruta.exists():
        raise FileNotFoundError(f"Archivo de parametros no encontrado: {ruta}")
    datos = yaml.safe_load(ruta.read_text(encoding="utf-8")) or {}
    return {clave: valor for clave, valor in datos.items() if not str(clave).startswith("_")}


def cargar_almacen(directorio: str | Path | None = None) -> AlmacenParametros:
    """Carga y valida los tres YAML de parametros.

    Args:
        directorio: Directorio con peru.yaml, ecuador.yaml y chile.yaml.
            Por defecto, el de la configuracion (SUELDONETO_PARAMETROS o los
            parametros incluidos en el paquete).

    Raises:
        FileNotFoundError: Si falta alguno de los archivos.
        ErrorConfiguracion: Si algun archivo no respeta el esquema.
    """
    base = Path(directorio) if directorio else obtener_configuracion().ruta_parametros

    rutas = {pais: base / nombre for pais, nombre in ARCHIVOS_PARAMETROS.items()}
    almacen = AlmacenParametros(
        peru=_validar(TablasPeru, _leer_yaml(rutas[Pais.PERU]), str(rutas[Pais.PERU])),
        ecuador=_validar(
            TablasEcuador, _leer_yaml(rutas[Pais.ECUADOR]), str(rutas[Pais.ECUADOR]),
        ),
        chile=_validar(ParametrosChile, _leer_yaml(rutas[Pais.CHILE]), str(rutas[Pais.CHILE])),
    )
    logger.debug("Parametros cargados desde %s", base)
    return almacen


@lru_cache(maxsize=1)
def almacen_por_defecto() -> AlmacenParametros:
    """Almacen del proceso, cargado una sola vez (es inmutable)."""
    return cargar_almacen()
