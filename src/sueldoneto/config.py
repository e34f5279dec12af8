"""Configuracion de sueldoneto cargada desde el entorno (.env admitido)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from sueldoneto.errores import ErrorConfiguracion

RUTA_PARAMETROS_DEFECTO = Path(__file__).parent / "parametros" / "datos"


@dataclass(frozen=True)
class Configuracion:
    """Parametros de ejecucion leidos de variables de entorno."""

    ruta_parametros: Path
    anio_defecto: int
    nivel_log: str

    @classmethod
    def desde_entorno(cls) -> Configuracion:
        """Construye la configuracion desde el entorno.

        Variables:
            SUELDONETO_PARAMETROS -- directorio con peru.yaml, ecuador.yaml, chile.yaml
            SUELDONETO_ANIO       -- anio por defecto del CLI (default: 2025)
            SUELDONETO_LOG        -- nivel de logging (default: WARNING)

        Raises:
            ErrorConfiguracion: Si SUELDONETO_ANIO no es un entero o
                SUELDONETO_LOG no es un nivel de logging conocido.
        """
        load_dotenv()

        ruta = os.environ.get("SUELDONETO_PARAMETROS")
        return cls(
            ruta_parametros=Path(ruta) if ruta else RUTA_PARAMETROS_DEFECTO,
            anio_defecto=_leer_anio(os.environ.get("SUELDONETO_ANIO", "2025")),
            nivel_log=_leer_nivel_log(os.environ.get("SUELDONETO_LOG", "WARNING")),
        )


def _leer_anio(valor: str) -> int:
    try:
        return int(valor.strip())
    except ValueError as e:
        raise ErrorConfiguracion(f"SUELDONETO_ANIO invalido: {valor!r}") from e


def _leer_nivel_log(valor: str) -> str:
    nivel = valor.strip().upper()
    if nivel not in logging.getLevelNamesMapping():
        raise ErrorConfiguracion(f"SUELDONETO_LOG invalido: {valor!r}")
    return nivel


@lru_cache(maxsize=1)
def obtener_configuracion() -> Configuracion:
    """Retorna la configuracion del proceso (leida una sola vez)."""
    return Configuracion.desde_entorno()
