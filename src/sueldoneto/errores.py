"""Errores y advertencias del calculo de sueldos."""

from __future__ import annotations


class ErrorConfiguracion(Exception):
    """No existen parametros legales para el pais/anio/regimen solicitado."""

    def __init__(
        self,
        mensaje: str,
        pais: str | None = None,
        anio: int | None = None,
        regimen: str | None = None,
    ) -> None:
        self.pais = pais
        self.anio = anio
        self.regimen = regimen
        super().__init__(mensaje)


class ErrorEntrada(ValueError):
    """Entrada rechazada (monto negativo, enum no soportado, tipo desconocido)."""


class AdvertenciaParametrosAnteriores(UserWarning):
    """Se aplicaron los parametros de otro anio (el ultimo con datos, anterior o
    posterior) porque el solicitado no tiene datos.
    """
