"""sueldoneto - Calculo de sueldo neto y costo empleador para Peru, Ecuador y Chile."""

__version__ = "0.1.0"
