"""Interfaz de linea de comandos (sueldo)."""
