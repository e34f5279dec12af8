"""Tests CLI de sueldoneto (comandos sueldo)."""

from __future__ import annotations

from typer.testing import CliRunner

import sueldoneto
from sueldoneto.cli.app import app

runner = CliRunner()


class TestGlobal:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"sueldoneto version {sueldoneto.__version__}" in result.output

    def test_sin_argumentos_muestra_ayuda(self) -> None:
        result = runner.invoke(app, [])
        assert "peru" in result.output
        assert "chile" in result.output

    def test_verbose(self) -> None:
        result = runner.invoke(app, ["--verbose", "ecuador", "1000"])
        assert result.exit_code == 0

    def test_anio_del_entorno_invalido(self, monkeypatch) -> None:
        monkeypatch.setenv("SUELDONETO_ANIO", "2025.0")
        result = runner.invoke(app, ["peru", "5000"])
        assert result.exit_code == 1
        assert "SUELDONETO_ANIO" in result.output

    def test_nivel_log_del_entorno_invalido(self, monkeypatch) -> None:
        monkeypatch.setenv("SUELDONETO_LOG", "verbose")
        result = runner.invoke(app, ["ecuador", "1000"])
        assert result.exit_code == 1
        assert "SUELDONETO_LOG" in result.output


class TestPeru:
    def test_neto_mensual(self) -> None:
        result = runner.invoke(app, ["peru", "5000"])
        assert result.exit_code == 0, result.output
        assert "S/ 4,175" in result.output
        assert "S/ 61,000" in result.output
        assert "parametros 2025" in result.output

    def test_ria_muestra_alicuotas(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--regimen", "RIA"])
        assert result.exit_code == 0, result.output
        assert "Alicuotas RIA" in result.output
        assert "S/ 486.11" in result.output

    def test_bono(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--bono-multiplos", "1"])
        assert result.exit_code == 0, result.output
        assert "S/ 4,941.67" in result.output

    def test_bono_multiplos_invalido(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--bono-multiplos", "dos"])
        assert result.exit_code == 1
        assert "bono_multiplos" in result.output

    def test_detalle(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--detalle"])
        assert result.exit_code == 0, result.output
        assert "Calculo mensual" in result.output
        assert "Tramo 14%" in result.output

    def test_anio_sin_datos_avisa(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--anio", "2026"])
        assert result.exit_code == 0, result.output
        assert "Aviso" in result.output
        assert "parametros 2025" in result.output

    def test_monto_invalido(self) -> None:
        result = runner.invoke(app, ["peru", "abc"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_regimen_invalido(self) -> None:
        result = runner.invoke(app, ["peru", "5000", "--regimen", "CAS"])
        assert result.exit_code == 1
        assert "regimen" in result.output


class TestEcuador:
    def test_neto_y_costo(self) -> None:
        result = runner.invoke(app, ["ecuador", "1000"])
        assert result.exit_code == 0, result.output
        assert "$905,5" in result.output
        assert "$14.927,6" in result.output

    def test_anio_desde_entorno(self, monkeypatch) -> None:
        monkeypatch.setenv("SUELDONETO_ANIO", "2024")
        result = runner.invoke(app, ["ecuador", "1000"])
        assert result.exit_code == 0, result.output
        assert "parametros 2024" in result.output
        assert "$460" in result.output


class TestChile:
    def test_liquido(self) -> None:
        result = runner.invoke(app, ["chile", "2000000"])
        assert result.exit_code == 0, result.output
        assert "$1.618.965" in result.output
        assert "24.13 UTM" in result.output

    def test_plazo_fijo(self) -> None:
        result = runner.invoke(app, ["chile", "2000000", "--contrato", "PLAZO_FIJO"])
        assert result.exit_code == 0, result.output
        assert "PLAZO_FIJO" in result.output

    def test_anio_sin_utm(self) -> None:
        result = runner.invoke(app, ["chile", "1000000", "--anio", "2030"])
        assert result.exit_code == 1
        assert "UTM no disponible" in result.output


class TestParametros:
    def test_peru_ambos_regimenes(self) -> None:
        result = runner.invoke(app, ["parametros", "PE"])
        assert result.exit_code == 0, result.output
        assert "NORMAL" in result.output
        assert "RIA" in result.output
        assert "2024, 2025" in result.output

    def test_chile(self) -> None:
        result = runner.invoke(app, ["parametros", "chile"])
        assert result.exit_code == 0, result.output
        assert "2024, 2025, 2026" in result.output

    def test_pais_desconocido(self) -> None:
        result = runner.invoke(app, ["parametros", "XX"])
        assert result.exit_code == 1
