"""Tests del motor ecuatoriano: IESS, decimos, fondo de reserva, renta y costo empleador.

Parametros 2025: SBU $470, IESS personal 9.45%, patronal 12.15%, fondo de reserva 8.33%.
"""

from decimal import Decimal

import pytest

from sueldoneto.calculo import EntradaEcuador, ResultadoEcuador, calcular_sueldo_ecuador
from sueldoneto.calculo.ecuador import validar_entrada_ecuador
from sueldoneto.errores import AdvertenciaParametrosAnteriores, ErrorConfiguracion, ErrorEntrada
from sueldoneto.modelos import Pais
from sueldoneto.parametros import AlmacenParametros


@pytest.fixture
def sueldo_1000(almacen) -> ResultadoEcuador:
    return calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("1000")), almacen)


class TestEcuador1000:
    """$1,000 mensual: base renta 12,000 - 1,134 = 10,866 (tramo 0%)."""

    def test_iess(self, sueldo_1000) -> None:
        assert sueldo_1000.iess_personal == Decimal("94.50")
        assert sueldo_1000.iess_personal_anual == Decimal("1134.00")

    def test_decimos(self, sueldo_1000) -> None:
        assert sueldo_1000.decimo_tercero == Decimal("1000.00")
        assert sueldo_1000.decimo_cuarto == Decimal("470.00")
        assert sueldo_1000.bruto_anual == Decimal("12000.00")
        assert sueldo_1000.bruto_anual_13 == Decimal("13000.00")

    def test_sin_impuesto(self, sueldo_1000) -> None:
        assert sueldo_1000.base_imponible_renta == Decimal("10866.00")
        assert sueldo_1000.impuesto_renta_anual == Decimal("0.00")
        assert sueldo_1000.impuesto_renta_mensual == Decimal("0.00")

    def test_neto(self, sueldo_1000) -> None:
        """Neto anual = 12,000 + 1,000 + 470 - 1,134 = 12,336."""
        assert sueldo_1000.neto_mensual == Decimal("905.50")
        assert sueldo_1000.neto_anual == Decimal("12336.00")

    def test_neto_segundo_anio(self, sueldo_1000) -> None:
        """905.50 + 999.60 / 12 = 988.80."""
        assert sueldo_1000.neto_mensual_anio2 == Decimal("988.80")

    def test_costo_empleador(self, sueldo_1000) -> None:
        """12,000 + 1,458 + 999.60 + 470 = 14,927.60."""
        assert sueldo_1000.fondo_reserva == Decimal("999.60")
        assert sueldo_1000.iess_patronal == Decimal("1458.00")
        assert sueldo_1000.costo_empleador_anual == Decimal("14927.60")
        assert sueldo_1000.costo_empleador_mensual == Decimal("1243.97")

    def test_etiquetas(self, sueldo_1000) -> None:
        assert sueldo_1000.pais == Pais.ECUADOR
        assert sueldo_1000.anio_parametros == 2025


class TestEcuadorRenta:
    def test_2000_tres_tramos(self, almacen) -> None:
        """Base 24,000 - 2,268 = 21,732: 165.30 + 459.10 + 210.48 = 834.88."""
        r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("2000")), almacen)
        assert r.base_imponible_renta == Decimal("21732.00")
        assert r.impuesto_renta_anual == Decimal("834.88")
        assert r.impuesto_renta_mensual == Decimal("69.57")
        assert r.neto_mensual == Decimal("1741.43")
        assert [d.etiqueta for d in r.desglose.impuesto] == [
            "Tramo 0%", "Tramo 5%", "Tramo 10%", "Tramo 12%",
        ]
        assert r.desglose.impuesto[1].rango == "$12.081 - $15.387"

    def test_sin_tabla_de_renta(self) -> None:
        almacen = AlmacenParametros.desde_datos(ecuador={"anios": {2025: {
            "salario_basico_unificado": "470",
            "iess_tasa_personal": "0.0945",
            "iess_tasa_patronal": "0.1215",
            "fondo_reserva_tasa": "0.0833",
        }}})
        r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("5000")), almacen)
        assert r.impuesto_renta_anual == Decimal("0.00")
        assert r.base_imponible_renta == Decimal("0.00")
        assert r.neto_mensual == Decimal("4527.50")
        assert r.desglose.impuesto == ()

    def test_neto_no_supera_bruto(self, almacen) -> None:
        for monto in range(0, 30_001, 500):
            r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal(monto)), almacen)
            assert r.neto_mensual <= r.bruto_mensual


class TestEcuadorParametros:
    def test_2024(self, almacen) -> None:
        r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("1000"), anio=2024), almacen)
        assert r.decimo_cuarto == Decimal("460.00")

    def test_anio_como_texto(self, almacen) -> None:
        r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("1000"), anio="2024"), almacen)
        assert r.anio_parametros == 2024
        assert r.decimo_cuarto == Decimal("460.00")

    def test_anio_sin_datos(self, almacen) -> None:
        with pytest.warns(AdvertenciaParametrosAnteriores):
            r = calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("1000"), anio=2027), almacen)
        assert r.anio_parametros == 2025

    def test_sin_parametros(self) -> None:
        with pytest.raises(ErrorConfiguracion):
            calcular_sueldo_ecuador(EntradaEcuador(sueldo_basico=Decimal("1000")), AlmacenParametros())


class TestValidarEntradaEcuador:
    def test_valida(self) -> None:
        entrada = validar_entrada_ecuador("1500.50", 2024)
        assert entrada.sueldo_basico == Decimal("1500.50")
        assert entrada.anio == 2024

    def test_negativo(self) -> None:
        with pytest.raises(ErrorEntrada):
            validar_entrada_ecuador("-1")
