"""Tests del evaluador de impuesto por tramos (politica acumulativa y tramo unico)."""

from decimal import Decimal

import pytest

from sueldoneto.calculo.tramos import TramosAcumulativos, TramoUnico, rango_por_defecto
from sueldoneto.parametros.modelos import TramoUnidades


def _tramos(*filas) -> tuple[TramoUnidades, ...]:
    return tuple(
        TramoUnidades(
            desde=Decimal(desde),
            hasta=Decimal(hasta) if hasta is not None else None,
            tasa=Decimal(tasa),
            fijo=Decimal(fijo),
        )
        for desde, hasta, tasa, fijo in filas
    )


QUINTA_UIT = _tramos(
    ("0", "5", "0.08", "0"),
    ("5", "20", "0.14", "0"),
    ("20", "35", "0.17", "0"),
    ("35", "45", "0.20", "0"),
    ("45", None, "0.30", "0"),
)
UIT = Decimal("5350")

SEGUNDA_UTM = _tramos(
    ("0", "13.5", "0", "0"),
    ("13.5", "30", "0.04", "0"),
    ("30", "50", "0.08", "0.66"),
    ("50", "70", "0.135", "2.26"),
    ("70", "90", "0.23", "4.96"),
    ("90", "120", "0.304", "9.56"),
    ("120", "310", "0.35", "18.68"),
    ("310", None, "0.40", "85.18"),
)
UTM = Decimal("68306")


# =============================================================================
# Politica acumulativa
# =============================================================================
class TestTramosAcumulativos:
    """Cada porcion de la base paga la tasa de su tramo (UIT 2025 = 5,350)."""

    def test_dos_tramos(self) -> None:
        """33,450: 26,750 x 8% = 2,140 + 6,700 x 14% = 938 -> 3,078."""
        resultado = TramosAcumulativos().evaluar(Decimal("33450"), QUINTA_UIT, UIT)
        assert resultado.impuesto == Decimal("3078")
        assert len(resultado.detalle) == 2
        assert resultado.detalle[0].etiqueta == "Tramo 8%"
        assert resultado.detalle[0].monto == Decimal("2140.00")
        assert resultado.detalle[1].base_gravada == Decimal("6700.00")

    def test_tramo_ilimitado(self) -> None:
        """300,000 llega al tramo de 30% (sobre 45 UIT = 240,750)."""
        resultado = TramosAcumulativos().evaluar(Decimal("300000"), QUINTA_UIT, UIT)
        esperado = (
            Decimal("26750") * Decimal("0.08")
            + Decimal("80250") * Decimal("0.14")
            + Decimal("80250") * Decimal("0.17")
            + Decimal("53500") * Decimal("0.20")
            + Decimal("59250") * Decimal("0.30")
        )
        assert resultado.impuesto == esperado
        assert len(resultado.detalle) == 5
        assert resultado.detalle[-1].etiqueta == "Tramo 30%"

    @pytest.mark.parametrize("base", ["0", "-100"])
    def test_base_no_positiva(self, base) -> None:
        resultado = TramosAcumulativos().evaluar(Decimal(base), QUINTA_UIT, UIT)
        assert resultado.impuesto == Decimal("0")
        assert resultado.detalle == ()

    @pytest.mark.parametrize("base", ["1", "26750", "26750.01", "107000", "187250.50", "500000"])
    def test_cobertura_de_la_base(self, base) -> None:
        """La suma de las porciones gravadas es exactamente la base."""
        resultado = TramosAcumulativos().evaluar(Decimal(base), QUINTA_UIT, UIT)
        assert sum(d.base_gravada for d in resultado.detalle) == Decimal(base)

    def test_monotonia(self) -> None:
        politica = TramosAcumulativos()
        anterior = Decimal("-1")
        for base in range(0, 400_001, 2_500):
            impuesto = politica.evaluar(Decimal(base), QUINTA_UIT, UIT).impuesto
            assert impuesto >= anterior
            anterior = impuesto

    def test_impuesto_no_redondeado(self) -> None:
        """El impuesto se retorna exacto; solo la traza se redondea."""
        resultado = TramosAcumulativos().evaluar(Decimal("100.05"), QUINTA_UIT, UIT)
        assert resultado.impuesto == Decimal("8.0040")
        assert resultado.detalle[0].monto == Decimal("8.00")

    def test_formateador_de_rango(self) -> None:
        politica = TramosAcumulativos(formatear_rango=lambda t, u: f"{t.desde}-{t.hasta}")
        resultado = politica.evaluar(Decimal("30000"), QUINTA_UIT, UIT)
        assert [d.rango for d in resultado.detalle] == ["0-5", "5-20"]


class TestRangoPorDefecto:
    def test_tramo_acotado(self) -> None:
        assert rango_por_defecto(QUINTA_UIT[0], UIT) == "0.00 - 26,750.00"

    def test_tramo_ilimitado(self) -> None:
        assert rango_por_defecto(QUINTA_UIT[-1], UIT) == "mas de 240,750.00"


# =============================================================================
# Tramo unico
# =============================================================================
class TestTramoUnico:
    """Impuesto = fijo x UTM + (base - piso) x tasa (UTM 2025 = 68,306)."""

    def test_tramo_exento(self) -> None:
        resultado = TramoUnico().evaluar(Decimal("824000"), SEGUNDA_UTM, Decimal("65000"))
        assert resultado.impuesto == Decimal("0")
        assert len(resultado.detalle) == 1
        assert resultado.detalle[0].etiqueta == "Tramo 0%"

    def test_tramo_4(self) -> None:
        """1,648,000 - 13.5 x 68,306 = 725,869 x 4% = 29,034.76."""
        resultado = TramoUnico().evaluar(Decimal("1648000"), SEGUNDA_UTM, UTM)
        assert resultado.impuesto == Decimal("29034.76")
        assert resultado.detalle[0].base_gravada == Decimal("725869.00")

    def test_usa_fijo_del_tramo(self) -> None:
        """40 UTM: 0.66 UTM fijo + 10 UTM x 8%."""
        base = Decimal("40") * UTM
        resultado = TramoUnico().evaluar(base, SEGUNDA_UTM, UTM)
        assert resultado.impuesto == Decimal("0.66") * UTM + Decimal("10") * UTM * Decimal("0.08")
        assert resultado.detalle[0].etiqueta == "Tramo 8%"

    def test_limite_inclusivo_primer_tramo_gana(self) -> None:
        """Exactamente 30 UTM pertenece al tramo 13.5-30 (ambos extremos inclusivos)."""
        resultado = TramoUnico().evaluar(Decimal("30") * UTM, SEGUNDA_UTM, UTM)
        assert resultado.detalle[0].etiqueta == "Tramo 4%"
        assert resultado.impuesto == Decimal("16.5") * UTM * Decimal("0.04")

    def test_continuidad_en_los_limites(self) -> None:
        """El fijo de cada tramo coincide con el impuesto al techo del anterior."""
        for anterior, siguiente in zip(SEGUNDA_UTM, SEGUNDA_UTM[1:]):
            al_techo = anterior.fijo + (anterior.hasta - anterior.desde) * anterior.tasa
            assert al_techo == siguiente.fijo

    def test_base_no_positiva(self) -> None:
        resultado = TramoUnico().evaluar(Decimal("0"), SEGUNDA_UTM, UTM)
        assert resultado.impuesto == Decimal("0")
        assert resultado.detalle == ()

    def test_monotonia(self) -> None:
        politica = TramoUnico()
        anterior = Decimal("-1")
        for base in range(0, 30_000_001, 100_000):
            impuesto = politica.evaluar(Decimal(base), SEGUNDA_UTM, UTM).impuesto
            assert impuesto >= anterior
            anterior = impuesto


class TestEstrategiasPorPais:
    """Cada pais evalua su impuesto con una politica con nombre."""

    def test_politicas(self) -> None:
        from sueldoneto.calculo.chile import SEGUNDA_CATEGORIA
        from sueldoneto.calculo.ecuador import IMPUESTO_RENTA
        from sueldoneto.calculo.peru import QUINTA_CATEGORIA

        assert QUINTA_CATEGORIA.nombre == "acumulativa"
        assert IMPUESTO_RENTA.nombre == "acumulativa"
        assert SEGUNDA_CATEGORIA.nombre == "tramo_unico"

    def test_misma_interfaz(self) -> None:
        """Ambas politicas aceptan los mismos argumentos y devuelven ResultadoTramos."""
        for estrategia in (TramosAcumulativos(), TramoUnico()):
            resultado = estrategia.evaluar(Decimal("0"), QUINTA_UIT, UIT)
            assert resultado.impuesto == Decimal("0")
            assert resultado.detalle == ()
