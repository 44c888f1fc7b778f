"""Tests for unit expression parsing and the symbol catalog."""

from fractions import Fraction

import pytest

from rodchain.catalog import DEFAULT_CATALOG, SI, imperial, si
from rodchain.core.dimensions import ACCELERATION, AREA, DIMENSIONLESS, FORCE, VELOCITY
from rodchain.core.quantity import Quantity
from rodchain.units.parse import UnitCatalog, UnitParseError, parse_quantity, parse_unit_expr
from rodchain.units.unit import ScaledUnit, SystemUnit, root_system_unit


def test_parse_single_symbols_and_names():
    assert parse_unit_expr("m") is si.METER
    assert parse_unit_expr("feet") is imperial.FOOT
    assert parse_unit_expr("  km ") is si.KILOMETER


def test_parse_derived_expression():
    assert parse_unit_expr("m/s") == si.METER_PER_SECOND
    assert parse_unit_expr("m/s^2").dimension == ACCELERATION
    assert parse_unit_expr("kg*m/s^2").dimension == FORCE


def test_parse_supports_implicit_multiplication_and_superscripts():
    assert parse_unit_expr("kg m s^-2").dimension == FORCE
    assert parse_unit_expr("m²") == si.SQUARE_METER
    assert parse_unit_expr("m2") == si.SQUARE_METER
    assert parse_unit_expr("kg·m·s⁻²").dimension == FORCE


def test_parse_parentheses():
    assert parse_unit_expr("m/(s*s)").dimension == ACCELERATION
    assert parse_unit_expr("(ft)^2") == imperial.SQUARE_FOOT


def test_parse_numeric_scale_literal():
    unit = parse_unit_expr("1000 m")
    assert unit == si.KILOMETER
    assert isinstance(unit, ScaledUnit)


def test_parse_pure_number_is_dimensionless():
    unit = parse_unit_expr("1")
    assert unit == SystemUnit(SI, DIMENSIONLESS)
    assert unit.symbol == "1"


def test_parse_applies_si_prefixes_exactly():
    millisecond = parse_unit_expr("ms")
    root, ratio = root_system_unit(millisecond)
    assert root == si.SECOND
    assert ratio.as_fraction() == Fraction(1, 1000)
    assert millisecond.symbol == "ms"
    milligram = parse_unit_expr("mg")
    assert root_system_unit(milligram)[1].as_fraction() == Fraction(1, 10**6)


def test_exact_symbols_win_over_prefixes():
    assert parse_unit_expr("min") is si.MINUTE
    assert parse_unit_expr("mi") is imperial.MILE
    assert parse_unit_expr("h") is si.HOUR


def test_mixed_systems_follow_left_operand():
    unit = parse_unit_expr("ft*m")
    assert unit.system is imperial.FOOT.system
    assert unit.dimension == AREA


def test_unknown_symbol_raises_with_position():
    with pytest.raises(UnitParseError) as excinfo:
        parse_unit_expr("m/furlong")
    assert excinfo.value.position == 2
    assert "furlong" in str(excinfo.value)


def test_malformed_expressions_raise():
    for text in ["", "m/", "m^x", "m^1.5", "(m", "m)", "m $", "0 m"]:
        with pytest.raises(UnitParseError):
            parse_unit_expr(text)


def test_parse_quantity():
    distance = parse_quantity("2.5 km")
    assert distance.value == 2.5
    assert distance.unit is si.KILOMETER
    count = parse_quantity("3")
    assert count.value == 3
    assert count.is_dimensionless()
    assert parse_quantity("-4 ft/s").unit == imperial.FOOT_PER_SECOND
    assert isinstance(parse_quantity("10 m"), Quantity)
    with pytest.raises(UnitParseError):
        parse_quantity("km")


def test_catalog_lists_primary_symbols():
    symbols = DEFAULT_CATALOG.symbols()
    assert symbols[0] == "m"
    assert "meter" not in symbols
    assert "meter" in DEFAULT_CATALOG
    assert len(DEFAULT_CATALOG) == len(symbols)


def test_custom_catalog():
    catalog = UnitCatalog()
    catalog.register("fur", imperial.FOOT.scaled(660), aliases=("furlong",))
    assert parse_unit_expr("furlong", catalog=catalog) == imperial.FOOT.scaled(660)
    with pytest.raises(UnitParseError):
        parse_unit_expr("m", catalog=catalog)
    with pytest.raises(UnitParseError):
        parse_unit_expr("2", catalog=catalog)
    with pytest.raises(TypeError):
        catalog.register("bad", "ft")
    catalog.register("s", imperial.SECOND)
    assert parse_unit_expr("fur/s", catalog=catalog).dimension == VELOCITY


def test_rendered_system_symbols_parse_back_to_the_same_unit():
    for unit in (SystemUnit(SI, VELOCITY), SystemUnit(SI, FORCE), SystemUnit(imperial.FOOT.system, ACCELERATION)):
        assert parse_unit_expr(unit.symbol) == unit
    assert parse_unit_expr(SystemUnit(SI, VELOCITY).symbol) != parse_unit_expr("ms^-1")
