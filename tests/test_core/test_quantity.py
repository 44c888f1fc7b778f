"""Tests for conversion-aware Quantity arithmetic."""

from fractions import Fraction

import pytest

from rodchain.catalog import imperial, si
from rodchain.core.dimensions import AREA, VELOCITY, IncompatibleDimensionError
from rodchain.core.quantity import Quantity
from rodchain.units.unit import SystemUnit


def test_quantity_creation():
    distance = Quantity.from_value(3, si.METER)
    assert distance.value == 3
    assert distance.unit == si.METER
    assert distance.dimension == si.METER.dimension


def test_number_times_unit_builds_quantity():
    distance = 2.5 * si.KILOMETER
    assert isinstance(distance, Quantity)
    assert distance.value == 2.5


def test_quantity_rejects_bad_payloads():
    with pytest.raises(TypeError):
        Quantity("3", si.METER)
    with pytest.raises(TypeError):
        Quantity(True, si.METER)
    with pytest.raises(TypeError):
        Quantity(3, "m")


def test_into_converts_value():
    assert Quantity(2.0, si.KILOMETER).into(si.METER).value == 2000.0
    assert Quantity(90, si.MINUTE).to(si.HOUR).value == pytest.approx(1.5)


def test_integer_values_stay_integral_for_integer_factors():
    assert Quantity(3, si.KILOMETER).value_in(si.METER) == 3000
    assert isinstance(Quantity(3, si.KILOMETER).value_in(si.METER), int)


def test_fraction_values_stay_exact():
    converted = Quantity(Fraction(1), imperial.YARD).value_in(si.METER)
    assert converted == Fraction(1143, 1250)


def test_addition_converts_rhs_into_lhs_unit():
    total = Quantity(2.0, si.METER) + Quantity(3.0, imperial.FOOT)
    assert total.unit == si.METER
    assert total.value == pytest.approx(2.9144)


def test_subtraction_and_in_place_accumulation():
    distance = Quantity(1.0, si.KILOMETER)
    distance -= Quantity(250, si.METER)
    assert distance.value == pytest.approx(0.75)
    distance += Quantity(0.25, si.KILOMETER)
    assert distance.value == pytest.approx(1.0)


def test_add_incompatible_dimensions_raises():
    with pytest.raises(IncompatibleDimensionError):
        Quantity(1, si.METER) + Quantity(1, si.SECOND)


def test_unary_operators_keep_unit():
    distance = Quantity(-2, si.METER)
    assert (-distance).value == 2
    assert (+distance).value == -2
    assert abs(distance).value == 2
    assert abs(distance).unit == si.METER


def test_multiplication_uses_lhs_system():
    area = Quantity(2, si.METER) * Quantity(1, imperial.FOOT)
    assert area.dimension == AREA
    assert area.unit.system == si.METER.system
    assert area.value == pytest.approx(0.6096)


def test_multiplication_normalizes_scaled_lhs():
    area = Quantity(2, si.KILOMETER) * Quantity(3, si.METER)
    assert area.unit == si.SQUARE_METER
    assert area.value == 6000


def test_division_builds_velocity():
    speed = Quantity(10, si.METER) / Quantity(2, si.SECOND)
    assert speed.dimension == VELOCITY
    assert speed == Quantity(5, si.METER_PER_SECOND)


def test_scalar_arithmetic():
    distance = Quantity(4, si.METER)
    assert (distance * 2).value == 8
    assert (2 * distance).value == 8
    assert (distance / 2).value == 2


def test_scalar_over_quantity_negates_dimension():
    frequency = 2 / Quantity(4, si.SECOND)
    assert frequency.value == pytest.approx(0.5)
    assert frequency.dimension == si.SECOND.dimension.negate()


def test_power_raises_value_and_dimension():
    area = Quantity(3, si.METER) ** 2
    assert area.value == 9
    assert area.dimension == AREA
    with pytest.raises(TypeError):
        Quantity(3, si.METER) ** 0.5


def test_equality_across_systems():
    assert Quantity(3, imperial.FOOT) == Quantity(1, imperial.YARD)
    assert Quantity(1, imperial.YARD) == Quantity(0.9144, si.METER)
    assert Quantity(1, si.METER) != Quantity(1, imperial.FOOT)


def test_equality_with_incompatible_dimensions_raises():
    with pytest.raises(IncompatibleDimensionError):
        Quantity(1, si.METER) == Quantity(1, si.SECOND)


def test_ordering_converts_before_comparing():
    assert Quantity(1, si.METER) > Quantity(3, imperial.FOOT)
    assert Quantity(1, si.METER) < Quantity(4, imperial.FOOT)
    assert Quantity(1, imperial.MILE) >= Quantity(1.6, si.KILOMETER)
    assert Quantity(1, si.MINUTE) <= Quantity(61, si.SECOND)


def test_isclose_uses_explicit_tolerance():
    a = Quantity(1.0, si.METER)
    b = Quantity(1.001, si.METER)
    assert a != b
    assert a.isclose(b, rel_tol=1e-2)


def test_tolerance_comes_from_environment(monkeypatch):
    monkeypatch.setenv("RODCHAIN_REL_TOL", "0.01")
    assert Quantity(1.0, si.METER) == Quantity(1.001, si.METER)


def test_round_trip_within_tolerance():
    original = Quantity(12.5, si.METER_PER_SECOND)
    back = original.into(imperial.FOOT_PER_SECOND).into(si.METER_PER_SECOND)
    assert back == original


def test_quantities_are_unhashable():
    with pytest.raises(TypeError):
        hash(Quantity(1, si.METER))


def test_format_default_and_precision():
    distance = Quantity(3, si.METER)
    assert format(distance) == "3.00 m"
    assert format(distance, ".3") == "3.000 m"
    assert str(distance) == "3.00 m"
    assert f"{distance:>6.1f}" == "   3.0 m"


def test_format_precision_from_environment(monkeypatch):
    monkeypatch.setenv("RODCHAIN_DISPLAY_PRECISION", "1")
    assert str(Quantity(2, si.KILOGRAM)) == "2.0 kg"


def test_format_derived_unit_symbol():
    unit = SystemUnit(si.METER.system, AREA)
    assert str(Quantity(1, unit)) == "1.00 m^2"
