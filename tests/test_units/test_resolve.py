"""Tests for conversion-factor resolution."""

import itertools
from fractions import Fraction

import pytest

from rodchain.catalog import imperial, si
from rodchain.core.dimensions import BASE_LENGTH, BASE_TIME, LENGTH, TIME, IncompatibleDimensionError
from rodchain.units.base_units import BaseUnitTag
from rodchain.units.factor import ONE
from rodchain.units.graph import BaseUnitGraph, UnresolvedConversionError
from rodchain.units.resolve import ConversionResolver, resolve
from rodchain.units.system import UnitSystem
from rodchain.units.unit import SystemUnit

LENGTH_UNITS = [
    si.METER,
    si.KILOMETER,
    si.CENTIMETER,
    imperial.FOOT,
    imperial.INCH,
    imperial.YARD,
    imperial.MILE,
]


def test_identity_factor_is_exactly_one():
    for unit in LENGTH_UNITS + [si.SQUARE_METER, imperial.FOOT_PER_SECOND, imperial.POUND]:
        factor = resolve(unit, unit)
        assert factor == ONE
        assert factor.is_exact


def test_factor_times_reverse_factor_is_one():
    for unit_a, unit_b in itertools.permutations(LENGTH_UNITS, 2):
        assert resolve(unit_a, unit_b) * resolve(unit_b, unit_a) == ONE


def test_kilometer_to_meter():
    assert resolve(si.KILOMETER, si.METER) == 1000


def test_foot_yard_meter_chain():
    assert resolve(imperial.YARD, si.METER).as_fraction() == Fraction(1143, 1250)
    assert resolve(imperial.YARD, imperial.FOOT) == 3
    assert resolve(imperial.FOOT, si.METER).as_fraction() == Fraction(381, 1250)


def test_exponent_law_for_area():
    length = resolve(si.METER, imperial.FOOT)
    area = resolve(si.SQUARE_METER, imperial.SQUARE_FOOT)
    assert area == length ** 2
    assert area.as_fraction() == Fraction(1562500, 145161)
    assert area.real == pytest.approx(10.763910417, rel=1e-9)


def test_exponent_law_negative_exponent():
    inverse_meter = SystemUnit(si.METER.system, LENGTH ** -1)
    inverse_foot = SystemUnit(imperial.FOOT.system, LENGTH ** -1)
    assert resolve(inverse_meter, inverse_foot) == resolve(si.METER, imperial.FOOT) ** -1


def test_mass_crosses_systems_through_slug_edge():
    assert resolve(imperial.SLUG, si.KILOGRAM).as_fraction() == Fraction(1459, 100)
    assert resolve(imperial.POUND, si.GRAM).real == pytest.approx(14590 / 32.174, rel=1e-12)


def test_incompatible_dimensions_raise_before_lookup():
    with pytest.raises(IncompatibleDimensionError):
        resolve(si.METER, si.SECOND)


def test_only_declared_direction_resolves():
    a = BaseUnitTag("alpha", "a", BASE_LENGTH)
    b = BaseUnitTag("beta", "b", BASE_LENGTH)
    graph = BaseUnitGraph()
    graph.declare_edge(b, a, 4)
    system_a = UnitSystem("A", {BASE_LENGTH: a})
    system_b = UnitSystem("B", {BASE_LENGTH: b})
    resolver = ConversionResolver(graph)

    assert resolver.resolve(SystemUnit(system_b, LENGTH), SystemUnit(system_a, LENGTH)) == 4
    with pytest.raises(UnresolvedConversionError):
        resolver.resolve(SystemUnit(system_a, LENGTH), SystemUnit(system_b, LENGTH))


def test_missing_base_unit_in_system_is_unresolved():
    lengths_only = UnitSystem("lengths", {BASE_LENGTH: BaseUnitTag("meter", "m", BASE_LENGTH)})
    timed = UnitSystem("timed", {BASE_TIME: BaseUnitTag("second", "s", BASE_TIME)})
    with pytest.raises(UnresolvedConversionError):
        resolve(SystemUnit(lengths_only, TIME), SystemUnit(timed, TIME))


def test_resolver_memoises_and_invalidates_on_new_edges():
    a = BaseUnitTag("alpha", "a", BASE_LENGTH)
    b = BaseUnitTag("beta", "b", BASE_LENGTH)
    graph = BaseUnitGraph()
    graph.declare_edge(a, b, 2)
    resolver = ConversionResolver(graph)
    unit_a = SystemUnit(UnitSystem("A", {BASE_LENGTH: a}), LENGTH)
    unit_b = SystemUnit(UnitSystem("B", {BASE_LENGTH: b}), LENGTH)

    resolver.resolve(unit_a, unit_b)
    resolver.resolve(unit_a, unit_b)
    assert (resolver.hits, resolver.misses) == (1, 1)

    with pytest.raises(UnresolvedConversionError):
        resolver.resolve(unit_b, unit_a)
    graph.declare_edge(b, a, Fraction(1, 2))
    assert resolver.resolve(unit_b, unit_a).as_fraction() == Fraction(1, 2)

    resolver.clear()
    assert (resolver.hits, resolver.misses) == (0, 0)
