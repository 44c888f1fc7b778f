"""Units: system units and scaled units.

A :class:`SystemUnit` pairs a :class:`UnitSystem` with a dimension vector and
means "each base unit of the system raised to its exponent". A
:class:`ScaledUnit` is a rational multiple of another unit. Both are
immutable and hashable; display names and symbols do not take part in
equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import singledispatch
from numbers import Number
from typing import Optional, Tuple, Union

from rodchain.core.dimensions import Dimension
from rodchain.units.factor import ONE, ConversionFactor, FactorLike
from rodchain.units.system import UnitSystem


class _UnitOps:
    """Operator spellings shared by both unit variants."""

    def scaled(self, ratio: FactorLike, *, name: Optional[str] = None, symbol: Optional[str] = None) -> ScaledUnit:
        """One of the new unit equals ``ratio`` of this unit."""
        return ScaledUnit(self, ConversionFactor.coerce(ratio), name=name, label=symbol)  # type: ignore[arg-type]

    def __mul__(self, other: Unit) -> Unit:
        if not isinstance(other, (SystemUnit, ScaledUnit)):
            return NotImplemented
        from rodchain.units.resolve import multiply_units

        return multiply_units(self, other)  # type: ignore[arg-type]

    def __truediv__(self, other: Unit) -> Unit:
        if not isinstance(other, (SystemUnit, ScaledUnit)):
            return NotImplemented
        from rodchain.units.resolve import divide_units

        return divide_units(self, other)  # type: ignore[arg-type]

    def __pow__(self, exponent: int) -> Unit:
        from rodchain.units.resolve import power_unit

        return power_unit(self, exponent)  # type: ignore[arg-type]

    def __rmul__(self, value: object):
        if isinstance(value, bool) or not isinstance(value, Number):
            return NotImplemented
        from rodchain.core.quantity import Quantity

        return Quantity(value, self)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return unit_symbol(self)  # type: ignore[arg-type]


@dataclass(frozen=True, eq=True)
class SystemUnit(_UnitOps):
    system: UnitSystem
    dimension: Dimension
    name: Optional[str] = field(default=None, compare=False)
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.system, UnitSystem):
            raise TypeError(f"SystemUnit needs a UnitSystem, got {type(self.system)}")
        if not isinstance(self.dimension, Dimension):
            raise TypeError(f"SystemUnit needs a Dimension, got {type(self.dimension)}")

    @property
    def symbol(self) -> str:
        return unit_symbol(self)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"SystemUnit({self.system.name}, {self.dimension}, symbol={self.symbol!r})"


@dataclass(frozen=True, eq=True)
class ScaledUnit(_UnitOps):
    inner: Unit
    ratio: ConversionFactor
    name: Optional[str] = field(default=None, compare=False)
    label: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.inner, (SystemUnit, ScaledUnit)):
            raise TypeError(f"ScaledUnit must wrap a unit, got {type(self.inner)}")
        ratio = ConversionFactor.coerce(self.ratio)
        if ratio.real <= 0:
            raise ValueError("Unit scale must be positive")
        object.__setattr__(self, "ratio", ratio)

    @property
    def system(self) -> UnitSystem:
        return self.inner.system

    @property
    def dimension(self) -> Dimension:
        return self.inner.dimension

    @property
    def symbol(self) -> str:
        return unit_symbol(self)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"ScaledUnit({self.ratio} x {self.inner.symbol}, symbol={self.symbol!r})"


Unit = Union[SystemUnit, ScaledUnit]


@singledispatch
def root_system_unit(unit: Unit) -> Tuple[SystemUnit, ConversionFactor]:
    """Strip scaling wrappers, returning the system unit and the product of ratios."""
    raise TypeError(f"Not a unit: {type(unit)}")


@root_system_unit.register(SystemUnit)
def _(unit: SystemUnit) -> Tuple[SystemUnit, ConversionFactor]:
    return unit, ONE


@root_system_unit.register(ScaledUnit)
def _(unit: ScaledUnit) -> Tuple[SystemUnit, ConversionFactor]:
    root, ratio = root_system_unit(unit.inner)
    return root, unit.ratio.product(ratio)


@singledispatch
def unit_symbol(unit: Unit) -> str:
    raise TypeError(f"Not a unit: {type(unit)}")


@unit_symbol.register(SystemUnit)
def _(unit: SystemUnit) -> str:
    if unit.label:
        return unit.label
    return unit.system.symbol_for(unit.dimension)


@unit_symbol.register(ScaledUnit)
def _(unit: ScaledUnit) -> str:
    if unit.label:
        return unit.label
    return f"{unit.ratio}*{unit_symbol(unit.inner)}"


def is_unit(value: object) -> bool:
    return isinstance(value, (SystemUnit, ScaledUnit))


__all__ = [
    "ScaledUnit",
    "SystemUnit",
    "Unit",
    "is_unit",
    "root_system_unit",
    "unit_symbol",
]
