"""Base-unit identities.

A base unit is either a :class:`BaseUnitTag` (the root identity of one
concrete unit within a base dimension) or a :class:`ScaledBaseUnit`, a
rational multiple of a tag. :func:`root_tag` and :func:`scale_of` dispatch
on the two variants.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import singledispatch
from typing import Optional, Union

from rodchain.core.dimensions import BaseDimension
from rodchain.units.factor import ONE, ConversionFactor, FactorLike


@dataclass(frozen=True)
class BaseUnitTag:
    """Root identity of a concrete base unit, e.g. ``gram`` or ``yard``."""

    name: str
    symbol: str
    dimension: BaseDimension

    def __post_init__(self) -> None:
        if not self.name or not self.symbol:
            raise ValueError("Base unit tags need a non-empty name and symbol")
        if not isinstance(self.dimension, BaseDimension):
            raise TypeError("Base unit dimension must be a BaseDimension")

    def scaled(self, ratio: FactorLike, *, name: str, symbol: str) -> ScaledBaseUnit:
        """One of the new unit equals ``ratio`` of this tag."""
        return ScaledBaseUnit(self, ConversionFactor.coerce(ratio), name=name, symbol=symbol)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class ScaledBaseUnit:
    """A base unit defined as ``ratio`` times ``tag``."""

    tag: BaseUnitTag
    ratio: ConversionFactor
    name: Optional[str] = field(default=None, compare=False)
    symbol: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.tag, BaseUnitTag):
            raise TypeError(f"ScaledBaseUnit must wrap a BaseUnitTag, got {type(self.tag)}")
        ratio = ConversionFactor.coerce(self.ratio)
        if ratio.real <= 0:
            raise ValueError("Base unit scale must be positive")
        object.__setattr__(self, "ratio", ratio)
        if self.symbol is None:
            object.__setattr__(self, "symbol", f"{ratio}{self.tag.symbol}")
        if self.name is None:
            object.__setattr__(self, "name", f"{ratio} {self.tag.name}")

    @property
    def dimension(self) -> BaseDimension:
        return self.tag.dimension

    def __str__(self) -> str:
        return str(self.symbol)


BaseUnit = Union[BaseUnitTag, ScaledBaseUnit]


@singledispatch
def root_tag(unit: BaseUnit) -> BaseUnitTag:
    """Return the tag ``unit`` is ultimately expressed in."""
    raise TypeError(f"Not a base unit: {type(unit)}")


@root_tag.register(BaseUnitTag)
def _(unit: BaseUnitTag) -> BaseUnitTag:
    return unit


@root_tag.register(ScaledBaseUnit)
def _(unit: ScaledBaseUnit) -> BaseUnitTag:
    return unit.tag


@singledispatch
def scale_of(unit: BaseUnit) -> ConversionFactor:
    """Return how many root tags make up one ``unit``."""
    raise TypeError(f"Not a base unit: {type(unit)}")


@scale_of.register(BaseUnitTag)
def _(unit: BaseUnitTag) -> ConversionFactor:
    return ONE


@scale_of.register(ScaledBaseUnit)
def _(unit: ScaledBaseUnit) -> ConversionFactor:
    return unit.ratio


__all__ = [
    "BaseUnit",
    "BaseUnitTag",
    "ScaledBaseUnit",
    "root_tag",
    "scale_of",
]
