"""Unit systems: one base unit per base dimension."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from rodchain.core.dimensions import BaseDimension, Dimension, IncompatibleDimensionError
from rodchain.units.base_units import BaseUnit, BaseUnitTag, ScaledBaseUnit
from rodchain.units.graph import UnresolvedConversionError


@dataclass(frozen=True, init=False)
class UnitSystem:
    """Assignment of a base unit to each base dimension.

    Built from a mapping ``{BaseDimension: BaseUnit}``; every base unit must
    measure the dimension it is assigned to.
    """

    name: str
    bases: Tuple[Tuple[BaseDimension, BaseUnit], ...]

    def __init__(self, name: str, bases: Mapping[BaseDimension, BaseUnit]) -> None:
        if not name:
            raise ValueError("Unit system name cannot be empty")
        normalized = []
        for dimension, unit in bases.items():
            if not isinstance(unit, (BaseUnitTag, ScaledBaseUnit)):
                raise TypeError(f"{name}: base for {dimension.name} must be a base unit, got {type(unit)}")
            if unit.dimension != dimension:
                raise IncompatibleDimensionError(
                    f"{name}: {unit.name} measures {unit.dimension.name}, not {dimension.name}"
                )
            normalized.append((dimension, unit))
        normalized.sort(key=lambda item: item[0])
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "bases", tuple(normalized))

    def base_for(self, dimension: BaseDimension) -> BaseUnit:
        for key, unit in self.bases:
            if key == dimension:
                return unit
        raise UnresolvedConversionError(
            f"Unit system {self.name} has no base unit for {dimension.name}"
        )

    def covers(self, dimension: Dimension) -> bool:
        covered = {key for key, _ in self.bases}
        return all(base in covered for base in dimension.keys())

    def symbol_for(self, dimension: Dimension) -> str:
        """Render ``dimension`` with this system's base-unit symbols.

        Symbols appear in base-dimension order joined by ``*``; exponents
        other than one are written as ``^n``. The rendered symbol parses
        back to the same unit.
        """

        if dimension.is_dimensionless():
            return "1"
        parts = []
        for base, exponent in dimension:
            symbol = self.base_for(base).symbol
            parts.append(symbol if exponent == 1 else f"{symbol}^{exponent}")
        return "*".join(parts)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"UnitSystem({self.name!r})"


__all__ = ["UnitSystem"]
