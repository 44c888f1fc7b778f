"""Physical quantity utilities."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from fractions import Fraction
from numbers import Number
from typing import Any, Optional

from rodchain.config import get_settings
from rodchain.core.dimensions import Dimension, require_same
from rodchain.units.factor import ConversionFactor
from rodchain.units.resolve import resolve
from rodchain.units.unit import SystemUnit, Unit, is_unit, root_system_unit

_PRECISION_SPEC = re.compile(r"^\.(\d+)$")


def apply_factor(value: Any, factor: ConversionFactor) -> Any:
    """Scale ``value`` by ``factor`` keeping exact payloads exact when possible."""

    if factor.is_exact:
        if isinstance(value, Fraction):
            return value * factor.as_fraction()
        if isinstance(value, int) and not isinstance(value, bool) and factor.denominator == 1:
            return value * factor.numerator  # type: ignore[operator]
    return value * factor.real


def _is_scalar(value: object) -> bool:
    return isinstance(value, Number) and not isinstance(value, bool)


@dataclass(eq=False)
class Quantity:
    """A numeric value paired with the unit it is expressed in."""

    value: Any
    unit: Unit

    def __post_init__(self) -> None:
        if not _is_scalar(self.value):
            raise TypeError(f"Quantity value must be numeric, got {type(self.value)}")
        if not is_unit(self.unit):
            raise TypeError(f"Quantity unit must be a SystemUnit or ScaledUnit, got {type(self.unit)}")

    @classmethod
    def from_value(cls, raw: Any, unit: Unit) -> Quantity:
        return cls(raw, unit)

    # -- Introspection ------------------------------------------------------
    @property
    def dimension(self) -> Dimension:
        return self.unit.dimension

    def is_dimensionless(self) -> bool:
        return self.dimension.is_dimensionless()

    # -- Conversion ---------------------------------------------------------
    def value_in(self, unit: Unit) -> Any:
        """Numeric value of this quantity expressed in ``unit``."""
        if unit == self.unit:
            return self.value
        return apply_factor(self.value, resolve(self.unit, unit))

    def into(self, unit: Unit) -> Quantity:
        return Quantity(self.value_in(unit), unit)

    to = into

    def _root_value(self) -> tuple[SystemUnit, Any]:
        root, ratio = root_system_unit(self.unit)
        return root, apply_factor(self.value, ratio)

    def _converted(self, other: Quantity, operation: str) -> Any:
        require_same(self.dimension, other.dimension, operation)
        return other.value_in(self.unit)

    # -- Additive arithmetic ------------------------------------------------
    def __add__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.value + self._converted(other, "add"), self.unit)

    def __sub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.value - self._converted(other, "subtract"), self.unit)

    def __iadd__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        self.value += self._converted(other, "add")
        return self

    def __isub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        self.value -= self._converted(other, "subtract")
        return self

    def __neg__(self) -> Quantity:
        return Quantity(-self.value, self.unit)

    def __pos__(self) -> Quantity:
        return Quantity(+self.value, self.unit)

    def __abs__(self) -> Quantity:
        return Quantity(abs(self.value), self.unit)

    # -- Multiplicative arithmetic ------------------------------------------
    def __mul__(self, other: Any) -> Quantity:
        if _is_scalar(other):
            return Quantity(self.value * other, self.unit)
        if not isinstance(other, Quantity):
            return NotImplemented

        root, lhs = self._root_value()
        rhs = other.value_in(SystemUnit(root.system, other.dimension))
        return Quantity(lhs * rhs, SystemUnit(root.system, root.dimension * other.dimension))

    def __rmul__(self, other: Any) -> Quantity:
        if _is_scalar(other):
            return Quantity(other * self.value, self.unit)
        return NotImplemented

    def __truediv__(self, other: Any) -> Quantity:
        if _is_scalar(other):
            return Quantity(self.value / other, self.unit)
        if not isinstance(other, Quantity):
            return NotImplemented

        root, lhs = self._root_value()
        rhs = other.value_in(SystemUnit(root.system, other.dimension))
        return Quantity(lhs / rhs, SystemUnit(root.system, root.dimension / other.dimension))

    def __rtruediv__(self, other: Any) -> Quantity:
        if not _is_scalar(other):
            return NotImplemented
        root, value = self._root_value()
        return Quantity(other / value, SystemUnit(root.system, root.dimension.negate()))

    def __pow__(self, exponent: int) -> Quantity:
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError("Exponent must be an integer")
        root, value = self._root_value()
        return Quantity(value**exponent, SystemUnit(root.system, root.dimension**exponent))

    # -- Comparison ---------------------------------------------------------
    def isclose(
        self,
        other: Quantity,
        *,
        rel_tol: Optional[float] = None,
        abs_tol: Optional[float] = None,
    ) -> bool:
        """Compare within tolerances; defaults come from the environment."""

        settings = get_settings()
        return math.isclose(
            self.value,
            self._converted(other, "compare"),
            rel_tol=settings.rel_tol if rel_tol is None else rel_tol,
            abs_tol=settings.abs_tol if abs_tol is None else abs_tol,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.isclose(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return not self.isclose(other)

    def __lt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value < self._converted(other, "compare")

    def __le__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value <= self._converted(other, "compare")

    def __gt__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value > self._converted(other, "compare")

    def __ge__(self, other: Quantity) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.value >= self._converted(other, "compare")

    __hash__ = None  # type: ignore[assignment]

    # -- Display ------------------------------------------------------------
    def __format__(self, spec: str) -> str:
        value = float(self.value) if isinstance(self.value, Fraction) else self.value
        if not spec:
            text = f"{value:.{get_settings().display_precision}f}"
        else:
            match = _PRECISION_SPEC.match(spec)
            text = f"{value:.{match.group(1)}f}" if match else format(value, spec)
        return f"{text} {self.unit.symbol}"

    def __str__(self) -> str:
        return format(self, "")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Quantity(value={self.value!r}, unit={self.unit.symbol!r})"


__all__ = ["Quantity", "apply_factor"]
