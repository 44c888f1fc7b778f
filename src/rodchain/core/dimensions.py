"""Dimensional analysis primitives for rodchain.

Physical dimensions are modelled as sparse integer exponent vectors keyed by
:class:`BaseDimension`. Base dimensions live in an ordered, extendable
:class:`BaseDimensionRegistry` (mass, length and time out of the box). A
:class:`Dimension` is always stored in canonical form: duplicate keys merged
by summing their exponents, zero exponents dropped and entries sorted by the
base dimension's ordering key. Two vectors therefore compare (and hash) equal
whenever their exponents agree on the union of their keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Mapping, Tuple, Union


class DimensionalError(Exception):
    """Raised when a dimensional operation is invalid."""


class IncompatibleDimensionError(DimensionalError):
    """Raised when two quantities or units do not share a dimension."""


@dataclass(frozen=True, order=True)
class BaseDimension:
    """An orthogonal axis of physical measurement.

    ``key`` is the ordering key used to sort dimension vectors and to render
    units in a fixed order. ``name`` is the identity, ``symbol`` the short
    display form (``M``, ``L``, ``T``).
    """

    key: int
    name: str
    symbol: str = field(compare=False)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"BaseDimension({self.name!r}, key={self.key})"


class BaseDimensionRegistry:
    """Ordered registry of base dimensions."""

    def __init__(self) -> None:
        self._by_name: Dict[str, BaseDimension] = {}
        self._ordered: List[BaseDimension] = []

    def define(self, name: str, symbol: str) -> BaseDimension:
        """Register ``name`` and return its :class:`BaseDimension`.

        The new axis receives the next ordering key. Redefining an existing
        name with the same symbol returns the existing entry.
        """

        if not name:
            raise ValueError("Base dimension name cannot be empty")
        existing = self._by_name.get(name)
        if existing is not None:
            if existing.symbol != symbol:
                raise ValueError(
                    f"Base dimension {name!r} already defined with symbol {existing.symbol!r}"
                )
            return existing
        if any(dim.symbol == symbol for dim in self._ordered):
            raise ValueError(f"Base dimension symbol {symbol!r} is already in use")

        dimension = BaseDimension(len(self._ordered), name, symbol)
        self._by_name[name] = dimension
        self._ordered.append(dimension)
        return dimension

    def get(self, name: str) -> BaseDimension:
        try:
            return self._by_name[name]
        except KeyError:
            raise KeyError(f"Unknown base dimension {name!r}") from None

    def __contains__(self, item: object) -> bool:
        return item in self._ordered

    def __iter__(self) -> Iterator[BaseDimension]:
        return iter(tuple(self._ordered))

    def __len__(self) -> int:
        return len(self._ordered)


DEFAULT_DIMENSIONS = BaseDimensionRegistry()
BASE_MASS = DEFAULT_DIMENSIONS.define("mass", "M")
BASE_LENGTH = DEFAULT_DIMENSIONS.define("length", "L")
BASE_TIME = DEFAULT_DIMENSIONS.define("time", "T")


DimensionEntries = Tuple[Tuple[BaseDimension, int], ...]
DimensionLike = Union[
    Mapping[BaseDimension, int], Iterable[Tuple[BaseDimension, int]]
]


def canonicalize(entries: DimensionLike) -> DimensionEntries:
    """Merge duplicate keys, drop zero exponents and sort by key."""

    pairs = entries.items() if isinstance(entries, Mapping) else entries
    merged: Dict[BaseDimension, int] = {}
    for base, exponent in pairs:
        if not isinstance(base, BaseDimension):
            raise TypeError(f"Dimension key must be a BaseDimension, got {type(base)}")
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise ValueError(
                f"Dimension exponent for {base.name} must be an integer, got {type(exponent)}"
            )
        merged[base] = merged.get(base, 0) + exponent
    return tuple(sorted((item for item in merged.items() if item[1] != 0), key=lambda item: item[0].key))


@dataclass(frozen=True, init=False)
class Dimension:
    """Canonical dimension vector.

    Construct from a mapping or an iterable of ``(BaseDimension, exponent)``
    pairs. Multiplication adds exponent vectors, division subtracts them and
    integer powers scale them, mirroring the algebra of dimensional analysis.
    """

    entries: DimensionEntries

    def __init__(self, entries: DimensionLike = ()) -> None:
        object.__setattr__(self, "entries", canonicalize(entries))

    # -- Constructors -----------------------------------------------------
    @classmethod
    def primitive(cls, base: BaseDimension) -> Dimension:
        """Exponent one on a single base dimension."""
        return cls(((base, 1),))

    @classmethod
    def dimensionless(cls) -> Dimension:
        return cls()

    # -- Core algebra -----------------------------------------------------
    def add(self, other: Dimension) -> Dimension:
        """Key-wise sum of exponents over the union of keys."""
        if not isinstance(other, Dimension):
            raise TypeError(f"Cannot combine Dimension with {type(other)}")
        return Dimension(self.entries + other.entries)

    def sub(self, other: Dimension) -> Dimension:
        """Key-wise difference of exponents over the union of keys."""
        if not isinstance(other, Dimension):
            raise TypeError(f"Cannot combine Dimension with {type(other)}")
        return Dimension(self.entries + other.negate().entries)

    def negate(self) -> Dimension:
        return Dimension((base, -exponent) for base, exponent in self.entries)

    def scale(self, factor: int) -> Dimension:
        """Multiply every exponent by the integer ``factor``."""
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Dimension exponent must be integer, got {type(factor)}")
        return Dimension((base, exponent * factor) for base, exponent in self.entries)

    def __mul__(self, other: Dimension) -> Dimension:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.add(other)

    def __truediv__(self, other: Dimension) -> Dimension:
        if not isinstance(other, Dimension):
            return NotImplemented
        return self.sub(other)

    def __rtruediv__(self, other: object) -> Dimension:
        if other == 1:
            return self.negate()
        return NotImplemented

    def __pow__(self, exponent: int) -> Dimension:
        return self.scale(exponent)

    # -- Helpers ----------------------------------------------------------
    def exponent(self, base: BaseDimension) -> int:
        """Exponent on ``base``; missing keys are zero."""
        for key, value in self.entries:
            if key == base:
                return value
        return 0

    def keys(self) -> Tuple[BaseDimension, ...]:
        return tuple(base for base, _ in self.entries)

    def __iter__(self) -> Iterator[Tuple[BaseDimension, int]]:
        return iter(self.entries)

    def is_dimensionless(self) -> bool:
        return not self.entries

    def as_dict(self) -> Dict[str, int]:
        return {base.name: exponent for base, exponent in self.entries}

    def __str__(self) -> str:
        if self.is_dimensionless():
            return "dimensionless"

        parts = []
        for base, power in self.entries:
            if power == 1:
                parts.append(base.symbol)
            else:
                parts.append(f"{base.symbol}^{power}")
        return " ".join(parts)

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"Dimension({self})"


def equal(a: Dimension, b: Dimension) -> bool:
    """Return ``True`` when ``a`` and ``b`` agree on every exponent."""
    return a.entries == b.entries


def require_same(a: Dimension, b: Dimension, operation: str) -> None:
    """Raise :class:`IncompatibleDimensionError` unless ``a`` equals ``b``."""
    if not equal(a, b):
        raise IncompatibleDimensionError(
            f"Cannot {operation} quantities with different dimensions: {a} vs {b}"
        )


DIMENSIONLESS = Dimension.dimensionless()
MASS = Dimension.primitive(BASE_MASS)
LENGTH = Dimension.primitive(BASE_LENGTH)
TIME = Dimension.primitive(BASE_TIME)

AREA = LENGTH * LENGTH
VOLUME = AREA * LENGTH
VELOCITY = LENGTH / TIME
ACCELERATION = VELOCITY / TIME
FORCE = MASS * ACCELERATION
ENERGY = FORCE * LENGTH
POWER = ENERGY / TIME
MOMENTUM = MASS * VELOCITY
