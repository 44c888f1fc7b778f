"""Exact conversion factors.

A :class:`ConversionFactor` carries a float approximation together with an
exact ``numerator / denominator`` pair. Compositions stay exact for as long
as both terms fit in a signed 64-bit integer; past that bound the factor
degrades to its float approximation and a :class:`NumericOverflowWarning` is
emitted (or :class:`NumericOverflowError` raised in strict mode).
"""

from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Union

from rodchain.config import get_settings
from rodchain.core.dimensions import DimensionalError

logger = logging.getLogger(__name__)

EXACT_LIMIT = 2**63 - 1

FactorLike = Union["ConversionFactor", int, float, Fraction]


class NumericOverflowWarning(RuntimeWarning):
    """Exact composition exceeded the integer bound; float approximation used."""


class NumericOverflowError(DimensionalError, OverflowError):
    """Raised instead of :class:`NumericOverflowWarning` in strict mode."""


def _fits(numerator: int, denominator: int) -> bool:
    return abs(numerator) <= EXACT_LIMIT and denominator <= EXACT_LIMIT


@dataclass(frozen=True, eq=False)
class ConversionFactor:
    """Multiplicative scale between two units.

    ``real`` is always populated. ``numerator``/``denominator`` are either
    both set (lowest terms, positive denominator, ``real == numerator /
    denominator``) or both ``None`` for an inexact factor.
    """

    real: float
    numerator: Optional[int] = None
    denominator: Optional[int] = None

    # -- Leaf constructors ------------------------------------------------
    @classmethod
    def from_integer(cls, value: int) -> ConversionFactor:
        return cls.from_ratio(value, 1)

    @classmethod
    def from_ratio(cls, numerator: int, denominator: int = 1) -> ConversionFactor:
        for part in (numerator, denominator):
            if isinstance(part, bool) or not isinstance(part, int):
                raise TypeError(f"Ratio terms must be integers, got {type(part)}")
        if denominator == 0:
            raise ZeroDivisionError("Conversion factor denominator cannot be zero")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        divisor = math.gcd(numerator, denominator)
        numerator //= divisor
        denominator //= divisor
        if not _fits(numerator, denominator):
            return cls._overflowed(numerator, denominator, "from_ratio")
        return cls(numerator / denominator, numerator, denominator)

    @classmethod
    def from_float(cls, value: float) -> ConversionFactor:
        """Build a factor from a float literal.

        The shortest decimal representation of ``value`` is used as the exact
        ratio, so ``0.9144`` becomes ``1143/1250``. Values whose decimal form
        does not fit the integer bound are kept inexact.
        """

        if not math.isfinite(value):
            raise ValueError(f"Conversion factor must be finite, got {value!r}")
        exact = Fraction(repr(float(value)))
        if _fits(exact.numerator, exact.denominator):
            return cls(exact.numerator / exact.denominator, exact.numerator, exact.denominator)
        return cls(float(value))

    @classmethod
    def coerce(cls, value: FactorLike) -> ConversionFactor:
        """Turn ``value`` into a :class:`ConversionFactor`."""

        if isinstance(value, ConversionFactor):
            return value
        if isinstance(value, bool):
            raise TypeError("Cannot use a bool as a conversion factor")
        if isinstance(value, int):
            return cls.from_integer(value)
        if isinstance(value, Fraction):
            return cls.from_ratio(value.numerator, value.denominator)
        if isinstance(value, float):
            return cls.from_float(value)
        raise TypeError(f"Cannot convert {type(value)} to ConversionFactor")

    @classmethod
    def _overflowed(cls, numerator: int, denominator: int, operation: str) -> ConversionFactor:
        message = (
            f"Exact conversion factor exceeded the {EXACT_LIMIT.bit_length()}-bit bound "
            f"during {operation}; falling back to a float approximation"
        )
        if get_settings().strict_overflow:
            raise NumericOverflowError(message)
        logger.debug("%s (numerator bits=%d, denominator bits=%d)", message, abs(numerator).bit_length(), denominator.bit_length())
        warnings.warn(message, NumericOverflowWarning, stacklevel=4)
        return cls(numerator / denominator)

    # -- Derived operations ---------------------------------------------
    @property
    def is_exact(self) -> bool:
        return self.numerator is not None and self.denominator is not None

    def product(self, other: ConversionFactor) -> ConversionFactor:
        if self.is_exact and other.is_exact:
            numerator = self.numerator * other.numerator  # type: ignore[operator]
            denominator = self.denominator * other.denominator  # type: ignore[operator]
            divisor = math.gcd(numerator, denominator)
            numerator //= divisor
            denominator //= divisor
            if not _fits(numerator, denominator):
                return self._overflowed(numerator, denominator, "product")
            return ConversionFactor(numerator / denominator, numerator, denominator)
        return ConversionFactor(self.real * other.real)

    def reciprocal(self) -> ConversionFactor:
        if self.real == 0:
            raise ZeroDivisionError("Cannot take the reciprocal of a zero conversion factor")
        if self.is_exact:
            numerator, denominator = self.denominator, self.numerator
            if denominator < 0:  # type: ignore[operator]
                numerator, denominator = -numerator, -denominator  # type: ignore[operator]
            return ConversionFactor(numerator / denominator, numerator, denominator)  # type: ignore[operator]
        return ConversionFactor(1.0 / self.real)

    def quotient(self, other: ConversionFactor) -> ConversionFactor:
        return self.product(other.reciprocal())

    def power(self, exponent: int) -> ConversionFactor:
        """Integer power by repeated squaring."""

        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise TypeError(f"Conversion factor exponent must be integer, got {type(exponent)}")
        if exponent == 0:
            return ONE
        if exponent < 0:
            return self.power(-exponent).reciprocal()

        result = ONE
        base = self
        while exponent:
            if exponent & 1:
                result = result.product(base)
            exponent >>= 1
            if exponent:
                base = base.product(base)
        return result

    def as_fraction(self) -> Fraction:
        if not self.is_exact:
            raise ValueError("Inexact conversion factor has no exact fraction")
        return Fraction(self.numerator, self.denominator)  # type: ignore[arg-type]

    def isclose(self, other: FactorLike, *, rel_tol: float = 1e-12, abs_tol: float = 0.0) -> bool:
        return math.isclose(self.real, float(ConversionFactor.coerce(other)), rel_tol=rel_tol, abs_tol=abs_tol)

    # -- Operators --------------------------------------------------------
    def __mul__(self, other: FactorLike) -> ConversionFactor:
        try:
            return self.product(ConversionFactor.coerce(other))
        except TypeError:
            return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: FactorLike) -> ConversionFactor:
        try:
            return self.quotient(ConversionFactor.coerce(other))
        except TypeError:
            return NotImplemented

    def __rtruediv__(self, other: FactorLike) -> ConversionFactor:
        try:
            return ConversionFactor.coerce(other).quotient(self)
        except TypeError:
            return NotImplemented

    def __pow__(self, exponent: int) -> ConversionFactor:
        return self.power(exponent)

    def __float__(self) -> float:
        return self.real

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (int, float, Fraction)) and not isinstance(other, bool):
            try:
                other = ConversionFactor.coerce(other)
            except ValueError:
                return False
        if not isinstance(other, ConversionFactor):
            return NotImplemented
        if self.is_exact and other.is_exact:
            return (self.numerator, self.denominator) == (other.numerator, other.denominator)
        return self.real == other.real

    def __hash__(self) -> int:
        # Mixed exact/inexact equality compares floats, so hash the float.
        return hash(self.real)

    def __str__(self) -> str:
        if self.is_exact:
            if self.denominator == 1:
                return str(self.numerator)
            return f"{self.numerator}/{self.denominator}"
        return f"{self.real:g}"

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        if self.is_exact:
            return f"ConversionFactor({self.numerator}/{self.denominator} ~ {self.real!r})"
        return f"ConversionFactor(~{self.real!r})"


ONE = ConversionFactor(1.0, 1, 1)


__all__ = [
    "ConversionFactor",
    "EXACT_LIMIT",
    "FactorLike",
    "NumericOverflowError",
    "NumericOverflowWarning",
    "ONE",
]
