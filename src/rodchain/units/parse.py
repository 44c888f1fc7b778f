"""Unit expression parsing.

Turns strings such as ``"m/s^2"``, ``"kg·m²"`` or ``"1000 m"`` into
:class:`~rodchain.units.unit.Unit` values built from a :class:`UnitCatalog`.
Grammar (``/`` binds looser than ``*`` and implicit multiplication)::

    expr   := term ('/' term)*
    term   := factor (('*' | <implicit>) factor)*
    factor := atom ('^' integer)?
    atom   := symbol | number | '(' expr ')'
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from rodchain.core.dimensions import DIMENSIONLESS
from rodchain.units.factor import ONE, ConversionFactor
from rodchain.units.system import UnitSystem
from rodchain.units.unit import ScaledUnit, SystemUnit, Unit, is_unit

logger = logging.getLogger(__name__)


class UnitParseError(ValueError):
    """Raised when a unit expression cannot be parsed."""

    def __init__(self, message: str, text: str, position: Optional[int] = None) -> None:
        pointer = ""
        if position is not None and 0 <= position <= len(text):
            pointer = f"\n{text}\n{' ' * position}^"
        super().__init__(f"{message}{pointer}")
        self.message = message
        self.text = text
        self.position = position


_PREFIXES: Dict[str, Tuple[int, int]] = {
    "G": (10**9, 1),
    "M": (10**6, 1),
    "k": (1000, 1),
    "h": (100, 1),
    "da": (10, 1),
    "d": (1, 10),
    "c": (1, 100),
    "m": (1, 1000),
    "µ": (1, 10**6),
    "μ": (1, 10**6),
    "u": (1, 10**6),
    "n": (1, 10**9),
}


class UnitCatalog:
    """Symbol table mapping unit symbols and names to units."""

    def __init__(self, default_system: Optional[UnitSystem] = None) -> None:
        self.default_system = default_system
        self._units: Dict[str, Unit] = {}
        self._primary: List[str] = []
        self._prefixable: Set[str] = set()
        self._sorted_prefixes = sorted(_PREFIXES, key=len, reverse=True)

    # ------------------------------------------------------------------
    def register(
        self,
        symbol: str,
        unit: Unit,
        *,
        aliases: Iterable[str] = (),
        prefixable: bool = False,
    ) -> None:
        if not symbol:
            raise ValueError("Unit symbol cannot be empty")
        if not is_unit(unit):
            raise TypeError(f"Catalog entries must be units, got {type(unit)}")
        if symbol not in self._units:
            self._primary.append(symbol)
        for key in (symbol, *aliases):
            self._units[key] = unit
        if prefixable:
            self._prefixable.add(symbol)

    def get(self, symbol: str) -> Unit:
        """Return the unit for ``symbol``, applying an SI prefix if needed."""

        if symbol in self._units:
            return self._units[symbol]

        for prefix in self._sorted_prefixes:
            if symbol.startswith(prefix) and len(symbol) > len(prefix):
                tail = symbol[len(prefix) :]
                if tail in self._prefixable:
                    numerator, denominator = _PREFIXES[prefix]
                    return ScaledUnit(
                        self._units[tail],
                        ConversionFactor.from_ratio(numerator, denominator),
                        label=symbol,
                    )
        raise UnitParseError(f"Unknown unit symbol '{symbol}'", symbol, 0)

    def symbols(self) -> List[str]:
        """Primary symbols in registration order."""
        return list(self._primary)

    def items(self) -> List[Tuple[str, Unit]]:
        return [(symbol, self._units[symbol]) for symbol in self._primary]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._units

    def __len__(self) -> int:
        return len(self._primary)


def _default_catalog() -> UnitCatalog:
    from rodchain.catalog import DEFAULT_CATALOG

    return DEFAULT_CATALOG


_SUPERSCRIPT_TRANS = str.maketrans({
    "⁰": "0",
    "¹": "1",
    "²": "2",
    "³": "3",
    "⁴": "4",
    "⁵": "5",
    "⁶": "6",
    "⁷": "7",
    "⁸": "8",
    "⁹": "9",
    "⁺": "+",
    "⁻": "-",
})


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<lpar>\()
    |(?P<rpar>\))
    |(?P<op>[*/])
    |(?P<pow>\^)
    |(?P<num>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<sym>[A-Za-zµμΩ°_][A-Za-z0-9µμΩ°_]*)
    """,
    re.VERBOSE,
)


def _normalize_input(text: str) -> str:
    text = text.replace("·", "*").replace("×", "*")

    def replace_superscripts(match: re.Match) -> str:
        base = match.group(1)
        supers = match.group(2).translate(_SUPERSCRIPT_TRANS)
        return f"{base}^{supers}"

    text = re.sub(r"([A-Za-zµμΩ°0-9\)])([⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻]+)", replace_superscripts, text)

    # m2, s-1
    text = re.sub(r"(?<![A-Za-zµμΩ°0-9_])([A-Za-zµμΩ°]+)([-+]?\d+)\b", r"\1^\2", text)
    return text


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    start: int


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match:
            raise UnitParseError(
                f"Unexpected character '{text[pos]}' in unit expression", text, pos
            )
        if match.lastgroup != "space":
            tokens.append(_Token(match.lastgroup, match.group(0), match.start()))
        pos = match.end()
    return tokens


class _TokenStream:
    def __init__(self, tokens: List[_Token], original: str) -> None:
        self.tokens = tokens
        self.original = original
        self.index = 0

    def peek(self) -> Optional[_Token]:
        if self.index >= len(self.tokens):
            return None
        return self.tokens[self.index]

    def pop(self, expected: Optional[str] = None) -> _Token:
        token = self.peek()
        if token is None:
            raise UnitParseError("Unexpected end of unit expression", self.original, len(self.original))
        if expected and token.kind != expected:
            raise UnitParseError(
                f"Expected {expected} but found '{token.value}'", self.original, token.start
            )
        self.index += 1
        return token


@dataclass(frozen=True)
class _Term:
    """Partial parse result: an optional unit and a pure-number scale."""

    unit: Optional[Unit]
    scale: ConversionFactor

    def __mul__(self, other: _Term) -> _Term:
        return _Term(_combine(self.unit, other.unit), self.scale * other.scale)

    def __truediv__(self, other: _Term) -> _Term:
        if other.unit is None:
            return _Term(self.unit, self.scale / other.scale)
        unit = other.unit ** -1 if self.unit is None else self.unit / other.unit
        return _Term(unit, self.scale / other.scale)

    def __pow__(self, exponent: int) -> _Term:
        unit = None if self.unit is None else self.unit**exponent
        return _Term(unit, self.scale**exponent)


def _combine(lhs: Optional[Unit], rhs: Optional[Unit]) -> Optional[Unit]:
    if lhs is None:
        return rhs
    if rhs is None:
        return lhs
    return lhs * rhs


def parse_unit_expr(text: str, *, catalog: Optional[UnitCatalog] = None) -> Unit:
    """Parse ``text`` into a unit built from ``catalog``'s symbols."""

    if catalog is None:
        catalog = _default_catalog()

    stripped = text.strip()
    if not stripped:
        raise UnitParseError("Unit expression is empty", text, 0)

    normalized = _normalize_input(stripped)
    stream = _TokenStream(_tokenize(normalized), normalized)

    term = _parse_expr(stream, catalog)
    leftover = stream.peek()
    if leftover is not None:
        raise UnitParseError(f"Unexpected token '{leftover.value}'", normalized, leftover.start)

    unit = term.unit
    if unit is None:
        if catalog.default_system is None:
            raise UnitParseError("Pure number needs a catalog default system", normalized, 0)
        unit = SystemUnit(catalog.default_system, DIMENSIONLESS)
    if term.scale != ONE:
        unit = ScaledUnit(unit, term.scale)
    logger.debug("Parsed unit expression %r as %s", text, unit)
    return unit


def _parse_expr(stream: _TokenStream, catalog: UnitCatalog) -> _Term:
    term = _parse_term(stream, catalog)
    while True:
        next_tok = stream.peek()
        if next_tok and next_tok.kind == "op" and next_tok.value == "/":
            stream.pop("op")
            term = term / _parse_term(stream, catalog)
        else:
            break
    return term


def _parse_term(stream: _TokenStream, catalog: UnitCatalog) -> _Term:
    term = _parse_factor(stream, catalog)
    while True:
        next_tok = stream.peek()
        if not next_tok:
            break
        if next_tok.kind == "op" and next_tok.value == "*":
            stream.pop("op")
            term = term * _parse_factor(stream, catalog)
            continue
        if next_tok.kind in {"sym", "num", "lpar"}:
            term = term * _parse_factor(stream, catalog)
            continue
        break
    return term


def _parse_factor(stream: _TokenStream, catalog: UnitCatalog) -> _Term:
    term = _parse_atom(stream, catalog)
    next_tok = stream.peek()
    if next_tok and next_tok.kind == "pow":
        stream.pop("pow")
        exp_tok = stream.pop("num")
        try:
            exponent = int(exp_tok.value)
        except ValueError:
            raise UnitParseError(
                f"Exponent must be an integer, got '{exp_tok.value}'", stream.original, exp_tok.start
            ) from None
        term = term**exponent
    return term


def _parse_atom(stream: _TokenStream, catalog: UnitCatalog) -> _Term:
    token = stream.peek()
    if token is None:
        raise UnitParseError("Unexpected end of unit expression", stream.original, len(stream.original))
    if token.kind == "lpar":
        stream.pop("lpar")
        inner = _parse_expr(stream, catalog)
        stream.pop("rpar")
        return inner
    if token.kind == "sym":
        stream.pop("sym")
        try:
            return _Term(catalog.get(token.value), ONE)
        except UnitParseError as exc:
            raise UnitParseError(exc.message, stream.original, token.start) from None
    if token.kind == "num":
        stream.pop("num")
        scale = ConversionFactor.from_float(float(token.value))
        if scale.real <= 0:
            raise UnitParseError("Numeric scale must be positive", stream.original, token.start)
        return _Term(None, scale)
    raise UnitParseError(f"Unexpected token '{token.value}'", stream.original, token.start)


_QUANTITY_RE = re.compile(r"^\s*(?P<value>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<unit>.*?)\s*$")


def parse_quantity(text: str, *, catalog: Optional[UnitCatalog] = None):
    """Parse ``"2.5 km"`` into a :class:`~rodchain.core.quantity.Quantity`."""

    from rodchain.core.quantity import Quantity

    match = _QUANTITY_RE.match(text)
    if not match:
        raise UnitParseError("Quantity must start with a number", text, 0)
    raw = match.group("value")
    value = int(raw) if re.fullmatch(r"[+-]?\d+", raw) else float(raw)
    unit_text = match.group("unit")
    if not unit_text:
        unit_text = "1"
    return Quantity(value, parse_unit_expr(unit_text, catalog=catalog))


__all__ = [
    "UnitCatalog",
    "UnitParseError",
    "parse_quantity",
    "parse_unit_expr",
]
