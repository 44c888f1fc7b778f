"""Conversion factors, base-unit graph, unit systems and the resolver."""

from .base_units import BaseUnit, BaseUnitTag, ScaledBaseUnit, root_tag, scale_of
from .factor import (
    EXACT_LIMIT,
    ONE,
    ConversionFactor,
    NumericOverflowError,
    NumericOverflowWarning,
)
from .graph import DEFAULT_GRAPH, BaseUnitGraph, UnresolvedConversionError
from .system import UnitSystem
from .unit import ScaledUnit, SystemUnit, Unit, root_system_unit, unit_symbol
from .resolve import DEFAULT_RESOLVER, ConversionResolver, resolve

__all__ = [
    "BaseUnit",
    "BaseUnitTag",
    "ScaledBaseUnit",
    "root_tag",
    "scale_of",
    "EXACT_LIMIT",
    "ONE",
    "ConversionFactor",
    "NumericOverflowError",
    "NumericOverflowWarning",
    "DEFAULT_GRAPH",
    "BaseUnitGraph",
    "UnresolvedConversionError",
    "UnitSystem",
    "ScaledUnit",
    "SystemUnit",
    "Unit",
    "root_system_unit",
    "unit_symbol",
    "DEFAULT_RESOLVER",
    "ConversionResolver",
    "resolve",
]
