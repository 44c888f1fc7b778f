"""Conversion-factor resolution between units.

:func:`resolve` answers "how many ``unit_b`` make up one ``unit_a``". Both
units are unwrapped to their system units, their dimensions must agree, and
the factor is the ratio of the scaling wrappers times, for each base
dimension, the base-unit edge factor raised to that dimension's exponent.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple

from rodchain.core.dimensions import IncompatibleDimensionError
from rodchain.units.factor import ONE, ConversionFactor
from rodchain.units.graph import DEFAULT_GRAPH, BaseUnitGraph
from rodchain.units.unit import ScaledUnit, SystemUnit, Unit, root_system_unit

logger = logging.getLogger(__name__)


class ConversionResolver:
    """Resolves and memoises conversion factors over one :class:`BaseUnitGraph`."""

    def __init__(self, graph: Optional[BaseUnitGraph] = None) -> None:
        self.graph = graph if graph is not None else DEFAULT_GRAPH
        self._cache: Dict[Tuple[Unit, Unit], ConversionFactor] = {}
        self._lock = threading.Lock()
        self._graph_version = self.graph.version
        self.hits = 0
        self.misses = 0

    def resolve(self, unit_a: Unit, unit_b: Unit) -> ConversionFactor:
        key = (unit_a, unit_b)
        with self._lock:
            if self._graph_version != self.graph.version:
                self._cache.clear()
                self._graph_version = self.graph.version
            cached = self._cache.get(key)
            if cached is not None:
                self.hits += 1
                return cached

        factor = self._compute(unit_a, unit_b)
        with self._lock:
            self.misses += 1
            self._cache[key] = factor
        logger.debug("Resolved %s -> %s = %s", unit_a, unit_b, factor)
        return factor

    def _compute(self, unit_a: Unit, unit_b: Unit) -> ConversionFactor:
        if unit_a == unit_b:
            return ONE
        root_a, ratio_a = root_system_unit(unit_a)
        root_b, ratio_b = root_system_unit(unit_b)
        if root_a.dimension != root_b.dimension:
            raise IncompatibleDimensionError(
                f"Cannot convert {unit_a} ({root_a.dimension}) to {unit_b} ({root_b.dimension})"
            )

        factor = ratio_a.quotient(ratio_b)
        if root_a.system == root_b.system:
            return factor
        for base, exponent in root_a.dimension:
            base_factor = self.graph.factor(
                root_a.system.base_for(base), root_b.system.base_for(base)
            )
            factor = factor.product(base_factor.power(exponent))
        return factor

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0


DEFAULT_RESOLVER = ConversionResolver(DEFAULT_GRAPH)


def resolve(unit_a: Unit, unit_b: Unit, *, resolver: Optional[ConversionResolver] = None) -> ConversionFactor:
    """Return the factor converting values in ``unit_a`` into ``unit_b``."""
    return (resolver or DEFAULT_RESOLVER).resolve(unit_a, unit_b)


def _wrap(root: SystemUnit, scale: ConversionFactor) -> Unit:
    if scale == ONE:
        return root
    return ScaledUnit(root, scale)


def _rhs_in_lhs_system(lhs_root: SystemUnit, rhs: Unit, resolver: Optional[ConversionResolver]) -> Tuple[SystemUnit, ConversionFactor]:
    rhs_root, _ = root_system_unit(rhs)
    target = SystemUnit(lhs_root.system, rhs_root.dimension)
    return target, resolve(rhs, target, resolver=resolver)


def multiply_units(lhs: Unit, rhs: Unit, *, resolver: Optional[ConversionResolver] = None) -> Unit:
    """Product unit expressed in ``lhs``'s system."""

    lhs_root, lhs_ratio = root_system_unit(lhs)
    target, rhs_scale = _rhs_in_lhs_system(lhs_root, rhs, resolver)
    root = SystemUnit(lhs_root.system, lhs_root.dimension * target.dimension)
    return _wrap(root, lhs_ratio.product(rhs_scale))


def divide_units(lhs: Unit, rhs: Unit, *, resolver: Optional[ConversionResolver] = None) -> Unit:
    """Quotient unit expressed in ``lhs``'s system."""

    lhs_root, lhs_ratio = root_system_unit(lhs)
    target, rhs_scale = _rhs_in_lhs_system(lhs_root, rhs, resolver)
    root = SystemUnit(lhs_root.system, lhs_root.dimension / target.dimension)
    return _wrap(root, lhs_ratio.quotient(rhs_scale))


def power_unit(unit: Unit, exponent: int) -> Unit:
    root, ratio = root_system_unit(unit)
    return _wrap(SystemUnit(root.system, root.dimension ** exponent), ratio.power(exponent))


__all__ = [
    "ConversionResolver",
    "DEFAULT_RESOLVER",
    "divide_units",
    "multiply_units",
    "power_unit",
    "resolve",
]
