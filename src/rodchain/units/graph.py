"""Declared conversion edges between base-unit tags.

Edges are declared explicitly and resolved directly: the graph never searches
for multi-hop paths. ``declare_edge(a, b, f)`` reads "one ``a`` equals ``f``
``b``". Every tag has an implicit identity self-edge.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterator, Tuple

from rodchain.core.dimensions import DimensionalError, IncompatibleDimensionError
from rodchain.units.base_units import BaseUnit, BaseUnitTag, root_tag, scale_of
from rodchain.units.factor import ONE, ConversionFactor, FactorLike

logger = logging.getLogger(__name__)


class UnresolvedConversionError(DimensionalError, LookupError):
    """Raised when no direct edge connects the base units a conversion needs."""


EdgeKey = Tuple[BaseUnitTag, BaseUnitTag]


class BaseUnitGraph:
    """Registry of directed conversion edges between base-unit tags."""

    def __init__(self) -> None:
        self._edges: Dict[EdgeKey, ConversionFactor] = {}
        self._lock = threading.Lock()
        self._version = 0

    @property
    def version(self) -> int:
        """Incremented on every new edge; resolvers use it to drop stale memos."""
        return self._version

    # ------------------------------------------------------------------
    def declare_edge(
        self,
        source: BaseUnitTag,
        target: BaseUnitTag,
        factor: FactorLike,
        *,
        reciprocal: bool = False,
    ) -> None:
        """Declare that one ``source`` equals ``factor`` ``target``.

        With ``reciprocal=True`` the reverse edge is declared as well.
        """

        for tag in (source, target):
            if not isinstance(tag, BaseUnitTag):
                raise TypeError(f"Edges connect BaseUnitTag values, got {type(tag)}")
        if source.dimension != target.dimension:
            raise IncompatibleDimensionError(
                f"Cannot declare an edge between {source.name} ({source.dimension.name}) "
                f"and {target.name} ({target.dimension.name})"
            )
        value = ConversionFactor.coerce(factor)
        if value.real <= 0:
            raise ValueError(f"Edge factor from {source.name} to {target.name} must be positive")
        if source == target and value != ONE:
            raise ValueError(f"Self-edge for {source.name} must have factor 1, got {value}")

        pending = [((source, target), value)]
        if reciprocal:
            pending.append(((target, source), value.reciprocal()))

        with self._lock:
            for key, edge_factor in pending:
                existing = self._edges.get(key)
                if existing is not None and existing != edge_factor:
                    raise ValueError(
                        f"Edge {key[0].name} -> {key[1].name} already declared with factor {existing}"
                    )
            for key, edge_factor in pending:
                self._edges[key] = edge_factor
                logger.debug("Declared edge %s -> %s = %s", key[0].name, key[1].name, edge_factor)
            self._version += 1

    def has_edge(self, source: BaseUnitTag, target: BaseUnitTag) -> bool:
        return source == target or (source, target) in self._edges

    def edge(self, source: BaseUnitTag, target: BaseUnitTag) -> ConversionFactor:
        """Return the declared factor from ``source`` to ``target``."""

        if source == target:
            return ONE
        try:
            return self._edges[(source, target)]
        except KeyError:
            raise UnresolvedConversionError(
                f"No conversion edge declared from {source.name} to {target.name}"
            ) from None

    def factor(self, unit_a: BaseUnit, unit_b: BaseUnit) -> ConversionFactor:
        """How many ``unit_b`` make up one ``unit_a``.

        ``scale_of(a) * edge(root(a), root(b)) / scale_of(b)``.
        """

        tag_a = root_tag(unit_a)
        tag_b = root_tag(unit_b)
        if tag_a.dimension != tag_b.dimension:
            raise IncompatibleDimensionError(
                f"Base units {tag_a.name} and {tag_b.name} measure different dimensions"
            )
        return scale_of(unit_a).product(self.edge(tag_a, tag_b)).quotient(scale_of(unit_b))

    def edges(self) -> Iterator[Tuple[BaseUnitTag, BaseUnitTag, ConversionFactor]]:
        for (source, target), value in tuple(self._edges.items()):
            yield source, target, value

    def __len__(self) -> int:
        return len(self._edges)


DEFAULT_GRAPH = BaseUnitGraph()


__all__ = [
    "BaseUnitGraph",
    "DEFAULT_GRAPH",
    "UnresolvedConversionError",
]
