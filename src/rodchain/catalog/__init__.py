"""Reference catalog: SI and imperial mass, length and time.

Importing this package declares the catalog's base-unit edges in the
default graph.
"""

from __future__ import annotations

from rodchain.core.dimensions import BASE_LENGTH, BASE_MASS, BASE_TIME
from rodchain.units.base_units import BaseUnitTag
from rodchain.units.factor import ConversionFactor
from rodchain.units.graph import DEFAULT_GRAPH
from rodchain.units.system import UnitSystem

GRAM = BaseUnitTag("gram", "g", BASE_MASS)
SLUG = BaseUnitTag("slug", "slug", BASE_MASS)
METER = BaseUnitTag("meter", "m", BASE_LENGTH)
YARD = BaseUnitTag("yard", "yd", BASE_LENGTH)
SECOND = BaseUnitTag("second", "s", BASE_TIME)

KILOGRAM = GRAM.scaled(1000, name="kilogram", symbol="kg")
# 1 lbm = 1/32.174 slug
POUND_MASS = SLUG.scaled(ConversionFactor.from_ratio(500, 16087), name="pound", symbol="lbm")
FOOT = YARD.scaled(ConversionFactor.from_ratio(1, 3), name="foot", symbol="ft")
MINUTE = SECOND.scaled(60, name="minute", symbol="min")

DEFAULT_GRAPH.declare_edge(YARD, METER, ConversionFactor.from_ratio(1143, 1250), reciprocal=True)
DEFAULT_GRAPH.declare_edge(SLUG, GRAM, 14590, reciprocal=True)

SI = UnitSystem("SI", {BASE_MASS: KILOGRAM, BASE_LENGTH: METER, BASE_TIME: SECOND})
IMPERIAL = UnitSystem("Imperial", {BASE_MASS: SLUG, BASE_LENGTH: FOOT, BASE_TIME: SECOND})

from rodchain.catalog import imperial, si  # noqa: E402
from rodchain.units.parse import UnitCatalog  # noqa: E402


def build_catalog() -> UnitCatalog:
    """Symbol table over the SI and imperial units, SI taking shared symbols."""

    catalog = UnitCatalog(default_system=SI)
    catalog.register("m", si.METER, aliases=("meter", "metre", "meters"), prefixable=True)
    catalog.register("km", si.KILOMETER, aliases=("kilometer",))
    catalog.register("cm", si.CENTIMETER, aliases=("centimeter",))
    catalog.register("mm", si.MILLIMETER, aliases=("millimeter",))
    catalog.register("kg", si.KILOGRAM, aliases=("kilogram",))
    catalog.register("g", si.GRAM, aliases=("gram",), prefixable=True)
    catalog.register("s", si.SECOND, aliases=("sec", "second"), prefixable=True)
    catalog.register("min", si.MINUTE, aliases=("minute",))
    catalog.register("h", si.HOUR, aliases=("hr", "hour"))
    catalog.register("ft", imperial.FOOT, aliases=("foot", "feet"))
    catalog.register("in", imperial.INCH, aliases=("inch",))
    catalog.register("yd", imperial.YARD, aliases=("yard",))
    catalog.register("mi", imperial.MILE, aliases=("mile",))
    catalog.register("slug", imperial.SLUG)
    catalog.register("lbm", imperial.POUND, aliases=("lb", "pound"))
    return catalog


DEFAULT_CATALOG = build_catalog()

__all__ = [
    "DEFAULT_CATALOG",
    "FOOT",
    "GRAM",
    "IMPERIAL",
    "KILOGRAM",
    "METER",
    "MINUTE",
    "POUND_MASS",
    "SECOND",
    "SI",
    "SLUG",
    "YARD",
    "build_catalog",
    "imperial",
    "si",
]
