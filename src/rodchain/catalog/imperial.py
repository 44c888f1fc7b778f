"""Foot-slug-second units."""

from __future__ import annotations

from rodchain.catalog import IMPERIAL
from rodchain.core.dimensions import AREA, LENGTH, MASS, TIME, VELOCITY
from rodchain.units.factor import ConversionFactor
from rodchain.units.unit import SystemUnit

FOOT = SystemUnit(IMPERIAL, LENGTH, name="foot", label="ft")
INCH = FOOT.scaled(ConversionFactor.from_ratio(1, 12), name="inch", symbol="in")
YARD = FOOT.scaled(3, name="yard", symbol="yd")
MILE = FOOT.scaled(5280, name="mile", symbol="mi")

SLUG = SystemUnit(IMPERIAL, MASS, name="slug", label="slug")
POUND = SLUG.scaled(ConversionFactor.from_ratio(500, 16087), name="pound", symbol="lbm")

SECOND = SystemUnit(IMPERIAL, TIME, name="second", label="s")
MINUTE = SECOND.scaled(60, name="minute", symbol="min")
HOUR = SECOND.scaled(3600, name="hour", symbol="h")

SQUARE_FOOT = SystemUnit(IMPERIAL, AREA, name="square foot", label="ft^2")
FOOT_PER_SECOND = SystemUnit(IMPERIAL, VELOCITY, name="foot per second", label="ft/s")

UNITS = (
    FOOT,
    INCH,
    YARD,
    MILE,
    SLUG,
    POUND,
    SECOND,
    MINUTE,
    HOUR,
    SQUARE_FOOT,
    FOOT_PER_SECOND,
)
