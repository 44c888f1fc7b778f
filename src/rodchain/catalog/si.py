"""SI units (kilogram, meter, second)."""

from __future__ import annotations

from rodchain.catalog import SI
from rodchain.core.dimensions import AREA, LENGTH, MASS, TIME, VELOCITY
from rodchain.units.factor import ConversionFactor
from rodchain.units.unit import SystemUnit

METER = SystemUnit(SI, LENGTH, name="meter", label="m")
KILOMETER = METER.scaled(1000, name="kilometer", symbol="km")
CENTIMETER = METER.scaled(ConversionFactor.from_ratio(1, 100), name="centimeter", symbol="cm")
MILLIMETER = METER.scaled(ConversionFactor.from_ratio(1, 1000), name="millimeter", symbol="mm")

KILOGRAM = SystemUnit(SI, MASS, name="kilogram", label="kg")
GRAM = KILOGRAM.scaled(ConversionFactor.from_ratio(1, 1000), name="gram", symbol="g")

SECOND = SystemUnit(SI, TIME, name="second", label="s")
MINUTE = SECOND.scaled(60, name="minute", symbol="min")
HOUR = SECOND.scaled(3600, name="hour", symbol="h")

SQUARE_METER = SystemUnit(SI, AREA, name="square meter", label="m^2")
METER_PER_SECOND = SystemUnit(SI, VELOCITY, name="meter per second", label="m/s")

UNITS = (
    METER,
    KILOMETER,
    CENTIMETER,
    MILLIMETER,
    KILOGRAM,
    GRAM,
    SECOND,
    MINUTE,
    HOUR,
    SQUARE_METER,
    METER_PER_SECOND,
)
