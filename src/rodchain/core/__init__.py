"""Core primitives for rodchain."""

from .dimensions import (
    ACCELERATION,
    AREA,
    DEFAULT_DIMENSIONS,
    DIMENSIONLESS,
    ENERGY,
    FORCE,
    LENGTH,
    MASS,
    MOMENTUM,
    POWER,
    TIME,
    VELOCITY,
    VOLUME,
    BaseDimension,
    BaseDimensionRegistry,
    Dimension,
    DimensionalError,
    IncompatibleDimensionError,
)
from .quantity import Quantity

__all__ = [
    "BaseDimension",
    "BaseDimensionRegistry",
    "DEFAULT_DIMENSIONS",
    "Dimension",
    "DimensionalError",
    "IncompatibleDimensionError",
    "DIMENSIONLESS",
    "MASS",
    "LENGTH",
    "TIME",
    "AREA",
    "VOLUME",
    "VELOCITY",
    "ACCELERATION",
    "FORCE",
    "ENERGY",
    "POWER",
    "MOMENTUM",
    "Quantity",
]
