"""rodchain - dimensionally safe quantities and exact unit conversion."""

from . import core
from . import units
from .core import Quantity
from .version import __version__
from . import catalog
from .units.parse import UnitParseError, parse_quantity, parse_unit_expr

__all__ = [
    "core",
    "catalog",
    "units",
    "Quantity",
    "UnitParseError",
    "parse_quantity",
    "parse_unit_expr",
    "__version__",
]
