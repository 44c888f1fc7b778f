"""Environment-driven settings.

Values are read from the environment on every call so tests and long-lived
processes pick up changes without a reload.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_REL_TOL = 1e-9
DEFAULT_ABS_TOL = 0.0
DEFAULT_DISPLAY_PRECISION = 2
DEFAULT_LOG_LEVEL = "INFO"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    rel_tol: float = DEFAULT_REL_TOL
    abs_tol: float = DEFAULT_ABS_TOL
    display_precision: int = DEFAULT_DISPLAY_PRECISION
    strict_overflow: bool = False
    log_level: str = DEFAULT_LOG_LEVEL


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must be non-negative", name, raw)
        return default
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r: must be non-negative", name, raw)
        return default
    return value


def get_settings() -> Settings:
    """Return the settings currently configured in the environment."""

    level = (os.getenv("RODCHAIN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring RODCHAIN_LOG_LEVEL=%r: unknown level", level)
        level = DEFAULT_LOG_LEVEL

    return Settings(
        rel_tol=_float_env("RODCHAIN_REL_TOL", DEFAULT_REL_TOL),
        abs_tol=_float_env("RODCHAIN_ABS_TOL", DEFAULT_ABS_TOL),
        display_precision=_int_env("RODCHAIN_DISPLAY_PRECISION", DEFAULT_DISPLAY_PRECISION),
        strict_overflow=(os.getenv("RODCHAIN_STRICT_OVERFLOW") or "").strip().lower() in _TRUTHY,
        log_level=level,
    )


__all__ = ["Settings", "get_settings"]
