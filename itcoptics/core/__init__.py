"""
Core utilities.

This module provides:
- Error types
- Calibration namespaces and defaults
- Units and unit conversion
- Configuration and logging
- Caching utilities
- Capability interfaces
"""

from itcoptics.core import constants
from itcoptics.core import units
from itcoptics.core import config
from itcoptics.core import logging_config
from itcoptics.core.cache import LRUCache, get_cache_stats, clear_all_caches
from itcoptics.core.abc import CalibrationSource, DetectorCapability, BinningProvider
from itcoptics.core.exceptions import (
    ItcOpticsError,
    NotFoundError,
    DataCorruptError,
    PreconditionViolation,
    ConfigurationError,
    DataIntegrityError,
)

__all__ = [
    # Modules
    "constants",
    "units",
    "config",
    "logging_config",
    # Caching
    "LRUCache",
    "get_cache_stats",
    "clear_all_caches",
    # Capability interfaces
    "CalibrationSource",
    "DetectorCapability",
    "BinningProvider",
    # Errors
    "ItcOpticsError",
    "NotFoundError",
    "DataCorruptError",
    "PreconditionViolation",
    "ConfigurationError",
    "DataIntegrityError",
]
