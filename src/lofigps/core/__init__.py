"""Core modules for lofigps."""

from lofigps.core.config import Config, TimeUnit
from lofigps.core.exceptions import (
    LofiGpsError,
    GpsParseError,
    GpsFileError,
    GpsFormatError,
    StoreFrozenError,
    QueryError,
    EmptyStoreError,
    OutOfRangeError,
    GapTooLargeError,
    DegenerateIntervalError,
)
from lofigps.core import logger

__all__ = [
    "Config",
    "TimeUnit",
    "LofiGpsError",
    "GpsParseError",
    "GpsFileError",
    "GpsFormatError",
    "StoreFrozenError",
    "QueryError",
    "EmptyStoreError",
    "OutOfRangeError",
    "GapTooLargeError",
    "DegenerateIntervalError",
    "logger",
]
