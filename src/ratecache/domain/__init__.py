# src/ratecache/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains the rate table value types and the error taxonomy.
No dependencies on infrastructure or external systems.
"""

from ratecache.domain.models import (
    ConverterState,
    RateTable,
    RateTableBuilder,
    UNITS_PER_CURRENCY,
    to_units,
)
from ratecache.domain.errors import (
    CacheIOError,
    CacheNotFoundError,
    FeedNotFoundError,
    FeedParseError,
    NetworkError,
    RateCacheError,
    TableLockedError,
    UnknownCurrencyError,
)

__all__ = [
    "RateTable",
    "RateTableBuilder",
    "ConverterState",
    "UNITS_PER_CURRENCY",
    "to_units",
    "RateCacheError",
    "NetworkError",
    "FeedNotFoundError",
    "FeedParseError",
    "CacheIOError",
    "CacheNotFoundError",
    "TableLockedError",
    "UnknownCurrencyError",
]
