# src/ratecache/domain/errors.py
"""
Domain Errors - Rate Cache Exceptions

This module defines the exceptions raised while fetching, parsing, caching
and converting exchange rates. Network and parse failures are recoverable
through the persisted cache; the others are surfaced as-is.
"""


class RateCacheError(Exception):
    """Base exception for rate cache errors."""
    pass


class NetworkError(RateCacheError):
    """Raised when a feed cannot be downloaded."""
    pass


class FeedNotFoundError(NetworkError):
    """Raised when the feed resource does not exist (HTTP 404, missing file)."""
    pass


class FeedParseError(RateCacheError):
    """Raised when feed content is malformed or incomplete."""
    pass


class CacheIOError(RateCacheError):
    """Raised when a cache tier cannot be opened, read or written."""
    pass


class CacheNotFoundError(CacheIOError):
    """Raised when reading a cache tier that was never populated."""
    pass


class TableLockedError(RateCacheError):
    """Raised when mutating a rate table builder after finish()."""
    pass


class UnknownCurrencyError(RateCacheError, KeyError):
    """Raised when a conversion references a currency absent from the rate table."""

    def __init__(self, code: str):
        super().__init__(code)
        self.code = code

    def __str__(self) -> str:
        return f"{self.code} currency is not available."
