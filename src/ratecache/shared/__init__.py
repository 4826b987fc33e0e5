# src/ratecache/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from ratecache.shared.validators import (
    validate_currency_code,
    validate_feed_url,
    validate_proxy_url,
)
from ratecache.shared.logging_conf import setup_logging

__all__ = [
    "validate_feed_url",
    "validate_proxy_url",
    "validate_currency_code",
    "setup_logging",
]
