# src/ratecache/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the converter that orchestrates fetching, parsing,
caching and conversion through the adapters' interfaces.
"""

from ratecache.application.converter import CurrencyConverter

__all__ = [
    "CurrencyConverter",
]
