# src/ratecache/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Cache (feed storage)
- Feeds (provider wire formats)
- Network (feed download)
"""

__all__ = []
