# src/ratecache/adapters/cache/__init__.py
"""
Cache Adapters - Two-Tier Feed Storage

All caches implement the Cache interface:
- MemoryCache keeps both tiers in memory
- FileCache keeps both tiers on disk
"""

from ratecache.adapters.cache.base import Cache, NEVER_COMMITTED, Tier
from ratecache.adapters.cache.file_store import FileCache
from ratecache.adapters.cache.memory import MemoryCache

__all__ = [
    "Cache",
    "Tier",
    "NEVER_COMMITTED",
    "MemoryCache",
    "FileCache",
]
