# src/ratecache/adapters/cache/memory.py
"""
Memory Cache - In-Process Two-Tier Cache

Keeps both tiers as bytes in memory. Used when the host application does not
need rates to survive a restart, and in tests.

Files that USE this module:
- ratecache.application.converter (default cache when none is given)
- tests.test_cache (unit tests)

Files that this module USES:
- ratecache.adapters.cache.base (Cache interface)
- ratecache.domain.errors (CacheNotFoundError)
"""
from __future__ import annotations

import io
import threading
import time
from typing import BinaryIO, Callable, Optional

from ratecache.adapters.cache.base import Cache, NEVER_COMMITTED, Tier
from ratecache.domain.errors import CacheNotFoundError


class _MemorySink(io.BytesIO):
    """BytesIO that hands its content back to the cache when closed."""

    def __init__(self, on_close: Callable[[bytes], None]):
        super().__init__()
        self._on_close = on_close

    def close(self) -> None:
        if not self.closed:
            self._on_close(self.getvalue())
        super().close()


class MemoryCache(Cache):
    def __init__(self):
        self._temporary: Optional[bytes] = None
        self._persisted: Optional[bytes] = None
        self._persisted_ts = NEVER_COMMITTED
        self._generation = 0
        self._lock = threading.Lock()

    def open_write_sink(self) -> BinaryIO:
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._temporary = b""

        def _finalize(content: bytes) -> None:
            with self._lock:
                # A sink superseded by a newer one must not overwrite its content
                if generation == self._generation:
                    self._temporary = content

        return _MemorySink(_finalize)

    def open_read_source(self, tier: Tier) -> BinaryIO:
        with self._lock:
            content = self._temporary if tier is Tier.TEMPORARY else self._persisted
        if content is None:
            raise CacheNotFoundError(f"{tier.value} cache tier is not available")
        return io.BytesIO(content)

    def commit(self) -> None:
        with self._lock:
            if self._temporary is None:
                raise CacheNotFoundError("Nothing to commit: temporary cache tier is not available")
            self._persisted = self._temporary
            self._persisted_ts = int(time.time() * 1000)

    def is_empty(self) -> bool:
        with self._lock:
            return self._temporary is None and self._persisted is None

    def persisted_timestamp(self) -> int:
        return self._persisted_ts
