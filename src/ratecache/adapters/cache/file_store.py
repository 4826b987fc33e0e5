# src/ratecache/adapters/cache/file_store.py
"""
File Cache - Durable Two-Tier Cache on Disk

Stores the temporary tier as "<name>.tmp" and the persisted tier as "<name>"
inside a cache directory. Commits copy the temporary file through a temp file
and an atomic rename, so the persisted file is always either the previous
version or the new one, never a partial write.

Files that USE this module:
- Host applications (FileCache to keep rates across restarts)
- tests.test_cache (unit tests)

Files that this module USES:
- ratecache.adapters.cache.base (Cache interface)
- ratecache.config (settings.cache_dir default)
- ratecache.domain.errors (CacheIOError, CacheNotFoundError)
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ratecache.adapters.cache.base import Cache, NEVER_COMMITTED, Tier
from ratecache.config import settings
from ratecache.domain.errors import CacheIOError, CacheNotFoundError

log = logging.getLogger(__name__)


class FileCache(Cache):
    def __init__(self, name: str, directory: Optional[Union[str, Path]] = None):
        """
        Initialize a file cache.
        
        Args:
            name: File name of the persisted tier (e.g. "ecb.xml")
            directory: Cache directory (defaults to settings.cache_dir)
        """
        self.directory = Path(directory) if directory is not None else settings.cache_dir
        self.persisted_path = self.directory / name
        self.temporary_path = self.directory / f"{name}.tmp"

    def _path(self, tier: Tier) -> Path:
        return self.temporary_path if tier is Tier.TEMPORARY else self.persisted_path

    def open_write_sink(self) -> BinaryIO:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            # "wb" truncates any previous uncommitted download
            return self.temporary_path.open("wb")
        except OSError as e:
            raise CacheIOError(f"Cannot open cache file {self.temporary_path}: {e}") from e

    def open_read_source(self, tier: Tier) -> BinaryIO:
        path = self._path(tier)
        try:
            return path.open("rb")
        except FileNotFoundError:
            raise CacheNotFoundError(f"{tier.value} cache tier is not available ({path})") from None
        except OSError as e:
            raise CacheIOError(f"Cannot read cache file {path}: {e}") from e

    def commit(self) -> None:
        """
        Persist the temporary tier using an atomic write.
        
        Raises:
            CacheNotFoundError: If nothing was downloaded yet
            CacheIOError: If the copy or the rename fails
        """
        if not self.temporary_path.exists():
            raise CacheNotFoundError("Nothing to commit: temporary cache tier is not available")
        
        temp_path = None
        try:
            temp_fd, temp_path = tempfile.mkstemp(suffix=".commit", dir=str(self.directory))
            with os.fdopen(temp_fd, "wb") as out, self.temporary_path.open("rb") as src:
                shutil.copyfileobj(src, out)
                out.flush()
                os.fsync(out.fileno())  # Ensure data is written to disk
            # The commit time is the persisted timestamp
            now = time.time()
            os.utime(temp_path, (now, now))

            # Atomic rename (replaces target file atomically on Unix/Windows)
            os.replace(temp_path, str(self.persisted_path))
        except OSError as e:
            if temp_path is not None:
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
            raise CacheIOError(f"Failed to commit cache file {self.persisted_path}: {e}") from e
        log.debug("Committed %s", self.persisted_path)

    def is_empty(self) -> bool:
        return not self.temporary_path.exists() and not self.persisted_path.exists()

    def persisted_timestamp(self) -> int:
        try:
            return int(self.persisted_path.stat().st_mtime * 1000)
        except FileNotFoundError:
            return NEVER_COMMITTED
