# src/ratecache/adapters/cache/base.py
"""
Base Cache Interface for Feed Storage

A cache has two tiers:
- temporary: the last downloaded feed, not yet validated
- persisted: the last feed that was successfully parsed and committed

The persisted tier is only ever replaced by commit(); downloading a new feed
never touches it, so a corrupt download cannot destroy good data.

Files that USE this module:
- ratecache.adapters.cache.memory (MemoryCache implements Cache)
- ratecache.adapters.cache.file_store (FileCache implements Cache)
- ratecache.application.converter (CurrencyConverter reads and commits through Cache)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import BinaryIO

# Returned by persisted_timestamp() when nothing was ever committed
NEVER_COMMITTED = -1


class Tier(Enum):
    TEMPORARY = "temporary"
    PERSISTED = "persisted"


class Cache(ABC):
    @abstractmethod
    def open_write_sink(self) -> BinaryIO:
        """
        Open a binary sink bound to the temporary tier.
        
        Any previous uncommitted temporary content is discarded. Closing the
        sink finalizes the write.
        
        Raises:
            CacheIOError: If the sink cannot be created
        """
        raise NotImplementedError

    @abstractmethod
    def open_read_source(self, tier: Tier) -> BinaryIO:
        """
        Open a binary source on a tier.
        
        Raises:
            CacheNotFoundError: If the tier was never populated
            CacheIOError: If the tier cannot be read
        """
        raise NotImplementedError

    @abstractmethod
    def commit(self) -> None:
        """
        Copy the temporary tier into the persisted tier and stamp the commit time.
        
        Raises:
            CacheNotFoundError: If the temporary tier was never written
            CacheIOError: If the persisted tier cannot be written
        """
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        """True if neither tier was ever populated."""
        raise NotImplementedError

    @abstractmethod
    def persisted_timestamp(self) -> int:
        """Commit time of the persisted tier in ms since epoch, NEVER_COMMITTED if none."""
        raise NotImplementedError

    def has_persisted(self) -> bool:
        return self.persisted_timestamp() != NEVER_COMMITTED
