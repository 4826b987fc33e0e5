# src/ratecache/application/converter.py
"""
Currency Converter - Fetch, Validate, Commit and Fall Back

This module contains the converter that keeps a rate table in sync with a
remote feed. Each update downloads the feed into the cache's temporary tier,
parses it, and only then commits it and adopts the new table. When the
download or the parse fails, the last committed feed is parsed instead so the
converter keeps working on stale data, and the original error is still raised
to the caller.

Files that USE this module:
- Host applications (CurrencyConverter is the public entry point)
- tests.test_converter (unit tests)

Files that this module USES:
- ratecache.adapters.cache (Cache, MemoryCache, Tier)
- ratecache.adapters.feeds.base (FeedParser interface)
- ratecache.adapters.network (FeedSource, HttpFeedSource)
- ratecache.config (refresh policy settings)
- ratecache.domain (RateTable, ConverterState, errors)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging
import threading
import time
from typing import Optional, Set

from ratecache.adapters.cache import Cache, MemoryCache, Tier
from ratecache.adapters.feeds.base import FeedParser
from ratecache.adapters.network import FeedSource, HttpFeedSource
from ratecache.config import settings
from ratecache.domain.errors import (
    CacheIOError,
    FeedParseError,
    NetworkError,
    UnknownCurrencyError,
)
from ratecache.domain.models import ConverterState, RateTable

log = logging.getLogger(__name__)

NO_TIMESTAMP = -1
MS_PER_HOUR = 60 * 60 * 1000


def _now_ms() -> int:
    return int(time.time() * 1000)


class CurrencyConverter:
    """
    Currency converter backed by one provider feed and one cache.
    
    A cache must not be shared between converters of different providers:
    commit() does not record where the data came from.
    """

    def __init__(
        self,
        parser: FeedParser,
        cache: Optional[Cache] = None,
        source: Optional[FeedSource] = None,
        url: Optional[str] = None,
    ):
        """
        Initialize the converter and load the persisted cache tier if there is one.
        
        No network access happens here; call update() or refresh() for that.
        
        Args:
            parser: Provider-specific FeedParser
            cache: Optional Cache (defaults to a new MemoryCache)
            source: Optional FeedSource (defaults to HttpFeedSource)
            url: Optional feed URL (defaults to parser.default_url)
        """
        self.parser = parser
        self.cache = cache if cache is not None else MemoryCache()
        self.source = source if source is not None else HttpFeedSource()
        self.url = url or parser.default_url

        self._table: Optional[RateTable] = None
        self._state = ConverterState.UNINITIALIZED
        self._refresh_ts = NO_TIMESTAMP
        self._last_attempt_ts = NO_TIMESTAMP
        self._update_lock = threading.Lock()

        if self.cache.has_persisted():
            try:
                self._table = self._parse(Tier.PERSISTED)
                self._state = ConverterState.STALE
                log.info("%s rates loaded from cache (%d currencies)", parser.name, len(self._table.currencies))
            except (FeedParseError, CacheIOError) as e:
                # Maybe the cache is corrupted; update() will tell
                log.warning("%s cache could not be loaded: %s", parser.name, e)
        else:
            log.debug("%s cache is unavailable", parser.name)

    # --- state -------------------------------------------------------------

    @property
    def state(self) -> ConverterState:
        return self._state

    def is_synchronized(self) -> bool:
        """True only if the last update() fetched, parsed and committed fresh data."""
        return self._state is ConverterState.SYNCHRONIZED

    def get_refresh_timestamp(self) -> int:
        """Time of the last successful download (ms since epoch), negative if none."""
        return self._refresh_ts

    def get_timestamp(self) -> int:
        """Feed-declared timestamp of the current rates (ms since epoch), negative if none."""
        table = self._table
        return table.valid_at if table is not None else NO_TIMESTAMP

    # --- update cycle ------------------------------------------------------

    def update(self) -> None:
        """
        Run one fetch / parse / commit cycle, falling back to the persisted cache.
        
        Raises:
            NetworkError: If the feed could not be downloaded (even if the fallback succeeded)
            FeedParseError: If the downloaded feed is invalid (even if the fallback succeeded)
            CacheIOError: If the cache could not be written or committed
        """
        with self._update_lock:
            try:
                self._download()
                table = self._parse(Tier.TEMPORARY)
            except (NetworkError, FeedParseError) as e:
                log.warning("%s update failed, falling back to cache: %s", self.parser.name, e)
                self._fall_back()
                raise
            except CacheIOError:
                self._state = ConverterState.STALE if self._table is not None else ConverterState.UNAVAILABLE
                raise

            start = time.perf_counter()
            try:
                self.cache.commit()
            except CacheIOError:
                self._state = ConverterState.STALE if self._table is not None else ConverterState.UNAVAILABLE
                raise
            log.debug("commit: %.1fms", (time.perf_counter() - start) * 1000)

            self._table = table
            self._refresh_ts = _now_ms()
            self._state = ConverterState.SYNCHRONIZED
            log.info(
                "%s rates updated: %d currencies, valid at %s",
                self.parser.name, len(table.currencies), table.valid_at,
            )

    def _download(self) -> None:
        self._last_attempt_ts = _now_ms()
        start = time.perf_counter()
        with self.cache.open_write_sink() as sink:
            self.source.fetch(self.url, sink)
        log.debug("refresh cache: %.1fms", (time.perf_counter() - start) * 1000)

    def _parse(self, tier: Tier) -> RateTable:
        start = time.perf_counter()
        with self.cache.open_read_source(tier) as src:
            table = self.parser.parse(src)
        log.debug("parse %s: %.1fms", tier.value, (time.perf_counter() - start) * 1000)
        return table

    def _fall_back(self) -> None:
        if not self.cache.has_persisted():
            log.error("%s rates unavailable: no persisted cache", self.parser.name)
            self._state = ConverterState.UNAVAILABLE
            return
        try:
            self._table = self._parse(Tier.PERSISTED)
        except (FeedParseError, CacheIOError) as e:
            log.error("%s rates unavailable: persisted cache is unusable: %s", self.parser.name, e)
            self._state = ConverterState.UNAVAILABLE
            return
        self._state = ConverterState.STALE
        log.info("%s rates recovered from cache, valid at %s", self.parser.name, self._table.valid_at)

    def is_data_expired(self) -> bool:
        """
        Check whether the feed should be downloaded again.
        
        How long rates stay valid depends on the provider's publication
        schedule and is given by parser.expires_after(). The server is never
        contacted twice within settings.min_refresh_interval_seconds.
        """
        valid_at = self.get_timestamp()
        if valid_at < 0:
            return True
        now = _now_ms()
        if (self._last_attempt_ts >= 0
                and 0 <= now - self._last_attempt_ts < settings.min_refresh_interval_seconds * 1000):
            return False

        return now - valid_at > self.parser.expires_after(valid_at) * MS_PER_HOUR

    def refresh(self) -> bool:
        """
        Update only if the data is expired.
        
        Returns:
            True if the feed server was contacted, False otherwise
            
        Raises:
            Same errors as update()
        """
        if not self.is_data_expired():
            log.debug("%s rates are up to date, skipping download", self.parser.name)
            return False
        self.update()
        return True

    # --- queries -----------------------------------------------------------

    def is_available(self, code: str) -> bool:
        table = self._table
        return table is not None and table.is_available(code)

    def get_currencies(self) -> Set[str]:
        table = self._table
        return set(table.currencies) if table is not None else set()

    def convert(self, amount: float, from_code: str, to_code: str) -> float:
        """
        Convert an amount between two currencies.
        
        Example: convert(29.95, "USD", "EUR") converts $29.95 to Euro.
        
        Raises:
            UnknownCurrencyError: If no rates are loaded or a currency is not available
        """
        table = self._table
        if table is None:
            raise UnknownCurrencyError(from_code)
        return table.convert(amount, from_code, to_code)

    def convert_units(self, amount: int, from_code: str, to_code: str) -> int:
        """
        Convert a fixed-point amount expressed in 1/10000 of the currency unit.
        
        Raises:
            UnknownCurrencyError: If no rates are loaded or a currency is not available
        """
        table = self._table
        if table is None:
            raise UnknownCurrencyError(from_code)
        return table.convert_units(amount, from_code, to_code)
