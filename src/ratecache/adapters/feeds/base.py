# src/ratecache/adapters/feeds/base.py
"""
Base Feed Parser Interface

This module defines the abstract base class for all feed parsers. A parser
turns the raw bytes of one provider's feed into a locked RateTable, or raises
FeedParseError; it never returns a partially filled table.

Files that USE this module:
- ratecache.adapters.feeds.ecb (ECBFeedParser implements FeedParser)
- ratecache.adapters.feeds.yahoo (YahooFeedParser implements FeedParser)
- ratecache.application.converter (CurrencyConverter is parameterized by a FeedParser)

Files that this module USES:
- ratecache.domain.models (RateTable, RateTableBuilder)
- ratecache.domain.errors (FeedParseError, CacheIOError)
- ratecache.config (settings.expiry_tolerance_hours)
"""
import logging
from abc import ABC, abstractmethod
from typing import BinaryIO

from lxml import etree

from ratecache.config import settings
from ratecache.domain.errors import CacheIOError, FeedParseError
from ratecache.domain.models import RateTable, RateTableBuilder

log = logging.getLogger(__name__)


def _xml_parser() -> etree.XMLParser:
    # Feeds are untrusted: no DTD entities, no network lookups
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


class FeedParser(ABC):
    name: str = "feed"

    @property
    @abstractmethod
    def default_url(self) -> str:
        """URL of the provider's feed."""
        raise NotImplementedError

    def expires_after(self, valid_at: int) -> int:
        """
        Number of hours after which rates dated valid_at (ms since epoch) are expired.
        
        Default for feeds published once a day: 24 hours plus a tolerance.
        """
        return 24 + settings.expiry_tolerance_hours

    def parse(self, source: BinaryIO) -> RateTable:
        """
        Parse a feed into a locked rate table.
        
        Args:
            source: Binary stream positioned at the start of the feed
            
        Returns:
            Immutable RateTable
            
        Raises:
            FeedParseError: If the feed is not well-formed or misses mandatory data
            CacheIOError: If the stream cannot be read
        """
        root = self._load_document(source)
        builder = RateTableBuilder()
        try:
            self._fill(root, builder)
            return builder.finish()
        except ValueError as e:
            log.debug("%s feed rejected: %s", self.name, e)
            raise FeedParseError(f"Invalid {self.name} feed: {e}") from e

    def _load_document(self, source: BinaryIO) -> etree._Element:
        try:
            data = source.read()
        except OSError as e:
            raise CacheIOError(f"Cannot read {self.name} feed: {e}") from e
        if not data:
            raise FeedParseError(f"Empty {self.name} feed")
        try:
            return etree.fromstring(data, parser=_xml_parser())
        except (etree.XMLSyntaxError, ValueError) as e:
            raise FeedParseError(f"Malformed {self.name} feed: {e}") from e

    @abstractmethod
    def _fill(self, root: etree._Element, builder: RateTableBuilder) -> None:
        """
        Copy the rates and the timestamp of the document into builder.
        
        Raises:
            ValueError: If mandatory data is missing or invalid
        """
        raise NotImplementedError


def parse_rate(value: str, what: str) -> float:
    """Parse a positive decimal rate; raises ValueError with context."""
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Cannot parse exchange rate for {what}: {value!r}") from None
    if rate <= 0:
        raise ValueError(f"Exchange rate for {what} must be positive, got {value!r}")
    return rate
