# src/ratecache/adapters/feeds/__init__.py
"""
Feed Parsers - Provider Wire Formats

All parsers implement the FeedParser interface and produce a locked RateTable.
"""

from ratecache.adapters.feeds.base import FeedParser
from ratecache.adapters.feeds.ecb import ECBFeedParser
from ratecache.adapters.feeds.yahoo import YahooFeedParser

__all__ = [
    "FeedParser",
    "ECBFeedParser",
    "YahooFeedParser",
]
