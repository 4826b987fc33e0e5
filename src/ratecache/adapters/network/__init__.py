# src/ratecache/adapters/network/__init__.py
"""
Network Adapters - Feed Downloaders
"""

from ratecache.adapters.network.base import FeedSource
from ratecache.adapters.network.http import HttpFeedSource

__all__ = [
    "FeedSource",
    "HttpFeedSource",
]
