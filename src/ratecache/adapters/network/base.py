# src/ratecache/adapters/network/base.py
"""
Feed Source Interface

A feed source copies the bytes of a remote feed into a writable sink. It is
the only place where the network is accessed.

Files that USE this module:
- ratecache.adapters.network.http (HttpFeedSource implements FeedSource)
- ratecache.application.converter (CurrencyConverter downloads through a FeedSource)

Files that this module USES:
- None (pure interface definition)
"""
from typing import BinaryIO, Protocol


class FeedSource(Protocol):
    """Protocol for feed downloaders."""
    def fetch(self, url: str, sink: BinaryIO) -> int:  # returns number of bytes copied
        ...
