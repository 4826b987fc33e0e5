# src/ratecache/__init__.py
"""
RateCache - Remote Reference-Rate Cache and Currency Converter

Fetches exchange-rate feeds (ECB, Yahoo) over HTTP, validates them, commits
them into a two-tier cache and converts amounts between currency codes,
falling back to the last committed feed when the network or the feed fails.
"""

__version__ = "1.0.0"
