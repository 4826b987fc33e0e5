# src/ratecache/shared/validators.py
"""
Input Validation Utilities - Configuration and Currency Code Validation

This module validates feed URLs, proxy URLs and currency codes so that
misconfiguration is caught when settings are loaded rather than on the
first network round-trip.

Files that USE this module:
- ratecache.config.settings (uses validation functions in Settings field validators)
- ratecache.domain.models (validate_currency_code when building rate tables)

Files that this module USES:
- None (pure utility functions)
"""
import re
from urllib.parse import urlparse

FEED_SCHEMES = ("http", "https", "file")
PROXY_SCHEMES = ("http", "https", "socks5", "socks5h")


def validate_feed_url(url: str) -> bool:
    """
    Validate a feed resource locator.
    
    Args:
        url: URL to validate
        
    Returns:
        True if the scheme is supported and a location is present, False otherwise
    """
    if not url:
        return False
    
    parsed = urlparse(url)
    if parsed.scheme not in FEED_SCHEMES:
        return False
    # file:///path has an empty netloc but a path
    if parsed.scheme == "file":
        return bool(parsed.path)
    return bool(parsed.netloc)


def validate_proxy_url(proxy: str) -> bool:
    """
    Validate proxy URL format (e.g. http://proxy.local:3128).
    
    Args:
        proxy: Proxy URL to validate
        
    Returns:
        True if valid, False otherwise
    """
    if not proxy:
        return False
    
    parsed = urlparse(proxy)
    return parsed.scheme in PROXY_SCHEMES and bool(parsed.hostname)


def validate_currency_code(code: str) -> bool:
    """Three upper-case letters, ISO 4217 style."""
    return bool(code) and bool(re.match(r'^[A-Z]{3}$', code))
