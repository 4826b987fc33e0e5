# src/ratecache/adapters/network/http.py
"""
HTTP Feed Source - Downloads Feeds with requests

This module implements the network access point used by the converter. It
streams the feed into the cache's temporary tier, honouring the configured
timeout and proxy, and maps every transport failure to NetworkError.
file:// URLs are read from the local filesystem, which allows offline feeds.

Files that USE this module:
- ratecache.application.converter (default FeedSource)
- tests.test_network (unit tests)

Files that this module USES:
- ratecache.config (settings for timeout, proxy and user agent)
- ratecache.domain.errors (NetworkError, FeedNotFoundError, CacheIOError)
"""
import logging
from pathlib import Path
from typing import BinaryIO, Dict, Optional
from urllib.parse import unquote, urlparse

import requests

from ratecache.config import settings
from ratecache.domain.errors import CacheIOError, FeedNotFoundError, NetworkError

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


def _write(sink: BinaryIO, chunk: bytes) -> None:
    try:
        sink.write(chunk)
    except OSError as e:
        raise CacheIOError(f"Cannot write to cache: {e}") from e


class HttpFeedSource:
    def __init__(
        self,
        timeout: Optional[int] = None,
        proxies: Optional[Dict[str, str]] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize the HTTP feed source.
        
        Args:
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            proxies: Optional requests proxy mapping (defaults to settings.proxies)
            user_agent: Optional User-Agent header (defaults to settings.http_user_agent)
        """
        self.timeout = timeout or settings.http_timeout_seconds
        self.proxies = proxies if proxies is not None else settings.proxies
        self.user_agent = user_agent or settings.http_user_agent

    def fetch(self, url: str, sink: BinaryIO) -> int:
        """
        Copy the feed at url into sink.
        
        Returns:
            Number of bytes written
            
        Raises:
            FeedNotFoundError: If the resource does not exist (HTTP 404, missing file)
            NetworkError: If the request fails, times out or returns a non-200 status
            CacheIOError: If the sink cannot be written
        """
        if urlparse(url).scheme == "file":
            return self._fetch_file(url, sink)

        log.debug("Connecting to %s", url)
        try:
            resp = requests.get(
                url,
                timeout=self.timeout,
                proxies=self.proxies,
                headers={"User-Agent": self.user_agent},
                stream=True,
            )
        except requests.exceptions.Timeout:
            log.warning("Feed request to %s timed out after %d seconds", url, self.timeout)
            raise NetworkError(f"Timeout after {self.timeout}s when opening {url}")
        except requests.exceptions.RequestException as e:
            log.warning("Feed request to %s failed (network/connection error): %s", url, e)
            raise NetworkError(f"Request to {url} failed: {e}") from e

        try:
            if resp.status_code == 404:
                raise FeedNotFoundError(f"Http Error 404 when opening {url}")
            if resp.status_code != 200:
                raise NetworkError(f"Http Error {resp.status_code} when opening {url}")

            written = 0
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    _write(sink, chunk)
                    written += len(chunk)
        except requests.exceptions.RequestException as e:
            log.warning("Feed download from %s interrupted: %s", url, e)
            raise NetworkError(f"Download from {url} interrupted: {e}") from e
        finally:
            resp.close()

        log.debug("Downloaded %d bytes from %s", written, url)
        return written

    @staticmethod
    def _fetch_file(url: str, sink: BinaryIO) -> int:
        path = Path(unquote(urlparse(url).path))
        written = 0
        try:
            with path.open("rb") as src:
                # Reading errors are network errors, writing errors are cache errors
                for chunk in iter(lambda: src.read(CHUNK_SIZE), b""):
                    _write(sink, chunk)
                    written += len(chunk)
        except FileNotFoundError:
            raise FeedNotFoundError(f"{path} does not exist") from None
        except OSError as e:
            raise NetworkError(f"Cannot read {path}: {e}") from e
        return written
