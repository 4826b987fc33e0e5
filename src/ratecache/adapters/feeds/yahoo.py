# src/ratecache/adapters/feeds/yahoo.py
"""
Yahoo Finance Currency Quotes Feed

The feed is a list of per-pair quotes, each carrying its own timestamp:

    <resource classname="Quote">
      <field name="name">USD/EUR</field>
      <field name="price">0.730903</field>
      <field name="ts">1387557000</field>
      ...

All pairs are normalized onto the base currency of the first quote; the
latest quote timestamp becomes the table timestamp.

Files that USE this module:
- ratecache.application.converter (through the FeedParser interface)
- tests.test_feeds (unit tests)

Files that this module USES:
- ratecache.adapters.feeds.base (FeedParser interface)
- ratecache.config (settings.yahoo_url)
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

from lxml import etree

from ratecache.adapters.feeds.base import FeedParser
from ratecache.config import settings
from ratecache.domain.models import RateTableBuilder

log = logging.getLogger(__name__)

_PAIR_RE = re.compile(r"^([A-Z]{3})/([A-Z]{3})$")

Quote = Tuple[str, str, float]

# Quoted by Yahoo but used by no country: special drawing rights, precious
# metals, testing codes and currencies replaced by the euro or redenominated
NON_COUNTRY_CODES = frozenset({
    "XDR", "XAU", "XAG", "XPT", "XPD", "XBA", "XBB", "XBC", "XBD",
    "XTS", "XXX", "XSU", "XUA",
    "ATS", "BEF", "CYP", "DEM", "EEK", "ESP", "FIM", "FRF", "GRD", "IEP",
    "ITL", "LUF", "MTL", "NLG", "PTE", "SIT", "SKK",
    "AFA", "CSD", "GHC", "MGF", "MZM", "ROL", "SDD", "TRL", "VEB", "YUM", "ZWD",
})


def _split_pair(name: Optional[str]) -> Optional[Tuple[str, str]]:
    """'USD/EUR' -> ('USD', 'EUR'); None for commodities and other symbols."""
    if not name:
        return None
    match = _PAIR_RE.match(name.strip())
    return (match.group(1), match.group(2)) if match else None


def _fields(resource: etree._Element) -> Dict[str, str]:
    return {
        f.get("name"): (f.text or "").strip()
        for f in resource.iter("{*}field")
        if f.get("name")
    }


class YahooFeedParser(FeedParser):
    name = "Yahoo"

    @property
    def default_url(self) -> str:
        return settings.yahoo_url

    def expires_after(self, valid_at: int) -> int:
        # Quotes are updated continuously
        return 1

    def _read_quotes(self, root: etree._Element) -> Tuple[List[Quote], int]:
        quotes: List[Quote] = []
        latest = 0
        for resource in root.iter("{*}resource"):
            fields = _fields(resource)
            pair = _split_pair(fields.get("name"))
            if pair is None:
                continue
            base, quote = pair
            if base in NON_COUNTRY_CODES or quote in NON_COUNTRY_CODES:
                log.debug("Skipping %s/%s: not a country currency", base, quote)
                continue

            price_raw = fields.get("price")
            if not price_raw:
                raise ValueError(f"Missing price for {base}/{quote}")
            try:
                price = float(price_raw)
            except ValueError:
                raise ValueError(f"Cannot parse price for {base}/{quote}: {price_raw!r}") from None
            if price < 0:
                raise ValueError(f"Negative price for {base}/{quote}: {price_raw!r}")
            if price == 0:
                # Yahoo lists discontinued currencies with a zero price
                log.debug("Skipping %s/%s: zero price", base, quote)
                continue

            ts_raw = fields.get("ts")
            if not ts_raw:
                raise ValueError(f"Missing timestamp for {base}/{quote}")
            try:
                ts = int(ts_raw)
            except ValueError:
                raise ValueError(f"Cannot parse timestamp for {base}/{quote}: {ts_raw!r}") from None
            if ts <= 0:
                raise ValueError(f"Invalid timestamp for {base}/{quote}: {ts_raw!r}")

            quotes.append((base, quote, price))
            latest = max(latest, ts)
        return quotes, latest

    def _fill(self, root: etree._Element, builder: RateTableBuilder) -> None:
        quotes, latest = self._read_quotes(root)
        if not quotes:
            raise ValueError("No currency quote")

        reference = quotes[0][0]
        builder.set_rate(reference, 1.0)
        builder.set_reference(reference)

        # Quotes on another base are resolved through rates already known
        pending = quotes
        while pending:
            unresolved = []
            for base, quote, price in pending:
                if builder.has_rate(base):
                    if not builder.has_rate(quote):
                        builder.set_rate(quote, builder.get_rate(base) * price)
                elif builder.has_rate(quote):
                    builder.set_rate(base, builder.get_rate(quote) / price)
                else:
                    unresolved.append((base, quote, price))
            if len(unresolved) == len(pending):
                log.debug("Dropping %d quotes not connected to %s", len(unresolved), reference)
                break
            pending = unresolved

        builder.set_valid_at(latest * 1000)
