# src/ratecache/adapters/feeds/ecb.py
"""
European Central Bank (ECB) Reference Rates Feed

The ECB publishes daily reference rates for about 30 currencies against EUR,
around 14:15 CET, with a precision of 1/10000 of the currency unit:

    <gesmes:Envelope ...>
      <Cube>
        <Cube time="2013-12-20">
          <Cube currency="USD" rate="1.3655"/>
          ...

Files that USE this module:
- ratecache.application.converter (through the FeedParser interface)
- tests.test_feeds (unit tests)

Files that this module USES:
- ratecache.adapters.feeds.base (FeedParser interface)
- ratecache.config (settings.ecb_url)
"""
from datetime import datetime, timezone

from lxml import etree

from ratecache.adapters.feeds.base import FeedParser, parse_rate
from ratecache.config import settings
from ratecache.domain.models import RateTableBuilder

REFERENCE_CURRENCY = "EUR"
# Rates are considered published at 13:15 GMT on the declared day
PUBLICATION_HOUR = 13
PUBLICATION_MINUTE = 15

# datetime.weekday() values
FRIDAY = 4
SATURDAY = 5


def parse_reference_date(value: str) -> int:
    """
    Convert an ECB "YYYY-MM-DD" date to the publication time in ms since epoch.
    
    Raises:
        ValueError: If the date cannot be parsed
    """
    try:
        day = datetime.strptime(value.strip(), "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"Cannot parse reference date: {value!r}") from None
    published = day.replace(hour=PUBLICATION_HOUR, minute=PUBLICATION_MINUTE, tzinfo=timezone.utc)
    return int(published.timestamp()) * 1000


class ECBFeedParser(FeedParser):
    name = "ECB"

    @property
    def default_url(self) -> str:
        return settings.ecb_url

    def expires_after(self, valid_at: int) -> int:
        """No rates on week-ends: Friday rates last until Monday."""
        weekday = datetime.fromtimestamp(valid_at / 1000, tz=timezone.utc).weekday()
        if weekday == FRIDAY:
            return 72
        if weekday == SATURDAY:
            return 48
        return super().expires_after(valid_at)

    def _fill(self, root: etree._Element, builder: RateTableBuilder) -> None:
        found_date = False
        count = 0
        for cube in root.iter("{*}Cube"):
            date = cube.get("time")
            if date is not None:
                builder.set_valid_at(parse_reference_date(date))
                found_date = True
            currency = cube.get("currency")
            rate = cube.get("rate")
            if currency is None and rate is None:
                continue
            if currency is None or rate is None:
                raise ValueError(f"Incomplete rate entry: currency={currency!r}, rate={rate!r}")
            builder.set_rate(currency.strip(), parse_rate(rate, currency))
            count += 1

        if not found_date:
            raise ValueError("No reference date (Cube time attribute)")
        if count == 0:
            raise ValueError("No exchange rate")
        if not builder.has_rate(REFERENCE_CURRENCY):
            builder.set_rate(REFERENCE_CURRENCY, 1.0)
        builder.set_reference(REFERENCE_CURRENCY)
