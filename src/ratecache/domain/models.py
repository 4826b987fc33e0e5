# src/ratecache/domain/models.py
"""
Domain Models - Rate Tables and Converter State

This module contains the core value types of the converter:
- RateTable: an immutable snapshot of rates against one reference currency
- RateTableBuilder: accumulates rates while a feed is parsed, then locks
- ConverterState: where the converter stands after its last update

Files that USE this module:
- ratecache.adapters.feeds.* (parsers fill a RateTableBuilder)
- ratecache.application.converter (holds the current RateTable)
- tests.* (tests build tables directly)

Files that this module USES:
- ratecache.domain.errors (UnknownCurrencyError, TableLockedError)
- ratecache.shared.validators (currency code format)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import dataclass, field  # Decorator for creating data classes
from decimal import Decimal, InvalidOperation, ROUND_DOWN  # Fixed-point arithmetic
from enum import Enum
from types import MappingProxyType  # Read-only view over the rates dict
from typing import Dict, FrozenSet, Mapping, Optional

from ratecache.domain.errors import TableLockedError, UnknownCurrencyError
from ratecache.shared.validators import validate_currency_code

# Fixed-point amounts are expressed in 1/10000 of the currency unit
UNITS_PER_CURRENCY = 10000


def to_units(value: str) -> int:
    """
    Convert a numeric string to 1/10000 currency units, truncating extra digits.
    
    Example: "123.456789" -> 1234567
    
    Args:
        value: Numeric string expression
        
    Returns:
        Integer amount in 1/10000 of the currency unit
        
    Raises:
        ValueError: If value is not numeric
    """
    try:
        scaled = Decimal(str(value).strip()) * UNITS_PER_CURRENCY
    except InvalidOperation as e:
        raise ValueError(f"Not a numeric value: {value!r}") from e
    if not scaled.is_finite():
        raise ValueError(f"Not a finite value: {value!r}")
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


class ConverterState(Enum):
    """Outcome of the last converter update."""
    UNINITIALIZED = "uninitialized"  # no table, no timestamps
    SYNCHRONIZED = "synchronized"  # table adopted from a fresh fetch
    STALE = "stale"  # table recovered from the persisted cache
    UNAVAILABLE = "unavailable"  # fetch and fallback both failed


@dataclass(frozen=True)
class RateTable:
    """
    Exchange rates relative to one implicit reference currency.
    
    Attributes:
        rates: Currency code -> positive rate (read-only mapping)
        valid_at: Feed-declared timestamp, ms since epoch (UTC)
        reference: Reference currency code, when the feed names one
    """
    rates: Mapping[str, float]
    valid_at: int
    reference: Optional[str] = None
    _codes: FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Copy so the caller's dict cannot leak mutations into the table
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))
        object.__setattr__(self, "_codes", frozenset(self.rates))

    @property
    def currencies(self) -> FrozenSet[str]:
        return self._codes

    def is_available(self, code: str) -> bool:
        return code in self._codes

    def rate(self, code: str) -> float:
        """
        Get the rate of a currency against the reference currency.
        
        Raises:
            UnknownCurrencyError: If the currency is not in the table
        """
        try:
            return self.rates[code]
        except KeyError:
            raise UnknownCurrencyError(code) from None

    def _check(self, from_code: str, to_code: str) -> bool:
        """Validate both codes; returns True if an actual conversion is needed."""
        if from_code not in self._codes:
            raise UnknownCurrencyError(from_code)
        if to_code not in self._codes:
            raise UnknownCurrencyError(to_code)
        return from_code != to_code

    def convert(self, amount: float, from_code: str, to_code: str) -> float:
        """
        Convert an amount from one currency to another.
        
        Example: convert(29.95, "USD", "EUR") converts $29.95 to Euro.
        Converting a currency to itself returns amount unchanged.
        
        Raises:
            UnknownCurrencyError: If either currency is not in the table
        """
        if not self._check(from_code, to_code):
            return amount
        return amount * self.rates[to_code] / self.rates[from_code]

    def convert_units(self, amount: int, from_code: str, to_code: str) -> int:
        """
        Convert a fixed-point amount (1/10000 units, see to_units).
        
        The result is truncated towards zero, which keeps repeated conversions
        free from floating point drift.
        
        Raises:
            UnknownCurrencyError: If either currency is not in the table
        """
        if not self._check(from_code, to_code):
            return amount
        result = Decimal(amount) * Decimal(repr(self.rates[to_code])) / Decimal(repr(self.rates[from_code]))
        return int(result.to_integral_value(rounding=ROUND_DOWN))


class RateTableBuilder:
    """
    Mutable accumulator used while a feed is parsed.
    
    finish() locks the builder and returns the immutable RateTable; any
    later mutation raises TableLockedError, so a half-parsed table can
    never be handed out.
    """

    def __init__(self):
        self._rates: Dict[str, float] = {}
        self._valid_at: Optional[int] = None
        self._reference: Optional[str] = None
        self._locked = False

    @property
    def locked(self) -> bool:
        return self._locked

    def _ensure_open(self) -> None:
        if self._locked:
            raise TableLockedError("Rate table is locked")

    def set_rate(self, code: str, rate: float) -> None:
        """
        Add or replace the rate of a currency.
        
        Raises:
            TableLockedError: If the builder was already finished
            ValueError: If the code or the rate is invalid
        """
        self._ensure_open()
        if not validate_currency_code(code):
            raise ValueError(f"Invalid currency code: {code!r}")
        rate = float(rate)
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Rate of {code} must be positive, got {rate}")
        self._rates[code] = rate

    def has_rate(self, code: str) -> bool:
        return code in self._rates

    def get_rate(self, code: str) -> Optional[float]:
        return self._rates.get(code)

    def set_valid_at(self, timestamp_ms: int) -> None:
        self._ensure_open()
        self._valid_at = int(timestamp_ms)

    def set_reference(self, code: str) -> None:
        self._ensure_open()
        self._reference = code

    def finish(self) -> RateTable:
        """
        Lock the builder and build the table.
        
        Raises:
            TableLockedError: If finish() was already called
            ValueError: If no rate or no timestamp was provided
        """
        self._ensure_open()
        if not self._rates:
            raise ValueError("Rate table has no rates")
        if self._valid_at is None:
            raise ValueError("Rate table has no timestamp")
        self._locked = True
        return RateTable(rates=self._rates, valid_at=self._valid_at, reference=self._reference)
