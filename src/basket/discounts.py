"""
discounts.py — Discount strategies

A Discount turns a line's gross into the amount to take off it. The
Product is the one that clamps the result into [0, gross]; a discount may
be misconfigured (percent > 100) without ever pushing a line negative.

Built-in variants:

    ValueDiscount(Money.pence(500))   # 5.00 off, never more than the line
    PercentageDiscount(20)            # 20% off, rounded HALF_UP
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from .exceptions import CurrencyMismatchError
from .money import Currency, Money, RoundingMode


class Discount(ABC):
    """Capability interface for discounts."""

    @abstractmethod
    def apply(self, gross: Money) -> Money:
        """Amount to subtract from `gross`."""

    @abstractmethod
    def rate(self) -> object:
        """Value describing the discount (amount, percent, ...)."""

    @property
    def currency(self) -> Optional[Currency]:
        """Currency the discount is pinned to, None if it works in any."""
        return None


class ValueDiscount(Discount):
    """Fixed amount off, capped at the line gross."""

    def __init__(self, amount: Money):
        if not isinstance(amount, Money):
            raise TypeError(f"amount must be Money, not {type(amount).__name__}")
        if amount.is_negative():
            raise ValueError(f"Discount amount cannot be negative: {amount}")
        self._amount = amount

    def apply(self, gross: Money) -> Money:
        if not self._amount.is_same_currency(gross):
            raise CurrencyMismatchError(
                self._amount.currency.code, gross.currency.code, "value discount"
            )
        return min(self._amount, gross)

    def rate(self) -> Money:
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._amount.currency

    def __repr__(self) -> str:
        return f"ValueDiscount({self._amount})"


class PercentageDiscount(Discount):
    """Percent of the line gross. Out-of-range percents are left to the Product."""

    def __init__(self, percent: int, rounding: RoundingMode = RoundingMode.HALF_UP):
        if isinstance(percent, bool) or not isinstance(percent, int):
            raise TypeError(f"percent must be int, not {type(percent).__name__}")
        self._percent = percent
        self._rounding = rounding

    def apply(self, gross: Money) -> Money:
        return gross.apply_percentage(self._percent, self._rounding)

    def rate(self) -> int:
        return self._percent

    def __repr__(self) -> str:
        return f"PercentageDiscount({self._percent}%)"
