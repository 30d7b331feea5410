"""
tax.py — Tax rates and jurisdictions

A TaxRate is a stateless strategy: it only answers "what multiplier?".
Concrete country tables are the caller's business; PercentageTaxRate covers
the usual flat-percentage case, and anything with the same two methods can
be handed to a Product.

A Jurisdiction pairs a rate with a currency so a region's products and
baskets can be built consistently. Reconciliation never looks at it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .money import Currency, Money


class TaxRate(ABC):
    """Capability interface for tax rates."""

    @abstractmethod
    def float(self) -> float:
        """Multiplier, e.g. 0.20 for 20%."""

    @abstractmethod
    def percentage(self) -> int:
        """Same rate as an integer percent, e.g. 20."""


class PercentageTaxRate(TaxRate):
    """Flat rate expressed as an integer percent."""

    def __init__(self, percent: int):
        if isinstance(percent, bool) or not isinstance(percent, int):
            raise TypeError(f"percent must be int, not {type(percent).__name__}")
        if percent < 0:
            raise ValueError(f"Tax percent cannot be negative: {percent}")
        self._percent = percent

    def float(self) -> float:
        return self._percent / 100

    def percentage(self) -> int:
        return self._percent

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PercentageTaxRate):
            return self._percent == other._percent
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("PercentageTaxRate", self._percent))

    def __repr__(self) -> str:
        return f"PercentageTaxRate({self._percent}%)"


@dataclass(frozen=True)
class Jurisdiction:
    """
    Currency + tax rate for a region.

    USAGE:
        uk = Jurisdiction(PercentageTaxRate(20), Currency.GBP)
        basket = Basket(uk)
    """
    tax_rate: TaxRate
    default_currency: Currency

    def rate(self) -> TaxRate:
        return self.tax_rate

    def currency(self) -> Currency:
        return self.default_currency

    def zero(self) -> Money:
        return Money.zero(self.default_currency)

    def money(self, minor_units: int) -> Money:
        """Money in this jurisdiction's currency, from minor units."""
        return Money.of_minor(minor_units, self.default_currency)
