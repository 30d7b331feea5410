"""
basket — Currency-safe basket reconciliation

Turns a list of priced lines (quantity, discounts, tax, delivery, freebie
and taxable flags) into an auditable breakdown, refusing to mix currencies
anywhere along the way.

================================================================================
QUICK START
================================================================================

    from basket import (
        Basket, Currency, Jurisdiction, Money, PercentageDiscount,
        PercentageTaxRate, Product,
    )

    uk = Jurisdiction(PercentageTaxRate(20), Currency.GBP)
    basket = Basket(uk)

    book = basket.product("1", "Domain-Driven Design", Money.pence(1000))
    book.set_discount(PercentageDiscount(20))

    breakdown = basket.reconcile()
    breakdown.lines[0].tax          # 1.60 GBP
    breakdown.totals.grand_total    # 9.60 GBP

Logging is silent until the application calls configure_logging().

================================================================================
"""

from .money import (
    Money,
    Currency,
    RoundingMode,
)
from .exceptions import (
    BasketError,
    CurrencyMismatchError,
    InvalidQuantityError,
    ProductNotFoundError,
    EmptyBasketError,
    InvalidOperationError,
)
from .config import ReconciliationPolicy, TaxBasis, DEFAULT_POLICY
from .tax import TaxRate, PercentageTaxRate, Jurisdiction
from .discounts import Discount, ValueDiscount, PercentageDiscount
from .categories import Category, PhysicalBook
from .product import Product, LineBreakdown
from .basket import Basket, BasketBreakdown, BasketTotals
from .logging_config import configure_logging, get_logger

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Money
    "Money",
    "Currency",
    "RoundingMode",
    # Errors
    "BasketError",
    "CurrencyMismatchError",
    "InvalidQuantityError",
    "ProductNotFoundError",
    "EmptyBasketError",
    "InvalidOperationError",
    # Policy
    "ReconciliationPolicy",
    "TaxBasis",
    "DEFAULT_POLICY",
    # Strategies
    "TaxRate",
    "PercentageTaxRate",
    "Jurisdiction",
    "Discount",
    "ValueDiscount",
    "PercentageDiscount",
    "Category",
    "PhysicalBook",
    # Lines and basket
    "Product",
    "LineBreakdown",
    "Basket",
    "BasketBreakdown",
    "BasketTotals",
    # Logging
    "configure_logging",
    "get_logger",
]
