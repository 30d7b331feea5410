"""
basket.py — Ordered collection of products and its reconciliation

================================================================================
USAGE
================================================================================

    uk = Jurisdiction(PercentageTaxRate(20), Currency.GBP)
    basket = Basket(uk)

    basket.product("1", "The Lion King", Money.pence(1000))
    basket.product("2", "Gift card", Money.pence(2500),
                   lambda p: p.set_freebie(True))

    breakdown = basket.reconcile()
    breakdown.totals.grand_total      # 12.00 GBP

================================================================================
INVARIANTS
================================================================================

- Lines keep insertion order; remove() drops the first line with the sku.
- All lines must share one currency for the basket to reconcile.
- totals == sum of the line breakdowns, whatever the order of the lines.
- reconcile() does not mutate anything.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from .config import DEFAULT_POLICY, ReconciliationPolicy
from .exceptions import (
    CurrencyMismatchError,
    EmptyBasketError,
    InvalidOperationError,
    ProductNotFoundError,
)
from .logging_config import get_logger
from .money import Currency, Money
from .product import LineBreakdown, Product
from .tax import Jurisdiction

logger = get_logger("basket")


@dataclass(frozen=True)
class BasketTotals:
    items: int
    gross: Money
    discount: Money
    net: Money
    tax: Money
    delivery: Money
    grand_total: Money


@dataclass(frozen=True)
class BasketBreakdown:
    currency: Currency
    lines: tuple[LineBreakdown, ...]
    totals: BasketTotals


class Basket:
    """
    Ordered basket lines.

    A Jurisdiction is optional; with one, product() builds lines with the
    region's tax rate and checks prices against the region's currency.
    """

    def __init__(
        self,
        jurisdiction: Optional[Jurisdiction] = None,
        policy: Optional[ReconciliationPolicy] = None,
    ):
        self._jurisdiction = jurisdiction
        self._policy = policy or DEFAULT_POLICY
        self._products: list[Product] = []

    @property
    def jurisdiction(self) -> Optional[Jurisdiction]:
        return self._jurisdiction

    @property
    def policy(self) -> ReconciliationPolicy:
        return self._policy

    @property
    def products(self) -> tuple[Product, ...]:
        return tuple(self._products)

    # -------------------------------------------------------------------------
    # Lines
    # -------------------------------------------------------------------------

    def add(self, product: Product) -> Product:
        if not isinstance(product, Product):
            raise TypeError(f"Expected Product, got {type(product).__name__}")
        self._products.append(product)
        return product

    def product(
        self,
        sku: str,
        name: str,
        price: Money,
        action: Optional[Callable[[Product], object]] = None,
    ) -> Product:
        """Build a line with the jurisdiction's rate and add it."""
        if self._jurisdiction is None:
            raise InvalidOperationError(
                "Basket.product() needs a jurisdiction; use add() instead"
            )
        if not isinstance(price, Money):
            raise TypeError(f"price must be Money, not {type(price).__name__}")
        currency = self._jurisdiction.currency()
        if price.currency != currency:
            logger.warning(
                "jurisdiction_currency_mismatch",
                extra={
                    "sku": str(sku),
                    "jurisdiction_currency": currency.code,
                    "price_currency": price.currency.code,
                },
            )
            raise CurrencyMismatchError(currency.code, price.currency.code, "jurisdiction")

        product = Product(sku, name, price, self._jurisdiction.rate())
        if action is not None:
            product.action(action)
        return self.add(product)

    def pick(self, sku: str) -> Product:
        sku = str(sku)
        for product in self._products:
            if product.sku == sku:
                return product
        logger.warning("product_not_found", extra={"sku": sku})
        raise ProductNotFoundError(sku)

    def update(self, sku: str, action: Callable[[Product], object]) -> Product:
        return self.pick(sku).action(action)

    def remove(self, sku: str) -> Product:
        product = self.pick(sku)
        # pick() returned the first match, drop that exact object
        for i, candidate in enumerate(self._products):
            if candidate is product:
                del self._products[i]
                break
        return product

    def is_empty(self) -> bool:
        return not self._products

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(tuple(self._products))

    def __contains__(self, sku: object) -> bool:
        return any(p.sku == str(sku) for p in self._products)

    # -------------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------------

    def reconcile(self) -> BasketBreakdown:
        if not self._products:
            logger.warning("empty_basket")
            raise EmptyBasketError()

        currency = self._products[0].price.currency
        for product in self._products:
            if product.price.currency != currency:
                logger.warning(
                    "basket_currency_mismatch",
                    extra={
                        "basket_currency": currency.code,
                        "sku": product.sku,
                        "line_currency": product.price.currency.code,
                    },
                )
                raise CurrencyMismatchError(
                    currency.code, product.price.currency.code, f"line {product.sku}"
                )

        lines = tuple(p.reconcile(self._policy) for p in self._products)

        zero = Money.zero(currency)
        totals = BasketTotals(
            items=sum(line.quantity for line in lines),
            gross=sum((line.gross for line in lines), zero),
            discount=sum((line.discount for line in lines), zero),
            net=sum((line.net for line in lines), zero),
            tax=sum((line.tax for line in lines), zero),
            delivery=sum((line.delivery for line in lines), zero),
            grand_total=sum((line.line_total for line in lines), zero),
        )
        logger.debug(
            "basket_reconciled",
            extra={
                "lines": len(lines),
                "currency": currency.code,
                "grand_total": str(totals.grand_total),
            },
        )
        return BasketBreakdown(currency=currency, lines=lines, totals=totals)

    def __repr__(self) -> str:
        return f"Basket(lines={len(self._products)})"
