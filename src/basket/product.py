"""
product.py — Basket line item

================================================================================
STATE
================================================================================

Identity, fixed at construction:
    sku, name, price (Money), rate (TaxRate)

Mutable state, defaults in brackets:
    quantity [1]        always >= 1
    freebie [False]     line value excluded, delivery still charged
    taxable [True]
    delivery [0]        same currency as price
    discount [None]
    coupons, tags [()]  append-only, kept in insertion order
    category [None]

Every setter either applies fully or raises and leaves the product as it
was. Setters return the product so calls chain:

    product.set_quantity(3).add_tag("gift").set_discount(PercentageDiscount(10))

Accessors are read-only properties; sequences come back as tuples.

================================================================================
RECONCILIATION
================================================================================

    gross        = freebie ? 0 : price * quantity
    discount     = clamp(discount.apply(gross), 0, gross)
    net          = max(0, gross - discount)
    taxable_base = taxable ? net : 0            (gross with TaxBasis.GROSS)
    tax          = round(taxable_base * rate)   (HALF_UP by default)
    line_total   = net + tax + delivery

reconcile() reads state only and can be called any number of times.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional

from .categories import Category
from .config import DEFAULT_POLICY, ReconciliationPolicy, TaxBasis
from .discounts import Discount
from .exceptions import CurrencyMismatchError, InvalidQuantityError
from .logging_config import get_logger
from .money import Currency, Money
from .tax import TaxRate

logger = get_logger("product")


@dataclass(frozen=True)
class LineBreakdown:
    """Reconciled amounts of a single line. All Money share one currency."""
    sku: str
    quantity: int
    gross: Money
    discount: Money
    net: Money
    tax: Money
    delivery: Money
    line_total: Money


class Product:
    """A basket line: immutable identity plus mutable pricing state."""

    def __init__(self, sku: str, name: str, price: Money, rate: TaxRate):
        if not isinstance(price, Money):
            raise TypeError(f"price must be Money, not {type(price).__name__}")
        if not (callable(getattr(rate, "float", None))
                and callable(getattr(rate, "percentage", None))):
            raise TypeError(f"rate must be a TaxRate, not {type(rate).__name__}")
        if sku is None or str(sku) == "":
            raise ValueError("sku cannot be empty")
        self._sku = str(sku)
        self._name = name
        self._price = price
        self._rate = rate

        self._quantity = 1
        self._freebie = False
        self._taxable = True
        self._delivery = Money.zero(price.currency)
        self._discount: Optional[Discount] = None
        self._coupons: list[str] = []
        self._tags: list[str] = []
        self._category: Optional[Category] = None

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Money:
        return self._price

    @property
    def rate(self) -> TaxRate:
        return self._rate

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def freebie(self) -> bool:
        return self._freebie

    @property
    def taxable(self) -> bool:
        return self._taxable

    @property
    def delivery(self) -> Money:
        return self._delivery

    @property
    def discount(self) -> Optional[Discount]:
        return self._discount

    @property
    def coupons(self) -> tuple[str, ...]:
        return tuple(self._coupons)

    @property
    def tags(self) -> tuple[str, ...]:
        return tuple(self._tags)

    @property
    def category(self) -> Optional[Category]:
        return self._category

    # -------------------------------------------------------------------------
    # Quantity
    # -------------------------------------------------------------------------

    def set_quantity(self, quantity: int) -> Product:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            logger.warning(
                "invalid_quantity", extra={"sku": self._sku, "quantity": repr(quantity)}
            )
            raise InvalidQuantityError(quantity)
        self._quantity = quantity
        return self

    def increment(self) -> Product:
        self._quantity += 1
        return self

    def decrement(self) -> Product:
        # Floors at 1; removing the line is the basket's job
        if self._quantity > 1:
            self._quantity -= 1
        return self

    # -------------------------------------------------------------------------
    # Flags
    # -------------------------------------------------------------------------

    def set_freebie(self, freebie: bool) -> Product:
        self._freebie = bool(freebie)
        return self

    def set_taxable(self, taxable: bool) -> Product:
        self._taxable = bool(taxable)
        return self

    # -------------------------------------------------------------------------
    # Money-bearing state
    # -------------------------------------------------------------------------

    def set_delivery(self, delivery: Money) -> Product:
        if not isinstance(delivery, Money):
            raise TypeError(f"delivery must be Money, not {type(delivery).__name__}")
        if delivery.is_negative():
            raise ValueError(f"Delivery cannot be negative: {delivery}")
        if not delivery.is_same_currency(self._price):
            logger.warning(
                "delivery_currency_mismatch",
                extra={
                    "sku": self._sku,
                    "price_currency": self._price.currency.code,
                    "delivery_currency": delivery.currency.code,
                },
            )
            raise CurrencyMismatchError(
                self._price.currency.code, delivery.currency.code, "delivery"
            )
        self._delivery = delivery
        return self

    def set_discount(self, discount: Discount) -> Product:
        """
        Attach a discount, replacing any previous one.

        Discounts pinned to a currency (ValueDiscount) are checked here;
        others are checked when the line is reconciled.
        """
        pinned = getattr(discount, "currency", None)
        if pinned is not None and not isinstance(pinned, Currency):
            raise TypeError(
                f"Discount currency must be Currency or None, not {type(pinned).__name__}"
            )
        if pinned is not None and pinned != self._price.currency:
            logger.warning(
                "discount_currency_mismatch",
                extra={
                    "sku": self._sku,
                    "price_currency": self._price.currency.code,
                    "discount_currency": pinned.code,
                },
            )
            raise CurrencyMismatchError(
                self._price.currency.code, pinned.code, "discount"
            )
        self._discount = discount
        return self

    def remove_discount(self) -> Product:
        self._discount = None
        return self

    # -------------------------------------------------------------------------
    # Labels
    # -------------------------------------------------------------------------

    def add_coupon(self, coupon: str) -> Product:
        self._coupons.append(coupon)
        return self

    def add_tag(self, tag: str) -> Product:
        self._tags.append(tag)
        return self

    def set_category(self, category: Category) -> Product:
        """Run the category against this product now, then remember it."""
        category.apply(self)
        self._category = category
        return self

    def action(self, fn: Callable[[Product], object]) -> Product:
        """Apply several mutations in one call. `fn` runs immediately."""
        fn(self)
        return self

    # -------------------------------------------------------------------------
    # Reconciliation
    # -------------------------------------------------------------------------

    def reconcile(self, policy: Optional[ReconciliationPolicy] = None) -> LineBreakdown:
        policy = policy or DEFAULT_POLICY
        currency = self._price.currency
        zero = Money.zero(currency)

        gross = zero if self._freebie else self._price * self._quantity

        discount = zero
        if self._discount is not None:
            raw = self._discount.apply(gross)
            if not isinstance(raw, Money):
                raise TypeError(
                    f"{type(self._discount).__name__}.apply() must return Money, "
                    f"not {type(raw).__name__}"
                )
            if raw.currency != currency:
                logger.warning(
                    "discount_currency_mismatch",
                    extra={"sku": self._sku, "discount_currency": raw.currency.code},
                )
                raise CurrencyMismatchError(currency.code, raw.currency.code, "discount")
            discount = max(zero, min(raw, gross))

        net = max(zero, gross - discount)

        if not self._taxable:
            taxable_base = zero
        elif policy.tax_basis is TaxBasis.GROSS:
            taxable_base = gross
        else:
            taxable_base = net
        tax = taxable_base.apply_rate(self._rate.float(), policy.rounding)

        delivery = self._delivery
        if policy.delivery_per_unit:
            delivery = delivery * self._quantity

        line = LineBreakdown(
            sku=self._sku,
            quantity=self._quantity,
            gross=gross,
            discount=discount,
            net=net,
            tax=tax,
            delivery=delivery,
            line_total=net + tax + delivery,
        )
        logger.debug(
            "line_reconciled",
            extra={"sku": self._sku, "line_total": str(line.line_total)},
        )
        return line

    def __repr__(self) -> str:
        return (
            f"Product(sku={self._sku!r}, price={self._price}, "
            f"quantity={self._quantity})"
        )
