"""
exceptions.py — Typed error taxonomy for basket reconciliation

================================================================================
HIERARCHY
================================================================================

    BasketError (base)
    |
    +-- CurrencyMismatchError   two Money values with different currencies
    +-- InvalidQuantityError    quantity set below 1
    +-- ProductNotFoundError    lookup/removal of an unknown sku
    +-- EmptyBasketError        reconciliation of a basket with no lines
    +-- InvalidOperationError   arithmetic bound violated, unsupported call

Every class carries a `code` (machine-readable) and structured attributes,
so callers catch by type and never parse messages.

All of them are contract violations: nothing here is transient, nothing is
retried. The caller fixes its inputs.

================================================================================
"""

from __future__ import annotations


class BasketError(Exception):
    """Base class. Subclasses override `code`."""

    code: str = "BASKET_ERROR"


class CurrencyMismatchError(BasketError, TypeError):
    """Two Money values with different currencies were combined."""

    code: str = "CURRENCY_MISMATCH"

    def __init__(self, currency1: str, currency2: str, context: str = ""):
        self.currency1 = currency1
        self.currency2 = currency2
        self.context = context
        message = f"Currency mismatch: {currency1} vs {currency2}"
        if context:
            message = f"{message} ({context})"
        super().__init__(message)


class InvalidQuantityError(BasketError, ValueError):
    """Quantity must be an int >= 1."""

    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity: object):
        self.quantity = quantity
        super().__init__(f"Quantity must be an integer >= 1, got: {quantity!r}")


class ProductNotFoundError(BasketError, LookupError):
    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, sku: str):
        self.sku = sku
        super().__init__(f"No product with sku: {sku}")


class EmptyBasketError(BasketError):
    code: str = "EMPTY_BASKET"

    def __init__(self) -> None:
        super().__init__("Cannot reconcile an empty basket")


class InvalidOperationError(BasketError):
    """An arithmetic invariant was violated (e.g. amount out of bounds)."""

    code: str = "INVALID_OPERATION"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)
