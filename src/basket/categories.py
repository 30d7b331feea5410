"""
categories.py — Category strategies

A Category is a one-shot mutator: attaching it to a product runs
`apply(product)` right there, and that is the end of it. Later changes to
the product do not re-run the category.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .product import Product


class Category(ABC):

    @abstractmethod
    def apply(self, product: Product) -> None:
        """Mutate `product` through its public setters."""


class PhysicalBook(Category):
    """Printed books are zero-rated: the line is not taxable."""

    def apply(self, product: Product) -> None:
        product.set_taxable(False)

    def __repr__(self) -> str:
        return "PhysicalBook()"
