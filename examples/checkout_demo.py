#!/usr/bin/env python3
"""
checkout_demo.py — Reconciling a UK basket end to end

Run from the repository root after `pip install -e .`:

    python examples/checkout_demo.py
"""

import logging
import sys

from basket import (
    Basket,
    Currency,
    CurrencyMismatchError,
    InvalidQuantityError,
    Jurisdiction,
    Money,
    PercentageDiscount,
    PercentageTaxRate,
    PhysicalBook,
    Product,
    ReconciliationPolicy,
    TaxBasis,
    ValueDiscount,
    configure_logging,
)


UK = Jurisdiction(PercentageTaxRate(20), Currency.GBP)


def build_basket(policy=None):
    basket = Basket(UK, policy)

    basket.product("1", "The Lion King (DVD)", Money.pence(1000))

    basket.product(
        "2", "Domain-Driven Design", Money.pence(4500),
        lambda p: p.set_category(PhysicalBook()).set_discount(PercentageDiscount(10)),
    )

    basket.product(
        "3", "Headphones", Money.pence(2999),
        lambda p: (
            p.set_quantity(2)
            .set_discount(ValueDiscount(Money.pence(500)))
            .set_delivery(Money.pence(399))
            .add_coupon("AUDIO5")
        ),
    )

    basket.product(
        "4", "Tote bag", Money.pence(800),
        lambda p: p.set_freebie(True).add_tag("promo"),
    )

    return basket


def print_breakdown(title, breakdown):
    print("=" * 72)
    print(title)
    print("=" * 72)
    print(f"{'sku':<5}{'qty':>4}{'gross':>12}{'discount':>12}{'net':>12}{'tax':>12}{'total':>14}")
    for line in breakdown.lines:
        print(
            f"{line.sku:<5}{line.quantity:>4}{str(line.gross):>12}"
            f"{str(line.discount):>12}{str(line.net):>12}{str(line.tax):>12}"
            f"{str(line.line_total):>14}"
        )
    totals = breakdown.totals
    print("-" * 72)
    print(f"items:       {totals.items}")
    print(f"gross:       {totals.gross}")
    print(f"discount:    {totals.discount}")
    print(f"net:         {totals.net}")
    print(f"tax:         {totals.tax}")
    print(f"delivery:    {totals.delivery}")
    print(f"grand total: {totals.grand_total}")
    print()


def demonstrate_guards():
    print("=" * 72)
    print("GUARDS")
    print("=" * 72)

    product = Product("5", "Import", Money.pence(1000), UK.rate())

    print(">>> product.set_delivery(Money.usd_cents(500))")
    try:
        product.set_delivery(Money.usd_cents(500))
    except CurrencyMismatchError as e:
        print(f"{e.code}: {e}")

    print(">>> product.set_quantity(0)")
    try:
        product.set_quantity(0)
    except InvalidQuantityError as e:
        print(f"{e.code}: {e}")

    mixed = Basket()
    mixed.add(product)
    mixed.add(Product("6", "US import", Money.usd_cents(1000), UK.rate()))
    print(">>> mixed.reconcile()")
    try:
        mixed.reconcile()
    except CurrencyMismatchError as e:
        print(f"{e.code}: {e}")
    print()


def main():
    if "--verbose" in sys.argv:
        configure_logging(level=logging.DEBUG)

    print_breakdown("DEFAULT POLICY (tax on net)", build_basket().reconcile())
    print_breakdown(
        "TAX ON GROSS",
        build_basket(ReconciliationPolicy(tax_basis=TaxBasis.GROSS)).reconcile(),
    )
    demonstrate_guards()


if __name__ == "__main__":
    main()
