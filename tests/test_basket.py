"""
test_basket.py — Tests for Basket lines and aggregate reconciliation
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from basket import (
    Basket,
    BasketTotals,
    Currency,
    CurrencyMismatchError,
    EmptyBasketError,
    InvalidOperationError,
    Jurisdiction,
    Money,
    PercentageDiscount,
    PercentageTaxRate,
    PhysicalBook,
    Product,
    ProductNotFoundError,
    ReconciliationPolicy,
    ValueDiscount,
)


# ==============================================================================
# TEST HELPERS
# ==============================================================================

UK = Jurisdiction(PercentageTaxRate(20), Currency.GBP)


def gbp_product(sku, pence, rate=20):
    return Product(sku, f"item {sku}", Money.pence(pence), PercentageTaxRate(rate))


@st.composite
def gbp_products(draw):
    """A non-empty list of GBP products with assorted state."""
    count = draw(st.integers(min_value=1, max_value=8))
    products = []
    for i in range(count):
        product = gbp_product(
            str(i),
            draw(st.integers(min_value=0, max_value=50_000)),
            draw(st.integers(min_value=0, max_value=25)),
        )
        product.set_quantity(draw(st.integers(min_value=1, max_value=10)))
        product.set_freebie(draw(st.booleans()))
        product.set_delivery(Money.pence(draw(st.integers(min_value=0, max_value=1_000))))
        if draw(st.booleans()):
            product.set_discount(PercentageDiscount(draw(st.integers(0, 120))))
        products.append(product)
    return products


# ==============================================================================
# LINES
# ==============================================================================

class TestLines:

    def test_new_basket_is_empty(self):
        basket = Basket()
        assert basket.is_empty()
        assert len(basket) == 0
        assert basket.products == ()

    def test_add_preserves_order(self):
        basket = Basket()
        a, b, c = gbp_product("a", 1), gbp_product("b", 2), gbp_product("c", 3)
        for p in (a, b, c):
            assert basket.add(p) is p
        assert [p.sku for p in basket] == ["a", "b", "c"]
        assert "b" in basket
        assert "z" not in basket

    def test_add_rejects_non_product(self):
        with pytest.raises(TypeError):
            Basket().add("sku-1")

    def test_remove_first_match_only(self):
        basket = Basket()
        first = basket.add(gbp_product("dup", 100))
        second = basket.add(gbp_product("dup", 200))
        assert basket.remove("dup") is first
        assert basket.products == (second,)

    def test_remove_unknown_sku(self):
        basket = Basket()
        basket.add(gbp_product("a", 100))
        with pytest.raises(ProductNotFoundError) as exc_info:
            basket.remove("nope")
        assert exc_info.value.sku == "nope"
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"
        assert len(basket) == 1

    def test_pick_and_update(self):
        basket = Basket()
        basket.add(gbp_product("a", 100))
        updated = basket.update("a", lambda p: p.set_quantity(4))
        assert updated is basket.pick("a")
        assert basket.pick("a").quantity == 4

    def test_pick_unknown(self):
        with pytest.raises(ProductNotFoundError):
            Basket().pick("a")

    def test_products_snapshot(self):
        basket = Basket()
        snapshot = basket.products
        basket.add(gbp_product("a", 100))
        assert snapshot == ()


class TestJurisdictionFactory:

    def test_product_uses_jurisdiction_rate(self):
        basket = Basket(UK)
        product = basket.product("1", "Book", Money.pence(1000))
        assert product.rate.percentage() == 20
        assert basket.products == (product,)

    def test_product_runs_action(self):
        basket = Basket(UK)
        product = basket.product(
            "1", "Book", Money.pence(1000), lambda p: p.set_category(PhysicalBook())
        )
        assert product.taxable is False

    def test_product_currency_checked(self):
        basket = Basket(UK)
        with pytest.raises(CurrencyMismatchError):
            basket.product("1", "Book", Money.usd_cents(1000))
        assert basket.is_empty()

    def test_product_requires_jurisdiction(self):
        with pytest.raises(InvalidOperationError):
            Basket().product("1", "Book", Money.pence(1000))


# ==============================================================================
# RECONCILIATION
# ==============================================================================

class TestReconcile:

    def test_empty_basket_fails(self):
        with pytest.raises(EmptyBasketError):
            Basket().reconcile()

    def test_mixed_currency_fails(self):
        basket = Basket()
        basket.add(gbp_product("gbp", 1000))
        basket.add(Product("usd", "item", Money.usd_cents(1000), PercentageTaxRate(20)))
        with pytest.raises(CurrencyMismatchError):
            basket.reconcile()

    def test_worked_example(self):
        basket = Basket(UK)
        basket.product("1", "The Lion King", Money.pence(1000))
        basket.product(
            "2", "Discounted", Money.pence(1000),
            lambda p: p.set_discount(PercentageDiscount(20)),
        )
        basket.product(
            "3", "Freebie", Money.pence(1000),
            lambda p: p.set_freebie(True).set_delivery(Money.pence(300)),
        )

        breakdown = basket.reconcile()

        assert breakdown.currency is Currency.GBP
        assert [line.line_total for line in breakdown.lines] == [
            Money.pence(1200), Money.pence(960), Money.pence(300)
        ]
        assert breakdown.totals == BasketTotals(
            items=3,
            gross=Money.pence(2000),
            discount=Money.pence(200),
            net=Money.pence(1800),
            tax=Money.pence(360),
            delivery=Money.pence(300),
            grand_total=Money.pence(2460),
        )

    def test_items_counts_quantities(self):
        basket = Basket()
        basket.add(gbp_product("a", 100)).set_quantity(3)
        basket.add(gbp_product("b", 100))
        assert basket.reconcile().totals.items == 4

    def test_value_discount_and_non_taxable(self):
        basket = Basket()
        basket.add(gbp_product("a", 2000)).set_discount(ValueDiscount(Money.pence(500)))
        basket.add(gbp_product("b", 1000)).set_taxable(False)
        totals = basket.reconcile().totals
        assert totals.net == Money.pence(2500)
        assert totals.tax == Money.pence(300)
        assert totals.grand_total == Money.pence(2800)

    def test_basket_policy_applies_to_lines(self):
        basket = Basket(policy=ReconciliationPolicy(delivery_per_unit=True))
        basket.add(gbp_product("a", 100)).set_quantity(2).set_delivery(Money.pence(50))
        assert basket.reconcile().totals.delivery == Money.pence(100)

    def test_reconcile_does_not_mutate(self):
        basket = Basket()
        product = basket.add(gbp_product("a", 100)).set_quantity(2)
        basket.reconcile()
        assert product.quantity == 2
        assert len(basket) == 1


class TestReconcileProperties:

    @given(products=gbp_products())
    @settings(max_examples=200)
    def test_grand_total_is_sum_of_lines(self, products):
        basket = Basket()
        for p in products:
            basket.add(p)
        breakdown = basket.reconcile()

        total = Money.zero(Currency.GBP)
        for line in breakdown.lines:
            total = total + line.line_total
        assert breakdown.totals.grand_total == total
        assert breakdown.totals.grand_total == (
            breakdown.totals.net + breakdown.totals.tax + breakdown.totals.delivery
        )

    @given(products=gbp_products(), data=st.data())
    @settings(max_examples=200)
    def test_order_independent_totals(self, products, data):
        shuffled = data.draw(st.permutations(products))

        forward, reordered = Basket(), Basket()
        for p in products:
            forward.add(p)
        for p in shuffled:
            reordered.add(p)

        assert forward.reconcile().totals == reordered.reconcile().totals

    @given(products=gbp_products())
    @settings(max_examples=100)
    def test_reconcile_idempotent(self, products):
        basket = Basket()
        for p in products:
            basket.add(p)
        assert basket.reconcile() == basket.reconcile()


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
