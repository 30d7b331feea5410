"""
test_logging.py — Tests for structured logging and error codes
"""

import io
import json
import logging

import pytest

from basket import (
    Basket,
    BasketError,
    Currency,
    CurrencyMismatchError,
    EmptyBasketError,
    Jurisdiction,
    Money,
    PercentageTaxRate,
    Product,
    configure_logging,
    get_logger,
)
from basket.logging_config import reset_logging


@pytest.fixture
def log_stream():
    reset_logging()
    stream = io.StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    yield stream
    reset_logging()


def records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines() if line]


class TestStructuredLogging:

    def test_loggers_live_under_namespace(self):
        assert get_logger("product").name == "basket.product"

    def test_reconcile_logs_debug_record(self, log_stream):
        basket = Basket()
        basket.add(Product("1", "Book", Money.pence(1000), PercentageTaxRate(20)))
        basket.reconcile()

        by_message = {r["message"]: r for r in records(log_stream)}
        assert by_message["line_reconciled"]["sku"] == "1"
        assert by_message["basket_reconciled"]["grand_total"] == "12.00 GBP"
        assert by_message["basket_reconciled"]["level"] == "DEBUG"

    def test_rejected_delivery_logged_as_warning(self, log_stream):
        product = Product("1", "Book", Money.pence(1000), PercentageTaxRate(20))
        with pytest.raises(CurrencyMismatchError):
            product.set_delivery(Money.usd_cents(500))

        (record,) = records(log_stream)
        assert record["level"] == "WARNING"
        assert record["message"] == "delivery_currency_mismatch"
        assert record["delivery_currency"] == "USD"

    def test_rejected_jurisdiction_price_logged_as_warning(self, log_stream):
        basket = Basket(Jurisdiction(PercentageTaxRate(20), Currency.GBP))
        with pytest.raises(CurrencyMismatchError):
            basket.product("1", "Book", Money.usd_cents(1000))

        (record,) = records(log_stream)
        assert record["level"] == "WARNING"
        assert record["message"] == "jurisdiction_currency_mismatch"
        assert record["jurisdiction_currency"] == "GBP"
        assert record["price_currency"] == "USD"
        assert basket.is_empty()

    def test_exception_fields_in_payload(self, log_stream):
        logger = get_logger("test")
        try:
            Basket().reconcile()
        except EmptyBasketError:
            logger.exception("reconcile_failed")

        record = records(log_stream)[-1]
        assert record["exc_type"] == "EmptyBasketError"
        assert record["exc_code"] == "EMPTY_BASKET"

    def test_configure_is_idempotent(self, log_stream):
        configure_logging(level=logging.DEBUG, stream=io.StringIO())
        assert len(logging.getLogger("basket").handlers) == 1


class TestErrorCodes:

    @pytest.mark.parametrize("error", [
        CurrencyMismatchError("GBP", "USD"),
        EmptyBasketError(),
    ])
    def test_all_errors_share_base_and_code(self, error):
        assert isinstance(error, BasketError)
        assert error.code != BasketError.code

    def test_currency_mismatch_message(self):
        error = CurrencyMismatchError("GBP", "USD", "delivery")
        assert str(error) == "Currency mismatch: GBP vs USD (delivery)"
