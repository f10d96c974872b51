"""Integration tests for the PlaceOrder use case.

Uses in-memory fake repositories and a recording notifier, so no file I/O
and no mail.
"""

import threading
from decimal import Decimal

import pytest

from storefront.application.dto import OrderRequest
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.set_variant_stock import SetVariantStockHandler
from storefront.domain.exceptions import (
    InsufficientStockError,
    StoreUnavailableError,
    ValidationError,
)
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeNotifier, FakeOrderRepository, FakeProductRepository


def _setup(
    stock: int = 3, notifier: FakeNotifier | None = None
) -> tuple[PlaceOrderHandler, FakeProductRepository, FakeOrderRepository, FakeNotifier]:
    """Handler over a one-product catalog whose M/Red variant holds *stock*."""
    product = Product(
        id=1,
        name="Women Printed Kurta",
        price=Money.of(1299),
        variants=[Variant("M", "Red", stock), Variant("L", "Red", 2)],
    )
    product_repo = FakeProductRepository([product])
    order_repo = FakeOrderRepository()
    notifier = notifier or FakeNotifier()
    handler = PlaceOrderHandler(product_repo, order_repo, notifier)
    return handler, product_repo, order_repo, notifier


def _request(quantity: int = 1, **overrides) -> OrderRequest:
    values = dict(
        product_id=1,
        size="M",
        color="Red",
        quantity=quantity,
        employee_code="E042",
        name="Asha Rao",
        email="asha@example.com",
        phone="9800000000",
    )
    values.update(overrides)
    return OrderRequest(**values)


def _stock(product_repo: FakeProductRepository, size: str = "M", color: str = "Red") -> int:
    return product_repo.get_by_id(1).find_variant(size, color).stock


class TestPlaceOrderHappyPath:

    def test_deducts_stock(self):
        handler, product_repo, _, _ = _setup(stock=3)
        placed = handler.handle(_request(quantity=2))
        assert placed.new_stock == 1
        assert _stock(product_repo) == 1

    def test_other_variants_untouched(self):
        handler, product_repo, _, _ = _setup()
        handler.handle(_request())
        assert _stock(product_repo, "L") == 2

    def test_total_uses_catalog_price(self):
        handler, _, _, _ = _setup()
        placed = handler.handle(_request(quantity=2))
        assert placed.total == Decimal("2598")

    def test_appends_ledger_entry(self):
        handler, _, order_repo, _ = _setup()
        placed = handler.handle(_request(quantity=2))
        assert placed.recorded is True
        saved = order_repo.get_by_id(placed.order_id)
        assert saved is not None
        assert saved.product_name == "Women Printed Kurta"
        assert saved.quantity.value == 2
        assert saved.unit_price == Money.of(1299)
        assert saved.submitter.employee_code == "E042"

    def test_trims_submitter_fields(self):
        handler, _, order_repo, _ = _setup()
        placed = handler.handle(_request(name="  Asha Rao  ", size=" M "))
        saved = order_repo.get_by_id(placed.order_id)
        assert saved.submitter.name == "Asha Rao"
        assert saved.size == "M"

    def test_sequential_ids(self):
        handler, _, _, _ = _setup()
        first = handler.handle(_request())
        second = handler.handle(_request())
        assert second.order_id == first.order_id + 1

    def test_can_take_last_unit(self):
        handler, product_repo, _, _ = _setup(stock=3)
        placed = handler.handle(_request(quantity=3))
        assert placed.new_stock == 0
        assert _stock(product_repo) == 0


class TestPlaceOrderRejected:

    def test_more_than_stock_rejected(self):
        handler, _, _, _ = _setup(stock=1)
        with pytest.raises(InsufficientStockError, match="Insufficient stock"):
            handler.handle(_request(quantity=2))

    def test_rejection_changes_nothing(self):
        handler, product_repo, order_repo, notifier = _setup(stock=1)
        with pytest.raises(InsufficientStockError):
            handler.handle(_request(quantity=2))
        assert _stock(product_repo) == 1
        assert order_repo.count() == 0
        assert notifier.sent == []

    def test_unknown_product_is_insufficient_stock(self):
        handler, _, order_repo, _ = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(_request(product_id=99))
        assert order_repo.count() == 0

    def test_unknown_variant_is_insufficient_stock(self):
        handler, _, _, _ = _setup()
        with pytest.raises(InsufficientStockError):
            handler.handle(_request(size="XXL"))

    def test_sold_out_variant(self):
        handler, _, _, _ = _setup(stock=0)
        with pytest.raises(InsufficientStockError):
            handler.handle(_request())


class TestPlaceOrderValidation:

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity(self, quantity):
        handler, product_repo, _, _ = _setup()
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            handler.handle(_request(quantity=quantity))
        assert _stock(product_repo) == 3

    def test_missing_size(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Size is required"):
            handler.handle(_request(size=""))

    def test_missing_color(self):
        handler, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Color is required"):
            handler.handle(_request(color="  "))

    def test_missing_email_checked_before_deduction(self):
        handler, product_repo, order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="Email is required"):
            handler.handle(_request(email=""))
        assert _stock(product_repo) == 3
        assert order_repo.count() == 0


class TestPlaceOrderFailures:

    def test_store_unavailable_propagates(self):
        handler, product_repo, order_repo, notifier = _setup()
        product_repo.available = False
        with pytest.raises(StoreUnavailableError):
            handler.handle(_request())
        assert order_repo.count() == 0
        assert notifier.sent == []

    def test_ledger_failure_still_succeeds(self):
        handler, product_repo, order_repo, _ = _setup(stock=3)
        order_repo.fail_writes = True
        placed = handler.handle(_request(quantity=2))
        assert placed.recorded is False
        assert placed.order_id is None
        assert placed.new_stock == 1
        assert _stock(product_repo) == 1

    def test_ledger_failure_is_logged(self, caplog):
        handler, _, order_repo, _ = _setup()
        order_repo.fail_writes = True
        with caplog.at_level("ERROR"):
            handler.handle(_request())
        assert "not recorded" in caplog.text


class TestPlaceOrderNotification:

    def test_notifies_with_recorded_order(self):
        handler, _, _, notifier = _setup()
        placed = handler.handle(_request())
        assert placed.email_sent is True
        assert [o.id for o in notifier.sent] == [placed.order_id]

    def test_unconfigured_notifier_skipped(self):
        notifier = FakeNotifier(configured=False)
        handler, _, _, _ = _setup(notifier=notifier)
        placed = handler.handle(_request())
        assert placed.email_sent is False
        assert notifier.sent == []

    def test_failed_send_does_not_fail_order(self):
        handler, product_repo, order_repo, _ = _setup(notifier=FakeNotifier(outcome=False))
        placed = handler.handle(_request())
        assert placed.email_sent is False
        assert order_repo.count() == 1
        assert _stock(product_repo) == 2

    def test_notifier_exception_does_not_fail_order(self):
        notifier = FakeNotifier(outcome=ConnectionRefusedError("smtp down"))
        handler, _, order_repo, _ = _setup(notifier=notifier)
        placed = handler.handle(_request())
        assert placed.email_sent is False
        assert order_repo.count() == 1

    def test_notifies_even_when_ledger_failed(self):
        handler, _, order_repo, notifier = _setup()
        order_repo.fail_writes = True
        placed = handler.handle(_request())
        assert placed.email_sent is True
        assert len(notifier.sent) == 1


class TestPlaceOrderSequence:

    def test_order_reject_restock_order(self):
        handler, product_repo, order_repo, _ = _setup(stock=3)

        first = handler.handle(_request(quantity=2))
        assert first.new_stock == 1

        with pytest.raises(InsufficientStockError):
            handler.handle(_request(quantity=2))
        assert _stock(product_repo) == 1
        assert order_repo.count() == 1

        SetVariantStockHandler(product_repo).handle(1, "M", "Red", 10)

        third = handler.handle(_request(quantity=5))
        assert third.new_stock == 5
        assert order_repo.count() == 2


class TestPlaceOrderConcurrency:

    def test_concurrent_orders_never_oversell(self):
        handler, product_repo, order_repo, _ = _setup(stock=5)
        successes: list[int] = []
        rejections: list[Exception] = []
        barrier = threading.Barrier(20)

        def buy():
            barrier.wait()
            try:
                successes.append(handler.handle(_request()).new_stock)
            except InsufficientStockError as exc:
                rejections.append(exc)

        threads = [threading.Thread(target=buy) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(successes) == 5
        assert len(rejections) == 15
        assert sorted(successes) == [0, 1, 2, 3, 4]
        assert _stock(product_repo) == 0
        assert order_repo.count() == 5
