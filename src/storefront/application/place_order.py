"""Application service: Place Order use case (order fulfillment).

Steps:
1. Validate the request before touching the store.
2. Deduct stock with the repository's atomic conditional update. There is
   no separate read-then-check step here: the store decides.
3. Append the order to the ledger, priced from the just-updated product.
4. Notify, best effort.

A ledger failure after a successful deduction is not rolled back. The
stock was legitimately taken, so the caller still gets success and the
missing audit record is logged at ERROR level.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderRequest, PlacedOrderDTO
from storefront.domain.exceptions import (
    InsufficientStockError,
    LedgerWriteError,
    ValidationError,
)
from storefront.domain.model.order import Order, Submitter
from storefront.domain.model.value_objects import Quantity
from storefront.domain.notifier import Notifier
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        notifier: Notifier,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._notifier = notifier

    def handle(self, request: OrderRequest) -> PlacedOrderDTO:
        quantity = Quantity(request.quantity)
        size = self._required(request.size, "Size")
        color = self._required(request.color, "Color")
        submitter = Submitter(
            employee_code=request.employee_code.strip(),
            name=request.name.strip(),
            email=request.email.strip(),
            phone=request.phone.strip(),
        )

        updated = self._product_repo.deduct_stock(
            request.product_id, size, color, quantity.value
        )
        if updated is None:
            logger.warning(
                "Insufficient stock: product=%s size=%s color=%s quantity=%s",
                request.product_id, size, color, quantity.value,
            )
            raise InsufficientStockError()

        variant = updated.find_variant(size, color)
        new_stock = variant.stock if variant is not None else 0

        order = Order.create(updated, size, color, quantity, submitter)
        try:
            order = self._order_repo.add(order)
            recorded = True
        except LedgerWriteError:
            recorded = False
            logger.exception(
                "Stock deducted but order not recorded: product=%s size=%s "
                "color=%s quantity=%s total=%s employee=%s",
                order.product_id, size, color, quantity.value,
                order.total.amount, submitter.employee_code,
            )

        email_sent = self._notify(order)

        logger.info(
            "Order %s placed: product=%s size=%s color=%s quantity=%s total=%s new_stock=%s",
            order.id, order.product_id, size, color, quantity.value,
            order.total.amount, new_stock,
        )
        return PlacedOrderDTO(
            order_id=order.id,
            product_id=order.product_id,
            size=size,
            color=color,
            quantity=quantity.value,
            total=order.total.amount,
            new_stock=new_stock,
            email_sent=email_sent,
            recorded=recorded,
        )

    def _notify(self, order: Order) -> bool:
        if not self._notifier.is_configured:
            return False
        try:
            return self._notifier.notify(order).sent
        except Exception:
            logger.exception("Notifier failed for order %s", order.id)
            return False

    @staticmethod
    def _required(value: str, label: str) -> str:
        if not value or not value.strip():
            raise ValidationError(f"{label} is required")
        return value.strip()
