"""JSON-file-backed implementation of OrderRepository (append-only)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import LedgerWriteError, StoreError
from storefront.domain.model.order import Order, Submitter
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_store import JsonCollection


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        try:
            with self._collection.locked():
                records = self._collection.read()
                next_id = max((r["id"] for r in records), default=0) + 1
                saved = order.with_id(next_id)
                records.append(self._to_raw(saved))
                self._collection.write(records)
        except StoreError as exc:
            raise LedgerWriteError(f"Could not record order for product #{order.product_id}") from exc
        return saved

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._collection.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        orders = [self._to_domain(raw) for raw in self._collection.load()]
        return sorted(orders, key=lambda o: o.id, reverse=True)

    def count(self) -> int:
        return len(self._collection.load())

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "product_id": order.product_id,
            "product_name": order.product_name,
            "size": order.size,
            "color": order.color,
            "quantity": order.quantity.value,
            "price": str(order.unit_price.amount),
            "currency": order.unit_price.currency,
            "total": str(order.total.amount),
            "employee_code": order.submitter.employee_code,
            "name": order.submitter.name,
            "email": order.submitter.email,
            "phone": order.submitter.phone,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            product_id=raw["product_id"],
            product_name=raw["product_name"],
            size=raw["size"],
            color=raw["color"],
            quantity=Quantity(raw["quantity"]),
            unit_price=Money(Decimal(raw["price"]), raw.get("currency", "INR")),
            submitter=Submitter(
                employee_code=raw["employee_code"],
                name=raw["name"],
                email=raw["email"],
                phone=raw["phone"],
            ),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
