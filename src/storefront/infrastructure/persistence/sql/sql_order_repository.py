"""SQLAlchemy implementation of OrderRepository (append-only)."""

from __future__ import annotations

from datetime import timezone
from decimal import Decimal

from sqlalchemy import func, select

from storefront.domain.exceptions import LedgerWriteError, StoreError
from storefront.domain.model.order import Order, Submitter
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.sql.database import Database
from storefront.infrastructure.persistence.sql.tables import OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, database: Database) -> None:
        self._db = database

    def add(self, order: Order) -> Order:
        try:
            with self._db.session() as session:
                row = self._to_row(order)
                session.add(row)
                session.flush()
                order_id = row.id
        except StoreError as exc:
            raise LedgerWriteError(f"Could not record order for product #{order.product_id}") from exc
        return order.with_id(order_id)

    def get_by_id(self, order_id: int) -> Order | None:
        with self._db.session() as session:
            row = session.get(OrderRow, order_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Order]:
        with self._db.session() as session:
            rows = session.scalars(select(OrderRow).order_by(OrderRow.id.desc()))
            return [self._to_domain(row) for row in rows]

    def count(self) -> int:
        with self._db.session() as session:
            return session.scalar(select(func.count()).select_from(OrderRow)) or 0

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            product_id=order.product_id,
            product_name=order.product_name,
            size=order.size,
            color=order.color,
            quantity=order.quantity.value,
            price=order.unit_price.amount,
            currency=order.unit_price.currency,
            total=order.total.amount,
            employee_code=order.submitter.employee_code,
            name=order.submitter.name,
            email=order.submitter.email,
            phone=order.submitter.phone,
            created_at=order.created_at,
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row.id,
            product_id=row.product_id,
            product_name=row.product_name,
            size=row.size,
            color=row.color,
            quantity=Quantity(row.quantity),
            unit_price=Money(Decimal(row.price), row.currency),
            submitter=Submitter(
                employee_code=row.employee_code,
                name=row.name,
                email=row.email,
                phone=row.phone,
            ),
            created_at=created_at,
        )
