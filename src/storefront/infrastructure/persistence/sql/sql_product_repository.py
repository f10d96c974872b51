"""SQLAlchemy implementation of ProductRepository.

The stock deduction is one guarded UPDATE statement; the database applies
the ``stock >= quantity`` check and the decrement together, so concurrent
orders for the last units cannot both succeed.
"""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func, select, update

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.sql.database import Database
from storefront.infrastructure.persistence.sql.tables import ProductRow, VariantRow


class SqlProductRepository(ProductRepository):

    def __init__(self, database: Database) -> None:
        self._db = database

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        with self._db.session() as session:
            row = session.get(ProductRow, product_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        with self._db.session() as session:
            rows = session.scalars(select(ProductRow).order_by(ProductRow.product_id))
            return [self._to_domain(row) for row in rows]

    def count(self) -> int:
        with self._db.session() as session:
            return session.scalar(select(func.count()).select_from(ProductRow)) or 0

    def save(self, product: Product) -> None:
        with self._db.session() as session:
            row = session.get(ProductRow, product.id)
            if row is None:
                row = ProductRow(product_id=product.id)
                session.add(row)
            else:
                row.variants.clear()
                session.flush()
            row.name = product.name
            row.price = product.price.amount
            row.currency = product.price.currency
            row.image = product.image
            row.variants = [
                VariantRow(position=i, size=v.size, color=v.color, stock=v.stock)
                for i, v in enumerate(product.variants)
            ]

    def deduct_stock(
        self, product_id: int, size: str, color: str, quantity: int
    ) -> Product | None:
        stmt = (
            update(VariantRow)
            .where(
                VariantRow.product_id == product_id,
                VariantRow.size == size,
                VariantRow.color == color,
                VariantRow.stock >= quantity,
            )
            .values(stock=VariantRow.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        with self._db.session() as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                return None
            return self._load(session, product_id)

    def set_variant_stock(
        self, product_id: int, size: str, color: str, stock: int
    ) -> Product | None:
        stmt = (
            update(VariantRow)
            .where(
                VariantRow.product_id == product_id,
                VariantRow.size == size,
                VariantRow.color == color,
            )
            .values(stock=stock)
            .execution_options(synchronize_session=False)
        )
        with self._db.session() as session:
            result = session.execute(stmt)
            if result.rowcount == 0:
                return None
            return self._load(session, product_id)

    def is_available(self) -> bool:
        return self._db.ping()

    # --- Mapping --------------------------------------------------------------

    def _load(self, session, product_id: int) -> Product | None:
        row = session.scalars(
            select(ProductRow)
            .where(ProductRow.product_id == product_id)
            .execution_options(populate_existing=True)
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.product_id,
            name=row.name,
            price=Money(Decimal(row.price), row.currency),
            image=row.image,
            variants=[
                Variant(size=v.size, color=v.color, stock=v.stock)
                for v in row.variants
            ],
        )
