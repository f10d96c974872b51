"""JSON-file-backed implementation of ProductRepository.

Products are stored as documents with their variants embedded. The
conditional deduction runs entirely under the collection lock.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_store import JsonCollection


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._collection = JsonCollection(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._collection.load():
            if raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        products = [self._to_domain(raw) for raw in self._collection.load()]
        return sorted(products, key=lambda p: p.id)

    def count(self) -> int:
        return len(self._collection.load())

    def save(self, product: Product) -> None:
        with self._collection.locked():
            records = self._collection.read()
            index = self._index_of(records, product.id)
            if index is None:
                records.append(self._to_raw(product))
            else:
                records[index] = self._to_raw(product)
            self._collection.write(records)

    def deduct_stock(
        self, product_id: int, size: str, color: str, quantity: int
    ) -> Product | None:
        with self._collection.locked():
            records = self._collection.read()
            index = self._index_of(records, product_id)
            if index is None:
                return None
            product = self._to_domain(records[index])
            try:
                product.deduct_stock(size, color, quantity)
            except InsufficientStockError:
                return None
            records[index] = self._to_raw(product)
            self._collection.write(records)
            return product

    def set_variant_stock(
        self, product_id: int, size: str, color: str, stock: int
    ) -> Product | None:
        with self._collection.locked():
            records = self._collection.read()
            index = self._index_of(records, product_id)
            if index is None:
                return None
            product = self._to_domain(records[index])
            if product.find_variant(size, color) is None:
                return None
            product.set_stock(size, color, stock)
            records[index] = self._to_raw(product)
            self._collection.write(records)
            return product

    def is_available(self) -> bool:
        return self._collection.is_available()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _index_of(records: list[dict], product_id: int) -> int | None:
        for i, raw in enumerate(records):
            if raw["product_id"] == product_id:
                return i
        return None

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "product_id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "image": product.image,
            "variants": [
                {"size": v.size, "color": v.color, "stock": v.stock}
                for v in product.variants
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["product_id"],
            name=raw["name"],
            price=Money(Decimal(raw["price"]), raw.get("currency", "INR")),
            image=raw.get("image", ""),
            variants=[
                Variant(size=v["size"], color=v["color"], stock=v.get("stock", 0))
                for v in raw.get("variants", [])
            ],
        )
