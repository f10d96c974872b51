"""Abstract repository for the Product aggregate (the Catalog Store).

Implemented over JSON documents and SQL in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by ID."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of products in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def deduct_stock(
        self, product_id: int, size: str, color: str, quantity: int
    ) -> Product | None:
        """Atomically decrement one variant's stock if enough is available.

        Finding the product, checking ``stock >= quantity`` and applying
        the decrement must be a single indivisible step at the store
        level. Returns the product as it is after the update, or None
        when the product or variant does not exist or stock is short;
        in that case nothing is modified.
        """

    @abstractmethod
    def set_variant_stock(
        self, product_id: int, size: str, color: str, stock: int
    ) -> Product | None:
        """Unconditionally overwrite one variant's stock.

        Returns the updated product, or None if the product or variant
        does not exist.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Return True if the backing store can be reached. Never raises."""
