"""Application service: Seed Catalog use case.

Populates an empty catalog with the default products. A catalog that
already holds anything is left untouched, so this is safe to run on
every startup.
"""

from __future__ import annotations

import logging

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


def _variants(*rows: tuple[str, str, int]) -> list[Variant]:
    return [Variant(size=size, color=color, stock=stock) for size, color, stock in rows]


def default_catalog() -> list[Product]:
    return [
        Product(
            id=1,
            name="Women Printed Kurta",
            price=Money.of(1299),
            image="images/shopping (1).webp",
            variants=_variants(
                ("S", "White", 10), ("M", "White", 15), ("L", "White", 8), ("XL", "White", 5),
            ),
        ),
        Product(
            id=2,
            name="Men Solid Polo T-Shirt",
            price=Money.of(2499),
            image="images/shopping (2).webp",
            variants=_variants(
                ("30", "Blue", 5), ("32", "Blue", 8), ("34", "Blue", 3),
                ("30", "Black", 7), ("32", "Black", 4),
            ),
        ),
        Product(
            id=3,
            name="Women Wide-Leg Trousers",
            price=Money.of(4999),
            image="images/shopping (3).webp",
            variants=_variants(
                ("M", "Navy", 4), ("L", "Navy", 6), ("XL", "Navy", 3),
                ("M", "Charcoal", 2), ("L", "Charcoal", 5),
            ),
        ),
        Product(
            id=4,
            name="Men White Casual Blazer",
            price=Money.of(3299),
            image="images/shopping.webp",
            variants=_variants(
                ("XS", "Multi", 7), ("S", "Multi", 5), ("M", "Multi", 3), ("L", "Multi", 4),
            ),
        ),
    ]


class SeedCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, products: list[Product] | None = None) -> int:
        """Seed the catalog if it is empty. Returns how many products were added."""
        if self._product_repo.count() > 0:
            return 0

        seed = default_catalog() if products is None else products
        for product in seed:
            self._product_repo.save(product)
        logger.info("Seeded catalog with %d products", len(seed))
        return len(seed)
