"""Application service: List Products use case (catalog query)."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductDTO]:
        """Return a point-in-time snapshot of the catalog.

        Stock values may be stale by the time a client acts on them; the
        fulfillment step re-checks against the store.
        """
        return [ProductDTO.from_product(p) for p in self._product_repo.list_all()]
