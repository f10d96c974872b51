"""Application service: Set Variant Stock use case (admin adjustment).

This is a direct overwrite, not a guarded update: it can race with
concurrent orders and the last write wins. It never touches the ledger.
"""

from __future__ import annotations

import logging

from storefront.application.dto import VariantDTO
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import validate_stock
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SetVariantStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, size: str, color: str, stock: int) -> VariantDTO:
        size = (size or "").strip()
        color = (color or "").strip()
        if not size or not color:
            raise ValidationError("Size and color are required")
        validate_stock(stock)

        product = self._product_repo.set_variant_stock(product_id, size, color, stock)
        if product is None:
            raise EntityNotFoundError(
                f"Variant {size}/{color} not found for product #{product_id}"
            )

        logger.info(
            "Stock set by admin: product=%s size=%s color=%s stock=%s",
            product_id, size, color, stock,
        )
        variant = product.get_variant(size, color)
        return VariantDTO(size=variant.size, color=variant.color, stock=variant.stock)
