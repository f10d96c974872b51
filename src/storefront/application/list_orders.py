"""Application service: List Orders use case (ledger query)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO
from storefront.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[OrderDTO]:
        return [OrderDTO.from_order(o) for o in self._order_repo.list_all()]
