"""Abstract repository for the Order ledger (append-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Append an order and return it with its assigned ID.

        Raises LedgerWriteError if the entry could not be written.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every ledger entry, newest first."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of ledger entries."""
