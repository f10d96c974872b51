"""Notifier port: tells someone outside the system that an order was placed."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from storefront.domain.model.order import Order


@dataclass(frozen=True)
class NotificationResult:
    sent: bool
    message_id: str | None = None


class Notifier(ABC):

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """True if a transport is set up to actually deliver messages."""

    @abstractmethod
    def notify(self, order: Order) -> NotificationResult:
        """Send an order notification.

        Delivery is best effort: implementations report transport
        failures through ``NotificationResult.sent`` instead of raising.
        """
