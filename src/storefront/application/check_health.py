"""Application service: Check Health use case."""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.notifier import Notifier
from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class HealthReport:
    db_connected: bool
    mail_configured: bool


class CheckHealthHandler:

    def __init__(self, product_repo: ProductRepository, notifier: Notifier) -> None:
        self._product_repo = product_repo
        self._notifier = notifier

    def handle(self) -> HealthReport:
        return HealthReport(
            db_connected=self._product_repo.is_available(),
            mail_configured=self._notifier.is_configured,
        )
