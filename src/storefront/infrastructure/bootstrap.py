"""Composition root: binds the domain interfaces to concrete stores and mail.

The store handle and the mail notifier are process-wide: ``services()``
builds them on first use and then hands out the same instances. The
build runs under a lock so concurrent first callers share one result.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from storefront.application.seed_catalog import SeedCatalogHandler
from storefront.domain.exceptions import StoreError
from storefront.domain.notifier import Notifier
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.config import Settings, get_settings
from storefront.infrastructure.notification.smtp_notifier import NullNotifier, SmtpNotifier
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.sql.database import Database
from storefront.infrastructure.persistence.sql.sql_order_repository import (
    SqlOrderRepository,
)
from storefront.infrastructure.persistence.sql.sql_product_repository import (
    SqlProductRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Services:
    product_repo: ProductRepository
    order_repo: OrderRepository
    notifier: Notifier


_lock = threading.Lock()
_services: Services | None = None


def build_services(settings: Settings) -> Services:
    if settings.database_url:
        database = Database(settings.database_url, connect_timeout=settings.db_connect_timeout)
        product_repo: ProductRepository = SqlProductRepository(database)
        order_repo: OrderRepository = SqlOrderRepository(database)
    else:
        product_repo = JsonProductRepository(settings.data_dir / "products.json")
        order_repo = JsonOrderRepository(settings.data_dir / "orders.json")

    notifier: Notifier
    if settings.mail_configured:
        notifier = SmtpNotifier.from_settings(settings)
    else:
        notifier = NullNotifier()

    return Services(product_repo=product_repo, order_repo=order_repo, notifier=notifier)


def services() -> Services:
    global _services
    if _services is None:
        with _lock:
            if _services is None:
                _services = build_services(get_settings())
    return _services


def reset() -> None:
    """Forget the cached services; the next ``services()`` call rebuilds them."""
    global _services
    with _lock:
        _services = None


def seed_catalog(product_repo: ProductRepository) -> int:
    """Seed an empty catalog; failures are logged, not raised."""
    try:
        return SeedCatalogHandler(product_repo).handle()
    except StoreError:
        logger.exception("Catalog seed failed")
        return 0
