"""Order ledger entry.

An Order is a denormalized, immutable record of one fulfilled request:
the product and variant that were deducted, the catalog price at the
moment of deduction, and who asked for it. It is written once and never
updated.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class Submitter:
    """The employee who placed the order."""

    employee_code: str
    name: str
    email: str
    phone: str

    def __post_init__(self) -> None:
        for label, value in (
            ("Employee code", self.employee_code),
            ("Name", self.name),
            ("Email", self.email),
            ("Phone", self.phone),
        ):
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")


@dataclass(frozen=True)
class Order:
    """Use ``Order.create()`` for new orders; ``__init__`` stays plain so
    repositories can reconstitute persisted entries without re-validating.
    """

    id: int | None
    product_id: int
    product_name: str
    size: str
    color: str
    quantity: Quantity
    unit_price: Money  # catalog price at deduction time
    submitter: Submitter
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product: Product,
        size: str,
        color: str,
        quantity: Quantity,
        submitter: Submitter,
    ) -> Order:
        """Build a ledger entry from the product as it was just updated."""
        return Order(
            id=None,
            product_id=product.id,
            product_name=product.name,
            size=size,
            color=color,
            quantity=quantity,
            unit_price=product.price,
            submitter=submitter,
        )

    @property
    def total(self) -> Money:
        return self.unit_price * self.quantity.value

    def with_id(self, order_id: int) -> Order:
        return replace(self, id=order_id)
