"""Data Transfer Objects: plain containers passed between the layers.

The HTTP and CLI layers only ever see these, never the domain entities.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class OrderRequest:
    """Input: what the employee asked for and who they are.

    There is deliberately no price field; totals come from the catalog.
    """

    product_id: int
    size: str
    color: str
    quantity: int
    employee_code: str
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class PlacedOrderDTO:
    """Output: the outcome of a successful fulfillment."""

    order_id: int | None  # None when the ledger write failed
    product_id: int
    size: str
    color: str
    quantity: int
    total: Decimal
    new_stock: int
    email_sent: bool
    recorded: bool


@dataclass(frozen=True)
class VariantDTO:
    size: str
    color: str
    stock: int


@dataclass(frozen=True)
class ProductDTO:
    """Output: the public shape of a catalog entry."""

    id: int
    name: str
    price: Decimal
    image: str
    variants: list[VariantDTO]

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=product.price.amount,
            image=product.image,
            variants=[
                VariantDTO(size=v.size, color=v.color, stock=v.stock)
                for v in product.variants
            ],
        )


@dataclass(frozen=True)
class OrderDTO:
    """Output: a ledger entry as shown to admins."""

    id: int
    product_id: int
    product_name: str
    size: str
    color: str
    quantity: int
    price: Decimal
    total: Decimal
    employee_code: str
    name: str
    email: str
    phone: str
    created_at: str

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            product_id=order.product_id,
            product_name=order.product_name,
            size=order.size,
            color=order.color,
            quantity=order.quantity.value,
            price=order.unit_price.amount,
            total=order.total.amount,
            employee_code=order.submitter.employee_code,
            name=order.submitter.name,
            email=order.submitter.email,
            phone=order.submitter.phone,
            created_at=order.created_at.isoformat(),
        )
