"""Pydantic request schemas and response shaping for the HTTP API.

Field names on the wire are camelCase, matching what the storefront
frontend sends.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from storefront.application.dto import OrderDTO, OrderRequest, PlacedOrderDTO, ProductDTO


class PlaceOrderBody(BaseModel):
    """Any ``price`` or ``productName`` the client sends is ignored."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    product_id: int = Field(alias="productId")
    size: str
    color: str
    quantity: int = Field(strict=True)
    employee_code: str = Field(alias="employeeCode")
    name: str
    email: str
    phone: str

    def to_request(self) -> OrderRequest:
        return OrderRequest(
            product_id=self.product_id,
            size=self.size,
            color=self.color,
            quantity=self.quantity,
            employee_code=self.employee_code,
            name=self.name,
            email=self.email,
            phone=self.phone,
        )


class SetVariantStockBody(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    size: str
    color: str
    stock: int = Field(strict=True)


def json_number(amount: Decimal) -> int | float:
    """Whole amounts become ints (1299), others floats (1299.5)."""
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def product_json(product: ProductDTO) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "price": json_number(product.price),
        "image": product.image,
        "variants": [
            {"size": v.size, "color": v.color, "stock": v.stock}
            for v in product.variants
        ],
    }


def placed_order_json(placed: PlacedOrderDTO) -> dict:
    return {
        "ok": True,
        "id": placed.order_id,
        "emailSent": placed.email_sent,
        "productId": placed.product_id,
        "newStock": placed.new_stock,
        "total": json_number(placed.total),
    }


def order_json(order: OrderDTO) -> dict:
    return {
        "id": order.id,
        "productId": order.product_id,
        "productName": order.product_name,
        "size": order.size,
        "color": order.color,
        "quantity": order.quantity,
        "price": json_number(order.price),
        "total": json_number(order.total),
        "employeeCode": order.employee_code,
        "name": order.name,
        "email": order.email,
        "phone": order.phone,
        "createdAt": order.created_at,
    }
