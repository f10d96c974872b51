"""Product aggregate.

A product owns an ordered list of variants; each variant is one
size/color combination with its own stock count. Variants have no
identity outside their product.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money


def validate_stock(stock: int) -> int:
    """Return *stock* if it is a non-negative integer."""
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise ValidationError(
            f"Stock must be an integer, got {type(stock).__name__}"
        )
    if stock < 0:
        raise ValidationError("Stock cannot be negative")
    return stock


@dataclass
class Variant:
    """Invariant: ``stock`` is never negative."""

    size: str
    color: str
    stock: int = 0

    def __post_init__(self) -> None:
        validate_stock(self.stock)

    def matches(self, size: str, color: str) -> bool:
        return self.size == size and self.color == color

    def deduct(self, quantity: int) -> None:
        """Remove *quantity* units, rejecting rather than clamping."""
        if quantity <= 0:
            raise ValidationError("Deduction quantity must be positive")
        if quantity > self.stock:
            raise InsufficientStockError()
        self.stock -= quantity


@dataclass
class Product:
    """A product in the catalog.

    ``price`` is the authoritative unit price; order totals are always
    computed from it, never from anything a client sends.
    """

    id: int
    name: str
    price: Money
    image: str = ""
    variants: list[Variant] = field(default_factory=list)

    def find_variant(self, size: str, color: str) -> Variant | None:
        for variant in self.variants:
            if variant.matches(size, color):
                return variant
        return None

    def get_variant(self, size: str, color: str) -> Variant:
        variant = self.find_variant(size, color)
        if variant is None:
            raise EntityNotFoundError(
                f"Variant {size}/{color} not found for product #{self.id}"
            )
        return variant

    def deduct_stock(self, size: str, color: str, quantity: int) -> Variant:
        """Deduct from one variant; a missing variant counts as no stock."""
        variant = self.find_variant(size, color)
        if variant is None:
            raise InsufficientStockError()
        variant.deduct(quantity)
        return variant

    def set_stock(self, size: str, color: str, stock: int) -> Variant:
        """Overwrite a variant's stock (admin adjustment)."""
        variant = self.get_variant(size, color)
        variant.stock = validate_stock(stock)
        return variant
