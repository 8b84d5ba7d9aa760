"""
Product domain model - the in-memory shape the List Engine works with.

Kept separate from the ORM entity so the engine and pipeline never hold
database sessions or lazy attributes.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional


# Field names accepted in partial updates, mapped to entity columns
PRODUCT_COLUMNS = {
    "name": "Name",
    "brand": "Brand",
    "category": "Category",
    "aisle": "Aisle",
    "quantity": "Quantity",
    "unit_price": "UnitPrice",
    "to_buy": "ToBuy",
    "in_cart": "InCart",
}


@dataclass(frozen=True)
class Product:
    """A catalog product."""
    id: Any  # Assigned by the store, treated as opaque
    name: str
    brand: Optional[str] = None
    category: Optional[str] = None
    aisle: Optional[str] = None
    quantity: float = 1
    unit_price: float = 0
    to_buy: bool = False
    in_cart: bool = False

    @property
    def line_total(self) -> float:
        """Price of this line on the list."""
        return (self.unit_price or 0) * (self.quantity or 0)

    def with_changes(self, **changes) -> "Product":
        """Copy with some fields replaced."""
        return replace(self, **changes)
