"""
Input validation for the create/edit product form.

Streamlit text inputs hand back strings; these models coerce them into the
numeric fields the store expects and fill in defaults for blanks.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from models.product import Product


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_amount(value: Any) -> float:
    """Parse a number typed by a user ("4.50", "4,50", 4.5). Rejects inf and NaN."""
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    amount = float(value)
    if not math.isfinite(amount):
        raise ValueError(f"{value!r} is not a finite number")
    return amount


class ProductForm(BaseModel):
    """Schema for product create/edit validation."""
    name: str = Field(..., min_length=1, max_length=200)
    brand: str = Field(default="", max_length=200)
    category: str = Field(default="", max_length=100)
    aisle: str = Field(default="", max_length=50)
    quantity: float = Field(default=1, gt=0)
    unit_price: float = Field(default=0, ge=0)

    @field_validator("name", "brand", "category", "aisle", mode="before")
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace; None becomes empty."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        """Blank quantity means one unit."""
        if _blank(v):
            return 1
        return parse_amount(v)

    @field_validator("unit_price", mode="before")
    @classmethod
    def coerce_unit_price(cls, v):
        """Blank price means not priced yet."""
        if _blank(v):
            return 0
        return parse_amount(v)

    @classmethod
    def blank(cls, default_category: str) -> dict:
        """Initial field values for a new product."""
        return {
            "name": "",
            "brand": "",
            "category": default_category,
            "aisle": "",
            "quantity": 1,
            "unit_price": "",
        }

    @classmethod
    def initial_values(cls, product: Product, default_category: str) -> dict:
        """Field values to pre-fill the form when editing a product."""
        return {
            "name": product.name,
            "brand": product.brand or "",
            "category": product.category or default_category,
            "aisle": product.aisle or "",
            "quantity": product.quantity or 1,
            "unit_price": product.unit_price or "",
        }

    def to_fields(self, default_category: str) -> dict:
        """Store payload for create/update."""
        return {
            "name": self.name,
            "brand": self.brand or None,
            "category": self.category or default_category,
            "aisle": self.aisle or None,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }


def optional_amount(value: Any) -> Optional[float]:
    """Parse a price edited in place; None when it is not a valid non-negative number."""
    if _blank(value):
        return 0.0
    try:
        amount = parse_amount(value)
    except (TypeError, ValueError):
        return None
    if amount < 0:
        return None
    return amount
