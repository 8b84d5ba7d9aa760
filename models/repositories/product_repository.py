"""
Product Repository - Data access for the products table.

Writes go through ORM instances (not bulk query updates) so the session's
flush events see every change and the change feed can announce it.
"""

from typing import Any, Optional

from sqlalchemy.orm import Session

from models.entities import ProductRecord
from models.product import Product, PRODUCT_COLUMNS


def to_product(record: ProductRecord) -> Product:
    """Map an entity row to the domain model."""
    return Product(
        id=record.ProductId,
        name=record.Name,
        brand=record.Brand,
        category=record.Category,
        aisle=record.Aisle,
        quantity=record.Quantity if record.Quantity is not None else 1,
        unit_price=record.UnitPrice if record.UnitPrice is not None else 0,
        to_buy=bool(record.ToBuy),
        in_cart=bool(record.InCart),
    )


def _columns(fields: dict) -> dict:
    """Translate domain field names to entity columns, rejecting unknown ones."""
    unknown = set(fields) - set(PRODUCT_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown product fields: {', '.join(sorted(unknown))}")
    return {PRODUCT_COLUMNS[name]: value for name, value in fields.items()}


class ProductRepository:
    """Repository for product database operations."""

    def __init__(self, db: Session):
        """Initialize with a database session."""
        self.db = db

    def get_all(self) -> list[Product]:
        """Get every product (unordered; the list pipeline sorts)."""
        return [to_product(r) for r in self.db.query(ProductRecord).all()]

    def get_by_id(self, product_id: Any) -> Optional[Product]:
        """Get a single product by ID."""
        record = self.db.get(ProductRecord, product_id)
        return to_product(record) if record else None

    def create(self, fields: dict) -> Product:
        """
        Insert a product.

        Args:
            fields: Domain field names (name, brand, ..., to_buy, in_cart)

        Returns:
            The stored product with its assigned ID
        """
        record = ProductRecord(**_columns(fields))
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        return to_product(record)

    def update(self, product_id: Any, fields: dict) -> bool:
        """Apply a partial update. Returns False if the product does not exist."""
        record = self.db.get(ProductRecord, product_id)
        if not record:
            return False

        for column, value in _columns(fields).items():
            setattr(record, column, value)
        self.db.commit()
        return True

    def delete(self, product_id: Any) -> bool:
        """Delete a product. Returns False if the product does not exist."""
        record = self.db.get(ProductRecord, product_id)
        if not record:
            return False

        self.db.delete(record)
        self.db.commit()
        return True
