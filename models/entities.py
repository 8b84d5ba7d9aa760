"""
SQLAlchemy ORM Entity Models

The catalog lives in a single table on the hosted database. Every column
except the name is optional or defaulted so rows written by other clients
(or by hand in the database console) still load.
"""

from sqlalchemy import Column, Integer, String, DateTime, Boolean, Float
from sqlalchemy.sql import func

from config.database import Base


class ProductRecord(Base):
    """
    A product in the household catalog.

    ToBuy marks the product for this month's list (planning mode);
    InCart marks it as collected while at the store (shopping mode).
    """
    __tablename__ = "products"

    ProductId = Column(Integer, primary_key=True, autoincrement=True)
    Name = Column(String(200), nullable=False)
    Brand = Column(String(200), nullable=True)
    Category = Column(String(100), nullable=True)
    Aisle = Column(String(50), nullable=True)       # Free text, e.g. "7" or "Bakery"
    Quantity = Column(Float, nullable=False, default=1)
    UnitPrice = Column(Float, nullable=False, default=0)
    ToBuy = Column(Boolean, nullable=False, default=False)
    InCart = Column(Boolean, nullable=False, default=False)
    CreatedDate = Column(DateTime, nullable=False, server_default=func.now())
