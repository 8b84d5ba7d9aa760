"""
Models Package - Database entity, domain model and input schemas.
"""

from models.entities import ProductRecord
from models.product import Product, PRODUCT_COLUMNS
from models.product_form import ProductForm, parse_amount, optional_amount
from models.list_preferences import ListPreferences, DEFAULT_MARGIN_PCT

__all__ = [
    # Database
    "ProductRecord",
    # Domain
    "Product",
    "PRODUCT_COLUMNS",
    # Input schemas
    "ProductForm",
    "parse_amount",
    "optional_amount",
    # Preferences
    "ListPreferences",
    "DEFAULT_MARGIN_PCT",
]
