"""
Services layer - pure business logic, no Streamlit dependencies.
"""

from services.change_feed import ChangeFeed
from services.list_engine import ListEngine, ImmediateExecutor, build_executor
from services.list_pipeline import (
    ALL_CATEGORIES,
    Totals,
    aisle_rank,
    category_registry,
    compute_totals,
    filter_products,
)
from services.product_store import (
    ProductStore,
    SqlProductStore,
    NullProductStore,
    StoreError,
    build_product_store,
)

__all__ = [
    "ChangeFeed",
    "ListEngine",
    "ImmediateExecutor",
    "build_executor",
    "ALL_CATEGORIES",
    "Totals",
    "aisle_rank",
    "category_registry",
    "compute_totals",
    "filter_products",
    "ProductStore",
    "SqlProductStore",
    "NullProductStore",
    "StoreError",
    "build_product_store",
]
