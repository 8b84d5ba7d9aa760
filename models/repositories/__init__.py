"""
Repositories - Data access layer for the products table and local preferences.
"""

from models.repositories.product_repository import ProductRepository
from models.repositories.preferences_repository import PreferencesRepository

__all__ = ["ProductRepository", "PreferencesRepository"]
