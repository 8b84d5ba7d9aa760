"""
Product Store - the remote collection the List Engine reads and writes.

All durable state lives here. The engine only sees this interface:
fetch everything, create, update by id, delete by id, and subscribe to
"something changed" notifications.

Implementations:
- SqlProductStore: hosted relational database through SQLAlchemy
- NullProductStore: used when credentials are missing; reads are empty
  and writes are skipped without error
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from config.database import session_factory_from_settings
from config.settings import Settings
from models.product import Product
from models.repositories import ProductRepository
from services.change_feed import ChangeFeed

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The remote store could not complete an operation."""


class ProductStore(ABC):
    """Abstract base class for product collection stores."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Check if the store has the credentials it needs."""
        pass

    @abstractmethod
    def fetch_all(self) -> list[Product]:
        """
        Fetch the whole collection.

        Raises:
            StoreError: on transport or database failure
        """
        pass

    @abstractmethod
    def create(self, fields: dict) -> Optional[Product]:
        """Insert a product and return it with its assigned ID."""
        pass

    @abstractmethod
    def update(self, product_id: Any, fields: dict) -> bool:
        """Apply a partial update. Returns False if the ID is unknown."""
        pass

    @abstractmethod
    def delete(self, product_id: Any) -> bool:
        """Delete a product. Returns False if the ID is unknown."""
        pass

    @abstractmethod
    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Call `callback` (no arguments) after any change to the table.

        Returns:
            A function that cancels the subscription
        """
        pass


class NullProductStore(ProductStore):
    """Store used without credentials: the app runs empty and read-only."""

    def is_configured(self) -> bool:
        return False

    def fetch_all(self) -> list[Product]:
        return []

    def create(self, fields: dict) -> Optional[Product]:
        return None

    def update(self, product_id: Any, fields: dict) -> bool:
        return False

    def delete(self, product_id: Any) -> bool:
        return False

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return lambda: None


class SqlProductStore(ProductStore):
    """Product store backed by a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker, change_feed: Optional[ChangeFeed] = None):
        self.session_factory = session_factory
        self.change_feed = change_feed or ChangeFeed()
        self.change_feed.attach(session_factory)

    def is_configured(self) -> bool:
        return True

    def _run(self, action: str, operation: Callable[[ProductRepository], Any]) -> Any:
        """Run one repository call in its own session, translating DB errors."""
        db = self.session_factory()
        try:
            return operation(ProductRepository(db))
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(f"Could not {action}: {e}") from e
        finally:
            db.close()

    def fetch_all(self) -> list[Product]:
        return self._run("load products", lambda repo: repo.get_all())

    def create(self, fields: dict) -> Optional[Product]:
        return self._run("create product", lambda repo: repo.create(fields))

    def update(self, product_id: Any, fields: dict) -> bool:
        return self._run(
            f"update product {product_id}",
            lambda repo: repo.update(product_id, fields),
        )

    def delete(self, product_id: Any) -> bool:
        return self._run(
            f"delete product {product_id}",
            lambda repo: repo.delete(product_id),
        )

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        return self.change_feed.subscribe(callback)


def build_product_store(settings: Settings) -> ProductStore:
    """Pick the SQL store when both credentials are set, otherwise the null store."""
    session_factory = session_factory_from_settings(settings)
    if session_factory is None:
        logger.info("Store credentials not set; running with an empty read-only list")
        return NullProductStore()
    return SqlProductStore(session_factory)
