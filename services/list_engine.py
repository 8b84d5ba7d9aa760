"""
List Engine - the in-memory shopping list and everything derived from it.

The engine owns the authoritative local copy of the product collection.
Mutations follow one policy: apply locally right away, then hand the remote
write to an executor and move on (fire-and-forget). There is no retry and no
rollback; a failed write is logged and the local state stays as the user left
it until the next refetch replaces the collection. In other words the local
list is eventually consistent with the store, with no compensation step.

This module is pure Python with no Streamlit dependencies.
"""

import logging
import weakref
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from config.settings import DEFAULT_CATEGORIES
from models.list_preferences import ListPreferences
from models.product import Product
from models.product_form import ProductForm, optional_amount
from services.list_pipeline import (
    ALL_CATEGORIES,
    Totals,
    category_registry,
    compute_totals,
    filter_products,
)
from services.product_store import ProductStore, StoreError

logger = logging.getLogger(__name__)


class ImmediateExecutor(Executor):
    """Executor that runs each call inline; used when background writes are off."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            future.set_exception(e)
        else:
            future.set_result(result)
        return future


def build_executor(write_workers: int) -> Executor:
    """Background thread pool for remote writes, or inline with 0 workers."""
    if write_workers <= 0:
        return ImmediateExecutor()
    return ThreadPoolExecutor(max_workers=write_workers, thread_name_prefix="store-write")


class ListEngine:
    """Holds the product collection and applies mutations to it."""

    def __init__(
        self,
        store: ProductStore,
        preferences: Optional[ListPreferences] = None,
        on_preferences_change: Optional[Callable[[ListPreferences], None]] = None,
        executor: Optional[Executor] = None,
        default_category: str = "Geral",
        default_categories: Optional[list[str]] = None,
    ):
        self.store = store
        self.preferences = preferences or ListPreferences()
        self.default_category = default_category
        self.default_categories = list(default_categories or DEFAULT_CATEGORIES)
        self._on_preferences_change = on_preferences_change
        self._executor = executor or build_executor(1)
        # Streamlit has no session-end hook: an engine dropped with its browser
        # session is torn down by garbage collection. The store holds refresh()
        # weakly, and this finalizer stops the write threads.
        self._shutdown_executor = weakref.finalize(self, self._executor.shutdown, wait=False)
        self._products: list[Product] = []
        self._unsubscribe: Optional[Callable[[], None]] = None
        self.loading = True

    # ==========================================
    # Collection
    # ==========================================

    @property
    def products(self) -> tuple[Product, ...]:
        """Snapshot of the full collection."""
        return tuple(self._products)

    def get(self, product_id: Any) -> Optional[Product]:
        """Find a product by ID in the local collection."""
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def refresh(self) -> bool:
        """
        Replace the collection with a fresh fetch from the store.

        A failed fetch is logged and leaves the collection as it was.
        The loading flag is cleared either way.

        Returns:
            True if the collection was replaced
        """
        if not self.store.is_configured():
            self.loading = False
            return False

        try:
            self._products = list(self.store.fetch_all())
            return True
        except StoreError as e:
            logger.error(f"Could not load products: {e}")
            return False
        finally:
            self.loading = False

    def subscribe_to_store(self) -> None:
        """Refetch whenever the store announces a change."""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.refresh)

    def close(self) -> None:
        """Stop listening for store changes. In-flight writes still finish."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._shutdown_executor()

    # ==========================================
    # Derived state
    # ==========================================

    @property
    def shopping_mode(self) -> bool:
        return self.preferences.shopping_mode

    @property
    def margin_pct(self) -> float:
        return self.preferences.margin_pct

    def view(self, search_term: str = "", category_filter: str = ALL_CATEGORIES) -> list[Product]:
        """Filtered, sorted products for the current mode."""
        return filter_products(
            self._products,
            search_term=search_term,
            category_filter=category_filter,
            shopping_mode=self.preferences.shopping_mode,
        )

    def totals(self) -> Totals:
        return compute_totals(self._products, self.preferences.margin_pct)

    def categories(self) -> list[str]:
        return category_registry(self._products, self.default_categories)

    # ==========================================
    # Preferences
    # ==========================================

    def set_shopping_mode(self, shopping_mode: bool) -> None:
        self._update_preferences(shopping_mode=bool(shopping_mode))

    def set_margin(self, margin_pct: float) -> None:
        self._update_preferences(margin_pct=float(margin_pct))

    def _update_preferences(self, **changes) -> None:
        self.preferences = self.preferences.model_copy(update=changes)
        if self._on_preferences_change is None:
            return
        try:
            self._on_preferences_change(self.preferences)
        except OSError as e:
            logger.error(f"Could not save preferences: {e}")

    # ==========================================
    # Mutations (optimistic, fire-and-forget)
    # ==========================================

    def _patch(self, product_id: Any, **changes) -> Optional[Product]:
        """Replace one product with an updated copy. Returns the new product."""
        updated = None
        patched = []
        for p in self._products:
            if p.id == product_id:
                updated = p.with_changes(**changes)
                patched.append(updated)
            else:
                patched.append(p)
        self._products = patched
        return updated

    def _write(self, description: str, operation: Callable[..., Any], *args) -> Optional[Future]:
        """Submit a remote write without waiting for it."""
        if not self.store.is_configured():
            return None
        future = self._executor.submit(operation, *args)
        future.add_done_callback(lambda f: self._log_write_result(description, f))
        return future

    @staticmethod
    def _log_write_result(description: str, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(f"Remote write failed ({description}): {error}")
        elif future.result() is False:
            logger.warning(f"Remote write had no effect ({description}): product not found")

    def toggle_to_buy(self, product_id: Any) -> Optional[bool]:
        """
        Flip the "to buy" flag.

        Unmarking a product also takes it out of the cart so no stale
        "in cart" survives to the next shopping trip.

        Returns:
            The new flag value, or None if the product is unknown
        """
        product = self.get(product_id)
        if product is None:
            return None

        changes = {"to_buy": not product.to_buy}
        if not changes["to_buy"]:
            changes["in_cart"] = False

        self._patch(product_id, **changes)
        self._write(f"toggle to buy on {product_id}", self.store.update, product_id, changes)
        return changes["to_buy"]

    def toggle_in_cart(self, product_id: Any) -> Optional[bool]:
        """Flip the "in cart" flag. Returns the new value, or None if unknown."""
        product = self.get(product_id)
        if product is None:
            return None

        changes = {"in_cart": not product.in_cart}
        self._patch(product_id, **changes)
        self._write(f"toggle in cart on {product_id}", self.store.update, product_id, changes)
        return changes["in_cart"]

    def update_unit_price(self, product_id: Any, value: Any) -> bool:
        """
        Send an edited unit price to the store.

        The local copy is not patched; the price shows up with the next
        refetch. Values that are not a non-negative number are dropped.
        """
        amount = optional_amount(value)
        if amount is None:
            logger.warning(f"Ignoring invalid unit price {value!r} for product {product_id}")
            return False

        self._write(
            f"update unit price on {product_id}",
            self.store.update,
            product_id,
            {"unit_price": amount},
        )
        return True

    def delete(self, product_id: Any) -> bool:
        """
        Remove a product locally, then delete it remotely.

        The caller is responsible for having asked the user first.

        Returns:
            True if the product was in the local collection
        """
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        self._write(f"delete {product_id}", self.store.delete, product_id)
        return len(self._products) < before

    def reset_month(self) -> int:
        """
        Start a new month: clear "to buy" and "in cart" everywhere.

        Only products with either flag set are touched, one remote update
        each. The caller is responsible for having asked the user first.

        Returns:
            Number of products reset
        """
        affected = [p.id for p in self._products if p.to_buy or p.in_cart]
        cleared = {"to_buy": False, "in_cart": False}

        for product_id in affected:
            self._patch(product_id, **cleared)
            self._write(f"reset {product_id}", self.store.update, product_id, dict(cleared))

        return len(affected)

    def save_product(self, form: ProductForm, editing_id: Any = None) -> Optional[Product]:
        """
        Create or update a product from the form (blocking).

        New products are always marked "to buy". The local collection is not
        patched; the store's change notification triggers the refetch.

        Raises:
            StoreError: if the store rejects the write or the edited product is gone
        """
        fields = form.to_fields(self.default_category)

        if not self.store.is_configured():
            return None

        if editing_id is not None:
            if not self.store.update(editing_id, fields):
                raise StoreError(f"Product {editing_id} no longer exists")
            current = self.get(editing_id)
            return current.with_changes(**fields) if current else None

        return self.store.create({**fields, "to_buy": True})
