"""
Shopping List Controller - manages the list page's session state.

This controller handles:
- Building the List Engine once per browser session (preferences loaded
  from disk, change feed subscribed, first fetch)
- View state: category filter, search term, form and confirmation prompts
- Routing user actions to the engine

The remote store is shared by every session in the process.
"""

import logging
from typing import Any, Optional

import streamlit as st
from pydantic import ValidationError

from config.settings import Settings, get_settings
from models.product import Product
from models.product_form import ProductForm
from models.repositories import PreferencesRepository
from services.list_engine import ListEngine, build_executor
from services.list_pipeline import ALL_CATEGORIES, Totals
from services.product_store import ProductStore, StoreError, build_product_store

logger = logging.getLogger(__name__)

CONFIRM_DELETE = "delete"
CONFIRM_RESET = "reset"


@st.cache_resource
def get_product_store() -> ProductStore:
    """Process-wide store (one engine and change feed for all sessions)."""
    return build_product_store(get_settings())


class ShoppingListController:
    """Controller for the shopping list page."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._init_session_state()

    def _init_session_state(self):
        """Initialize session state if not already set."""
        if "shopping_list" not in st.session_state:
            st.session_state.shopping_list = {
                "engine": self._build_engine(),
                "category_filter": ALL_CATEGORIES,
                "search_term": "",
                "form_open": False,
                "editing_id": None,
                "saving": False,
                "pending_save": None,  # validated ProductForm waiting for the next run
                "form_error": None,
                "pending_confirm": None,  # (CONFIRM_DELETE, product_id) or (CONFIRM_RESET, None)
            }

    def _build_engine(self) -> ListEngine:
        """Create the engine, load preferences and fetch the collection."""
        prefs_repo = PreferencesRepository(
            self.settings.preferences_path,
            default_margin=self.settings.default_margin_pct,
        )
        engine = ListEngine(
            store=get_product_store(),
            preferences=prefs_repo.get(),
            on_preferences_change=prefs_repo.save,
            executor=build_executor(self.settings.write_workers),
            default_category=self.settings.default_category,
            default_categories=self.settings.default_categories,
        )
        engine.subscribe_to_store()
        engine.refresh()
        return engine

    @property
    def _state(self) -> dict:
        return st.session_state.shopping_list

    @property
    def engine(self) -> ListEngine:
        return self._state["engine"]

    # ==========================================
    # Derived data
    # ==========================================

    def is_loading(self) -> bool:
        return self.engine.loading

    def is_shopping_mode(self) -> bool:
        return self.engine.shopping_mode

    def get_margin(self) -> float:
        return self.engine.margin_pct

    def get_visible_products(self) -> list[Product]:
        """Products for the current mode, search and category."""
        return self.engine.view(
            search_term=self._state["search_term"],
            category_filter=self._state["category_filter"],
        )

    def get_totals(self) -> Totals:
        return self.engine.totals()

    def get_categories(self) -> list[str]:
        return self.engine.categories()

    def get_currency_symbol(self) -> str:
        return self.settings.currency_symbol

    def refresh(self):
        """Manual refetch."""
        self.engine.refresh()

    # ==========================================
    # View state
    # ==========================================

    def get_search_term(self) -> str:
        return self._state["search_term"]

    def set_search_term(self, term: str):
        self._state["search_term"] = term or ""

    def clear_search(self):
        self._state["search_term"] = ""

    def get_category_filter(self) -> str:
        return self._state["category_filter"]

    def set_category_filter(self, category: str):
        self._state["category_filter"] = category

    # ==========================================
    # Preferences
    # ==========================================

    def toggle_shopping_mode(self):
        self.engine.set_shopping_mode(not self.engine.shopping_mode)

    def set_margin(self, margin_pct: float):
        self.engine.set_margin(margin_pct)

    # ==========================================
    # Product actions
    # ==========================================

    def toggle_primary(self, product_id: Any):
        """Main check button: "in cart" while shopping, "to buy" while planning."""
        if self.engine.shopping_mode:
            self.engine.toggle_in_cart(product_id)
        else:
            self.engine.toggle_to_buy(product_id)

    def update_price(self, product_id: Any, value: Any):
        self.engine.update_unit_price(product_id, value)

    # ==========================================
    # Confirmations (delete, new month)
    # ==========================================

    def get_pending_confirm(self) -> Optional[tuple[str, Any]]:
        return self._state["pending_confirm"]

    def request_delete(self, product_id: Any):
        self._state["pending_confirm"] = (CONFIRM_DELETE, product_id)

    def request_reset_month(self):
        self._state["pending_confirm"] = (CONFIRM_RESET, None)

    def cancel_confirm(self):
        self._state["pending_confirm"] = None

    def confirm_pending(self) -> Optional[int]:
        """
        Run the action the user just confirmed.

        Returns:
            Number of products reset for a new month, otherwise None
        """
        pending = self._state["pending_confirm"]
        self._state["pending_confirm"] = None
        if not pending:
            return None

        action, product_id = pending
        if action == CONFIRM_DELETE:
            self.engine.delete(product_id)
            return None
        if action == CONFIRM_RESET:
            count = self.engine.reset_month()
            logger.info(f"New month started; {count} products reset")
            return count
        return None

    def describe_pending(self) -> str:
        """Question to show for the pending confirmation."""
        pending = self._state["pending_confirm"]
        if not pending:
            return ""
        action, product_id = pending
        if action == CONFIRM_RESET:
            return "Start a new month? Every product will be unmarked."
        product = self.engine.get(product_id)
        name = product.name if product else "this product"
        return f"Delete {name}?"

    # ==========================================
    # Create / edit form
    # ==========================================

    def is_form_open(self) -> bool:
        return self._state["form_open"]

    def is_saving(self) -> bool:
        return self._state["saving"]

    def get_form_error(self) -> Optional[str]:
        return self._state["form_error"]

    def get_editing_id(self) -> Any:
        return self._state["editing_id"]

    def open_new_form(self):
        self._state["editing_id"] = None
        self._state["form_open"] = True
        self._state["form_error"] = None

    def open_edit_form(self, product_id: Any):
        self._state["editing_id"] = product_id
        self._state["form_open"] = True
        self._state["form_error"] = None

    def close_form(self):
        self._state["form_open"] = False
        self._state["form_error"] = None
        self._state["editing_id"] = None

    def get_form_values(self) -> dict:
        """Initial field values: the edited product's, or blanks for a new one."""
        default_category = self.settings.default_category
        editing_id = self._state["editing_id"]
        if editing_id is not None:
            product = self.engine.get(editing_id)
            if product:
                return ProductForm.initial_values(product, default_category)
        return ProductForm.blank(default_category)

    def submit_form(self, values: dict) -> bool:
        """
        Validate the form and queue the save for the next script run.

        The page reruns with the submit button disabled, then calls
        run_pending_save().

        Returns:
            True if the save was queued, False on a validation error
            (message available from get_form_error)
        """
        try:
            form = ProductForm.model_validate(values)
        except ValidationError as e:
            self._state["form_error"] = _validation_message(e)
            return False

        self._state["form_error"] = None
        self._state["pending_save"] = form
        self._state["saving"] = True
        return True

    def run_pending_save(self) -> bool:
        """
        Save the queued form (waits for the store).

        Returns:
            True if the product was saved and the form closed
        """
        form = self._state["pending_save"]
        self._state["pending_save"] = None
        if form is None:
            self._state["saving"] = False
            return False

        try:
            self.engine.save_product(form, editing_id=self._state["editing_id"])
        except StoreError as e:
            logger.error(f"Saving product failed: {e}")
            self._state["form_error"] = str(e)
            return False
        finally:
            self._state["saving"] = False

        self.close_form()
        return True


def _validation_message(error: ValidationError) -> str:
    """Readable one-line summary of a pydantic validation error."""
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())) or "form"
        parts.append(f"{field.replace('_', ' ').capitalize()}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)
