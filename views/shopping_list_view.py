"""
Shopping List View - UI for planning and running the household list.

This view handles:
- Planning mode: mark what to buy, filter by category, start a new month
- Shopping mode: tick products into the cart, ordered by aisle
- Budget totals with the configurable margin
- Creating, editing and deleting products
"""

import streamlit as st

from controllers.list_controller import ShoppingListController
from views.components import (
    render_category_filter,
    render_confirmation,
    render_list_header,
    render_product_card,
    render_product_form,
    render_search_bar,
)


class ShoppingListView:
    """View for the shopping list page."""

    def __init__(self):
        self.controller = ShoppingListController()

    def render(self):
        """Main render method."""
        shopping_mode = self.controller.is_shopping_mode()

        render_list_header(
            shopping_mode=shopping_mode,
            totals=self.controller.get_totals(),
            margin_pct=self.controller.get_margin(),
            currency=self.controller.get_currency_symbol(),
            on_toggle_mode=self.controller.toggle_shopping_mode,
            on_margin_change=self.controller.set_margin,
        )

        render_search_bar(
            search_term=self.controller.get_search_term(),
            on_change=self.controller.set_search_term,
            on_clear=self.controller.clear_search,
        )

        if not shopping_mode:
            render_category_filter(
                categories=self.controller.get_categories(),
                selected=self.controller.get_category_filter(),
                on_select=self.controller.set_category_filter,
                on_reset_month=self.controller.request_reset_month,
            )

        if self.controller.get_pending_confirm():
            render_confirmation(
                message=self.controller.describe_pending(),
                on_confirm=self._confirm,
                on_cancel=self.controller.cancel_confirm,
            )

        st.markdown("---")

        if self.controller.is_form_open():
            self._render_form()
        else:
            if st.button("+ Add product", type="primary", key="add_product"):
                self.controller.open_new_form()
                st.rerun()

        self._render_products(shopping_mode)

    def _render_form(self):
        """Render the create/edit form."""
        render_product_form(
            values=self.controller.get_form_values(),
            is_editing=self.controller.get_editing_id() is not None,
            categories=self.controller.get_categories(),
            saving=self.controller.is_saving(),
            error=self.controller.get_form_error(),
            on_submit=self.controller.submit_form,
            on_cancel=self.controller.close_form,
        )

        # Submit queued the save on the previous run; the button above is disabled now
        if self.controller.is_saving():
            with st.spinner("Saving..."):
                self.controller.run_pending_save()
            st.rerun()

    def _render_products(self, shopping_mode: bool):
        """Render the visible product cards."""
        if self.controller.is_loading():
            st.info("Loading products...")
            return

        products = self.controller.get_visible_products()

        if not products:
            if shopping_mode:
                st.info("Nothing left to buy.")
            else:
                st.info("No products found.")
            return

        currency = self.controller.get_currency_symbol()
        for product in products:
            render_product_card(
                product=product,
                shopping_mode=shopping_mode,
                currency=currency,
                on_toggle=self.controller.toggle_primary,
                on_edit=self.controller.open_edit_form,
                on_delete=self.controller.request_delete,
                on_price_change=self.controller.update_price,
            )

    def _confirm(self):
        count = self.controller.confirm_pending()
        if count is not None:
            st.toast(f"{count} products unmarked for the new month")
