"""
Product card component.

One card per product: main check button, name, badges, and (when the
product is on the list) a price bar with quantity, editable unit price
and line total.
"""

import streamlit as st
from typing import Any, Callable

from models.product import Product
from views.components.formatting import format_money, format_quantity


def _is_struck(product: Product, shopping_mode: bool) -> bool:
    # Collected while shopping, or not on the list while planning
    if shopping_mode:
        return product.in_cart
    return not product.to_buy


def render_product_card(
    product: Product,
    shopping_mode: bool,
    currency: str,
    on_toggle: Callable[[Any], None],
    on_edit: Callable[[Any], None],
    on_delete: Callable[[Any], None],
    on_price_change: Callable[[Any, float], None],
):
    """
    Render a single product card.

    Args:
        product: The product to show
        shopping_mode: True while at the store
        currency: Currency symbol for amounts
        on_toggle: Callback for the main check button
        on_edit: Callback to open the edit form
        on_delete: Callback to ask for deletion (planning mode only)
        on_price_change: Callback with a unit price edited in place
    """
    product_id = product.id
    checked = product.in_cart if shopping_mode else product.to_buy

    with st.container(border=True):
        col_check, col_name, col_actions = st.columns([0.6, 5, 1.2])

        with col_check:
            icon = "✅" if checked else "⬜"
            help_text = "In cart" if shopping_mode else "To buy"
            if st.button(icon, key=f"toggle_{product_id}", help=help_text):
                on_toggle(product_id)
                st.rerun()

        with col_name:
            if _is_struck(product, shopping_mode):
                st.markdown(f"~~{product.name}~~")
            else:
                st.markdown(f"**{product.name}**")

            badges = [f"`{product.brand or '-'}`", f"`{product.category or '-'}`"]
            if product.aisle:
                prefix = "Aisle " if shopping_mode else ""
                badges.append(f"**{prefix}{product.aisle}**")
            st.caption(" · ".join(badges))

        with col_actions:
            col_edit, col_delete = st.columns(2)
            with col_edit:
                if st.button("✏️", key=f"edit_{product_id}", help="Edit"):
                    on_edit(product_id)
                    st.rerun()
            with col_delete:
                if not shopping_mode and st.button("🗑️", key=f"delete_{product_id}", help="Delete"):
                    on_delete(product_id)
                    st.rerun()

        if product.to_buy:
            _render_price_bar(product, currency, on_price_change)


def _render_price_bar(
    product: Product,
    currency: str,
    on_price_change: Callable[[Any, float], None],
):
    """Quantity, editable unit price and line total."""
    product_id = product.id
    price_key = f"price_{product_id}"

    col_qty, col_price, col_total = st.columns([1, 3, 2])

    with col_qty:
        st.caption("Qty")
        st.markdown(f"**{format_quantity(product.quantity)}**")

    with col_price:
        # Committed on change (enter/blur), not on every keystroke
        st.number_input(
            f"Unit price ({currency})",
            min_value=0.0,
            value=float(product.unit_price or 0),
            step=0.01,
            format="%.2f",
            key=price_key,
            on_change=lambda: on_price_change(product_id, st.session_state[price_key]),
        )

    with col_total:
        st.caption("Total")
        st.markdown(f"**{format_money(product.line_total, currency)}**")
