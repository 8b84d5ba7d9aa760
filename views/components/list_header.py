"""
List header component: mode, totals, margin and search.
"""

import streamlit as st
from typing import Callable

from services.list_pipeline import Totals
from views.components.formatting import format_money


def render_list_header(
    shopping_mode: bool,
    totals: Totals,
    margin_pct: float,
    currency: str,
    on_toggle_mode: Callable[[], None],
    on_margin_change: Callable[[float], None],
):
    """
    Render the page title, mode switch and budget totals.

    Args:
        shopping_mode: True while at the store
        totals: Base, cart and marked-up totals
        margin_pct: Current margin percentage
        currency: Currency symbol for amounts
        on_toggle_mode: Callback to switch between planning and shopping
        on_margin_change: Callback with the new margin percentage
    """
    col_title, col_mode = st.columns([4, 1])

    with col_title:
        if shopping_mode:
            st.title("🛒 At the Store")
            st.caption(f"In cart: {format_money(totals.cart_total, currency)}")
        else:
            st.title("🏠 Planning")

    with col_mode:
        label = "Back home" if shopping_mode else "Go shopping"
        if st.button(label, key="toggle_mode", use_container_width=True):
            on_toggle_mode()
            st.rerun()

    col_base, col_margin, col_marked = st.columns(3)

    with col_base:
        st.metric("Shelf Total", format_money(totals.base_total, currency))

    with col_margin:
        st.number_input(
            "Margin (%)",
            value=float(margin_pct),
            step=1.0,
            key="margin_pct",
            on_change=lambda: on_margin_change(st.session_state["margin_pct"]),
        )

    with col_marked:
        st.metric("With Margin", format_money(totals.marked_up_total, currency))


def render_search_bar(
    search_term: str,
    on_change: Callable[[str], None],
    on_clear: Callable[[], None],
):
    """
    Render the product search box with a clear button.

    Args:
        search_term: Current search text
        on_change: Callback with the new search text
        on_clear: Callback to clear the search
    """
    col_search, col_clear = st.columns([6, 1])

    with col_search:
        term = st.text_input(
            "Search",
            value=search_term,
            placeholder="Search product or brand...",
            label_visibility="collapsed",
        )
        if term != search_term:
            on_change(term)
            st.rerun()

    with col_clear:
        if search_term and st.button("✕", key="clear_search", help="Clear search"):
            on_clear()
            st.rerun()
