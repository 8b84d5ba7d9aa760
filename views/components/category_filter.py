"""
Category filter bar component (planning mode only).
"""

import streamlit as st
from typing import Callable

from services.list_pipeline import ALL_CATEGORIES


def render_category_filter(
    categories: list[str],
    selected: str,
    on_select: Callable[[str], None],
    on_reset_month: Callable[[], None],
):
    """
    Render category chips plus the "new month" reset button.

    Args:
        categories: Category registry (defaults plus categories in use)
        selected: Active filter, or ALL_CATEGORIES
        on_select: Callback with the chosen category
        on_reset_month: Callback to ask for a new-month reset
    """
    options = [ALL_CATEGORIES] + categories

    col_chips, col_reset = st.columns([5, 1])

    with col_chips:
        choice = st.radio(
            "Category",
            options,
            index=options.index(selected) if selected in options else 0,
            format_func=lambda c: "All" if c == ALL_CATEGORIES else c,
            horizontal=True,
            label_visibility="collapsed",
        )
        if choice != selected:
            on_select(choice)
            st.rerun()

    with col_reset:
        if st.button("New month", key="reset_month", help="Unmark every product"):
            on_reset_month()
            st.rerun()
