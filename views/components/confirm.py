"""
Inline confirmation prompt.
"""

import streamlit as st
from typing import Callable


def render_confirmation(
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Callable[[], None],
):
    """
    Render a yes/no prompt for a destructive action.

    Args:
        message: Question to ask
        on_confirm: Callback when the user confirms
        on_cancel: Callback when the user backs out
    """
    st.warning(message)
    col_yes, col_no, _ = st.columns([1, 1, 4])

    with col_yes:
        if st.button("Yes", type="primary", key="confirm_yes", use_container_width=True):
            on_confirm()
            st.rerun()

    with col_no:
        if st.button("Cancel", key="confirm_no", use_container_width=True):
            on_cancel()
            st.rerun()
