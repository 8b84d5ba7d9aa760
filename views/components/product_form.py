"""
Create/edit product form component.
"""

import streamlit as st
from typing import Any, Callable, Optional


def render_product_form(
    values: dict,
    is_editing: bool,
    categories: list[str],
    saving: bool,
    error: Optional[str],
    on_submit: Callable[[dict], Any],
    on_cancel: Callable[[], None],
):
    """
    Render the product form.

    Args:
        values: Initial field values (name, brand, category, aisle, quantity, unit_price)
        is_editing: True when editing an existing product
        categories: Category suggestions
        saving: Disables the submit button while the queued save runs
        error: Message from the last failed submit, if any
        on_submit: Callback with the raw field values
        on_cancel: Callback to close the form
    """
    st.markdown(f"### {'Edit' if is_editing else 'New'} Product")

    current_category = values.get("category") or ""
    options = list(categories)
    if current_category and current_category not in options:
        options.append(current_category)

    with st.form("product_form", clear_on_submit=False):
        name = st.text_input("Name", value=values.get("name", ""))

        col_brand, col_category = st.columns(2)
        with col_brand:
            brand = st.text_input("Brand", value=values.get("brand", ""))
        with col_category:
            category = st.selectbox(
                "Category",
                options,
                index=options.index(current_category) if current_category in options else 0,
            )
            new_category = st.text_input("Or a new category", value="")

        col_aisle, col_qty, col_price = st.columns(3)
        with col_aisle:
            aisle = st.text_input("Aisle", value=values.get("aisle", ""))
        with col_qty:
            quantity = st.text_input("Qty", value=str(values.get("quantity", 1)))
        with col_price:
            unit_price = st.text_input("Price", value=str(values.get("unit_price", "")))

        col_save, col_cancel = st.columns(2)
        with col_save:
            submitted = st.form_submit_button(
                "Save", type="primary", disabled=saving, use_container_width=True
            )
        with col_cancel:
            cancelled = st.form_submit_button("Cancel", use_container_width=True)

    if cancelled:
        on_cancel()
        st.rerun()

    if error:
        st.error(error)

    if submitted:
        on_submit({
            "name": name,
            "brand": brand,
            "category": new_category.strip() or category,
            "aisle": aisle,
            "quantity": quantity,
            "unit_price": unit_price,
        })
        st.rerun()
