"""
Household Shopping List

Plan the month's purchases at home, then tick them into the cart
at the store while the budget keeps up.
"""

import streamlit as st

# Page configuration (must be first Streamlit command)
st.set_page_config(
    page_title="Shopping List",
    page_icon="🛒",
    layout="wide"
)

from config import get_settings, setup_logging
from views.shopping_list_view import ShoppingListView

setup_logging(get_settings().log_level)

view = ShoppingListView()
view.render()
