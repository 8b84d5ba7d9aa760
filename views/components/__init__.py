"""
Reusable UI components.
"""

from views.components.category_filter import render_category_filter
from views.components.confirm import render_confirmation
from views.components.formatting import format_money, format_quantity
from views.components.list_header import render_list_header, render_search_bar
from views.components.product_card import render_product_card
from views.components.product_form import render_product_form

__all__ = [
    # Header
    "render_list_header",
    "render_search_bar",
    "render_category_filter",
    # Products
    "render_product_card",
    "render_product_form",
    # Prompts
    "render_confirmation",
    # Formatting
    "format_money",
    "format_quantity",
]
