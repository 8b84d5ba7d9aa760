"""
Views layer - UI presentation components.
"""

from views.shopping_list_view import ShoppingListView

__all__ = ["ShoppingListView"]
