"""
Controllers layer - orchestration and session state management.
"""

from controllers.list_controller import ShoppingListController

__all__ = ["ShoppingListController"]
