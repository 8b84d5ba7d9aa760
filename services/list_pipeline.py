"""
List pipeline - derives what the page shows from the full collection.

Everything here is a pure function of its arguments: no Streamlit, no store,
and the input sequence is never mutated. The List Engine re-runs these on
every render.
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Iterable, Sequence

from models.product import Product


ALL_CATEGORIES = "all"  # Category filter sentinel
NO_AISLE_RANK = 999  # Products without a numeric aisle are visited last

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class Totals:
    """Budget figures for the current list."""
    base_total: float
    cart_total: float
    marked_up_total: float


# ==========================================
# Sort keys
# ==========================================

def aisle_rank(aisle: str | None) -> int:
    """
    Numeric rank of an aisle for the store walk.

    Uses the leading integer ("12", "12B" -> 12); anything else ranks last.
    """
    if not aisle:
        return NO_AISLE_RANK
    match = _LEADING_INT.match(str(aisle))
    if not match:
        return NO_AISLE_RANK
    return int(match.group(1))


def name_sort_key(name: str) -> tuple[str, str]:
    """
    Alphabetical key that ignores case and accents ("água" sorts with "agua").

    The original string breaks ties so the order is deterministic.
    """
    text = name or ""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), text)


def _shopping_key(product: Product) -> tuple[bool, int]:
    # Not-yet-collected first, then by aisle
    return (bool(product.in_cart), aisle_rank(product.aisle))


# ==========================================
# Filter / sort
# ==========================================

def matches_search(product: Product, search_term: str) -> bool:
    """Case-insensitive substring match on name or brand."""
    term = search_term.lower()
    if term in (product.name or "").lower():
        return True
    return bool(product.brand) and term in product.brand.lower()


def filter_products(
    products: Sequence[Product],
    search_term: str = "",
    category_filter: str = ALL_CATEGORIES,
    shopping_mode: bool = False,
) -> list[Product]:
    """
    Filter and order products for display.

    Steps, in order:
        1. Search on name/brand (when a term is given)
        2. Category (planning mode only, unless "all")
        3. Shopping mode: only "to buy" items, uncollected first, by aisle.
           Planning mode: everything, alphabetical by name.

    Returns:
        A new list; `products` is left untouched
    """
    result = list(products)

    if search_term:
        result = [p for p in result if matches_search(p, search_term)]

    if not shopping_mode and category_filter != ALL_CATEGORIES:
        result = [p for p in result if p.category == category_filter]

    if shopping_mode:
        result = [p for p in result if p.to_buy]
        return sorted(result, key=_shopping_key)

    return sorted(result, key=lambda p: name_sort_key(p.name))


# ==========================================
# Aggregation
# ==========================================

def compute_totals(products: Iterable[Product], margin_pct: float) -> Totals:
    """
    Totals over the full (unfiltered) collection.

    base_total counts every "to buy" product; cart_total only those also in
    the cart. A stale "in cart" on a product not marked to buy is ignored.
    """
    base_total = 0.0
    cart_total = 0.0
    for p in products:
        if not p.to_buy:
            continue
        base_total += p.line_total
        if p.in_cart:
            cart_total += p.line_total

    return Totals(
        base_total=base_total,
        cart_total=cart_total,
        marked_up_total=base_total * (1 + margin_pct / 100),
    )


def category_registry(products: Iterable[Product], defaults: Iterable[str]) -> list[str]:
    """Default categories plus every category in use, deduplicated and sorted."""
    in_use = {p.category for p in products if p.category}
    return sorted(set(defaults) | in_use)
