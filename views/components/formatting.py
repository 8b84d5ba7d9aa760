"""
Display formatting helpers.
"""


def format_money(value: float, symbol: str = "R$") -> str:
    """Currency amount with two decimals, e.g. "R$ 11.00"."""
    return f"{symbol} {value:.2f}"


def format_quantity(value: float) -> str:
    """Whole quantities without a trailing ".0"."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
