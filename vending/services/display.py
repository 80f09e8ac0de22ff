"""
Display text for the machine front panel.

All amounts are integer minor units (cents) and render as US dollars.
"""

MSG_INSERT_COIN = "insert coin"
MSG_EXACT_CHANGE_ONLY = "exact change only"
MSG_SOLD_OUT = "sold out"
MSG_THANK_YOU = "thank you"


def format_currency(amount_minor: int) -> str:
    """Render minor units as dollars, e.g. 5000 -> "$50.00"."""
    sign = "-" if amount_minor < 0 else ""
    dollars, cents = divmod(abs(amount_minor), 100)
    return f"{sign}${dollars}.{cents:02d}"


def format_price(cost_minor: int) -> str:
    """Message shown when the inserted currency does not cover a product."""
    return f"price: {format_currency(cost_minor)}"


def format_return_tray(amount_minor: int) -> str:
    """Label for the return tray button."""
    return f"Collect {format_currency(amount_minor)}"
