"""
Exception Classes - Strongly typed exception hierarchy.

Business outcomes (rejected coins, insufficient funds, sold out) are NOT
exceptions; the engine reports them as a False return and a display message.
These classes cover configuration and caller errors only.
"""


class VendingError(Exception):
    """Base exception for all vending engine errors."""

    pass


class InvalidCatalogError(VendingError, ValueError):
    """Raised when the catalog or change reserve given to the engine is invalid."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Invalid catalog: {message}")


class InvalidAmountError(VendingError, ValueError):
    """Raised when a currency amount can never represent a coin or note."""

    def __init__(self, amount: int) -> None:
        self.amount = amount
        super().__init__(f"Invalid currency amount: {amount}")


class ProductIndexError(VendingError, IndexError):
    """Raised when a caller addresses a catalog slot that does not exist."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Product index {index} out of range for {size} products")


class SoldOutError(VendingError):
    """Raised when stock is reduced below zero."""

    def __init__(self, product_name: str) -> None:
        self.product_name = product_name
        super().__init__(f"No stock for {product_name} is available at this time")
