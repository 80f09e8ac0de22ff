"""
Domain Models - Internal business logic models using dataclasses.

NO DICTIONARIES - All data structures are strongly typed dataclasses.
"""

from dataclasses import dataclass

from vending.exceptions import InvalidCatalogError, SoldOutError
from vending.services.display import format_currency


@dataclass(frozen=True)
class Product:
    """Immutable product identity - equal and hashed by name and cost."""

    name: str
    cost_minor: int

    def __post_init__(self) -> None:
        """Validate product fields."""
        if not self.name:
            raise InvalidCatalogError("product name cannot be empty")
        if self.cost_minor < 0:
            raise InvalidCatalogError(
                f"cost of {self.name} must be zero or greater: {self.cost_minor}"
            )

    def __str__(self) -> str:
        return f"{self.name}/{format_currency(self.cost_minor)}"


@dataclass
class StockEntry:
    """A product and how many units of it are left in the machine."""

    product: Product
    available: int

    def __post_init__(self) -> None:
        """Validate stock count."""
        if self.available < 0:
            raise InvalidCatalogError(
                f"stock of {self.product.name} must be zero or greater: {self.available}"
            )

    @property
    def sold_out(self) -> bool:
        return self.available == 0

    def reduce_available(self) -> None:
        """
        Take one unit out of stock.

        Raises SoldOutError if nothing is left; callers check first.
        """
        if self.available < 1:
            raise SoldOutError(self.product.name)
        self.available -= 1

    def __str__(self) -> str:
        return f"x{self.available} {self.product}"
