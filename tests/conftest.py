"""
Pytest Configuration and Centralized Fixtures.

Provides reusable catalogs and engines in common states:
- Small two-product catalog used by the walkthrough scenarios
- Engines with generous, tight and empty change reserves
- The default five-product machine built from settings
"""

import pytest

from vending.config import Settings
from vending.models.api import CatalogItem, ReservePolicy
from vending.services.engine import VendingEngine
from vending.services.factory import build_engine

# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def small_catalog() -> list[tuple[str, int, int]]:
    """Two products: A costs $60.00 (2 left), B costs $80.00 (1 left)."""
    return [("A", 6000, 2), ("B", 8000, 1)]


@pytest.fixture
def catalog_items() -> list[CatalogItem]:
    """The same two products as config models."""
    return [
        CatalogItem(name="A", cost_minor=6000, initial_stock=2),
        CatalogItem(name="B", cost_minor=8000, initial_stock=1),
    ]


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine(small_catalog: list[tuple[str, int, int]]) -> VendingEngine:
    """Engine with enough change to cover every product."""
    return VendingEngine(small_catalog, initial_change_reserve=100_000)


@pytest.fixture
def low_change_engine(small_catalog: list[tuple[str, int, int]]) -> VendingEngine:
    """Engine seeded with $4.00 of change, below every product price."""
    return VendingEngine(small_catalog, initial_change_reserve=400)


@pytest.fixture
def engine_factory(small_catalog: list[tuple[str, int, int]]):
    """Factory for engines with a chosen reserve and policy."""

    def _create_engine(
        change_reserve: int = 100_000,
        reserve_policy: ReservePolicy = ReservePolicy.PERMIT_NEGATIVE,
        catalog: list[tuple[str, int, int]] | None = None,
    ) -> VendingEngine:
        return VendingEngine(
            catalog if catalog is not None else small_catalog,
            initial_change_reserve=change_reserve,
            reserve_policy=reserve_policy,
        )

    return _create_engine


@pytest.fixture
def default_engine() -> VendingEngine:
    """Five-product machine from the default settings."""
    return build_engine(Settings())
