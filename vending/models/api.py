"""
API Models - Pydantic models for catalog configuration and engine views.

NO DICTIONARIES - All data structures are strongly typed.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReservePolicy(str, Enum):
    """How a purchase treats change owed beyond the change reserve."""

    PERMIT_NEGATIVE = "permit_negative"
    CLAMP = "clamp"
    REJECT = "reject"


class PurchaseOutcome(str, Enum):
    """Outcome label for a purchase attempt."""

    COMPLETED = "completed"
    SOLD_OUT = "sold_out"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_CHANGE = "insufficient_change"
    INVALID_INDEX = "invalid_index"


# ============================================================================
# Catalog Models
# ============================================================================


class CatalogItem(BaseModel):
    """One catalog line loaded from configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=255)
    cost_minor: int = Field(..., ge=0, description="Cost in minor units (cents)")
    initial_stock: int = Field(..., ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        if not v.strip():
            raise ValueError("name cannot be blank")
        return v


# ============================================================================
# Engine Views
# ============================================================================


class StockLevel(BaseModel):
    """Read-only view of one catalog entry."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0)
    name: str
    cost_minor: int = Field(..., ge=0)
    available: int = Field(..., ge=0)


class EngineSnapshot(BaseModel):
    """Point-in-time view of the engine balances and stock."""

    model_config = ConfigDict(frozen=True)

    accepted_minor: int = Field(..., ge=0, description="In-flight currency")
    return_tray_minor: int = Field(..., ge=0)
    change_reserve_minor: int = Field(
        ..., description="May be negative under ReservePolicy.PERMIT_NEGATIVE"
    )
    pending_message: str
    stock: list[StockLevel] = Field(default_factory=list)
