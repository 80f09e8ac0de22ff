"""
Application Configuration - Pydantic Settings for type-safe config.

NO DICTIONARIES - All configuration is strongly typed.
FAIL FAST - Critical config is validated at startup.
"""

import sys

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vending.models.api import CatalogItem, ReservePolicy


class ConfigurationError(Exception):
    """Raised when critical configuration is missing or invalid."""

    pass


def _default_catalog() -> list[CatalogItem]:
    """Stock loaded into a fresh machine when no catalog is configured."""
    return [
        CatalogItem(name="Biskuit", cost_minor=6000, initial_stock=2),
        CatalogItem(name="Chips", cost_minor=8000, initial_stock=1),
        CatalogItem(name="Oreo", cost_minor=10000, initial_stock=50),
        CatalogItem(name="Tango", cost_minor=12000, initial_stock=2),
        CatalogItem(name="Cokelat", cost_minor=15000, initial_stock=4),
    ]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Machine Configuration
    catalog: list[CatalogItem] = Field(default_factory=_default_catalog)
    initial_change_reserve_minor: int = 400  # $4.00 in cents
    accepted_denominations: list[int] = Field(
        default_factory=lambda: [2000, 5000, 10000, 20000, 50000]
    )
    reserve_policy: ReservePolicy = ReservePolicy.PERMIT_NEGATIVE

    # Service identity
    service_name: str = "vending-engine"
    version: str = "0.1.0"

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"  # json or console

    # Observability - Metrics
    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="VENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_critical_config(self) -> "Settings":
        """
        FAIL FAST: Validate machine configuration at startup.

        A machine with no products, a negative float of change or a
        denomination it can never accept must not be built.
        """
        errors: list[str] = []

        if not self.catalog:
            errors.append("VENDING_CATALOG must list at least one product")

        if self.initial_change_reserve_minor < 0:
            errors.append(
                "VENDING_INITIAL_CHANGE_RESERVE_MINOR must be zero or greater, "
                f"got: {self.initial_change_reserve_minor}"
            )

        if not self.accepted_denominations:
            errors.append("VENDING_ACCEPTED_DENOMINATIONS must not be empty")
        elif any(d <= 0 for d in self.accepted_denominations):
            errors.append(
                "VENDING_ACCEPTED_DENOMINATIONS must be positive, "
                f"got: {self.accepted_denominations}"
            )

        if self.log_format not in ("json", "console"):
            errors.append(f"VENDING_LOG_FORMAT must be json or console, got: {self.log_format}")

        if errors:
            error_msg = "\n".join(
                [
                    "",
                    "=" * 60,
                    "CRITICAL CONFIGURATION ERROR - MACHINE CANNOT START",
                    "=" * 60,
                    *[f"  x {e}" for e in errors],
                    "=" * 60,
                    "",
                ]
            )
            print(error_msg, file=sys.stderr)
            raise ConfigurationError(error_msg)

        return self


# Global settings instance - validates at import time
settings = Settings()


def get_settings() -> Settings:
    """Get application settings instance."""
    return settings
