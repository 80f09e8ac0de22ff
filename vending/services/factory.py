"""
Engine construction from configuration.

The host builds one engine at startup and passes it to whatever issues
commands; there is no process-wide engine instance.
"""

from vending.config import Settings, get_settings
from vending.services.engine import VendingEngine


def build_engine(settings: Settings | None = None) -> VendingEngine:
    """Create an engine loaded with the configured catalog and change reserve."""
    settings = settings or get_settings()
    return VendingEngine(
        catalog=settings.catalog,
        initial_change_reserve=settings.initial_change_reserve_minor,
        accepted_denominations=settings.accepted_denominations,
        reserve_policy=settings.reserve_policy,
    )
