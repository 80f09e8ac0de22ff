"""
Metrics Collection with Prometheus.

Exposes machine business metrics for monitoring.
"""

from enum import Enum

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram, Info

from vending.config import settings
from vending.models.api import PurchaseOutcome


class MetricLabels(str, Enum):
    """Standard metric label names."""

    ACCEPTED = "accepted"
    OUTCOME = "outcome"
    OPERATION = "operation"
    ERROR_TYPE = "error_type"


class VendingMetrics:
    """
    Centralized metrics for the vending engine.

    Covers:
    - Currency inserts (accepted/rejected, amounts)
    - Purchases (outcome, change dispensed)
    - Change reserve level
    - Caller errors
    """

    def __init__(self, enabled: bool = True, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize all Prometheus metrics."""
        self.enabled = enabled

        # ====================================================================
        # Service Info
        # ====================================================================
        self.service_info = Info(
            "vending_service",
            "Service information",
            registry=registry,
        )
        self.service_info.info(
            {
                "version": settings.version,
                "service_name": settings.service_name,
            }
        )

        # ====================================================================
        # Currency Metrics
        # ====================================================================
        self.currency_inserted_total = Counter(
            "vending_currency_inserted_total",
            "Total coin or note insert events",
            [MetricLabels.ACCEPTED.value],
            registry=registry,
        )

        self.currency_inserted_minor = Histogram(
            "vending_currency_inserted_minor",
            "Accepted insert amounts in minor units (cents)",
            buckets=(2000, 5000, 10000, 20000, 50000),
            registry=registry,
        )

        # ====================================================================
        # Purchase Metrics
        # ====================================================================
        self.purchases_total = Counter(
            "vending_purchases_total",
            "Total purchase attempts",
            [MetricLabels.OUTCOME.value],
            registry=registry,
        )

        self.change_dispensed_minor = Histogram(
            "vending_change_dispensed_minor",
            "Change placed in the return tray per purchase, minor units",
            buckets=(0, 100, 500, 1000, 2000, 5000, 10000, 25000, 50000),
            registry=registry,
        )

        self.change_reserve_minor = Gauge(
            "vending_change_reserve_minor",
            "Aggregate change the machine holds, minor units",
            registry=registry,
        )

        # ====================================================================
        # Error Metrics
        # ====================================================================
        self.errors_total = Counter(
            "vending_errors_total",
            "Total caller errors by type",
            [MetricLabels.ERROR_TYPE.value, MetricLabels.OPERATION.value],
            registry=registry,
        )

    # ========================================================================
    # Helper Methods
    # ========================================================================

    def record_insert(self, accepted: bool, amount_minor: int) -> None:
        """Record a currency insert event."""
        if not self.enabled:
            return
        self.currency_inserted_total.labels(accepted=str(accepted)).inc()
        if accepted:
            self.currency_inserted_minor.observe(amount_minor)

    def record_purchase(self, outcome: str, change_minor: int = 0) -> None:
        """Record a purchase attempt and, on success, the change paid out."""
        if not self.enabled:
            return
        self.purchases_total.labels(outcome=outcome).inc()
        if outcome == PurchaseOutcome.COMPLETED.value:
            self.change_dispensed_minor.observe(change_minor)

    def set_change_reserve(self, amount_minor: int) -> None:
        """Publish the current change reserve."""
        if not self.enabled:
            return
        self.change_reserve_minor.set(amount_minor)

    def record_error(self, error_type: str, operation: str) -> None:
        """Record error occurrence."""
        if not self.enabled:
            return
        self.errors_total.labels(error_type=error_type, operation=operation).inc()


# Global metrics instance
metrics = VendingMetrics(enabled=settings.metrics_enabled)
