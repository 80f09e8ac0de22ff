"""
Tests for Prometheus metrics.

Each test uses its own registry so counters start at zero.
"""

import pytest
from prometheus_client import CollectorRegistry

from vending.observability.metrics import VendingMetrics


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def vending_metrics(registry: CollectorRegistry) -> VendingMetrics:
    return VendingMetrics(enabled=True, registry=registry)


class TestVendingMetrics:
    """Tests for VendingMetrics helpers."""

    def test_service_info(self, registry, vending_metrics):
        """Service info carries the service name."""
        value = registry.get_sample_value(
            "vending_service_info",
            {"version": "0.1.0", "service_name": "vending-engine"},
        )
        assert value == 1.0

    def test_record_insert(self, registry, vending_metrics):
        """Inserts are counted by accepted flag."""
        vending_metrics.record_insert(accepted=True, amount_minor=5000)
        vending_metrics.record_insert(accepted=True, amount_minor=2000)
        vending_metrics.record_insert(accepted=False, amount_minor=50)

        assert registry.get_sample_value(
            "vending_currency_inserted_total", {"accepted": "True"}
        ) == 2.0
        assert registry.get_sample_value(
            "vending_currency_inserted_total", {"accepted": "False"}
        ) == 1.0
        assert registry.get_sample_value("vending_currency_inserted_minor_sum") == 7000.0

    def test_record_purchase(self, registry, vending_metrics):
        """Purchases are counted by outcome; change only for completed sales."""
        vending_metrics.record_purchase("completed", change_minor=1000)
        vending_metrics.record_purchase("sold_out")

        assert registry.get_sample_value(
            "vending_purchases_total", {"outcome": "completed"}
        ) == 1.0
        assert registry.get_sample_value(
            "vending_purchases_total", {"outcome": "sold_out"}
        ) == 1.0
        assert registry.get_sample_value("vending_change_dispensed_minor_count") == 1.0
        assert registry.get_sample_value("vending_change_dispensed_minor_sum") == 1000.0

    def test_set_change_reserve(self, registry, vending_metrics):
        """Reserve gauge follows the latest value, including negatives."""
        vending_metrics.set_change_reserve(400)
        vending_metrics.set_change_reserve(-600)
        assert registry.get_sample_value("vending_change_reserve_minor") == -600.0

    def test_record_error(self, registry, vending_metrics):
        """Errors are counted by type and operation."""
        vending_metrics.record_error("ProductIndexError", "product_at")
        assert registry.get_sample_value(
            "vending_errors_total",
            {"error_type": "ProductIndexError", "operation": "product_at"},
        ) == 1.0

    def test_disabled_records_nothing(self, registry):
        """Disabled metrics skip recording."""
        disabled = VendingMetrics(enabled=False, registry=registry)
        disabled.record_insert(accepted=True, amount_minor=5000)
        disabled.record_purchase("completed", change_minor=100)
        assert registry.get_sample_value(
            "vending_currency_inserted_total", {"accepted": "True"}
        ) is None
        assert registry.get_sample_value("vending_change_dispensed_minor_count") == 0.0
