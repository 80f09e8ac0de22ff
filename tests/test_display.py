"""
Tests for display formatting.
"""

import pytest

from vending.services.display import format_currency, format_price, format_return_tray


class TestFormatCurrency:
    """Tests for format_currency."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (0, "$0.00"),
            (5, "$0.05"),
            (50, "$0.50"),
            (5000, "$50.00"),
            (123456, "$1234.56"),
        ],
    )
    def test_format(self, amount, expected):
        """Minor units render as dollars with two decimals."""
        assert format_currency(amount) == expected

    def test_negative(self):
        """Negative amounts keep the sign ahead of the dollar mark."""
        assert format_currency(-600) == "-$6.00"


class TestFormatPrice:
    """Tests for format_price."""

    def test_price_message(self):
        """Price message prefixes the formatted cost."""
        assert format_price(6000) == "price: $60.00"


class TestFormatReturnTray:
    """Tests for format_return_tray."""

    def test_tray_label(self):
        """Tray label shows the amount to collect."""
        assert format_return_tray(50) == "Collect $0.50"
        assert format_return_tray(0) == "Collect $0.00"
