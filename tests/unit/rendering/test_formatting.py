"""Unit tests for the shared rendering formatters."""

import pytest

from labelgraph.services.rendering.formatting import format_number, format_quantity


class TestFormatNumber:
    """Tests for plain, full-precision number rendering."""

    @pytest.mark.parametrize("value,expected", [
        (10.0, "10"),
        (0.5, "0.5"),
        (100, "100"),
        (0.0, "0"),
        (-2.50, "-2.5"),
        (1234567.0, "1234567"),
        (2500000.0, "2500000"),
        (123456789.125, "123456789.125"),
        (0.0000125, "0.0000125"),
        (1e-7, "0.0000001"),
    ])
    def test_plain_notation(self, value, expected):
        assert format_number(value) == expected

    def test_none(self):
        assert format_number(None) is None


class TestFormatQuantity:
    """Tests for number and unit pairing."""

    def test_large_quantity(self):
        assert format_quantity(1234567.0, "mg") == "1234567 mg"

    def test_small_quantity(self):
        assert format_quantity(0.0000125, "g") == "0.0000125 g"

    def test_count_unit_is_omitted(self):
        assert format_quantity(100.0, "1") == "100"
        assert format_quantity(100.0, "  ") == "100"

    def test_missing_value(self):
        assert format_quantity(None, "mg") is None
