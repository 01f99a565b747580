"""Tests for display formatters."""

from datetime import date
from decimal import Decimal

import pytest

from drv_estimator.shared.formatters import (
    format_currency,
    format_date,
    format_duration,
    format_month_year,
    format_percentage,
    format_points,
)


class TestNumberFormatting:
    """Tests for German number formats."""

    def test_currency(self):
        assert format_currency(Decimal("1234.56")) == "1.234,56 €"
        assert format_currency(Decimal("0")) == "0,00 €"

    def test_currency_negative(self):
        assert format_currency(Decimal("-12.5")) == "-12,50 €"

    def test_percentage(self):
        assert format_percentage(Decimal("0.144")) == "14,4 %"
        assert format_percentage(Decimal("0.003"), decimals=2) == "0,30 %"

    def test_points(self):
        assert format_points(Decimal("42.1666")) == "42,17"


class TestDateFormatting:
    """Tests for date formats."""

    def test_date(self):
        assert format_date(date(2037, 1, 1)) == "01.01.2037"

    def test_month_year(self):
        assert format_month_year(date(2036, 3, 1)) == "März 2036"


class TestDuration:
    """Tests for format_duration."""

    @pytest.mark.parametrize(
        "months,expected",
        [
            (0, "0 Monate"),
            (1, "1 Monat"),
            (5, "5 Monate"),
            (12, "1 Jahr"),
            (25, "2 Jahre 1 Monat"),
            (48, "4 Jahre"),
        ],
    )
    def test_duration(self, months, expected):
        assert format_duration(months) == expected
