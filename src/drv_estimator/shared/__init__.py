"""Shared utilities for DRV Estimator."""

from drv_estimator.shared.dates import (
    HOME_TIMEZONE,
    add_years_months,
    first_of_month,
    is_valid_birth_date,
    months_between,
    next_first_of_month,
    normalize_to_midnight,
    years_between,
)
from drv_estimator.shared.formatters import (
    format_currency,
    format_date,
    format_duration,
    format_percentage,
)

__all__ = [
    # Dates
    "HOME_TIMEZONE",
    "add_years_months",
    "first_of_month",
    "is_valid_birth_date",
    "months_between",
    "next_first_of_month",
    "normalize_to_midnight",
    "years_between",
    # Formatters
    "format_currency",
    "format_date",
    "format_duration",
    "format_percentage",
]
