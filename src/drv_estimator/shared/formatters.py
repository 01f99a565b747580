"""Value formatters for display (German conventions)."""

from datetime import date
from decimal import Decimal

GERMAN_MONTHS = (
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
)


def _german_number(value: Decimal, decimals: int) -> str:
    formatted = f"{value:,.{decimals}f}"
    # Swap separators: . for thousands, , for decimals
    return formatted.replace(",", "X").replace(".", ",").replace("X", ".")


def format_currency(value: Decimal, symbol: str = "€") -> str:
    """
    Format decimal as German currency.

    Args:
        value: Decimal value to format
        symbol: Currency symbol (default: €)

    Returns:
        Formatted string like "1.234,56 €"
    """
    negative = value < 0
    result = f"{_german_number(abs(value), 2)} {symbol}"
    return f"-{result}" if negative else result


def format_percentage(rate: Decimal, decimals: int = 1) -> str:
    """
    Format a fraction as percentage.

    Args:
        rate: Fraction (e.g., 0.144 for 14.4%)
        decimals: Number of decimal places

    Returns:
        Formatted string like "14,4 %"
    """
    return f"{_german_number(rate * 100, decimals)} %"


def format_points(points: Decimal) -> str:
    """Format pension points with two decimals ("42,17")."""
    return _german_number(points, 2)


def format_date(value: date) -> str:
    """Format a date as DD.MM.YYYY."""
    return value.strftime("%d.%m.%Y")


def format_month_year(value: date) -> str:
    """Format a date as "Januar 2037"."""
    return f"{GERMAN_MONTHS[value.month - 1]} {value.year}"


def format_duration(months: int) -> str:
    """
    Format a month count as years and months.

    Examples: "5 Monate", "1 Jahr", "2 Jahre 1 Monat"
    """
    years, rest = divmod(months, 12)
    year_text = f"{years} Jahr{'' if years == 1 else 'e'}"
    month_text = f"{rest} Monat{'' if rest == 1 else 'e'}"

    if years == 0:
        return month_text
    if rest == 0:
        return year_text
    return f"{year_text} {month_text}"
