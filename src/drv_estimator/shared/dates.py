"""Date normalization and month arithmetic in a fixed German calendar.

Every date that enters or leaves the engine passes through this module.
Dates are plain ``datetime.date`` values interpreted in Europe/Berlin, so a
timestamp taken late in the evening in another timezone never shifts the
civil date by one day.

The legal rules snap to month starts ("first of the following month"), so
month counts are computed on (year * 12 + month) and never from day
differences.
"""

import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Union
from zoneinfo import ZoneInfo

# Fixed home timezone for all calendar math
HOME_TIMEZONE = ZoneInfo("Europe/Berlin")

# Earliest birth date accepted for a calculation
EARLIEST_BIRTH_DATE = date(1920, 1, 1)

# Minimum age (years) of a person eligible for a calculation
MINIMUM_AGE = 18

DateLike = Union[date, datetime]


def normalize_to_midnight(value: DateLike) -> date:
    """Strip the time of day in the home timezone.

    Aware datetimes are converted to Europe/Berlin first. Naive datetimes
    are read as Berlin wall time. Plain dates are returned unchanged, so the
    function is idempotent.

    Args:
        value: Date or datetime to normalize

    Returns:
        Civil date in Europe/Berlin
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(HOME_TIMEZONE)
        return value.date()
    return value


def today() -> date:
    """Return the current civil date in the home timezone."""
    return datetime.now(HOME_TIMEZONE).date()


def now() -> datetime:
    """Return the current timestamp in the home timezone."""
    return datetime.now(HOME_TIMEZONE)


def make_date(year: int, month: int, day: int) -> date:
    """Create a calendar date (midnight, home timezone)."""
    return date(year, month, day)


# === Month snapping ===


def first_of_month(value: DateLike) -> date:
    """Snap a date to the first day of its month."""
    d = normalize_to_midnight(value)
    return d.replace(day=1)


def next_first_of_month(value: DateLike) -> date:
    """Snap forward to the first of the next month.

    A date that already is the first of a month is returned unchanged, so
    applying the function twice gives the same result as applying it once.
    """
    d = normalize_to_midnight(value)
    if d.day == 1:
        return d
    return add_years_months(d.replace(day=1), 0, 1)


def last_of_month(value: DateLike) -> date:
    """Return the last day of the date's month."""
    d = normalize_to_midnight(value)
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def add_years_months(value: DateLike, years: int = 0, months: int = 0) -> date:
    """Add years and months using calendar rules.

    The day is clamped to the length of the target month
    (31 Jan + 1 month = 28/29 Feb, 29 Feb + 1 year = 28 Feb).
    """
    d = normalize_to_midnight(value)
    total = d.year * 12 + (d.month - 1) + years * 12 + months
    year, month_index = divmod(total, 12)
    month = month_index + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def add_years(value: DateLike, years: int) -> date:
    """Add whole years (see add_years_months)."""
    return add_years_months(value, years, 0)


# === Spans ===


def _month_index(d: date) -> int:
    return d.year * 12 + d.month


def months_between(
    start: DateLike,
    end: DateLike,
    include_partial_current_month: bool = False,
) -> int:
    """Count full months between two dates.

    Both dates are snapped to the first of their month. With
    ``include_partial_current_month`` the count starts at the month after
    ``start``, which leaves out the remainder of the running month.

    Args:
        start: Start date
        end: End date
        include_partial_current_month: Start counting with the next month

    Returns:
        Number of months, never negative (an end before start gives 0)
    """
    start_month = first_of_month(start)
    end_month = first_of_month(end)

    if include_partial_current_month:
        start_month = add_years_months(start_month, 0, 1)

    return max(0, _month_index(end_month) - _month_index(start_month))


def years_between(
    start: DateLike,
    end: DateLike,
    include_partial_current_month: bool = False,
) -> Decimal:
    """Span in years as months / 12, same semantics as months_between."""
    months = months_between(start, end, include_partial_current_month)
    return Decimal(months) / Decimal(12)


def working_days_between(start: DateLike, end: DateLike) -> int:
    """Count Monday-Friday days in [start, end].

    Walks day by day; meant for short spans. Use the month helpers for
    anything measured in years.
    """
    current = normalize_to_midnight(start)
    last = normalize_to_midnight(end)
    count = 0
    while current <= last:
        if current.weekday() < 5:
            count += 1
        current += timedelta(days=1)
    return count


# === Ages ===


def age_on(birth_date: DateLike, on: DateLike) -> int:
    """Completed years of age at a given date."""
    years, _ = exact_age(birth_date, on)
    return years


def exact_age(birth_date: DateLike, on: Optional[DateLike] = None) -> tuple[int, int]:
    """Completed (years, months) of age at a given date (default: today)."""
    birth = normalize_to_midnight(birth_date)
    target = normalize_to_midnight(on) if on is not None else today()
    if target < birth:
        return 0, 0

    months = (target.year - birth.year) * 12 + (target.month - birth.month)
    if target.day < birth.day:
        months -= 1
    return divmod(months, 12)


# === Predicates ===


def is_past(value: DateLike, reference: Optional[date] = None) -> bool:
    """True if the date lies before today."""
    return normalize_to_midnight(value) < (reference or today())


def is_future(value: DateLike, reference: Optional[date] = None) -> bool:
    """True if the date lies after today."""
    return normalize_to_midnight(value) > (reference or today())


def is_today(value: DateLike, reference: Optional[date] = None) -> bool:
    """True if the date is today."""
    return normalize_to_midnight(value) == (reference or today())


def is_valid_birth_date(birth_date: DateLike, reference: Optional[date] = None) -> bool:
    """Check that a birth date lies in [1 Jan 1920, today - 18 years].

    Args:
        birth_date: Birth date to check
        reference: Date used as "today" (default: current Berlin date)

    Returns:
        True if the person may be used for a calculation
    """
    birth = normalize_to_midnight(birth_date)
    latest = add_years(reference or today(), -MINIMUM_AGE)
    return EARLIEST_BIRTH_DATE <= birth <= latest


# === Options ===


def retirement_start_options(
    start: Optional[DateLike] = None,
    count: int = 120,
) -> list[date]:
    """List consecutive month starts beginning with the start's month."""
    base = first_of_month(start if start is not None else today())
    return [add_years_months(base, 0, i) for i in range(count)]
