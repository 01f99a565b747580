"""Early-retirement deduction (Abschlag)."""

from datetime import date
from decimal import Decimal

from drv_estimator.core.rules.pension_constants import (
    DEDUCTION_PER_MONTH,
    MAX_DEDUCTION_MONTHS,
    MAX_DEDUCTION_RATE,
)
from drv_estimator.shared.dates import months_between


def deduction_months(chosen_date: date, statutory_date: date) -> int:
    """Months that incur a deduction, capped at 48.

    The running month is counted (``include_partial_current_month=False``),
    unlike the projection of months until retirement.
    """
    months_early = months_between(chosen_date, statutory_date, include_partial_current_month=False)
    return min(months_early, MAX_DEDUCTION_MONTHS)


def deduction_rate(
    chosen_date: date,
    statutory_date: date,
    earliest_deduction_free_date: date,
) -> Decimal:
    """Calculate the permanent deduction for an early start.

    Rules:
    - Start at or after the statutory date: no deduction
    - Start at or after the earliest deduction-free date (45 qualifying
      years): no deduction
    - Otherwise 0.3% per month before the statutory date, at most 48
      months and at most 14.4%

    Args:
        chosen_date: Requested pension start
        statutory_date: Regelaltersgrenze (first of month)
        earliest_deduction_free_date: Earliest start without deduction

    Returns:
        Deduction as fraction (0 to 0.144)
    """
    if chosen_date >= statutory_date:
        return Decimal("0")
    if chosen_date >= earliest_deduction_free_date:
        return Decimal("0")

    rate = deduction_months(chosen_date, statutory_date) * DEDUCTION_PER_MONTH
    return min(rate, MAX_DEDUCTION_RATE)
