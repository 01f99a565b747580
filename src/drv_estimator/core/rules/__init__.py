"""Statutory rules and thresholds for pension calculation."""

from drv_estimator.core.rules.pension_constants import (
    DEDUCTION_PER_MONTH,
    MAX_DEDUCTION_MONTHS,
    MAX_DEDUCTION_RATE,
    MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM,
    AgeOffset,
    earliest_deduction_free_date,
    earliest_deduction_free_start,
    severe_disability_retirement_age,
    severe_disability_retirement_date,
    standard_retirement_age,
    statutory_retirement_date,
    womens_early_retirement_age,
    womens_early_retirement_date,
)

__all__ = [
    "DEDUCTION_PER_MONTH",
    "MAX_DEDUCTION_MONTHS",
    "MAX_DEDUCTION_RATE",
    "MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM",
    "AgeOffset",
    "earliest_deduction_free_date",
    "earliest_deduction_free_start",
    "severe_disability_retirement_age",
    "severe_disability_retirement_date",
    "standard_retirement_age",
    "statutory_retirement_date",
    "womens_early_retirement_age",
    "womens_early_retirement_date",
]
