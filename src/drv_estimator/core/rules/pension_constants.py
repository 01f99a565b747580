"""Statutory constants and age-threshold tables for the German pension.

Age limits follow SGB VI (Regelaltersgrenze §235, besonders langjährig
Versicherte §236b, schwerbehinderte Menschen §236a, Altersrente für Frauen
§237a). Economic values are those published for 2025.
Sources:
- https://www.deutsche-rentenversicherung.de/DRV/DE/Rente/Allgemeine-Informationen/Wissenswertes-zur-Rente/FAQs/Rente/Regelaltersgrenze/regelaltersgrenze.html
- https://www.deutsche-rentenversicherung.de/DRV/DE/Ueber-uns-und-Presse/Presse/Meldungen/2024/241122_rechengroessen_2025.html
"""

from bisect import bisect_left
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, NamedTuple, Optional, Union

from drv_estimator.shared.dates import (
    add_years_months,
    next_first_of_month,
    normalize_to_midnight,
)

if TYPE_CHECKING:
    from drv_estimator.core.models.enums import Sex


class AgeOffset(NamedTuple):
    """Age expressed as years plus months after the birth date."""

    years: int
    months: int


# === Early-retirement deduction (Abschlag, §77 SGB VI) ===

# 0.3% permanent reduction per month before the statutory date
DEDUCTION_PER_MONTH = Decimal("0.003")
# Only the last 48 months before the statutory date are counted
MAX_DEDUCTION_MONTHS = 48
# 48 x 0.3%
MAX_DEDUCTION_RATE = Decimal("0.144")

# Wartezeit for the deduction-free early pension, in years
MIN_INSURANCE_PERIOD_ESPECIALLY_LONG_TERM = 45

# === Economic values (Rechengrößen 2025) ===

DEFAULT_VALIDITY_YEAR = 2025
# Durchschnittsentgelt (annual, provisional)
DEFAULT_AVERAGE_WAGE = Decimal("50493")
# Aktueller Rentenwert per point
DEFAULT_POINT_VALUE = Decimal("40.79")
# Beitragsbemessungsgrenze (annual, uniform from 2025)
DEFAULT_CONTRIBUTION_CEILING = Decimal("96600")

# Grundfreibetrag (annual)
DEFAULT_TAX_FREE_ALLOWANCE = Decimal("12084")
# Besteuerungsanteil for new pensioners
DEFAULT_TAXABLE_QUOTA = Decimal("0.85")
# Flat average income tax rate used for the estimate
DEFAULT_AVERAGE_TAX_RATE = Decimal("0.15")

# Allgemeiner Beitragssatz KV; the pension fund pays half
DEFAULT_HEALTH_INSURANCE_RATE = Decimal("0.146")
# Durchschnittlicher Zusatzbeitrag, paid in full by the pensioner
DEFAULT_HEALTH_INSURANCE_SUPPLEMENT_RATE = Decimal("0.013")
# Pflegeversicherung, paid in full by the pensioner
DEFAULT_CARE_INSURANCE_RATE = Decimal("0.034")

# === Plausibility limits for user input ===

MAX_PLAUSIBLE_POINTS = Decimal("200")
MAX_SUPPLEMENTARY_PENSION = Decimal("5000")
# Retirement cannot start before this age
MIN_RETIREMENT_AGE = 60
# Starts before this age get a warning
EARLY_RETIREMENT_WARNING_AGE = 63

# === Age tables ===
# Format: (last birth year of the row, value). Rows are sorted by year; the
# first row covers every earlier year, the trailing default every later one.

STANDARD_RETIREMENT_AGE_TABLE: tuple[tuple[int, AgeOffset], ...] = (
    (1946, AgeOffset(65, 0)),
    (1947, AgeOffset(65, 1)),
    (1948, AgeOffset(65, 2)),
    (1949, AgeOffset(65, 3)),
    (1950, AgeOffset(65, 4)),
    (1951, AgeOffset(65, 5)),
    (1952, AgeOffset(65, 6)),
    (1953, AgeOffset(65, 7)),
    (1954, AgeOffset(65, 8)),
    (1955, AgeOffset(65, 9)),
    (1956, AgeOffset(65, 10)),
    (1957, AgeOffset(65, 11)),
    (1958, AgeOffset(66, 0)),
    (1959, AgeOffset(66, 2)),
    (1960, AgeOffset(66, 4)),
    (1961, AgeOffset(66, 6)),
    (1962, AgeOffset(66, 8)),
    (1963, AgeOffset(66, 10)),
)
STANDARD_RETIREMENT_AGE_DEFAULT = AgeOffset(67, 0)

# 45 qualifying years. Cohorts 1959-1963 are given as fixed cutoff dates.
# 1963 (2028-12-31) lies before 1962 (2029-12-31); kept as published here
# until the source is confirmed.
EARLIEST_DEDUCTION_FREE_TABLE: tuple[tuple[int, Union[AgeOffset, date]], ...] = (
    (1952, AgeOffset(63, 0)),
    (1953, AgeOffset(63, 2)),
    (1954, AgeOffset(63, 4)),
    (1955, AgeOffset(63, 6)),
    (1956, AgeOffset(63, 8)),
    (1957, AgeOffset(63, 10)),
    (1958, AgeOffset(64, 0)),
    (1959, date(2023, 12, 31)),
    (1960, date(2025, 12, 31)),
    (1961, date(2027, 12, 31)),
    (1962, date(2029, 12, 31)),
    (1963, date(2028, 12, 31)),
)
EARLIEST_DEDUCTION_FREE_DEFAULT = AgeOffset(65, 0)

SEVERE_DISABILITY_AGE_TABLE: tuple[tuple[int, AgeOffset], ...] = (
    (1951, AgeOffset(63, 0)),
    (1952, AgeOffset(63, 1)),
    (1953, AgeOffset(63, 2)),
    (1954, AgeOffset(63, 3)),
    (1955, AgeOffset(63, 4)),
    (1956, AgeOffset(63, 5)),
    (1957, AgeOffset(63, 6)),
    (1958, AgeOffset(63, 7)),
    (1959, AgeOffset(63, 8)),
    (1960, AgeOffset(63, 9)),
    (1961, AgeOffset(63, 10)),
    (1962, AgeOffset(63, 11)),
    (1963, AgeOffset(64, 0)),
    (1964, AgeOffset(64, 2)),
    (1965, AgeOffset(64, 4)),
    (1966, AgeOffset(64, 6)),
    (1967, AgeOffset(64, 8)),
    (1968, AgeOffset(64, 10)),
)
SEVERE_DISABILITY_AGE_DEFAULT = AgeOffset(65, 0)

# Altersrente für Frauen: only cohorts up to 1951
WOMENS_EARLY_RETIREMENT_LAST_COHORT = 1951
WOMENS_EARLY_RETIREMENT_AGE = AgeOffset(60, 0)


def _lookup(table, default, birth_year: int):
    """Find the row covering a birth year in a sorted threshold table."""
    index = bisect_left([year for year, _ in table], birth_year)
    if index < len(table):
        return table[index][1]
    return default


def standard_retirement_age(birth_year: int) -> AgeOffset:
    """Regelaltersgrenze for a birth year (65y0m up to 67y0m)."""
    return _lookup(STANDARD_RETIREMENT_AGE_TABLE, STANDARD_RETIREMENT_AGE_DEFAULT, birth_year)


def earliest_deduction_free_start(birth_year: int) -> Union[AgeOffset, date]:
    """Earliest deduction-free start after 45 qualifying years.

    Returns an age offset, or a fixed calendar date for the transitional
    cohorts 1959-1963.
    """
    return _lookup(EARLIEST_DEDUCTION_FREE_TABLE, EARLIEST_DEDUCTION_FREE_DEFAULT, birth_year)


def severe_disability_retirement_age(birth_year: int) -> AgeOffset:
    """Age for the pension for severely disabled persons."""
    return _lookup(SEVERE_DISABILITY_AGE_TABLE, SEVERE_DISABILITY_AGE_DEFAULT, birth_year)


def womens_early_retirement_age(birth_year: int) -> Optional[AgeOffset]:
    """Age for the women's pension, or None for cohorts after 1951."""
    if birth_year <= WOMENS_EARLY_RETIREMENT_LAST_COHORT:
        return WOMENS_EARLY_RETIREMENT_AGE
    return None


# === Absolute dates ===


def _start_date(birth_date: date, threshold: Union[AgeOffset, date]) -> date:
    """Turn a table value into a pension start (first of a month)."""
    if isinstance(threshold, AgeOffset):
        base = add_years_months(birth_date, threshold.years, threshold.months)
    else:
        base = threshold
    return next_first_of_month(base)


def statutory_retirement_date(birth_date: date) -> date:
    """First month of the regular old-age pension."""
    birth = normalize_to_midnight(birth_date)
    return _start_date(birth, standard_retirement_age(birth.year))


def earliest_deduction_free_date(birth_date: date) -> date:
    """Earliest deduction-free start for especially long-insured persons."""
    birth = normalize_to_midnight(birth_date)
    return _start_date(birth, earliest_deduction_free_start(birth.year))


def severe_disability_retirement_date(birth_date: date) -> date:
    """First month of the pension for severely disabled persons."""
    birth = normalize_to_midnight(birth_date)
    return _start_date(birth, severe_disability_retirement_age(birth.year))


def womens_early_retirement_date(birth_date: date, sex: "Sex") -> Optional[date]:
    """First month of the women's pension, or None if not applicable."""
    from drv_estimator.core.models.enums import Sex

    if sex != Sex.FEMALE:
        return None
    birth = normalize_to_midnight(birth_date)
    offset = womens_early_retirement_age(birth.year)
    if offset is None:
        return None
    return _start_date(birth, offset)
