"""Input validators for DRV Estimator.

Each check returns ``(True, "")`` or ``(False, reason)`` with a German
message for the user. ``validate_person`` collects all issues; the engine
itself never reports these, it expects validated input.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from drv_estimator.core.models.configuration import Configuration
from drv_estimator.core.models.person import Person
from drv_estimator.core.models.validation import RetirementStartCheck, ValidationIssue
from drv_estimator.core.rules.pension_constants import (
    EARLY_RETIREMENT_WARNING_AGE,
    MAX_PLAUSIBLE_POINTS,
    MAX_SUPPLEMENTARY_PENSION,
    MIN_RETIREMENT_AGE,
)
from drv_estimator.shared.dates import (
    EARLIEST_BIRTH_DATE,
    MINIMUM_AGE,
    age_on,
    is_valid_birth_date,
)
from drv_estimator.shared.exceptions import PersonValidationError
from drv_estimator.shared.formatters import format_currency


def validate_birth_date(birth_date: date, today: Optional[date] = None) -> tuple[bool, str]:
    """Birth date between 1 Jan 1920 and today minus 18 years."""
    if is_valid_birth_date(birth_date, today):
        return True, ""
    return False, (
        f"Bitte geben Sie ein gültiges Geburtsdatum ein (ab {EARLIEST_BIRTH_DATE.year}, "
        f"Mindestalter {MINIMUM_AGE} Jahre)"
    )


def validate_monthly_income(amount: Decimal, contribution_ceiling: Decimal) -> tuple[bool, str]:
    """Income must be non-negative and not above the monthly ceiling."""
    if amount < 0:
        return False, "Das Einkommen darf nicht negativ sein"

    max_monthly = contribution_ceiling / 12
    if amount > max_monthly:
        return False, (
            f"Das monatliche Einkommen darf {format_currency(max_monthly)} nicht überschreiten "
            "(Beitragsbemessungsgrenze)"
        )
    return True, ""


def validate_points(points: Decimal) -> tuple[bool, str]:
    """Accrued points between 0 and 200."""
    if points < 0:
        return False, "Rentenpunkte dürfen nicht negativ sein"
    if points > MAX_PLAUSIBLE_POINTS:
        return False, f"Die Anzahl der Rentenpunkte scheint unrealistisch hoch (über {MAX_PLAUSIBLE_POINTS})"
    return True, ""


def validate_supplementary_pension(amount: Decimal) -> tuple[bool, str]:
    """Supplementary pension between 0 and 5000 per month."""
    if amount < 0 or amount > MAX_SUPPLEMENTARY_PENSION:
        return False, (
            f"Zusatzrenten müssen zwischen 0 € und {format_currency(MAX_SUPPLEMENTARY_PENSION)} "
            "pro Monat liegen"
        )
    return True, ""


def check_retirement_start(start: date, birth_date: date) -> RetirementStartCheck:
    """Check a requested start against the minimum ages.

    Before 60 the start is impossible; before 63 it is allowed with a
    warning.
    """
    age = age_on(birth_date, start)

    if age < MIN_RETIREMENT_AGE:
        return RetirementStartCheck(
            is_valid=False,
            warning=f"Rentenbeginn vor dem {MIN_RETIREMENT_AGE}. Lebensjahr ist nicht möglich",
        )
    if age < EARLY_RETIREMENT_WARNING_AGE:
        return RetirementStartCheck(
            is_valid=True,
            warning="Sehr früher Rentenbeginn. Prüfen Sie die Voraussetzungen.",
        )
    return RetirementStartCheck(is_valid=True)


def validate_retirement_start(start: date, birth_date: date) -> tuple[bool, str]:
    """Retirement start not before age 60."""
    check = check_retirement_start(start, birth_date)
    if check.is_valid:
        return True, ""
    return False, check.warning or "Ungültiger Rentenbeginn"


def validate_amounts(
    monthly_income: Decimal,
    accrued_points: Decimal,
    occupational_pension: Decimal,
    private_pension: Decimal,
    contribution_ceiling: Decimal,
) -> list[ValidationIssue]:
    """Check the numeric inputs of a person before the model is built.

    Negative values are reported here with German messages instead of
    surfacing as model construction errors.
    """
    checks = [
        ("monthly_income", validate_monthly_income(monthly_income, contribution_ceiling)),
        ("accrued_points", validate_points(accrued_points)),
        ("occupational_pension", validate_supplementary_pension(occupational_pension)),
        ("private_pension", validate_supplementary_pension(private_pension)),
    ]
    return [ValidationIssue(field=field, message=reason) for field, (valid, reason) in checks if not valid]


def validate_person(
    person: Person,
    configuration: Configuration,
    today: Optional[date] = None,
) -> list[ValidationIssue]:
    """Run all plausibility checks for a calculation.

    Args:
        person: Person to check
        configuration: Provides the contribution ceiling and the chosen start
        today: Reference date (default: current Berlin date)

    Returns:
        List of issues (empty if valid)
    """
    issues: list[ValidationIssue] = []

    valid, reason = validate_birth_date(person.birth_date, today)
    if not valid:
        issues.append(ValidationIssue(field="birth_date", message=reason))

    issues.extend(
        validate_amounts(
            person.monthly_income,
            person.accrued_points,
            person.occupational_pension,
            person.private_pension,
            configuration.contribution_ceiling,
        )
    )

    if not configuration.uses_statutory_start:
        start = configuration.chosen_retirement_date
        valid, reason = validate_retirement_start(start, person.birth_date)
        if not valid:
            issues.append(ValidationIssue(field="retirement_start", message=reason))

    return issues


def ensure_valid_person(
    person: Person,
    configuration: Configuration,
    today: Optional[date] = None,
) -> None:
    """Raise PersonValidationError if any plausibility check fails."""
    issues = validate_person(person, configuration, today)
    if issues:
        raise PersonValidationError(issues)
