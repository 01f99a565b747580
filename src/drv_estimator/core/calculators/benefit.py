"""Pension formula engine.

Projects pension points until the chosen start, applies the
early-retirement deduction and approximates the net pension after social
contributions and income tax.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from drv_estimator.core.calculators.deduction import deduction_rate
from drv_estimator.core.models.configuration import Configuration
from drv_estimator.core.models.person import Person
from drv_estimator.core.models.result import PensionResult, ProjectionDetail
from drv_estimator.core.models.validation import RetirementStartCheck
from drv_estimator.shared import dates
from drv_estimator.shared.exceptions import PreconditionViolation
from drv_estimator.shared.validators import check_retirement_start

logger = logging.getLogger(__name__)


class PensionCalculator:
    """Computes pension results for one configuration.

    The calculator keeps no state besides the configuration it was built
    with, so one instance can serve any number of calls.
    """

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    def compute_benefit(self, person: Person, today: Optional[date] = None) -> PensionResult:
        """Calculate the pension for a person.

        Args:
            person: Validated person data
            today: Reference date (default: current Berlin date)

        Returns:
            Immutable calculation result

        Raises:
            PreconditionViolation: Person is not eligible or the
                configuration has no dates derived for the person's birth
                date. Callers validate before calling.
        """
        reference = today or dates.today()
        s = self.configuration

        if not person.is_valid(reference):
            raise PreconditionViolation(
                f"Person data is not valid (birth date {person.birth_date}); validate before calculating"
            )
        if not s.has_derived_dates:
            raise PreconditionViolation(
                "Configuration has no retirement dates; call update_parameters_for(birth_date) first"
            )
        if s.reference_birth_date != person.birth_date:
            raise PreconditionViolation(
                f"Configuration dates were derived for {s.reference_birth_date}, "
                f"not for the person's birth date {person.birth_date}"
            )

        # 1. Thresholds (already derived for this birth date)
        statutory_date = s.statutory_date
        earliest_date = s.earliest_deduction_free_date

        # 2. Chosen start, snapped to a month start
        chosen_raw = s.chosen_retirement_date
        if chosen_raw is None:
            raise PreconditionViolation("Configuration has no retirement date")
        chosen_date = dates.next_first_of_month(dates.normalize_to_midnight(chosen_raw))

        # 3. Time until retirement, excluding the running month
        months_until = dates.months_between(
            dates.first_of_month(reference),
            chosen_date,
            include_partial_current_month=True,
        )
        years_until = Decimal(months_until) / Decimal(12)

        # 4-5. Points
        projection = self._project_points(person, months_until, years_until)
        total_points = person.accrued_points + projection.projected_points

        # 6. Deduction
        rate = deduction_rate(chosen_date, statutory_date, earliest_date)

        # 7. Gross statutory pension
        theoretical_gross = total_points * s.point_value
        deduction_amount = theoretical_gross * rate
        actual_gross = theoretical_gross - deduction_amount

        # 8. Supplementary pensions
        supplementary = person.supplementary_total
        combined_gross = actual_gross + supplementary

        # 9. Net (deductions apply to the statutory pension only)
        social, tax = self._deductions(actual_gross)
        estimated_net = actual_gross - social - tax + supplementary

        # 10. Distance to the statutory date
        months_before = dates.months_between(chosen_date, statutory_date)

        logger.debug(
            "Months until retirement: %d, years: %s, start: %s",
            months_until,
            years_until,
            chosen_date,
        )
        logger.debug(
            "Projected points: %s (%s per year), deduction rate: %s",
            projection.projected_points,
            projection.points_per_year,
            rate,
        )

        return PensionResult(
            computed_at=dates.now(),
            statutory_date=statutory_date,
            earliest_deduction_free_date=earliest_date,
            retirement_date=chosen_date,
            accrued_points=person.accrued_points,
            projected_points=projection.projected_points,
            total_points=total_points,
            theoretical_gross=theoretical_gross,
            deduction_rate=rate,
            deduction_amount=deduction_amount,
            actual_gross=actual_gross,
            supplementary_total=supplementary,
            combined_gross=combined_gross,
            social_contributions=social,
            tax_amount=tax,
            total_deductions=social + tax,
            estimated_net=estimated_net,
            months_before_statutory=months_before,
            years_before_statutory=Decimal(months_before) / Decimal(12),
            point_value=s.point_value,
            configuration=s,
            projection=projection,
        )

    def _project_points(self, person: Person, months: int, years: Decimal) -> ProjectionDetail:
        """Linear projection of points at today's values."""
        s = self.configuration
        safe_months = max(0, months)
        safe_years = max(Decimal("0"), years)

        annual_income = person.monthly_income * 12
        capped_income = min(annual_income, s.contribution_ceiling)
        points_per_year = capped_income / s.average_wage if s.average_wage > 0 else Decimal("0")

        return ProjectionDetail(
            months_until_retirement=safe_months,
            years_until_retirement=safe_years,
            annual_income=annual_income,
            contribution_ceiling=s.contribution_ceiling,
            average_wage=s.average_wage,
            capped_income=capped_income,
            points_per_year=points_per_year,
            projected_points=points_per_year * safe_years,
        )

    def _deductions(self, actual_gross: Decimal) -> tuple[Decimal, Decimal]:
        """Social contributions and income tax on the statutory pension.

        Returns:
            (social contributions, income tax), both monthly
        """
        s = self.configuration

        social = actual_gross * s.social_contribution_rate
        after_social = actual_gross - social

        monthly_allowance = s.tax_free_allowance / 12
        taxable = max(Decimal("0"), after_social * s.taxable_quota - monthly_allowance)
        tax = taxable * s.average_tax_rate

        return social, tax

    # === Helpers ===

    def points_per_year(self, annual_income: Decimal) -> Decimal:
        """Points earned by one year of income, capped at the ceiling."""
        s = self.configuration
        if s.average_wage <= 0:
            return Decimal("0")
        return min(annual_income, s.contribution_ceiling) / s.average_wage

    def required_annual_income(self, points: Decimal) -> Decimal:
        """Annual income needed to earn a number of points in one year."""
        return points * self.configuration.average_wage

    def quick_estimate(self, person: Person, today: Optional[date] = None) -> Decimal:
        """Gross statutory pension after deduction."""
        return self.compute_benefit(person, today).actual_gross

    def salary_increase_effect(
        self,
        person: Person,
        new_monthly_income: Decimal,
        today: Optional[date] = None,
    ) -> Decimal:
        """Change of the gross pension if the income changed to a new value."""
        current = self.quick_estimate(person, today)
        raised = person.model_copy(update={"monthly_income": new_monthly_income})
        return self.quick_estimate(raised, today) - current

    def validate_retirement_start(self, start: date, birth_date: date) -> RetirementStartCheck:
        """Check a requested start against the minimum ages."""
        return check_retirement_start(start, birth_date)


def compute_benefit(
    person: Person,
    configuration: Configuration,
    today: Optional[date] = None,
) -> PensionResult:
    """Convenience function to run one benefit calculation.

    Args:
        person: Validated person data
        configuration: Parameters with dates derived for the person
        today: Reference date (default: current Berlin date)

    Returns:
        Calculation result
    """
    calculator = PensionCalculator(configuration)
    return calculator.compute_benefit(person, today)
