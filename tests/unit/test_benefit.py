"""Tests for the pension formula engine."""

from datetime import date
from decimal import Decimal

import pytest

from drv_estimator.core.calculators.benefit import PensionCalculator, compute_benefit
from drv_estimator.core.models import Configuration, Person
from drv_estimator.shared.exceptions import PreconditionViolation
from drv_estimator.shared.formatters import format_currency


class TestComputeBenefit:
    """End-to-end calculations for a person born 1 Jan 1970."""

    def test_statutory_start(self, person_1970, configuration_1970, reference_today):
        """Projection runs from July 2025 until January 2037."""
        result = compute_benefit(person_1970, configuration_1970, reference_today)

        assert result.statutory_date == date(2037, 1, 1)
        assert result.earliest_deduction_free_date == date(2035, 1, 1)
        assert result.retirement_date == date(2037, 1, 1)
        assert result.projection.months_until_retirement == 138
        assert result.projection.years_until_retirement == Decimal("11.5")

        expected_projected = Decimal(36000) / Decimal(50493) * (Decimal(138) / Decimal(12))
        assert result.projected_points == expected_projected
        assert result.total_points == Decimal("20") + expected_projected
        assert result.theoretical_gross == result.total_points * Decimal("40.79")

        assert result.deduction_rate == Decimal("0")
        assert result.deduction_amount == Decimal("0")
        assert result.actual_gross == result.theoretical_gross
        assert result.months_before_statutory == 0
        assert result.is_deduction_free

    def test_net_pension(self, person_1970, configuration_1970, reference_today):
        """Contributions and tax apply to the statutory pension only."""
        person = person_1970.model_copy(update={"occupational_pension": Decimal("300")})
        result = compute_benefit(person, configuration_1970, reference_today)

        gross = result.actual_gross
        social = gross * (Decimal("0.146") / 2 + Decimal("0.013") + Decimal("0.034"))
        after_social = gross - social
        taxable = max(Decimal("0"), after_social * Decimal("0.85") - Decimal("12084") / 12)
        tax = taxable * Decimal("0.15")

        assert result.social_contributions == social
        assert result.tax_amount == tax
        assert result.total_deductions == social + tax
        assert result.supplementary_total == Decimal("300")
        assert result.combined_gross == gross + Decimal("300")
        assert result.estimated_net == after_social - tax + Decimal("300")

    def test_no_tax_below_allowance(self, configuration_1970, reference_today):
        """A small pension stays under the monthly allowance."""
        person = Person(birth_date=date(1970, 1, 1), accrued_points=Decimal("5"))
        result = compute_benefit(person, configuration_1970, reference_today)
        assert result.tax_amount == Decimal("0")

    def test_maximum_deduction_48_months_early(self, person_1970, configuration_1970, reference_today):
        config = configuration_1970.with_retirement_start(date(2033, 1, 1))
        result = compute_benefit(person_1970, config, reference_today)

        assert result.deduction_rate == Decimal("0.144")
        assert result.months_before_statutory == 48
        assert result.years_before_statutory == Decimal("4")
        assert result.deduction_amount == result.theoretical_gross * Decimal("0.144")
        assert result.actual_gross == result.theoretical_gross - result.deduction_amount

    def test_net_pension_with_deduction(self, person_1970, configuration_1970, reference_today):
        """Contributions are charged on the gross pension after the deduction."""
        config = configuration_1970.with_retirement_start(date(2033, 1, 1))
        result = compute_benefit(person_1970, config, reference_today)
        rate = config.social_contribution_rate

        assert result.deduction_rate > 0
        assert result.social_contributions == result.actual_gross * rate
        assert result.social_contributions != result.theoretical_gross * rate

        after_social = result.actual_gross - result.social_contributions
        taxable = max(Decimal("0"), after_social * Decimal("0.85") - Decimal("12084") / 12)
        assert result.tax_amount == taxable * Decimal("0.15")
        assert result.estimated_net == after_social - result.tax_amount

    def test_early_start_after_earliest_date_is_deduction_free(
        self, person_1970, configuration_1970, reference_today
    ):
        """Ten months early but after the 45-year date: no deduction."""
        config = configuration_1970.with_retirement_start(date(2036, 3, 1))
        result = compute_benefit(person_1970, config, reference_today)

        assert result.deduction_rate == Decimal("0")
        assert result.months_before_statutory == 10

    def test_mid_month_start_snaps_forward(self, person_1970, configuration_1970, reference_today):
        config = configuration_1970.with_retirement_start(date(2036, 3, 15))
        result = compute_benefit(person_1970, config, reference_today)
        assert result.retirement_date == date(2036, 4, 1)

    def test_start_in_the_past_projects_nothing(self, person_1970, configuration_1970, reference_today):
        config = configuration_1970.with_retirement_start(date(2025, 1, 1))
        result = compute_benefit(person_1970, config, reference_today)

        assert result.projected_points == Decimal("0")
        assert result.projection.months_until_retirement == 0

    def test_income_capped_at_ceiling(self, configuration_1970, reference_today):
        person = Person(birth_date=date(1970, 1, 1), monthly_income=Decimal("20000"))
        result = compute_benefit(person, configuration_1970, reference_today)

        assert result.projection.capped_income == Decimal("96600")
        assert result.projection.points_per_year == Decimal("96600") / Decimal("50493")

    def test_zero_average_wage_projects_nothing(self, person_1970, reference_today):
        config = Configuration(average_wage=Decimal("0")).update_parameters_for(date(1970, 1, 1))
        result = compute_benefit(person_1970, config, reference_today)

        assert result.projected_points == Decimal("0")
        assert result.total_points == Decimal("20")

    def test_configuration_not_modified(self, person_1970, configuration_1970, reference_today):
        before = configuration_1970.copy()
        compute_benefit(person_1970, configuration_1970, reference_today)
        assert configuration_1970 == before


class TestPreconditions:
    """Contract failures abort the computation."""

    def test_person_too_young(self, configuration_1970, reference_today):
        person = Person(birth_date=date(2010, 1, 1))
        config = Configuration().update_parameters_for(date(2010, 1, 1))
        with pytest.raises(PreconditionViolation):
            compute_benefit(person, config, reference_today)

    def test_missing_derived_dates(self, person_1970, reference_today):
        with pytest.raises(PreconditionViolation):
            compute_benefit(person_1970, Configuration(), reference_today)

    def test_dates_derived_for_other_birth_date(self, person_1970, reference_today):
        config = Configuration().update_parameters_for(date(1964, 3, 15))
        with pytest.raises(PreconditionViolation):
            compute_benefit(person_1970, config, reference_today)


class TestResultExport:
    """Tests for serialization of results."""

    def test_transient_fields_excluded(self, person_1970, configuration_1970, reference_today):
        result = compute_benefit(person_1970, configuration_1970, reference_today)
        exported = result.to_export_dict()

        assert "configuration" not in exported
        assert "projection" not in exported
        assert "configuration" not in result.model_dump()
        assert exported["retirement_date"] == "2037-01-01"

    def test_transient_fields_available_in_memory(self, person_1970, configuration_1970, reference_today):
        result = compute_benefit(person_1970, configuration_1970, reference_today)
        assert result.configuration == configuration_1970
        assert result.projection is not None

    def test_points_per_year_for(self, person_1970, configuration_1970, reference_today):
        result = compute_benefit(person_1970, configuration_1970, reference_today)
        assert result.points_per_year_for(Decimal("50493") / 12) == Decimal("1")

    def test_text_report(self, person_1970, configuration_1970, reference_today):
        result = compute_benefit(person_1970, configuration_1970, reference_today)
        report = result.to_text_report()

        assert report.startswith("RENTENBERECHNUNG")
        assert "Gewählter Rentenbeginn: 01.01.2037" in report
        assert "Zur Regelaltersgrenze oder später" in report
        assert "Abschlag" not in report
        assert "Werten von 2025" in report
        assert f"NETTOGESAMTRENTE: {format_currency(result.estimated_net)}" in report

    def test_text_report_with_deduction_and_supplements(self, person_1970, configuration_1970, reference_today):
        person = person_1970.model_copy(update={"private_pension": Decimal("250")})
        config = configuration_1970.with_retirement_start(date(2033, 1, 1))
        report = compute_benefit(person, config, reference_today).to_text_report()

        assert "Abschlag (14,4 %)" in report
        assert "4 Jahre vor der Regelaltersgrenze" in report
        assert "Zusatzrenten: +250,00 €" in report

    def test_compare_to(self, person_1970, configuration_1970, reference_today):
        baseline = compute_benefit(person_1970, configuration_1970, reference_today)
        early = compute_benefit(
            person_1970, configuration_1970.with_retirement_start(date(2033, 1, 1)), reference_today
        )
        comparison = baseline.compare_to(early)

        assert comparison.monthly_difference == early.combined_gross - baseline.combined_gross
        assert comparison.annual_difference == comparison.monthly_difference * 12
        assert comparison.is_better is False


class TestCalculatorHelpers:
    """Tests for the helper operations."""

    def test_points_per_year(self, configuration_1970):
        calculator = PensionCalculator(configuration_1970)
        assert calculator.points_per_year(Decimal("50493")) == Decimal("1")
        assert calculator.points_per_year(Decimal("200000")) == Decimal("96600") / Decimal("50493")

    def test_points_per_year_zero_wage(self):
        calculator = PensionCalculator(Configuration(average_wage=Decimal("0")))
        assert calculator.points_per_year(Decimal("50000")) == Decimal("0")

    def test_required_annual_income(self, configuration_1970):
        calculator = PensionCalculator(configuration_1970)
        assert calculator.required_annual_income(Decimal("2")) == Decimal("100986")

    def test_quick_estimate(self, person_1970, configuration_1970, reference_today):
        calculator = PensionCalculator(configuration_1970)
        full = calculator.compute_benefit(person_1970, reference_today)
        assert calculator.quick_estimate(person_1970, reference_today) == full.actual_gross

    def test_salary_increase_effect(self, person_1970, configuration_1970, reference_today):
        """500 more per month over 11.5 years."""
        calculator = PensionCalculator(configuration_1970)
        effect = calculator.salary_increase_effect(person_1970, Decimal("3500"), reference_today)

        expected = Decimal(6000) / Decimal(50493) * Decimal("11.5") * Decimal("40.79")
        assert effect > 0
        assert abs(effect - expected) < Decimal("0.0001")

    def test_validate_retirement_start(self, configuration_1970):
        calculator = PensionCalculator(configuration_1970)
        birth = date(1970, 1, 1)

        assert calculator.validate_retirement_start(date(2029, 1, 1), birth).is_valid is False
        check = calculator.validate_retirement_start(date(2031, 1, 1), birth)
        assert check.is_valid is True
        assert check.warning is not None
        assert calculator.validate_retirement_start(date(2033, 1, 1), birth).warning is None
