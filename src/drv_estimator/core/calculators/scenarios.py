"""Scenario generator: compares alternative retirement starts."""

import logging
from datetime import date
from typing import Optional, Sequence

from drv_estimator.core.calculators.benefit import PensionCalculator
from drv_estimator.core.models.comparison import ResultComparison
from drv_estimator.core.models.configuration import Configuration
from drv_estimator.core.models.enums import Recommendation, ScenarioKind
from drv_estimator.core.models.person import Person
from drv_estimator.core.models.result import ScenarioResult
from drv_estimator.shared import dates
from drv_estimator.shared.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class ScenarioGenerator:
    """Evaluates a fixed set of retirement starts for one person.

    Every scenario runs on its own configuration value; the configuration
    passed in is never changed.
    """

    SCENARIO_TEXTS: dict[ScenarioKind, tuple[str, str]] = {
        ScenarioKind.STANDARD_AGE: (
            "Regelaltersgrenze",
            "Rentenbeginn zur gesetzlichen Regelaltersgrenze",
        ),
        ScenarioKind.DEDUCTION_FREE_EARLY: (
            "Abschlagsfrei früher",
            "Frühester Beginn ohne Abschläge (setzt 45 Beitragsjahre voraus)",
        ),
        ScenarioKind.AGE_63: (
            "Mit 63 Jahren",
            "Rentenbeginn mit 63 Jahren, in der Regel mit Abschlägen",
        ),
        ScenarioKind.ONE_YEAR_LATER: (
            "Ein Jahr später",
            "Rentenbeginn ein Jahr nach der Regelaltersgrenze",
        ),
    }

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    def generate(self, person: Person, today: Optional[date] = None) -> list[ScenarioResult]:
        """Run all applicable scenarios, in fixed order.

        1. Standard retirement age (always)
        2. Deduction-free earlier, if that date precedes the statutory date
        3. At age 63, if that birthday is in the future and after the
           deduction-free date
        4. One year after the standard age (always)

        Raises:
            ConfigurationError: Configuration has no derived dates
        """
        reference = today or dates.today()
        s = self.configuration

        if not s.has_derived_dates:
            raise ConfigurationError(
                "Configuration has no retirement dates; call update_parameters_for(birth_date) first"
            )

        statutory_date = s.statutory_date
        earliest_date = s.earliest_deduction_free_date
        birth = person.birth_date

        scenarios = [self._run(person, ScenarioKind.STANDARD_AGE, statutory_date, Recommendation.NEUTRAL, reference)]

        if earliest_date < statutory_date:
            scenarios.append(
                self._run(
                    person, ScenarioKind.DEDUCTION_FREE_EARLY, earliest_date, Recommendation.FAVORABLE, reference
                )
            )

        age_63 = dates.add_years(birth, 63)
        if age_63 > reference and age_63 > earliest_date:
            scenarios.append(
                self._run(
                    person,
                    ScenarioKind.AGE_63,
                    dates.next_first_of_month(age_63),
                    Recommendation.UNFAVORABLE,
                    reference,
                )
            )

        one_year_later = dates.next_first_of_month(dates.add_years(statutory_date, 1))
        scenarios.append(
            self._run(person, ScenarioKind.ONE_YEAR_LATER, one_year_later, Recommendation.FAVORABLE, reference)
        )

        logger.debug("Generated %d scenarios for birth date %s", len(scenarios), birth)
        return scenarios

    def _run(
        self,
        person: Person,
        kind: ScenarioKind,
        start: date,
        recommendation: Recommendation,
        today: date,
    ) -> ScenarioResult:
        """Calculate one scenario on a private configuration copy."""
        variant = self.configuration.with_retirement_start(start)
        result = PensionCalculator(variant).compute_benefit(person, today)
        name, description = self.SCENARIO_TEXTS[kind]

        return ScenarioResult(
            kind=kind,
            name=name,
            description=description,
            recommendation=recommendation,
            result=result,
        )


def generate_scenarios(
    person: Person,
    configuration: Configuration,
    today: Optional[date] = None,
) -> list[ScenarioResult]:
    """Convenience function to run the scenario comparison.

    Args:
        person: Validated person data
        configuration: Parameters with dates derived for the person
        today: Reference date (default: current Berlin date)

    Returns:
        Scenarios in fixed order, standard retirement age first
    """
    generator = ScenarioGenerator(configuration)
    return generator.generate(person, today)


def best_scenario(scenarios: Sequence[ScenarioResult]) -> Optional[ScenarioResult]:
    """Scenario with the highest gross statutory pension.

    Ties go to the scenario listed first.
    """
    if not scenarios:
        return None
    return max(scenarios, key=lambda scenario: scenario.result.actual_gross)


def compare_scenarios(baseline: ScenarioResult, alternative: ScenarioResult) -> ResultComparison:
    """Difference between two scenarios (alternative minus baseline)."""
    return baseline.result.compare_to(alternative.result)
