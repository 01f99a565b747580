"""Calculation engines for pension estimates."""

from drv_estimator.core.calculators.benefit import PensionCalculator, compute_benefit
from drv_estimator.core.calculators.deduction import deduction_months, deduction_rate
from drv_estimator.core.calculators.scenarios import (
    ScenarioGenerator,
    best_scenario,
    compare_scenarios,
    generate_scenarios,
)

__all__ = [
    "PensionCalculator",
    "ScenarioGenerator",
    "best_scenario",
    "compare_scenarios",
    "compute_benefit",
    "deduction_months",
    "deduction_rate",
    "generate_scenarios",
]
