"""Domain models for pension calculations."""

from drv_estimator.core.models.enums import Recommendation, ScenarioKind, Sex
from drv_estimator.core.models.person import Person
from drv_estimator.core.models.configuration import (
    Configuration,
    CustomStart,
    RetirementChoice,
    StatutoryStart,
)
from drv_estimator.core.models.comparison import ResultComparison
from drv_estimator.core.models.result import PensionResult, ProjectionDetail, ScenarioResult
from drv_estimator.core.models.validation import RetirementStartCheck, ValidationIssue

__all__ = [
    "Configuration",
    "CustomStart",
    "PensionResult",
    "Person",
    "ProjectionDetail",
    "Recommendation",
    "ResultComparison",
    "RetirementChoice",
    "RetirementStartCheck",
    "ScenarioKind",
    "ScenarioResult",
    "Sex",
    "StatutoryStart",
    "ValidationIssue",
]
