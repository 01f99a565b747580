"""Enumerations for pension domain models."""

from enum import Enum


class Sex(str, Enum):
    """Sex of the insured person."""

    MALE = "male"
    FEMALE = "female"

    @property
    def display_name(self) -> str:
        return {Sex.MALE: "Männlich", Sex.FEMALE: "Weiblich"}[self]


class Recommendation(str, Enum):
    """Qualitative tag for a retirement scenario."""

    FAVORABLE = "favorable"
    NEUTRAL = "neutral"
    UNFAVORABLE = "unfavorable"


class ScenarioKind(str, Enum):
    """Retirement-start alternatives evaluated by the scenario generator."""

    STANDARD_AGE = "standard_age"
    DEDUCTION_FREE_EARLY = "deduction_free_early"
    AGE_63 = "age_63"
    ONE_YEAR_LATER = "one_year_later"
