"""Economic and legal parameters for one validity year."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from drv_estimator.core.rules.pension_constants import (
    DEFAULT_AVERAGE_TAX_RATE,
    DEFAULT_AVERAGE_WAGE,
    DEFAULT_CARE_INSURANCE_RATE,
    DEFAULT_CONTRIBUTION_CEILING,
    DEFAULT_HEALTH_INSURANCE_RATE,
    DEFAULT_HEALTH_INSURANCE_SUPPLEMENT_RATE,
    DEFAULT_POINT_VALUE,
    DEFAULT_TAX_FREE_ALLOWANCE,
    DEFAULT_TAXABLE_QUOTA,
    DEFAULT_VALIDITY_YEAR,
    earliest_deduction_free_date,
    statutory_retirement_date,
)
from drv_estimator.shared.dates import normalize_to_midnight

if TYPE_CHECKING:
    from drv_estimator.config import EstimatorSettings


class StatutoryStart(BaseModel):
    """Retire at the statutory date, whatever it currently is."""

    kind: Literal["statutory"] = "statutory"

    model_config = {"frozen": True}


class CustomStart(BaseModel):
    """Retire at an explicitly chosen date."""

    kind: Literal["custom"] = "custom"
    start: date

    @field_validator("start", mode="before")
    @classmethod
    def normalize_start(cls, v):
        if isinstance(v, date):
            return normalize_to_midnight(v)
        return v

    model_config = {"frozen": True}


RetirementChoice = Annotated[Union[StatutoryStart, CustomStart], Field(discriminator="kind")]

Rate = Annotated[Decimal, Field(ge=0, le=1)]
Amount = Annotated[Decimal, Field(ge=0)]


class Configuration(BaseModel):
    """Parameters valid for one year plus the dates derived for a birth date.

    Instances are immutable values. What-if variants are new instances
    (``with_retirement_start``), so a scenario can never change the
    session's baseline.
    """

    validity_year: int = Field(default=DEFAULT_VALIDITY_YEAR)

    # Pension values
    average_wage: Amount = Field(default=DEFAULT_AVERAGE_WAGE, description="Durchschnittsentgelt (annual)")
    point_value: Amount = Field(default=DEFAULT_POINT_VALUE, description="Aktueller Rentenwert")
    contribution_ceiling: Amount = Field(
        default=DEFAULT_CONTRIBUTION_CEILING, description="Beitragsbemessungsgrenze (annual)"
    )

    # Income tax
    tax_free_allowance: Amount = Field(default=DEFAULT_TAX_FREE_ALLOWANCE, description="Grundfreibetrag (annual)")
    taxable_quota: Rate = Field(default=DEFAULT_TAXABLE_QUOTA, description="Besteuerungsanteil")
    average_tax_rate: Rate = Field(default=DEFAULT_AVERAGE_TAX_RATE)

    # Social insurance
    health_insurance_rate: Rate = Field(default=DEFAULT_HEALTH_INSURANCE_RATE)
    health_insurance_supplement_rate: Rate = Field(default=DEFAULT_HEALTH_INSURANCE_SUPPLEMENT_RATE)
    care_insurance_rate: Rate = Field(default=DEFAULT_CARE_INSURANCE_RATE)

    # Derived for the reference birth date (see update_parameters_for)
    reference_birth_date: Optional[date] = Field(default=None)
    statutory_date: Optional[date] = Field(default=None)
    earliest_deduction_free_date: Optional[date] = Field(default=None)

    retirement_choice: RetirementChoice = Field(default_factory=StatutoryStart)

    model_config = {"frozen": True}

    @classmethod
    def default(cls, settings: Optional["EstimatorSettings"] = None) -> "Configuration":
        """Build a configuration from environment settings (DRV_* variables)."""
        from drv_estimator.config import get_settings

        s = settings or get_settings()
        return cls(
            validity_year=s.validity_year,
            average_wage=s.average_wage,
            point_value=s.point_value,
            contribution_ceiling=s.contribution_ceiling,
            tax_free_allowance=s.tax_free_allowance,
            taxable_quota=s.taxable_quota,
            average_tax_rate=s.average_tax_rate,
            health_insurance_rate=s.health_insurance_rate,
            health_insurance_supplement_rate=s.health_insurance_supplement_rate,
            care_insurance_rate=s.care_insurance_rate,
        )

    @property
    def has_derived_dates(self) -> bool:
        return (
            self.reference_birth_date is not None
            and self.statutory_date is not None
            and self.earliest_deduction_free_date is not None
        )

    @property
    def uses_statutory_start(self) -> bool:
        return isinstance(self.retirement_choice, StatutoryStart)

    @property
    def chosen_retirement_date(self) -> Optional[date]:
        """Resolve the retirement choice; None while no dates are derived."""
        if isinstance(self.retirement_choice, CustomStart):
            return self.retirement_choice.start
        return self.statutory_date

    @property
    def net_factor_estimate(self) -> Decimal:
        """Rough share of the gross kept after tax."""
        return self.taxable_quota * (1 - self.average_tax_rate)

    @property
    def social_contribution_rate(self) -> Decimal:
        """Pensioner's share of health, supplement and care contributions.

        The pension fund pays half of the general health rate; supplement
        and care are paid in full.
        """
        return (
            self.health_insurance_rate / 2
            + self.health_insurance_supplement_rate
            + self.care_insurance_rate
        )

    @property
    def max_monthly_income(self) -> Decimal:
        """Monthly income at the contribution ceiling."""
        return self.contribution_ceiling / 12

    def update_parameters_for(self, birth_date: date) -> "Configuration":
        """Recompute the derived dates for a (new) birth date.

        The retirement choice is kept: the statutory choice follows the new
        statutory date, a custom start survives the edit.

        Returns:
            New configuration; this instance is unchanged
        """
        birth = normalize_to_midnight(birth_date)
        return self.model_copy(
            update={
                "reference_birth_date": birth,
                "statutory_date": statutory_retirement_date(birth),
                "earliest_deduction_free_date": earliest_deduction_free_date(birth),
            }
        )

    def with_retirement_start(self, start: Optional[date]) -> "Configuration":
        """Value copy with a custom retirement start (None: statutory)."""
        choice = StatutoryStart() if start is None else CustomStart(start=start)
        return self.model_copy(update={"retirement_choice": choice})

    def copy(self) -> "Configuration":
        """Deep value copy of all fields."""
        return self.model_copy(deep=True)
