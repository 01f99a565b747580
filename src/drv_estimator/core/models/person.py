"""Person model: the inputs of one pension calculation."""

from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator

from drv_estimator.core.models.enums import Sex
from drv_estimator.shared.dates import age_on, is_valid_birth_date, normalize_to_midnight, today

DEFAULT_BIRTH_DATE = date(1980, 1, 1)


class Person(BaseModel):
    """Insured person.

    The record is immutable; the caller edits it with ``model_copy(update=...)``.
    Amounts are monthly unless stated otherwise.
    """

    id: UUID = Field(default_factory=uuid4)
    sex: Sex = Field(default=Sex.MALE)
    birth_date: date = Field(default=DEFAULT_BIRTH_DATE, description="Normalized to Berlin midnight")

    monthly_income: Decimal = Field(default=Decimal("0"), ge=0, description="Gross monthly income")
    accrued_points: Decimal = Field(default=Decimal("0"), ge=0, description="Entgeltpunkte earned so far")
    current_pension: Optional[Decimal] = Field(
        default=None, ge=0, description="Current pension as per statement (informational)"
    )

    # Supplementary pensions
    occupational_pension: Decimal = Field(default=Decimal("0"), ge=0, description="Betriebsrente")
    private_pension: Decimal = Field(default=Decimal("0"), ge=0, description="Private Rente")
    survivor_pension: Optional[Decimal] = Field(
        default=None, ge=0, description="Hinterbliebenenrente (informational)"
    )

    @field_validator("birth_date", mode="before")
    @classmethod
    def normalize_birth_date(cls, v):
        """Drop the time of day in the home timezone."""
        if isinstance(v, date):
            return normalize_to_midnight(v)
        return v

    model_config = {"frozen": True}

    @property
    def birth_year(self) -> int:
        return self.birth_date.year

    @property
    def annual_income(self) -> Decimal:
        """Gross annual income (12 monthly salaries)."""
        return self.monthly_income * 12

    @property
    def supplementary_total(self) -> Decimal:
        """Sum of occupational and private pension per month."""
        return self.occupational_pension + self.private_pension

    @property
    def annual_supplementary_total(self) -> Decimal:
        return self.supplementary_total * 12

    @property
    def has_supplementary_pensions(self) -> bool:
        return self.supplementary_total > 0

    def age(self, reference: Optional[date] = None) -> int:
        """Completed years of age (default: today)."""
        return age_on(self.birth_date, reference or today())

    def is_valid(self, reference: Optional[date] = None) -> bool:
        """Check the eligibility rule for a calculation.

        Only the birth date is checked here; plausibility of the other
        fields is reported by ``drv_estimator.shared.validators``.
        """
        return is_valid_birth_date(self.birth_date, reference)
