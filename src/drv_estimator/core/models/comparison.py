"""Comparison models for two calculation results."""

from decimal import Decimal

from pydantic import BaseModel, Field, computed_field


class ResultComparison(BaseModel):
    """Difference between a baseline result and an alternative."""

    original_gross: Decimal = Field(..., description="Combined gross of the baseline")
    new_gross: Decimal = Field(..., description="Combined gross of the alternative")
    original_deduction_rate: Decimal = Field(default=Decimal("0"))
    new_deduction_rate: Decimal = Field(default=Decimal("0"))

    @computed_field
    @property
    def monthly_difference(self) -> Decimal:
        """Monthly gain (+) or loss (-) of the alternative."""
        return self.new_gross - self.original_gross

    @computed_field
    @property
    def annual_difference(self) -> Decimal:
        return self.monthly_difference * 12

    @computed_field
    @property
    def deduction_difference(self) -> Decimal:
        """Change of the deduction rate (fraction)."""
        return self.new_deduction_rate - self.original_deduction_rate

    @property
    def is_better(self) -> bool:
        return self.monthly_difference > 0
