"""Calculation result models."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from drv_estimator.core.models.comparison import ResultComparison
from drv_estimator.core.models.configuration import Configuration
from drv_estimator.core.models.enums import Recommendation, ScenarioKind
from drv_estimator.core.rules.pension_constants import DEFAULT_AVERAGE_WAGE, DEFAULT_VALIDITY_YEAR
from drv_estimator.shared.formatters import (
    format_currency,
    format_date,
    format_duration,
    format_percentage,
    format_points,
)


class ProjectionDetail(BaseModel):
    """Intermediate values of the point projection, for diagnostics."""

    months_until_retirement: int = Field(default=0, ge=0)
    years_until_retirement: Decimal = Field(default=Decimal("0"))
    annual_income: Decimal = Field(default=Decimal("0"))
    contribution_ceiling: Decimal = Field(default=Decimal("0"))
    average_wage: Decimal = Field(default=Decimal("0"))
    capped_income: Decimal = Field(default=Decimal("0"))
    points_per_year: Decimal = Field(default=Decimal("0"))
    projected_points: Decimal = Field(default=Decimal("0"))

    model_config = {"frozen": True}


class PensionResult(BaseModel):
    """Outcome of one benefit calculation.

    Only the declared value fields are durable. ``configuration`` and
    ``projection`` are computation aids and are excluded from every dump.
    """

    id: UUID = Field(default_factory=uuid4)
    computed_at: datetime = Field(..., description="Calculation timestamp (Europe/Berlin)")

    # Dates
    statutory_date: date = Field(..., description="Regelaltersgrenze (first of month)")
    earliest_deduction_free_date: date = Field(..., description="45-year rule (first of month)")
    retirement_date: date = Field(..., description="Chosen start (first of month)")

    # Points
    accrued_points: Decimal = Field(...)
    projected_points: Decimal = Field(...)
    total_points: Decimal = Field(...)

    # Statutory pension
    theoretical_gross: Decimal = Field(..., description="Gross pension without deduction")
    deduction_rate: Decimal = Field(..., ge=0, description="Abschlag as fraction")
    deduction_amount: Decimal = Field(...)
    actual_gross: Decimal = Field(..., description="Gross pension after deduction")

    # Supplementary pensions
    supplementary_total: Decimal = Field(...)
    combined_gross: Decimal = Field(...)

    # Deductions and net
    social_contributions: Decimal = Field(...)
    tax_amount: Decimal = Field(...)
    total_deductions: Decimal = Field(...)
    estimated_net: Decimal = Field(...)

    # Distance to the statutory date
    months_before_statutory: int = Field(default=0, ge=0)
    years_before_statutory: Decimal = Field(default=Decimal("0"))

    point_value: Decimal = Field(..., description="Rentenwert used")

    # Transient
    configuration: Optional[Configuration] = Field(default=None, exclude=True, repr=False)
    projection: Optional[ProjectionDetail] = Field(default=None, exclude=True, repr=False)

    model_config = {"frozen": True}

    @property
    def is_deduction_free(self) -> bool:
        return self.deduction_rate == 0

    def points_per_year_for(self, monthly_income: Decimal) -> Decimal:
        """Points per year for an income, without the ceiling.

        Falls back to the default average wage when no configuration is
        attached (e.g. after loading a dumped result).
        """
        average_wage = (
            self.configuration.average_wage if self.configuration is not None else DEFAULT_AVERAGE_WAGE
        )
        if average_wage <= 0:
            return Decimal("0")
        return monthly_income * 12 / average_wage

    def compare_to(self, other: "PensionResult") -> ResultComparison:
        """Compare this result (baseline) with another one."""
        return ResultComparison(
            original_gross=self.combined_gross,
            new_gross=other.combined_gross,
            original_deduction_rate=self.deduction_rate,
            new_deduction_rate=other.deduction_rate,
        )

    def to_export_dict(self) -> dict[str, Any]:
        """JSON-compatible dict of the durable fields."""
        return self.model_dump(mode="json")

    def to_text_report(self) -> str:
        """Plain-text summary in German for sharing (mail, messenger)."""
        validity_year = (
            self.configuration.validity_year if self.configuration is not None else DEFAULT_VALIDITY_YEAR
        )
        if self.months_before_statutory > 0:
            timing = f"{format_duration(self.months_before_statutory)} vor der Regelaltersgrenze"
        else:
            timing = "Zur Regelaltersgrenze oder später"

        lines = [
            "RENTENBERECHNUNG",
            "================",
            f"Berechnet am: {format_date(self.computed_at)}",
            "",
            "RENTENBEGINN",
            f"Gewählter Rentenbeginn: {format_date(self.retirement_date)}",
            f"Regelaltersgrenze: {format_date(self.statutory_date)}",
            timing,
            "",
            "RENTENPUNKTE",
            f"Bereits erworben: {format_points(self.accrued_points)}",
            f"Zusätzlich bis Rentenbeginn: {format_points(self.projected_points)}",
            f"Gesamt: {format_points(self.total_points)}",
            "",
            "GESETZLICHE RENTE",
            f"Theoretische Bruttorente: {format_currency(self.theoretical_gross)}",
        ]
        if not self.is_deduction_free:
            lines.append(
                f"Abschlag ({format_percentage(self.deduction_rate)}): -{format_currency(self.deduction_amount)}"
            )
        lines.append(f"Tatsächliche Bruttorente: {format_currency(self.actual_gross)}")
        lines.append(f"Summe Abzüge: -{format_currency(self.total_deductions)}")
        if self.supplementary_total > 0:
            lines.append(f"Zusatzrenten: +{format_currency(self.supplementary_total)}")
        lines += [
            "",
            f"NETTOGESAMTRENTE: {format_currency(self.estimated_net)}",
            "",
            "RECHTLICHE HINWEISE",
            f"Diese Berechnung ist unverbindlich und basiert auf den Werten von {validity_year}",
            "bzw. den von Ihnen eingegebenen Werten. Verbindliche Auskünfte erteilt",
            "die Deutsche Rentenversicherung.",
        ]
        return "\n".join(lines)


class ScenarioResult(BaseModel):
    """A named retirement-start alternative with its result."""

    kind: ScenarioKind = Field(...)
    name: str = Field(..., description="Scenario title")
    description: str = Field(..., description="Rationale shown to the user")
    recommendation: Recommendation = Field(default=Recommendation.NEUTRAL)
    result: PensionResult = Field(...)

    model_config = {"frozen": True}
