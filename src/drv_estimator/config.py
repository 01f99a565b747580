"""Session configuration via pydantic-settings.

Economic defaults come from the statutory constants and can be overridden
with DRV_* environment variables or a .env file, e.g. when new values are
published before a release.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

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
)


class EstimatorSettings(BaseSettings):
    """Economic values and runtime options."""

    model_config = SettingsConfigDict(env_prefix="DRV_", env_file=".env", extra="ignore")

    validity_year: int = Field(default=DEFAULT_VALIDITY_YEAR, description="Year the values apply to")
    average_wage: Decimal = Field(default=DEFAULT_AVERAGE_WAGE, ge=0)
    point_value: Decimal = Field(default=DEFAULT_POINT_VALUE, ge=0)
    contribution_ceiling: Decimal = Field(default=DEFAULT_CONTRIBUTION_CEILING, ge=0)

    tax_free_allowance: Decimal = Field(default=DEFAULT_TAX_FREE_ALLOWANCE, ge=0)
    taxable_quota: Decimal = Field(default=DEFAULT_TAXABLE_QUOTA, ge=0, le=1)
    average_tax_rate: Decimal = Field(default=DEFAULT_AVERAGE_TAX_RATE, ge=0, le=1)

    health_insurance_rate: Decimal = Field(default=DEFAULT_HEALTH_INSURANCE_RATE, ge=0, le=1)
    health_insurance_supplement_rate: Decimal = Field(
        default=DEFAULT_HEALTH_INSURANCE_SUPPLEMENT_RATE, ge=0, le=1
    )
    care_insurance_rate: Decimal = Field(default=DEFAULT_CARE_INSURANCE_RATE, ge=0, le=1)

    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return upper


@lru_cache
def get_settings() -> EstimatorSettings:
    """Return the cached settings instance."""
    return EstimatorSettings()
