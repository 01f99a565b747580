"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal

import pytest

from drv_estimator.core.models import Configuration, Person, Sex


@pytest.fixture
def reference_today() -> date:
    """Fixed "today" so results do not depend on the clock."""
    return date(2025, 6, 15)


@pytest.fixture
def person_1970() -> Person:
    """Employee born 1 Jan 1970 with an average-ish income."""
    return Person(
        sex=Sex.MALE,
        birth_date=date(1970, 1, 1),
        monthly_income=Decimal("3000"),
        accrued_points=Decimal("20"),
    )


@pytest.fixture
def configuration_1970() -> Configuration:
    """2025 default values with dates derived for 1 Jan 1970."""
    return Configuration().update_parameters_for(date(1970, 1, 1))
