"""Tests for configuration values and settings."""

from datetime import date, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from drv_estimator.config import EstimatorSettings
from drv_estimator.core.models import Configuration, CustomStart, StatutoryStart
from drv_estimator.core.rules.pension_constants import DEFAULT_POINT_VALUE


class TestConfigurationDefaults:
    """Tests for default values."""

    def test_no_derived_dates_initially(self):
        config = Configuration()
        assert config.has_derived_dates is False
        assert config.chosen_retirement_date is None
        assert config.uses_statutory_start is True

    def test_default_from_settings(self):
        """Settings override the statutory defaults."""
        settings = EstimatorSettings(point_value=Decimal("42.00"), validity_year=2026)
        config = Configuration.default(settings)
        assert config.point_value == Decimal("42.00")
        assert config.validity_year == 2026

    def test_settings_fall_back_to_constants(self):
        assert EstimatorSettings().point_value == DEFAULT_POINT_VALUE

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            EstimatorSettings(log_level="LOUD")

    def test_social_contribution_rate(self):
        """Half the general health rate plus supplement and care."""
        config = Configuration()
        assert config.social_contribution_rate == Decimal("0.073") + Decimal("0.013") + Decimal("0.034")

    def test_max_monthly_income(self):
        assert Configuration().max_monthly_income == Decimal("8050")

    def test_net_factor_estimate(self):
        """Share kept after tax: taxable quota times the untaxed share."""
        assert Configuration().net_factor_estimate == Decimal("0.85") * (1 - Decimal("0.15"))

    def test_rate_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            Configuration(average_tax_rate=Decimal("1.5"))


class TestUpdateParameters:
    """Tests for update_parameters_for."""

    def test_derives_dates(self):
        config = Configuration().update_parameters_for(date(1970, 1, 1))
        assert config.reference_birth_date == date(1970, 1, 1)
        assert config.statutory_date == date(2037, 1, 1)
        assert config.earliest_deduction_free_date == date(2035, 1, 1)

    def test_returns_new_value(self):
        original = Configuration()
        updated = original.update_parameters_for(date(1970, 1, 1))
        assert original.statutory_date is None
        assert updated is not original

    def test_statutory_choice_follows_new_birth_date(self):
        """The default choice always resolves to the current statutory date."""
        config = Configuration().update_parameters_for(date(1970, 1, 1))
        config = config.update_parameters_for(date(1964, 3, 15))
        assert config.uses_statutory_start is True
        assert config.chosen_retirement_date == date(2031, 4, 1)

    def test_custom_choice_survives_birth_date_edit(self):
        config = (
            Configuration()
            .update_parameters_for(date(1970, 1, 1))
            .with_retirement_start(date(2036, 3, 1))
        )
        config = config.update_parameters_for(date(1971, 1, 1))
        assert config.chosen_retirement_date == date(2036, 3, 1)

    def test_datetime_birth_date_normalized(self):
        config = Configuration().update_parameters_for(datetime(1970, 1, 1, 18, 30))
        assert config.reference_birth_date == date(1970, 1, 1)


class TestRetirementChoice:
    """Tests for the tagged retirement choice."""

    def test_with_custom_start(self, configuration_1970):
        variant = configuration_1970.with_retirement_start(date(2035, 6, 1))
        assert isinstance(variant.retirement_choice, CustomStart)
        assert variant.chosen_retirement_date == date(2035, 6, 1)
        assert configuration_1970.uses_statutory_start is True

    def test_custom_start_equal_to_statutory_stays_custom(self, configuration_1970):
        """Choosing the statutory date explicitly is still an explicit choice."""
        variant = configuration_1970.with_retirement_start(configuration_1970.statutory_date)
        assert variant.uses_statutory_start is False

    def test_none_resets_to_statutory(self, configuration_1970):
        variant = configuration_1970.with_retirement_start(date(2035, 6, 1)).with_retirement_start(None)
        assert isinstance(variant.retirement_choice, StatutoryStart)
        assert variant.chosen_retirement_date == configuration_1970.statutory_date

    def test_choice_parsed_from_dict(self):
        config = Configuration.model_validate(
            {"retirement_choice": {"kind": "custom", "start": "2036-03-01"}}
        )
        assert config.chosen_retirement_date == date(2036, 3, 1)


class TestValueSemantics:
    """Tests for immutability and copies."""

    def test_frozen(self, configuration_1970):
        with pytest.raises(ValidationError):
            configuration_1970.point_value = Decimal("50")

    def test_copy_equal_and_independent(self, configuration_1970):
        variant = configuration_1970.with_retirement_start(date(2035, 6, 1))
        clone = variant.copy()
        assert clone == variant
        assert clone is not variant
        assert clone.chosen_retirement_date == date(2035, 6, 1)
