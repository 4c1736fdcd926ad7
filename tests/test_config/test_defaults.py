"""Tests for default configurations and validation warnings."""

import pytest
from dataclasses import replace

from loglinear_cost.config.defaults import (
    DEFAULT_CONFIG,
    PRESET_CONFIGS,
    STRONG_PRIOR_CONFIG,
    WEAK_PRIOR_CONFIG,
    validate_config
)


class TestPresetConfigs:
    """Test suite for the preset configurations."""

    def test_default_matches_original_constants(self):
        assert DEFAULT_CONFIG.sigma_squared == 10.0 * 10.0
        assert DEFAULT_CONFIG.log_sum_cutoff == 30.0

    def test_presets_registered(self):
        assert PRESET_CONFIGS["default"] is DEFAULT_CONFIG
        assert PRESET_CONFIGS["strong_prior"] is STRONG_PRIOR_CONFIG
        assert PRESET_CONFIGS["weak_prior"] is WEAK_PRIOR_CONFIG

    def test_prior_strength_ordering(self):
        assert STRONG_PRIOR_CONFIG.sigma_squared < DEFAULT_CONFIG.sigma_squared < WEAK_PRIOR_CONFIG.sigma_squared

    @pytest.mark.parametrize("name", sorted(PRESET_CONFIGS))
    def test_presets_validate_cleanly(self, name):
        assert validate_config(PRESET_CONFIGS[name]) == []


class TestValidateConfig:
    """Test suite for validate_config."""

    def test_non_positive_sigma(self):
        warnings = validate_config(replace(DEFAULT_CONFIG, sigma_squared=0.0))
        assert any("sigma_squared" in w for w in warnings)

    def test_small_cutoff(self):
        warnings = validate_config(replace(DEFAULT_CONFIG, log_sum_cutoff=2.0))
        assert any("log_sum_cutoff" in w for w in warnings)

    def test_unknown_method(self):
        warnings = validate_config(replace(DEFAULT_CONFIG, optimizer_method="SGD"))
        assert any("SGD" in w for w in warnings)

    def test_iteration_bounds(self):
        assert validate_config(replace(DEFAULT_CONFIG, max_iterations=0))
        assert validate_config(replace(DEFAULT_CONFIG, max_iterations=10**6))

    def test_negative_tolerance_and_scale(self):
        warnings = validate_config(replace(DEFAULT_CONFIG, tolerance=-1.0, initial_scale=-0.1))
        assert len(warnings) == 2
