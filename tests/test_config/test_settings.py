"""Tests for configuration settings functionality."""

import pytest
import logging
from pathlib import Path

from loglinear_cost.config import settings as settings_module
from loglinear_cost.config.settings import (
    Settings,
    get_config,
    set_config
)
from loglinear_cost.config.random_state import get_global_seed


@pytest.fixture(autouse=True)
def reset_global_config():
    """Isolate tests from the module-level configuration cache."""
    settings_module._GLOBAL_CONFIG = None
    yield
    settings_module._GLOBAL_CONFIG = None


class TestSettingsDataclass:
    """Test suite for the Settings dataclass."""

    def test_settings_default_initialization(self):
        """Defaults reproduce the original cost function constants."""
        settings = Settings()

        assert settings.sigma_squared == 100.0
        assert settings.log_sum_cutoff == 30.0
        assert settings.optimizer_method == "L-BFGS-B"
        assert settings.max_iterations == 100
        assert settings.tolerance == 1e-6
        assert settings.initial_scale == 0.0
        assert settings.random_seed is None
        assert settings.verbose is False

    def test_non_positive_sigma_rejected(self):
        with pytest.raises(ValueError, match="sigma_squared"):
            Settings(sigma_squared=-1.0)

    def test_non_positive_cutoff_rejected(self):
        with pytest.raises(ValueError, match="log_sum_cutoff"):
            Settings(log_sum_cutoff=0.0)

    def test_questionable_values_logged(self, caplog):
        """Validation warnings are logged rather than raised."""
        with caplog.at_level(logging.WARNING, logger="loglinear_cost.config.settings"):
            Settings(optimizer_method="Powell")
        assert any("Powell" in record.getMessage() for record in caplog.records)

    def test_update_returns_new_instance(self):
        settings = Settings()
        updated = settings.update(sigma_squared=4.0, max_iterations=10)

        assert updated is not settings
        assert updated.sigma_squared == 4.0
        assert updated.max_iterations == 10
        assert settings.sigma_squared == 100.0

    def test_update_unknown_field_raises(self):
        with pytest.raises(TypeError):
            Settings().update(learning_rate=0.1)


class TestPresets:
    """Test suite for preset loading."""

    @pytest.mark.parametrize("preset", ["default", "strong_prior", "weak_prior"])
    def test_from_preset(self, preset):
        settings = Settings.from_preset(preset)
        assert settings.sigma_squared > 0

    def test_strong_prior_values(self):
        assert Settings.from_preset("strong_prior").sigma_squared == 1.0

    def test_unknown_preset_raises(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            Settings.from_preset("nonexistent")


class TestDictAndToml:
    """Test suite for dictionary and TOML loading."""

    def test_from_dict_nested(self):
        settings = Settings.from_dict({
            'cost': {'sigma_squared': 25.0},
            'optimizer': {'optimizer_method': 'CG', 'max_iterations': 7},
            'random_seed': 3
        })
        assert settings.sigma_squared == 25.0
        assert settings.optimizer_method == 'CG'
        assert settings.max_iterations == 7
        assert settings.random_seed == 3

    def test_toml_round_trip(self, tmp_path):
        pytest.importorskip("tomli_w")
        original = Settings(sigma_squared=9.0, max_iterations=42, random_seed=5)
        path = tmp_path / "settings.toml"

        original.to_toml(path)
        loaded = Settings.from_toml(path)

        assert loaded == original

    def test_toml_without_seed(self, tmp_path):
        pytest.importorskip("tomli_w")
        path = tmp_path / "settings.toml"
        Settings().to_toml(path)
        assert Settings.from_toml(path).random_seed is None

    def test_from_toml_handwritten(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[cost]\nsigma_squared = 50.0\n\n[optimizer]\ntolerance = 1e-4\n')

        settings = Settings.from_toml(path)

        assert settings.sigma_squared == 50.0
        assert settings.tolerance == 1e-4

    def test_from_toml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Settings.from_toml(tmp_path / "missing.toml")


class TestGlobalConfig:
    """Test suite for get_config and set_config."""

    def test_get_config_falls_back_to_preset(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        config = get_config(preset="weak_prior")

        assert config.sigma_squared == 1e4

    def test_get_config_is_cached(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)

        assert get_config() is get_config()

    def test_get_config_from_path(self, tmp_path):
        path = tmp_path / "run.toml"
        path.write_text('sigma_squared = 2.0\n')
        assert get_config(config_path=path).sigma_squared == 2.0

    def test_set_config_applies_seed(self):
        set_config(Settings(random_seed=123))
        assert get_config().random_seed == 123
        assert get_global_seed() == 123
