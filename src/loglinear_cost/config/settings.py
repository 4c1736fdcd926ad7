"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import logging

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from .defaults import DefaultConfig, PRESET_CONFIGS, validate_config

logger = logging.getLogger(__name__)

# TOML sections flattened into Settings fields
_TOML_SECTIONS = ('cost', 'optimizer', 'advanced')

@dataclass
class Settings:
    """Configuration for a training run.

    Can be loaded from TOML files while providing the original numeric
    defaults (σ² = 100, log-sum cutoff 30).
    """

    # Cost function parameters
    sigma_squared: float = 100.0
    log_sum_cutoff: float = 30.0

    # Optimizer parameters
    optimizer_method: str = "L-BFGS-B"
    max_iterations: int = 100
    tolerance: float = 1e-6
    initial_scale: float = 0.0

    # Reproducibility
    random_seed: Optional[int] = None

    # Advanced settings
    verbose: bool = False

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.sigma_squared <= 0:
            raise ValueError(f"sigma_squared must be positive, got {self.sigma_squared}")
        if self.log_sum_cutoff <= 0:
            raise ValueError(f"log_sum_cutoff must be positive, got {self.log_sum_cutoff}")

        for warning in validate_config(self.to_default_config()):
            logger.warning("Configuration warning: %s", warning)

    def to_default_config(self) -> DefaultConfig:
        return DefaultConfig(
            sigma_squared=self.sigma_squared,
            log_sum_cutoff=self.log_sum_cutoff,
            optimizer_method=self.optimizer_method,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
            initial_scale=self.initial_scale
        )

    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.

        Parameters
        ----------
        preset : str
            Preset name ('default', 'strong_prior', 'weak_prior')

        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in PRESET_CONFIGS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(PRESET_CONFIGS.keys())}")

        return cls(**asdict(PRESET_CONFIGS[preset]))

    @classmethod
    def from_dict(cls, config_data: dict) -> 'Settings':
        """Build settings from a nested or flat mapping.

        Keys inside the ``cost``, ``optimizer`` and ``advanced`` sections are
        flattened; top-level scalar keys are taken as-is. Unknown keys raise
        ``TypeError`` from the dataclass constructor.
        """
        settings_data = {}
        for section in _TOML_SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])

        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value

        return cls(**settings_data)

    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.

        Parameters
        ----------
        toml_path : Union[str, Path]
            Path to TOML configuration file

        Returns
        -------
        Settings
            Settings object with values from TOML file

        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")

        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")

        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)

        return cls.from_dict(config_data)

    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.

        ``random_seed`` is omitted when unset since TOML has no null value.

        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")

        config_data = {
            'cost': {
                'sigma_squared': self.sigma_squared,
                'log_sum_cutoff': self.log_sum_cutoff
            },
            'optimizer': {
                'optimizer_method': self.optimizer_method,
                'max_iterations': self.max_iterations,
                'tolerance': self.tolerance,
                'initial_scale': self.initial_scale
            },
            'advanced': {
                'verbose': self.verbose
            }
        }
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed

        with open(Path(toml_path), 'wb') as f:
            tomli_w.dump(config_data, f)

    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None

def get_config(config_path: Optional[Union[str, Path]] = None,
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.

    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset name, used when no configuration file is found
    reload : bool
        Force reload configuration even if already loaded

    Returns
    -------
    Settings
        Global configuration settings
    """
    global _GLOBAL_CONFIG

    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG

    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            Path('loglinear_cost.toml'),
            Path.home() / '.loglinear_cost.toml',
            Path.cwd() / 'config' / 'loglinear_cost.toml'
        ]

        config_loaded = False
        for path in default_paths:
            if path.exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)

        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'default')

    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)

    return _GLOBAL_CONFIG

def set_config(settings: Settings) -> None:
    """Set global configuration settings."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings

    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)
