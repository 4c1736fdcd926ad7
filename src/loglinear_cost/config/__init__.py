"""Configuration management for loglinear-cost.

Provides training settings, presets and random seed management for
reproducible runs.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, get_global_seed, get_environment_seed
from .defaults import DEFAULT_CONFIG, PRESET_CONFIGS, DefaultConfig, validate_config
from .validate import check_environment, get_dependency_versions

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed',
    'get_global_seed',
    'get_environment_seed',
    'Settings',
    'DEFAULT_CONFIG',
    'PRESET_CONFIGS',
    'DefaultConfig',
    'validate_config',
    'check_environment',
    'get_dependency_versions'
]
