"""Default training configurations and preset regularisation strengths."""

from dataclasses import dataclass
from typing import List

from ..optimize.minimizer import SUPPORTED_METHODS

@dataclass
class DefaultConfig:
    """Base configuration structure for a training run."""

    # Cost function
    sigma_squared: float
    log_sum_cutoff: float

    # Optimizer
    optimizer_method: str
    max_iterations: int
    tolerance: float

    # Initialisation
    initial_scale: float


# Original regularisation: sigma = 10
DEFAULT_CONFIG = DefaultConfig(
    sigma_squared=100.0,
    log_sum_cutoff=30.0,
    optimizer_method="L-BFGS-B",
    max_iterations=100,
    tolerance=1e-6,
    initial_scale=0.0
)

# Small data sets where weights should stay close to zero
STRONG_PRIOR_CONFIG = DefaultConfig(
    sigma_squared=1.0,
    log_sum_cutoff=30.0,
    optimizer_method="L-BFGS-B",
    max_iterations=100,
    tolerance=1e-6,
    initial_scale=0.0
)

# Large data sets, nearly unregularised
WEAK_PRIOR_CONFIG = DefaultConfig(
    sigma_squared=1e4,
    log_sum_cutoff=30.0,
    optimizer_method="L-BFGS-B",
    max_iterations=500,
    tolerance=1e-8,
    initial_scale=0.01
)

PRESET_CONFIGS = {
    "default": DEFAULT_CONFIG,
    "strong_prior": STRONG_PRIOR_CONFIG,
    "weak_prior": WEAK_PRIOR_CONFIG
}

# Below exp(-MIN_CUTOFF) dropped terms start to bias the normaliser
MIN_RECOMMENDED_CUTOFF = 10.0
MAX_ITERATIONS_WARNING = 10000

def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []

    if config.sigma_squared <= 0:
        warnings.append(f"sigma_squared {config.sigma_squared} must be positive")

    if config.log_sum_cutoff < MIN_RECOMMENDED_CUTOFF:
        warnings.append(f"log_sum_cutoff {config.log_sum_cutoff} drops terms that affect precision")

    if config.optimizer_method not in SUPPORTED_METHODS:
        warnings.append(f"Optimizer method '{config.optimizer_method}' not recognized")

    if config.max_iterations < 1:
        warnings.append(f"max_iterations {config.max_iterations} must be at least 1")
    elif config.max_iterations > MAX_ITERATIONS_WARNING:
        warnings.append(f"max_iterations {config.max_iterations} is very high")

    if config.tolerance <= 0:
        warnings.append(f"tolerance {config.tolerance} must be positive")

    if config.initial_scale < 0:
        warnings.append(f"initial_scale {config.initial_scale} must be non-negative")

    return warnings
