"""Optimizer driver for the conditional-likelihood cost function."""

from .minimizer import (
    OptimizationResult,
    SUPPORTED_METHODS,
    check_gradient,
    initial_parameters,
    minimize_cost
)

__all__ = [
    'OptimizationResult',
    'SUPPORTED_METHODS',
    'check_gradient',
    'initial_parameters',
    'minimize_cost'
]
