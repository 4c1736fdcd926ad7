"""
Loglinear Cost - conditional-likelihood training of log-linear class weights.

This package provides the cost/gradient evaluation used to fit the classifier
weights of a hidden Markov model, a scipy-based optimizer driver and an
asynchronous buffered output stream.
"""

__version__ = "0.1.0"

from .core import LogLinearCostFunction, ShapeMismatchError, compute_log_prior, log_sum
from .optimize import minimize_cost, OptimizationResult

__all__ = [
    'LogLinearCostFunction',
    'ShapeMismatchError',
    'compute_log_prior',
    'log_sum',
    'minimize_cost',
    'OptimizationResult'
]
