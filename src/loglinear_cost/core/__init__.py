"""Core numerics for the conditional-likelihood cost function.

This module contains the fundamental mathematical components:
- Truncated log-sum-exp and argmax prediction check
- Gaussian prior with in-place gradient accumulation
- Row-major fold/unfold between parameter vectors and weight matrices
- The cost function composing all of the above
"""

from .exceptions import CostFunctionError, ShapeMismatchError
from .log_space import log_sum, correct_prediction
from .prior import compute_log_prior
from .folding import fold_matrix, unfold_matrix
from .cost_function import LogLinearCostFunction

__all__ = [
    # Errors
    'CostFunctionError',
    'ShapeMismatchError',

    # Log-space helpers
    'log_sum',
    'correct_prediction',

    # Prior
    'compute_log_prior',

    # Reshaping
    'fold_matrix',
    'unfold_matrix',

    # Cost function
    'LogLinearCostFunction'
]
