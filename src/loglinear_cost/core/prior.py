"""Gaussian (L2) prior on the classifier weights."""

import numpy as np

from .exceptions import ShapeMismatchError

DEFAULT_SIGMA_SQUARED = 10.0 * 10.0


def compute_log_prior(theta: np.ndarray,
                      gradient: np.ndarray,
                      sigma_squared: float = DEFAULT_SIGMA_SQUARED) -> float:
    """Compute the Gaussian prior penalty and accumulate its gradient.

    Returns Σ_k θ_k² / (2σ²) and adds θ_k / σ² to ``gradient[k]``.

    Parameters
    ----------
    theta : np.ndarray, shape (n,)
        Flat parameter vector
    gradient : np.ndarray, shape (n,)
        Flat gradient buffer owned by the caller. **Modified in place.**
    sigma_squared : float, default=100.0
        Prior variance σ²

    Returns
    -------
    float
        Prior term to add to the cost

    Raises
    ------
    ShapeMismatchError
        If ``theta`` and ``gradient`` differ in length
    """
    theta = np.asarray(theta, dtype=float)
    if theta.shape != gradient.shape:
        raise ShapeMismatchError(
            f"theta shape {theta.shape} != gradient shape {gradient.shape}"
        )

    prior = float(np.sum(theta * theta) / 2.0 / sigma_squared)
    gradient += theta / sigma_squared
    return prior
