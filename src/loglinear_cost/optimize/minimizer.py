"""Gradient-based minimisation of the conditional-likelihood cost.

Wraps ``scipy.optimize.minimize`` so that a cost function returning
``(cost, gradient)`` can be driven to a minimum, with per-iteration cost
tracking and logging.
"""

import logging
import numpy as np
from scipy import optimize
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple, Union

from ..core.exceptions import ShapeMismatchError

logger = logging.getLogger(__name__)

CostFunction = Callable[[np.ndarray], Tuple[float, np.ndarray]]

SUPPORTED_METHODS = ("L-BFGS-B", "BFGS", "CG")


@dataclass
class OptimizationResult:
    """Container for the outcome of a minimisation run.

    Attributes
    ----------
    theta : np.ndarray
        Final parameter vector
    cost : float
        Cost at ``theta``
    gradient_norm : float
        Euclidean norm of the gradient at ``theta``
    iterations : int
        Number of optimizer iterations performed
    converged : bool
        Whether scipy reported success
    message : str
        Termination message from scipy
    cost_history : List[float]
        Cost after each iteration, starting with the initial cost
    """
    theta: np.ndarray
    cost: float
    gradient_norm: float
    iterations: int
    converged: bool
    message: str
    cost_history: List[float] = field(default_factory=list)


def initial_parameters(cost_function,
                       scale: float = 0.0,
                       random_state: Optional[Union[int, np.random.RandomState]] = None) -> np.ndarray:
    """Create a starting parameter vector for ``cost_function``.

    Parameters
    ----------
    cost_function : LogLinearCostFunction
        Cost function whose ``n_parameters`` sets the vector length
    scale : float, default=0.0
        Standard deviation of the Gaussian initialisation; 0 gives all zeros
    random_state : int or np.random.RandomState, optional
        Seed or generator. Falls back to the global NumPy state.

    Returns
    -------
    np.ndarray, shape (n_parameters,)
    """
    n = cost_function.n_parameters
    if scale == 0.0:
        return np.zeros(n)

    if isinstance(random_state, np.random.RandomState):
        return random_state.normal(0.0, scale, size=n)
    if random_state is not None:
        return np.random.RandomState(random_state).normal(0.0, scale, size=n)
    return np.random.normal(0.0, scale, size=n)


def minimize_cost(cost_function: CostFunction,
                  initial_theta: np.ndarray,
                  method: str = "L-BFGS-B",
                  max_iterations: int = 100,
                  tolerance: float = 1e-6,
                  callback: Optional[Callable[[int, float, np.ndarray], None]] = None) -> OptimizationResult:
    """Minimise a ``(cost, gradient)`` function with scipy.

    Parameters
    ----------
    cost_function : callable
        Maps a flat parameter vector to ``(cost, gradient)``
    initial_theta : np.ndarray
        Starting point
    method : str, default="L-BFGS-B"
        One of ``SUPPORTED_METHODS``
    max_iterations : int, default=100
        Iteration limit passed to scipy as ``maxiter``
    tolerance : float, default=1e-6
        Termination tolerance passed to scipy as ``tol``
    callback : callable, optional
        Called as ``callback(iteration, cost, theta)`` after every iteration

    Returns
    -------
    OptimizationResult
    """
    if method not in SUPPORTED_METHODS:
        raise ValueError(f"Unknown method '{method}'. Available: {list(SUPPORTED_METHODS)}")
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be at least 1, got {max_iterations}")

    theta0 = np.asarray(initial_theta, dtype=float)
    if theta0.ndim != 1:
        raise ShapeMismatchError(f"initial_theta must be 1-D, got shape {theta0.shape}")

    last_eval = {'theta': None, 'cost': None}

    def objective(theta: np.ndarray) -> Tuple[float, np.ndarray]:
        cost, gradient = cost_function(theta)
        last_eval['theta'] = theta.copy()
        last_eval['cost'] = cost
        return cost, gradient

    initial_cost, _ = objective(theta0)
    cost_history = [float(initial_cost)]
    logger.info("Starting %s: %d parameters, initial cost %.6f",
                method, theta0.shape[0], initial_cost)

    def track(theta_k: np.ndarray) -> None:
        if last_eval['theta'] is not None and np.array_equal(theta_k, last_eval['theta']):
            cost_k = last_eval['cost']
        else:
            cost_k, _ = cost_function(theta_k)
        cost_history.append(float(cost_k))
        iteration = len(cost_history) - 1
        logger.debug("Iteration %d: cost %.8f", iteration, cost_k)
        if callback is not None:
            callback(iteration, float(cost_k), theta_k)

    result = optimize.minimize(objective,
                               theta0,
                               method=method,
                               jac=True,
                               tol=tolerance,
                               options={'maxiter': max_iterations},
                               callback=track)

    final_cost, final_gradient = cost_function(result.x)
    gradient_norm = float(np.linalg.norm(final_gradient))

    if result.success:
        logger.info("%s converged after %d iterations: cost %.6f, |grad| %.3e",
                    method, result.nit, final_cost, gradient_norm)
    else:
        logger.warning("%s stopped after %d iterations without converging: %s",
                       method, result.nit, result.message)

    return OptimizationResult(theta=np.asarray(result.x),
                              cost=float(final_cost),
                              gradient_norm=gradient_norm,
                              iterations=int(result.nit),
                              converged=bool(result.success),
                              message=str(result.message),
                              cost_history=cost_history)


def check_gradient(cost_function: CostFunction,
                   theta: np.ndarray,
                   epsilon: float = 1e-6) -> float:
    """Compare the analytic gradient against forward finite differences.

    Returns
    -------
    float
        Maximum absolute difference between the two gradients
    """
    theta = np.asarray(theta, dtype=float)
    _, analytic = cost_function(theta)
    numeric = optimize.approx_fprime(theta, lambda t: cost_function(t)[0], epsilon)
    difference = float(np.max(np.abs(analytic - numeric)))
    logger.debug("Gradient check at |theta|=%.3e: max difference %.3e",
                 np.linalg.norm(theta), difference)
    return difference
