"""Conditional-likelihood cost function for log-linear class weights.

Used inside a hidden Markov model to fit the weights of the per-state
classifier. The cost is the negative conditional log-likelihood of the gold
classes plus a Gaussian prior on the weights; the gradient is returned in the
same flat layout as the parameters, so the function plugs directly into
``scipy.optimize.minimize(..., jac=True)``.
"""

import warnings
import numpy as np
from typing import Tuple

from .exceptions import ShapeMismatchError
from .folding import fold_matrix, unfold_matrix
from .log_space import DEFAULT_CUTOFF, correct_prediction, log_sum
from .prior import DEFAULT_SIGMA_SQUARED, compute_log_prior


class LogLinearCostFunction:
    """Negative conditional log-likelihood with an L2 prior.

    Parameters
    ----------
    features : np.ndarray, shape (m, f)
        Feature matrix, one training example per row. Held by reference and
        never modified.
    outcome : np.ndarray, shape (m, c) or (m, 1)
        Gold outcomes. With c columns each row's argmax is the gold class.
        A single column holds binary labels and is treated as two classes,
        where a value above 0.5 selects class 1.
    sigma_squared : float, default=100.0
        Variance σ² of the Gaussian prior
    log_sum_cutoff : float, default=30.0
        Truncation distance used by :func:`log_sum`

    Attributes
    ----------
    classes : int
        Number of classes, 2 for single-column outcomes
    m : int
        Number of training examples

    Notes
    -----
    Per-class scores sum the weights over every feature position of a row
    and do not multiply by the feature values, which matches indicator
    features where every position is active. See DESIGN.md.

    A single-column outcome is expanded once into ``[1 - y, y]`` rows, so a
    value above 0.5 selects class 1 and anything else class 0. Taking the
    argmax of the length-1 row directly would always pick class 0 and ignore
    the label.

    Examples
    --------
    >>> cost_fn = LogLinearCostFunction(np.ones((1, 2)), np.array([[0.0, 1.0]]))
    >>> cost, grad = cost_fn.evaluate_cost(np.zeros(4))
    >>> round(cost, 6)  # log(2)
    0.693147
    """

    def __init__(self,
                 features: np.ndarray,
                 outcome: np.ndarray,
                 sigma_squared: float = DEFAULT_SIGMA_SQUARED,
                 log_sum_cutoff: float = DEFAULT_CUTOFF):
        features = np.asarray(features, dtype=float)
        outcome = np.asarray(outcome, dtype=float)

        if features.ndim != 2:
            raise ShapeMismatchError(f"features must be 2-D, got shape {features.shape}")
        if outcome.ndim != 2:
            raise ShapeMismatchError(f"outcome must be 2-D, got shape {outcome.shape}")
        if features.shape[0] != outcome.shape[0]:
            raise ShapeMismatchError(
                f"features has {features.shape[0]} rows but outcome has {outcome.shape[0]}"
            )
        if sigma_squared <= 0:
            raise ValueError(f"sigma_squared must be positive, got {sigma_squared}")
        if log_sum_cutoff <= 0:
            raise ValueError(f"log_sum_cutoff must be positive, got {log_sum_cutoff}")

        self.features = features
        self.outcome = outcome
        self.sigma_squared = float(sigma_squared)
        self.log_sum_cutoff = float(log_sum_cutoff)
        self.m = outcome.shape[0]
        self.classes = 2 if outcome.shape[1] == 1 else outcome.shape[1]

        # Binary labels become [1 - y, y] rows so argmax selects the gold class
        if outcome.shape[1] == 1:
            self._gold_rows = np.hstack([1.0 - outcome, outcome])
        else:
            self._gold_rows = outcome

    @property
    def n_features(self) -> int:
        """Number of feature columns per class."""
        return self.features.shape[1]

    @property
    def n_parameters(self) -> int:
        """Expected length of the flat parameter vector."""
        return self.classes * self.n_features

    def _validate_parameters(self, parameters: np.ndarray) -> None:
        if parameters.ndim != 1:
            raise ShapeMismatchError(f"parameters must be 1-D, got shape {parameters.shape}")
        length = parameters.shape[0]
        if length % self.classes != 0:
            raise ShapeMismatchError(
                f"Parameter length {length} is not divisible by {self.classes} classes"
            )
        if length != self.n_parameters:
            raise ShapeMismatchError(
                f"Parameter length {length} != classes * features "
                f"= {self.classes} * {self.n_features}"
            )

    def evaluate_cost(self, parameters: np.ndarray) -> Tuple[float, np.ndarray]:
        """Evaluate cost and gradient at ``parameters``.

        Parameters
        ----------
        parameters : np.ndarray, shape (classes * f,)
            Flat row-major weight matrix θ

        Returns
        -------
        cost : float
            Negative conditional log-likelihood plus Gaussian prior
        gradient : np.ndarray, shape (classes * f,)
            Freshly allocated gradient in the same layout as ``parameters``

        Raises
        ------
        ShapeMismatchError
            If ``parameters`` does not have length ``classes * f``
        """
        parameters = np.asarray(parameters, dtype=float)
        self._validate_parameters(parameters)

        theta = unfold_matrix(parameters, self.classes, parameters.shape[0] // self.classes)
        gradient = np.zeros_like(theta)

        cost = 0.0
        for row in range(self.m):
            row_vector = self.features[row]
            gold_row = self._gold_rows[row]
            n_positions = row_vector.shape[0]

            # Sum class weights over every feature position of the row
            log_probabilities = theta[:, :n_positions].sum(axis=1)
            z = log_sum(log_probabilities, self.log_sum_cutoff)

            for i in range(self.classes):
                prob = np.exp(log_probabilities[i] - z)
                gradient[i, :n_positions] += prob
                if correct_prediction(i, gold_row):
                    gradient[i, :n_positions] -= 1.0
                    cost -= np.log(prob)

        fold_gradient = fold_matrix(gradient)
        cost += compute_log_prior(parameters, fold_gradient, self.sigma_squared)

        if not np.isfinite(cost):
            warnings.warn(f"Non-finite cost {cost}; check inputs for NaN/Inf values",
                          RuntimeWarning)

        return float(cost), fold_gradient

    def __call__(self, parameters: np.ndarray) -> Tuple[float, np.ndarray]:
        return self.evaluate_cost(parameters)
