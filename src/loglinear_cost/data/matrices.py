"""Loading and generation of feature/outcome matrices.

Training data for the cost function is a pair of dense matrices: features
of shape (m, f) and outcomes of shape (m, c). This module reads them from
disk and builds synthetic problems for experiments and tests.
"""

import numpy as np
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass
class TrainingProblem:
    """Feature and outcome matrices for one training run.

    Attributes
    ----------
    features : np.ndarray, shape (m, f)
        Indicator feature matrix
    outcome : np.ndarray, shape (m, c)
        One-hot gold classes
    labels : np.ndarray, shape (m,)
        Gold class index per row
    """
    features: np.ndarray
    outcome: np.ndarray
    labels: np.ndarray

    @property
    def n_classes(self) -> int:
        return self.outcome.shape[1]


def load_matrix(path: Union[str, Path]) -> np.ndarray:
    """Load a 2-D float matrix from ``.npy``, ``.csv`` or ``.txt``.

    One-dimensional data is returned as a single column.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist
    ValueError
        If the file extension is unsupported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Matrix file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".npy":
        matrix = np.load(path)
    elif suffix == ".csv":
        matrix = np.loadtxt(path, delimiter=",", ndmin=2)
    elif suffix == ".txt":
        matrix = np.loadtxt(path, ndmin=2)
    else:
        raise ValueError(f"Unsupported matrix file type: {path.suffix}")

    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim == 1:
        matrix = matrix[:, np.newaxis]
    if matrix.ndim != 2:
        raise ValueError(f"Expected a 2-D matrix in {path}, got shape {matrix.shape}")
    return matrix


def one_hot(labels: np.ndarray, n_classes: int) -> np.ndarray:
    """Encode integer class labels as a one-hot (m, n_classes) matrix."""
    labels = np.asarray(labels, dtype=int)
    if labels.ndim != 1:
        raise ValueError(f"labels must be 1-D, got shape {labels.shape}")
    if np.any(labels < 0) or np.any(labels >= n_classes):
        raise ValueError(f"labels must lie in [0, {n_classes})")

    encoded = np.zeros((labels.shape[0], n_classes))
    encoded[np.arange(labels.shape[0]), labels] = 1.0
    return encoded


def make_synthetic_problem(n_examples: int,
                           n_features: int,
                           n_classes: int,
                           class_probabilities: Optional[np.ndarray] = None,
                           random_state: Optional[int] = None) -> TrainingProblem:
    """Generate random indicator features with one-hot gold classes.

    Parameters
    ----------
    n_examples : int
        Number of rows m
    n_features : int
        Number of feature columns f
    n_classes : int
        Number of classes c (at least 2)
    class_probabilities : np.ndarray, optional
        Sampling distribution over classes; uniform when omitted
    random_state : int, optional
        Seed for reproducibility. Falls back to the global NumPy state.

    Returns
    -------
    TrainingProblem
    """
    if n_examples < 1 or n_features < 1:
        raise ValueError("n_examples and n_features must be positive")
    if n_classes < 2:
        raise ValueError(f"n_classes must be at least 2, got {n_classes}")

    rng = np.random.RandomState(random_state) if random_state is not None else np.random

    if class_probabilities is not None:
        class_probabilities = np.asarray(class_probabilities, dtype=float)
        if class_probabilities.shape != (n_classes,):
            raise ValueError(f"class_probabilities must have shape ({n_classes},)")
        if not np.isclose(class_probabilities.sum(), 1.0):
            raise ValueError("class_probabilities must sum to 1")

    features = (rng.rand(n_examples, n_features) < 0.5).astype(float)
    labels = rng.choice(n_classes, size=n_examples, p=class_probabilities)
    return TrainingProblem(features=features,
                           outcome=one_hot(labels, n_classes),
                           labels=labels)
