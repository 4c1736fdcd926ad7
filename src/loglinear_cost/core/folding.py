"""Row-major reshaping between flat parameter vectors and weight matrices.

Optimizers work on flat vectors while the cost function indexes weights as
a (classes, features) matrix. Row ``i`` of the matrix occupies the slice
``[i * cols, (i + 1) * cols)`` of the vector.
"""

import numpy as np

from .exceptions import ShapeMismatchError


def unfold_matrix(vector: np.ndarray, rows: int, cols: int) -> np.ndarray:
    """Reshape a flat vector into a (rows, cols) matrix.

    Parameters
    ----------
    vector : np.ndarray, shape (rows * cols,)
        Flat parameter vector
    rows, cols : int
        Target matrix shape

    Returns
    -------
    np.ndarray, shape (rows, cols)
        Fresh copy; writing to it never touches ``vector``

    Raises
    ------
    ShapeMismatchError
        If ``vector`` is not 1-D or its length is not ``rows * cols``
    """
    vector = np.asarray(vector, dtype=float)
    if vector.ndim != 1:
        raise ShapeMismatchError(f"Expected a 1-D vector, got shape {vector.shape}")
    if rows <= 0 or cols < 0 or vector.shape[0] != rows * cols:
        raise ShapeMismatchError(
            f"Cannot unfold vector of length {vector.shape[0]} into ({rows}, {cols})"
        )
    return vector.reshape(rows, cols).copy()


def fold_matrix(matrix: np.ndarray) -> np.ndarray:
    """Flatten a 2-D matrix into a fresh row-major vector."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.ndim != 2:
        raise ShapeMismatchError(f"Expected a 2-D matrix, got shape {matrix.shape}")
    return matrix.flatten(order='C')
