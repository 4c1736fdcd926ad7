"""Log-space helpers for normalising per-class scores.

Implements the truncated log-sum-exp used to compute the partition function
of the log-linear classifier, and the argmax predicate that matches a class
index against a gold outcome row.
"""

import numpy as np
from typing import Sequence, Union

# Terms more than this many nats below the maximum are dropped (exp(-30) ≈ 9.4e-14)
DEFAULT_CUTOFF = 30.0


def log_sum(log_inputs: Union[Sequence[float], np.ndarray],
            cutoff: float = DEFAULT_CUTOFF) -> float:
    """Numerically stable log(Σ_i exp(x_i)) with underflow truncation.

    The maximum entry is used as pivot, so exp() is only ever evaluated on
    non-positive arguments. Entries more than ``cutoff`` below the maximum
    contribute nothing.

    Parameters
    ----------
    log_inputs : array-like, shape (n,)
        Raw log-domain scores, not necessarily normalised
    cutoff : float, default=30.0
        Distance below the maximum beyond which terms are ignored

    Returns
    -------
    float
        max + log(1 + Σ_{i≠max} exp(x_i - max)), or exactly max when no
        other entry lies within the cutoff

    Notes
    -----
    On ties the first maximal entry is the pivot and is excluded from the
    summation; other entries equal to the maximum are summed as usual.

    Examples
    --------
    >>> log_sum([5.0, 5.0])  # 5 + log(2)
    5.693147180559945
    >>> log_sum([0.0, -1000.0])
    0.0
    """
    values = np.asarray(log_inputs, dtype=float)
    if values.ndim != 1 or values.shape[0] == 0:
        raise ValueError(f"log_inputs must be a non-empty 1-D sequence, got shape {values.shape}")

    max_idx = int(np.argmax(values))
    max_value = float(values[max_idx])
    threshold = max_value - cutoff

    have_terms = False
    intermediate = 0.0
    for i, value in enumerate(values):
        if i != max_idx and value > threshold:
            have_terms = True
            intermediate += np.exp(value - max_value)

    if have_terms:
        return max_value + float(np.log1p(intermediate))
    return max_value


def correct_prediction(class_index: int, outcome_row: np.ndarray) -> bool:
    """Check whether ``class_index`` is the gold class of an outcome row.

    Parameters
    ----------
    class_index : int
        Candidate class index
    outcome_row : np.ndarray, shape (classes,)
        One-hot (or score) row; its argmax is the gold class

    Returns
    -------
    bool
        True iff ``class_index`` equals the first maximal index of the row

    Examples
    --------
    >>> correct_prediction(1, np.array([0.0, 1.0, 0.0]))
    True
    """
    return int(np.argmax(outcome_row)) == class_index
