"""Training data helpers.

Examples
--------
>>> from loglinear_cost.data import make_synthetic_problem
>>> problem = make_synthetic_problem(n_examples=20, n_features=4, n_classes=3, random_state=0)
>>> problem.outcome.shape
(20, 3)
"""

from .matrices import TrainingProblem, load_matrix, make_synthetic_problem, one_hot

__all__ = [
    'TrainingProblem',
    'load_matrix',
    'make_synthetic_problem',
    'one_hot'
]
