"""
Core numeric tests for loglinear-cost.

Tests for:
- Truncated log-sum-exp and argmax prediction
- Gaussian prior
- Fold/unfold reshaping
- Cost and gradient evaluation
"""
