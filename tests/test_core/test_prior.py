"""Tests for the Gaussian prior."""

import numpy as np
import pytest

from loglinear_cost.core import ShapeMismatchError
from loglinear_cost.core.prior import compute_log_prior


class TestComputeLogPrior:
    """Test suite for compute_log_prior."""

    def test_zero_parameters(self):
        """Zero weights give zero prior and leave the gradient unchanged."""
        theta = np.zeros(5)
        gradient = np.array([0.1, -0.2, 0.3, 0.0, 1.5])
        original = gradient.copy()

        prior = compute_log_prior(theta, gradient)

        assert prior == 0.0
        np.testing.assert_array_equal(gradient, original)

    def test_single_weight(self):
        """θ = [10] with σ² = 100 gives 0.5 and adds 0.1 to the gradient."""
        theta = np.array([10.0])
        gradient = np.array([2.0])

        prior = compute_log_prior(theta, gradient)

        assert prior == pytest.approx(0.5)
        assert gradient[0] == pytest.approx(2.1)

    def test_custom_sigma(self):
        """σ² scales both the penalty and the gradient."""
        theta = np.array([1.0, -2.0])
        gradient = np.zeros(2)

        prior = compute_log_prior(theta, gradient, sigma_squared=4.0)

        assert prior == pytest.approx((1.0 + 4.0) / 8.0)
        np.testing.assert_allclose(gradient, [0.25, -0.5])

    def test_theta_not_modified(self):
        """Only the gradient buffer is written."""
        theta = np.array([3.0, -4.0])
        gradient = np.zeros(2)
        compute_log_prior(theta, gradient)
        np.testing.assert_array_equal(theta, [3.0, -4.0])

    def test_length_mismatch_raises(self):
        """Gradient and theta must have the same shape."""
        with pytest.raises(ShapeMismatchError):
            compute_log_prior(np.zeros(3), np.zeros(2))
