"""
Pytest configuration and shared fixtures for the loglinear-cost test suite.
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path for testing
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from loglinear_cost.config import set_global_seed


@pytest.fixture(scope="session")
def global_test_seed():
    """Set global random seed for all tests to ensure reproducibility."""
    seed = 42
    set_global_seed(seed)
    return seed


@pytest.fixture
def single_example():
    """One example, two classes, two features; gold class 1."""
    features = np.array([[1.0, 1.0]])
    outcome = np.array([[0.0, 1.0]])
    return features, outcome


@pytest.fixture
def small_problem():
    """Random indicator features with one-hot outcomes over 3 classes."""
    rng = np.random.RandomState(7)
    features = (rng.rand(12, 4) < 0.5).astype(float)
    labels = rng.randint(0, 3, size=12)
    outcome = np.zeros((12, 3))
    outcome[np.arange(12), labels] = 1.0
    return features, outcome


@pytest.fixture
def binary_problem():
    """Single-column binary outcome problem."""
    features = np.ones((6, 3))
    outcome = np.array([[1.0], [0.0], [1.0], [1.0], [0.0], [1.0]])
    return features, outcome


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark slow and integration tests."""
    for item in items:
        if "large" in item.nodeid:
            item.add_marker(pytest.mark.slow)

        if "integration" in item.nodeid or "end_to_end" in item.nodeid:
            item.add_marker(pytest.mark.integration)
