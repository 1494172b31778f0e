"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_regression_data(rng):
    """Intercept plus three predictors with small noise."""
    n = 100
    Z = rng.standard_normal((n, 3))
    X = np.column_stack([np.ones(n), Z])
    beta_true = np.array([0.5, 1.0, -2.0, 0.5])
    y = X @ beta_true + rng.standard_normal(n) * 0.1
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2  # Perfect collinearity
    X = np.column_stack([np.ones(n), x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y


@pytest.fixture
def textbook_line():
    """
    x = 1..5, y = [2, 4, 5, 4, 5].

    Hand-computed: b0 = 2.2, b1 = 0.6, SSE = 2.4, SST = 6, R^2 = 0.6.
    """
    x = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([2.0, 4.0, 5.0, 4.0, 5.0])
    return x, y
