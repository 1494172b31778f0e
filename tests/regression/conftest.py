"""
Regression fixtures.
"""

import numpy as np
import pytest

from pyinference.regression import add_intercept


@pytest.fixture
def interaction_data(rng):
    """Two predictors whose product genuinely drives y."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    y = 1.0 + x1 + x2 + 2.0 * x1 * x2 + rng.standard_normal(n) * 0.1
    return x1, x2, y


@pytest.fixture
def orthogonal_noise_data(rng):
    """
    Reduced design, y, and an extra column orthogonal to both.

    Adding the extra column leaves the fit unchanged.
    """
    n = 60
    x = rng.standard_normal(n)
    X_reduced = add_intercept(x)
    y = 2.0 - 0.5 * x + rng.standard_normal(n)

    A = np.column_stack([X_reduced, y])
    w = rng.standard_normal(n)
    coef, *_ = np.linalg.lstsq(A, w, rcond=None)
    z = w - A @ coef
    return X_reduced, y, z
