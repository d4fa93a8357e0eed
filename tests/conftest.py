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
def weighted_regression_data(rng):
    """Heteroscedastic dataset: noise variance grows with the weight's inverse."""
    n, p = 80, 2
    X = rng.standard_normal((n, p))
    weights = rng.uniform(0.5, 4.0, size=n)
    beta_true = np.array([1.5, -2.0, 0.75])  # intercept first
    noise = rng.standard_normal(n) / np.sqrt(weights) * 0.2
    y = beta_true[0] + X @ beta_true[1:] + noise
    return X, weights, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 50
    x1 = rng.integers(-5, 6, size=n).astype(float)
    x2 = rng.integers(-5, 6, size=n).astype(float)
    X = np.column_stack([x1, x2, x1 + x2])
    y = rng.standard_normal(n)
    return X, np.ones(n), y
