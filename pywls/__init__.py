"""
PyWLS: weighted least-squares regression for Python.

Estimates regression coefficients under per-observation weights, with
standard errors, t-statistics, p-values, R² and adjusted R².

Submodules:
    regression: Weighted and ordinary least squares
    core: Exceptions, validation, result envelope, linear algebra provider
"""

__version__ = "0.1.0"

from pywls import regression
from pywls.regression import regress, ols

__all__ = [
    "__version__",
    "regression",
    "regress",
    "ols",
]
