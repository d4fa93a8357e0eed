"""
Weighted least-squares regression.

Public API:
    regress(X, weights, y, ...) -> WLSSolution
    ols(X, y, ...) -> WLSSolution

regress() is the entry point. It handles:
    - Input validation
    - Design construction (intercept augmentation, weight collapsing)
    - Backend selection
    - Result wrapping

Example:
    >>> from pywls.regression import regress
    >>> result = regress(X, w, y, intercept=True)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from pywls.regression.design import WLSDesign
from pywls.regression.solution import WLSSolution, WLSParams
from pywls.regression.solvers import regress, ols

__all__ = [
    "regress",
    "ols",
    "WLSDesign",
    "WLSSolution",
    "WLSParams",
]
