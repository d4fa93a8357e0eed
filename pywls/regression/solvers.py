"""
Solver dispatch for weighted regression.

This module provides the regress() and ols() functions (public API) and
backend selection.
"""

import warnings
from typing import Literal
import numpy as np
from numpy.typing import ArrayLike

from pywls.core.protocols import LinearAlgebra
from pywls.regression.design import WLSDesign
from pywls.regression.solution import WLSSolution
from pywls.regression.backends.cpu import CPUNormalEquationsBackend, CPUQRBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_normal', 'cpu_qr']


def regress(
    X: ArrayLike,
    weights: ArrayLike | None,
    y: ArrayLike,
    *,
    intercept: bool = False,
    algebra: LinearAlgebra | None = None,
    backend: BackendChoice = 'auto',
) -> WLSSolution:
    """
    Fit a weighted least-squares regression.

    Solves
        min_β Σᵢ wᵢ (yᵢ - xᵢβ)²
    and reports the standard fit diagnostics.

    This is the primary public API. Input validation, design construction,
    backend selection and result wrapping all happen here.

    Args:
        X: Predictors (n x p). A 1D array is a single predictor.
        weights: Observation weights (n,). An (n x n) matrix is accepted
            but only its diagonal is used; a UserWarning is issued and the
            message is recorded on ``solution.warnings``.
        y: Response vector (n,).
        intercept: If True, prepend a column of ones; the intercept is the
            first coefficient.
        algebra: LinearAlgebra provider (transpose, multiply, inverse).
            Defaults to DenseAlgebra.
        backend: Computational backend:
            - 'auto' / 'cpu' / 'cpu_normal': weighted normal equations
            - 'cpu_qr': QR of the row-scaled design (non-negative weights)

    Returns:
        WLSSolution with coefficients, residuals and diagnostics

    Raises:
        ValidationError: If weights are missing or inputs are invalid
        DimensionError: If X, weights and y have inconsistent dimensions
        SingularMatrixError: If the normal-equations matrix is singular
        ValueError: If the backend name is unknown

    Note:
        With n - k <= 0 degrees of freedom the statistics are NaN/Inf;
        no error is raised.

    Example:
        >>> import numpy as np
        >>> from pywls import regress
        >>>
        >>> X = np.array([[1.0], [2.0], [3.0]])
        >>> result = regress(X, [1.0, 1.0, 1.0], [3.0, 5.0, 7.0], intercept=True)
        >>> print(result.coefficients)   # [1. 2.]
        >>> print(result.summary())
    """
    # === Construct Design ===
    # This is the boundary - validate here, trust everywhere else
    design = WLSDesign.build(X, weights, y, intercept=intercept)

    for message in design.diagnostics:
        warnings.warn(message, UserWarning, stacklevel=2)

    # === Select Backend ===
    backend_impl = _get_backend(backend, algebra)

    # === Solve ===
    result = backend_impl.solve(design)

    # === Wrap and Return ===
    return WLSSolution(_result=result, _design=design)


def ols(
    X: ArrayLike,
    y: ArrayLike,
    *,
    intercept: bool = False,
    algebra: LinearAlgebra | None = None,
    backend: BackendChoice = 'cpu_qr',
) -> WLSSolution:
    """
    Fit an ordinary (unweighted) least-squares regression.

    Equivalent to regress() with every weight equal to one; defaults to
    the QR backend.

    Args:
        X: Predictors (n x p)
        y: Response vector (n,)
        intercept: If True, prepend a column of ones
        algebra: LinearAlgebra provider, as for regress()
        backend: As for regress()

    Returns:
        WLSSolution
    """
    n = np.shape(y)[0] if np.ndim(y) > 0 else 0
    return regress(
        X, np.ones(n), y,
        intercept=intercept, algebra=algebra, backend=backend,
    )


def _get_backend(choice: BackendChoice, algebra: LinearAlgebra | None):
    """
    Select and instantiate the appropriate backend.

    Args:
        choice: User's backend preference
        algebra: Provider passed through to the backend

    Returns:
        Backend instance ready to solve

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_normal'):
        return CPUNormalEquationsBackend(algebra)

    elif choice == 'cpu_qr':
        return CPUQRBackend(algebra)

    else:
        raise ValueError(f"Unknown backend: {choice!r}")
