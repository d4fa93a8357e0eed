"""
Fit diagnostics shared by every regression backend.

Given the coefficients, computes residuals, weighted sums of squares,
R², adjusted R², mean squared error, the coefficient covariance and the
per-coefficient standard errors, t-statistics and p-values.

Conventions:
    - TSS is weighted but centred on the UNWEIGHTED mean of y
    - the coefficient covariance uses the UNWEIGHTED (X'X)⁻¹
    - p-values are one-tailed: P(T > |t|), T ~ t(n - k), taken from the
      survival function so small values do not round to zero

Every array in the returned payload is read-only.

When n - k <= 0 the statistics degenerate to NaN/Inf; no error is raised.
"""

from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pywls.core.exceptions import SingularMatrixError
from pywls.core.protocols import LinearAlgebra
from pywls.regression.design import WLSDesign
from pywls.regression.solution import WLSParams


def invert(
    algebra: LinearAlgebra,
    matrix: NDArray[np.floating[Any]],
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Invert through the provider, naming the matrix on failure.

    The provider's SingularMatrixError is re-raised as the same object;
    matrix_name is only filled in when the provider left it unset.
    """
    try:
        return algebra.inverse(matrix)
    except SingularMatrixError as exc:
        if exc.matrix_name is None:
            exc.matrix_name = name
        raise


def _frozen(array: Any) -> NDArray[np.floating[Any]]:
    array = np.array(array, dtype=np.float64)
    array.setflags(write=False)
    return array


def compute_statistics(
    design: WLSDesign,
    coefficients: NDArray[np.floating[Any]],
    algebra: LinearAlgebra,
) -> WLSParams:
    """
    Build the full parameter payload for a solved WLS problem.

    Args:
        design: The validated design the coefficients were fitted on
        coefficients: Estimated β (k,)
        algebra: Provider used for X'X and its inverse

    Returns:
        WLSParams

    Raises:
        SingularMatrixError: If X'X is not invertible
    """
    X, w, y = design.X, design.w, design.y
    n, k = design.n, design.k
    beta = np.asarray(coefficients, dtype=np.float64).reshape(-1)

    fitted_values = np.asarray(algebra.multiply(X, beta), dtype=np.float64).reshape(-1)
    residuals = y - fitted_values

    y_mean = np.mean(y)
    tss = np.sum(w * (y - y_mean) ** 2)
    ess = np.sum(w * residuals ** 2)
    regression_ss = tss - ess

    Xt = algebra.transpose(X)
    XtX_inv = np.asarray(invert(algebra, algebra.multiply(Xt, X), "X'X"), dtype=np.float64)

    df = n - k
    with np.errstate(divide='ignore', invalid='ignore'):
        r_squared = regression_ss / tss
        adjusted_r_squared = 1.0 - (1.0 - r_squared) * np.float64(n - 1) / np.float64(df)
        mse = ess / np.float64(df)

        covariance = mse * XtX_inv
        standard_errors = np.sqrt(mse * np.diag(XtX_inv))
        t_statistics = beta / standard_errors
        if df > 0:
            p_values = stats.t.sf(np.abs(t_statistics), df)
        else:
            p_values = np.full(k, np.nan, dtype=np.float64)

    return WLSParams(
        coefficients=_frozen(beta),
        residuals=_frozen(residuals),
        fitted_values=_frozen(fitted_values),
        mean_squared_error=float(mse),
        standard_errors=_frozen(standard_errors),
        r_squared=float(r_squared),
        adjusted_r_squared=float(adjusted_r_squared),
        t_statistics=_frozen(t_statistics),
        p_values=_frozen(p_values),
        covariance=_frozen(covariance),
        weighted_tss=float(tss),
        weighted_ess=float(ess),
        df_residual=df,
        has_intercept=design.intercept,
    )
