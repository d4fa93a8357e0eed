"""
Regression solution types.

Contains the parameter payload (the immutable regression result) and the
user-facing solution wrapper.
"""

from dataclasses import dataclass, fields
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pywls.core.result import Result
from pywls.core.exceptions import DimensionError
from pywls.core.validation import check_array

if TYPE_CHECKING:
    from pywls.regression.design import WLSDesign


def _values_equal(a: Any, b: Any) -> bool:
    """Element-wise equality for arrays and floats, with NaN equal to NaN."""
    return np.array_equal(
        np.asarray(a, dtype=np.float64),
        np.asarray(b, dtype=np.float64),
        equal_nan=True,
    )


@dataclass(frozen=True, eq=False)
class WLSParams:
    """
    Parameter payload for weighted least-squares regression.

    This is the immutable data computed by backends. Per-coefficient arrays
    have length k (number of predictors, plus one with an intercept, which
    comes first); per-observation arrays have length n.

    Equality is structural: two payloads are equal when every field is
    equal, arrays compared element-wise with NaN matching NaN.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    mean_squared_error: float
    standard_errors: NDArray[np.floating[Any]]
    r_squared: float
    adjusted_r_squared: float
    t_statistics: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]
    weighted_tss: float
    weighted_ess: float
    df_residual: int
    has_intercept: bool

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WLSParams):
            return NotImplemented
        for f in fields(self):
            a, b = getattr(self, f.name), getattr(other, f.name)
            if f.name in ('df_residual', 'has_intercept'):
                if a != b:
                    return False
            elif not _values_equal(a, b):
                return False
        return True

    __hash__ = None


@dataclass(frozen=True, eq=False)
class WLSSolution:
    """
    User-facing weighted regression results.

    Wraps the backend Result and provides accessors for all regression
    outputs, prediction, and an R-style summary. Equality compares the
    parameter payload only (timing and provenance differ between calls).
    """
    _result: Result[WLSParams]
    _design: 'WLSDesign'

    @property
    def params(self) -> WLSParams:
        return self._result.params

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def mean_squared_error(self) -> float:
        return self._result.params.mean_squared_error

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients.

        SE(βᵢ) = sqrt(MSE · [(X'X)⁻¹]ᵢᵢ), using the unweighted X'X.
        """
        return self._result.params.standard_errors

    @property
    def r_squared(self) -> float:
        return self._result.params.r_squared

    @property
    def adjusted_r_squared(self) -> float:
        return self._result.params.adjusted_r_squared

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """One-tailed p-values: P(T > |t|) with n - k degrees of freedom."""
        return self._result.params.p_values

    @property
    def covariance(self) -> NDArray[np.floating[Any]]:
        return self._result.params.covariance

    @property
    def has_intercept(self) -> bool:
        return self._result.params.has_intercept

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def n(self) -> int:
        return self._design.n

    @property
    def k(self) -> int:
        return self._design.k

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def has_warning(self, substring: str) -> bool:
        return self._result.has_warning(substring)

    def predict(self, x: ArrayLike) -> float | NDArray[np.floating[Any]]:
        """
        Predicted response for new observations.

        Args:
            x: One observation (p,) or a batch (m x p) of the original
               predictors; the intercept is added automatically.

        Returns:
            A float for a single observation, an array (m,) for a batch

        Raises:
            DimensionError: If the number of predictors does not match
        """
        x_arr = check_array(x, 'x')
        single = x_arr.ndim == 1
        if single:
            x_arr = x_arr.reshape(1, -1)
        if x_arr.ndim != 2:
            raise DimensionError(
                f"x: expected 1D or 2D array, got {x_arr.ndim}D with shape {x_arr.shape}"
            )

        p = self._design.p
        if x_arr.shape[1] != p:
            raise DimensionError(
                f"x: expected {p} predictors, got {x_arr.shape[1]}"
            )

        beta = self.coefficients
        if self.has_intercept:
            predicted = beta[0] + x_arr @ beta[1:]
        else:
            predicted = x_arr @ beta
        return float(predicted[0]) if single else predicted

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Weighted Least Squares Results",
            "=" * 72,
            f"Observations: {self.n}",
            f"Coefficients: {self.k}" + (" (incl. intercept)" if self.has_intercept else ""),
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Mean Squared Error: {self.mean_squared_error:.6g} on {self.df_residual} DF",
            "",
            "Coefficients:",
            "-" * 72,
            f"{'':<12} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>t)':>12}",
            "-" * 72,
        ]

        for i, (coef, se, t, pv) in enumerate(zip(
            self.coefficients, self.standard_errors, self.t_statistics, self.p_values
        )):
            if self.has_intercept and i == 0:
                label = "(Intercept)"
            else:
                label = f"x{i - 1 if self.has_intercept else i}"
            se_str = f"{se:12.6f}" if np.isfinite(se) else f"{'NA':>12}"
            t_str = f"{t:10.3f}" if np.isfinite(t) else f"{'NA':>10}"
            p_str = f"{pv:12.4g}" if np.isfinite(pv) else f"{'NA':>12}"
            lines.append(f"{label:<12} {coef:14.6f} {se_str} {t_str} {p_str}")

        lines.append("-" * 72)
        for message in self.warnings:
            lines.append(f"Warning: {message}")
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WLSSolution):
            return NotImplemented
        return self.params == other.params

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"WLSSolution(n={self.n}, k={self.k}, "
            f"intercept={self.has_intercept}, r_squared={self.r_squared:.4f})"
        )
