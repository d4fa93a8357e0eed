"""
Weighted regression design.

The design validates the caller's arrays once, at the boundary, and owns
the three things every backend needs: the (optionally intercept-augmented)
design matrix X, the weight vector w, and the response y. Backends trust
it completely.

Weights given as an n x n matrix are collapsed to their diagonal. The
off-diagonal entries are discarded (no generalised least squares here),
which is recorded on the design as a diagnostic so the solution can
report it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pywls.core.exceptions import DimensionError, ValidationError
from pywls.core.validation import (
    check_array,
    check_finite,
    check_1d,
    check_2d,
    check_square,
    check_consistent_length,
    check_min_samples,
)

WEIGHT_MATRIX_WARNING = (
    "weights supplied as a matrix: only the diagonal is used, "
    "off-diagonal weights are ignored"
)


@dataclass(frozen=True, eq=False)
class WLSDesign:
    """
    Weighted least-squares design specification.

    Immutable after construction; all arrays are private read-only copies,
    so the caller's inputs are never aliased or mutated.

    Construction:
        WLSDesign.build(X, weights, y)                  # no intercept
        WLSDesign.build(X, weights, y, intercept=True)  # leading ones column
    """
    _X: NDArray[np.floating[Any]]
    _w: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _intercept: bool
    _diagnostics: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def build(
        cls,
        X: ArrayLike,
        weights: ArrayLike | None,
        y: ArrayLike,
        *,
        intercept: bool = False,
    ) -> WLSDesign:
        """
        Validate inputs and build the design.

        Args:
            X: Predictors (n x p), or a single predictor as a 1D array (n,)
            weights: Observation weights (n,), or an (n x n) matrix whose
                diagonal is used
            y: Response (n,) or (n x 1)
            intercept: Prepend a column of ones to X

        Returns:
            WLSDesign ready for any regression backend

        Raises:
            ValidationError: If weights are missing, or any input is
                non-numeric or non-finite
            DimensionError: If shapes are wrong or row counts disagree
        """
        if weights is None:
            raise ValidationError("weighted regression requires weights")

        X_arr = check_array(X, 'X')
        w_arr = check_array(weights, 'weights')
        y_arr = check_array(y, 'y')

        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()

        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        if X_arr.shape[1] == 0 and not intercept:
            raise DimensionError("X: no predictor columns and no intercept, nothing to estimate")

        diagnostics: list[str] = []
        if w_arr.ndim == 2:
            check_square(w_arr, 'weights')
            w_arr = np.diag(w_arr)
            diagnostics.append(WEIGHT_MATRIX_WARNING)
        elif w_arr.ndim != 1:
            raise DimensionError(
                f"weights: expected 1D vector or 2D square matrix, "
                f"got {w_arr.ndim}D with shape {w_arr.shape}"
            )

        check_consistent_length(X_arr, y_arr, w_arr, names=('X', 'y', 'weights'))
        check_min_samples(X_arr, 1, 'X')
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_finite(w_arr, 'weights')

        return cls._build(X_arr, w_arr, y_arr, intercept, tuple(diagnostics))

    @classmethod
    def _build(
        cls,
        X: NDArray,
        w: NDArray,
        y: NDArray,
        intercept: bool,
        diagnostics: tuple[str, ...],
    ) -> WLSDesign:
        """Internal builder: copy, augment and freeze validated arrays."""
        n, p = X.shape
        if intercept:
            X = np.column_stack([np.ones(n, dtype=np.float64), X])
        else:
            X = np.array(X, dtype=np.float64, copy=True)
        w = np.array(w, dtype=np.float64, copy=True)
        y = np.array(y, dtype=np.float64, copy=True)

        for arr in (X, w, y):
            arr.setflags(write=False)

        return cls(
            _X=X, _w=w, _y=y, _n=n, _p=p,
            _intercept=bool(intercept), _diagnostics=diagnostics,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix as solved (n x k), including the ones column if any."""
        return self._X

    @property
    def w(self) -> NDArray[np.floating[Any]]:
        """Weight vector (n,)."""
        return self._w

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of predictors supplied by the caller."""
        return self._p

    @property
    def k(self) -> int:
        """Number of coefficients (p, plus one with an intercept)."""
        return self._X.shape[1]

    @property
    def intercept(self) -> bool:
        return self._intercept

    @property
    def diagnostics(self) -> tuple[str, ...]:
        """Non-fatal issues found while building the design."""
        return self._diagnostics

    def XtWX(self) -> NDArray[np.floating[Any]]:
        """Compute X'WX."""
        return self._X.T @ (self._w[:, np.newaxis] * self._X)
