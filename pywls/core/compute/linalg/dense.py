"""
Dense linear-algebra provider.

DenseAlgebra is the default implementation of the LinearAlgebra protocol
consumed by the regression engine. Products are delegated to NumPy (BLAS);
inversion uses an LU factorisation with partial pivoting (LAPACK getrf via
SciPy) so that a singular matrix is detected from its pivots and reported
as SingularMatrixError rather than returning garbage.

The provider is stateless: one instance can be shared between threads.
"""

import warnings
from typing import Any

import numpy as np
from numpy.typing import NDArray
from scipy.linalg import LinAlgWarning, lu_factor, lu_solve

from pywls.core.exceptions import DimensionError, SingularMatrixError
from pywls.core.validation import check_square
from pywls.core.compute.tolerances import SINGULARITY_RTOL_FACTOR


def lu_inverse(
    matrix: NDArray[np.floating[Any]],
    name: str | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Invert a square matrix via LU decomposition.

    The matrix is first equilibrated, A_s = D A D with D = diag(1/sqrt|a_ii|),
    so that the singularity test does not depend on the units of the
    columns. PA_s = LU is then solved against the identity and the inverse
    is recovered as A⁻¹ = D A_s⁻¹ D.

    A pivot |U_ii| at or below SINGULARITY_RTOL_FACTOR * n * eps * max|U_jj|
    of the equilibrated matrix means it is numerically rank-deficient.

    Args:
        matrix: Square matrix (k x k)
        name: Matrix description for error messages. Left as None on the
            raised error when not given, so callers can label it.

    Returns:
        The inverse (k x k)

    Raises:
        DimensionError: If matrix is not square
        SingularMatrixError: If matrix is singular or numerically singular
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    check_square(matrix, name or 'matrix')
    k = matrix.shape[0]
    if k == 0:
        return np.empty((0, 0), dtype=np.float64)

    diag = np.abs(np.diag(matrix))
    d = np.ones(k, dtype=np.float64)
    positive = diag > 0
    d[positive] = 1.0 / np.sqrt(diag[positive])
    scaled = d[:, np.newaxis] * matrix * d[np.newaxis, :]

    # Exactly-zero pivots are reported below, with more context than LAPACK gives
    with warnings.catch_warnings():
        warnings.filterwarnings('ignore', category=LinAlgWarning)
        lu, piv = lu_factor(scaled, check_finite=False)

    pivots = np.abs(np.diag(lu))
    scale = float(pivots.max())
    tol = SINGULARITY_RTOL_FACTOR * k * np.finfo(np.float64).eps * scale
    rank = int(np.sum(pivots > tol))

    if scale == 0.0 or rank < k:
        with np.errstate(divide='ignore', invalid='ignore'):
            condition_number = float(np.linalg.cond(matrix))
        raise SingularMatrixError(
            f"{name or 'matrix'} is singular: rank={rank}, expected={k} "
            f"(condition number {condition_number:.3g})",
            matrix_name=name,
            condition_number=condition_number,
            rank=rank,
            expected_rank=k,
        )

    scaled_inverse = lu_solve((lu, piv), np.eye(k), check_finite=False)
    return d[:, np.newaxis] * scaled_inverse * d[np.newaxis, :]


class DenseAlgebra:
    """
    LinearAlgebra provider over dense float64 NumPy arrays.

    Example:
        >>> algebra = DenseAlgebra()
        >>> XtX = algebra.multiply(algebra.transpose(X), X)
        >>> XtX_inv = algebra.inverse(XtX)
    """

    @property
    def name(self) -> str:
        return 'dense_lu'

    def transpose(self, matrix: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return np.transpose(matrix)

    def multiply(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Matrix product a @ b (matrix-matrix or matrix-vector).

        Raises:
            DimensionError: If inner dimensions do not agree
        """
        a = np.asarray(a, dtype=np.float64)
        b = np.asarray(b, dtype=np.float64)
        if a.ndim == 0 or b.ndim == 0 or a.shape[-1] != b.shape[0]:
            raise DimensionError(
                f"Cannot multiply shapes {a.shape} and {b.shape}"
            )
        return a @ b

    def inverse(self, matrix: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        return lu_inverse(matrix)

    def __repr__(self) -> str:
        return "DenseAlgebra()"
