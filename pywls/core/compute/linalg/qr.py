"""
QR decomposition kernels.

Provides the orthogonal-decomposition path for least squares, used by the
cpu_qr regression backend as an alternative to forming the normal
equations. Avoids squaring the condition number of X.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pywls.core.exceptions import SingularMatrixError, ValidationError
from pywls.core.compute.tolerances import SINGULARITY_RTOL_FACTOR


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x m where m = min(n, p) for reduced mode)
        R: Upper triangular matrix (m x p)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).

    Computes X = QR where Q is orthogonal and R is upper triangular.

    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR, 'complete' for full QR

    Returns:
        QRResult with Q, R, and numerical rank
    """
    Q, R = np.linalg.qr(X, mode=mode)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = SINGULARITY_RTOL_FACTOR * max(X.shape) * np.finfo(X.dtype).eps * diag_R.max()
        rank = int(np.sum(diag_R > tol))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, rank=rank)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    check_rank: bool
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares via QR decomposition.

    Solves min_β ||y - Xβ||² as:
        X = QR
        β = R⁻¹ Q'y

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)
        check_rank: If True, raise SingularMatrixError on rank-deficient X

    Returns:
        Coefficient vector β (p,)

    Raises:
        SingularMatrixError: If X is rank-deficient (or n < p) and check_rank=True
    """
    n, p = X.shape
    qr_result = qr_cpu(X, mode='reduced')

    if check_rank and qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    return solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)


def weighted_qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    w: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """
    Solve weighted least squares via QR of the row-scaled problem.

    min_β Σ wᵢ (yᵢ - xᵢβ)² is ordinary least squares on √w·X and √w·y.

    Raises:
        ValidationError: If any weight is negative (no real square root)
        SingularMatrixError: If √w·X is rank-deficient
    """
    if np.any(w < 0):
        raise ValidationError(
            f"weights: QR solve requires non-negative weights, "
            f"got minimum {float(w.min())}"
        )
    sqrt_w = np.sqrt(w)
    return qr_solve_cpu(X * sqrt_w[:, np.newaxis], y * sqrt_w, check_rank=True)
