"""
Linear algebra kernels for PyWLS.

All functions follow these conventions:
    - CPU functions use NumPy/SciPy (LAPACK under the hood)
    - Decompositions return a structured result dataclass
    - Singularity is raised immediately as SingularMatrixError

Submodules:
    dense: DenseAlgebra provider (transpose, multiply, LU inverse)
    qr: QR decomposition and least-squares solves
"""

from pywls.core.compute.linalg.dense import DenseAlgebra, lu_inverse
from pywls.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve_cpu,
    weighted_qr_solve_cpu,
)

__all__ = [
    # Provider
    "DenseAlgebra",
    "lu_inverse",
    # QR decomposition
    "QRResult",
    "qr_cpu",
    "qr_solve_cpu",
    "weighted_qr_solve_cpu",
]
