"""
CPU backends for weighted least-squares regression.

CPUNormalEquationsBackend is the reference implementation: it forms and
solves the weighted normal equations

    β = (X'WX)⁻¹ X'W y

through an injected LinearAlgebra provider. CPUQRBackend solves the same
problem by QR of the row-scaled system √W X β = √W y, which avoids squaring
the condition number. Both finish with the same diagnostics.
"""

from typing import Any
import numpy as np

from pywls.core.result import Result
from pywls.core.protocols import LinearAlgebra
from pywls.core.compute.timing import Timer
from pywls.core.compute.linalg.dense import DenseAlgebra
from pywls.core.compute.linalg.qr import weighted_qr_solve_cpu
from pywls.regression.design import WLSDesign
from pywls.regression.solution import WLSParams
from pywls.regression._statistics import compute_statistics, invert


def _condition_number(design: WLSDesign) -> float:
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.linalg.cond(design.XtWX()))


class CPUNormalEquationsBackend:
    """
    CPU backend solving the weighted normal equations.

    Implements the Backend protocol for WLSDesign -> WLSParams.

    Args:
        algebra: LinearAlgebra provider for transpose, multiply and inverse.
            Defaults to DenseAlgebra (LU-based inverse).
    """

    def __init__(self, algebra: LinearAlgebra | None = None):
        self._algebra = algebra if algebra is not None else DenseAlgebra()

    @property
    def name(self) -> str:
        return 'cpu_normal'

    @property
    def algebra(self) -> LinearAlgebra:
        return self._algebra

    def solve(self, design: WLSDesign) -> Result[WLSParams]:
        """
        Solve WLS via the weighted normal equations.

        Algorithm:
            1. WX = diag(w) X (row scaling)
            2. β = (X' WX)⁻¹ (X' W y)
            3. Residuals, weighted sums of squares and diagnostics

        Raises:
            SingularMatrixError: If X'WX (or X'X) is not invertible
        """
        algebra = self._algebra
        timer = Timer()
        timer.start()

        X, w, y = design.X, design.w, design.y

        with timer.section('normal_equations'):
            Xt = algebra.transpose(X)
            WX = w[:, np.newaxis] * X
            XtWX_inv = invert(algebra, algebra.multiply(Xt, WX), "X'WX")
            coefficients = algebra.multiply(XtWX_inv, algebra.multiply(Xt, w * y))

        with timer.section('statistics'):
            params = compute_statistics(design, coefficients, algebra)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'normal_equations',
            'algebra': getattr(algebra, 'name', type(algebra).__name__),
            'rank': design.k,
            'condition_number': _condition_number(design),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=design.diagnostics,
        )


class CPUQRBackend:
    """
    CPU backend using QR decomposition of the row-scaled design.

    Implements the Backend protocol for WLSDesign -> WLSParams. Requires
    non-negative weights.

    Args:
        algebra: LinearAlgebra provider used for the coefficient covariance.
            Defaults to DenseAlgebra.
    """

    def __init__(self, algebra: LinearAlgebra | None = None):
        self._algebra = algebra if algebra is not None else DenseAlgebra()

    @property
    def name(self) -> str:
        return 'cpu_qr'

    @property
    def algebra(self) -> LinearAlgebra:
        return self._algebra

    def solve(self, design: WLSDesign) -> Result[WLSParams]:
        """
        Solve WLS via QR decomposition.

        Raises:
            ValidationError: If any weight is negative
            SingularMatrixError: If √W X is rank-deficient
        """
        timer = Timer()
        timer.start()

        with timer.section('qr_solve'):
            coefficients = weighted_qr_solve_cpu(design.X, design.w, design.y)

        with timer.section('statistics'):
            params = compute_statistics(design, coefficients, self._algebra)

        timer.stop()

        info: dict[str, Any] = {
            'method': 'qr',
            'algebra': getattr(self._algebra, 'name', type(self._algebra).__name__),
            'rank': design.k,
            'condition_number': _condition_number(design),
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=design.diagnostics,
        )
