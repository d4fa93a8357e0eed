"""
Tests for backend dispatch, provider injection and backend agreement.
"""

import numpy as np
import pytest

from pywls import regress
from pywls.core.exceptions import SingularMatrixError, ValidationError
from pywls.core.protocols import Backend
from pywls.core.compute.linalg import DenseAlgebra
from pywls.core.compute.tolerances import select_tolerance
from pywls.regression.backends import CPUNormalEquationsBackend, CPUQRBackend
from pywls.regression.design import WLSDesign


class SingularAlgebra(DenseAlgebra):
    """Provider whose inverse always fails."""

    error = SingularMatrixError("provider refused", matrix_name="X'WX")

    def inverse(self, matrix):
        raise self.error


class UnnamedSingularAlgebra(DenseAlgebra):
    """Provider whose n-th inverse fails without naming the matrix."""

    def __init__(self, fail_on_call=1):
        self.error = SingularMatrixError("provider refused")
        self._fail_on_call = fail_on_call
        self._calls = 0

    def inverse(self, matrix):
        self._calls += 1
        if self._calls == self._fail_on_call:
            raise self.error
        return super().inverse(matrix)


class TestBackendSelection:

    @pytest.mark.parametrize("choice", ['auto', 'cpu', 'cpu_normal'])
    def test_normal_equations_backends(self, line_x, unit_weights, choice):
        result = regress(line_x, unit_weights, [3.0, 5.0, 7.1], backend=choice)
        assert result.backend_name == 'cpu_normal'

    def test_qr_backend(self, line_x, unit_weights):
        result = regress(line_x, unit_weights, [3.0, 5.0, 7.1], backend='cpu_qr')
        assert result.backend_name == 'cpu_qr'
        assert result.info['method'] == 'qr'

    def test_backends_satisfy_protocol(self):
        assert isinstance(CPUNormalEquationsBackend(), Backend)
        assert isinstance(CPUQRBackend(), Backend)

    def test_default_algebra(self):
        assert isinstance(CPUNormalEquationsBackend().algebra, DenseAlgebra)
        assert isinstance(CPUQRBackend().algebra, DenseAlgebra)


class TestBackendAgreement:

    def test_normal_and_qr_agree(self, weighted_regression_data):
        X, w, y, _ = weighted_regression_data
        normal = regress(X, w, y, intercept=True, backend='cpu_normal')
        qr = regress(X, w, y, intercept=True, backend='cpu_qr')
        tol = select_tolerance(normal.info['condition_number'])
        np.testing.assert_allclose(qr.coefficients, normal.coefficients, rtol=tol.rtol * 100, atol=tol.atol)
        np.testing.assert_allclose(qr.standard_errors, normal.standard_errors, rtol=1e-8)
        assert qr.r_squared == pytest.approx(normal.r_squared, rel=1e-9)

    def test_qr_singular(self, unit_weights):
        X = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        with pytest.raises(SingularMatrixError):
            regress(X, unit_weights, [1.0, 2.0, 4.0], backend='cpu_qr')

    def test_qr_rejects_negative_weights(self, line_x):
        with pytest.raises(ValidationError, match="non-negative"):
            regress(line_x, [1.0, -1.0, 1.0], [2.0, 4.0, 6.0], backend='cpu_qr')


class TestProviderInjection:

    def test_engine_uses_injected_provider(self, weighted_regression_data, counting_algebra):
        X, w, y, _ = weighted_regression_data
        result = regress(X, w, y, intercept=True, algebra=counting_algebra)
        assert counting_algebra.calls['transpose'] >= 1
        assert counting_algebra.calls['multiply'] >= 3
        # (X'WX)^-1 for the solve, (X'X)^-1 for the covariance
        assert counting_algebra.calls['inverse'] == 2
        assert result.info['algebra'] == 'counting'

    def test_injected_provider_matches_default(self, weighted_regression_data, counting_algebra):
        X, w, y, _ = weighted_regression_data
        injected = regress(X, w, y, intercept=True, algebra=counting_algebra)
        default = regress(X, w, y, intercept=True)
        assert injected == default

    def test_qr_backend_uses_provider_for_covariance(self, weighted_regression_data, counting_algebra):
        X, w, y, _ = weighted_regression_data
        regress(X, w, y, intercept=True, algebra=counting_algebra, backend='cpu_qr')
        assert counting_algebra.calls['inverse'] == 1

    def test_singular_error_propagates_unchanged(self, line_x, unit_weights):
        algebra = SingularAlgebra()
        with pytest.raises(SingularMatrixError) as exc_info:
            regress(line_x, unit_weights, [3.0, 5.0, 7.0], algebra=algebra)
        assert exc_info.value is SingularAlgebra.error

    def test_unnamed_provider_error_is_labelled(self, line_x, unit_weights):
        algebra = UnnamedSingularAlgebra()
        with pytest.raises(SingularMatrixError) as exc_info:
            regress(line_x, unit_weights, [3.0, 5.0, 7.0], algebra=algebra)
        assert exc_info.value is algebra.error
        assert exc_info.value.matrix_name == "X'WX"

    def test_covariance_inverse_failure_is_labelled(self, line_x, unit_weights):
        algebra = UnnamedSingularAlgebra(fail_on_call=2)
        with pytest.raises(SingularMatrixError) as exc_info:
            regress(line_x, unit_weights, [3.0, 5.0, 7.0], algebra=algebra)
        assert exc_info.value.matrix_name == "X'X"

    def test_backend_solve_directly(self, line_x, unit_weights):
        design = WLSDesign.build(line_x, unit_weights, [3.0, 5.0, 7.0], intercept=True)
        result = CPUNormalEquationsBackend(DenseAlgebra()).solve(design)
        np.testing.assert_allclose(result.params.coefficients, [1.0, 2.0], atol=1e-12)
        assert result.warnings == ()
        assert 'statistics' in result.timing
