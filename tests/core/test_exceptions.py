"""
Tests for PyWLS exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyWLSError)
    - Diagnostic attributes on SingularMatrixError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pywls.core.exceptions import (
    DimensionError,
    NumericalError,
    PyWLSError,
    SingularMatrixError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyWLSError."""

    def test_validation_error_is_pywls_error(self):
        with pytest.raises(PyWLSError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_numerical_error_is_pywls_error(self):
        with pytest.raises(PyWLSError):
            raise NumericalError("computation failed")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_singular_matrix_error_is_not_validation_error(self):
        err = SingularMatrixError("singular")
        assert not isinstance(err, ValidationError)


# ═══════════════════════════════════════════════════════════════════════
# Simple exceptions (no extra attributes)
# ═══════════════════════════════════════════════════════════════════════


class TestSimpleExceptions:
    """ValidationError, DimensionError, NumericalError carry only a message."""

    def test_pywls_error_message(self):
        err = PyWLSError("base error")
        assert str(err) == "base error"

    def test_validation_error_message(self):
        err = ValidationError("weighted regression requires weights")
        assert "requires weights" in str(err)

    def test_dimension_error_message(self):
        err = DimensionError("Inconsistent lengths: X=3, y=2")
        assert "Inconsistent" in str(err)


# ═══════════════════════════════════════════════════════════════════════
# SingularMatrixError
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "X'WX is singular",
            matrix_name="X'WX",
            condition_number=1e18,
            rank=1,
            expected_rank=2,
        )
        assert str(err) == "X'WX is singular"
        assert err.matrix_name == "X'WX"
        assert err.condition_number == 1e18
        assert err.rank == 1
        assert err.expected_rank == 2

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None

    def test_catchable_with_attributes(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            raise SingularMatrixError(
                "singular", matrix_name="A", condition_number=1e15
            )
        assert exc_info.value.matrix_name == "A"
        assert exc_info.value.condition_number == 1e15
