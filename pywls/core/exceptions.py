"""
Exception hierarchy for PyWLS.

All exceptions inherit from PyWLSError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyWLSError(Exception):
    """Base exception for all PyWLS errors."""
    pass


class ValidationError(PyWLSError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks, before any
    computation begins (missing weights, non-numeric data, NaN/Inf).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when the design matrix rows, response length and weight count
    disagree, or when an array has the wrong number of dimensions.
    """
    pass


class NumericalError(PyWLSError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when the weighted normal-equations matrix (or X'X used for the
    coefficient covariance) cannot be inverted. Deterministic for a given
    input: callers should not retry.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of coefficients)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank
