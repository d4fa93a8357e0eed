"""
Core infrastructure for PyWLS.

Key components:
    protocols: LinearAlgebra, Backend protocols
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, linear algebra provider
"""

from pywls.core.protocols import LinearAlgebra, Backend
from pywls.core.result import Result
from pywls.core.exceptions import (
    PyWLSError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
)

__all__ = [
    # Protocols
    "LinearAlgebra",
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyWLSError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
]
