"""
Core protocols for PyWLS.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so a
caller can inject any object with the right methods, including test doubles.

Design Principles:
    - Minimal contracts: prescribe only what the regression engine consumes
    - Stateless: implementations hold no per-call state
    - Type-safe: use generics to preserve type information through pipelines
"""

from typing import Protocol, TypeVar, Any, TYPE_CHECKING, runtime_checkable

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from pywls.core.result import Result

D = TypeVar('D')  # Design type
P = TypeVar('P')  # Parameter payload type


@runtime_checkable
class LinearAlgebra(Protocol):
    """
    Dense linear-algebra provider consumed by the regression engine.

    Implementations must be pure and re-entrant: a single instance may be
    shared between threads, so no scratch buffers or per-call state.
    All operations use IEEE-754 double precision.
    """

    def transpose(self, matrix: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """Return the transpose of a matrix."""
        ...

    def multiply(
        self,
        a: NDArray[np.floating[Any]],
        b: NDArray[np.floating[Any]],
    ) -> NDArray[np.floating[Any]]:
        """
        Matrix product a @ b.

        Supports matrix-matrix and matrix-vector products.
        """
        ...

    def inverse(self, matrix: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
        """
        Inverse of a square matrix.

        Raises:
            SingularMatrixError: If the matrix is not invertible
        """
        ...


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a Result envelope
    around a parameter payload. Backends are stateless apart from the
    collaborators passed at construction time (e.g. the algebra provider).

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_normal', 'cpu_qr'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            NumericalError: If numerical issues prevent solution (singularity)
        """
        ...
