"""
Generic result container for all PyWLS computations.

The Result class provides a standardized envelope around the parameter
payload produced by a backend. It carries timing, diagnostics and
provenance alongside the domain-specific parameters.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, rank, weight handling)
    - timing is optional (don't burden unit tests)
    - warnings is the diagnostic side channel: non-fatal issues are
      recorded here instead of a global logger
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

import numpy as np
import scipy

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions that produced a result."""
    from pywls import __version__

    return {
        'pywls_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific parameters (coefficients, diagnostics, etc.)
        info: Structured metadata (method, rank, weight handling)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Library versions, generated automatically when omitted

    Examples:
        >>> Result(
        ...     params=WLSParams(...),
        ...     info={'method': 'normal_equations', 'rank': 2},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='cpu_normal',
        ...     warnings=('off-diagonal weights are ignored',),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
