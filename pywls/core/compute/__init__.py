"""
Shared compute infrastructure for PyWLS.

IMPORTANT: This is NOT where regression backends live. Those go in
regression/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers and singularity threshold
    linalg: Linear algebra provider and kernels (LU, QR)
"""

from pywls.core.compute.timing import Timer

__all__ = [
    "Timer",
]
