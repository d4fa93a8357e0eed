"""
Regression backends.

Available backends:
    CPUNormalEquationsBackend: reference implementation, weighted normal
        equations through a LinearAlgebra provider
    CPUQRBackend: QR decomposition of the row-scaled design
"""

from pywls.regression.backends.cpu import CPUNormalEquationsBackend, CPUQRBackend

__all__ = [
    "CPUNormalEquationsBackend",
    "CPUQRBackend",
]
