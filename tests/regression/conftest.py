"""
Regression test configuration: small exact datasets.
"""

import numpy as np
import pytest

from pywls.core.compute.linalg import DenseAlgebra


@pytest.fixture
def line_x():
    return np.array([[1.0], [2.0], [3.0]])


@pytest.fixture
def unit_weights():
    return np.array([1.0, 1.0, 1.0])


class CountingAlgebra:
    """DenseAlgebra wrapper recording how often each primitive is used."""

    def __init__(self):
        self._inner = DenseAlgebra()
        self.calls = {'transpose': 0, 'multiply': 0, 'inverse': 0}

    @property
    def name(self):
        return 'counting'

    def transpose(self, matrix):
        self.calls['transpose'] += 1
        return self._inner.transpose(matrix)

    def multiply(self, a, b):
        self.calls['multiply'] += 1
        return self._inner.multiply(a, b)

    def inverse(self, matrix):
        self.calls['inverse'] += 1
        return self._inner.inverse(matrix)


@pytest.fixture
def counting_algebra():
    return CountingAlgebra()
