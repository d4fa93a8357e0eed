"""
Tolerance tiers for numerical validation.

Defines precision expectations for the compute paths:
- CPU FP64 (reference): machine precision agreement between backends
- CPU FP64, ill-conditioned: relaxed for cond(X'WX) > 1e8

Also holds the relative pivot threshold used by the LU inverse to decide
that a matrix is numerically singular.

Used by the test suite and by the linear-algebra provider.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Reference: normal equations vs QR on well-conditioned problems
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Normal equations square the condition number, so agreement degrades fast
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e8)',
)

# Condition number of X'WX beyond which results are compared loosely.
ILL_CONDITIONED_THRESHOLD = 1e8

# An LU pivot (or QR diagonal) at or below SINGULARITY_RTOL_FACTOR * n * eps * max|pivot|
# marks the matrix as singular.
SINGULARITY_RTOL_FACTOR = 100.0


def select_tolerance(condition_number: float) -> ToleranceTier:
    """Select the tolerance tier for a problem with the given cond(X'WX)."""
    if condition_number > ILL_CONDITIONED_THRESHOLD:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
