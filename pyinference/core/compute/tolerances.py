"""
Numerical tolerances for pyinference.

Single place for the thresholds the engine uses when deciding that a
quantity is "zero" or "one", and the tolerance tiers the test suite
uses when comparing against reference values.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision reference: matches closed-form / R values
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision, well-conditioned',
)

# Double precision, ill-conditioned designs (cond > 1e4)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e4)',
)

# Multiplier on max(n, p) * eps * |R[0, 0]| for QR numerical rank.
# Same rule LAPACK-based rank estimates use.
QR_RANK_TOL_FACTOR = 1.0

# Allowed deviation of sum(p) from 1 for goodness-of-fit proportions
PROPORTION_SUM_ATOL = 1e-8

# Expected cell count below which the chi-squared approximation is flagged
MIN_EXPECTED_COUNT = 5.0


def select_tolerance(is_ill_conditioned: bool = False) -> ToleranceTier:
    """Select the tolerance tier for a given conditioning."""
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
