"""
Shared compute infrastructure for pyinference.

This module provides timing utilities, tolerances, distribution functions
and linear algebra kernels shared by the domain subpackages.

IMPORTANT: This is NOT where domain-specific backends live. Those go in
{domain}/backends/. This module contains shared NUMERIC infrastructure.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical thresholds and tolerance tiers
    distributions: t, chi-squared and F distribution functions
    linalg: Linear algebra kernels (QR least squares)
"""

from pyinference.core.compute.timing import Timer, timed
from pyinference.core.compute.distributions import (
    t_cdf,
    t_sf,
    t_ppf,
    t_test_p_value,
    chi2_cdf,
    chi2_sf,
    chi2_ppf,
    f_cdf,
    f_sf,
    f_ppf,
)

__all__ = [
    # Timing
    "Timer",
    "timed",
    # Distributions
    "t_cdf",
    "t_sf",
    "t_ppf",
    "t_test_p_value",
    "chi2_cdf",
    "chi2_sf",
    "chi2_ppf",
    "f_cdf",
    "f_sf",
    "f_ppf",
]
