"""
Common types for contingency analysis.

Frozen parameter payloads that go inside Result[P] envelopes, and the
sampling-plan tags for Bayes factors. Payloads are pure data containers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


JOINT_MULTINOMIAL = "joint-multinomial"
INDEPENDENT_MULTINOMIAL = "independent-multinomial-fixed-margin"

SAMPLING_PLANS = (INDEPENDENT_MULTINOMIAL, JOINT_MULTINOMIAL)
FIXED_MARGINS = ("rows", "cols")


@dataclass(frozen=True)
class ChisqParams:
    """
    Parameter payload for Pearson chi-squared tests.

    Attributes
    ----------
    statistic : float
        Chi-squared statistic.
    df : int
        Degrees of freedom: k - 1 (goodness of fit) or (r-1)(c-1)
        (independence).
    p_value : float
        Upper-tail chi-squared probability of the statistic.
    observed : ndarray
        Observed counts, 1D (goodness of fit) or 2D (independence).
    expected : ndarray
        Expected counts under the null, same shape as observed.
    residuals : ndarray
        Pearson residuals (O - E) / sqrt(E).
    method : str
        Human-readable method name.
    adjusted_residuals : ndarray or None
        Residuals divided by their estimated standard error
        (independence test only).
    proportions : ndarray or None
        Null proportions (goodness of fit only).
    """
    statistic: float
    df: int
    p_value: float
    observed: NDArray[np.floating[Any]]
    expected: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    method: str
    adjusted_residuals: NDArray[np.floating[Any]] | None = None
    proportions: NDArray[np.floating[Any]] | None = None


@dataclass(frozen=True)
class OddsRatioParams:
    """
    Parameter payload for the 2x2 sample odds ratio.

    status is one of:
        "finite"    all cells positive
        "infinite"  numerator positive, denominator zero
        "zero"      numerator zero, denominator positive
        "undefined" numerator and denominator both zero
    """
    estimate: float | None
    status: str
    odds_row1: float | None
    odds_row2: float | None
    log_estimate: float | None
    standard_error_log: float | None
    conf_int: NDArray[np.floating[Any]] | None
    conf_level: float


@dataclass(frozen=True)
class BayesFactorParams:
    """
    Parameter payload for the contingency-table Bayes factor.

    bf is the ratio p(data | association) / p(data | independence).
    """
    bf: float
    log_bf: float
    sampling_plan: str
    fixed_margin: str | None
    prior_concentration: float
