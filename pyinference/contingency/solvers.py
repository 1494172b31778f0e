"""
Solver dispatch for contingency analyses.

Provides goodness_of_fit(), independence_test(), standardized_residuals(),
odds_ratio() and bayes_factor().
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinference.core.exceptions import ValidationError
from pyinference.contingency.table import ContingencyTable
from pyinference.contingency.design import ContingencyDesign
from pyinference.contingency.solution import (
    ChisqSolution,
    OddsRatioSolution,
    BayesFactorResult,
)
from pyinference.contingency.backends.cpu import CPUContingencyBackend
from pyinference.contingency.backends._chisq import independence_expected, pearson_residuals


def _get_backend(backend: str = 'cpu') -> CPUContingencyBackend:
    """Select backend for contingency analyses."""
    if backend in ('cpu', 'auto'):
        return CPUContingencyBackend()
    raise ValidationError(
        f"Unknown backend: {backend!r}. Use 'cpu'."
    )


def _check_test_type(design: ContingencyDesign, expected: str, solver: str) -> None:
    """Reject a design built for a different analysis."""
    if design.test_type != expected:
        raise ValidationError(
            f"{solver}: design was built for {design.test_type!r}, "
            f"expected {expected!r}"
        )


def goodness_of_fit(
    counts: ArrayLike | ContingencyDesign,
    p: ArrayLike | None = None,
    *,
    backend: str = 'cpu',
) -> ChisqSolution:
    """
    Chi-squared goodness-of-fit test.

    Parameters
    ----------
    counts : array-like or ContingencyDesign
        Observed counts, one per category (k >= 2).
    p : array-like or None
        Expected proportions, same length as counts, positive and
        summing to 1. If None, assumes uniform.
    backend : str
        'cpu' (default).

    Returns
    -------
    ChisqSolution
        statistic = sum((O - E)^2 / E), df = k - 1, upper-tail p-value,
        expected = p * sum(counts).

    Raises
    ------
    DimensionMismatchError
        If p and counts differ in length.
    ValidationError
        If a design built for another analysis is passed.
    """
    if isinstance(counts, ContingencyDesign):
        design = counts
        _check_test_type(design, "goodness_of_fit", "goodness_of_fit")
    else:
        design = ContingencyDesign.for_goodness_of_fit(counts, p)

    result = _get_backend(backend).solve(design)
    return ChisqSolution(_result=result, _design=design)


def independence_test(
    table: ArrayLike | ContingencyTable | ContingencyDesign,
    *,
    correct: bool = False,
    backend: str = 'cpu',
) -> ChisqSolution:
    """
    Pearson's chi-squared test of independence for an r x c table.

    Parameters
    ----------
    table : array-like, ContingencyTable or ContingencyDesign
        Counts with at least 2 rows and 2 columns.
    correct : bool
        Apply Yates' continuity correction to 2x2 tables. Default False.
    backend : str
        'cpu' (default).

    Returns
    -------
    ChisqSolution
        statistic, df = (r-1)(c-1), p-value, expected table, Pearson
        residuals and adjusted residuals.

    Raises
    ------
    ShapeError
        If the table has fewer than 2 rows or columns.
    DegenerateMarginError
        If any row or column total is zero.
    ValidationError
        If a design built for another analysis is passed.
    """
    if isinstance(table, ContingencyDesign):
        design = table
        _check_test_type(design, "independence", "independence_test")
    else:
        design = ContingencyDesign.for_independence(table, correct=correct)

    result = _get_backend(backend).solve(design)
    return ChisqSolution(_result=result, _design=design)


def standardized_residuals(
    table: ArrayLike | ContingencyTable,
) -> NDArray[np.floating[Any]]:
    """
    Per-cell residuals (O - E) / sqrt(E) under independence.

    Approximate Z-scores: cells beyond about ±2 drive the chi-squared
    statistic.

    Returns
    -------
    ndarray
        Float table with the same shape as the input.

    Raises
    ------
    ShapeError
        If the table has fewer than 2 rows or columns.
    DegenerateMarginError
        If any row or column total is zero.
    """
    design = ContingencyDesign.for_residuals(table)
    expected = independence_expected(design.table)
    return pearson_residuals(design.table.as_float(), expected)


def odds_ratio(
    table: ArrayLike | ContingencyTable | ContingencyDesign,
    *,
    conf_level: float = 0.95,
    backend: str = 'cpu',
) -> OddsRatioSolution:
    """
    Sample odds ratio of a 2x2 table.

    OR = (n11 / n12) / (n21 / n22). With a zero cell, status reports
    "infinite", "zero" or "undefined" instead of returning NaN.

    Parameters
    ----------
    table : array-like, ContingencyTable or ContingencyDesign
        Exactly 2x2 counts.
    conf_level : float
        Level of the Woolf interval. Default 0.95.

    Raises
    ------
    ShapeError
        If the table is not 2x2.
    """
    if isinstance(table, ContingencyDesign):
        design = table
        _check_test_type(design, "odds_ratio", "odds_ratio")
    else:
        design = ContingencyDesign.for_odds_ratio(table, conf_level=conf_level)

    result = _get_backend(backend).solve(design)
    return OddsRatioSolution(_result=result, _design=design)


def bayes_factor(
    table: ArrayLike | ContingencyTable | ContingencyDesign,
    sampling_plan: str | None = None,
    *,
    fixed_margin: str = "rows",
    prior_concentration: float = 1.0,
    backend: str = 'cpu',
) -> BayesFactorResult:
    """
    Closed-form Bayes factor for association against independence.

    Parameters
    ----------
    table : array-like, ContingencyTable or ContingencyDesign
        r x c counts (r, c >= 2).
    sampling_plan : str
        How the data were collected; required, there is no default:
        - "independent-multinomial-fixed-margin": one margin (e.g. group
          sizes) was fixed by design
        - "joint-multinomial": only the grand total was fixed
    fixed_margin : str
        "rows" (default) or "cols": which margin was fixed. Ignored for
        the joint-multinomial plan.
    prior_concentration : float
        Symmetric Dirichlet concentration, >= 1. Default 1 (uniform).

    Returns
    -------
    BayesFactorResult
        K > 1 favours association. Tagged with the sampling plan.
    """
    if isinstance(table, ContingencyDesign):
        design = table
        _check_test_type(design, "bayes_factor", "bayes_factor")
    else:
        if sampling_plan is None:
            raise ValidationError(
                "sampling_plan is required: 'independent-multinomial-fixed-margin' "
                "or 'joint-multinomial'"
            )
        design = ContingencyDesign.for_bayes_factor(
            table,
            sampling_plan,
            fixed_margin=fixed_margin,
            prior_concentration=prior_concentration,
        )

    result = _get_backend(backend).solve(design)
    return BayesFactorResult(_result=result, _design=design)
