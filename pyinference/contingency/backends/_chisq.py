"""
Pearson chi-squared computations.

Supports:
- Goodness-of-fit test against given proportions
- Independence test for an r x c table
- Yates continuity correction (2x2 tables, opt-in)
- Per-cell Pearson and adjusted residuals
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np

from pyinference.core.exceptions import DegenerateMarginError
from pyinference.core.compute.distributions import chi2_sf
from pyinference.core.compute.tolerances import MIN_EXPECTED_COUNT
from pyinference.contingency._common import ChisqParams

if TYPE_CHECKING:
    from pyinference.contingency.design import ContingencyDesign
    from pyinference.contingency.table import ContingencyTable


SMALL_EXPECTED_WARNING = "Chi-squared approximation may be incorrect"


def independence_expected(table: ContingencyTable) -> np.ndarray:
    """
    Expected counts under row/column independence.

    E[i,j] = row_total[i] * col_total[j] / total

    Raises:
        DegenerateMarginError: If any row or column total is zero
    """
    row_sums = table.row_totals.astype(np.float64)
    col_sums = table.col_totals.astype(np.float64)

    zero_rows = np.where(row_sums == 0)[0]
    if len(zero_rows) > 0:
        raise DegenerateMarginError(
            f"table: rows {zero_rows.tolist()} have zero total; "
            f"expected counts are zero and chi-squared is undefined",
            axis='row',
            indices=zero_rows.tolist(),
        )
    zero_cols = np.where(col_sums == 0)[0]
    if len(zero_cols) > 0:
        raise DegenerateMarginError(
            f"table: columns {zero_cols.tolist()} have zero total; "
            f"expected counts are zero and chi-squared is undefined",
            axis='column',
            indices=zero_cols.tolist(),
        )

    # Float marginals: the int64 outer product wraps for large tables
    return np.outer(row_sums, col_sums) / float(table.total)


def pearson_residuals(observed: np.ndarray, expected: np.ndarray) -> np.ndarray:
    """(O - E) / sqrt(E), cellwise."""
    return (observed - expected) / np.sqrt(expected)


def chisq_independence(design: ContingencyDesign) -> tuple[ChisqParams, list[str]]:
    """Chi-squared test of independence for a contingency table."""
    table = design.table
    observed = table.as_float()
    warnings_list: list[str] = []

    nrow, ncol = table.shape
    expected = independence_expected(table)

    yates = design.correct and nrow == 2 and ncol == 2

    if yates:
        diff = np.abs(observed - expected) - 0.5
        diff = np.maximum(diff, 0.0)
        chisq = float(np.sum(diff ** 2 / expected))
        method = "Pearson's Chi-squared test with Yates' continuity correction"
    else:
        chisq = float(np.sum((observed - expected) ** 2 / expected))
        method = "Pearson's Chi-squared test"

    df = (nrow - 1) * (ncol - 1)

    if np.any(expected < MIN_EXPECTED_COUNT):
        warnings_list.append(SMALL_EXPECTED_WARNING)

    p_value = chi2_sf(chisq, df)

    residuals = pearson_residuals(observed, expected)

    # Adjusted residuals: divide by sqrt((1 - row share)(1 - column share))
    total = float(table.total)
    row_prop = table.row_totals / total
    col_prop = table.col_totals / total
    v = np.outer(1.0 - row_prop, 1.0 - col_prop)
    adjusted = residuals / np.sqrt(v)

    return ChisqParams(
        statistic=chisq,
        df=df,
        p_value=p_value,
        observed=observed,
        expected=expected,
        residuals=residuals,
        method=method,
        adjusted_residuals=adjusted,
    ), warnings_list


def chisq_gof(design: ContingencyDesign) -> tuple[ChisqParams, list[str]]:
    """Chi-squared goodness-of-fit test."""
    observed = design.counts
    p = design.proportions
    warnings_list: list[str] = []

    n = float(np.sum(observed))
    k = len(observed)

    expected = n * p
    chisq = float(np.sum((observed - expected) ** 2 / expected))
    df = k - 1

    if np.any(expected < MIN_EXPECTED_COUNT):
        warnings_list.append(SMALL_EXPECTED_WARNING)

    return ChisqParams(
        statistic=chisq,
        df=df,
        p_value=chi2_sf(chisq, df),
        observed=observed.copy(),
        expected=expected,
        residuals=pearson_residuals(observed, expected),
        method="Chi-squared test for given probabilities",
        proportions=p.copy(),
    ), warnings_list
