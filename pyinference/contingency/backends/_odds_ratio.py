"""
Sample odds ratio for a 2x2 table.

    OR = (n11 / n12) / (n21 / n22) = (n11 * n22) / (n12 * n21)

A zero cell makes the ratio infinite, zero or undefined; that case is
reported through the status field rather than as NaN. The Woolf
interval exp(log OR ± z * sqrt(1/n11 + 1/n12 + 1/n21 + 1/n22)) is only
formed when every cell is positive.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np
from scipy import stats as sp_stats

from pyinference.contingency._common import OddsRatioParams

if TYPE_CHECKING:
    from pyinference.contingency.design import ContingencyDesign


def odds_ratio(design: ContingencyDesign) -> tuple[OddsRatioParams, list[str]]:
    """Sample odds ratio with a Woolf confidence interval."""
    table = design.table.as_float()
    conf_level = design.conf_level
    warnings_list: list[str] = []

    a, b = table[0]
    c, d = table[1]

    odds_row1 = float(a / b) if b > 0 else None
    odds_row2 = float(c / d) if d > 0 else None

    numerator = a * d
    denominator = b * c

    if np.all(table > 0):
        estimate = float(numerator / denominator)
        log_or = float(np.log(a) + np.log(d) - np.log(b) - np.log(c))
        se_log = float(np.sqrt(1.0 / a + 1.0 / b + 1.0 / c + 1.0 / d))
        z = float(sp_stats.norm.ppf(0.5 + conf_level / 2.0))
        conf_int = np.exp(np.array([log_or - z * se_log, log_or + z * se_log]))
        status = "finite"
    else:
        log_or = None
        se_log = None
        conf_int = None
        if numerator > 0:
            estimate = float('inf')
            status = "infinite"
        elif denominator > 0:
            estimate = 0.0
            status = "zero"
        else:
            estimate = None
            status = "undefined"
        warnings_list.append(
            f"Table has a zero cell; odds ratio is {status}"
        )

    return OddsRatioParams(
        estimate=estimate,
        status=status,
        odds_row1=odds_row1,
        odds_row2=odds_row2,
        log_estimate=log_or,
        standard_error_log=se_log,
        conf_int=conf_int,
        conf_level=conf_level,
    ), warnings_list
