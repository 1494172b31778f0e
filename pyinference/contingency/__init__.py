"""
Categorical contingency analysis.

Public API:
    ContingencyTable.from_counts(...) / .from_labels(rows, cols)
    goodness_of_fit(counts, p)        - chi-squared goodness of fit
    independence_test(table)          - Pearson chi-squared independence test
    standardized_residuals(table)     - per-cell (O - E) / sqrt(E)
    odds_ratio(table)                 - 2x2 sample odds ratio
    bayes_factor(table, plan)         - closed-form Gunel-Dickey Bayes factor
"""

from pyinference.contingency.table import ContingencyTable
from pyinference.contingency.design import ContingencyDesign
from pyinference.contingency._common import (
    ChisqParams,
    OddsRatioParams,
    BayesFactorParams,
    JOINT_MULTINOMIAL,
    INDEPENDENT_MULTINOMIAL,
    SAMPLING_PLANS,
)
from pyinference.contingency.solution import (
    ChisqSolution,
    OddsRatioSolution,
    BayesFactorResult,
)
from pyinference.contingency.solvers import (
    goodness_of_fit,
    independence_test,
    standardized_residuals,
    odds_ratio,
    bayes_factor,
)

__all__ = [
    "ContingencyTable",
    "ContingencyDesign",
    "ChisqParams",
    "OddsRatioParams",
    "BayesFactorParams",
    "JOINT_MULTINOMIAL",
    "INDEPENDENT_MULTINOMIAL",
    "SAMPLING_PLANS",
    "ChisqSolution",
    "OddsRatioSolution",
    "BayesFactorResult",
    "goodness_of_fit",
    "independence_test",
    "standardized_residuals",
    "odds_ratio",
    "bayes_factor",
]
