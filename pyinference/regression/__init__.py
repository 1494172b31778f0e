"""
Ordinary least squares linear regression.

Public API:
    fit(X, y, ...) -> LinearSolution
    compare(full, reduced) -> ModelComparison
    add_intercept(X), treatment_code(labels), interaction(a, b)

The fit() function handles:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from pyinference.regression import fit, compare, add_intercept
    >>> full = fit(add_intercept(np.column_stack([x1, x2])), y)
    >>> reduced = fit(add_intercept(x1), y)
    >>> print(compare(full, reduced).p_value)
"""

from pyinference.regression.design import RegressionDesign
from pyinference.regression.solution import LinearSolution, LinearParams
from pyinference.regression.comparison import ModelComparison
from pyinference.regression.coding import add_intercept, treatment_code, interaction
from pyinference.regression.solvers import fit, compare

__all__ = [
    "fit",
    "compare",
    "RegressionDesign",
    "LinearSolution",
    "LinearParams",
    "ModelComparison",
    "add_intercept",
    "treatment_code",
    "interaction",
]
