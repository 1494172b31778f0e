"""
pyinference: exact-distribution statistical inference for Python.

Submodules:
    regression: Ordinary least squares with coefficient inference and
        nested-model F-tests
    contingency: Chi-squared goodness-of-fit and independence tests,
        residuals, odds ratios, closed-form Bayes factors
"""

__version__ = "0.1.0"

from pyinference import regression
from pyinference import contingency

__all__ = [
    "__version__",
    "regression",
    "contingency",
]
