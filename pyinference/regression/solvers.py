"""
Solver dispatch for regression.

This module provides the fit() and compare() functions (public API) and
backend selection.
"""

from __future__ import annotations

from typing import Literal, Sequence
from numpy.typing import ArrayLike

from pyinference.core.exceptions import ValidationError
from pyinference.regression.design import RegressionDesign
from pyinference.regression.solution import LinearSolution
from pyinference.regression.comparison import ModelComparison, compare_models
from pyinference.regression.backends.cpu import CPUQRBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_qr']


def fit(
    X: ArrayLike | RegressionDesign,
    y: ArrayLike | None = None,
    *,
    names: Sequence[str] | None = None,
    backend: BackendChoice = 'auto',
) -> LinearSolution:
    """
    Fit a linear regression model.

    Solves the ordinary least squares problem:
        min_β ||y - Xβ||²

    This is the primary public API for linear regression. All input
    validation, backend selection, and result wrapping happens here.
    The intercept is not added implicitly: include a column of ones
    (see add_intercept) if the model should have one.

    Args:
        X: Design matrix (n x p), or a pre-built RegressionDesign.
        y: Response vector (n,). Required unless X is a RegressionDesign.
        names: Optional coefficient labels, one per column of X.
        backend: Computational backend to use ('auto', 'cpu', 'cpu_qr').
            All resolve to the CPU QR backend.

    Returns:
        LinearSolution with coefficients, inference, and summary methods

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X and y have inconsistent dimensions
        InsufficientDataError: If n <= p
        SingularDesignError: If X is rank-deficient or has a redundant
            constant column

    Example:
        >>> import numpy as np
        >>> from pyinference.regression import fit, add_intercept
        >>>
        >>> X = add_intercept(np.random.randn(100, 2))
        >>> y = X @ [1, 2, 3] + np.random.randn(100) * 0.1
        >>>
        >>> result = fit(X, y)
        >>> print(result.summary())
    """
    if isinstance(X, RegressionDesign):
        design = X
    else:
        if y is None:
            raise ValidationError("y required when X is not a RegressionDesign")
        design = RegressionDesign.from_arrays(X, y, names=names)

    backend_impl = _get_backend(backend)
    result = backend_impl.solve(design)

    return LinearSolution(_result=result, _design=design)


def compare(full: LinearSolution, reduced: LinearSolution) -> ModelComparison:
    """
    Nested-model F-test.

    Tests whether the columns present in `full` but absent from `reduced`
    jointly reduce the residual sum of squares more than chance would.

    Args:
        full: Model fitted with the larger set of columns
        reduced: Model fitted to the same y with a strict subset of
            full's columns

    Returns:
        ModelComparison with F statistic, degrees of freedom and
        upper-tail p-value

    Raises:
        NotNestedError: If reduced's columns are not a strict subset of
            full's, or the responses differ
    """
    return compare_models(full, reduced)


def _get_backend(choice: str) -> CPUQRBackend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValidationError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_qr'):
        return CPUQRBackend()
    raise ValidationError(f"Unknown backend: {choice!r}. Use 'auto', 'cpu' or 'cpu_qr'.")
