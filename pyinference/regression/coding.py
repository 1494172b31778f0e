"""
Design matrix construction helpers.

Caller-side data preparation: turning categorical labels into indicator
columns and forming interaction columns. The estimator itself only ever
sees a numeric matrix; nothing here parses formulas.

Key concepts:
    - Intercept: a leading column of ones
    - Treatment coding: k-1 indicator columns (baseline level dropped)
    - Interaction: elementwise products of every column pair
"""

from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pyinference.core.exceptions import ValidationError
from pyinference.core.validation import check_array, check_consistent_length


def add_intercept(X: ArrayLike) -> NDArray[np.floating[Any]]:
    """Prepend a column of ones to X (1D input is treated as one column)."""
    X_arr = check_array(X, 'X')
    if X_arr.ndim == 1:
        X_arr = X_arr.reshape(-1, 1)
    return np.column_stack([np.ones(X_arr.shape[0], dtype=np.float64), X_arr])


def treatment_code(
    labels: Sequence[Any],
    reference: Any | None = None,
) -> tuple[NDArray[np.floating[Any]], list[str]]:
    """
    Treatment (dummy) coding for a single categorical variable.

    Drops the reference level and creates k-1 indicator columns, one per
    remaining level in sorted order.

    Args:
        labels: 1D sequence of category labels
        reference: Level to drop. Defaults to the first level in sorted order.

    Returns:
        (X_coded, level_names) where:
            X_coded: (n, k-1) float64 indicator matrix
            level_names: the k-1 non-reference level names (column labels)

    Raises:
        ValidationError: If the reference level is absent or there is
            only one level
    """
    labels_str = np.array([str(v) for v in labels])
    levels = sorted(set(labels_str.tolist()))
    if len(levels) < 2:
        raise ValidationError(
            f"labels: need at least 2 levels to code, got {levels}"
        )

    baseline = levels[0] if reference is None else str(reference)
    if baseline not in levels:
        raise ValidationError(
            f"reference: level {baseline!r} not found in {levels}"
        )
    coded_levels = [level for level in levels if level != baseline]

    X = np.zeros((len(labels_str), len(coded_levels)), dtype=np.float64)
    for j, level in enumerate(coded_levels):
        X[:, j] = (labels_str == level).astype(np.float64)

    return X, coded_levels


def interaction(a: ArrayLike, b: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Interaction columns as the elementwise product of all column pairs.

    Args:
        a: (n,) or (n, p_a) columns
        b: (n,) or (n, p_b) columns

    Returns:
        (n, p_a * p_b) interaction columns, ordered a-major
    """
    X_a = check_array(a, 'a')
    X_b = check_array(b, 'b')
    if X_a.ndim == 1:
        X_a = X_a.reshape(-1, 1)
    if X_b.ndim == 1:
        X_b = X_b.reshape(-1, 1)
    check_consistent_length(X_a, X_b, names=('a', 'b'))

    n = X_a.shape[0]
    p_a = X_a.shape[1]
    p_b = X_b.shape[1]
    X_int = np.empty((n, p_a * p_b), dtype=np.float64)

    col = 0
    for i in range(p_a):
        for j in range(p_b):
            X_int[:, col] = X_a[:, i] * X_b[:, j]
            col += 1

    return X_int
