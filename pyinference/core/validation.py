"""
Input validation utilities for pyinference.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pyinference.core.exceptions import (
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    InsufficientDataError,
    SingularDesignError,
)
from pyinference.core.compute.tolerances import PROPORTION_SUM_ATOL


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Rejects inputs
    that result in object dtype (indicating mixed types or non-numeric data).

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with floating dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.floating):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_consistent_length(
    *arrays: ArrayLike,
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Args:
        *arrays: Arrays or sequences to check
        names: Parameter names for error messages (must match number of arrays)

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionMismatchError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [len(arr) for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionMismatchError(
            f"Inconsistent lengths: {details}",
            lengths=dict(zip(names, lengths)),
        )


def check_min_samples(X: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a design matrix has more rows than columns.

    Estimating p coefficients and a residual variance needs N >= p + 1.

    Raises:
        InsufficientDataError: If N <= p
    """
    n, p = X.shape
    if n < p + 1:
        raise InsufficientDataError(
            f"{name}: requires at least {p + 1} observations for {p} columns, got {n}",
            n=n,
            p=p,
        )


def check_constant_columns(X: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a design matrix has no all-zero column and at most one constant column.

    A single constant column plays the role of the intercept. Any further
    constant column is collinear with it.

    Raises:
        SingularDesignError: On an all-zero column or a second constant column
    """
    zero_cols = np.where(np.all(X == 0.0, axis=0))[0]
    if len(zero_cols) > 0:
        raise SingularDesignError(
            f"{name}: columns {zero_cols.tolist()} are identically zero",
            columns=zero_cols.tolist(),
        )

    constant_cols = np.where(np.ptp(X, axis=0) == 0.0)[0]
    if len(constant_cols) > 1:
        raise SingularDesignError(
            f"{name}: columns {constant_cols.tolist()} are constant; "
            f"all but one are collinear with the intercept",
            columns=constant_cols.tolist(),
        )


def check_counts(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array holds non-negative whole-number counts.

    Raises:
        ValidationError: On negative or fractional entries
    """
    check_finite(array, name)
    if np.any(array < 0):
        raise ValidationError(f"{name}: counts must be non-negative")
    if np.any(array != np.round(array)):
        raise ValidationError(f"{name}: counts must be whole numbers")


def check_probabilities(p: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify a probability vector is positive and sums to one.

    Raises:
        ValidationError: On non-positive entries or a sum away from 1
    """
    check_finite(p, name)
    if np.any(p <= 0):
        raise ValidationError(f"{name}: probabilities must be positive")
    total = float(np.sum(p))
    if abs(total - 1.0) > PROPORTION_SUM_ATOL:
        raise ValidationError(
            f"{name}: probabilities must sum to 1, got {total:.10g}"
        )
