"""
Regression Design.

Holds the validated design matrix X and response y for one OLS fit.
Immutable after construction; everything downstream trusts it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pyinference.core.exceptions import DimensionMismatchError
from pyinference.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
    check_constant_columns,
)


@dataclass(frozen=True)
class RegressionDesign:
    """
    Regression design matrix specification.

    Construction:
        RegressionDesign.from_arrays(X, y)
        RegressionDesign.from_arrays(X, y, names=['(Intercept)', 'age'])
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...]

    @classmethod
    def from_arrays(
        cls,
        X: ArrayLike,
        y: ArrayLike,
        names: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """Build Design directly from arrays."""
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        return cls.build(X_arr, y_arr, names=names)

    @classmethod
    def build(
        cls,
        X: NDArray,
        y: NDArray,
        names: Sequence[str] | None = None,
    ) -> RegressionDesign:
        """Internal builder with validation."""
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)

        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))

        n, p = X.shape
        check_min_samples(X, 'X')
        check_constant_columns(X, 'X')

        if names is None:
            names = tuple(f"x{j}" for j in range(p))
        else:
            names = tuple(str(name) for name in names)
            if len(names) != p:
                raise DimensionMismatchError(
                    f"names: expected {p} names for {p} columns, got {len(names)}",
                    lengths={'names': len(names), 'X columns': p},
                )

        # Private copies so callers mutating their arrays can't touch the design
        X = X.copy()
        y = y.copy()
        X.flags.writeable = False
        y.flags.writeable = False

        return cls(_X=X, _y=y, _n=n, _p=p, _names=names)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of columns (coefficients), intercept included."""
        return self._p

    @property
    def names(self) -> tuple[str, ...]:
        """Coefficient labels."""
        return self._names

    @property
    def has_intercept(self) -> bool:
        """
        True if some column is constant and nonzero.

        Same rule check_constant_columns uses: the one constant column
        it admits plays the intercept, whatever its value.
        """
        constant = np.ptp(self._X, axis=0) == 0.0
        nonzero = np.any(self._X != 0.0, axis=0)
        return bool(np.any(constant & nonzero))
