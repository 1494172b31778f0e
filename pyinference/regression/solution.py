"""
Regression solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyinference.core.result import Result
from pyinference.core.exceptions import ValidationError
from pyinference.core.compute.distributions import t_ppf, t_test_p_value, f_sf

if TYPE_CHECKING:
    from pyinference.regression.design import RegressionDesign


@dataclass(frozen=True)
class LinearParams:
    """
    Parameter payload for linear regression.

    This is the immutable data computed by backends.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int
    unscaled_covariance: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    t_statistics: NDArray[np.floating[Any]]


@dataclass(frozen=True)
class LinearSolution:
    """
    User-facing regression results.

    Wraps the backend Result and provides accessors for all regression
    outputs: coefficients, sums of squares, standard errors, t-statistics,
    p-values, confidence intervals and the overall F-test.
    """
    _result: Result[LinearParams]
    _design: RegressionDesign

    @property
    def design(self) -> RegressionDesign:
        return self._design

    @property
    def names(self) -> tuple[str, ...]:
        return self._design.names

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._result.params.coefficients

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._result.params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._result.params.fitted_values

    @property
    def rss(self) -> float:
        """Residual (error) sum of squares."""
        return self._result.params.rss

    @property
    def tss(self) -> float:
        """Total sum of squares about the mean of y."""
        return self._result.params.tss

    @property
    def ess(self) -> float:
        """Model sum of squares, SS_total - SS_error."""
        return self.tss - self.rss

    @property
    def mse(self) -> float:
        """Mean squared error, SS_error / df."""
        return self.rss / self.df_residual

    @property
    def residual_std_error(self) -> float:
        return float(np.sqrt(self.mse))

    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return self.ess / self.tss

    @property
    def adjusted_r_squared(self) -> float:
        n = self._design.n
        p = self.rank
        if self.tss == 0:
            return self.r_squared
        df_int = 1 if self._design.has_intercept else 0
        return 1.0 - (1.0 - self.r_squared) * (n - df_int) / (n - p)

    @property
    def unscaled_covariance(self) -> NDArray[np.floating[Any]]:
        """(X'X)^-1."""
        return self._result.params.unscaled_covariance

    @property
    def vcov(self) -> NDArray[np.floating[Any]]:
        """Coefficient covariance matrix, MSE * (X'X)^-1."""
        return self.mse * self.unscaled_covariance

    @property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        Standard errors of coefficients.

        Computed as SE(β) = sqrt(MSE * diag((X'X)⁻¹)).
        """
        return self._result.params.standard_errors

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        """t-statistics for coefficients."""
        return self._result.params.t_statistics

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided p-values for H0: β_j = 0."""
        return self.coefficient_p_values("two.sided")

    def coefficient_p_values(self, alternative: str = "two.sided") -> NDArray[np.floating[Any]]:
        """
        p-values for H0: β_j = 0 against the given alternative.

        Args:
            alternative: "two.sided", "less" (β_j < 0) or "greater" (β_j > 0)
        """
        df = self.df_residual
        return np.array(
            [t_test_p_value(float(t), df, alternative) for t in self.t_statistics],
            dtype=np.float64,
        )

    def conf_int(self, level: float = 0.95) -> NDArray[np.floating[Any]]:
        """
        Confidence intervals for the coefficients.

        Returns:
            (p, 2) array of [lower, upper] bounds
        """
        if not (0.0 < level < 1.0):
            raise ValidationError(f"level must be in (0, 1), got {level}")
        q = t_ppf(0.5 + level / 2.0, self.df_residual)
        half_width = q * self.standard_errors
        return np.column_stack([
            self.coefficients - half_width,
            self.coefficients + half_width,
        ])

    @property
    def f_statistic(self) -> float | None:
        """
        Overall F statistic against the intercept-only model.

        None when the model has no intercept or no predictor besides it.
        """
        df_model = self._df_model()
        if df_model is None:
            return None
        if self.rss == 0:
            return float('inf')
        return (self.ess / df_model) / self.mse

    @property
    def f_p_value(self) -> float | None:
        df_model = self._df_model()
        f = self.f_statistic
        if df_model is None or f is None:
            return None
        return f_sf(f, df_model, self.df_residual)

    def _df_model(self) -> int | None:
        if not self._design.has_intercept or self._design.p < 2:
            return None
        return self._design.p - 1

    @property
    def rank(self) -> int:
        return self._result.params.rank

    @property
    def df_residual(self) -> int:
        return self._result.params.df_residual

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Generate R-style summary output."""
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Observations: {self._design.n}",
            f"Coefficients: {self._design.p}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} on {self.df_residual} DF",
        ]
        if self.f_statistic is not None:
            lines.append(
                f"F-statistic: {self.f_statistic:.4f} on {self._df_model()} and "
                f"{self.df_residual} DF, p-value: {self.f_p_value:.4g}"
            )
        lines.extend([
            "",
            "Coefficients:",
            "-" * 72,
            f"{'':<16} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            "-" * 72,
        ])

        for name, coef, se, t, p in zip(
            self.names, self.coefficients, self.standard_errors,
            self.t_statistics, self.p_values,
        ):
            lines.append(f"{name:<16} {coef:14.6f} {se:12.6f} {t:10.3f} {p:12.4g}")

        lines.append("-" * 72)
        lines.append(f"Backend: {self.backend_name}")
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )
