"""
Nested-model comparison for linear regression.

The extra-sum-of-squares F-test: a reduced model whose columns are a
strict subset of a full model's columns, both fitted to the same response.

    F = [(RSS_reduced - RSS_full) / (p_full - p_reduced)] / (RSS_full / (n - p_full))

with (p_full - p_reduced, n - p_full) degrees of freedom.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pyinference.core.exceptions import NotNestedError, NumericalError
from pyinference.core.compute.distributions import f_sf

if TYPE_CHECKING:
    from pyinference.regression.solution import LinearSolution


@dataclass(frozen=True)
class ModelComparison:
    """Result of a nested-model F-test."""
    f_statistic: float
    p_value: float
    df_numerator: int
    df_denominator: int
    rss_full: float
    rss_reduced: float
    df_residual_full: int
    df_residual_reduced: int
    added_terms: tuple[str, ...]

    @property
    def ss_difference(self) -> float:
        """Reduction in residual sum of squares from the added terms."""
        return self.rss_reduced - self.rss_full

    def summary(self) -> str:
        """ANOVA-style comparison table."""
        lines = [
            "Analysis of Variance Table",
            "",
            f"{'':<8} {'Res.Df':>8} {'RSS':>14} {'Df':>4} {'Sum of Sq':>14} {'F':>10} {'Pr(>F)':>12}",
            f"{'reduced':<8} {self.df_residual_reduced:>8d} {self.rss_reduced:14.6f}",
            f"{'full':<8} {self.df_residual_full:>8d} {self.rss_full:14.6f} "
            f"{self.df_numerator:>4d} {self.ss_difference:14.6f} "
            f"{self.f_statistic:10.4f} {self.p_value:12.4g}",
        ]
        if self.added_terms:
            lines.append("")
            lines.append(f"Added terms: {', '.join(self.added_terms)}")
        return "\n".join(lines)


def compare_models(full: LinearSolution, reduced: LinearSolution) -> ModelComparison:
    """
    Extra-sum-of-squares F-test of reduced against full.

    Raises:
        NotNestedError: If the models are not nested
        NumericalError: If the full model fits exactly (F undefined)
    """
    full_design = full.design
    reduced_design = reduced.design

    if full_design.n != reduced_design.n or not np.array_equal(full_design.y, reduced_design.y):
        raise NotNestedError("Models were fitted to different responses")

    if reduced_design.p >= full_design.p:
        raise NotNestedError(
            f"Reduced model must have fewer columns than the full model "
            f"(reduced p={reduced_design.p}, full p={full_design.p})"
        )

    matched = _match_columns(full_design.X, reduced_design.X)
    added = tuple(
        full_design.names[j] for j in range(full_design.p) if j not in matched
    )

    df_num = full_design.p - reduced_design.p
    df_den = full.df_residual

    if full.rss == 0:
        raise NumericalError(
            "Full model has zero residual sum of squares; F statistic is undefined"
        )

    # Rounding can leave a tiny negative difference when the added columns explain nothing
    ss_diff = max(0.0, reduced.rss - full.rss)
    f_stat = (ss_diff / df_num) / full.mse
    p_value = f_sf(f_stat, df_num, df_den)

    return ModelComparison(
        f_statistic=f_stat,
        p_value=p_value,
        df_numerator=df_num,
        df_denominator=df_den,
        rss_full=full.rss,
        rss_reduced=reduced.rss,
        df_residual_full=full.df_residual,
        df_residual_reduced=reduced.df_residual,
        added_terms=added,
    )


def _match_columns(X_full: np.ndarray, X_reduced: np.ndarray) -> set[int]:
    """Indices of full columns matching each reduced column."""
    matched: set[int] = set()
    for j in range(X_reduced.shape[1]):
        col = X_reduced[:, j]
        hits = [
            k for k in range(X_full.shape[1])
            if k not in matched and np.array_equal(X_full[:, k], col)
        ]
        if not hits:
            raise NotNestedError(
                f"Reduced model column {j} does not appear in the full model; "
                f"predictors are not a subset"
            )
        matched.add(hits[0])
    return matched
