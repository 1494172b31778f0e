"""
Contingency solution types.

Each solution wraps a Result[...] envelope and exposes the payload as
properties plus an R-style summary().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pyinference.core.result import Result
from pyinference.core.exceptions import ValidationError
from pyinference.contingency._common import ChisqParams, OddsRatioParams, BayesFactorParams

if TYPE_CHECKING:
    from pyinference.contingency.design import ContingencyDesign


# Kass & Raftery style labels; descriptive only
EVIDENCE_BINS = (
    (3.0, "negligible"),
    (20.0, "positive"),
    (150.0, "strong"),
    (float('inf'), "very strong"),
)


@dataclass(frozen=True)
class ChisqSolution:
    """User-facing chi-squared test results."""
    _result: Result[ChisqParams]
    _design: ContingencyDesign

    @property
    def statistic(self) -> float:
        """Chi-squared statistic."""
        return self._result.params.statistic

    @property
    def df(self) -> int:
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def observed(self) -> NDArray[np.floating[Any]]:
        return self._result.params.observed

    @property
    def expected(self) -> NDArray[np.floating[Any]]:
        """Expected counts under H0, same shape as observed."""
        return self._result.params.expected

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        """Pearson residuals (O - E) / sqrt(E)."""
        return self._result.params.residuals

    @property
    def adjusted_residuals(self) -> NDArray[np.floating[Any]] | None:
        """For independence tests: residuals scaled to unit variance."""
        return self._result.params.adjusted_residuals

    @property
    def proportions(self) -> NDArray[np.floating[Any]] | None:
        """For goodness-of-fit tests: null proportions."""
        return self._result.params.proportions

    @property
    def method(self) -> str:
        return self._result.params.method

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
        """
        Format like R's print.htest.

            Pearson's Chi-squared test

        X-squared = 6.25, df = 2, p-value = 0.04394
        """
        lines = [
            f"\t{self.method}",
            "",
            f"X-squared = {self.statistic:.5g}, df = {self.df}, "
            f"p-value = {_format_pvalue(self.p_value)}",
        ]
        for w in self.warnings:
            lines.append(f"Warning: {w}")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"ChisqSolution(method={self.method!r}, statistic={self.statistic:.4g}, "
            f"df={self.df}, p_value={self.p_value:.4g})"
        )


@dataclass(frozen=True)
class OddsRatioSolution:
    """User-facing odds ratio results."""
    _result: Result[OddsRatioParams]
    _design: ContingencyDesign

    @property
    def estimate(self) -> float | None:
        """
        Sample odds ratio.

        inf when only the denominator has a zero cell, 0.0 when only the
        numerator does, None when both do (see status).
        """
        return self._result.params.estimate

    @property
    def status(self) -> str:
        """One of "finite", "infinite", "zero" or "undefined"."""
        return self._result.params.status

    @property
    def is_finite(self) -> bool:
        return self.status == "finite"

    @property
    def odds_row1(self) -> float | None:
        return self._result.params.odds_row1

    @property
    def odds_row2(self) -> float | None:
        return self._result.params.odds_row2

    @property
    def log_estimate(self) -> float | None:
        return self._result.params.log_estimate

    @property
    def standard_error_log(self) -> float | None:
        """Woolf standard error of log OR."""
        return self._result.params.standard_error_log

    @property
    def conf_int(self) -> NDArray[np.floating[Any]] | None:
        """Woolf confidence interval, shape (2,). None with a zero cell."""
        return self._result.params.conf_int

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    def summary(self) -> str:
        lines = ["\tSample odds ratio", ""]
        if self.status == "finite":
            lo, hi = self.conf_int
            pct = int(round(self.conf_level * 100))
            lines.append(f"odds ratio = {self.estimate:.7g}")
            lines.append(f"{pct} percent confidence interval (Woolf):")
            lines.append(f" {lo:.7g}  {hi:.7g}")
        elif self.status == "undefined":
            lines.append("odds ratio = undefined (0/0)")
        else:
            lines.append(f"odds ratio = {_format_number(self.estimate)} ({self.status})")
        lines.append("")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"OddsRatioSolution(estimate={self.estimate!r}, status={self.status!r})"


@dataclass(frozen=True)
class BayesFactorResult:
    """
    Bayes factor K = p(data | association) / p(data | independence).

    K is tagged with the sampling plan that produced it; values from
    different plans answer different questions and must not be compared.
    """
    _result: Result[BayesFactorParams]
    _design: ContingencyDesign

    @property
    def bf(self) -> float:
        """K; > 1 favours association."""
        return self._result.params.bf

    @property
    def bf01(self) -> float:
        """1 / K; > 1 favours independence."""
        with np.errstate(over='ignore', under='ignore'):
            return float(np.exp(-self.log_bf))

    @property
    def log_bf(self) -> float:
        return self._result.params.log_bf

    @property
    def sampling_plan(self) -> str:
        return self._result.params.sampling_plan

    @property
    def fixed_margin(self) -> str | None:
        return self._result.params.fixed_margin

    @property
    def prior_concentration(self) -> float:
        return self._result.params.prior_concentration

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    def is_comparable(self, other: BayesFactorResult) -> bool:
        """True when both results came from the same sampling plan and prior."""
        return (
            self.sampling_plan == other.sampling_plan
            and self.fixed_margin == other.fixed_margin
            and self.prior_concentration == other.prior_concentration
        )

    def ratio_to(self, other: BayesFactorResult) -> float:
        """
        K_self / K_other.

        Raises:
            ValidationError: If the two results are not comparable
        """
        if not self.is_comparable(other):
            raise ValidationError(
                f"Bayes factors from different sampling plans are not comparable: "
                f"{self.sampling_plan!r} ({self.fixed_margin}) vs "
                f"{other.sampling_plan!r} ({other.fixed_margin})"
            )
        return float(np.exp(self.log_bf - other.log_bf))

    @property
    def evidence(self) -> str:
        """Verbal label for the strength of evidence; descriptive only."""
        favours = "association" if self.log_bf >= 0 else "independence"
        log_strength = abs(self.log_bf)
        for upper, label in EVIDENCE_BINS:
            if log_strength < np.log(upper):
                return f"{label} evidence for {favours}"
        return f"very strong evidence for {favours}"

    def summary(self) -> str:
        plan = self.sampling_plan
        if self.fixed_margin is not None:
            plan = f"{plan} ({self.fixed_margin} fixed)"
        lines = [
            "\tBayes factor analysis for contingency table",
            "",
            f"sampling plan: {plan}",
            f"prior concentration: {self.prior_concentration:g}",
            f"BF (association : independence) = {self.bf:.6g}  [log BF = {self.log_bf:.6g}]",
            f"{self.evidence}",
            "",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"BayesFactorResult(bf={self.bf:.6g}, sampling_plan={self.sampling_plan!r})"


def _format_pvalue(p: float) -> str:
    """Format p-value like R does."""
    if p < 2.2e-16:
        return "< 2.2e-16"
    if p < 0.001:
        return f"{p:.4e}"
    return f"{p:.4g}"


def _format_number(x: float) -> str:
    """Format a number, handling infinity."""
    if np.isinf(x):
        return "-Inf" if x < 0 else "Inf"
    return f"{x:.7g}"
