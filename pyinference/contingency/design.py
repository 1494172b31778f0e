"""
ContingencyDesign: tagged union for contingency analysis inputs.

Uses factory classmethods per analysis. The `test_type` field identifies
which fields are populated. Immutable after construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pyinference.core.exceptions import ValidationError, ShapeError, DimensionMismatchError
from pyinference.core.validation import (
    check_array,
    check_1d,
    check_counts,
    check_probabilities,
)
from pyinference.contingency.table import ContingencyTable, as_table
from pyinference.contingency._common import SAMPLING_PLANS, FIXED_MARGINS, INDEPENDENT_MULTINOMIAL


def _validate_conf_level(conf_level: float) -> float:
    """Validate confidence level is in (0, 1)."""
    if not (0.0 < conf_level < 1.0):
        raise ValidationError(
            f"conf_level must be in (0, 1), got {conf_level}"
        )
    return conf_level


def _require_at_least_2x2(table: ContingencyTable) -> None:
    nrow, ncol = table.shape
    if nrow < 2 or ncol < 2:
        raise ShapeError(
            f"table: need at least 2 rows and 2 columns, got shape {table.shape}",
            shape=table.shape,
        )


@dataclass(frozen=True)
class ContingencyDesign:
    """
    Design for contingency analyses.

    Do not construct directly; use factory classmethods.
    """
    test_type: str

    # Goodness of fit
    _counts: NDArray[np.floating[Any]] | None = None
    _proportions: NDArray[np.floating[Any]] | None = None

    # Two-way table analyses
    _table: ContingencyTable | None = None
    _correct: bool = False
    _conf_level: float = 0.95

    # Bayes factor
    _sampling_plan: str | None = None
    _fixed_margin: str | None = None
    _prior_concentration: float = 1.0

    # --- Properties ---

    @property
    def counts(self) -> NDArray[np.floating[Any]] | None:
        return self._counts

    @property
    def proportions(self) -> NDArray[np.floating[Any]] | None:
        return self._proportions

    @property
    def table(self) -> ContingencyTable | None:
        return self._table

    @property
    def correct(self) -> bool:
        return self._correct

    @property
    def conf_level(self) -> float:
        return self._conf_level

    @property
    def sampling_plan(self) -> str | None:
        return self._sampling_plan

    @property
    def fixed_margin(self) -> str | None:
        return self._fixed_margin

    @property
    def prior_concentration(self) -> float:
        return self._prior_concentration

    # --- Factory classmethods ---

    @classmethod
    def for_goodness_of_fit(
        cls,
        counts: ArrayLike,
        p: ArrayLike | None = None,
    ) -> ContingencyDesign:
        """
        Build design for a chi-squared goodness-of-fit test.

        Args:
            counts: 1D observed counts, one per category
            p: Null proportions (default uniform); positive, summing to 1

        Raises:
            DimensionMismatchError: If p and counts differ in length
            ValidationError: On invalid counts or proportions
        """
        obs = check_array(counts, 'counts')
        check_1d(obs, 'counts')
        check_counts(obs, 'counts')
        k = len(obs)
        if k < 2:
            raise ShapeError(
                f"counts: need at least 2 categories, got {k}", shape=(k,),
            )
        if obs.sum() == 0:
            raise ValidationError("counts: total count is zero")

        if p is None:
            probs = np.full(k, 1.0 / k)
        else:
            probs = check_array(p, 'p')
            check_1d(probs, 'p')
            if len(probs) != k:
                raise DimensionMismatchError(
                    f"p: expected {k} proportions to match counts, got {len(probs)}",
                    lengths={'counts': k, 'p': len(probs)},
                )
            check_probabilities(probs, 'p')

        return cls(
            test_type="goodness_of_fit",
            _counts=obs.astype(np.float64),
            _proportions=probs.astype(np.float64),
        )

    @classmethod
    def for_independence(
        cls,
        table: ArrayLike | ContingencyTable,
        *,
        correct: bool = False,
    ) -> ContingencyDesign:
        """
        Build design for a chi-squared test of independence.

        Args:
            table: r x c counts (r, c >= 2)
            correct: Apply Yates' continuity correction (2x2 only)
        """
        tbl = as_table(table)
        _require_at_least_2x2(tbl)
        return cls(test_type="independence", _table=tbl, _correct=correct)

    @classmethod
    def for_residuals(cls, table: ArrayLike | ContingencyTable) -> ContingencyDesign:
        """Build design for per-cell Pearson residuals."""
        tbl = as_table(table)
        _require_at_least_2x2(tbl)
        return cls(test_type="residuals", _table=tbl)

    @classmethod
    def for_odds_ratio(
        cls,
        table: ArrayLike | ContingencyTable,
        *,
        conf_level: float = 0.95,
    ) -> ContingencyDesign:
        """
        Build design for the 2x2 sample odds ratio.

        Raises:
            ShapeError: If the table is not exactly 2x2
        """
        tbl = as_table(table)
        if tbl.shape != (2, 2):
            raise ShapeError(
                f"table: odds ratio requires a 2x2 table, got shape {tbl.shape}",
                shape=tbl.shape,
                expected_shape=(2, 2),
            )
        return cls(
            test_type="odds_ratio",
            _table=tbl,
            _conf_level=_validate_conf_level(conf_level),
        )

    @classmethod
    def for_bayes_factor(
        cls,
        table: ArrayLike | ContingencyTable,
        sampling_plan: str,
        *,
        fixed_margin: str = "rows",
        prior_concentration: float = 1.0,
    ) -> ContingencyDesign:
        """
        Build design for a contingency-table Bayes factor.

        Args:
            table: r x c counts (r, c >= 2)
            sampling_plan: "independent-multinomial-fixed-margin" or
                "joint-multinomial"
            fixed_margin: "rows" or "cols"; which margin the design fixed.
                Only used by the independent-multinomial plan.
            prior_concentration: Symmetric Dirichlet concentration a.
                Values below 1 are rejected because the independence
                prior's concentration a*k - (k - 1) must stay positive
                for every table shape.
        """
        if sampling_plan not in SAMPLING_PLANS:
            raise ValidationError(
                f"sampling_plan must be one of {SAMPLING_PLANS}, got {sampling_plan!r}"
            )
        if fixed_margin not in FIXED_MARGINS:
            raise ValidationError(
                f"fixed_margin must be one of {FIXED_MARGINS}, got {fixed_margin!r}"
            )
        if not (np.isfinite(prior_concentration) and prior_concentration >= 1.0):
            raise ValidationError(
                f"prior_concentration must be >= 1, got {prior_concentration}"
            )

        tbl = as_table(table)
        _require_at_least_2x2(tbl)

        margin = fixed_margin if sampling_plan == INDEPENDENT_MULTINOMIAL else None
        return cls(
            test_type="bayes_factor",
            _table=tbl,
            _sampling_plan=sampling_plan,
            _fixed_margin=margin,
            _prior_concentration=float(prior_concentration),
        )
