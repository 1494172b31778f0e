"""
Tests for bayes_factor() on contingency tables.

Hand-computed reference for [[1, 0], [0, 1]] with a uniform prior:
    joint-multinomial:                     K = 1.8
    independent-multinomial (rows fixed):  K = 1.5
"""

import numpy as np
import pytest

from pyinference.core.exceptions import ShapeError, ValidationError
from pyinference.contingency import (
    INDEPENDENT_MULTINOMIAL,
    JOINT_MULTINOMIAL,
    ContingencyDesign,
    ContingencyTable,
    bayes_factor,
)
from pyinference.contingency.backends._bayes_factor import log_multivariate_beta


class TestClosedForm:

    def test_log_multivariate_beta(self):
        # B(2, 3) = 1! 2! / 4! = 1/12
        assert log_multivariate_beta(np.array([2.0, 3.0])) == pytest.approx(np.log(1 / 12), rel=1e-12)

    def test_joint_diagonal(self):
        result = bayes_factor([[1, 0], [0, 1]], JOINT_MULTINOMIAL)
        assert result.bf == pytest.approx(1.8, rel=1e-12)
        assert result.log_bf == pytest.approx(np.log(1.8), rel=1e-12)

    def test_independent_diagonal(self):
        result = bayes_factor([[1, 0], [0, 1]], INDEPENDENT_MULTINOMIAL)
        assert result.bf == pytest.approx(1.5, rel=1e-12)

    def test_bf01_is_reciprocal(self):
        result = bayes_factor([[1, 0], [0, 1]], JOINT_MULTINOMIAL)
        assert result.bf01 == pytest.approx(1 / 1.8, rel=1e-12)

    def test_plans_differ(self):
        table = [[12, 5], [4, 15]]
        joint = bayes_factor(table, JOINT_MULTINOMIAL)
        indep = bayes_factor(table, INDEPENDENT_MULTINOMIAL)
        assert joint.bf != pytest.approx(indep.bf, rel=1e-3)


class TestAssociationStrength:

    @pytest.mark.parametrize("plan", [JOINT_MULTINOMIAL, INDEPENDENT_MULTINOMIAL])
    def test_strictly_increasing(self, plan):
        log_bfs = [
            bayes_factor([[25 + k, 25 - k], [25 - k, 25 + k]], plan).log_bf
            for k in range(0, 21, 2)
        ]
        assert np.all(np.diff(log_bfs) > 0)

    @pytest.mark.parametrize("plan", [JOINT_MULTINOMIAL, INDEPENDENT_MULTINOMIAL])
    def test_independent_table_does_not_favour_association(self, plan):
        assert bayes_factor([[25, 25], [25, 25]], plan).bf < 1.0

    @pytest.mark.parametrize("plan", [JOINT_MULTINOMIAL, INDEPENDENT_MULTINOMIAL])
    def test_strong_association_favoured(self, plan):
        assert bayes_factor([[45, 5], [5, 45]], plan).bf > 150

    def test_stops_table(self):
        result = bayes_factor([[1219, 36244], [3108, 239241]], INDEPENDENT_MULTINOMIAL)
        assert result.log_bf > 100
        assert result.evidence == "very strong evidence for association"


class TestFixedMargin:

    def test_columns_fixed_is_transposed_rows_fixed(self):
        table = np.array([[3, 1, 0], [2, 5, 4]])
        by_cols = bayes_factor(table, INDEPENDENT_MULTINOMIAL, fixed_margin="cols")
        by_rows = bayes_factor(table.T, INDEPENDENT_MULTINOMIAL, fixed_margin="rows")
        assert by_cols.log_bf == pytest.approx(by_rows.log_bf, rel=1e-12, abs=1e-12)
        assert by_cols.fixed_margin == "cols"

    def test_joint_has_no_fixed_margin(self):
        result = bayes_factor([[3, 1], [2, 5]], JOINT_MULTINOMIAL, fixed_margin="cols")
        assert result.fixed_margin is None

    def test_joint_symmetric_under_transpose(self):
        table = np.array([[3, 1, 0], [2, 5, 4]])
        a = bayes_factor(table, JOINT_MULTINOMIAL)
        b = bayes_factor(table.T, JOINT_MULTINOMIAL)
        assert a.log_bf == pytest.approx(b.log_bf, rel=1e-12, abs=1e-12)


class TestTagging:

    def test_result_carries_plan(self):
        result = bayes_factor([[3, 1], [2, 5]], INDEPENDENT_MULTINOMIAL)
        assert result.sampling_plan == "independent-multinomial-fixed-margin"
        assert result.fixed_margin == "rows"
        assert result.prior_concentration == 1.0

    def test_comparable(self):
        a = bayes_factor([[3, 1], [2, 5]], JOINT_MULTINOMIAL)
        b = bayes_factor([[6, 2], [1, 7]], JOINT_MULTINOMIAL)
        assert a.is_comparable(b)
        assert a.ratio_to(b) == pytest.approx(np.exp(a.log_bf - b.log_bf), rel=1e-12)

    def test_not_comparable_across_plans(self):
        a = bayes_factor([[3, 1], [2, 5]], JOINT_MULTINOMIAL)
        b = bayes_factor([[3, 1], [2, 5]], INDEPENDENT_MULTINOMIAL)
        assert not a.is_comparable(b)
        with pytest.raises(ValidationError, match="not comparable"):
            a.ratio_to(b)

    def test_not_comparable_across_margins(self):
        a = bayes_factor([[3, 1], [2, 5]], INDEPENDENT_MULTINOMIAL, fixed_margin="rows")
        b = bayes_factor([[3, 1], [2, 5]], INDEPENDENT_MULTINOMIAL, fixed_margin="cols")
        assert not a.is_comparable(b)

    def test_summary(self):
        s = bayes_factor([[1, 0], [0, 1]], INDEPENDENT_MULTINOMIAL).summary()
        assert "independent-multinomial-fixed-margin (rows fixed)" in s
        assert "BF (association : independence) = 1.5" in s


class TestEvidenceLabels:

    def test_negligible(self):
        result = bayes_factor([[1, 0], [0, 1]], JOINT_MULTINOMIAL)
        assert result.evidence == "negligible evidence for association"

    def test_favours_independence(self):
        result = bayes_factor([[25, 25], [25, 25]], JOINT_MULTINOMIAL)
        assert result.evidence.endswith("evidence for independence")

    def test_labels_do_not_change_value(self):
        result = bayes_factor([[45, 5], [5, 45]], JOINT_MULTINOMIAL)
        assert result.bf == pytest.approx(np.exp(result.log_bf), rel=1e-12)


class TestPrior:

    def test_concentration_changes_value(self):
        a = bayes_factor([[8, 2], [3, 9]], JOINT_MULTINOMIAL)
        b = bayes_factor([[8, 2], [3, 9]], JOINT_MULTINOMIAL, prior_concentration=2.0)
        assert a.log_bf != pytest.approx(b.log_bf, rel=1e-6)
        assert b.prior_concentration == 2.0
        assert not a.is_comparable(b)

    def test_concentration_below_one(self):
        with pytest.raises(ValidationError, match="prior_concentration"):
            bayes_factor([[8, 2], [3, 9]], JOINT_MULTINOMIAL, prior_concentration=0.5)


class TestValidation:

    def test_plan_required(self):
        with pytest.raises(ValidationError, match="sampling_plan is required"):
            bayes_factor([[1, 2], [3, 4]])

    def test_unknown_plan(self):
        with pytest.raises(ValidationError, match="sampling_plan"):
            bayes_factor([[1, 2], [3, 4]], "poisson")

    def test_unknown_margin(self):
        with pytest.raises(ValidationError, match="fixed_margin"):
            bayes_factor([[1, 2], [3, 4]], INDEPENDENT_MULTINOMIAL, fixed_margin="diagonal")

    def test_single_row(self):
        with pytest.raises(ShapeError):
            bayes_factor([[1, 2, 3]], JOINT_MULTINOMIAL)

    def test_rejects_odds_ratio_design(self):
        design = ContingencyDesign.for_odds_ratio([[1, 2], [3, 4]])
        with pytest.raises(ValidationError, match="expected .bayes_factor."):
            bayes_factor(design)

    def test_table_input(self):
        rows = ['t', 't', 'c', 'c']
        cols = ['y', 'y', 'n', 'y']
        table = ContingencyTable.from_labels(rows, cols)
        result = bayes_factor(table, JOINT_MULTINOMIAL)
        assert result.backend_name == "cpu_contingency"


class TestOverflow:

    def test_huge_evidence_keeps_finite_log(self):
        result = bayes_factor([[5000, 0], [0, 5000]], INDEPENDENT_MULTINOMIAL)
        assert np.isfinite(result.log_bf)
        assert result.log_bf > 700
        assert result.bf == float('inf')
        assert any("log_bf" in w for w in result.warnings)


class TestDeterminism:

    @pytest.mark.parametrize("plan", [JOINT_MULTINOMIAL, INDEPENDENT_MULTINOMIAL])
    def test_bit_identical(self, plan):
        table = [[12, 5, 7], [4, 15, 2]]
        assert bayes_factor(table, plan).log_bf == bayes_factor(table, plan).log_bf
