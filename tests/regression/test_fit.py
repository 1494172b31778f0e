"""
Tests for OLS fit().

Hand-computed reference: x = 1..5, y = [2, 4, 5, 4, 5]
    b0 = 2.2, b1 = 0.6
    SSE = 2.4, SST = 6, R^2 = 0.6, MSE = 0.8
    SE(b1) = sqrt(0.8 / 10), SE(b0) = sqrt(0.8 * 1.1)
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats as sp_stats

from pyinference.core.exceptions import (
    DimensionMismatchError,
    InsufficientDataError,
    SingularDesignError,
    ValidationError,
)
from pyinference.core.compute.tolerances import (
    CPU_FP64,
    CPU_FP64_ILL_CONDITIONED,
    ToleranceTier,
)
from pyinference.regression import (
    LinearSolution,
    RegressionDesign,
    add_intercept,
    fit,
    treatment_code,
)


def _tier(result: LinearSolution) -> ToleranceTier:
    """Comparison tolerance the backend reported for this fit."""
    tiers = {t.name: t for t in (CPU_FP64, CPU_FP64_ILL_CONDITIONED)}
    return tiers[result.info['tolerance_tier']]


class TestTextbookLine:
    """Single predictor with an exactly known answer."""

    def test_coefficients(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert_allclose(result.coefficients, [2.2, 0.6], rtol=1e-12)

    def test_sums_of_squares(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert result.rss == pytest.approx(2.4, rel=1e-12)
        assert result.tss == pytest.approx(6.0, rel=1e-12)
        assert result.ess == pytest.approx(3.6, rel=1e-12)
        assert result.mse == pytest.approx(0.8, rel=1e-12)
        assert result.df_residual == 3

    def test_r_squared(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert result.r_squared == pytest.approx(0.6, rel=1e-12)
        assert result.adjusted_r_squared == pytest.approx(1 - 0.4 * 4 / 3, rel=1e-12)

    def test_standard_errors(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert_allclose(result.standard_errors, [np.sqrt(0.88), np.sqrt(0.08)], rtol=1e-12)

    def test_t_and_p(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        t_slope = 0.6 / np.sqrt(0.08)
        assert result.t_statistics[1] == pytest.approx(t_slope, rel=1e-12)
        assert result.p_values[1] == pytest.approx(
            2 * sp_stats.t.sf(t_slope, 3), rel=1e-10
        )

    def test_fitted_and_residuals(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert_allclose(result.fitted_values, [2.8, 3.4, 4.0, 4.6, 5.2], rtol=1e-12)
        assert_allclose(result.residuals, [-0.8, 0.6, 1.0, -0.6, -0.2], atol=1e-12)

    def test_overall_f_is_slope_t_squared(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert result.f_statistic == pytest.approx(4.5, rel=1e-12)
        assert result.f_p_value == pytest.approx(result.p_values[1], rel=1e-10)

    def test_r_squared_equals_squared_correlation(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        r = np.corrcoef(x, y)[0, 1]
        assert result.r_squared == pytest.approx(r ** 2, rel=1e-12)


class TestMultiplePredictors:

    def test_recovers_coefficients(self, simple_regression_data):
        X, y, beta_true = simple_regression_data
        result = fit(X, y)
        assert_allclose(result.coefficients, beta_true, atol=0.05)

    def test_matches_lstsq(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        assert_allclose(result.coefficients, expected, rtol=_tier(result).rtol)

    def test_residuals_orthogonal_to_columns(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert_allclose(X.T @ result.residuals, np.zeros(X.shape[1]), atol=1e-10)
        assert abs(result.residuals.sum()) < 1e-10

    def test_sum_of_squares_decomposition(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        fitted_ss = np.sum((result.fitted_values - y.mean()) ** 2)
        assert result.tss == pytest.approx(fitted_ss + result.rss, rel=1e-10)

    def test_standard_errors_from_gram(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        expected = np.sqrt(result.mse * np.diag(np.linalg.inv(X.T @ X)))
        tier = _tier(result)
        assert tier is CPU_FP64
        assert_allclose(result.standard_errors, expected, rtol=tier.rtol, atol=tier.atol)
        assert_allclose(result.vcov, result.mse * np.linalg.inv(X.T @ X), rtol=tier.rtol, atol=tier.atol)

    def test_df(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert result.df_residual == 96
        assert result.rank == 4

    def test_strong_predictors_significant(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        assert np.all(result.p_values[1:] < 1e-10)


class TestPValues:

    def test_one_sided_halves_two_sided(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        greater = result.coefficient_p_values("greater")
        assert_allclose(greater * 2, result.p_values, rtol=1e-10)

    def test_less_and_greater_complement(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        total = result.coefficient_p_values("less") + result.coefficient_p_values("greater")
        assert_allclose(total, [1.0, 1.0], rtol=1e-12)

    def test_bad_alternative(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        with pytest.raises(ValidationError):
            result.coefficient_p_values("sideways")

    def test_p_values_in_unit_interval(self, simple_regression_data):
        X, y, _ = simple_regression_data
        p = fit(X, y).p_values
        assert np.all((p >= 0) & (p <= 1))


class TestConfidenceIntervals:

    def test_shape_and_centre(self, simple_regression_data):
        X, y, _ = simple_regression_data
        result = fit(X, y)
        ci = result.conf_int()
        assert ci.shape == (4, 2)
        assert_allclose(ci.mean(axis=1), result.coefficients, rtol=1e-12)

    def test_textbook_slope_interval(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        q = sp_stats.t.ppf(0.975, 3)
        lo, hi = result.conf_int(0.95)[1]
        assert lo == pytest.approx(0.6 - q * np.sqrt(0.08), rel=1e-10)
        assert hi == pytest.approx(0.6 + q * np.sqrt(0.08), rel=1e-10)

    def test_wider_at_higher_level(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        w90 = np.diff(result.conf_int(0.90), axis=1)
        w99 = np.diff(result.conf_int(0.99), axis=1)
        assert np.all(w99 > w90)

    def test_invalid_level(self, textbook_line):
        x, y = textbook_line
        with pytest.raises(ValidationError):
            fit(add_intercept(x), y).conf_int(1.0)


class TestDummyCodedPredictor:

    def test_overall_f_matches_one_way_anova(self):
        groups = ['a'] * 4 + ['b'] * 4 + ['c'] * 4
        y = np.array([4.1, 5.0, 4.6, 5.3, 6.2, 6.8, 5.9, 7.1, 5.0, 5.5, 4.9, 6.0])
        D, levels = treatment_code(groups)
        result = fit(add_intercept(D), y, names=['(Intercept)'] + levels)

        expected = sp_stats.f_oneway(y[:4], y[4:8], y[8:])
        assert result.f_statistic == pytest.approx(expected.statistic, rel=1e-10)
        assert result.f_p_value == pytest.approx(expected.pvalue, rel=1e-8)

    def test_coefficients_are_group_mean_differences(self):
        groups = ['a', 'a', 'b', 'b', 'c', 'c']
        y = np.array([1.0, 3.0, 4.0, 6.0, 0.0, 2.0])
        D, _ = treatment_code(groups)
        result = fit(add_intercept(D), y)
        assert_allclose(result.coefficients, [2.0, 3.0, -1.0], atol=1e-12)


class TestValidation:

    def test_insufficient_data(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            fit(add_intercept([1.0, 2.0]), [1.0, 2.0])
        assert exc_info.value.n == 2
        assert exc_info.value.p == 2

    def test_collinear(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularDesignError):
            fit(X, y)

    def test_duplicate_constant_column(self, textbook_line):
        x, y = textbook_line
        X = np.column_stack([np.ones(5), np.full(5, 2.0), x])
        with pytest.raises(SingularDesignError):
            fit(X, y)

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatchError):
            fit(add_intercept([1.0, 2.0, 3.0, 4.0]), [1.0, 2.0, 3.0])

    def test_nan(self, textbook_line):
        x, y = textbook_line
        y = y.copy()
        y[2] = np.nan
        with pytest.raises(ValidationError, match="non-finite"):
            fit(add_intercept(x), y)

    def test_y_required(self, textbook_line):
        x, _ = textbook_line
        with pytest.raises(ValidationError):
            fit(add_intercept(x))

    def test_names_length(self, textbook_line):
        x, y = textbook_line
        with pytest.raises(DimensionMismatchError):
            fit(add_intercept(x), y, names=['only_one'])

    def test_unknown_backend(self, textbook_line):
        x, y = textbook_line
        with pytest.raises(ValidationError, match="Unknown backend"):
            fit(add_intercept(x), y, backend='gpu')


class TestSolutionObject:

    def test_design_passthrough(self, textbook_line):
        x, y = textbook_line
        design = RegressionDesign.from_arrays(add_intercept(x), y)
        result = fit(design)
        assert isinstance(result, LinearSolution)
        assert result.design is design

    def test_default_names(self, simple_regression_data):
        X, y, _ = simple_regression_data
        assert fit(X, y).names == ('x0', 'x1', 'x2', 'x3')

    def test_caller_mutation_does_not_leak(self, textbook_line):
        x, y = textbook_line
        X = add_intercept(x)
        result = fit(X, y)
        X[0, 1] = 100.0
        y[0] = 100.0
        assert result.design.X[0, 1] == 1.0
        assert result.design.y[0] == 2.0
        assert not result.design.X.flags.writeable

    def test_backend_and_info(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y)
        assert result.backend_name == 'cpu_qr'
        assert result.info['method'] == 'qr'
        assert result.info['tolerance_tier'] == 'cpu_fp64'
        assert result.warnings == ()
        assert 'total_seconds' in result.timing

    def test_ill_conditioned_warning(self, rng):
        x = rng.standard_normal(50)
        X = add_intercept(np.column_stack([x, x + 1e-6 * rng.standard_normal(50)]))
        y = x + rng.standard_normal(50)
        result = fit(X, y)
        assert any("ill-conditioned" in w for w in result.warnings)
        assert result.info['tolerance_tier'] == 'cpu_fp64_ill_conditioned'

        tier = _tier(result)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        assert_allclose(result.fitted_values, X @ expected, rtol=tier.rtol, atol=tier.atol)

    def test_constant_column_of_any_value_is_intercept(self, textbook_line):
        x, y = textbook_line
        X = np.column_stack([np.full(5, 2.0), x])
        result = fit(X, y)
        assert result.design.has_intercept
        assert result.coefficients[0] == pytest.approx(1.1, rel=1e-12)
        assert result.f_statistic == pytest.approx(4.5, rel=1e-12)
        assert result.adjusted_r_squared == pytest.approx(1 - 0.4 * 4 / 3, rel=1e-12)

    def test_no_intercept_has_no_overall_f(self, textbook_line):
        x, y = textbook_line
        result = fit(x.reshape(-1, 1), y)
        assert result.f_statistic is None
        assert result.f_p_value is None

    def test_summary(self, textbook_line):
        x, y = textbook_line
        result = fit(add_intercept(x), y, names=['(Intercept)', 'x'])
        s = result.summary()
        assert "(Intercept)" in s
        assert "R-squared: 0.600000" in s
        assert "on 3 DF" in s
        assert "F-statistic" in s

    def test_repr(self, textbook_line):
        x, y = textbook_line
        assert "r_squared=0.6000" in repr(fit(add_intercept(x), y))


class TestDeterminism:

    def test_bit_identical_repeats(self, simple_regression_data):
        X, y, _ = simple_regression_data
        a = fit(X, y)
        b = fit(X, y)
        assert np.array_equal(a.coefficients, b.coefficients)
        assert np.array_equal(a.standard_errors, b.standard_errors)
        assert np.array_equal(a.p_values, b.p_values)
        assert a.rss == b.rss
