"""
Distribution functions for test statistics.

Thin, stateless wrappers over scipy.stats for the three sampling
distributions the engine needs: Student t, chi-squared and F. Upper
tails are evaluated with the survival function directly rather than
as 1 - cdf, which keeps p-values accurate far into the tail.
"""

from scipy import stats as sp_stats

from pyinference.core.exceptions import ValidationError


VALID_ALTERNATIVES = ("two.sided", "less", "greater")


def _check_df(df: float, name: str = "df") -> None:
    if not df > 0:
        raise ValidationError(f"{name} must be positive, got {df}")


def _check_probability(q: float) -> None:
    if not (0.0 < q < 1.0):
        raise ValidationError(f"probability must be in (0, 1), got {q}")


# === Student t ===

def t_cdf(x: float, df: float) -> float:
    """P(T <= x) for T ~ t(df)."""
    _check_df(df)
    return float(sp_stats.t.cdf(x, df))


def t_sf(x: float, df: float) -> float:
    """P(T > x) for T ~ t(df)."""
    _check_df(df)
    return float(sp_stats.t.sf(x, df))


def t_ppf(q: float, df: float) -> float:
    """Quantile of t(df) at probability q."""
    _check_df(df)
    _check_probability(q)
    return float(sp_stats.t.ppf(q, df))


def t_test_p_value(t: float, df: float, alternative: str = "two.sided") -> float:
    """
    p-value of a t statistic.

    Args:
        t: Observed statistic
        df: Degrees of freedom
        alternative: "two.sided" (2 * P(T > |t|)), "less" (P(T <= t))
            or "greater" (P(T > t))
    """
    if alternative == "two.sided":
        return min(1.0, 2.0 * t_sf(abs(t), df))
    if alternative == "less":
        return t_cdf(t, df)
    if alternative == "greater":
        return t_sf(t, df)
    raise ValidationError(
        f"alternative must be one of {VALID_ALTERNATIVES}, got {alternative!r}"
    )


# === Chi-squared ===

def chi2_cdf(x: float, df: float) -> float:
    """P(X <= x) for X ~ chi-squared(df)."""
    _check_df(df)
    return float(sp_stats.chi2.cdf(x, df))


def chi2_sf(x: float, df: float) -> float:
    """P(X > x) for X ~ chi-squared(df)."""
    _check_df(df)
    return float(sp_stats.chi2.sf(x, df))


def chi2_ppf(q: float, df: float) -> float:
    """Quantile of chi-squared(df) at probability q."""
    _check_df(df)
    _check_probability(q)
    return float(sp_stats.chi2.ppf(q, df))


# === F ===

def f_cdf(x: float, df1: float, df2: float) -> float:
    """P(F <= x) for F ~ F(df1, df2)."""
    _check_df(df1, "df1")
    _check_df(df2, "df2")
    return float(sp_stats.f.cdf(x, df1, df2))


def f_sf(x: float, df1: float, df2: float) -> float:
    """P(F > x) for F ~ F(df1, df2)."""
    _check_df(df1, "df1")
    _check_df(df2, "df2")
    return float(sp_stats.f.sf(x, df1, df2))


def f_ppf(q: float, df1: float, df2: float) -> float:
    """Quantile of F(df1, df2) at probability q."""
    _check_df(df1, "df1")
    _check_df(df2, "df2")
    _check_probability(q)
    return float(sp_stats.f.ppf(q, df1, df2))
