"""
Closed-form Bayes factors for contingency tables (Gunel & Dickey, 1974).

Cell probabilities are integrated out analytically against symmetric
Dirichlet priors, so each marginal likelihood is a ratio of multivariate
Beta functions

    lmB(v) = sum(lgamma(v_i)) - lgamma(sum(v_i))

and the multinomial coefficients cancel between the two hypotheses.
With concentration a on every cell of an I x J table:

joint-multinomial (only the grand total fixed):
    log K = [lmB(y + a) - lmB(a)]
          - [lmB(y_i. + a_r) - lmB(a_r)] - [lmB(y_.j + a_c) - lmB(a_c)]
    a_r = J*a - (J - 1),  a_c = I*a - (I - 1)

independent-multinomial-fixed-margin (row totals fixed):
    log K = sum_i [lmB(y_i + a) - lmB(a)] - [lmB(y_.j + a_c) - lmB(a_c)]

Column-fixed designs transpose the table first. K > 1 favours association.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
import numpy as np
from scipy.special import gammaln

from pyinference.contingency._common import (
    BayesFactorParams,
    JOINT_MULTINOMIAL,
    INDEPENDENT_MULTINOMIAL,
)

if TYPE_CHECKING:
    from pyinference.contingency.design import ContingencyDesign


def log_multivariate_beta(v: np.ndarray) -> float:
    """log B(v) = sum(lgamma(v)) - lgamma(sum(v))."""
    v = np.asarray(v, dtype=np.float64).ravel()
    return float(np.sum(gammaln(v)) - gammaln(np.sum(v)))


def _log_dirichlet_evidence(counts: np.ndarray, alpha: np.ndarray) -> float:
    """log of the Dirichlet-multinomial marginal likelihood kernel."""
    return log_multivariate_beta(counts + alpha) - log_multivariate_beta(alpha)


def log_bf_joint_multinomial(y: np.ndarray, a: float) -> float:
    """log K for a table sampled with only the grand total fixed."""
    nrow, ncol = y.shape
    cell_prior = np.full(y.shape, a)
    row_prior = np.full(nrow, ncol * a - (ncol - 1))
    col_prior = np.full(ncol, nrow * a - (nrow - 1))

    log_h1 = _log_dirichlet_evidence(y, cell_prior)
    log_h0 = (
        _log_dirichlet_evidence(y.sum(axis=1), row_prior)
        + _log_dirichlet_evidence(y.sum(axis=0), col_prior)
    )
    return log_h1 - log_h0


def log_bf_independent_multinomial(y: np.ndarray, a: float) -> float:
    """log K for a table whose row totals were fixed by design."""
    nrow, ncol = y.shape
    row_cell_prior = np.full(ncol, a)
    col_prior = np.full(ncol, nrow * a - (nrow - 1))

    log_h1 = sum(_log_dirichlet_evidence(y[i], row_cell_prior) for i in range(nrow))
    log_h0 = _log_dirichlet_evidence(y.sum(axis=0), col_prior)
    return log_h1 - log_h0


def bayes_factor(design: ContingencyDesign) -> tuple[BayesFactorParams, list[str]]:
    """Bayes factor for association against independence."""
    table = design.table
    plan = design.sampling_plan
    a = design.prior_concentration
    warnings_list: list[str] = []

    if plan == JOINT_MULTINOMIAL:
        log_bf = log_bf_joint_multinomial(table.as_float(), a)
    elif plan == INDEPENDENT_MULTINOMIAL:
        fixed = table if design.fixed_margin == "rows" else table.transpose()
        log_bf = log_bf_independent_multinomial(fixed.as_float(), a)
    else:
        raise ValueError(f"Unknown sampling plan: {plan!r}")

    with np.errstate(over='ignore', under='ignore'):
        bf = float(np.exp(log_bf))
    if not np.isfinite(bf) or bf == 0.0:
        warnings_list.append(
            f"Bayes factor over/underflows double precision (log BF = {log_bf:.6g}); "
            f"use log_bf"
        )

    return BayesFactorParams(
        bf=bf,
        log_bf=log_bf,
        sampling_plan=plan,
        fixed_margin=design.fixed_margin,
        prior_concentration=a,
    ), warnings_list
