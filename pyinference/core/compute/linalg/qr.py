"""
QR decomposition and least squares.

Householder QR via LAPACK (through NumPy) with SciPy back-substitution.
Used by regression and by any domain needing a least squares solution
together with the unscaled covariance (X'X)^-1 for standard errors.
"""

from dataclasses import dataclass
from typing import Literal, Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from pyinference.core.exceptions import SingularDesignError
from pyinference.core.compute.tolerances import QR_RANK_TOL_FACTOR


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (n x k where k = min(n, p) for reduced mode)
        R: Upper triangular matrix (k x p)
        rank: Numerical rank determined from R diagonal
        condition_number: max|R_ii| / min|R_ii|, an estimate of cond(X)
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int
    condition_number: float


@dataclass(frozen=True)
class LeastSquaresResult:
    """
    Least squares solution from a full-rank QR.

    Attributes:
        coefficients: Solution vector β (p,)
        unscaled_covariance: (X'X)^-1 = R^-1 R^-T (p x p)
        rank: Numerical rank (always p here)
        condition_number: Estimated condition number of X
    """
    coefficients: NDArray[np.floating[Any]]
    unscaled_covariance: NDArray[np.floating[Any]]
    rank: int
    condition_number: float


def qr_cpu(
    X: NDArray[np.floating[Any]],
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK (via NumPy).

    Computes X = QR where Q is orthogonal and R is upper triangular.

    Args:
        X: Matrix to decompose (n x p)
        mode: 'reduced' for economy QR (Q is n x k, R is k x p where k = min(n,p))
              'complete' for full QR (Q is n x n, R is n x p)

    Returns:
        QRResult with Q, R, numerical rank and condition estimate
    """
    Q, R = np.linalg.qr(X, mode=mode)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        tol = QR_RANK_TOL_FACTOR * max(X.shape) * np.finfo(X.dtype).eps * diag_R.max()
        rank = int(np.sum(diag_R > tol))
        smallest = diag_R.min()
        condition_number = float(diag_R.max() / smallest) if smallest > 0 else float('inf')
    else:
        rank = 0
        condition_number = float('inf')

    return QRResult(Q=Q, R=R, rank=rank, condition_number=condition_number)


def qr_solve_cpu(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
) -> LeastSquaresResult:
    """
    Solve least squares via QR decomposition.

    Solves: min_β ||y - Xβ||² via QR decomposition of X.

    The solution is computed as:
        X = QR
        β = R⁻¹ Q'y
        (X'X)⁻¹ = R⁻¹ R⁻ᵀ

    Forming X'X explicitly squares the condition number, so neither the
    solve nor the covariance goes through it.

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)

    Returns:
        LeastSquaresResult with β, (X'X)⁻¹, rank and condition estimate

    Raises:
        SingularDesignError: If X is numerically rank-deficient
    """
    n, p = X.shape
    qr_result = qr_cpu(X, mode='reduced')

    if qr_result.rank < p:
        raise SingularDesignError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            condition_number=qr_result.condition_number,
            rank=qr_result.rank,
            expected_rank=p,
        )

    R = qr_result.R[:p, :p]

    # Solve R @ beta = Q'y by back substitution
    Qty = qr_result.Q.T @ y
    beta = solve_triangular(R, Qty[:p], lower=False)

    R_inv = solve_triangular(R, np.eye(p), lower=False)
    unscaled_covariance = R_inv @ R_inv.T

    return LeastSquaresResult(
        coefficients=beta,
        unscaled_covariance=unscaled_covariance,
        rank=qr_result.rank,
        condition_number=qr_result.condition_number,
    )
