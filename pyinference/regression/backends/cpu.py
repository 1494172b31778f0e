"""
CPU reference backend for linear regression.

Uses QR decomposition via LAPACK (through NumPy/SciPy) to solve the
least squares problem, then derives every inferential quantity from
the residuals and the unscaled covariance R⁻¹R⁻ᵀ.
"""

from typing import Any
import numpy as np

from pyinference.core.result import Result
from pyinference.core.compute.timing import Timer
from pyinference.core.compute.tolerances import select_tolerance
from pyinference.core.compute.linalg.qr import qr_solve_cpu
from pyinference.regression.design import RegressionDesign
from pyinference.regression.solution import LinearParams

# cond(X) above which double precision coefficients lose ~4 digits
ILL_CONDITIONED_THRESHOLD = 1e4


class CPUQRBackend:
    """
    CPU backend using QR decomposition.

    Implements the Backend protocol for RegressionDesign -> LinearParams.
    """

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: RegressionDesign) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Compute QR decomposition: X = QR, rank-check R
            2. Solve: β = R⁻¹ Q'y, (X'X)⁻¹ = R⁻¹R⁻ᵀ
            3. Residuals, sums of squares, df = n - p
            4. SE_j = sqrt(MSE * [(X'X)⁻¹]_jj), t_j = β_j / SE_j

        Raises:
            SingularDesignError: If X is rank-deficient
        """
        timer = Timer()
        timer.start()

        X = design.X
        y = design.y
        n, p = design.n, design.p
        warnings_list: list[str] = []

        # === QR Decomposition and Solve ===
        with timer.section('qr_solve'):
            ls = qr_solve_cpu(X, y)
            coefficients = ls.coefficients

        # === Residuals and Sums of Squares ===
        with timer.section('residuals'):
            fitted_values = X @ coefficients
            residuals = y - fitted_values
            rss = float(residuals @ residuals)
            y_mean = np.mean(y)
            tss = float(np.sum((y - y_mean) ** 2))

        # === Coefficient Inference ===
        with timer.section('inference'):
            df_residual = n - p
            mse = rss / df_residual
            standard_errors = np.sqrt(mse * np.diag(ls.unscaled_covariance))
            t_statistics = _t_statistics(coefficients, standard_errors)

        ill_conditioned = ls.condition_number > ILL_CONDITIONED_THRESHOLD
        tier = select_tolerance(ill_conditioned)
        if ill_conditioned:
            warnings_list.append(
                f"Design matrix is ill-conditioned (condition number ~{ls.condition_number:.3g}); "
                f"expect agreement only to {tier.rtol:g} relative tolerance"
            )

        timer.stop()

        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=rss,
            tss=tss,
            rank=ls.rank,
            df_residual=df_residual,
            unscaled_covariance=ls.unscaled_covariance,
            standard_errors=standard_errors,
            t_statistics=t_statistics,
        )

        info: dict[str, Any] = {
            'method': 'qr',
            'rank': ls.rank,
            'condition_number': ls.condition_number,
            'tolerance_tier': tier.name,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _t_statistics(coefficients: np.ndarray, standard_errors: np.ndarray) -> np.ndarray:
    """
    β / SE, with an exact fit (SE = 0) mapped to ±inf or 0 instead of NaN.
    """
    t = np.zeros_like(coefficients)
    positive = standard_errors > 0
    t[positive] = coefficients[positive] / standard_errors[positive]
    exact = ~positive & (coefficients != 0)
    t[exact] = np.copysign(np.inf, coefficients[exact])
    return t
