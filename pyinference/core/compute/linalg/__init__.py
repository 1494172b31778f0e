"""
Linear algebra kernels for pyinference.

All functions follow these conventions:
    - Use NumPy/SciPy (LAPACK under the hood)
    - Each operation returns a structured result dataclass
    - Errors are raised immediately with clear messages

Submodules:
    qr: QR decomposition and least squares
"""

from pyinference.core.compute.linalg.qr import (
    QRResult,
    LeastSquaresResult,
    qr_cpu,
    qr_solve_cpu,
)

__all__ = [
    "QRResult",
    "LeastSquaresResult",
    "qr_cpu",
    "qr_solve_cpu",
]
