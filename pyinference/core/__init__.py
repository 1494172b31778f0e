"""
Core infrastructure for pyinference.

Shared abstractions and utilities used by the domain subpackages
(regression, contingency).

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, distributions, linear algebra kernels
"""

from pyinference.core.protocols import Backend
from pyinference.core.result import Result
from pyinference.core.exceptions import (
    PyInferenceError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    ShapeError,
    InsufficientDataError,
    NotNestedError,
    NumericalError,
    SingularMatrixError,
    SingularDesignError,
    DegenerateMarginError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyInferenceError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "ShapeError",
    "InsufficientDataError",
    "NotNestedError",
    "NumericalError",
    "SingularMatrixError",
    "SingularDesignError",
    "DegenerateMarginError",
]
