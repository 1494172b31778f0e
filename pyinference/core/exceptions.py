"""
Exception hierarchy for pyinference.

All exceptions inherit from PyInferenceError to allow catching any
library-specific error. Domain-specific exceptions inherit from the
appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
    - Every error is fatal to the analysis that raised it, never to the process
"""


class PyInferenceError(Exception):
    """Base exception for all pyinference errors."""
    pass


class ValidationError(PyInferenceError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DimensionMismatchError(DimensionError):
    """
    Two co-indexed inputs have different lengths.

    Raised e.g. when goodness-of-fit counts and expected proportions
    differ in length, or paired label sequences differ in length.

    Attributes:
        lengths: Mapping of input name -> observed length
    """

    def __init__(self, message: str, lengths: dict[str, int] | None = None):
        super().__init__(message)
        self.lengths = lengths


class ShapeError(DimensionError):
    """
    Table has the wrong shape for the requested operation.

    Attributes:
        shape: Observed shape
        expected_shape: Required shape, if the operation fixes one
    """

    def __init__(
        self,
        message: str,
        shape: tuple[int, ...] | None = None,
        expected_shape: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.shape = shape
        self.expected_shape = expected_shape


class InsufficientDataError(ValidationError):
    """
    Too few observations for the number of parameters.

    Attributes:
        n: Number of observations
        p: Number of parameters to estimate
    """

    def __init__(self, message: str, n: int | None = None, p: int | None = None):
        super().__init__(message)
        self.n = n
        self.p = p


class NotNestedError(ValidationError):
    """
    Two models cannot be compared with a nested-model F-test.

    Raised when the reduced model's predictors are not a strict subset
    of the full model's predictors, or the models were fitted to
    different responses.
    """
    pass


class NumericalError(PyInferenceError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when a matrix operation requires invertibility but the matrix
    is singular or numerically rank-deficient.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically min(n, p))
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class SingularDesignError(SingularMatrixError):
    """
    Regression design matrix is rank-deficient.

    Covers perfect multicollinearity among predictors and constant
    predictor columns that duplicate the intercept.

    Attributes:
        columns: Indices of the offending columns, if identified
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = 'X',
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        columns: list[int] | None = None,
    ):
        super().__init__(
            message,
            matrix_name=matrix_name,
            condition_number=condition_number,
            rank=rank,
            expected_rank=expected_rank,
        )
        self.columns = columns


class DegenerateMarginError(NumericalError):
    """
    Contingency table has an empty row or column.

    The expected count of every cell in that row/column is zero, so the
    chi-squared statistic is undefined.

    Attributes:
        axis: 'row' or 'column'
        indices: Indices of the zero marginals along that axis
    """

    def __init__(
        self,
        message: str,
        axis: str | None = None,
        indices: list[int] | None = None,
    ):
        super().__init__(message)
        self.axis = axis
        self.indices = indices
