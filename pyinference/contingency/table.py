"""
ContingencyTable: cross-classified counts with fixed category order.

Built either from a count matrix or by cross-tabulating two paired
sequences of category labels. Marginals are derived on read, never
stored separately from the counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Sequence
import numpy as np
from numpy.typing import NDArray, ArrayLike

from pyinference.core.exceptions import ValidationError, DimensionMismatchError
from pyinference.core.validation import check_array, check_2d, check_counts, check_consistent_length


@dataclass(frozen=True)
class ContingencyTable:
    """
    Rectangular (row category, column category) -> count mapping.

    Construction:
        ContingencyTable.from_counts([[10, 20], [30, 40]])
        ContingencyTable.from_counts(counts, row_labels=['a', 'b'], col_labels=['x', 'y'])
        ContingencyTable.from_labels(treatment, outcome)
    """
    _counts: NDArray[np.int64]
    _row_labels: tuple[str, ...]
    _col_labels: tuple[str, ...]

    @classmethod
    def from_counts(
        cls,
        counts: ArrayLike,
        row_labels: Sequence[Hashable] | None = None,
        col_labels: Sequence[Hashable] | None = None,
    ) -> ContingencyTable:
        """
        Build a table from a 2D array of non-negative whole-number counts.

        Labels default to "0", "1", ... along each axis.
        """
        arr = check_array(counts, 'table')
        check_2d(arr, 'table')
        check_counts(arr, 'table')
        nrow, ncol = arr.shape

        rows = _labels_or_default(row_labels, nrow, 'row_labels')
        cols = _labels_or_default(col_labels, ncol, 'col_labels')

        table = arr.astype(np.int64)
        table.flags.writeable = False
        return cls(_counts=table, _row_labels=rows, _col_labels=cols)

    @classmethod
    def from_labels(
        cls,
        rows: Sequence[Hashable],
        cols: Sequence[Hashable],
        *,
        row_levels: Sequence[Hashable] | None = None,
        col_levels: Sequence[Hashable] | None = None,
    ) -> ContingencyTable:
        """
        Cross-tabulate paired categorical observations.

        Args:
            rows: Row-variable label for each observation
            cols: Column-variable label for each observation, co-indexed with rows
            row_levels: Category order for rows (default: sorted distinct labels).
                Levels with no observations give an all-zero row.
            col_levels: Category order for columns (default: sorted distinct labels)

        Labels are matched on their original values, so 10 sorts after 2.
        Labels with no common ordering are sorted by their text form. The
        stored labels are text; two distinct labels with the same text
        (1 and "1") are rejected.

        Raises:
            DimensionMismatchError: If rows and cols differ in length
            ValidationError: If a label is missing from the given levels, or
                two distinct labels share a text form
        """
        rows = list(rows)
        cols = list(cols)
        check_consistent_length(rows, cols, names=('rows', 'cols'))

        r_levels = _levels(rows, row_levels, 'row_levels')
        c_levels = _levels(cols, col_levels, 'col_levels')
        r_index = {level: i for i, level in enumerate(r_levels)}
        c_index = {level: j for j, level in enumerate(c_levels)}

        table = np.zeros((len(r_levels), len(c_levels)), dtype=np.int64)
        for r, c in zip(rows, cols):
            table[r_index[r], c_index[c]] += 1

        table.flags.writeable = False
        return cls(
            _counts=table,
            _row_labels=_level_names(r_levels, 'rows'),
            _col_labels=_level_names(c_levels, 'cols'),
        )

    # === Properties ===

    @property
    def counts(self) -> NDArray[np.int64]:
        """Count matrix (r x c), read-only."""
        return self._counts

    @property
    def row_labels(self) -> tuple[str, ...]:
        return self._row_labels

    @property
    def col_labels(self) -> tuple[str, ...]:
        return self._col_labels

    @property
    def shape(self) -> tuple[int, int]:
        nrow, ncol = self._counts.shape
        return nrow, ncol

    @property
    def row_totals(self) -> NDArray[np.int64]:
        return self._counts.sum(axis=1)

    @property
    def col_totals(self) -> NDArray[np.int64]:
        return self._counts.sum(axis=0)

    @property
    def total(self) -> int:
        return int(self._counts.sum())

    def as_float(self) -> NDArray[np.floating[Any]]:
        """Counts as a fresh float64 array."""
        return self._counts.astype(np.float64)

    def transpose(self) -> ContingencyTable:
        """Table with rows and columns swapped."""
        counts = self._counts.T.copy()
        counts.flags.writeable = False
        return ContingencyTable(
            _counts=counts,
            _row_labels=self._col_labels,
            _col_labels=self._row_labels,
        )

    def __repr__(self) -> str:
        return (
            f"ContingencyTable(shape={self.shape}, total={self.total}, "
            f"rows={list(self._row_labels)}, cols={list(self._col_labels)})"
        )


def as_table(x: ArrayLike | ContingencyTable) -> ContingencyTable:
    """Coerce a count matrix to a ContingencyTable (tables pass through)."""
    if isinstance(x, ContingencyTable):
        return x
    return ContingencyTable.from_counts(x)


def _labels_or_default(
    labels: Sequence[Hashable] | None, size: int, name: str,
) -> tuple[str, ...]:
    if labels is None:
        return tuple(str(i) for i in range(size))
    out = tuple(str(v) for v in labels)
    if len(out) != size:
        raise DimensionMismatchError(
            f"{name}: expected {size} labels, got {len(out)}",
            lengths={name: len(out), 'table axis': size},
        )
    if len(set(out)) != len(out):
        raise ValidationError(f"{name}: labels must be distinct")
    return out


def _levels(
    observed: list[Hashable], levels: Sequence[Hashable] | None, name: str,
) -> tuple[Hashable, ...]:
    if levels is None:
        distinct = set(observed)
        try:
            return tuple(sorted(distinct))
        except TypeError:
            # Mixed types with no common ordering
            return tuple(sorted(distinct, key=str))
    out = tuple(levels)
    if len(set(out)) != len(out):
        raise ValidationError(f"{name}: levels must be distinct")
    unknown = sorted(set(observed) - set(out), key=str)
    if unknown:
        raise ValidationError(f"{name}: labels {unknown} not among levels {list(out)}")
    return out


def _level_names(levels: tuple[Hashable, ...], name: str) -> tuple[str, ...]:
    out = tuple(str(v) for v in levels)
    if len(set(out)) != len(out):
        raise ValidationError(
            f"{name}: distinct labels {list(levels)} do not have distinct text forms"
        )
    return out
