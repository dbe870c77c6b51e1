"""
Structural Transforms for Matrices.

This module provides shape-changing and rearranging operations. Every
transform returns a fresh Matrix; inputs are never modified.

Implemented Transforms:
    - diagonal: Cells (i, i) of every column as a 1 x columns row matrix
    - identity: n x n identity matrix
    - transpose: Swap rows and columns
    - flip_lr / flip_ud: Mirror columns / rows
    - drop_row / drop_column: Remove one row / column
    - concat: Join matrices along rows or columns

Transpose and the flips start from a default-filled result and write only
the cells visited by a sparse fold over the source: everything at or beyond
the source's sparse extent is default on both sides.
"""

from __future__ import annotations

import logging
import operator
from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from .._config import MISSING, resolve_default
from .._store import PackedStore
from .._traversal import iter_cells
from ..error import InvalidDimension, PositionOutOfBounds, ShapeMismatch

if TYPE_CHECKING:
    from .._matrix import Matrix

logger = logging.getLogger("packmat.transforms")

__all__ = [
    "diagonal",
    "identity",
    "transpose",
    "flip_lr",
    "flip_ud",
    "drop_row",
    "drop_column",
    "concat",
    "AXIS_ROWS",
    "AXIS_COLUMNS",
]

AXIS_ROWS = "rows"
AXIS_COLUMNS = "columns"

_AXIS_ALIASES = {
    AXIS_ROWS: AXIS_ROWS,
    0: AXIS_ROWS,
    AXIS_COLUMNS: AXIS_COLUMNS,
    1: AXIS_COLUMNS,
}


def _matrix_cls():
    from .._matrix import Matrix
    return Matrix


def _index_below(value: Any, upper: int) -> Optional[int]:
    """``value`` as a Python int if it is integer-like and in ``[0, upper)``."""
    try:
        index = operator.index(value)
    except TypeError:
        return None
    return index if 0 <= index < upper else None


# =============================================================================
# Diagonal / Identity
# =============================================================================

def diagonal(mat: "Matrix") -> "Matrix":
    """Cells ``(i, i)`` for every column ``i``, as a 1 x columns row matrix.

    Square matrices give the main diagonal. A tall matrix (more rows than
    columns) gives the diagonal of its top square block.

    Raises:
        PositionOutOfBounds: If the matrix has more columns than rows, so
            ``(i, i)`` does not exist for the last columns.

    Example:
        >>> diagonal(identity(3)).to_list()
        [1, 1, 1]
        >>> diagonal(Matrix.from_nested([[1, 2], [3, 4], [5, 6]])).to_list()
        [1, 4]
    """
    if mat.columns > mat.rows:
        raise PositionOutOfBounds(
            f"diagonal reads (i, i) for every column; shape {mat.shape} has "
            f"more columns than rows"
        )
    values = [mat.get((i, i)) for i in range(mat.columns)]
    return _matrix_cls().from_flat(values, 1, mat.columns, mat.default)


def identity(n: int, default: Any = MISSING) -> "Matrix":
    """n x n matrix with 1 on the diagonal and ``default`` elsewhere."""
    try:
        size = operator.index(n)
    except TypeError:
        size = 0
    if size < 1:
        raise InvalidDimension(f"identity size must be a positive integer, got {n!r}")
    n = size
    default = resolve_default(default)
    builder = PackedStore.builder(n * n, default)
    for i in range(n):
        builder.set(i * n + i, 1)
    logger.debug("identity %dx%d default=%r", n, n, default)
    return _matrix_cls()(builder.freeze(), n, n)


# =============================================================================
# Rearrangements
# =============================================================================

def _rearrange(mat: "Matrix", rows: int, columns: int, target) -> "Matrix":
    """Sparse-fold the source into a default-filled rows x columns result.

    ``target(row, col)`` maps a source position to a result index.
    """
    builder = PackedStore.builder(rows * columns, mat.default)
    src_cols = mat.columns
    for i, value in iter_cells(mat, sparse=True):
        row, col = divmod(i, src_cols)
        builder.set(target(row, col), value)
    return _matrix_cls()(builder.freeze(), rows, columns)


def transpose(mat: "Matrix") -> "Matrix":
    """Swap rows and columns: (r, c) -> (c, r)."""
    rows = mat.rows
    logger.debug("transpose %s", mat.shape)
    return _rearrange(mat, mat.columns, mat.rows, lambda r, c: c * rows + r)


def flip_lr(mat: "Matrix") -> "Matrix":
    """Mirror columns: (r, c) -> (r, columns - 1 - c)."""
    cols = mat.columns
    logger.debug("flip_lr %s", mat.shape)
    return _rearrange(mat, mat.rows, cols, lambda r, c: r * cols + (cols - 1 - c))


def flip_ud(mat: "Matrix") -> "Matrix":
    """Mirror rows: (r, c) -> (rows - 1 - r, c)."""
    rows, cols = mat.shape
    logger.debug("flip_ud %s", mat.shape)
    return _rearrange(mat, rows, cols, lambda r, c: (rows - 1 - r) * cols + c)


# =============================================================================
# Row / Column Removal
# =============================================================================

def drop_row(mat: "Matrix", row_index: int) -> "Matrix":
    """Remove row ``row_index``.

    Raises:
        InvalidDimension: If the matrix has a single row or the index is
            out of range.
    """
    if mat.rows == 1:
        raise InvalidDimension("Cannot drop the only row of a matrix")
    row = _index_below(row_index, mat.rows)
    if row is None:
        raise InvalidDimension(f"Row {row_index} out of range [0, {mat.rows})")

    start = row * mat.columns
    stop = start + mat.columns
    kept = [value for i, value in iter_cells(mat, sparse=True) if not start <= i < stop]
    logger.debug("drop_row %d from %s", row, mat.shape)
    store = PackedStore.resize_from(kept, (mat.rows - 1) * mat.columns, mat.default)
    return _matrix_cls()(store, mat.rows - 1, mat.columns)


def drop_column(mat: "Matrix", col_index: int) -> "Matrix":
    """Remove column ``col_index``.

    Raises:
        InvalidDimension: If the matrix has a single column or the index is
            out of range.
    """
    if mat.columns == 1:
        raise InvalidDimension("Cannot drop the only column of a matrix")
    col = _index_below(col_index, mat.columns)
    if col is None:
        raise InvalidDimension(f"Column {col_index} out of range [0, {mat.columns})")

    cols = mat.columns
    kept = [value for i, value in iter_cells(mat, sparse=True) if i % cols != col]
    logger.debug("drop_column %d from %s", col, mat.shape)
    store = PackedStore.resize_from(kept, mat.rows * (cols - 1), mat.default)
    return _matrix_cls()(store, mat.rows, cols - 1)


# =============================================================================
# Concatenation
# =============================================================================

def _normalize_axis(axis: Union[str, int]) -> str:
    try:
        return _AXIS_ALIASES[axis]
    except (KeyError, TypeError):
        raise ValueError(f"axis must be 'rows'/0 or 'columns'/1, got {axis!r}") from None


def concat(
    matrices: Sequence["Matrix"],
    axis: Union[str, int] = AXIS_ROWS,
    default: Any = MISSING,
) -> "Matrix":
    """Join matrices along an axis.

    Args:
        matrices: Non-empty sequence of matrices, joined in order.
        axis: ``"rows"`` (or 0) stacks vertically and requires equal column
            counts; ``"columns"`` (or 1) stacks horizontally and requires
            equal row counts.
        default: Default of the result (first matrix's default if omitted).

    Returns:
        New Matrix.

    Raises:
        ShapeMismatch: If ``matrices`` is empty or the shapes disagree.

    Example:
        >>> a = Matrix.from_nested([[1, 2]])
        >>> b = Matrix.from_nested([[3, 4], [5, 6]])
        >>> concat([a, b], axis="rows").to_nested()
        [[1, 2], [3, 4], [5, 6]]
    """
    axis = _normalize_axis(axis)
    matrices = list(matrices)
    if not matrices:
        raise ShapeMismatch("concat requires at least one matrix")
    if default is MISSING:
        default = matrices[0].default

    total = sum(m.size() for m in matrices)

    if axis == AXIS_ROWS:
        columns = matrices[0].columns
        for m in matrices:
            if m.columns != columns:
                raise ShapeMismatch(
                    f"Column mismatch: {columns} vs {m.columns} (shape {m.shape})"
                )
        rows = total // columns
        builder = PackedStore.builder(total, default)
        cursor = 0
        for m in matrices:
            for r in range(m.rows):
                for col, value in enumerate(m.row(r).to_list()):
                    builder.set(cursor * columns + col, value)
                cursor += 1
    else:
        rows = matrices[0].rows
        for m in matrices:
            if m.rows != rows:
                raise ShapeMismatch(
                    f"Row mismatch: {rows} vs {m.rows} (shape {m.shape})"
                )
        columns = total // rows
        builder = PackedStore.builder(total, default)
        cursor = 0
        for m in matrices:
            for c in range(m.columns):
                for row, value in enumerate(m.column(c).to_list()):
                    builder.set(row * columns + cursor, value)
                cursor += 1

    logger.debug("concat %d matrices along %s -> (%d, %d)", len(matrices), axis, rows, columns)
    return _matrix_cls()(builder.freeze(), rows, columns)
