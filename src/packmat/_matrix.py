"""
Matrix

Rank-2 matrix over a single PackedStore, addressed in row-major order.

A Matrix is a value: every operation that would change it returns a new
Matrix and leaves the receiver untouched. The traversal, aggregate,
transform and linear-algebra methods defined here are thin delegates to the
functional modules (``packmat._traversal``, ``packmat._aggregate``,
``packmat.math.transforms``, ``packmat.math.linalg``), which can also be
called directly.

Example:
    >>> from packmat import Matrix
    >>> m = Matrix.new(5, 5, default=2).set((0, 0), 8)
    >>> m.get((0, 0)), m.get((4, 4))
    (8, 2)
    >>> m.sum()
    56
"""

import logging
import operator
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

from ._config import MISSING, config, resolve_default
from ._store import PackedStore
from .error import InvalidDimension, PositionOutOfBounds, ShapeMismatch

__all__ = ['Matrix', 'Position']

logger = logging.getLogger("packmat.matrix")

Position = Tuple[int, int]


def _as_int(value: Any) -> Optional[int]:
    """Python int for any integer-like value (numpy scalars included), else None."""
    try:
        return operator.index(value)
    except TypeError:
        return None


def _check_dimensions(rows: int, columns: int) -> Tuple[int, int]:
    """Validate a shape and return it as plain ints."""
    r, c = _as_int(rows), _as_int(columns)
    if r is None or c is None:
        raise InvalidDimension(f"Dimensions must be integers, got ({rows!r}, {columns!r})")
    if r < 1 or c < 1:
        raise InvalidDimension(f"Dimensions must be positive, got ({r}, {c})")
    return r, c


class Matrix:
    """
    Two-dimensional matrix with default-value elision.

    Attributes:
        rows (int): Number of rows (>= 1)
        columns (int): Number of columns (>= 1)
        default: Value of every cell never explicitly written
        store (PackedStore): Backing flat store of length rows * columns

    Construction:
        Matrix.new(rows, columns, default=...)
        Matrix.from_flat(values, rows, columns, default=...)
        Matrix.from_nested([[...], [...]], default=...)
        Matrix.identity(n, default=...)
    """

    __slots__ = ('_store', '_rows', '_columns')

    # =========================================================================
    # Initialization
    # =========================================================================

    def __init__(self, store: PackedStore, rows: int, columns: int):
        """
        Internal constructor - prefer the factory methods.

        Args:
            store: Backing store; its length must equal rows * columns.
            rows: Number of rows.
            columns: Number of columns.
        """
        rows, columns = _check_dimensions(rows, columns)
        if store.length != rows * columns:
            raise ShapeMismatch(
                f"Store length {store.length} does not match shape ({rows}, {columns})"
            )
        self._store = store
        self._rows = rows
        self._columns = columns

    # =========================================================================
    # Factory Methods
    # =========================================================================

    @classmethod
    def new(cls, rows: int, columns: int, default: Any = MISSING) -> 'Matrix':
        """Create a rows x columns matrix with every cell set to ``default``."""
        rows, columns = _check_dimensions(rows, columns)
        default = resolve_default(default)
        logger.debug("new matrix %dx%d default=%r", rows, columns, default)
        return cls(PackedStore.new(rows * columns, default), rows, columns)

    @classmethod
    def from_flat(
        cls,
        values: Sequence[Any],
        rows: int,
        columns: int,
        default: Any = MISSING,
    ) -> 'Matrix':
        """Create from a row-major flat sequence.

        Args:
            values: Non-empty sequence of cell values, row-major.
            rows: Number of rows.
            columns: Number of columns.
            default: Default value (configured default if omitted).

        Returns:
            New Matrix. Missing trailing values read as the default.

        Raises:
            ShapeMismatch: If ``values`` is empty, or longer than
                rows * columns while strict shape checks are enabled.
        """
        rows, columns = _check_dimensions(rows, columns)
        values = list(values)
        if not values:
            raise ShapeMismatch("from_flat requires a non-empty list of values")
        size = rows * columns
        if len(values) > size:
            if config.strict_shapes:
                raise ShapeMismatch(
                    f"{len(values)} values do not fit shape ({rows}, {columns})"
                )
            logger.warning(
                "from_flat truncating %d values to shape (%d, %d)", len(values), rows, columns
            )
        store = PackedStore.resize_from(values, size, resolve_default(default))
        return cls(store, rows, columns)

    @classmethod
    def from_nested(
        cls,
        rows_of_values: Sequence[Sequence[Any]],
        default: Any = MISSING,
    ) -> 'Matrix':
        """Create from a list of rows.

        The column count is taken from the first row.

        Example:
            >>> m = Matrix.from_nested([[1, 2, 3], [4, 5, 6]])
            >>> m.shape
            (2, 3)
        """
        nested = [list(row) for row in rows_of_values]
        if not nested or not nested[0]:
            raise ShapeMismatch("from_nested requires a non-empty list of non-empty rows")

        rows = len(nested)
        columns = len(nested[0])
        ragged = [i for i, row in enumerate(nested) if len(row) != columns]
        if ragged:
            if config.strict_shapes:
                raise ShapeMismatch(
                    f"Row {ragged[0]} has length {len(nested[ragged[0]])}, expected {columns}"
                )
            logger.warning(
                "from_nested got %d ragged rows; flattening into shape (%d, %d)",
                len(ragged), rows, columns,
            )

        flat = [value for row in nested for value in row]
        store = PackedStore.resize_from(flat, rows * columns, resolve_default(default))
        return cls(store, rows, columns)

    @classmethod
    def identity(cls, n: int, default: Any = MISSING) -> 'Matrix':
        """Create an n x n identity matrix."""
        from .math.transforms import identity
        return identity(n, default=default)

    @classmethod
    def from_numpy(cls, array: Any, default: Any = MISSING) -> 'Matrix':
        """Create from a 2-d numpy array (or nested array-like)."""
        from ._interop import from_numpy
        return from_numpy(array, default=default)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def store(self) -> PackedStore:
        """Backing store (immutable)."""
        return self._store

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def columns(self) -> int:
        """Number of columns."""
        return self._columns

    @property
    def shape(self) -> Tuple[int, int]:
        """Matrix dimensions (rows, columns)."""
        return (self._rows, self._columns)

    @property
    def default(self) -> Any:
        """Default cell value."""
        return self._store.default

    def size(self) -> int:
        """Total number of cells (rows * columns)."""
        return self._rows * self._columns

    count = size

    def sparse_extent(self) -> int:
        """Indices at or beyond this value are guaranteed to hold the default."""
        return self._store.sparse_extent()

    # =========================================================================
    # Position <-> Index
    # =========================================================================

    def position_to_index(self, position: Position) -> int:
        """Row-major index of ``(row, col)``."""
        try:
            row, col = (operator.index(p) for p in position)
        except (TypeError, ValueError):
            raise PositionOutOfBounds(f"Invalid position: {position!r}") from None
        if row < 0 or row >= self._rows or col < 0 or col >= self._columns:
            raise PositionOutOfBounds(
                f"Position {(row, col)} out of bounds for shape {self.shape}"
            )
        return row * self._columns + col

    def index_to_position(self, index: int) -> Position:
        """Inverse of position_to_index."""
        return divmod(index, self._columns)

    # =========================================================================
    # Element Access
    # =========================================================================

    def get(self, position: Position) -> Any:
        """Get the value at ``(row, col)``."""
        return self._store.get(self.position_to_index(position))

    def set(self, position: Position, value: Any) -> 'Matrix':
        """Return a matrix where ``(row, col)`` holds ``value``."""
        index = self.position_to_index(position)
        return self._with_store(self._store.set(index, value))

    def reset(self, position: Position) -> 'Matrix':
        """Return a matrix where ``(row, col)`` holds the default again."""
        index = self.position_to_index(position)
        return self._with_store(self._store.reset(index))

    def __getitem__(self, key: Position) -> Any:
        """Support m[row, col]."""
        if isinstance(key, tuple) and len(key) == 2:
            return self.get(key)
        raise TypeError(f"Invalid index: {key!r}; use m[row, col]")

    def _with_store(self, store: PackedStore) -> 'Matrix':
        return Matrix(store, self._rows, self._columns)

    # =========================================================================
    # Row / Column Operations
    # =========================================================================

    def _check_row(self, row_index: int) -> int:
        row = _as_int(row_index)
        if row is None or not 0 <= row < self._rows:
            raise PositionOutOfBounds(f"Row {row_index!r} out of bounds [0, {self._rows})")
        return row

    def _check_column(self, col_index: int) -> int:
        col = _as_int(col_index)
        if col is None or not 0 <= col < self._columns:
            raise PositionOutOfBounds(
                f"Column {col_index!r} out of bounds [0, {self._columns})"
            )
        return col

    def set_row(self, row_index: int, row: 'Matrix') -> 'Matrix':
        """Overwrite row ``row_index`` with a 1 x columns matrix."""
        row_index = self._check_row(row_index)
        if row.rows != 1 or row.columns != self._columns:
            raise ShapeMismatch(
                f"set_row expects shape (1, {self._columns}), got {row.shape}"
            )
        start = row_index * self._columns
        return self._write_cells(
            (start + col, value) for col, value in enumerate(row.to_list())
        )

    def set_column(self, col_index: int, column: 'Matrix') -> 'Matrix':
        """Overwrite column ``col_index`` with a rows x 1 matrix."""
        col_index = self._check_column(col_index)
        if column.columns != 1 or column.rows != self._rows:
            raise ShapeMismatch(
                f"set_column expects shape ({self._rows}, 1), got {column.shape}"
            )
        return self._write_cells(
            (row * self._columns + col_index, value)
            for row, value in enumerate(column.to_list())
        )

    def _write_cells(self, writes) -> 'Matrix':
        """Apply (index, value) writes in order to a copy of the store."""
        cells = list(self._store.explicit_cells())
        default = self.default
        for index, value in writes:
            if index >= len(cells):
                cells.extend([default] * (index + 1 - len(cells)))
            cells[index] = value
        return self._with_store(self._store.with_cells(cells))

    def row(self, row_index: int) -> 'Matrix':
        """Extract row ``row_index`` as a 1 x columns matrix."""
        return Matrix.from_flat(self.row_to_list(row_index), 1, self._columns, self.default)

    def column(self, col_index: int) -> 'Matrix':
        """Extract column ``col_index`` as a rows x 1 matrix."""
        return Matrix.from_flat(self.column_to_list(col_index), self._rows, 1, self.default)

    def reshape(self, rows: int, columns: int) -> 'Matrix':
        """Reinterpret the backing store with new dimensions.

        Raises:
            InvalidDimension: If a dimension is not positive.
            ShapeMismatch: If rows * columns differs from size() while strict
                shape checks are enabled.
        """
        rows, columns = _check_dimensions(rows, columns)
        new_size = rows * columns
        if new_size == self.size():
            return Matrix(self._store, rows, columns)
        if config.strict_shapes:
            raise ShapeMismatch(
                f"Cannot reshape {self.shape} ({self.size()} cells) into "
                f"({rows}, {columns}) ({new_size} cells)"
            )
        logger.warning(
            "reshape %s -> (%d, %d) changes the cell count; store is %s",
            self.shape, rows, columns, "padded" if new_size > self.size() else "truncated",
        )
        return Matrix(self._store.with_length(new_size), rows, columns)

    # =========================================================================
    # Export
    # =========================================================================

    def to_list(self) -> List[Any]:
        """All values as a flat row-major list."""
        return self._store.to_list()

    def to_nested(self) -> List[List[Any]]:
        """All values as a list of row lists."""
        values = self._store.to_list()
        cols = self._columns
        return [values[r * cols:(r + 1) * cols] for r in range(self._rows)]

    to_list_of_lists = to_nested

    def row_to_list(self, row_index: int) -> List[Any]:
        """Values of one row."""
        row_index = self._check_row(row_index)
        start = row_index * self._columns
        return [self._store.get(start + col) for col in range(self._columns)]

    def column_to_list(self, col_index: int) -> List[Any]:
        """Values of one column."""
        col_index = self._check_column(col_index)
        return [
            self._store.get(row * self._columns + col_index) for row in range(self._rows)
        ]

    def copy(self) -> 'Matrix':
        """Return an equal matrix with its own store."""
        return self._with_store(self._store.with_cells(self._store.explicit_cells()))

    # =========================================================================
    # Traversal (see packmat._traversal)
    # =========================================================================

    def fold_left(self, fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
        from ._traversal import fold_left
        return fold_left(self, fun, acc)

    def fold_right(self, fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
        from ._traversal import fold_right
        return fold_right(self, fun, acc)

    def sparse_fold_left(self, fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
        from ._traversal import sparse_fold_left
        return sparse_fold_left(self, fun, acc)

    def sparse_fold_right(self, fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
        from ._traversal import sparse_fold_right
        return sparse_fold_right(self, fun, acc)

    def fold_while(self, fun, acc: Any, sparse: bool = False, reverse: bool = False) -> Any:
        from ._traversal import fold_while
        return fold_while(self, fun, acc, sparse=sparse, reverse=reverse)

    def map(self, fun: Callable[[int, Any], Any]) -> 'Matrix':
        from ._traversal import map as map_
        return map_(self, fun)

    def sparse_map(self, fun: Callable[[int, Any], Any]) -> 'Matrix':
        from ._traversal import sparse_map
        return sparse_map(self, fun)

    # =========================================================================
    # Aggregates (see packmat._aggregate)
    # =========================================================================

    def min(self) -> Any:
        from ._aggregate import min as min_
        return min_(self)

    def max(self) -> Any:
        from ._aggregate import max as max_
        return max_(self)

    def argmin(self) -> Position:
        from ._aggregate import argmin
        return argmin(self)

    def argmax(self) -> Position:
        from ._aggregate import argmax
        return argmax(self)

    def sum(self) -> Any:
        from ._aggregate import sum as sum_
        return sum_(self)

    def trace(self) -> Any:
        from ._aggregate import trace
        return trace(self)

    def member(self, term: Any) -> bool:
        from ._aggregate import member
        return member(self, term)

    def find(self, term: Any) -> Optional[Position]:
        from ._aggregate import find
        return find(self, term)

    def index(self, term: Any) -> Position:
        from ._aggregate import index
        return index(self, term)

    # =========================================================================
    # Structural Transforms (see packmat.math.transforms)
    # =========================================================================

    def diagonal(self) -> 'Matrix':
        from .math.transforms import diagonal
        return diagonal(self)

    def transpose(self) -> 'Matrix':
        from .math.transforms import transpose
        return transpose(self)

    @property
    def T(self) -> 'Matrix':
        """Transposed matrix."""
        return self.transpose()

    def flip_lr(self) -> 'Matrix':
        from .math.transforms import flip_lr
        return flip_lr(self)

    def flip_ud(self) -> 'Matrix':
        from .math.transforms import flip_ud
        return flip_ud(self)

    def drop_row(self, row_index: int) -> 'Matrix':
        from .math.transforms import drop_row
        return drop_row(self, row_index)

    def drop_column(self, col_index: int) -> 'Matrix':
        from .math.transforms import drop_column
        return drop_column(self, col_index)

    # =========================================================================
    # Linear Algebra (see packmat.math.linalg)
    # =========================================================================

    def add(self, other: 'Matrix') -> 'Matrix':
        from .math.linalg import add
        return add(self, other)

    def multiply(self, other: 'Matrix') -> 'Matrix':
        from .math.linalg import multiply
        return multiply(self, other)

    def dot(self, other: 'Matrix') -> 'Matrix':
        from .math.linalg import dot
        return dot(self, other)

    def __add__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)

    def __mul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)

    def __matmul__(self, other: 'Matrix') -> 'Matrix':
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.dot(other)

    # =========================================================================
    # Sequence Protocol (see packmat._sequence)
    # =========================================================================

    def sequence(self) -> 'MatrixSequence':
        """Lazy, resumable view of the values in row-major order."""
        from ._sequence import MatrixSequence
        return MatrixSequence(self)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.sequence())

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, term: Any) -> bool:
        return self.member(term)

    # =========================================================================
    # Interop (see packmat._interop)
    # =========================================================================

    def to_numpy(self, dtype: Any = None):
        from ._interop import to_numpy
        return to_numpy(self, dtype=dtype)

    def to_scipy(self):
        from ._interop import to_scipy
        return to_scipy(self)

    # =========================================================================
    # Comparison / Representation
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._store == other._store

    __hash__ = None

    def __repr__(self) -> str:
        display = config.display
        lines = []
        for r in range(min(self._rows, display.max_preview_rows)):
            row = self.row_to_list(r)
            items = [repr(v) for v in row[:display.max_preview_columns]]
            if self._columns > display.max_preview_columns:
                items.append('...')
            lines.append('[' + ', '.join(items) + ']')
        if self._rows > display.max_preview_rows:
            lines.append('...')
        body = ',\n        '.join(lines)
        return f"Matrix([{body}], shape={self.shape}, default={self.default!r})"

    def info(self) -> str:
        """Get detailed information string."""
        lines = [
            "Matrix:",
            f"  shape: {self.shape}",
            f"  size: {self.size()}",
            f"  default: {self.default!r}",
            f"  sparse_extent: {self.sparse_extent()}",
        ]
        return '\n'.join(lines)
