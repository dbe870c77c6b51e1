"""Traversal Engine.

Dense and sparse fold/map primitives over a Matrix.

Dense traversals visit every index ``0 .. size-1``. Sparse traversals visit
only indices below the sparse extent (the store's high-water mark): every
index at or beyond it is known to hold the default and is skipped. The
extent is a conservative bound, so sparse folds may still see cells that
equal the default (explicitly written or reset).

Folding functions take ``(index, value, acc)``; mapping functions take
``(index, value)``.

Early exit:
    ``fold_while`` drives a function returning ``Continue(acc)`` or
    ``Halt(result)`` and stops at the first ``Halt``. The same signal
    types are used by the external iteration protocol
    (``packmat._sequence``), which adds ``Suspend``.

Example:
    >>> m = Matrix.from_nested([[1, 2], [3, 4]])
    >>> fold_left(m, lambda i, v, acc: acc + v, 0)
    10
    >>> fold_while(m, lambda i, v, acc: Halt(i) if v > 2 else Continue(acc), None)
    2
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterator, Tuple

from ._store import PackedStore

if TYPE_CHECKING:
    from ._matrix import Matrix

__all__ = [
    # Signals
    'Continue',
    'Halt',
    'Suspend',
    # Folds
    'fold_left',
    'fold_right',
    'sparse_fold_left',
    'sparse_fold_right',
    'fold_while',
    # Maps
    'map',
    'sparse_map',
    # Iteration helpers
    'iter_cells',
]


# =============================================================================
# Control Signals
# =============================================================================

@dataclass(frozen=True)
class Continue:
    """Keep going with ``acc``."""
    acc: Any


@dataclass(frozen=True)
class Halt:
    """Stop now; ``acc`` is the final result."""
    acc: Any


@dataclass(frozen=True)
class Suspend:
    """Pause with ``acc``; only meaningful to the sequence protocol."""
    acc: Any


# =============================================================================
# Cell Iteration
# =============================================================================

def iter_cells(
    mat: 'Matrix',
    sparse: bool = False,
    reverse: bool = False,
) -> Iterator[Tuple[int, Any]]:
    """Yield ``(index, value)`` pairs in traversal order.

    Args:
        mat: Source matrix.
        sparse: Stop at the sparse extent instead of ``size()``.
        reverse: Visit indices in descending order.
    """
    store: PackedStore = mat.store
    cells = store.explicit_cells()
    extent = len(cells)
    stop = extent if sparse else mat.size()
    default = store.default

    indices = range(stop - 1, -1, -1) if reverse else range(stop)
    for i in indices:
        yield i, (cells[i] if i < extent else default)


# =============================================================================
# Folds
# =============================================================================

def fold_left(mat: 'Matrix', fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
    """Fold over every index in ascending order."""
    for i, value in iter_cells(mat):
        acc = fun(i, value, acc)
    return acc


def fold_right(mat: 'Matrix', fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
    """Fold over every index in descending order."""
    for i, value in iter_cells(mat, reverse=True):
        acc = fun(i, value, acc)
    return acc


def sparse_fold_left(mat: 'Matrix', fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
    """Fold over indices below the sparse extent, ascending."""
    for i, value in iter_cells(mat, sparse=True):
        acc = fun(i, value, acc)
    return acc


def sparse_fold_right(mat: 'Matrix', fun: Callable[[int, Any, Any], Any], acc: Any) -> Any:
    """Fold over indices below the sparse extent, descending."""
    for i, value in iter_cells(mat, sparse=True, reverse=True):
        acc = fun(i, value, acc)
    return acc


def fold_while(
    mat: 'Matrix',
    fun: Callable[[int, Any, Any], Any],
    acc: Any,
    sparse: bool = False,
    reverse: bool = False,
) -> Any:
    """Fold until ``fun`` returns ``Halt``.

    Args:
        mat: Source matrix.
        fun: ``fun(index, value, acc)`` returning ``Continue(acc)`` or
            ``Halt(result)``.
        acc: Initial accumulator.
        sparse: Restrict to indices below the sparse extent.
        reverse: Visit indices in descending order.

    Returns:
        The accumulator of the first ``Halt``, or the last ``Continue``
        accumulator when every cell was visited.
    """
    for i, value in iter_cells(mat, sparse=sparse, reverse=reverse):
        signal = fun(i, value, acc)
        if isinstance(signal, Halt):
            return signal.acc
        if not isinstance(signal, Continue):
            raise TypeError(
                f"fold_while function must return Continue or Halt, got {signal!r}"
            )
        acc = signal.acc
    return acc


# =============================================================================
# Maps
# =============================================================================

def map(mat: 'Matrix', fun: Callable[[int, Any], Any]) -> 'Matrix':
    """Replace every cell with ``fun(index, value)``.

    The result is fully written: its sparse extent equals its size.
    """
    from ._matrix import Matrix

    cells = [fun(i, value) for i, value in iter_cells(mat)]
    store = PackedStore(cells, mat.size(), mat.default)
    return Matrix(store, mat.rows, mat.columns)


def sparse_map(mat: 'Matrix', fun: Callable[[int, Any], Any]) -> 'Matrix':
    """Apply ``fun(index, value)`` below the sparse extent only.

    Trailing default cells are left untouched and the extent is unchanged.
    """
    from ._matrix import Matrix

    cells = [fun(i, value) for i, value in iter_cells(mat, sparse=True)]
    return Matrix(mat.store.with_cells(cells), mat.rows, mat.columns)
