"""Aggregate Algorithms.

Reductions over a Matrix built on the traversal engine: extreme values and
their positions, membership and search, and sums.

All of them lean on the sparse extent: cells at or beyond it are known to
hold the default, so they are accounted for without being visited.

Tie-break:
    ``argmin`` / ``argmax`` report the first (lowest-index) occurrence. The
    running accumulator is replaced only by a strictly smaller / larger
    value.
"""

import operator
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple

from ._traversal import Continue, Halt, fold_while, sparse_fold_left
from .error import NotFound

if TYPE_CHECKING:
    from ._matrix import Matrix, Position

__all__ = [
    'min',
    'max',
    'argmin',
    'argmax',
    'member',
    'find',
    'index',
    'sum',
    'trace',
]


# =============================================================================
# Extremes
# =============================================================================

def _fold_extreme(
    mat: 'Matrix',
    better: Callable[[Any, Any], bool],
    seed: Tuple[Optional[int], Any],
) -> Tuple[Optional[int], Any]:
    """Sparse-fold ``(index, value)`` of the first cell beating ``seed``.

    A seed index of None marks the default as the running extreme without a
    known location; the first cell equal to it claims the location.
    """
    def step(i: int, value: Any, acc: Tuple[Optional[int], Any]) -> Tuple[Optional[int], Any]:
        best_index, best = acc
        if better(value, best):
            return (i, value)
        if best_index is None and value == best:
            return (i, value)
        return acc

    return sparse_fold_left(mat, step, seed)


def _arg_extreme(mat: 'Matrix', better: Callable[[Any, Any], bool]) -> 'Position':
    best_index, _ = _fold_extreme(mat, better, (None, mat.default))
    if best_index is None:
        extent = mat.sparse_extent()
        if extent < mat.size():
            best_index = extent
        else:
            # Fully written and no cell holds the default: locate the
            # extreme among the cells themselves.
            best_index, _ = _fold_extreme(mat, better, (0, mat.store.get(0)))
    return mat.index_to_position(best_index)


def min(mat: 'Matrix') -> Any:
    """Smallest value in the matrix, the default included.

    The fold starts from the default, so a matrix whose cells are all
    larger than its default reports the default.

    Example:
        >>> Matrix.new(10, 10, default=7).min()
        7
    """
    return _fold_extreme(mat, operator.lt, (None, mat.default))[1]


def max(mat: 'Matrix') -> Any:
    """Largest value in the matrix, the default included."""
    return _fold_extreme(mat, operator.gt, (None, mat.default))[1]


def argmin(mat: 'Matrix') -> 'Position':
    """Position of the first occurrence of the smallest value.

    When the default is the minimum, this is the first cell holding it. If
    no cell does (every cell written with a larger value), it is the first
    occurrence of the smallest written value.
    """
    return _arg_extreme(mat, operator.lt)


def argmax(mat: 'Matrix') -> 'Position':
    """Position of the first occurrence of the largest value (see argmin)."""
    return _arg_extreme(mat, operator.gt)


# =============================================================================
# Membership / Search
# =============================================================================

def _has_guaranteed_default(mat: 'Matrix') -> bool:
    return mat.sparse_extent() < mat.size()


def member(mat: 'Matrix', term: Any) -> bool:
    """Whether any cell equals ``term``.

    Answers immediately for the default when a guaranteed-default cell
    exists; otherwise scans below the sparse extent and stops at the first
    match.
    """
    if _has_guaranteed_default(mat) and term == mat.default:
        return True

    return fold_while(
        mat,
        lambda i, value, acc: Halt(True) if value == term else Continue(acc),
        False,
        sparse=True,
    )


def find(mat: 'Matrix', term: Any) -> Optional['Position']:
    """Position of the first cell equal to ``term``, or None.

    Cells below the sparse extent are scanned in ascending order. If none
    matches and ``term`` is the default, the first guaranteed-default cell
    (the one at the sparse extent) is the answer.
    """
    found = fold_while(
        mat,
        lambda i, value, acc: Halt(i) if value == term else Continue(acc),
        None,
        sparse=True,
    )
    if found is None and _has_guaranteed_default(mat) and term == mat.default:
        found = mat.sparse_extent()
    if found is None:
        return None
    return mat.index_to_position(found)


def index(mat: 'Matrix', term: Any) -> 'Position':
    """Like find(), but raise NotFound when ``term`` does not occur."""
    position = find(mat, term)
    if position is None:
        raise NotFound(f"{term!r} not found in matrix of shape {mat.shape}")
    return position


# =============================================================================
# Sums
# =============================================================================

def sum(mat: 'Matrix') -> Any:
    """Sum of all cells.

    Only cells below the sparse extent are visited; the remaining cells
    contribute ``(size - visited) * default``.
    """
    visited, total = sparse_fold_left(
        mat,
        lambda i, value, acc: (acc[0] + 1, acc[1] + value),
        (0, 0),
    )
    return total + (mat.size() - visited) * mat.default


def trace(mat: 'Matrix') -> Any:
    """Sum of cells (i, i) for every column; see ``diagonal``."""
    from .math.transforms import diagonal
    return sum(diagonal(mat))
