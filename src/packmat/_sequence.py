"""External Iteration Protocol.

Presents a Matrix as a lazy sequence of its values in row-major order, so
generic consumers can walk one or several matrices without the matrix
knowing anything about them.

Capabilities:
    - count(): O(1), equals size()
    - contains(term): delegates to the matrix's membership test
    - slice(start, length): eager list of a contiguous run
    - reduce(command, fun): resumable reduction

Reduction protocol:
    ``fun(value, acc)`` returns the next command:

    - ``Continue(acc)``: consume the next value
    - ``Suspend(acc)``: pause; the result carries a continuation
    - ``Halt(acc)``: stop, discarding the remaining values

    ``reduce`` returns ``Done(acc)`` once every value was consumed,
    ``Halted(acc)`` after a halt, or ``Suspended(acc, continuation)``.
    Calling ``continuation(command)`` resumes right after the last consumed
    value, with ``command`` in place of the suspending one.

Example:
    >>> seq = Matrix.from_nested([[1, 2], [3, 4]]).sequence()
    >>> seq.reduce(Continue(0), lambda v, acc: Continue(acc + v))
    Done(acc=10)
    >>> r = seq.reduce(Continue(0), lambda v, acc: Suspend(acc + v))
    >>> r.acc
    1
    >>> r.continuation(Continue(r.acc)).acc
    3
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Tuple, Union

from ._traversal import Continue, Halt, Suspend, iter_cells

if TYPE_CHECKING:
    from ._matrix import Matrix

__all__ = [
    'MatrixSequence',
    'Continue',
    'Suspend',
    'Halt',
    'Done',
    'Halted',
    'Suspended',
    'zip_sequences',
]

Command = Union[Continue, Suspend, Halt]


# =============================================================================
# Reduction Results
# =============================================================================

@dataclass(frozen=True)
class Done:
    """Every value was consumed."""
    acc: Any


@dataclass(frozen=True)
class Halted:
    """The reducer halted early."""
    acc: Any


@dataclass(frozen=True)
class Suspended:
    """The reducer paused; call ``continuation(command)`` to resume."""
    acc: Any
    continuation: Callable[[Command], 'ReduceResult']


ReduceResult = Union[Done, Halted, Suspended]


# =============================================================================
# Sequence View
# =============================================================================

class MatrixSequence:
    """
    Lazy, resumable view of a Matrix's values in row-major order.

    The view holds a reference to an immutable Matrix, so suspended
    reductions can be resumed at any later time.
    """

    __slots__ = ('_matrix',)

    def __init__(self, matrix: 'Matrix'):
        self._matrix = matrix

    @property
    def matrix(self) -> 'Matrix':
        return self._matrix

    def count(self) -> int:
        """Number of values (O(1))."""
        return self._matrix.size()

    def __len__(self) -> int:
        return self.count()

    def contains(self, term: Any) -> bool:
        """Whether any value equals ``term``."""
        return self._matrix.member(term)

    def __contains__(self, term: Any) -> bool:
        return self.contains(term)

    def slice(self, start: int, length: int) -> List[Any]:
        """Values ``start .. start+length-1`` (clipped to the sequence)."""
        if start < 0 or length < 0:
            raise ValueError(f"slice needs non-negative start/length, got ({start}, {length})")
        store = self._matrix.store
        stop = min(start + length, self.count())
        return [store.get(i) for i in range(start, stop)]

    def __iter__(self) -> Iterator[Any]:
        for _, value in iter_cells(self._matrix):
            yield value

    def reduce(self, command: Command, fun: Callable[[Any, Any], Command]) -> ReduceResult:
        """Run a resumable reduction from the first value."""
        return self._reduce_from(0, command, fun)

    def _reduce_from(
        self,
        position: int,
        command: Command,
        fun: Callable[[Any, Any], Command],
    ) -> ReduceResult:
        store = self._matrix.store
        size = self.count()

        while True:
            if isinstance(command, Halt):
                return Halted(command.acc)
            if isinstance(command, Suspend):
                resume_at = position
                return Suspended(
                    command.acc,
                    lambda next_command: self._reduce_from(resume_at, next_command, fun),
                )
            if not isinstance(command, Continue):
                raise TypeError(
                    f"reduce commands must be Continue, Suspend or Halt, got {command!r}"
                )
            if position >= size:
                return Done(command.acc)

            value = store.get(position)
            position += 1
            command = fun(value, command.acc)

    def __repr__(self) -> str:
        return f"MatrixSequence(shape={self._matrix.shape}, count={self.count()})"


# =============================================================================
# Generic Consumers
# =============================================================================

def _as_sequence(source: Any) -> Any:
    if hasattr(source, 'reduce'):
        return source
    return source.sequence()


def zip_sequences(*sources: Any) -> List[Tuple[Any, ...]]:
    """Walk several sequences in lockstep.

    Each source is driven one value at a time through suspend/resume; the
    walk stops at the shortest source and the others are halted.

    Args:
        *sources: MatrixSequence objects (or matrices).

    Returns:
        List of tuples, one value from each source per tuple.

    Example:
        >>> a = Matrix.from_nested([[1, 2]])
        >>> b = Matrix.from_nested([[3], [4], [5]])
        >>> zip_sequences(a, b)
        [(1, 3), (2, 4)]
    """
    if not sources:
        return []

    def take_one(value: Any, acc: Any) -> Command:
        return Suspend(value)

    continuations = [
        _as_sequence(src).reduce(Suspend(None), take_one).continuation
        for src in sources
    ]

    zipped = []
    while True:
        results = [cont(Continue(None)) for cont in continuations]
        if any(not isinstance(r, Suspended) for r in results):
            for r in results:
                if isinstance(r, Suspended):
                    r.continuation(Halt(None))
            return zipped
        zipped.append(tuple(r.acc for r in results))
        continuations = [r.continuation for r in results]
