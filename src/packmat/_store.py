"""
Packed Store

Fixed-length, 0-indexed cell container with a single default value.

Only the cells below the high-water mark (one past the highest index ever
explicitly written) are physically held. Every index at or beyond the mark
reads back as the default, which is what lets sparse traversals stop early.

Stores have value semantics: ``set`` and ``reset`` return a new store and
never touch the receiver. Freshly computed results are filled through a
StoreBuilder, which is never shared once frozen.
"""

from typing import Any, Iterable, List, Sequence

from .error import IndexOutOfRange, InvalidDimension

__all__ = ['PackedStore', 'StoreBuilder']


# =============================================================================
# PackedStore Class
# =============================================================================

class PackedStore:
    """
    Immutable flat cell array with default-value elision.

    Attributes:
        length (int): Number of logical cells
        default: Value of every cell never explicitly written
        high_water (int): One past the highest explicitly written index

    Invariant:
        ``high_water <= length`` and ``get(i) == default`` for every
        ``i >= high_water``.

    Example:
        >>> store = PackedStore.new(10, default=0)
        >>> store = store.set(3, 7)
        >>> store.get(3), store.get(9), store.sparse_extent()
        (7, 0, 4)
    """

    __slots__ = ('_cells', '_length', '_default')

    def __init__(self, cells: List[Any], length: int, default: Any):
        """
        Internal constructor - use new() / resize_from() instead.

        Args:
            cells: Physical cells; ``len(cells)`` is the high-water mark
            length: Logical length
            default: Default value
        """
        if length < 0:
            raise InvalidDimension(f"Store length must be non-negative, got {length}")
        if len(cells) > length:
            raise IndexOutOfRange(
                f"{len(cells)} physical cells exceed store length {length}"
            )
        self._cells = cells
        self._length = length
        self._default = default

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def new(cls, length: int, default: Any = None) -> 'PackedStore':
        """Create a store whose cells all hold ``default``."""
        return cls([], length, default)

    @classmethod
    def resize_from(
        cls,
        values: Iterable[Any],
        new_length: int,
        default: Any = None,
    ) -> 'PackedStore':
        """
        Create a store from the leading values of a sequence.

        The first ``min(len(values), new_length)`` values are copied, the
        remaining cells read as ``default`` and the high-water mark is the
        number of copied values.
        """
        if new_length < 0:
            raise InvalidDimension(f"Store length must be non-negative, got {new_length}")
        cells = []
        for value in values:
            if len(cells) == new_length:
                break
            cells.append(value)
        return cls(cells, new_length, default)

    @staticmethod
    def builder(length: int, default: Any = None) -> 'StoreBuilder':
        """Create a mutable builder for a fresh store."""
        return StoreBuilder(length, default)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def length(self) -> int:
        """Number of logical cells."""
        return self._length

    @property
    def default(self) -> Any:
        """Default cell value."""
        return self._default

    @property
    def high_water(self) -> int:
        """One past the highest explicitly written index (0 if none)."""
        return len(self._cells)

    def sparse_extent(self) -> int:
        """Indices at or beyond this value are guaranteed to hold the default."""
        return len(self._cells)

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check_index(self, idx: int) -> None:
        if idx < 0 or idx >= self._length:
            raise IndexOutOfRange(f"Index {idx} out of bounds [0, {self._length})")

    def get(self, idx: int) -> Any:
        """Get the value at ``idx``."""
        self._check_index(idx)
        if idx < len(self._cells):
            return self._cells[idx]
        return self._default

    def set(self, idx: int, value: Any) -> 'PackedStore':
        """Return a store where cell ``idx`` holds ``value``."""
        self._check_index(idx)
        cells = list(self._cells)
        if idx >= len(cells):
            cells.extend([self._default] * (idx + 1 - len(cells)))
        cells[idx] = value
        return PackedStore(cells, self._length, self._default)

    def reset(self, idx: int) -> 'PackedStore':
        """
        Return a store where cell ``idx`` holds the default again.

        The high-water mark is never lowered, even when ``idx`` is the
        highest written index.
        """
        self._check_index(idx)
        if idx >= len(self._cells):
            return self
        cells = list(self._cells)
        cells[idx] = self._default
        return PackedStore(cells, self._length, self._default)

    def __getitem__(self, idx: int) -> Any:
        return self.get(idx)

    def __len__(self) -> int:
        return self._length

    # -------------------------------------------------------------------------
    # Bulk Access
    # -------------------------------------------------------------------------

    def explicit_cells(self) -> Sequence[Any]:
        """Read-only view of the cells below the high-water mark."""
        return tuple(self._cells)

    def to_list(self) -> List[Any]:
        """Convert to a Python list of ``length`` values."""
        return list(self._cells) + [self._default] * (self._length - len(self._cells))

    def with_length(self, new_length: int) -> 'PackedStore':
        """Pad or truncate to ``new_length``, keeping the default."""
        return PackedStore.resize_from(self._cells, new_length, self._default)

    def with_cells(self, cells: List[Any]) -> 'PackedStore':
        """Return a store of the same length/default with new physical cells."""
        return PackedStore(list(cells), self._length, self._default)

    # -------------------------------------------------------------------------
    # Comparison / Representation
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackedStore):
            return NotImplemented
        return (
            self._length == other._length
            and self._default == other._default
            and self.to_list() == other.to_list()
        )

    __hash__ = None

    def __repr__(self) -> str:
        if self._length <= 6:
            data_str = str(self.to_list())
        else:
            values = self.to_list()
            data_str = str(values[:3] + ['...'] + values[-3:])
        return (
            f"PackedStore({data_str}, length={self._length}, "
            f"default={self._default!r}, high_water={self.high_water})"
        )


# =============================================================================
# Builder
# =============================================================================

class StoreBuilder:
    """
    Write-only staging area for a store that nobody references yet.

    Writes are recorded in place; ``freeze()`` trims the buffer to the
    high-water mark and hands ownership to a new PackedStore.
    """

    __slots__ = ('_buffer', '_length', '_default', '_high_water', '_frozen')

    def __init__(self, length: int, default: Any = None):
        if length < 0:
            raise InvalidDimension(f"Store length must be non-negative, got {length}")
        self._buffer = [default] * length
        self._length = length
        self._default = default
        self._high_water = 0
        self._frozen = False

    def set(self, idx: int, value: Any) -> None:
        """Write ``value`` at ``idx``."""
        if self._frozen:
            raise RuntimeError("StoreBuilder already frozen")
        if idx < 0 or idx >= self._length:
            raise IndexOutOfRange(f"Index {idx} out of bounds [0, {self._length})")
        self._buffer[idx] = value
        if idx >= self._high_water:
            self._high_water = idx + 1

    def __setitem__(self, idx: int, value: Any) -> None:
        self.set(idx, value)

    def freeze(self) -> PackedStore:
        """Finish building and return the store."""
        if self._frozen:
            raise RuntimeError("StoreBuilder already frozen")
        self._frozen = True
        cells = self._buffer[:self._high_water]
        self._buffer = []
        return PackedStore(cells, self._length, self._default)
