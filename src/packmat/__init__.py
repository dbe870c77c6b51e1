"""
packmat - Packed Matrix Library

Two-dimensional matrices over a single flat store with default-value
elision:
- Cells never written read back as a per-matrix default
- Sparse traversals stop at the store's high-water mark
- Value semantics: every operation returns a new Matrix
- Resumable external iteration (continue / suspend / halt)

Modules:
- math: Structural transforms and linear algebra
- error: Exception hierarchy with inspectable error codes

Example:
    >>> import packmat
    >>> from packmat import Matrix
    >>>
    >>> m = Matrix.new(5, 5, default=2).set((0, 0), 8)
    >>> m.max(), m.argmax(), m.sum()
    (8, (0, 0), 56)
    >>> packmat.trace(Matrix.identity(4))
    4
"""

__version__ = '0.1.4'

# Import main modules
from . import error
from . import math

# Re-export common types
from ._store import PackedStore, StoreBuilder
from ._matrix import Matrix, Position
from ._config import (
    ConstructionConfig,
    DisplayConfig,
    PackmatConfig,
    config,
    get_config,
    set_default,
    set_strict_shapes,
)
from ._traversal import (
    Continue,
    Halt,
    Suspend,
    fold_left,
    fold_right,
    sparse_fold_left,
    sparse_fold_right,
    fold_while,
    sparse_map,
)
from ._aggregate import (
    argmin,
    argmax,
    member,
    find,
    index,
    trace,
)
from ._sequence import (
    MatrixSequence,
    Done,
    Halted,
    Suspended,
    zip_sequences,
)
from ._interop import to_numpy, from_numpy, to_scipy
from .math import (
    diagonal,
    identity,
    transpose,
    flip_lr,
    flip_ud,
    drop_row,
    drop_column,
    concat,
    add,
    multiply,
    dot,
)
from .error import (
    PackmatError,
    IndexOutOfRange,
    PositionOutOfBounds,
    ShapeMismatch,
    ShapeError,
    InvalidDimension,
    NotFound,
)

__all__ = [
    # Version
    '__version__',

    # Modules
    'error',
    'math',

    # Core classes
    'PackedStore',
    'StoreBuilder',
    'Matrix',
    'Position',
    'MatrixSequence',

    # Configuration
    'ConstructionConfig',
    'DisplayConfig',
    'PackmatConfig',
    'config',
    'get_config',
    'set_default',
    'set_strict_shapes',

    # Traversal
    'Continue',
    'Halt',
    'Suspend',
    'fold_left',
    'fold_right',
    'sparse_fold_left',
    'sparse_fold_right',
    'fold_while',
    'sparse_map',

    # Aggregates
    'argmin',
    'argmax',
    'member',
    'find',
    'index',
    'trace',

    # Sequence protocol
    'Done',
    'Halted',
    'Suspended',
    'zip_sequences',

    # Interop
    'to_numpy',
    'from_numpy',
    'to_scipy',

    # Transforms / linear algebra
    'diagonal',
    'identity',
    'transpose',
    'flip_lr',
    'flip_ud',
    'drop_row',
    'drop_column',
    'concat',
    'add',
    'multiply',
    'dot',

    # Errors
    'PackmatError',
    'IndexOutOfRange',
    'PositionOutOfBounds',
    'ShapeMismatch',
    'ShapeError',
    'InvalidDimension',
    'NotFound',
]
