"""
packmat Math Module.

This module provides the operations that build new matrices out of existing
ones:

    - Structural transforms (transpose, flips, concatenation, row/column
      removal, diagonal, identity)
    - Linear algebra operations (elementwise add/multiply, matrix product)

Example:
    >>> import packmat.math as pmath
    >>> from packmat import Matrix
    >>>
    >>> m = Matrix.from_nested([[1, 2], [3, 4]])
    >>> pmath.dot(m, pmath.identity(2)) == m
    True
"""

from packmat.math.transforms import (
    diagonal,
    identity,
    transpose,
    flip_lr,
    flip_ud,
    drop_row,
    drop_column,
    concat,
    AXIS_ROWS,
    AXIS_COLUMNS,
)

from packmat.math.linalg import (
    add,
    multiply,
    dot,
)

__all__ = [
    # Structural transforms
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
    # Linear algebra
    "add",
    "multiply",
    "dot",
]
