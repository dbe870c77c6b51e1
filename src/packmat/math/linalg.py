"""
Linear Algebra Operations for Matrices.

This module provides the elementary linear algebra operators: elementwise
addition and multiplication, and the matrix product.

Implemented Operations:
    - add: Elementwise sum of two equally shaped matrices
    - multiply: Elementwise (Hadamard) product
    - dot: Matrix product

No pivoting, blocking or decomposition is attempted; cell values only need
to support ``+`` and ``*``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

from .._aggregate import sum as matrix_sum
from .._store import PackedStore
from .._traversal import map as matrix_map
from ..error import ShapeMismatch
from .transforms import transpose

if TYPE_CHECKING:
    from .._matrix import Matrix

logger = logging.getLogger("packmat.linalg")

__all__ = [
    "add",
    "multiply",
    "dot",
]


def _check_same_shape(a: "Matrix", b: "Matrix", op: str) -> None:
    if a.shape != b.shape:
        raise ShapeMismatch(f"{op} requires equal shapes, got {a.shape} and {b.shape}")


# =============================================================================
# Elementwise Operations
# =============================================================================

def add(a: "Matrix", b: "Matrix") -> "Matrix":
    """Elementwise sum.

    Mathematical Definition:
        C[i, j] = A[i, j] + B[i, j]

    The result keeps ``a``'s default and is fully written.

    Raises:
        ShapeMismatch: If the shapes differ.

    Example:
        >>> a = Matrix.from_nested([[1, 2], [3, 4]])
        >>> add(a, a).to_nested()
        [[2, 4], [6, 8]]
    """
    _check_same_shape(a, b, "add")
    other = b.store
    return matrix_map(a, lambda i, value: value + other.get(i))


def multiply(a: "Matrix", b: "Matrix") -> "Matrix":
    """Elementwise (Hadamard) product.

    Mathematical Definition:
        C[i, j] = A[i, j] * B[i, j]

    Raises:
        ShapeMismatch: If the shapes differ.
    """
    _check_same_shape(a, b, "multiply")
    other = b.store
    return matrix_map(a, lambda i, value: value * other.get(i))


# =============================================================================
# Matrix Product
# =============================================================================

def dot(a: "Matrix", b: "Matrix") -> "Matrix":
    """Matrix product.

    Mathematical Definition:
        C[i, k] = sum(A[i, j] * B[j, k] for j in range(n))

    Algorithm:
        Every row of A (1 x n) and every column of B, transposed to 1 x n,
        is extracted once and cached by index. Each output cell is then the
        sum of the elementwise product of one cached row and one cached
        column.

    Complexity:
        O(m * p * n) for A of shape (m, n) and B of shape (n, p).

    Args:
        a: Left matrix of shape (m, n).
        b: Right matrix of shape (n, p).

    Returns:
        Matrix of shape (m, p) with ``a``'s default.

    Raises:
        ShapeMismatch: If inner dimensions don't match (a.columns != b.rows).

    Example:
        >>> a = Matrix.from_nested([[1, 2], [3, 4]])
        >>> b = Matrix.from_nested([[5], [6]])
        >>> dot(a, b).to_nested()
        [[17], [39]]
    """
    if a.columns != b.rows:
        raise ShapeMismatch(
            f"dot requires a.columns == b.rows, got {a.shape} and {b.shape}"
        )

    a_rows: Dict[int, "Matrix"] = {i: a.row(i) for i in range(a.rows)}
    b_columns: Dict[int, "Matrix"] = {j: transpose(b.column(j)) for j in range(b.columns)}

    rows, columns = a.rows, b.columns
    builder = PackedStore.builder(rows * columns, a.default)
    for i in range(rows):
        row = a_rows[i]
        for j in range(columns):
            builder.set(i * columns + j, matrix_sum(multiply(row, b_columns[j])))

    logger.debug("dot %s x %s -> (%d, %d)", a.shape, b.shape, rows, columns)
    from .._matrix import Matrix
    return Matrix(builder.freeze(), rows, columns)
