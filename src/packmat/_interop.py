"""Cross-library conversions.

- numpy: ``to_numpy`` / ``from_numpy`` (dense 2-d arrays)
- scipy: ``to_scipy`` (COO matrix built from the sparse traversal;
  optional dependency, install with ``pip install packmat[scipy]``)
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

import numpy as np

from ._traversal import iter_cells
from ._config import MISSING
from .error import ShapeMismatch

if TYPE_CHECKING:
    from ._matrix import Matrix

logger = logging.getLogger("packmat.interop")

__all__ = [
    'to_numpy',
    'from_numpy',
    'to_scipy',
]


def to_numpy(mat: 'Matrix', dtype: Optional[Any] = None) -> np.ndarray:
    """Convert to a dense ``(rows, columns)`` numpy array."""
    return np.array(mat.to_list(), dtype=dtype).reshape(mat.shape)


def from_numpy(array: Any, default: Any = MISSING) -> 'Matrix':
    """Create a Matrix from a 2-d array-like.

    Raises:
        ShapeMismatch: If the input is not 2-d or has a zero dimension.
    """
    from ._matrix import Matrix

    arr = np.asarray(array)
    if arr.ndim != 2:
        raise ShapeMismatch(f"from_numpy expects a 2-d array, got ndim={arr.ndim}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ShapeMismatch(f"from_numpy expects a non-empty array, got shape {arr.shape}")
    rows, columns = arr.shape
    logger.debug("from_numpy shape=%s dtype=%s", arr.shape, arr.dtype)
    return Matrix.from_flat(arr.ravel().tolist(), rows, columns, default=default)


def to_scipy(mat: 'Matrix') -> Any:
    """Convert to a ``scipy.sparse.coo_matrix``.

    Only cells below the sparse extent that differ from the default are
    stored. Requires a zero default, since scipy's implicit value is 0.
    """
    try:
        import scipy.sparse as sp
    except ImportError:
        raise ImportError("scipy required for to_scipy(); install packmat[scipy]") from None

    if mat.default != 0:
        raise ValueError(f"to_scipy requires a zero default, got {mat.default!r}")

    rows, cols, data = [], [], []
    for i, value in iter_cells(mat, sparse=True):
        if value != 0:
            r, c = divmod(i, mat.columns)
            rows.append(r)
            cols.append(c)
            data.append(value)
    return sp.coo_matrix((data, (rows, cols)), shape=mat.shape)
