"""
Pytest configuration and shared fixtures for packmat tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from packmat import Matrix, config


# Try to import scipy
try:
    import scipy.sparse as sp
    HAS_SCIPY = True
except ImportError:
    HAS_SCIPY = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def requires_scipy():
    """Skip test if scipy is not available."""
    if not HAS_SCIPY:
        pytest.skip("scipy not available")


@pytest.fixture(autouse=True)
def reset_config():
    """Give every test the default configuration."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def small_matrix():
    """Create a small test matrix (3x4).

    Matrix:
    [[1, 0, 2, 0],
     [0, 3, 0, 4],
     [5, 0, 0, 6]]
    """
    return Matrix.from_nested([
        [1, 0, 2, 0],
        [0, 3, 0, 4],
        [5, 0, 0, 6],
    ])


@pytest.fixture
def sparse_matrix():
    """5x5 matrix with default 2 and two explicit cells.

    Cells (0, 1) = 9 and (1, 2) = -4; sparse extent is 8.
    """
    return Matrix.new(5, 5, default=2).set((0, 1), 9).set((1, 2), -4)


@pytest.fixture
def dense_matrix_small():
    """Same values as small_matrix as a numpy array."""
    return np.array([
        [1, 0, 2, 0],
        [0, 3, 0, 4],
        [5, 0, 0, 6],
    ])


@pytest.fixture
def random_matrix():
    """Random 7x5 integer matrix with a partially written store."""
    rng = np.random.default_rng(42)
    values = rng.integers(-10, 10, size=20).tolist()
    return Matrix.from_flat(values, 7, 5, default=0)


# =============================================================================
# Helper Functions
# =============================================================================

def assert_matrix_values(mat, expected):
    """Assert a matrix holds the given nested values."""
    expected = np.asarray(expected)
    assert mat.shape == expected.shape
    np.testing.assert_array_equal(np.array(mat.to_nested()), expected)
