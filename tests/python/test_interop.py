"""
Tests for numpy / scipy conversions.
"""

import numpy as np
import pytest

from packmat import Matrix, ShapeMismatch, to_numpy, from_numpy, to_scipy


class TestNumpy:
    """Test numpy conversion."""

    def test_to_numpy(self, small_matrix, dense_matrix_small):
        """Test dense export."""
        arr = to_numpy(small_matrix)
        assert arr.shape == (3, 4)
        np.testing.assert_array_equal(arr, dense_matrix_small)

    def test_to_numpy_dtype(self, sparse_matrix):
        """Test dtype selection and default fill."""
        arr = sparse_matrix.to_numpy(dtype=np.float64)
        assert arr.dtype == np.float64
        assert arr[0, 1] == 9.0
        assert arr[4, 4] == 2.0

    def test_from_numpy(self, dense_matrix_small, small_matrix):
        """Test import of a 2-d array."""
        mat = from_numpy(dense_matrix_small)
        assert mat == small_matrix
        assert Matrix.from_numpy(dense_matrix_small, default=0) == small_matrix

    def test_from_numpy_array_like(self):
        """Test nested lists are accepted."""
        mat = Matrix.from_numpy([[1.5, 2.5]])
        assert mat.shape == (1, 2)
        assert mat.to_list() == [1.5, 2.5]

    @pytest.mark.parametrize("array", [np.zeros(3), np.zeros((2, 2, 2)), np.zeros((0, 3))])
    def test_from_numpy_invalid(self, array):
        """Test non-2-d or empty arrays are rejected."""
        with pytest.raises(ShapeMismatch):
            from_numpy(array)


class TestScipy:
    """Test scipy conversion."""

    def test_to_scipy(self, requires_scipy, small_matrix, dense_matrix_small):
        """Test COO export stores only non-zero cells."""
        coo = to_scipy(small_matrix)
        assert coo.shape == (3, 4)
        assert coo.nnz == 6
        np.testing.assert_array_equal(coo.toarray(), dense_matrix_small)

    def test_to_scipy_partial_store(self, requires_scipy):
        """Test unwritten cells stay implicit."""
        mat = Matrix.new(100, 100).set((3, 7), 1.5)
        coo = mat.to_scipy()
        assert coo.nnz == 1
        assert coo.toarray()[3, 7] == 1.5

    def test_to_scipy_nonzero_default(self, requires_scipy, sparse_matrix):
        """Test a non-zero default cannot be represented."""
        with pytest.raises(ValueError):
            to_scipy(sparse_matrix)
