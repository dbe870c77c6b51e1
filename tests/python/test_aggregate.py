"""
Tests for aggregate algorithms: extremes, search and sums.
"""

import pytest

from packmat import (
    Matrix, NotFound, PositionOutOfBounds, argmin, argmax, member, find, index, trace,
)
from packmat import _aggregate, _traversal


@pytest.fixture
def visited(monkeypatch):
    """Record every index the traversal engine hands to a fold."""
    seen = []
    iter_cells = _traversal.iter_cells

    def recording(mat, sparse=False, reverse=False):
        for i, value in iter_cells(mat, sparse=sparse, reverse=reverse):
            seen.append(i)
            yield i, value

    monkeypatch.setattr(_traversal, "iter_cells", recording)
    return seen


class TestExtremes:
    """Test min/max/argmin/argmax."""

    def test_uniform_matrix(self):
        """Test an unwritten matrix reports its default."""
        mat = Matrix.new(10, 10, default=7)
        assert mat.min() == 7
        assert mat.max() == 7
        assert mat.argmin() == (0, 0)
        assert mat.argmax() == (0, 0)

    def test_small_matrix(self, small_matrix):
        """Test extremes of a fully written matrix."""
        assert small_matrix.min() == 0
        assert small_matrix.max() == 6
        assert small_matrix.argmin() == (0, 1)
        assert small_matrix.argmax() == (2, 3)

    def test_default_counts_when_not_written(self):
        """Test the guaranteed-default cells take part in the comparison."""
        mat = Matrix.new(3, 3, default=5).set((0, 0), 8)
        assert mat.min() == 5
        assert mat.argmin() == (0, 1)
        assert mat.max() == 8
        assert mat.argmax() == (0, 0)

    def test_fold_starts_from_default(self):
        """Test the default takes part even when every cell is written."""
        mat = Matrix.from_flat([5, 6, 7, 8], 2, 2, default=0)
        assert mat.min() == 0
        assert mat.max() == 8
        high = Matrix.from_flat([5, 6, 7, 8], 2, 2, default=100)
        assert high.max() == 100
        assert high.min() == 5

    def test_arg_extreme_when_no_cell_holds_default(self):
        """Test argmin/argmax fall back to the written cells."""
        mat = Matrix.from_flat([5, 6, 7, 8], 2, 2, default=0)
        assert mat.argmin() == (0, 0)
        assert mat.argmax() == (1, 1)

    def test_arg_extreme_written_default(self):
        """Test a written cell equal to the default is located."""
        mat = Matrix.from_flat([3, 0, 5, 1], 2, 2, default=0)
        assert mat.min() == 0
        assert mat.argmin() == (0, 1)

    def test_guaranteed_default_position(self):
        """Test argmin points at the sparse extent when only trailing cells hold the minimum."""
        mat = Matrix.from_flat([5, 6], 2, 2, default=1)
        assert mat.min() == 1
        assert mat.argmin() == (1, 0)

    def test_explicit_default_before_extent(self):
        """Test a written default below the extent is the first occurrence."""
        mat = Matrix.new(2, 3, default=0).set((0, 2), 4).reset((0, 2)).set((1, 0), 9)
        assert mat.min() == 0
        assert mat.argmin() == (0, 0)

    def test_tie_break_first_occurrence(self):
        """Test ties resolve to the lowest index."""
        mat = Matrix.from_nested([[3, 9, 1], [9, 1, 3]])
        assert mat.argmax() == (0, 1)
        assert mat.argmin() == (0, 2)

    def test_sparse_matrix(self, sparse_matrix):
        """Test extremes with a non-zero default."""
        assert sparse_matrix.max() == 9
        assert sparse_matrix.argmax() == (0, 1)
        assert sparse_matrix.min() == -4
        assert argmin(sparse_matrix) == (1, 2)
        assert argmax(sparse_matrix) == sparse_matrix.argmax()

    def test_random_against_list(self, random_matrix):
        """Test extremes against the builtin reductions."""
        values = random_matrix.to_list()
        assert random_matrix.min() == min(values)
        assert random_matrix.max() == max(values)
        assert random_matrix.position_to_index(random_matrix.argmin()) == values.index(min(values))
        assert random_matrix.position_to_index(random_matrix.argmax()) == values.index(max(values))


class TestSearch:
    """Test member/find/index."""

    def test_member(self, sparse_matrix):
        """Test membership for written, default and absent values."""
        assert member(sparse_matrix, 9)
        assert member(sparse_matrix, -4)
        assert member(sparse_matrix, 2)
        assert not member(sparse_matrix, 100)
        assert 9 in sparse_matrix
        assert 100 not in sparse_matrix

    def test_member_default_skips_scan(self, sparse_matrix, visited):
        """Test the default is answered without visiting any cell."""
        assert sparse_matrix.member(2)
        assert visited == []

    def test_member_stops_at_first_match(self, small_matrix, visited):
        """Test the scan ends at the first matching index."""
        assert small_matrix.member(3)
        assert visited == [0, 1, 2, 3, 4, 5]

    def test_member_miss_stays_below_extent(self, sparse_matrix, visited):
        """Test a miss scans only the cells below the sparse extent."""
        assert not sparse_matrix.member(100)
        assert visited == list(range(8))

    def test_find_stops_at_first_match(self, small_matrix, visited):
        """Test find ends its scan at the first match."""
        assert small_matrix.find(4) == (1, 3)
        assert visited == list(range(8))

    def test_member_fully_written(self):
        """Test the default is not a member unless some cell holds it."""
        mat = Matrix.from_flat([1, 2, 3, 4], 2, 2, default=0)
        assert not mat.member(0)

    def test_find(self, small_matrix):
        """Test find returns the first position."""
        assert find(small_matrix, 0) == (0, 1)
        assert find(small_matrix, 5) == (2, 0)
        assert small_matrix.find(42) is None

    def test_find_default_beyond_extent(self):
        """Test the default resolves to the sparse extent when unwritten below it."""
        mat = Matrix.from_flat([7, 8, 9], 2, 3, default=0)
        assert mat.find(0) == (1, 0)

    def test_find_default_below_extent(self, sparse_matrix):
        """Test a default below the extent is found first."""
        assert sparse_matrix.find(2) == (0, 0)

    def test_index(self, small_matrix):
        """Test index mirrors find and raises when absent."""
        assert index(small_matrix, 4) == (1, 3)
        with pytest.raises(NotFound):
            small_matrix.index(42)

    def test_not_found_is_lookup_error(self, small_matrix):
        """Test NotFound can be caught as LookupError."""
        with pytest.raises(LookupError):
            small_matrix.index(-1)


class TestSums:
    """Test sum and trace."""

    def test_sum_matches_fold(self, random_matrix):
        """Test sum against a dense fold."""
        expected = random_matrix.fold_left(lambda i, v, acc: acc + v, 0)
        assert random_matrix.sum() == expected

    def test_sum_with_default(self):
        """Test untouched cells contribute the default."""
        mat = Matrix.new(5, 5, default=2).set((0, 0), 8)
        assert mat.sum() == 56

    def test_sum_unwritten(self):
        """Test the sum of an unwritten matrix."""
        assert _aggregate.sum(Matrix.new(3, 4, default=1.5)) == 18.0

    def test_trace(self, small_matrix):
        """Test trace of square and identity matrices."""
        mat = Matrix.from_nested([[1, 2], [3, 4]])
        assert mat.trace() == 5
        assert trace(Matrix.identity(4)) == 4

    def test_trace_tall_matrix(self):
        """Test trace of a tall matrix sums cells (i, i) of every column."""
        mat = Matrix.from_nested([[1, 2], [3, 4], [5, 6]])
        assert mat.trace() == 5

    def test_trace_wide_matrix(self, small_matrix):
        """Test trace of a matrix with more columns than rows is rejected."""
        with pytest.raises(PositionOutOfBounds):
            small_matrix.trace()
