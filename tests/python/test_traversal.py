"""
Tests for folds, fold_while and maps.
"""

import pytest

from packmat import (
    Matrix, Continue, Halt, Suspend,
    fold_left, fold_right, sparse_fold_left, sparse_fold_right, fold_while, sparse_map,
)
from packmat._traversal import iter_cells


def _collect(i, value, acc):
    return acc + [(i, value)]


class TestFolds:
    """Test dense and sparse folds."""

    def test_fold_left_order(self, small_matrix):
        """Test fold_left visits indices ascending."""
        visited = fold_left(small_matrix, _collect, [])
        assert [i for i, _ in visited] == list(range(12))
        assert [v for _, v in visited] == small_matrix.to_list()

    def test_fold_right_order(self, small_matrix):
        """Test fold_right visits indices descending."""
        visited = fold_right(small_matrix, _collect, [])
        assert [i for i, _ in visited] == list(range(11, -1, -1))
        assert [v for _, v in visited] == small_matrix.to_list()[::-1]

    def test_sparse_fold_stops_at_extent(self, sparse_matrix):
        """Test sparse folds only see indices below the extent."""
        left = sparse_fold_left(sparse_matrix, _collect, [])
        assert [i for i, _ in left] == list(range(8))
        assert left[1] == (1, 9)
        assert left[7] == (7, -4)
        right = sparse_fold_right(sparse_matrix, _collect, [])
        assert [i for i, _ in right] == list(range(7, -1, -1))

    def test_sparse_fold_empty_store(self):
        """Test sparse folds over an unwritten matrix return the seed."""
        mat = Matrix.new(4, 4, default=3)
        assert sparse_fold_left(mat, _collect, []) == []
        assert sparse_fold_right(mat, _collect, "seed") == "seed"

    @pytest.mark.parametrize("fixture", ["small_matrix", "sparse_matrix", "random_matrix"])
    def test_sparse_dense_sum_equivalence(self, request, fixture):
        """Test a sparse sum plus the trailing defaults equals the dense sum."""
        mat = request.getfixturevalue(fixture)
        add = lambda i, v, acc: acc + v
        dense = fold_left(mat, add, 0)
        sparse = sparse_fold_left(mat, add, 0)
        trailing = (mat.size() - mat.sparse_extent()) * mat.default
        assert sparse + trailing == dense

    def test_method_delegates(self, small_matrix):
        """Test Matrix methods match the module functions."""
        add = lambda i, v, acc: acc + v
        assert small_matrix.fold_left(add, 0) == fold_left(small_matrix, add, 0)
        assert small_matrix.fold_right(add, 0) == 21
        assert small_matrix.sparse_fold_left(add, 0) == 21
        assert small_matrix.sparse_fold_right(add, 0) == 21

    def test_iter_cells_sparse_reverse(self, sparse_matrix):
        """Test iter_cells flags combine."""
        cells = list(iter_cells(sparse_matrix, sparse=True, reverse=True))
        assert cells[0] == (7, -4)
        assert cells[-1] == (0, 2)


class TestFoldWhile:
    """Test early-exit folds."""

    def test_halt_stops_traversal(self, small_matrix):
        """Test the first Halt ends the fold."""
        seen = []

        def step(i, value, acc):
            seen.append(i)
            return Halt(i) if value == 3 else Continue(acc)

        assert fold_while(small_matrix, step, None) == 5
        assert seen == [0, 1, 2, 3, 4, 5]

    def test_runs_to_completion(self, small_matrix):
        """Test the last Continue accumulator is returned without Halt."""
        result = fold_while(small_matrix, lambda i, v, acc: Continue(acc + v), 0)
        assert result == 21

    def test_reverse(self, small_matrix):
        """Test reverse traversal finds the last match first."""
        result = fold_while(
            small_matrix,
            lambda i, v, acc: Halt(i) if v == 0 else Continue(acc),
            None,
            reverse=True,
        )
        assert result == 10

    def test_sparse(self, sparse_matrix):
        """Test a sparse fold_while never reaches guaranteed-default cells."""
        result = fold_while(
            sparse_matrix,
            lambda i, v, acc: Continue(acc + 1),
            0,
            sparse=True,
        )
        assert result == 8

    def test_invalid_signal(self, small_matrix):
        """Test anything other than Continue/Halt is rejected."""
        with pytest.raises(TypeError):
            fold_while(small_matrix, lambda i, v, acc: acc, 0)
        with pytest.raises(TypeError):
            fold_while(small_matrix, lambda i, v, acc: Suspend(acc), 0)

    def test_signals_are_frozen(self):
        """Test signal values are immutable."""
        signal = Continue(1)
        with pytest.raises(AttributeError):
            signal.acc = 2
        assert Halt(3) == Halt(3)


class TestMaps:
    """Test map and sparse_map."""

    def test_map_is_fully_written(self, sparse_matrix):
        """Test map visits every cell and writes every cell."""
        doubled = sparse_matrix.map(lambda i, v: v * 2)
        assert doubled.to_list() == [v * 2 for v in sparse_matrix.to_list()]
        assert doubled.sparse_extent() == doubled.size()
        assert doubled.default == sparse_matrix.default

    def test_map_receives_indices(self, small_matrix):
        """Test map passes the row-major index."""
        indexed = small_matrix.map(lambda i, v: i)
        assert indexed.to_list() == list(range(12))

    def test_sparse_map_keeps_extent(self, sparse_matrix):
        """Test sparse_map leaves trailing defaults alone."""
        shifted = sparse_map(sparse_matrix, lambda i, v: v + 1)
        assert shifted.sparse_extent() == 8
        values = shifted.to_list()
        assert values[:8] == [3, 10, 3, 3, 3, 3, 3, -3]
        assert values[8:] == [2] * 17

    def test_sparse_map_unwritten(self):
        """Test sparse_map over an unwritten matrix changes nothing."""
        mat = Matrix.new(3, 3, default=1)
        assert mat.sparse_map(lambda i, v: v + 100) == mat

    def test_map_does_not_modify_source(self, small_matrix):
        """Test maps return new matrices."""
        before = small_matrix.to_list()
        small_matrix.map(lambda i, v: 0)
        small_matrix.sparse_map(lambda i, v: 0)
        assert small_matrix.to_list() == before
