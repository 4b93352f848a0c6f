"""Tests for the label grid and frontier stack."""

import numpy as np
import pytest

from reggrow.grid import FrontierStack, LabelGrid, StackUnderflowError


class TestLabelGrid:
    def test_starts_unassigned(self):
        grid = LabelGrid(3, 4)
        assert grid.shape == (3, 4)
        assert grid.count_assigned() == 0
        assert grid.current_region == 0
        assert not grid.to_array().any()

    def test_set_and_counts(self):
        grid = LabelGrid(3, 3)
        grid.set(0, 0, 1)
        grid.set(0, 1, 1)
        grid.set(2, 2, 2)
        assert grid.get(0, 1) == 1
        assert grid.count_assigned() == 3
        assert grid.count_with_id(1) == 2
        assert grid.count_with_id(2) == 1

    def test_set_same_id_twice_is_noop(self):
        grid = LabelGrid(2, 2)
        grid.set(1, 1, 4)
        grid.set(1, 1, 4)
        assert grid.count_assigned() == 1

    def test_relabel_to_other_region_rejected(self):
        grid = LabelGrid(2, 2)
        grid.set(0, 0, 1)
        with pytest.raises(ValueError):
            grid.set(0, 0, 2)
        assert grid.get(0, 0) == 1

    @pytest.mark.parametrize("bad", [0, -3])
    def test_non_positive_id_rejected(self, bad):
        with pytest.raises(ValueError):
            LabelGrid(2, 2).set(0, 0, bad)

    def test_reset_id(self):
        grid = LabelGrid(2, 3)
        for col in range(3):
            grid.set(0, col, 1)
        grid.set(1, 0, 2)
        assert grid.reset_id(1) == 3
        assert grid.count_with_id(1) == 0
        assert grid.count_assigned() == 1
        assert grid.get(1, 0) == 2

    def test_is_complete(self):
        grid = LabelGrid(1, 2)
        grid.set(0, 0, 1)
        assert not grid.is_complete()
        grid.set(0, 1, 1)
        assert grid.is_complete()

    def test_open_and_dissolve_region(self):
        grid = LabelGrid(3, 3)
        first = grid.open_region(0, 0)
        second = grid.open_region(2, 2)
        grid.set(2, 1, second)
        assert (first, second) == (1, 2)

        grid.dissolve_region(second)
        assert grid.current_region == 1
        assert grid.count_with_id(2) == 0
        assert grid.count_assigned() == 1

    def test_only_latest_region_can_be_dissolved(self):
        grid = LabelGrid(2, 2)
        grid.open_region(0, 0)
        grid.open_region(1, 1)
        with pytest.raises(ValueError):
            grid.dissolve_region(1)

    def test_to_array_is_a_copy(self):
        grid = LabelGrid(2, 2)
        arr = grid.to_array()
        arr[0, 0] = 9
        assert grid.get(0, 0) == 0
        assert arr.dtype == np.int32

    @pytest.mark.parametrize("shape", [(0, 4), (4, 0)])
    def test_empty_grid_rejected(self, shape):
        with pytest.raises(ValueError):
            LabelGrid(*shape)


class TestFrontierStack:
    def test_lifo_order(self):
        stack = FrontierStack(5, 5)
        for coord in [(0, 0), (1, 2), (4, 4)]:
            stack.push(coord)
        assert stack.size() == 3
        assert stack.pop() == (4, 4)
        assert stack.pop() == (1, 2)
        assert stack.pop() == (0, 0)
        assert stack.is_empty()

    def test_pop_empty_raises(self):
        stack = FrontierStack(2, 2)
        with pytest.raises(StackUnderflowError):
            stack.pop()
        # contract violation is also a plain IndexError
        with pytest.raises(IndexError):
            stack.pop()

    @pytest.mark.parametrize("coord", [(-1, 0), (0, -1), (2, 0), (0, 3)])
    def test_out_of_bounds_push_rejected(self, coord):
        stack = FrontierStack(2, 3)
        with pytest.raises(ValueError):
            stack.push(coord)
        assert stack.is_empty()

    def test_grows_without_limit(self):
        stack = FrontierStack(100, 100)
        for i in range(5000):
            stack.push((i % 100, i // 100))
        assert len(stack) == 5000
        stack.clear()
        assert stack.is_empty()
