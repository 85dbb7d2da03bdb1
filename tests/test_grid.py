"""Tests for Grid occupancy queries and copy-on-write trace placement."""

import pytest

from src.core.board_loader import parse_board
from src.core.types import CellKind, OccupiedPositionError

BOARD = "3 3\nO O O\nO 1 X\nO 2 O\n"


@pytest.fixture
def grid():
    return parse_board(BOARD)


class TestQueries:
    """Tests for bounds-checked occupancy."""

    def test_dimensions_and_terminals(self, grid) -> None:
        assert grid.num_rows == 3
        assert grid.num_cols == 3
        assert grid.start == (1, 1)
        assert grid.end == (2, 1)

    def test_occupancy_kinds(self, grid) -> None:
        assert grid.occupancy(0, 0) is CellKind.OPEN
        assert grid.occupancy(1, 1) is CellKind.START
        assert grid.occupancy(1, 2) is CellKind.BLOCKED
        assert grid.occupancy(2, 1) is CellKind.END

    @pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (3, 0), (0, 3)])
    def test_out_of_bounds_is_not_open(self, grid, cell) -> None:
        assert grid.occupancy(*cell) is None
        assert not grid.is_open(*cell)

    def test_only_open_cells_are_open(self, grid) -> None:
        assert grid.is_open(0, 0)
        assert not grid.is_open(1, 1)  # start
        assert not grid.is_open(2, 1)  # end
        assert not grid.is_open(1, 2)  # blocked

    def test_neighbors_in_fixed_order(self, grid) -> None:
        # up, down, left, right; start/end/blocked are skipped
        assert list(grid.neighbors4((1, 0))) == [(0, 0), (2, 0)]
        assert list(grid.neighbors4((1, 1))) == [(0, 1), (1, 0)]


class TestPlaceTrace:
    """Tests for copy-on-write trace placement."""

    def test_returns_new_grid_and_leaves_original(self, grid) -> None:
        traced = grid.place_trace(0, 0)
        assert traced is not grid
        assert traced.occupancy(0, 0) is CellKind.TRACE
        assert grid.occupancy(0, 0) is CellKind.OPEN
        assert not traced.is_open(0, 0)

    def test_keeps_terminals(self, grid) -> None:
        traced = grid.place_trace(2, 2)
        assert traced.start == grid.start
        assert traced.end == grid.end

    def test_siblings_are_independent(self, grid) -> None:
        a = grid.place_trace(0, 0)
        b = grid.place_trace(0, 1)
        assert a.is_open(0, 1)
        assert b.is_open(0, 0)

    @pytest.mark.parametrize("cell", [(1, 1), (2, 1), (1, 2), (5, 5)])
    def test_non_open_cell_raises(self, grid, cell) -> None:
        with pytest.raises(OccupiedPositionError):
            grid.place_trace(*cell)

    def test_trace_cell_cannot_be_traced_twice(self, grid) -> None:
        traced = grid.place_trace(0, 0)
        with pytest.raises(OccupiedPositionError):
            traced.place_trace(0, 0)

    def test_count_traces(self, grid) -> None:
        traced = grid.place_trace(0, 0).place_trace(1, 0)
        assert traced.count(CellKind.TRACE) == 2
        assert grid.count(CellKind.TRACE) == 0


class TestRender:
    def test_str_matches_board_layout(self, grid) -> None:
        assert str(grid) == "O O O \nO 1 X \nO 2 O \n"
