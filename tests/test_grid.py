"""
Unit tests for the grid model edits.
"""

from math import inf

import pytest

from pathviz.core.grid import create_grid, toggle_wall, move_start, move_finish, clear_walls
from pathviz.core.types import GridError, OutOfBoundsError, BlockedCellError


@pytest.fixture
def grid():
    return create_grid(4, 6, (1, 1), (2, 4))


def _flagged(g, attr):
    return [n.cell for n in g.iter_nodes() if getattr(n, attr)]


class TestCreateGrid:
    def test_dimensions_and_markers(self, grid):
        assert (grid.rows, grid.cols) == (4, 6)
        assert _flagged(grid, "is_start") == [(1, 1)]
        assert _flagged(grid, "is_finish") == [(2, 4)]
        assert grid.start == (1, 1) and grid.finish == (2, 4)

    def test_nodes_start_unvisited(self, grid):
        for r, row in enumerate(grid.nodes):
            for c, node in enumerate(row):
                assert (node.row, node.col) == (r, c)
                assert node.distance == inf
                assert not node.is_visited
                assert not node.is_wall
                assert node.previous_node is None

    @pytest.mark.parametrize("rows,cols", [(0, 5), (5, 0), (-1, 3)])
    def test_rejects_empty_dimensions(self, rows, cols):
        with pytest.raises(OutOfBoundsError):
            create_grid(rows, cols, (0, 0), (0, 0))

    @pytest.mark.parametrize("start,finish", [((4, 0), (0, 0)), ((0, 0), (0, 6)), ((-1, 0), (0, 0))])
    def test_rejects_markers_out_of_bounds(self, start, finish):
        with pytest.raises(OutOfBoundsError):
            create_grid(4, 6, start, finish)

    def test_start_and_finish_may_share_a_cell(self):
        g = create_grid(1, 1, (0, 0), (0, 0))
        node = g.node((0, 0))
        assert node.is_start and node.is_finish

    def test_default_viewer_size(self):
        g = create_grid(20, 50, (10, 15), (10, 35))
        assert sum(1 for _ in g.iter_nodes()) == 1000
        assert g.node((10, 15)).is_start
        assert g.node((10, 35)).is_finish


class TestToggleWall:
    def test_flips_only_target(self, grid):
        g2 = toggle_wall(grid, 3, 2)
        assert g2.node((3, 2)).is_wall
        assert _flagged(g2, "is_wall") == [(3, 2)]
        # input grid untouched
        assert not grid.node((3, 2)).is_wall

    def test_untouched_rows_are_shared(self, grid):
        g2 = toggle_wall(grid, 3, 2)
        for r in range(3):
            assert g2.nodes[r] is grid.nodes[r], f"row {r} should be reused"
        assert g2.nodes[3] is not grid.nodes[3]
        assert g2.nodes[3][0] is grid.nodes[3][0]

    def test_toggle_twice_restores_grid(self, grid):
        g2 = toggle_wall(toggle_wall(grid, 0, 5), 0, 5)
        assert g2 == grid

    def test_rejects_marker_cells(self, grid):
        with pytest.raises(BlockedCellError):
            toggle_wall(grid, 1, 1)
        with pytest.raises(BlockedCellError):
            toggle_wall(grid, 2, 4)

    @pytest.mark.parametrize("row,col", [(4, 0), (0, 6), (-1, 2)])
    def test_rejects_out_of_bounds(self, grid, row, col):
        with pytest.raises(OutOfBoundsError):
            toggle_wall(grid, row, col)

    def test_clear_walls_keeps_markers(self, grid):
        g2 = toggle_wall(toggle_wall(grid, 0, 0), 3, 5)
        g3 = clear_walls(g2)
        assert _flagged(g3, "is_wall") == []
        assert g3 == grid
        assert g3.nodes[1] is g2.nodes[1]


class TestMoveMarkers:
    def test_move_start(self, grid):
        g2 = move_start(grid, (1, 1), (3, 0))
        assert g2.start == (3, 0)
        assert _flagged(g2, "is_start") == [(3, 0)]
        assert grid.node((1, 1)).is_start
        assert g2.nodes[0] is grid.nodes[0]

    def test_move_finish_within_row(self, grid):
        g2 = move_finish(grid, (2, 4), (2, 0))
        assert g2.finish == (2, 0)
        assert _flagged(g2, "is_finish") == [(2, 0)]

    def test_rejects_wrong_old_coordinate(self, grid):
        with pytest.raises(GridError):
            move_start(grid, (0, 0), (3, 3))

    def test_rejects_wall_target(self, grid):
        walled = toggle_wall(grid, 0, 3)
        with pytest.raises(BlockedCellError):
            move_start(walled, (1, 1), (0, 3))
        with pytest.raises(BlockedCellError):
            move_finish(walled, (2, 4), (0, 3))

    def test_rejects_out_of_bounds_target(self, grid):
        with pytest.raises(OutOfBoundsError):
            move_finish(grid, (2, 4), (9, 9))

    def test_start_onto_finish(self, grid):
        g2 = move_start(grid, (1, 1), (2, 4))
        node = g2.node((2, 4))
        assert node.is_start and node.is_finish
        assert len(_flagged(g2, "is_start")) == 1
