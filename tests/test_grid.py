"""
Tests for the staggered hex grid.
"""

import random

import numpy as np
import pytest

from bubblepop.games.bubble_shooter.grid import BubbleColor, EMPTY, HexGrid, PALETTE


class TestGridGeometry:
    """Tests for cell <-> position mapping."""

    def test_row_spacing_and_radius(self):
        """Rows pack tighter than one diameter."""
        grid = HexGrid(10, 8)

        assert grid.row_spacing == 15.0
        assert grid.cell_radius == 8.0
        assert grid.row_spacing < grid.cell_size

    def test_even_row_positions(self):
        """Even rows start at the left edge."""
        grid = HexGrid(10, 8)

        assert grid.to_position(0, 0) == (9.0, 9.0)
        assert grid.to_position(2, 3) == (63.0, 39.0)

    def test_odd_rows_are_staggered(self):
        """Odd rows shift right by half a cell."""
        grid = HexGrid(10, 8)

        even_x, _ = grid.to_position(0, 2)
        odd_x, odd_y = grid.to_position(1, 2)

        assert odd_x - even_x == pytest.approx(9.0)
        assert odd_y == pytest.approx(24.0)

    def test_nearest_cell_round_trip(self):
        """Every cell centre maps back to the same cell."""
        grid = HexGrid(10, 8)

        for row in range(grid.rows):
            for col in range(grid.cols):
                x, y = grid.to_position(row, col)
                assert grid.nearest_cell(x, y) == (row, col)

    def test_nearest_cell_is_total(self):
        """Points far outside the grid still map to an in-range cell."""
        grid = HexGrid(10, 8)

        for x, y in [(-500, -500), (1000, 9), (77, 5000), (-3, 120)]:
            row, col = grid.nearest_cell(x, y)
            assert grid.in_bounds(row, col)

    def test_nearest_cell_near_centre(self):
        """A point slightly off a centre still snaps to that cell."""
        grid = HexGrid(10, 8)
        x, y = grid.to_position(4, 4)

        assert grid.nearest_cell(x + 3, y - 2) == (4, 4)


class TestGridContents:
    """Tests for the occupancy table."""

    def test_new_grid_is_empty(self):
        grid = HexGrid(10, 8)

        assert grid.count_occupied() == 0
        assert grid.cell_at(0, 0) is None

    def test_set_and_clear_cell(self):
        grid = HexGrid(10, 8)

        grid.set(3, 4, BubbleColor.BLUE)
        assert grid.cell_at(3, 4) == BubbleColor.BLUE
        assert not grid.is_empty(3, 4)

        grid.set(3, 4, None)
        assert grid.is_empty(3, 4)

    def test_occupied_iterates_cells(self):
        grid = HexGrid(4, 4)
        grid.set(0, 1, BubbleColor.RED)
        grid.set(2, 3, BubbleColor.GREEN)

        assert sorted(grid.occupied()) == [
            (0, 1, BubbleColor.RED),
            (2, 3, BubbleColor.GREEN),
        ]

    def test_invalid_dimensions(self):
        with pytest.raises(ValueError):
            HexGrid(0, 8)

    def test_fill_random_top_rows_only(self):
        """Only the requested top rows are filled."""
        grid = HexGrid(10, 8)
        grid.fill_random(random.Random(5), PALETTE, filled_rows=4)

        assert grid.count_occupied() == 32
        assert np.all(grid.cells[:4] != EMPTY)
        assert np.all(grid.cells[4:] == EMPTY)

    def test_fill_random_is_reproducible(self):
        a = HexGrid(10, 8)
        b = HexGrid(10, 8)
        a.fill_random(random.Random(99))
        b.fill_random(random.Random(99))

        assert a.snapshot() == b.snapshot()

    def test_snapshot_is_detached(self):
        """Mutating a snapshot does not touch the grid."""
        grid = HexGrid(3, 3)
        snap = grid.snapshot()
        snap[0][0] = int(BubbleColor.RED)

        assert grid.is_empty(0, 0)


class TestNeighbors:
    """Tests for hex adjacency."""

    def test_even_row_diagonals_lean_left(self):
        grid = HexGrid(10, 8)

        assert set(grid.neighbors(2, 3)) == {
            (1, 3), (3, 3), (2, 2), (2, 4), (1, 2), (3, 2),
        }

    def test_odd_row_diagonals_lean_right(self):
        grid = HexGrid(10, 8)

        assert set(grid.neighbors(1, 3)) == {
            (0, 3), (2, 3), (1, 2), (1, 4), (0, 4), (2, 4),
        }

    def test_neighbors_are_geometric_neighbors(self):
        """Every hex neighbour centre is about one diameter away."""
        grid = HexGrid(10, 8)

        for row in range(grid.rows):
            for col in range(grid.cols):
                x, y = grid.to_position(row, col)
                for r, c in grid.neighbors(row, col):
                    nx, ny = grid.to_position(r, c)
                    assert np.hypot(nx - x, ny - y) <= grid.cell_size

    def test_corner_neighbors_stay_in_bounds(self):
        grid = HexGrid(10, 8)

        assert set(grid.neighbors(0, 0)) == {(1, 0), (0, 1)}


class TestShiftRows:
    """Tests for the data half of the row shift."""

    def test_shift_up_discards_row_zero(self):
        grid = HexGrid(4, 2)
        grid.set(0, 0, BubbleColor.RED)
        grid.set(1, 0, BubbleColor.BLUE)

        grid.shift_rows(-1)

        assert grid.cell_at(0, 0) == BubbleColor.BLUE
        assert grid.count_occupied() == 1
        assert np.all(grid.cells[3] == EMPTY)

    def test_shift_down_inserts_empty_row(self):
        grid = HexGrid(4, 2)
        grid.set(0, 1, BubbleColor.RED)
        grid.set(3, 0, BubbleColor.GREEN)

        grid.shift_rows(1)

        assert np.all(grid.cells[0] == EMPTY)
        assert grid.cell_at(1, 1) == BubbleColor.RED
        # Last row fell off the end
        assert grid.count_occupied() == 1

    def test_shift_keeps_dimensions(self):
        grid = HexGrid(10, 8)
        grid.shift_rows(1)
        grid.shift_rows(-1)

        assert grid.shape == (10, 8)

    def test_invalid_direction(self):
        grid = HexGrid(4, 4)

        with pytest.raises(ValueError):
            grid.shift_rows(2)
