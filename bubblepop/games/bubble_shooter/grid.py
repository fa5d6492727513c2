"""
Staggered hex grid - coordinate mapping and the occupancy table.

Odd rows are pushed right by half a cell and rows are packed a little
tighter than one diameter, which gives the close hexagonal packing the
whole game relies on. Cells hold a BubbleColor or are empty.
"""

import random
from enum import IntEnum
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

Cell = Tuple[int, int]

EMPTY = -1


class BubbleColor(IntEnum):
    """Bubble palette. The core only ever compares colors for equality."""
    RED = 0
    ORANGE = 1
    AMBER = 2
    GREEN = 3
    BLUE = 4
    VIOLET = 5


PALETTE: Tuple[BubbleColor, ...] = tuple(BubbleColor)


class HexGrid:
    """
    Fixed-size table of rows x cols cells on a staggered layout.

    Dimensions are fixed for the lifetime of the grid; only contents change.
    Coordinates passed to cell accessors must already be in range.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        cell_size: float = 18.0,
        row_overlap: float = 3.0,
    ):
        """
        Initialize an empty grid.

        Args:
            rows: Number of rows (row 0 is the ceiling)
            cols: Number of columns
            cell_size: Cell diameter in pixels
            row_overlap: How much closer rows sit than one diameter
        """
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")

        self.rows = rows
        self.cols = cols
        self.cell_size = float(cell_size)
        self.row_spacing = self.cell_size - row_overlap
        self.cell_radius = self.cell_size / 2 - 1

        self.cells = np.full((rows, cols), EMPTY, dtype=np.int8)

        # Cell centres never move, so cache them for nearest-cell lookups
        row_idx, col_idx = np.indices((rows, cols))
        self._centers_x = (
            col_idx * self.cell_size
            + (row_idx % 2) * (self.cell_size / 2)
            + self.cell_size / 2
        ).astype(np.float64)
        self._centers_y = (row_idx * self.row_spacing + self.cell_size / 2).astype(np.float64)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell_at(self, row: int, col: int) -> Optional[BubbleColor]:
        """Return the color at (row, col), or None when empty."""
        value = int(self.cells[row, col])
        if value == EMPTY:
            return None
        return BubbleColor(value)

    def is_empty(self, row: int, col: int) -> bool:
        return int(self.cells[row, col]) == EMPTY

    def set(self, row: int, col: int, color: Optional[BubbleColor]) -> None:
        """Occupy (row, col) with a color, or empty it with None."""
        self.cells[row, col] = EMPTY if color is None else int(color)

    def clear(self) -> None:
        self.cells.fill(EMPTY)

    def to_position(self, row: int, col: int) -> Tuple[float, float]:
        """Continuous (x, y) centre of a cell."""
        return (float(self._centers_x[row, col]), float(self._centers_y[row, col]))

    def nearest_cell(self, x: float, y: float) -> Cell:
        """
        Find the cell whose centre is closest to (x, y).

        Scans every cell; ties go to the first cell in row-major order.
        Always returns an in-range coordinate.
        """
        dist_sq = (self._centers_x - x) ** 2 + (self._centers_y - y) ** 2
        flat_index = int(np.argmin(dist_sq))
        row, col = divmod(flat_index, self.cols)
        return (row, col)

    def neighbors(self, row: int, col: int) -> List[Cell]:
        """
        In-bounds hex neighbours of a cell.

        Up, down, left, right, plus the two diagonals on the side the row
        is staggered towards: left on even rows, right on odd rows.
        """
        diag = -1 if row % 2 == 0 else 1
        candidates = [
            (row - 1, col),
            (row + 1, col),
            (row, col - 1),
            (row, col + 1),
            (row - 1, col + diag),
            (row + 1, col + diag),
        ]
        return [(r, c) for r, c in candidates if self.in_bounds(r, c)]

    def occupied(self) -> Iterator[Tuple[int, int, BubbleColor]]:
        """Iterate (row, col, color) over every occupied cell."""
        rows, cols = np.nonzero(self.cells != EMPTY)
        for row, col in zip(rows.tolist(), cols.tolist()):
            yield row, col, BubbleColor(int(self.cells[row, col]))

    def count_occupied(self) -> int:
        return int(np.count_nonzero(self.cells != EMPTY))

    def shift_rows(self, direction: int) -> None:
        """
        Translate every row's contents by one index.

        direction -1 moves contents toward row 0: row 0 is discarded and an
        empty row appears at the far end. direction +1 is the mirror image.
        """
        if direction == -1:
            self.cells[:-1] = self.cells[1:].copy()
            self.cells[-1] = EMPTY
        elif direction == 1:
            self.cells[1:] = self.cells[:-1].copy()
            self.cells[0] = EMPTY
        else:
            raise ValueError(f"Shift direction must be -1 or 1, got {direction}")

    def fill_random(
        self,
        rng: random.Random,
        palette: Sequence[BubbleColor] = PALETTE,
        filled_rows: int = 4,
    ) -> None:
        """Clear the grid and fill the top rows with random colors."""
        self.clear()
        for row in range(min(filled_rows, self.rows)):
            for col in range(self.cols):
                self.set(row, col, rng.choice(palette))

    def snapshot(self) -> List[List[int]]:
        """Plain nested lists of color ids (-1 for empty), safe to hand out."""
        return self.cells.tolist()

    def __repr__(self) -> str:
        return f"HexGrid(rows={self.rows}, cols={self.cols}, occupied={self.count_occupied()})"
