"""
Connectivity over hex adjacency: color-match clusters and ceiling reachability.
"""

from typing import Iterable, Optional, Set

from .grid import BubbleColor, Cell, HexGrid


def match_cluster(
    grid: HexGrid,
    row: int,
    col: int,
    color: Optional[BubbleColor] = None,
) -> Set[Cell]:
    """
    Collect the same-colored cluster containing a seed cell.

    Args:
        grid: Grid to search
        row: Seed row
        col: Seed column
        color: Color to match (defaults to the seed cell's color)

    Returns:
        Set of (row, col) cells. Empty if the seed does not hold the color.
    """
    if color is None:
        color = grid.cell_at(row, col)
        if color is None:
            return set()

    visited: Set[Cell] = set()
    stack = [(row, col)]
    while stack:
        cur = stack.pop()
        if cur in visited:
            continue
        if grid.cell_at(*cur) != color:
            continue
        visited.add(cur)
        for n in grid.neighbors(*cur):
            if n not in visited:
                stack.append(n)
    return visited


def ceiling_reachable(grid: HexGrid) -> Set[Cell]:
    """Occupied cells connected to row 0 through occupied cells of any color."""
    stack = [(0, col) for col in range(grid.cols) if not grid.is_empty(0, col)]
    reachable: Set[Cell] = set()
    while stack:
        cur = stack.pop()
        if cur in reachable:
            continue
        reachable.add(cur)
        for n in grid.neighbors(*cur):
            if n not in reachable and not grid.is_empty(*n):
                stack.append(n)
    return reachable


def floating_cells(grid: HexGrid) -> Set[Cell]:
    """Occupied cells with no path to the ceiling."""
    reachable = ceiling_reachable(grid)
    return {(row, col) for row, col, _ in grid.occupied() if (row, col) not in reachable}


def remove_cells(grid: HexGrid, cells: Iterable[Cell]) -> int:
    """Empty every given cell. Returns how many were occupied."""
    removed = 0
    for row, col in cells:
        if not grid.is_empty(row, col):
            grid.set(row, col, None)
            removed += 1
    return removed
