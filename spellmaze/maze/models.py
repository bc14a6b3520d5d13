"""Data model for maze grids."""

from typing import List, NamedTuple


# Cell states
OPEN = 0
WALL = 1

# Grid is indexed grid[y][x]
Grid = List[List[int]]

# 4-directional adjacency (dx, dy)
DIRECTIONS = [(1, 0), (-1, 0), (0, 1), (0, -1)]


class Cell(NamedTuple):
    """A cell coordinate on the grid."""
    x: int
    y: int


def grid_width(grid: Grid) -> int:
    """Number of columns in the grid (0 for an empty grid)."""
    return len(grid[0]) if grid else 0


def grid_height(grid: Grid) -> int:
    """Number of rows in the grid."""
    return len(grid)


def in_bounds(grid: Grid, x: int, y: int) -> bool:
    """Check whether (x, y) lies inside the grid."""
    return 0 <= x < grid_width(grid) and 0 <= y < grid_height(grid)


def is_open(grid: Grid, x: int, y: int) -> bool:
    """Check whether (x, y) is inside the grid and OPEN."""
    return in_bounds(grid, x, y) and grid[y][x] == OPEN


def find_start_cell(grid: Grid) -> Cell:
    """
    Pick the player start cell for a grid.

    Prefers (1, 1); if that is a wall, returns the first OPEN cell in
    row-major order. Falls back to (1, 1) when the grid has no open cell.
    """
    if is_open(grid, 1, 1):
        return Cell(1, 1)

    for y, row in enumerate(grid):
        for x, state in enumerate(row):
            if state == OPEN:
                return Cell(x, y)

    return Cell(1, 1)
