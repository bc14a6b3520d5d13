"""Perfect maze generation by randomized depth-first carving."""

import random
from typing import List, Optional

from .models import Cell, Grid, OPEN, WALL


# Maze-cell steps: two grid cells per move so connectors sit in between
CARVE_STEPS = [(0, -2), (2, 0), (0, 2), (-2, 0)]


def generate_maze(
    cell_cols: int,
    cell_rows: int,
    rng: Optional[random.Random] = None
) -> Grid:
    """
    Generate a perfect maze of walls and open cells.

    The grid is (2*cell_cols+1) wide and (2*cell_rows+1) tall. Maze cells sit
    on odd coordinates; the even coordinates between them are connectors that
    get carved to form passages. Carving is an iterative depth-first walk from
    (1, 1), so the result is a spanning tree over the maze cells.

    Args:
        cell_cols: Number of maze-cell columns (>= 1)
        cell_rows: Number of maze-cell rows (>= 1)
        rng: Random source (a fresh unseeded one if not provided)

    Returns:
        Grid indexed grid[y][x] holding OPEN or WALL

    Raises:
        ValueError: If either dimension is below 1
    """
    if cell_cols < 1 or cell_rows < 1:
        raise ValueError(
            f"Maze needs at least one cell in each axis (got {cell_cols}x{cell_rows})"
        )

    rng = rng or random.Random()
    width = cell_cols * 2 + 1
    height = cell_rows * 2 + 1
    grid = [[WALL] * width for _ in range(height)]

    grid[1][1] = OPEN
    stack: List[Cell] = [Cell(1, 1)]

    while stack:
        current = stack[-1]

        # Unvisited maze cells two steps away are still walls
        neighbors = []
        for dx, dy in CARVE_STEPS:
            nx, ny = current.x + dx, current.y + dy
            if 0 < nx < width and 0 < ny < height and grid[ny][nx] == WALL:
                neighbors.append((nx, ny, current.x + dx // 2, current.y + dy // 2))

        if not neighbors:
            stack.pop()
            continue

        nx, ny, between_x, between_y = rng.choice(neighbors)
        grid[between_y][between_x] = OPEN
        grid[ny][nx] = OPEN
        stack.append(Cell(nx, ny))

    return grid


def maze_cells(grid: Grid) -> List[Cell]:
    """List every maze cell (odd x, odd y) of a generated grid."""
    return [
        Cell(x, y)
        for y in range(1, len(grid), 2)
        for x in range(1, len(grid[0]), 2)
    ]
