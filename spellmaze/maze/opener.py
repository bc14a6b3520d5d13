"""Stochastic wall removal that keeps the maze connected."""

import random
from typing import List, Optional

from .models import Cell, Grid, OPEN, WALL
from .connectivity import reachable_cells


# Smallest region reachable from (1, 1) that an opening may leave behind
MIN_REACHABLE = 3


def interior_walls(grid: Grid) -> List[Cell]:
    """List WALL cells that are not on the outer border ring."""
    return [
        Cell(x, y)
        for y in range(1, len(grid) - 1)
        for x in range(1, len(grid[0]) - 1)
        if grid[y][x] == WALL
    ]


def open_up_maze(
    grid: Grid,
    openness: float,
    rng: Optional[random.Random] = None
) -> Grid:
    """
    Remove a fraction of the interior walls from a maze.

    Candidates are shuffled and opened one at a time; a removal is reverted
    if the region reachable from (1, 1) would drop below MIN_REACHABLE cells.
    Stops once floor(interior_walls * openness) removals are accepted or the
    candidates run out.

    Args:
        grid: The maze grid (mutated in place)
        openness: Fraction of interior walls to remove; <= 0 leaves the grid
            as is and values above 1 are treated as 1
        rng: Random source (a fresh unseeded one if not provided)

    Returns:
        The same grid object
    """
    if openness <= 0:
        return grid

    rng = rng or random.Random()
    walls = interior_walls(grid)
    target_removals = int(len(walls) * min(openness, 1.0))
    rng.shuffle(walls)

    removed = 0
    for wall in walls:
        if removed >= target_removals:
            break

        grid[wall.y][wall.x] = OPEN
        if len(reachable_cells(grid, 1, 1)) < MIN_REACHABLE:
            grid[wall.y][wall.x] = WALL
        else:
            removed += 1

    return grid
