"""Reachability and traversal ordering over open cells."""

import random
from collections import deque
from typing import Deque, List, Optional, Set

from .models import Cell, Grid, DIRECTIONS, is_open


def open_neighbors(grid: Grid, x: int, y: int) -> List[Cell]:
    """Return the OPEN 4-directional neighbors of (x, y)."""
    return [
        Cell(x + dx, y + dy)
        for dx, dy in DIRECTIONS
        if is_open(grid, x + dx, y + dy)
    ]


def reachable_cells(grid: Grid, sx: int, sy: int) -> List[Cell]:
    """
    Flood fill from a start cell.

    Breadth-first over 4-directional OPEN adjacency. The start cell is the
    first entry; the rest follow in visitation order.

    Args:
        grid: The maze grid
        sx: Start column
        sy: Start row

    Returns:
        Reachable cells, or an empty list if the start is out of bounds or a wall
    """
    if not is_open(grid, sx, sy):
        return []

    start = Cell(sx, sy)
    visited: Set[Cell] = {start}
    queue: Deque[Cell] = deque([start])
    cells: List[Cell] = [start]

    while queue:
        current = queue.popleft()
        for neighbor in open_neighbors(grid, current.x, current.y):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)
                cells.append(neighbor)

    return cells


def traversal_path(
    grid: Grid,
    sx: int,
    sy: int,
    rng: Optional[random.Random] = None
) -> List[Cell]:
    """
    Randomized depth-first visitation order from a start cell.

    Each reachable cell appears exactly once, at first visit. Backtracking
    appends nothing, so consecutive entries are usually path-adjacent and
    entries far apart in the list tend to be far apart in the maze.

    Args:
        grid: The maze grid
        sx: Start column
        sy: Start row
        rng: Random source (a fresh unseeded one if not provided)

    Returns:
        Cells in discovery order, starting with the start cell
    """
    if not is_open(grid, sx, sy):
        return []

    rng = rng or random.Random()
    start = Cell(sx, sy)
    visited: Set[Cell] = {start}
    stack: List[Cell] = [start]
    path: List[Cell] = [start]

    while stack:
        top = stack[-1]
        unvisited = [n for n in open_neighbors(grid, top.x, top.y) if n not in visited]
        if not unvisited:
            stack.pop()
            continue

        nxt = rng.choice(unvisited)
        visited.add(nxt)
        stack.append(nxt)
        path.append(nxt)

    return path
