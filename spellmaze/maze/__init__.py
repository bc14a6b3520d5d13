"""Maze generation and analysis for spellmaze."""

from .models import Cell, Grid, OPEN, WALL, DIRECTIONS, in_bounds, is_open, find_start_cell
from .generator import generate_maze, maze_cells
from .opener import open_up_maze, interior_walls, MIN_REACHABLE
from .connectivity import reachable_cells, traversal_path, open_neighbors
from .render import render_level

__all__ = [
    # Models
    "Cell",
    "Grid",
    "OPEN",
    "WALL",
    "DIRECTIONS",
    "in_bounds",
    "is_open",
    "find_start_cell",
    # Generation
    "generate_maze",
    "maze_cells",
    # Opening
    "open_up_maze",
    "interior_walls",
    "MIN_REACHABLE",
    # Connectivity
    "reachable_cells",
    "traversal_path",
    "open_neighbors",
    # Rendering
    "render_level",
]
