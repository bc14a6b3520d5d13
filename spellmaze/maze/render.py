"""Plain-text rendering of a maze level."""

from typing import Dict, Optional, Tuple

from .models import Grid, WALL


WALL_CHAR = "#"
FLOOR_CHAR = "."
PLAYER_CHAR = "@"


def render_level(
    grid: Grid,
    player: Optional[Tuple[int, int]] = None,
    letters: Optional[Dict[Tuple[int, int], str]] = None
) -> str:
    """
    Render a grid to a string, one text row per grid row.

    Walls are '#', floor is '.', tiles show their uppercase letter and the
    player is '@' (drawn over any tile underneath).

    Args:
        grid: The maze grid
        player: Optional (x, y) of the player
        letters: Optional mapping of (x, y) to the tile character there

    Returns:
        The rendered grid, or "" for an empty grid
    """
    if not grid:
        return ""

    letters = letters or {}
    lines = []
    for y, row in enumerate(grid):
        chars = []
        for x, state in enumerate(row):
            if player is not None and (x, y) == tuple(player):
                chars.append(PLAYER_CHAR)
            elif (x, y) in letters:
                chars.append(letters[(x, y)].upper())
            else:
                chars.append(WALL_CHAR if state == WALL else FLOOR_CHAR)
        lines.append("".join(chars))

    return "\n".join(lines)
