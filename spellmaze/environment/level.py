"""Level preparation: maze, opening, start cell and letter placement."""

import random
from typing import Optional

from ..maze import generate_maze, open_up_maze, find_start_cell
from .models import GameConfig, Level
from .placement import choose_decoys, place_letters


def prepare_level(
    word: str,
    config: GameConfig,
    rng: Optional[random.Random] = None
) -> Level:
    """
    Build a fresh level for one attempt at a word.

    Args:
        word: The target word (already trimmed)
        config: Session configuration
        rng: Random source shared by every randomized step

    Returns:
        A new Level; nothing is reused from earlier attempts
    """
    rng = rng or random.Random()

    grid = generate_maze(config.cell_cols, config.cell_rows, rng)
    grid = open_up_maze(grid, config.openness, rng)
    start = find_start_cell(grid)

    decoys = choose_decoys(
        word,
        config.decoy_count,
        rng,
        tricky=config.tricky_letters,
        exclude_word_letters=config.exclude_word_letters,
    )
    placement = place_letters(grid, start, word, decoys, config.min_letter_spacing, rng)

    return Level(
        word=word,
        grid=grid,
        player=start,
        tiles=list(placement.tiles),
        decoys=decoys,
        placement=placement,
    )
