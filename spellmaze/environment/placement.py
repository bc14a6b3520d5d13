"""
Letter placement onto a maze.

Picks an ordered pool of open cells (a randomized depth-first traversal when
it is large enough, otherwise a flood fill, flattening the maze as a last
resort) and spreads the word letters, then the decoys, along that pool.

Spacing is best effort:
1. Spaced - strictly increasing pool indices at least min_spacing apart
2. Even - evenly spread indices with jitter when spacing cannot be honored
3. Shuffled - random cells, possibly fewer tiles than letters, when the pool
   is smaller than the letter count even after flattening
"""

import random
import string
from typing import List, Optional, Sequence, Set

from ..maze.models import Cell, Grid, OPEN, WALL
from ..maze.connectivity import reachable_cells, traversal_path
from .models import LetterTile, Placement


ALPHABET = string.ascii_lowercase

# Letters commonly confused with one another when spelling
TRICKY_LETTER_MAP = {
    "s": "c",
    "c": "k",
    "g": "j",
    "a": "e",
    "e": "a",
}


def random_letters(
    count: int,
    rng: random.Random,
    exclude: str = ""
) -> List[str]:
    """
    Draw letters uniformly and independently from the alphabet.

    Args:
        count: Number of letters to draw
        rng: Random source
        exclude: Letters to leave out (ignored if it covers the whole alphabet)

    Returns:
        List of lowercase letters
    """
    excluded = set(exclude.lower())
    choices = [c for c in ALPHABET if c not in excluded] or list(ALPHABET)
    return [rng.choice(choices) for _ in range(count)]


def tricky_letters(word: str) -> List[str]:
    """
    Confusable letters for a word.

    For each letter of the word with an entry in TRICKY_LETTER_MAP, yields its
    partner unless the partner already appears in the word. Repeats are kept
    ("glass" gives j, e, c, c).
    """
    letters = word.lower()
    present = set(letters)
    return [
        TRICKY_LETTER_MAP[c]
        for c in letters
        if c in TRICKY_LETTER_MAP and TRICKY_LETTER_MAP[c] not in present
    ]


def choose_decoys(
    word: str,
    count: int,
    rng: random.Random,
    tricky: bool = False,
    exclude_word_letters: bool = False
) -> List[str]:
    """
    Pick decoy letters for a word.

    By default decoys are fully random and may repeat letters of the word.
    With tricky=True, shuffled confusable letters are used first and the rest
    is filled randomly. exclude_word_letters keeps random fill letters out of
    the word.

    Args:
        word: The target word
        count: Number of decoys
        rng: Random source
        tricky: Prefer confusable letters
        exclude_word_letters: Never draw a random letter that is in the word

    Returns:
        List of `count` lowercase letters
    """
    if count <= 0:
        return []

    decoys: List[str] = []
    if tricky:
        candidates = tricky_letters(word)
        rng.shuffle(candidates)
        decoys.extend(candidates[:count])

    exclude = word if exclude_word_letters else ""
    decoys.extend(random_letters(count - len(decoys), rng, exclude=exclude))
    return decoys


def is_spacing_feasible(total: int, pool_size: int, min_spacing: int) -> bool:
    """Check whether `total` letters fit `min_spacing` apart in a pool."""
    return total <= 1 or (total - 1) * min_spacing <= pool_size - 1


def spaced_indices(
    total: int,
    pool_size: int,
    min_spacing: int,
    rng: random.Random
) -> List[int]:
    """
    Choose increasing pool indices at least `min_spacing` apart.

    Each index is drawn between the previous index plus min_spacing and the
    last index that still leaves room for the remaining letters. Assumes the
    spacing is feasible.
    """
    chosen: List[int] = []
    for i in range(total):
        remaining = total - 1 - i
        min_index = 0 if i == 0 else chosen[-1] + min_spacing
        max_index = pool_size - 1 - remaining * min_spacing

        idx = min_index
        if max_index > min_index:
            idx = rng.randint(min_index, max_index)
        chosen.append(max(0, min(pool_size - 1, idx)))

    return chosen


def resolve_duplicates(indices: Sequence[int], pool_size: int) -> List[int]:
    """
    Make chosen indices unique.

    A duplicate moves forward to the next unused index; if it hits the end of
    the pool it takes the first unused index from the start.
    """
    used: Set[int] = set()
    resolved: List[int] = []
    for idx in indices:
        tries = 0
        while idx in used and tries < pool_size:
            idx = min(pool_size - 1, idx + 1)
            tries += 1
        if idx in used:
            idx = next((s for s in range(pool_size) if s not in used), idx)
        used.add(idx)
        resolved.append(idx)

    return resolved


def even_indices(total: int, pool_size: int, rng: random.Random) -> List[int]:
    """
    Spread indices evenly over the pool with random jitter.

    Letter i sits near (i+1) * spacing, jittered by up to half the spacing.
    Collisions probe forward with wraparound. Letters may end up closer than
    any requested minimum spacing.
    """
    spacing = max(1, pool_size // (total + 1))
    half = spacing // 2
    used: Set[int] = set()
    indices: List[int] = []

    for i in range(total):
        base = (i + 1) * spacing
        jitter = rng.randint(-half, half)
        idx = max(0, min(pool_size - 1, base + jitter))

        tries = 0
        while idx in used and tries < pool_size:
            idx = (idx + 1) % pool_size
            tries += 1
        used.add(idx)
        indices.append(idx)

    return indices


def _without(cells: List[Cell], start: Cell) -> List[Cell]:
    return [c for c in cells if c != start]


def flatten_grid(grid: Grid) -> int:
    """Carve every WALL cell to OPEN. Returns how many were carved."""
    carved = 0
    for row in grid:
        for x, state in enumerate(row):
            if state == WALL:
                row[x] = OPEN
                carved += 1
    return carved


def place_letters(
    grid: Grid,
    start: Cell,
    word: str,
    decoys: Sequence[str],
    min_spacing: int,
    rng: Optional[random.Random] = None
) -> Placement:
    """
    Place word letters and decoys on distinct open cells.

    Word letters come first in word order, then decoys. No tile lands on the
    start cell. The grid is mutated only when it has to be flattened.

    Args:
        grid: The maze grid
        start: Player start cell
        word: Target word
        decoys: Decoy letters
        min_spacing: Minimum traversal-index gap between consecutive letters
        rng: Random source (a fresh unseeded one if not provided)

    Returns:
        Placement with the tiles, the ordered cell pool and chosen indices
    """
    rng = rng or random.Random()
    letters = [(c, True) for c in word] + [(c, False) for c in decoys]
    total = len(letters)
    min_spacing = max(0, int(min_spacing))
    flattened = False

    pool = _without(traversal_path(grid, start.x, start.y, rng), start)
    if len(pool) < total:
        pool = _without(reachable_cells(grid, start.x, start.y), start)
        if len(pool) < total:
            flatten_grid(grid)
            flattened = True
            pool = _without(reachable_cells(grid, start.x, start.y), start)

    pool_size = len(pool)
    if pool_size < total:
        rng.shuffle(pool)
        indices = list(range(min(total, pool_size)))
        strategy = "shuffled"
    elif min_spacing > 0 and is_spacing_feasible(total, pool_size, min_spacing):
        indices = resolve_duplicates(
            spaced_indices(total, pool_size, min_spacing, rng), pool_size
        )
        strategy = "spaced"
    else:
        indices = even_indices(total, pool_size, rng)
        strategy = "even"

    tiles = [
        LetterTile(x=pool[idx].x, y=pool[idx].y, char=char, is_target_letter=is_target)
        for (char, is_target), idx in zip(letters, indices)
    ]

    return Placement(
        tiles=tiles,
        pool=pool,
        indices=indices,
        strategy=strategy,
        flattened=flattened,
    )
