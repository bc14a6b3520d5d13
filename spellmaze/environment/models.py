"""
Pydantic models for the environment layer.

This module contains the data models (configuration, tiles, levels, word
results and progress statistics) used throughout the environment layer. The
main logic (placement, level preparation, SpellingSession, ProgressTracker)
lives in its own files.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict

from ..maze.models import Cell, Grid


# Type aliases
Difficulty = Literal["easy", "medium", "hard"]
SessionStatus = Literal[
    "idle", "awaiting_word", "collecting", "word_complete", "word_failed", "finished"
]
CollectOutcome = Literal[
    "ignored", "no_tile", "match", "word_complete", "mismatch", "word_failed"
]
PlacementStrategy = Literal["spaced", "even", "shuffled"]

# Decoy letters added per difficulty tier
DECOY_COUNTS: Dict[str, int] = {
    "easy": 0,
    "medium": 2,
    "hard": 5,
}


class LetterTile(BaseModel):
    """A letter placed on a maze cell."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    char: str = Field(..., min_length=1, max_length=1)
    is_target_letter: bool = False

    @property
    def cell(self) -> Cell:
        return Cell(self.x, self.y)


class Placement(BaseModel):
    """Outcome of placing letters onto a grid."""
    tiles: List[LetterTile] = Field(default_factory=list)
    pool: List[Cell] = Field(default_factory=list)  # Ordered placement cells
    indices: List[int] = Field(default_factory=list)  # Pool index per placed tile
    strategy: PlacementStrategy = "shuffled"
    flattened: bool = False  # True if every wall had to be carved


class Level(BaseModel):
    """A fully prepared level for one word attempt."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    word: str
    grid: Grid
    player: Cell
    tiles: List[LetterTile] = Field(default_factory=list)
    decoys: List[str] = Field(default_factory=list)
    placement: Optional[Placement] = None

    def tile_at(self, x: int, y: int) -> Optional[LetterTile]:
        """Return the tile on (x, y), if any."""
        for tile in self.tiles:
            if tile.x == x and tile.y == y:
                return tile
        return None

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)


class GameConfig(BaseModel):
    """Configuration for a spelling session."""
    cell_cols: int = Field(default=10, ge=1)
    cell_rows: int = Field(default=6, ge=1)
    cell_size: int = Field(default=64, ge=8)  # Pixels; only the renderer cares
    openness: float = Field(default=0.22, ge=0.0, le=1.0)
    min_letter_spacing: int = Field(default=3, ge=0)
    retries_default: int = Field(default=1, ge=1)
    difficulty: Difficulty = "easy"
    tricky_letters: bool = False
    exclude_word_letters: bool = False
    success_delay: float = Field(default=1.2, ge=0.0)  # Seconds
    failure_delay: float = Field(default=1.4, ge=0.0)
    seed: Optional[int] = None
    words: List[str] = Field(default_factory=list)

    @property
    def decoy_count(self) -> int:
        """Number of decoy letters for the configured difficulty."""
        return DECOY_COUNTS.get(self.difficulty, 0)


class WordResult(BaseModel):
    """Outcome of one word, reported to the progress collaborator."""
    word: str
    solved: bool
    attempts: int = Field(default=1, ge=1)
    difficulty: Difficulty = "easy"


class WordHistoryEntry(BaseModel):
    """One entry of the per-word history."""
    word: str
    correct: bool
    attempts: int
    timestamp: str


class DifficultyStats(BaseModel):
    """Played/correct counters for one difficulty tier."""
    played: int = 0
    correct: int = 0


class GameProgress(BaseModel):
    """Accumulated progress statistics for a player."""
    total_games_played: int = 0
    total_words_attempted: int = 0
    total_words_correct: int = 0
    total_words_incorrect: int = 0
    perfect_games: int = 0
    last_played: Optional[str] = None
    best_streak: int = 0
    current_streak: int = 0
    time_played_minutes: int = 0
    word_history: List[WordHistoryEntry] = Field(default_factory=list)
    difficulty_stats: Dict[str, DifficultyStats] = Field(
        default_factory=lambda: {name: DifficultyStats() for name in DECOY_COUNTS}
    )
