"""Game environment for spellmaze."""

from .models import (
    Difficulty,
    SessionStatus,
    CollectOutcome,
    PlacementStrategy,
    DECOY_COUNTS,
    LetterTile,
    Placement,
    Level,
    GameConfig,
    WordResult,
    WordHistoryEntry,
    DifficultyStats,
    GameProgress,
)
from .placement import (
    ALPHABET,
    TRICKY_LETTER_MAP,
    random_letters,
    tricky_letters,
    choose_decoys,
    is_spacing_feasible,
    place_letters,
)
from .level import prepare_level
from .collaborators import (
    SessionUI,
    RenderSurface,
    Speech,
    ProgressSink,
    Scheduler,
    NullUI,
    NullRenderer,
    NullSpeech,
    NullProgress,
    ManualScheduler,
    ImmediateScheduler,
)
from .progress import ProgressTracker
from .session import SpellingSession

__all__ = [
    "Difficulty",
    "SessionStatus",
    "CollectOutcome",
    "PlacementStrategy",
    "DECOY_COUNTS",
    "LetterTile",
    "Placement",
    "Level",
    "GameConfig",
    "WordResult",
    "WordHistoryEntry",
    "DifficultyStats",
    "GameProgress",
    "ALPHABET",
    "TRICKY_LETTER_MAP",
    "random_letters",
    "tricky_letters",
    "choose_decoys",
    "is_spacing_feasible",
    "place_letters",
    "prepare_level",
    "SessionUI",
    "RenderSurface",
    "Speech",
    "ProgressSink",
    "Scheduler",
    "NullUI",
    "NullRenderer",
    "NullSpeech",
    "NullProgress",
    "ManualScheduler",
    "ImmediateScheduler",
    "ProgressTracker",
    "SpellingSession",
]
