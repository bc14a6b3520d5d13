"""
Spelling session state machine.

Drives one pass over a word list: builds a fresh level per word attempt,
validates player movement and collection, and moves on after a word is
solved or its attempts run out.

    idle -> awaiting_word -> collecting -> word_complete | word_failed
         -> awaiting_word ... -> finished
"""

import random
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from ..maze.models import Cell, is_open
from .collaborators import (
    SessionUI,
    RenderSurface,
    Speech,
    ProgressSink,
    Scheduler,
    TimerHandle,
    NullUI,
    NullRenderer,
    NullSpeech,
    NullProgress,
    ImmediateScheduler,
)
from .level import prepare_level
from .models import CollectOutcome, GameConfig, Level, SessionStatus, WordResult


RUNNING_STATES = ("awaiting_word", "collecting", "word_complete", "word_failed")


class SpellingSession(BaseModel):
    """
    Orchestrates a spelling game over a list of words.

    All state changes happen synchronously inside the event methods (move,
    collect, select_cell, retry_word, start, stop) and inside deferred
    transitions fired by the scheduler. `frame` only presents the level.

    Attributes:
        config: Session configuration (grid size, spacing, difficulty, ...)
        words: Target words, iterated by index and never mutated
        status: Current state of the state machine
        current_word_index: Index of the word being played
        attempts_left: Wrong collections still allowed for the current word
        attempts_used: Levels built for the current word so far
        collected: Prefix of the current word collected so far
        level: The level being played
        correct_words: Words solved in this game
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: GameConfig = Field(default_factory=GameConfig)
    words: List[str] = Field(default_factory=list)
    ui: SessionUI = Field(default_factory=NullUI)
    renderer: RenderSurface = Field(default_factory=NullRenderer)
    speech: Speech = Field(default_factory=NullSpeech)
    progress: ProgressSink = Field(default_factory=NullProgress)
    scheduler: Scheduler = Field(default_factory=ImmediateScheduler)

    status: SessionStatus = "idle"
    current_word_index: int = 0
    attempts_left: int = 1
    attempts_used: int = 0
    collected: str = ""
    hide_word_text: bool = True
    level: Optional[Level] = None
    correct_words: int = 0
    _rng: random.Random = None
    _pending: Optional[TimerHandle] = None

    def model_post_init(self, __context) -> None:
        """Seed the random source and fall back to the configured words."""
        self._rng = random.Random(self.config.seed)
        if not self.words and self.config.words:
            self.words = list(self.config.words)
        self.attempts_left = self.config.retries_default

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        **config_kwargs: Any
    ) -> "SpellingSession":
        """
        Factory method to create a session from configuration.

        Args:
            config: Optional GameConfig instance
            **config_kwargs: Config parameters if config not provided

        Returns:
            A new idle SpellingSession using the configured word list
        """
        if config is None:
            config = GameConfig(**config_kwargs)
        return cls(config=config, words=list(config.words))

    # ----------------------------
    # Setup
    # ----------------------------

    def set_words(self, words: List[str]) -> None:
        """Load a new word list."""
        self.words = list(words or [])
        self.ui.enable_start(bool(self.words))

    def set_config(self, **changes: Any) -> None:
        """
        Apply live configuration changes.

        The merged configuration is validated before it replaces the current
        one; takes effect from the next level built.

        Raises:
            pydantic.ValidationError: If a value is invalid
        """
        self.config = GameConfig(**{**self.config.model_dump(), **changes})
        if "seed" in changes:
            self._rng = random.Random(self.config.seed)

    @property
    def is_running(self) -> bool:
        return self.status in RUNNING_STATES

    @property
    def current_word(self) -> str:
        """The word at the current index, trimmed ("" past the end)."""
        if self.current_word_index < len(self.words):
            return (self.words[self.current_word_index] or "").strip()
        return ""

    @property
    def total_words(self) -> int:
        """Number of non-blank words in the list."""
        return sum(1 for w in self.words if w and w.strip())

    def _retries(self) -> int:
        retries = self.ui.get_retries()
        return retries if retries is not None and retries > 0 else self.config.retries_default

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> None:
        """
        Start a game from the first word.

        An empty or all-blank word list finishes the game straight away.
        """
        self._cancel_pending()
        self.current_word_index = 0
        self.correct_words = 0
        self.status = "awaiting_word"
        self.progress.record_game_start()
        self._next_word()

    def stop(self) -> None:
        """Stop the session and drop any pending deferred transition."""
        self._cancel_pending()
        if self.status != "finished":
            self.status = "idle"

    def frame(self) -> bool:
        """
        Present the current level.

        Called by the host once per frame; never changes session state.

        Returns:
            True while the host should keep scheduling frames
        """
        if self.level is not None:
            self.renderer.present(self.level)
        return self.is_running

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _next_word(self) -> None:
        """Begin the word at the current index, skipping blank entries."""
        self._pending = None
        self.collected = ""

        while self.current_word_index < len(self.words) and not self.current_word:
            self.current_word_index += 1

        if self.current_word_index >= len(self.words):
            self._finish()
            return

        word = self.current_word
        self.status = "awaiting_word"
        self.attempts_left = self._retries()
        self.attempts_used = 0
        self.hide_word_text = True
        self._build_level(word)
        self.status = "collecting"
        self._update_display()
        self.speech.speak(word)

    def _build_level(self, word: str) -> None:
        self.level = prepare_level(word, self.config, self._rng)
        self.attempts_used += 1

    def _finish(self) -> None:
        self.status = "finished"
        self.level = None
        self.ui.show_overlay("All done! Great job!", "success")
        self.progress.record_game_end(self.correct_words, self.total_words)
        self.ui.enable_start(True)

    # ----------------------------
    # Player input
    # ----------------------------

    def move(self, dx: int, dy: int) -> bool:
        """
        Move the player one step.

        Args:
            dx: Column delta
            dy: Row delta

        Returns:
            True if the player moved; False for walls, out-of-bounds targets or
            when the session is not collecting
        """
        if self.status != "collecting" or self.level is None:
            return False

        nx, ny = self.level.player.x + dx, self.level.player.y + dy
        if not is_open(self.level.grid, nx, ny):
            return False

        self.level.player = Cell(nx, ny)
        return True

    def select_cell(self, x: int, y: int) -> CollectOutcome:
        """
        Pointer selection: jump onto a tile at (x, y) and collect it.

        Returns:
            "no_tile" if nothing is on that cell, otherwise the collect outcome
        """
        if self.status != "collecting" or self.level is None:
            return "ignored"

        if self.level.tile_at(x, y) is None:
            return "no_tile"

        self.level.player = Cell(x, y)
        return self.collect()

    def collect(self) -> CollectOutcome:
        """
        Try to collect the tile under the player.

        Returns:
            "ignored" when not collecting, "no_tile" when the cell is empty,
            "match" / "word_complete" for the expected next letter, and
            "mismatch" / "word_failed" otherwise
        """
        if self.status != "collecting" or self.level is None:
            return "ignored"

        player = self.level.player
        tile = self.level.tile_at(player.x, player.y)
        if tile is None:
            return "no_tile"

        word = self.current_word
        expected = word[len(self.collected)] if len(self.collected) < len(word) else ""

        if tile.char.lower() == expected.lower():
            self.level.tiles.remove(tile)
            self.collected += tile.char
            self.hide_word_text = False
            self.speech.play_tone("collect")

            if len(self.collected) >= len(word):
                self._complete_word(word)
                return "word_complete"

            self._update_display()
            return "match"

        self.attempts_left -= 1
        self.speech.play_tone("mismatch")

        if self.attempts_left <= 0:
            self._fail_word(word)
            return "word_failed"

        # Every retry gets a brand new maze
        self.ui.show_overlay("Try again", "fail")
        self.collected = ""
        self._build_level(word)
        self._update_display()
        return "mismatch"

    def retry_word(self) -> bool:
        """Rebuild the level for the current word without using an attempt."""
        if self.status != "collecting":
            return False

        self.collected = ""
        self.level = prepare_level(self.current_word, self.config, self._rng)
        self._update_display()
        return True

    def hear_word(self) -> None:
        """Announce the current word again."""
        if self.is_running and self.current_word:
            self.speech.speak(self.current_word)

    def _complete_word(self, word: str) -> None:
        self.speech.play_tone("word_success")
        self.ui.show_overlay("Great! Next word", "success")
        self.progress.record_word(WordResult(
            word=word,
            solved=True,
            attempts=max(1, self.attempts_used),
            difficulty=self.config.difficulty,
        ))
        self.correct_words += 1
        self._advance("word_complete", self.config.success_delay)

    def _fail_word(self, word: str) -> None:
        self.speech.play_tone("word_failed")
        self.ui.show_overlay("Out of attempts - moving on", "fail")
        self.progress.record_word(WordResult(
            word=word,
            solved=False,
            attempts=max(1, self.attempts_used),
            difficulty=self.config.difficulty,
        ))
        self._advance("word_failed", self.config.failure_delay)

    def _advance(self, status: SessionStatus, delay: float) -> None:
        """Leave the current word and schedule the next one."""
        self.status = status
        self.current_word_index += 1
        self.collected = ""
        self.hide_word_text = True
        self._update_display()
        self._pending = self.scheduler.call_later(delay, self._next_word)

    # ----------------------------
    # State
    # ----------------------------

    def _update_display(self) -> None:
        self.ui.update_display({
            "word": self.current_word,
            "collected": self.collected,
            "hide_word_text": self.hide_word_text,
            "attempts_left": self.attempts_left,
        })

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.

        Returns:
            Dictionary containing session state
        """
        level = self.level
        return {
            "status": self.status,
            "current_word_index": self.current_word_index,
            "word": self.current_word,
            "attempts_left": self.attempts_left,
            "attempts_used": self.attempts_used,
            "collected": self.collected,
            "correct_words": self.correct_words,
            "total_words": self.total_words,
            "player": tuple(level.player) if level else None,
            "tiles": [t.model_dump() for t in level.tiles] if level else [],
            "grid_size": (level.width, level.height) if level else None,
        }
