"""
Test suite for the spelling session state machine.

Covers:
- Starting, blank-word skipping and finishing
- Movement validation
- Collection: matches, word success, mismatches with and without retries left
- Deferred transitions, stop/cancel, live config
- Collaborator calls (speech, UI overlays, progress)
"""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from spellmaze.maze import Cell, DIRECTIONS, is_open
from spellmaze.environment import (
    GameConfig,
    SpellingSession,
    ManualScheduler,
    ProgressTracker,
    NullUI,
    NullSpeech,
    NullProgress,
    NullRenderer,
)


def make_session(words, scheduler=None, **config_kwargs):
    """Session with mocked collaborators and a fixed seed."""
    config_kwargs.setdefault("seed", 7)
    ui = Mock(spec=NullUI)
    ui.get_retries.return_value = None
    session = SpellingSession(
        config=GameConfig(**config_kwargs),
        words=words,
        ui=ui,
        speech=Mock(spec=NullSpeech),
        progress=Mock(spec=NullProgress),
        renderer=Mock(spec=NullRenderer),
        scheduler=scheduler or ManualScheduler(),
    )
    return session


def target_tile(session, char):
    """First remaining target tile carrying `char`."""
    return next(t for t in session.level.tiles if t.is_target_letter and t.char == char)


def overlay_texts(session):
    return [c.args[0] for c in session.ui.show_overlay.call_args_list]


class TestStart:
    """Test cases for starting a session."""

    def test_start_without_words_finishes(self):
        """Starting with no words goes straight to the end of the game."""
        session = make_session([])
        session.start()

        assert session.status == "finished"
        assert session.level is None
        assert session.frame() is False
        assert overlay_texts(session) == ["All done! Great job!"]
        session.progress.record_game_end.assert_called_once_with(0, 0)

    def test_start_with_blank_words_finishes(self):
        """A list of only blank entries finishes without building a level."""
        session = make_session(["", "   "])
        session.start()

        assert session.status == "finished"
        session.speech.speak.assert_not_called()

    def test_idle_before_start(self):
        """A new session is idle and has no level."""
        session = make_session(["cat"])
        assert session.status == "idle"
        assert session.level is None
        assert session.frame() is False

    def test_start_prepares_first_word(self):
        """Start builds a level, resets attempts and announces the word."""
        session = make_session(["cat", "dog"], retries_default=2)
        session.start()

        assert session.status == "collecting"
        assert session.current_word == "cat"
        assert session.attempts_left == 2
        assert session.collected == ""
        assert [t.char for t in session.level.tiles] == ["c", "a", "t"]
        session.speech.speak.assert_called_once_with("cat")
        session.progress.record_game_start.assert_called_once()

    def test_ui_retries_override(self):
        """Retries from the UI take precedence over the config default."""
        session = make_session(["cat"])
        session.ui.get_retries.return_value = 4
        session.start()
        assert session.attempts_left == 4

    def test_skips_blank_words(self):
        """Blank entries are skipped without building a level."""
        session = make_session(["", "   ", "dog"])
        session.start()

        assert session.current_word_index == 2
        assert session.current_word == "dog"
        session.speech.speak.assert_called_once_with("dog")

    def test_words_from_config(self):
        """create() uses the configured word list."""
        session = SpellingSession.create(words=["sun"], seed=1)
        assert session.words == ["sun"]

    def test_word_is_trimmed(self):
        """Surrounding whitespace is not part of the word."""
        session = make_session(["  cat  "])
        session.start()
        assert session.current_word == "cat"
        assert len(session.level.tiles) == 3


class TestMovement:
    """Test cases for player movement."""

    def test_move_before_start_ignored(self):
        """Movement is ignored while idle."""
        session = make_session(["cat"])
        assert session.move(1, 0) is False

    def test_move_into_border_wall(self):
        """Moving into the border does nothing."""
        session = make_session(["cat"])
        session.start()
        assert session.level.player == Cell(1, 1)
        assert session.move(-1, 0) is False
        assert session.move(0, -1) is False
        assert session.level.player == Cell(1, 1)

    def test_move_into_open_cell(self):
        """Moving onto an open neighbor updates the player."""
        session = make_session(["cat"])
        session.start()
        grid = session.level.grid
        dx, dy = next((dx, dy) for dx, dy in DIRECTIONS if is_open(grid, 1 + dx, 1 + dy))

        assert session.move(dx, dy) is True
        assert session.level.player == Cell(1 + dx, 1 + dy)

    def test_move_into_inner_wall(self):
        """Moving into an interior wall does nothing."""
        session = make_session(["cat"], openness=0)
        session.start()
        grid = session.level.grid
        # (2, 2) is never carved in a perfect maze
        session.level.player = Cell(1, 2) if is_open(grid, 1, 2) else Cell(2, 1)
        before = session.level.player
        dx, dy = (1, 0) if before == Cell(1, 2) else (0, 1)

        assert session.move(dx, dy) is False
        assert session.level.player == before


class TestCollect:
    """Test cases for collecting letters."""

    def test_collect_before_start_ignored(self):
        """Collection is ignored while idle."""
        session = make_session(["cat"])
        assert session.collect() == "ignored"

    def test_collect_empty_cell(self):
        """No tile under the player is a no-op."""
        session = make_session(["cat"])
        session.start()
        assert session.collect() == "no_tile"
        assert session.attempts_left == 1

    def test_select_empty_cell(self):
        """Pointer selection of an empty cell is a no-op."""
        session = make_session(["cat"])
        session.start()
        assert session.select_cell(1, 1) == "no_tile"

    def test_spelling_the_word(self):
        """c, a, t in order completes the word exactly once."""
        scheduler = ManualScheduler()
        session = make_session(["cat", "dog"], scheduler=scheduler)
        session.start()

        outcomes = []
        for char in "cat":
            tile = target_tile(session, char)
            outcomes.append(session.select_cell(tile.x, tile.y))

        assert outcomes == ["match", "match", "word_complete"]
        assert session.status == "word_complete"
        assert session.current_word_index == 1
        assert overlay_texts(session).count("Great! Next word") == 1
        session.progress.record_word.assert_called_once()
        result = session.progress.record_word.call_args.args[0]
        assert result.word == "cat" and result.solved is True and result.attempts == 1

    def test_collect_via_move(self):
        """Collecting works after the player is on the tile."""
        session = make_session(["cat"])
        session.start()
        tile = target_tile(session, "c")
        session.level.player = Cell(tile.x, tile.y)

        assert session.collect() == "match"
        assert session.collected == "c"
        assert session.level.tile_at(tile.x, tile.y) is None

    def test_next_word_after_delay(self):
        """The next word starts only once the success delay has passed."""
        scheduler = ManualScheduler()
        session = make_session(["cat", "dog"], scheduler=scheduler)
        session.start()
        for char in "cat":
            tile = target_tile(session, char)
            session.select_cell(tile.x, tile.y)

        assert session.collect() == "ignored"
        scheduler.advance(1.0)
        assert session.status == "word_complete"
        scheduler.advance(0.3)
        assert session.status == "collecting"
        assert session.current_word == "dog"

    def test_case_insensitive_match(self):
        """Tile characters compare case-insensitively."""
        session = make_session(["Cat"])
        session.start()
        tile = next(t for t in session.level.tiles if t.char == "C")
        assert session.select_cell(tile.x, tile.y) == "match"

    def test_mismatch_out_of_attempts(self):
        """One wrong letter with one attempt fails the word immediately."""
        scheduler = ManualScheduler()
        session = make_session(["cat", "dog"], scheduler=scheduler, retries_default=1)
        session.start()
        tile = target_tile(session, "a")

        assert session.select_cell(tile.x, tile.y) == "word_failed"
        assert session.attempts_left == 0
        assert session.status == "word_failed"
        assert session.current_word_index == 1
        result = session.progress.record_word.call_args.args[0]
        assert result.solved is False
        assert "Great! Next word" not in overlay_texts(session)

        scheduler.advance(1.4)
        assert session.current_word == "dog"
        assert session.attempts_left == 1

    def test_mismatch_rebuilds_level(self):
        """A wrong letter with attempts left regenerates the level."""
        session = make_session(["cat"], retries_default=3)
        session.start()
        first = target_tile(session, "c")
        session.select_cell(first.x, first.y)
        old_level = session.level
        tile = target_tile(session, "t")

        assert session.select_cell(tile.x, tile.y) == "mismatch"
        assert session.attempts_left == 2
        assert session.attempts_used == 2
        assert session.collected == ""
        assert session.level is not old_level
        assert [t.char for t in session.level.tiles] == ["c", "a", "t"]
        assert "Try again" in overlay_texts(session)

    def test_attempts_reported_after_retries(self):
        """Attempt count includes rebuilt levels."""
        session = make_session(["cat"], retries_default=2)
        session.start()
        wrong = target_tile(session, "t")
        session.select_cell(wrong.x, wrong.y)
        for char in "cat":
            tile = target_tile(session, char)
            session.select_cell(tile.x, tile.y)

        result = session.progress.record_word.call_args.args[0]
        assert result.solved is True
        assert result.attempts == 2

    def test_decoy_mismatch(self):
        """Collecting a decoy that is not the next letter costs an attempt."""
        session = make_session(["cat"], difficulty="hard", retries_default=5, exclude_word_letters=True)
        session.start()
        decoy = next(t for t in session.level.tiles if not t.is_target_letter)

        assert session.select_cell(decoy.x, decoy.y) == "mismatch"
        assert session.attempts_left == 4


class TestLifecycle:
    """Test cases for finishing, stopping and live updates."""

    def test_finish_after_last_word(self):
        """Running out of words finishes the session."""
        session = make_session(["a"])
        session.start()
        tile = target_tile(session, "a")
        session.select_cell(tile.x, tile.y)
        session.scheduler.run_pending()

        assert session.status == "finished"
        assert session.frame() is False
        assert "All done! Great job!" in overlay_texts(session)
        session.progress.record_game_end.assert_called_once_with(1, 1)

    def test_immediate_scheduler_default(self):
        """Without a scheduler, transitions happen right away."""
        session = SpellingSession(config=GameConfig(seed=3), words=["a", "b"])
        session.start()
        tile = target_tile(session, "a")
        session.select_cell(tile.x, tile.y)
        assert session.status == "collecting"
        assert session.current_word == "b"

    def test_stop_cancels_pending_transition(self):
        """Stopping drops the scheduled next word."""
        scheduler = ManualScheduler()
        session = make_session(["a", "b"], scheduler=scheduler)
        session.start()
        tile = target_tile(session, "a")
        session.select_cell(tile.x, tile.y)
        assert scheduler.pending == 1

        session.stop()
        assert scheduler.pending == 0
        assert session.status == "idle"
        scheduler.advance(10)
        assert session.status == "idle"
        assert session.move(1, 0) is False

    def test_frame_presents_level(self):
        """Each frame hands the level to the renderer."""
        session = make_session(["cat"])
        session.start()
        assert session.frame() is True
        session.renderer.present.assert_called_with(session.level)

    def test_retry_word(self):
        """Retry rebuilds without using an attempt."""
        session = make_session(["cat"])
        session.start()
        old_level = session.level

        assert session.retry_word() is True
        assert session.level is not old_level
        assert session.attempts_left == 1

    def test_hear_word(self):
        """Hear re-announces the current word."""
        session = make_session(["cat"])
        session.start()
        session.hear_word()
        assert session.speech.speak.call_count == 2

    def test_set_words_enables_start(self):
        """Loading words enables the start control."""
        session = make_session([])
        session.set_words(["cat"])
        session.ui.enable_start.assert_called_with(True)
        assert session.words == ["cat"]

    def test_set_config_live(self):
        """Valid live changes apply to the next level."""
        session = make_session(["cat"])
        session.set_config(difficulty="medium", cell_cols=4)
        session.start()
        assert len(session.level.tiles) == 5
        assert len(session.level.grid[0]) == 9

    def test_set_config_invalid(self):
        """Invalid changes raise and keep the old configuration."""
        session = make_session(["cat"])
        with pytest.raises(ValidationError):
            session.set_config(openness=2.0)
        assert session.config.openness == 0.22

    def test_get_state(self):
        """State snapshot reflects the session."""
        session = make_session(["cat"])
        session.start()
        state = session.get_state()
        assert state["status"] == "collecting"
        assert state["word"] == "cat"
        assert state["player"] == (1, 1)
        assert len(state["tiles"]) == 3
        assert state["grid_size"] == (21, 13)

    def test_full_game_with_tracker(self):
        """One solved and one failed word are tracked."""
        tracker = ProgressTracker()
        session = SpellingSession(
            config=GameConfig(seed=5),
            words=["cat", "dog"],
            progress=tracker,
        )
        session.start()
        for char in "cat":
            tile = target_tile(session, char)
            session.select_cell(tile.x, tile.y)
        wrong = target_tile(session, "g")
        session.select_cell(wrong.x, wrong.y)

        assert session.status == "finished"
        assert tracker.progress.total_words_attempted == 2
        assert tracker.progress.total_words_correct == 1
        assert tracker.progress.perfect_games == 0
        assert tracker.accuracy_rate == 50
