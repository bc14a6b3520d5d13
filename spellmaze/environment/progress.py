"""
In-memory progress tracking.

Implements the progress collaborator for SpellingSession: counts words,
streaks and perfect games and keeps a bounded word history. Storing the
statistics anywhere is left to the caller (see `get_state`).
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .models import DifficultyStats, GameProgress, WordHistoryEntry, WordResult


# Most recent entries kept in the word history
MAX_HISTORY = 100


class ProgressTracker(BaseModel):
    """
    Accumulates GameProgress across sessions.

    Attributes:
        progress: The statistics being accumulated
        started_at: Start of the current game, if one is running
    """

    progress: GameProgress = Field(default_factory=GameProgress)
    started_at: Optional[datetime] = None

    def record_game_start(self) -> None:
        """Count a new game and remember when it started."""
        self.progress.total_games_played += 1
        self.started_at = datetime.now()
        self.progress.last_played = self.started_at.isoformat()

    def record_word(self, result: WordResult) -> None:
        """
        Record the outcome of one word.

        Args:
            result: Word, whether it was solved, attempts used and difficulty
        """
        progress = self.progress
        progress.total_words_attempted += 1

        if result.solved:
            progress.total_words_correct += 1
            progress.current_streak += 1
            progress.best_streak = max(progress.best_streak, progress.current_streak)
        else:
            progress.total_words_incorrect += 1
            progress.current_streak = 0

        stats = progress.difficulty_stats.setdefault(result.difficulty, DifficultyStats())
        stats.played += 1
        if result.solved:
            stats.correct += 1

        progress.word_history.insert(0, WordHistoryEntry(
            word=result.word,
            correct=result.solved,
            attempts=result.attempts,
            timestamp=datetime.now().isoformat(),
        ))
        del progress.word_history[MAX_HISTORY:]

    def record_game_end(self, correct_words: int, total_words: int) -> None:
        """
        Close the current game.

        A game is perfect when every word was solved. Time played is added in
        whole minutes.
        """
        if total_words > 0 and correct_words == total_words:
            self.progress.perfect_games += 1

        if self.started_at:
            minutes = (datetime.now() - self.started_at).total_seconds() / 60
            self.progress.time_played_minutes += round(minutes)
            self.started_at = None

    @property
    def accuracy_rate(self) -> int:
        """Percentage of attempted words solved, rounded."""
        if self.progress.total_words_attempted == 0:
            return 0
        return round(
            self.progress.total_words_correct / self.progress.total_words_attempted * 100
        )

    def recent_performance(self, last: int = 10) -> Dict[str, int]:
        """Correct, total and percentage over the most recent words."""
        recent = self.progress.word_history[:last]
        correct = sum(1 for entry in recent if entry.correct)
        total = len(recent)
        percentage = round(correct / total * 100) if total else 0
        return {"correct": correct, "total": total, "percentage": percentage}

    def most_missed_words(self, limit: int = 5) -> List[Dict]:
        """Words missed most often, most missed first."""
        misses: Dict[str, int] = {}
        for entry in self.progress.word_history:
            if not entry.correct:
                misses[entry.word] = misses.get(entry.word, 0) + 1

        ranked = sorted(misses.items(), key=lambda item: item[1], reverse=True)
        return [{"word": word, "miss_count": count} for word, count in ranked[:limit]]

    def clear(self) -> None:
        """Reset all statistics."""
        self.progress = GameProgress()
        self.started_at = None

    def summary(self) -> str:
        """One-line human readable summary."""
        progress = self.progress
        if progress.total_games_played == 0:
            return "No progress data yet"
        return (
            f"{progress.total_games_played} games, "
            f"{progress.total_words_correct} correct words, "
            f"{progress.perfect_games} perfect games"
        )

    def get_state(self) -> Dict:
        """
        Get the tracked statistics as a dictionary.

        Useful for serialization and logging.
        """
        return {
            **self.progress.model_dump(),
            "accuracy_rate": self.accuracy_rate,
        }
