"""
Collaborator interfaces used by SpellingSession.

The session never draws, plays sound, persists anything or owns a clock. It
talks to narrow capabilities injected at construction. Each one has a no-op
default so a missing collaborator simply does nothing.
"""

from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from .models import Level, WordResult


@runtime_checkable
class SessionUI(Protocol):
    """Display capability: text overlays, status display, start button."""

    def update_display(self, state: Dict[str, Any]) -> None: ...

    def show_overlay(self, text: str, kind: str = "info") -> None: ...

    def get_retries(self) -> Optional[int]: ...

    def enable_start(self, enabled: bool) -> None: ...


@runtime_checkable
class RenderSurface(Protocol):
    """Presents a level; must map cells to regions the same way for hit tests."""

    def present(self, level: Level) -> None: ...


@runtime_checkable
class Speech(Protocol):
    """Fire-and-forget speech and feedback tones."""

    def speak(self, text: str) -> None: ...

    def play_tone(self, kind: str) -> None: ...


@runtime_checkable
class ProgressSink(Protocol):
    """Receives per-word results and game boundaries."""

    def record_game_start(self) -> None: ...

    def record_word(self, result: WordResult) -> None: ...

    def record_game_end(self, correct_words: int, total_words: int) -> None: ...


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Runs a callback once after a delay in seconds."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class NullUI:
    def update_display(self, state: Dict[str, Any]) -> None:
        pass

    def show_overlay(self, text: str, kind: str = "info") -> None:
        pass

    def get_retries(self) -> Optional[int]:
        return None

    def enable_start(self, enabled: bool) -> None:
        pass


class NullRenderer:
    def present(self, level: Level) -> None:
        pass


class NullSpeech:
    def speak(self, text: str) -> None:
        pass

    def play_tone(self, kind: str) -> None:
        pass


class NullProgress:
    def record_game_start(self) -> None:
        pass

    def record_word(self, result: WordResult) -> None:
        pass

    def record_game_end(self, correct_words: int, total_words: int) -> None:
        pass


class ScheduledCall:
    """A pending ManualScheduler callback."""

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Scheduler driven by explicit time steps.

    Nothing fires on its own: callers advance the clock with advance() or
    flush everything with run_pending(). Callbacks run on the caller's thread,
    in due-time order.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._calls: List[ScheduledCall] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now + max(0.0, delay), callback)
        self._calls.append(call)
        return call

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for c in self._calls if not c.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and fire every callback that came due.

        Returns:
            Number of callbacks fired
        """
        self.now += seconds
        return self._fire(lambda call: call.due <= self.now)

    def run_pending(self) -> int:
        """Fire every pending callback regardless of due time."""
        if self._calls:
            self.now = max(self.now, max(c.due for c in self._calls))
        return self._fire(lambda call: True)

    def _fire(self, is_due: Callable[[ScheduledCall], bool]) -> int:
        fired = 0
        while True:
            due: List[Tuple[float, int, ScheduledCall]] = [
                (c.due, i, c) for i, c in enumerate(self._calls)
                if not c.cancelled and is_due(c)
            ]
            if not due:
                break
            _, _, call = min(due)
            self._calls.remove(call)
            call.callback()
            fired += 1
        self._calls = [c for c in self._calls if not c.cancelled]
        return fired


class ImmediateScheduler:
    """Scheduler without a clock: callbacks run as soon as they are scheduled."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(0.0, callback)
        callback()
        return call
