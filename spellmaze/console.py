"""Text-mode collaborators for playing in a terminal."""

import sys
from typing import Any, Dict, Optional, TextIO

from .maze.render import render_level
from .environment.models import Level


class ConsoleUI:
    """Prints overlays and status lines."""

    def __init__(self, retries: Optional[int] = None, out: Optional[TextIO] = None) -> None:
        self.retries = retries
        self.out = out

    def update_display(self, state: Dict[str, Any]) -> None:
        word = state.get("word", "")
        collected = state.get("collected", "")
        shown = collected + "_" * (len(word) - len(collected))
        print(f"Word: {shown}   Attempts left: {state.get('attempts_left')}", file=self.out or sys.stdout)

    def show_overlay(self, text: str, kind: str = "info") -> None:
        marker = {"success": "✓", "fail": "✗"}.get(kind, "*")
        print(f"{marker} {text}", file=self.out or sys.stdout)

    def get_retries(self) -> Optional[int]:
        return self.retries

    def enable_start(self, enabled: bool) -> None:
        pass


class ConsoleRenderer:
    """Draws the level as ASCII art."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out

    def present(self, level: Level) -> None:
        letters = {(t.x, t.y): t.char for t in level.tiles}
        print(render_level(level.grid, level.player, letters), file=self.out or sys.stdout)


class ConsoleSpeech:
    """Stands in for text-to-speech by printing what would be said."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self.out = out

    def speak(self, text: str) -> None:
        print(f"[say] {text}", file=self.out or sys.stdout)

    def play_tone(self, kind: str) -> None:
        pass
