"""
Main entry point for spellmaze.

Usage:
    python -m spellmaze.main config.yaml
    python -m spellmaze.main config.yaml --preview --seed 42
    python -m spellmaze.main config.yaml --verbose
"""

import argparse
import random
import sys
from pathlib import Path

import yaml

from .console import ConsoleUI, ConsoleRenderer, ConsoleSpeech
from .environment import GameConfig, ManualScheduler, ProgressTracker, SpellingSession, prepare_level
from .maze import render_level


# Single-key commands for the console session
MOVES = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
}


def load_config(config_path: str) -> GameConfig:
    """Load game configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def preview(config: GameConfig) -> None:
    """Print one generated level per word."""
    rng = random.Random(config.seed)
    for word in config.words:
        word = (word or "").strip()
        if not word:
            continue
        level = prepare_level(word, config, rng)
        letters = {(t.x, t.y): t.char for t in level.tiles}
        print(f"=== {word} ({level.placement.strategy}, {len(level.tiles)} tiles) ===")
        print(render_level(level.grid, level.player, letters))
        print()


def play(config: GameConfig, verbose: bool = False) -> ProgressTracker:
    """Run an interactive console session until the words run out or 'q'."""
    scheduler = ManualScheduler()
    tracker = ProgressTracker()
    session = SpellingSession(
        config=config,
        words=list(config.words),
        ui=ConsoleUI(),
        renderer=ConsoleRenderer(),
        speech=ConsoleSpeech(),
        progress=tracker,
        scheduler=scheduler,
    )

    session.start()
    while session.frame():
        command = input("move w/a/s/d, c=collect, r=retry, h=hear, q=quit > ").strip().lower()

        if command == "q":
            session.stop()
            break
        elif command in ("", "c"):
            outcome = session.collect()
            if verbose:
                print(f"collect: {outcome}")
        elif command == "r":
            session.retry_word()
        elif command == "h":
            session.hear_word()
        else:
            for key in command:
                if key in MOVES:
                    session.move(*MOVES[key])

        scheduler.run_pending()
        if verbose:
            print(session.get_state())

    return tracker


def main():
    parser = argparse.ArgumentParser(
        description="Play a spelling maze in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  cell_cols: 10
  cell_rows: 6
  openness: 0.22
  min_letter_spacing: 3
  retries_default: 1
  difficulty: medium
  words:
    - cat
    - shark
        """
    )
    parser.add_argument(
        "config",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides the config file)"
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print a generated level for each word and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print session state after every command"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    if args.seed is not None:
        config = config.model_copy(update={"seed": args.seed})

    if not any((w or "").strip() for w in config.words):
        print("Error: config has no words", file=sys.stderr)
        sys.exit(1)

    if args.preview:
        preview(config)
        return 0

    try:
        tracker = play(config, verbose=args.verbose)
    except (KeyboardInterrupt, EOFError):
        print("\nGame interrupted by user")
        return 0

    # Print summary
    print()
    print("=== Game Summary ===")
    print(tracker.summary())
    print(f"Accuracy: {tracker.accuracy_rate}%")

    return 0


if __name__ == "__main__":
    sys.exit(main())
