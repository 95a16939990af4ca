import argparse
import logging
import os
import sys
from pathlib import Path

from .errors import RoomsError
from .logging_config import configure_logging
from .rng import RandomSource
from .sequencer import ThemeSequencer
from .settings import Settings
from .storage import JsonPrefsStore, MemoryPrefsStore

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="rooms-demo",
        description="Rooms Demo - an endless sequence of themed rooms built with Python + Arcade",
    )
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a user settings YAML file to load/override defaults.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable verbose debug logging.")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Open the game window (default).")
    run.add_argument("--seed", type=int, default=None, help="Seed for the room offset draw.")

    preview = sub.add_parser("preview", help="Print the themes of a run of rooms without opening a window.")
    group = preview.add_mutually_exclusive_group()
    group.add_argument("--offset", type=int, default=None, help="Use this room offset instead of drawing one.")
    group.add_argument("--seed", type=int, default=None, help="Seed for the room offset draw.")
    preview.add_argument("--start", type=int, default=1, help="First room to show.")
    preview.add_argument("--count", type=int, default=10, help="Number of rooms to show.")

    theme = sub.add_parser("theme", help="Print previous/current/next themes for one room.")
    theme.add_argument("room", type=int, help="Room number (>= 1).")
    theme.add_argument("--offset", type=int, required=True, help="Room offset of the session.")

    return parser.parse_args(argv)


def _headless_sequencer(settings: Settings, offset=None, seed=None) -> ThemeSequencer:
    """Sequencer over an in-memory store so previews never touch saved preferences."""
    sequencer = ThemeSequencer(
        MemoryPrefsStore(),
        table=settings.rooms.theme_table(),
        rng=RandomSource(seed),
        offset_key=settings.rooms.offset_key,
    )
    sequencer.initialize_session(offset=offset)
    return sequencer


def _cmd_preview(args, settings: Settings) -> int:
    sequencer = _headless_sequencer(settings, offset=args.offset, seed=args.seed)
    print(f"offset {sequencer.offset}")
    for room_no, theme in sequencer.preview(args.start, args.count):
        print(f"{room_no:>6}  {theme.label}")
    return 0


def _cmd_theme(args, settings: Settings) -> int:
    sequencer = _headless_sequencer(settings, offset=args.offset)
    previous, current, next_ = sequencer.jump_to(args.room)
    print(f"room {args.room}: previous={previous.label} current={current.label} next={next_.label}")
    return 0


def _cmd_run(args, settings: Settings) -> int:  # pragma: no cover - opens a window
    # Make headless mode opt-in via env for CI/testing, not default in normal runs.
    if os.environ.get("ROOMS_HEADLESS") == "1":
        os.environ.setdefault("PYGLET_HEADLESS", "1")
    from .app import run

    run(settings, JsonPrefsStore(), seed=getattr(args, "seed", None))
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(default_level=logging.DEBUG if args.debug else logging.WARNING)
    commands = {"preview": _cmd_preview, "theme": _cmd_theme, "run": _cmd_run, None: _cmd_run}
    try:
        settings = Settings.load(user_path=args.settings_path)
        return commands[args.command](args, settings)
    except RoomsError as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
