"""
Rooms Demo core package.

Headless logic for an endless sequence of themed rooms:
- Theme table and the room -> theme mapping
- ThemeSequencer tracking the room cursor and the per-session offset
- RoomPresenter keeping content, HUD and player in step with the sequencer
- Preference storage for the offset shared between sessions

The Arcade window in ``roomsdemo.app`` composes these services.
"""
from .errors import ConfigError, InvalidArgument, RoomsError, SessionNotStarted
from .events import EventBus, EventType, NavigationEvent
from .presenter import ContentProvider, DisplaySurface, PlayerController, RoomAnchor, RoomPresenter
from .sequencer import SequencerState, ThemeSequencer, ThemeTriple
from .storage import JsonPrefsStore, MemoryPrefsStore, PrefsStore
from .themes import RoomTheme, ThemeTable, theme_for_room

__all__ = [
    "ConfigError",
    "InvalidArgument",
    "RoomsError",
    "SessionNotStarted",
    "EventBus",
    "EventType",
    "NavigationEvent",
    "ContentProvider",
    "DisplaySurface",
    "PlayerController",
    "RoomAnchor",
    "RoomPresenter",
    "SequencerState",
    "ThemeSequencer",
    "ThemeTriple",
    "JsonPrefsStore",
    "MemoryPrefsStore",
    "PrefsStore",
    "RoomTheme",
    "ThemeTable",
    "theme_for_room",
]
