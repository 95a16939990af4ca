from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Iterator, Optional, Tuple

from .errors import ConfigError, InvalidArgument

logger = logging.getLogger(__name__)

MIN_THEMES = 3


class RoomTheme(Enum):
    """Visual motifs a room can display, in fixed ordinal order."""

    MOUNTAINS = 0
    BACKWATERS = 1
    FOREST = 2
    DESERT = 3
    COUNTRYSIDE = 4
    SEASIDE = 5
    CAVE = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def color(self) -> Tuple[int, int, int]:
        """Base RGB colour of the room floor for 2D rendering (Arcade)."""
        return {
            RoomTheme.MOUNTAINS: (120, 128, 140),
            RoomTheme.BACKWATERS: (40, 110, 90),
            RoomTheme.FOREST: (34, 90, 40),
            RoomTheme.DESERT: (214, 180, 110),
            RoomTheme.COUNTRYSIDE: (130, 170, 70),
            RoomTheme.SEASIDE: (70, 140, 200),
            RoomTheme.CAVE: (50, 40, 45),
        }[self]

    @property
    def accent(self) -> Tuple[int, int, int]:
        """Colour of the props placed in a room of this theme."""
        return {
            RoomTheme.MOUNTAINS: (235, 235, 245),
            RoomTheme.BACKWATERS: (20, 60, 50),
            RoomTheme.FOREST: (90, 60, 30),
            RoomTheme.DESERT: (60, 140, 60),
            RoomTheme.COUNTRYSIDE: (200, 60, 50),
            RoomTheme.SEASIDE: (240, 220, 160),
            RoomTheme.CAVE: (110, 100, 120),
        }[self]

    @classmethod
    def from_name(cls, name: str) -> "RoomTheme":
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ConfigError(f"Unknown room theme: {name!r}") from None


def truncmod(a: int, n: int) -> int:
    """Remainder of ``a / n`` with the quotient truncated toward zero.

    Python's ``%`` is floored, so the sign of the result follows ``n``; here it
    follows ``a`` instead.
    """
    r = abs(a) % abs(n)
    return -r if a < 0 else r


def theme_index(room_no: int, offset: int, size: int) -> int:
    """Ordinal of the theme displayed in ``room_no`` for a given stride."""
    return abs(truncmod(size + offset * room_no, size))


class ThemeTable:
    """Ordered, fixed-size lookup table from ordinal to theme."""

    def __init__(self, themes: Optional[Iterable[RoomTheme]] = None) -> None:
        entries = tuple(themes) if themes is not None else tuple(RoomTheme)
        if len(entries) < MIN_THEMES:
            raise ConfigError(f"A theme table needs at least {MIN_THEMES} themes, got {len(entries)}")
        if len(set(entries)) != len(entries):
            raise ConfigError("A theme table cannot list the same theme twice")
        self._entries: Tuple[RoomTheme, ...] = entries

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "ThemeTable":
        return cls(RoomTheme.from_name(n) for n in names)

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, ordinal: int) -> RoomTheme:
        return self._entries[ordinal]

    def __iter__(self) -> Iterator[RoomTheme]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"ThemeTable({[t.label for t in self._entries]})"

    @property
    def size(self) -> int:
        return len(self._entries)

    def valid_offset(self, offset: int) -> bool:
        return 1 <= offset <= self.size - 1

    def theme_for_room(self, room_no: int, offset: int) -> RoomTheme:
        return theme_for_room(room_no, offset, self)


DEFAULT_TABLE = ThemeTable()


def theme_for_room(room_no: int, offset: int, table: ThemeTable = DEFAULT_TABLE) -> RoomTheme:
    """Theme shown in ``room_no`` when the session stride is ``offset``.

    Deterministic for a given (room, offset, table). Room numbers start at 1.
    """
    if room_no < 1:
        raise InvalidArgument(f"Room numbers start at 1, got {room_no}")
    idx = theme_index(room_no, offset, table.size)
    return table[idx]
