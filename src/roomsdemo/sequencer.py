from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, NamedTuple, Optional, Tuple

from .errors import InvalidArgument, SessionNotStarted
from .events import EventBus, EventType
from .rng import RandomSource
from .storage import PrefsStore
from .themes import DEFAULT_TABLE, RoomTheme, ThemeTable

logger = logging.getLogger(__name__)

OFFSET_KEY = "RoomOffset"
FIRST_ROOM = 1


class ThemeTriple(NamedTuple):
    previous: RoomTheme
    current: RoomTheme
    next: RoomTheme


@dataclass(frozen=True)
class SequencerState:
    """Snapshot of the cursor, the session stride and the derived themes."""

    room_number: int
    offset: int
    themes: ThemeTriple

    @property
    def previous_theme(self) -> RoomTheme:
        return self.themes.previous

    @property
    def current_theme(self) -> RoomTheme:
        return self.themes.current

    @property
    def next_theme(self) -> RoomTheme:
        return self.themes.next


class ThemeSequencer:
    """Tracks the player's room in an endless run of themed rooms.

    The only mutable state is the room cursor; the stride (``offset``) is drawn
    once per session and the three theme slots are always derived from the two.

    - next(): always advances, rooms are unbounded above
    - previous(): no-op at room 1
    - jump_to(room): relocates the cursor, all slots recomputed
    """

    def __init__(
        self,
        store: PrefsStore,
        table: ThemeTable = DEFAULT_TABLE,
        rng: Optional[RandomSource] = None,
        bus: Optional[EventBus] = None,
        offset_key: str = OFFSET_KEY,
    ) -> None:
        self.store = store
        self.table = table
        self.rng = rng or RandomSource()
        self.bus = bus
        self.offset_key = offset_key
        self._room: Optional[int] = None
        self._offset: Optional[int] = None
        self._previous: Optional[RoomTheme] = None
        self._current: Optional[RoomTheme] = None
        self._next: Optional[RoomTheme] = None

    # Session lifecycle
    def initialize_session(self, offset: Optional[int] = None) -> ThemeTriple:
        """Draw a fresh stride, persist it and place the cursor in room 1.

        Passing ``offset`` skips the draw; it must still lie in [1, N-1].
        """
        last = self.store.get_int(self.offset_key, 0)
        if offset is None:
            offset = self._draw_offset(last)
        elif isinstance(offset, bool) or not isinstance(offset, int) or not self.table.valid_offset(offset):
            raise InvalidArgument(f"Room offset must be an int between 1 and {self.table.size - 1}, got {offset!r}")
        self.store.set(self.offset_key, offset)
        self.store.flush()
        self._offset = offset
        self._room = FIRST_ROOM
        self._current = self.theme(FIRST_ROOM)
        # Nothing precedes room 1; previous mirrors current
        self._previous = self._current
        self._next = self.theme(FIRST_ROOM + 1)
        logger.info("Session started with room offset %d (previous session used %d)", offset, last)
        return self._publish()

    def _draw_offset(self, last: int) -> int:
        hi = self.table.size - 1
        offset = self.rng.randint(1, hi)
        while offset == last:
            offset = self.rng.randint(1, hi)
        return offset

    @property
    def started(self) -> bool:
        return self._room is not None

    def _require_session(self) -> None:
        if not self.started:
            raise SessionNotStarted("initialize_session() must be called before navigating")

    # Queries
    @property
    def room_number(self) -> int:
        self._require_session()
        return self._room  # type: ignore[return-value]

    @property
    def offset(self) -> int:
        self._require_session()
        return self._offset  # type: ignore[return-value]

    @property
    def themes(self) -> ThemeTriple:
        self._require_session()
        return ThemeTriple(self._previous, self._current, self._next)  # type: ignore[arg-type]

    @property
    def state(self) -> SequencerState:
        return SequencerState(room_number=self.room_number, offset=self.offset, themes=self.themes)

    def theme(self, room_no: int) -> RoomTheme:
        """Theme of ``room_no`` under this session's offset."""
        return self.table.theme_for_room(room_no, self.offset)

    def preview(self, start: int = FIRST_ROOM, count: int = 10) -> List[Tuple[int, RoomTheme]]:
        """Themes for ``count`` consecutive rooms from ``start``; the cursor does not move."""
        if start < FIRST_ROOM:
            raise InvalidArgument(f"Room numbers start at {FIRST_ROOM}, got {start}")
        if count < 0:
            raise InvalidArgument(f"count must be non-negative, got {count}")
        return [(r, self.theme(r)) for r in range(start, start + count)]

    # Navigation
    def next(self) -> ThemeTriple:
        self._require_session()
        self._room += 1  # type: ignore[operator]
        self._previous = self._current
        self._current = self.theme(self._room)
        self._next = self.theme(self._room + 1)
        logger.debug("Advanced to room %d (%s)", self._room, self._current.label)
        return self._publish()

    def previous(self) -> ThemeTriple:
        self._require_session()
        if self._room == FIRST_ROOM:
            logger.debug("Already in room %d; ignoring backward step", FIRST_ROOM)
            return self.themes
        self._room -= 1  # type: ignore[operator]
        self._next = self._current
        self._current = self.theme(self._room)
        self._previous = self._previous_of(self._room)
        logger.debug("Went back to room %d (%s)", self._room, self._current.label)
        return self._publish()

    def jump_to(self, room_no: int) -> ThemeTriple:
        self._require_session()
        if isinstance(room_no, bool) or not isinstance(room_no, int):
            raise InvalidArgument(f"Room number must be an int, got {type(room_no).__name__}")
        if room_no < FIRST_ROOM:
            raise InvalidArgument(f"Room numbers start at {FIRST_ROOM}, got {room_no}")
        self._room = room_no
        self._previous = self._previous_of(room_no)
        self._current = self.theme(room_no)
        self._next = self.theme(room_no + 1)
        logger.info("Jumped to room %d (%s)", room_no, self._current.label)
        return self._publish()

    def _previous_of(self, room_no: int) -> RoomTheme:
        if room_no == FIRST_ROOM:
            return self.theme(FIRST_ROOM)
        return self.theme(room_no - 1)

    def _publish(self) -> ThemeTriple:
        triple = self.themes
        if self.bus is not None:
            self.bus.emit(EventType.ROOM_CHANGED, state=self.state)
        return triple
