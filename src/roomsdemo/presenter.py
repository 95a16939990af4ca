from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import InvalidArgument
from .events import EventBus, EventType, NavigationEvent
from .sequencer import SequencerState, ThemeSequencer
from .themes import RoomTheme

logger = logging.getLogger(__name__)


class ContentProvider(ABC):
    """Creates and removes the themed props shown inside the room.

    Implementations return an opaque handle from ``instantiate`` that is later
    passed back to ``destroy``.
    """

    @abstractmethod
    def instantiate(self, theme: RoomTheme, anchor: "RoomAnchor") -> Any:
        """Build the content for ``theme`` positioned relative to ``anchor``."""
        raise NotImplementedError

    @abstractmethod
    def destroy(self, handle: Any) -> None:
        """Remove content previously returned by ``instantiate``."""
        raise NotImplementedError


class DisplaySurface(ABC):
    """Sink for the HUD text describing the current room."""

    @abstractmethod
    def show(self, room_number: int, previous: RoomTheme, current: RoomTheme, next: RoomTheme) -> None:
        raise NotImplementedError


class PlayerController(ABC):
    @abstractmethod
    def reset_position(self) -> None:
        """Teleport the player back to the session's spawn point."""
        raise NotImplementedError

    @abstractmethod
    def set_collision_enabled(self, enabled: bool) -> None:
        raise NotImplementedError


@dataclass
class RoomAnchor:
    """Fixed attachment point for the room's themed content."""

    name: str = "Room"
    children: List[Any] = field(default_factory=list)

    def attach(self, child: Any) -> None:
        self.children.append(child)

    def detach(self, child: Any) -> None:
        if child in self.children:
            self.children.remove(child)


class RoomPresenter:
    """Keeps the visible room in step with a ThemeSequencer.

    - Listens for ROOM_CHANGED to swap content and refresh the HUD
    - Listens for NAVIGATION_TRIGGERED / JUMP_REQUESTED to drive the sequencer
    - Resets the player after every transition that actually moved the cursor
    """

    def __init__(
        self,
        sequencer: ThemeSequencer,
        content: ContentProvider,
        display: DisplaySurface,
        player: PlayerController,
        bus: EventBus,
        anchor: Optional[RoomAnchor] = None,
    ) -> None:
        self.sequencer = sequencer
        self.content = content
        self.display = display
        self.player = player
        self.bus = bus
        self.anchor = anchor or RoomAnchor()
        self._handle: Any = None
        self._shown_theme: Optional[RoomTheme] = None
        bus.subscribe(EventType.ROOM_CHANGED, self._on_room_changed)
        bus.subscribe(EventType.NAVIGATION_TRIGGERED, self.on_navigation_trigger)
        bus.subscribe(EventType.JUMP_REQUESTED, self.jump_to)

    @property
    def shown_theme(self) -> Optional[RoomTheme]:
        return self._shown_theme

    @property
    def content_handle(self) -> Any:
        return self._handle

    def start(self) -> None:
        """Begin the session; room 1 is displayed through the ROOM_CHANGED event."""
        self.sequencer.initialize_session()

    def close(self) -> None:
        self.bus.unsubscribe(EventType.ROOM_CHANGED, self._on_room_changed)
        self.bus.unsubscribe(EventType.NAVIGATION_TRIGGERED, self.on_navigation_trigger)
        self.bus.unsubscribe(EventType.JUMP_REQUESTED, self.jump_to)
        self._remove_content()

    def _on_room_changed(self, state: SequencerState) -> None:
        self.refresh(state)

    def refresh(self, state: SequencerState) -> None:
        self.display.show(state.room_number, state.previous_theme, state.current_theme, state.next_theme)
        self.on_theme_changed(state.current_theme)

    def on_theme_changed(self, current: RoomTheme) -> None:
        """Replace the room's content with the props for ``current``."""
        self._remove_content()
        handle = self.content.instantiate(current, self.anchor)
        self.anchor.attach(handle)
        self._handle = handle
        self._shown_theme = current
        logger.debug("Room content now %s", current.label)

    def _remove_content(self) -> None:
        if self._handle is None:
            return
        self.anchor.detach(self._handle)
        self.content.destroy(self._handle)
        self._handle = None
        self._shown_theme = None

    def on_navigation_trigger(self, kind: NavigationEvent) -> None:
        room_before = self.sequencer.room_number
        if kind is NavigationEvent.FORWARD:
            self.sequencer.next()
        elif kind is NavigationEvent.BACKWARD:
            self.sequencer.previous()
        else:
            raise InvalidArgument(f"Unknown navigation event: {kind!r}")
        if self.sequencer.room_number != room_before:
            self.reset_player_position()

    def jump_to(self, room_no: int) -> None:
        self.sequencer.jump_to(room_no)
        self.reset_player_position()

    def reset_player_position(self) -> None:
        self.player.set_collision_enabled(False)
        try:
            self.player.reset_position()
        finally:
            self.player.set_collision_enabled(True)

