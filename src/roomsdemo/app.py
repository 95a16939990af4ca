from __future__ import annotations

import logging
from typing import Any, List, Optional, Set

import arcade

from .events import EventBus, EventType
from .player import Player, PlayerMotor, ZoneLayout
from .presenter import ContentProvider, DisplaySurface, RoomAnchor, RoomPresenter
from .rng import RandomSource
from .sequencer import ThemeSequencer
from .settings import Settings
from .storage import PrefsStore
from .themes import RoomTheme

logger = logging.getLogger(__name__)

PROP_COUNT = 6
PROP_SIZE = 40
ZONE_COLOR = (255, 255, 255, 40)
PLAYER_COLOR = (60, 180, 255)


class ArcadeContentProvider(ContentProvider):
    """Builds a SpriteList of props coloured after the room's theme.

    Prop positions depend only on the theme, so a room looks the same each
    time it is revisited.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def instantiate(self, theme: RoomTheme, anchor: RoomAnchor) -> arcade.SpriteList:
        props = arcade.SpriteList()
        cols = PROP_COUNT // 2
        for i in range(PROP_COUNT):
            prop = arcade.SpriteSolidColor(PROP_SIZE, PROP_SIZE, color=theme.accent)
            col, row = i % cols, i // cols
            prop.center_x = self.width * (col + 1) / (cols + 1) + (theme.value * 13 % 40) - 20
            prop.center_y = self.height * (1 + 2 * row) / 4 + (theme.value * 29 % 30) - 15
            props.append(prop)
        logger.debug("Instantiated %d props for %s under %s", len(props), theme.label, anchor.name)
        return props

    def destroy(self, handle: Any) -> None:
        for sprite in list(handle):
            sprite.remove_from_sprite_lists()


class ArcadeDisplaySurface(DisplaySurface):
    """HUD labels for previous/current/next theme and the room number."""

    def __init__(self, width: int, height: int) -> None:
        top = height - 30
        self.previous_text = arcade.Text("", 20, top, arcade.color.WHITE, 14)
        self.current_text = arcade.Text("", width / 2, top, arcade.color.WHITE, 18, anchor_x="center")
        self.next_text = arcade.Text("", width - 20, top, arcade.color.WHITE, 14, anchor_x="right")
        self.room_text = arcade.Text("", width / 2, top - 28, arcade.color.LIGHT_GRAY, 14, anchor_x="center")

    def show(self, room_number: int, previous: RoomTheme, current: RoomTheme, next: RoomTheme) -> None:
        self.previous_text.text = f"< {previous.label}"
        self.current_text.text = current.label
        self.next_text.text = f"{next.label} >"
        self.room_text.text = f"Room {room_number}"

    def draw(self) -> None:
        for label in (self.previous_text, self.current_text, self.next_text, self.room_text):
            label.draw()


class RoomsWindow(arcade.Window):
    """
    The room window and session lifecycle.

    Responsibilities:
    - Own the sequencer, presenter and player for one session
    - Move the player from held keys and report zone entries on the bus
    - Draw the room, its themed props, the HUD and the player
    """

    def __init__(self, settings: Settings, store: PrefsStore, seed: Optional[int] = None) -> None:
        self.settings = settings
        video = settings.video
        super().__init__(
            width=video.width,
            height=video.height,
            title=video.title,
            fullscreen=video.fullscreen,
            vsync=video.vsync,
        )
        self.bus = EventBus()
        self.sequencer = ThemeSequencer(
            store,
            table=settings.rooms.theme_table(),
            rng=RandomSource(seed),
            bus=self.bus,
            offset_key=settings.rooms.offset_key,
        )
        self.player = Player(video.width / 2, video.height / 2)
        self.zones = ZoneLayout(video.width, video.height, depth=settings.rooms.zone_depth)
        self.anchor = RoomAnchor()
        self.display = ArcadeDisplaySurface(video.width, video.height)
        self.presenter = RoomPresenter(
            self.sequencer,
            ArcadeContentProvider(video.width, video.height),
            self.display,
            PlayerMotor(self.player),
            self.bus,
            anchor=self.anchor,
        )
        self.player_sprite = arcade.SpriteSolidColor(int(settings.player.size), int(settings.player.size), color=PLAYER_COLOR)
        self.player_list = arcade.SpriteList()
        self.player_list.append(self.player_sprite)
        self.zone_list = arcade.SpriteList()
        depth = int(settings.rooms.zone_depth)
        for cx in (depth / 2, video.width - depth / 2):
            zone = arcade.SpriteSolidColor(depth, video.height, color=ZONE_COLOR)
            zone.center_x = cx
            zone.center_y = video.height / 2
            self.zone_list.append(zone)
        self._held: Set[int] = set()
        self.bus.subscribe(EventType.ROOM_CHANGED, self._on_room_changed)

        self.presenter.start()
        logger.info("RoomsWindow initialized: %dx%d", video.width, video.height)

    def _on_room_changed(self, state) -> None:
        self.background_color = state.current_theme.color
        self.set_caption(f"{self.settings.video.title} - Room {state.room_number}")

    # Arcade lifecycle
    def on_draw(self):  # noqa: N802 (arcade API)
        self.clear()
        self.zone_list.draw()
        props: List[arcade.SpriteList] = list(self.anchor.children)
        for sprite_list in props:
            sprite_list.draw()
        self.player_sprite.center_x, self.player_sprite.center_y = self.player.position
        self.player_list.draw()
        self.display.draw()

    def on_update(self, delta_time: float):  # noqa: N802 (arcade API)
        dx = dy = 0.0
        if self._held & {arcade.key.LEFT, arcade.key.A}:
            dx -= 1
        if self._held & {arcade.key.RIGHT, arcade.key.D}:
            dx += 1
        if self._held & {arcade.key.UP, arcade.key.W}:
            dy += 1
        if self._held & {arcade.key.DOWN, arcade.key.S}:
            dy -= 1
        if not (dx or dy):
            return
        step = self.settings.player.speed * delta_time
        self.player.move(dx * step, dy * step)
        self.zones.clamp(self.player, margin=self.settings.player.size / 2)
        kind = self.zones.check_entry(self.player)
        if kind is not None:
            self.bus.emit(EventType.NAVIGATION_TRIGGERED, kind=kind)

    def on_key_press(self, symbol: int, modifiers: int):  # noqa: N802 (arcade API)
        if symbol == arcade.key.TAB:
            self.bus.emit(EventType.JUMP_REQUESTED, room_no=self.settings.rooms.jump_room)
        elif symbol == arcade.key.ESCAPE:
            logger.info("Exit requested")
            self.close()
        else:
            self._held.add(symbol)

    def on_key_release(self, symbol: int, modifiers: int):  # noqa: N802 (arcade API)
        self._held.discard(symbol)


def run(settings: Settings, store: PrefsStore, seed: Optional[int] = None) -> None:  # pragma: no cover - manual usage
    """Open the window and enter the arcade main loop."""
    RoomsWindow(settings, store, seed=seed)
    logger.info("Starting main loop")
    arcade.run()
