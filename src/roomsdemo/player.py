from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .events import NavigationEvent
from .presenter import PlayerController

logger = logging.getLogger(__name__)


@dataclass
class Player:
    """Player position inside the room, in world units.

    The spawn point is captured at construction and is where every room
    transition puts the player back.
    """

    x: float
    y: float
    collision_enabled: bool = True
    spawn: Tuple[float, float] = field(init=False)

    def __post_init__(self) -> None:
        self.spawn = (self.x, self.y)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def move(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy


class PlayerMotor(PlayerController):
    """PlayerController over a :class:`Player` model."""

    def __init__(self, player: Player) -> None:
        self.player = player

    def reset_position(self) -> None:
        self.player.x, self.player.y = self.player.spawn
        logger.debug("Player reset to spawn %s", self.player.spawn)

    def set_collision_enabled(self, enabled: bool) -> None:
        self.player.collision_enabled = bool(enabled)


@dataclass
class ZoneLayout:
    """Navigation zones along the room's left and right walls.

    Entering the right strip moves forward, the left strip moves back. Entries
    are edge-triggered: standing inside a zone reports it only once.
    """

    width: float
    height: float
    depth: float = 48.0
    _inside: Optional[NavigationEvent] = field(default=None, init=False, repr=False)

    def zone_at(self, x: float, y: float) -> Optional[NavigationEvent]:
        if not 0 <= y <= self.height:
            return None
        if x >= self.width - self.depth:
            return NavigationEvent.FORWARD
        if x <= self.depth:
            return NavigationEvent.BACKWARD
        return None

    def check_entry(self, player: Player) -> Optional[NavigationEvent]:
        """Return the zone just entered by ``player``, if any.

        Nothing is reported while collision is disabled. After a teleport the
        next call sees the player at spawn, which clears the remembered zone.
        """
        if not player.collision_enabled:
            return None
        zone = self.zone_at(player.x, player.y)
        entered = zone if zone is not None and zone is not self._inside else None
        self._inside = zone
        if entered is not None:
            logger.debug("Player entered %s zone at %s", entered.value, player.position)
        return entered

    def clamp(self, player: Player, margin: float = 0.0) -> None:
        player.x = max(margin, min(self.width - margin, player.x))
        player.y = max(margin, min(self.height - margin, player.y))
