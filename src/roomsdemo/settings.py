from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import List, Optional

import yaml

from .errors import ConfigError
from .themes import RoomTheme, ThemeTable

logger = logging.getLogger(__name__)


@dataclass
class VideoSettings:
    width: int = 960
    height: int = 600
    title: str = "Rooms Demo"
    fullscreen: bool = False
    vsync: bool = True


@dataclass
class RoomSettings:
    themes: List[str] = field(default_factory=lambda: [t.label for t in RoomTheme])
    offset_key: str = "RoomOffset"
    jump_room: int = 25
    zone_depth: float = 48.0

    def theme_table(self) -> ThemeTable:
        return ThemeTable.from_names(self.themes)


@dataclass
class PlayerSettings:
    speed: float = 240.0
    size: float = 32.0


@dataclass
class Settings:
    video: VideoSettings = field(default_factory=VideoSettings)
    rooms: RoomSettings = field(default_factory=RoomSettings)
    player: PlayerSettings = field(default_factory=PlayerSettings)

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Settings file {path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        try:
            settings = Settings(
                video=VideoSettings(**data.get("video", {})),
                rooms=RoomSettings(**data.get("rooms", {})),
                player=PlayerSettings(**data.get("player", {})),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc
        settings.validate()
        return settings

    def validate(self) -> None:
        for name, value in (
            ("rooms.jump_room", self.rooms.jump_room),
            ("video.width", self.video.width),
            ("video.height", self.video.height),
        ):
            if not _is_int(value):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        for name, value in (
            ("rooms.zone_depth", self.rooms.zone_depth),
            ("player.speed", self.player.speed),
            ("player.size", self.player.size),
        ):
            if not (_is_int(value) or isinstance(value, float)) or value <= 0:
                raise ConfigError(f"{name} must be a positive number, got {value!r}")
        if not isinstance(self.rooms.themes, list):
            raise ConfigError(f"rooms.themes must be a list, got {self.rooms.themes!r}")
        # Raises ConfigError on bad theme names or too few themes
        self.rooms.theme_table()
        if self.rooms.jump_room < 1:
            raise ConfigError(f"rooms.jump_room must be >= 1, got {self.rooms.jump_room}")
        if self.video.width <= 0 or self.video.height <= 0:
            raise ConfigError("video.width and video.height must be positive")

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from built-in defaults and optional user override file.

        If user_path is provided and exists, overlay values onto defaults.
        """
        try:
            with resources.files("roomsdemo.config").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded user settings from %s", user_path)
            else:
                logger.warning("User settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings

    def save(self, path: Path) -> None:
        data = dataclasses.asdict(self)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        logger.info("Saved settings to %s", path)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
