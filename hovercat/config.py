import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

# Keys accepted in each section of the YAML file
SECTIONS = {
    "window": ("field_width", "field_height", "fps", "title_bar_height"),
    "player": (
        "player_size",
        "collision_width_ratio",
        "collision_height_ratio",
        "gravity",
        "jump_force",
        "eyes_closed_duration",
    ),
    "obstacles": ("obstacle_width", "gap_height", "max_gap_delta", "seed"),
    "difficulty": ("base_speed", "speed_increase", "max_speed", "spawn_interval"),
    "session": ("game_over_delay", "background_width", "music_volume", "effects_volume"),
    "platform": ("has_touch", "has_window_management"),
    "paths": ("asset_dir", "high_score_path"),
    "logging": ("log_level",),
}


@dataclass(frozen=True)
class Capabilities:
    """What the host platform offers; picks the input mapper once at startup"""
    has_touch: bool = False
    has_window_management: bool = True


@dataclass
class Config:
    # Play field, in field pixels
    field_width: int = 1280
    field_height: int = 800
    fps: int = 60
    title_bar_height: float = 100.0

    # Player
    player_size: float = 80.0
    collision_width_ratio: float = 0.70
    collision_height_ratio: float = 0.55
    gravity: float = 1500.0
    jump_force: float = -550.0
    eyes_closed_duration: float = 0.2

    # Obstacles
    obstacle_width: float = 100.0
    gap_height: float = 220.0
    max_gap_delta: float = 200.0
    seed: Optional[int] = None

    # Difficulty
    base_speed: float = 200.0
    speed_increase: float = 5.0
    max_speed: float = 400.0
    spawn_interval: float = 2.0

    # Session
    game_over_delay: float = 0.5
    background_width: float = 1280.0
    music_volume: float = 0.15
    effects_volume: float = 0.5

    capabilities: Capabilities = field(default_factory=Capabilities)

    asset_dir: str = "Data"
    high_score_path: Optional[str] = "highscore.txt"
    log_level: str = "info"

    def __post_init__(self):
        self.validate()

    @property
    def initial_spawn_distance(self) -> float:
        return self.base_speed * self.spawn_interval

    @property
    def player_start(self):
        return self.field_width / 4, self.field_height / 2

    def validate(self):
        if self.field_width <= 0 or self.field_height <= 0:
            raise ConfigError("field dimensions must be positive")
        if self.fps <= 0:
            raise ConfigError("fps must be positive")
        if not 0 < self.gap_height < self.field_height:
            raise ConfigError("gap_height must be between 0 and field_height")
        if self.max_gap_delta < 0:
            raise ConfigError("max_gap_delta must not be negative")
        if self.obstacle_width <= 0 or self.player_size <= 0:
            raise ConfigError("obstacle_width and player_size must be positive")
        if not 0 < self.base_speed <= self.max_speed:
            raise ConfigError("speeds must satisfy 0 < base_speed <= max_speed")
        if self.speed_increase < 0:
            raise ConfigError("speed_increase must not be negative")
        if self.spawn_interval <= 0:
            raise ConfigError("spawn_interval must be positive")
        for name in ("collision_width_ratio", "collision_height_ratio"):
            if not 0 < getattr(self, name) <= 1:
                raise ConfigError(f"{name} must be in (0, 1]")
        for name in ("game_over_delay", "eyes_closed_duration"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.background_width <= 0:
            raise ConfigError("background_width must be positive")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Build a config from a flat or sectioned mapping.

        Sectioned input mirrors ``config.yaml``; flat keys are accepted as well so
        tests and callers can override single values.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        platform: Dict[str, Any] = {}

        for key, value in (data or {}).items():
            if key in SECTIONS:
                if not isinstance(value, dict):
                    raise ConfigError(f"section '{key}' must be a mapping")
                for sub_key, sub_value in value.items():
                    if sub_key not in SECTIONS[key]:
                        raise ConfigError(f"unknown key '{sub_key}' in section '{key}'")
                    if key == "platform":
                        platform[sub_key] = bool(sub_value)
                    else:
                        values[sub_key] = sub_value
            elif key in ("has_touch", "has_window_management"):
                platform[key] = bool(value)
            elif key in known:
                values[key] = value
            else:
                raise ConfigError(f"unknown config key '{key}'")

        if platform:
            values["capabilities"] = Capabilities(**platform)
        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def load_from_file(cls, filepath) -> "Config":
        if not os.path.exists(filepath):
            logger.info("No config file at %s, using defaults", filepath)
            return cls()
        try:
            with open(filepath, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Couldn't parse {filepath}: {e}") from e
        if config_data is not None and not isinstance(config_data, dict):
            raise ConfigError(f"{filepath} must contain a mapping")
        logger.info("Loaded config from %s", filepath)
        return cls.from_dict(config_data)
