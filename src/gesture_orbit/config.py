"""
Configuration for the gesture orbit control loop.

Each component owns a dataclass config with a ``from_dict`` constructor
that fills missing keys from defaults. ``load_config`` reads the YAML
file the application sections are built from.
"""

import math
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


@dataclass
class OrbitConfig:
    """Tuning constants for the gesture-to-orbit control loop."""
    smoothing_factor: float = 0.1   # Lower = smoother but more lag
    sensitivity_pos: float = 4.0    # Multiplier on normalized hand motion
    zoom_gain: float = 15.0         # Radius change per unit pinch distance
    min_zoom: float = 2.0
    max_zoom: float = 10.0
    default_radius: float = 5.0
    elevation_epsilon: float = 0.1  # Keeps the orbit off the poles
    anchor_index: int = 9           # Middle finger MCP
    max_hands: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "OrbitConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            smoothing_factor=float(config.get("smoothing_factor", 0.1)),
            sensitivity_pos=float(config.get("sensitivity_pos", 4.0)),
            zoom_gain=float(config.get("zoom_gain", 15.0)),
            min_zoom=float(config.get("min_zoom", 2.0)),
            max_zoom=float(config.get("max_zoom", 10.0)),
            default_radius=float(config.get("default_radius", 5.0)),
            elevation_epsilon=float(config.get("elevation_epsilon", 0.1)),
            anchor_index=int(config.get("anchor_index", 9)),
            max_hands=int(config.get("max_hands", 2)),
        )

    @property
    def min_elevation(self) -> float:
        return self.elevation_epsilon

    @property
    def max_elevation(self) -> float:
        return math.pi - self.elevation_epsilon

    def validate(self) -> "OrbitConfig":
        """Raise ConfigError if the constants cannot keep the orbit invariants."""
        if not 0.0 < self.smoothing_factor < 1.0:
            raise ConfigError(
                f"smoothing_factor must be in (0, 1), got {self.smoothing_factor}")
        if self.min_zoom > self.max_zoom:
            raise ConfigError(
                f"min_zoom ({self.min_zoom}) exceeds max_zoom ({self.max_zoom})")
        if not self.min_zoom <= self.default_radius <= self.max_zoom:
            raise ConfigError(
                f"default_radius {self.default_radius} outside "
                f"[{self.min_zoom}, {self.max_zoom}]")
        if not 0.0 <= self.elevation_epsilon < math.pi / 2:
            raise ConfigError(
                f"elevation_epsilon must be in [0, pi/2), got {self.elevation_epsilon}")
        if not 0 <= self.anchor_index < 21:
            raise ConfigError(f"anchor_index must be a hand landmark index, got {self.anchor_index}")
        if self.max_hands < 2:
            raise ConfigError(f"max_hands must allow two-hand zoom, got {self.max_hands}")
        return self


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: str = ""
    max_size_mb: int = 10
    backup_count: int = 3

    @classmethod
    def from_dict(cls, config: dict) -> "LoggingConfig":
        """Create config from dictionary."""
        return cls(
            level=config.get("level", "INFO"),
            file=config.get("file", "") or "",
            max_size_mb=config.get("max_size_mb", 10),
            backup_count=config.get("backup_count", 3),
        )


def load_config(config_path: Union[str, Path, None] = None) -> dict:
    """Load configuration from YAML file, or an empty dict if it is missing."""
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")
    return data
