"""
Orbit control state records.

``OrbitState`` is used twice by the controller: once for the *target*
the gestures push around, once for the *current* smoothed state the
camera is placed from. Both are kept inside the same bounds.
"""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from ..config import OrbitConfig


class GestureMode(Enum):
    """What the hands in the current frame are doing to the camera."""
    IDLE = "IDLE"
    ROTATE = "ROTATE"
    ZOOM = "ZOOM"

    @property
    def label(self) -> str:
        return self.value


@dataclass
class OrbitState:
    """Spherical orbit parameters (radians, scene units)."""
    azimuth: float = 0.0                # Unbounded, around the vertical axis
    elevation: float = math.pi / 2      # Polar angle from +Y
    radius: float = 5.0

    @classmethod
    def default(cls, config: OrbitConfig) -> "OrbitState":
        """Camera on the equator, facing the object head-on."""
        return cls(azimuth=0.0, elevation=math.pi / 2, radius=config.default_radius)

    def copy(self) -> "OrbitState":
        return replace(self)

    def assign(self, other: "OrbitState") -> None:
        """Overwrite all channels in place."""
        self.azimuth = other.azimuth
        self.elevation = other.elevation
        self.radius = other.radius

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.azimuth, self.elevation, self.radius)


@dataclass
class TrackingCache:
    """Per-session anchor memory for inter-frame deltas."""
    last_anchor: Optional[Tuple[float, float]] = None   # ROTATE
    last_pinch_distance: Optional[float] = None         # ZOOM

    def clear(self) -> None:
        self.last_anchor = None
        self.last_pinch_distance = None

    @property
    def is_empty(self) -> bool:
        return self.last_anchor is None and self.last_pinch_distance is None


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_elevation(state: OrbitState, config: OrbitConfig) -> None:
    state.elevation = clamp(state.elevation, config.min_elevation, config.max_elevation)


def clamp_radius(state: OrbitState, config: OrbitConfig) -> None:
    state.radius = clamp(state.radius, config.min_zoom, config.max_zoom)
