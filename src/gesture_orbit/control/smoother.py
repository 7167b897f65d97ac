"""
Exponential smoothing of the orbit state.

Each processed frame moves the current state a fixed fraction of the way
toward the target, independently per channel. It also runs on IDLE
frames, so the camera glides to rest after the hand leaves.
"""

from typing import Optional

from ..config import OrbitConfig
from .state import OrbitState, clamp_elevation, clamp_radius


class Smoother:
    """Per-frame exponential interpolation toward the target."""

    def __init__(self, config: Optional[OrbitConfig] = None):
        self.config = config or OrbitConfig()

    def advance(self, current: OrbitState, target: OrbitState,
                factor: Optional[float] = None) -> None:
        """Move ``current`` toward ``target`` by ``factor`` (default from config)."""
        if factor is None:
            factor = self.config.smoothing_factor
        if not 0.0 < factor < 1.0:
            raise ValueError(f"smoothing factor must be in (0, 1), got {factor}")

        current.azimuth += (target.azimuth - current.azimuth) * factor
        current.elevation += (target.elevation - current.elevation) * factor
        current.radius += (target.radius - current.radius) * factor

        # Float accumulation must not leak past the bounds
        clamp_elevation(current, self.config)
        clamp_radius(current, self.config)
