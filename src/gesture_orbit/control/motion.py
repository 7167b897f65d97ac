"""
Motion Accumulator
==================

Turns inter-frame hand motion into changes of the orbit *target*.

ROTATE (one hand): the anchor landmark's planar displacement, scaled by
the position sensitivity, moves the azimuth (full frame width = 2*pi per
unit of sensitivity) and elevation (pi per unit). Moving the hand right
decreases azimuth; moving it down (image y grows downward) decreases
elevation.

ZOOM (two hands): the change of the planar distance between the two
anchor landmarks changes the radius. Hands moving together grow the
radius (zoom out), hands moving apart shrink it.

The first frame of any gesture session only records a baseline.
"""

import math
import logging
from typing import Optional, Sequence

from ..config import OrbitConfig
from ..detection.landmarks import HandLandmarks, planar_distance
from .state import GestureMode, OrbitState, TrackingCache, clamp_elevation, clamp_radius

logger = logging.getLogger(__name__)

AZIMUTH_RANGE = 2 * math.pi
ELEVATION_RANGE = math.pi


class MotionAccumulator:
    """Updates target orbit parameters from hand motion deltas."""

    def __init__(self, config: Optional[OrbitConfig] = None):
        self.config = config or OrbitConfig()

    def accumulate(self, mode: GestureMode, hands: Sequence[HandLandmarks],
                   target: OrbitState, cache: TrackingCache) -> bool:
        """
        Apply one frame of motion.

        Args:
            mode: Classified gesture mode for this frame
            hands: The frame's hands (already validated)
            target: Orbit target, mutated in place
            cache: Anchor memory, mutated in place

        Returns:
            True if the target changed, False for baseline-only or idle frames
        """
        if mode == GestureMode.ROTATE:
            return self._rotate(hands[0], target, cache)
        if mode == GestureMode.ZOOM:
            return self._zoom(hands[0], hands[1], target, cache)
        return False

    def _rotate(self, hand: HandLandmarks, target: OrbitState, cache: TrackingCache) -> bool:
        x, y = hand.planar(self.config.anchor_index)
        last = cache.last_anchor

        cache.last_anchor = (x, y)
        cache.last_pinch_distance = None

        if last is None:
            return False

        delta_x = (x - last[0]) * self.config.sensitivity_pos
        delta_y = (y - last[1]) * self.config.sensitivity_pos

        target.azimuth -= delta_x * AZIMUTH_RANGE
        target.elevation -= delta_y * ELEVATION_RANGE
        # Never flip over the poles
        clamp_elevation(target, self.config)
        return True

    def _zoom(self, first: HandLandmarks, second: HandLandmarks,
              target: OrbitState, cache: TrackingCache) -> bool:
        distance = planar_distance(
            first.planar(self.config.anchor_index),
            second.planar(self.config.anchor_index),
        )
        previous = cache.last_pinch_distance

        cache.last_pinch_distance = distance
        cache.last_anchor = None

        if previous is None:
            return False

        delta = previous - distance  # + when hands move closer
        target.radius += delta * self.config.zoom_gain
        clamp_radius(target, self.config)
        return True
