"""Restore the orbit to its default pose without smoothing."""

from typing import Optional

from ..config import OrbitConfig
from .state import GestureMode, OrbitState, TrackingCache


class ResetController:
    """Snaps target and current state to defaults and forgets all anchors."""

    def __init__(self, config: Optional[OrbitConfig] = None):
        self.config = config or OrbitConfig()

    def reset(self, target: OrbitState, current: OrbitState,
              cache: TrackingCache) -> GestureMode:
        """
        Reset in place. Idempotent.

        Returns:
            GestureMode.IDLE, the mode the caller should now report
        """
        default = OrbitState.default(self.config)
        target.assign(default)
        current.assign(default)
        cache.clear()
        return GestureMode.IDLE
