"""
Gesture Mode Classifier
=======================

Maps the hands in a detection frame to a camera gesture mode:

    0 hands  -> IDLE
    1 hand   -> ROTATE
    2 hands  -> ZOOM
    3+ hands -> IDLE (no defined meaning; the camera is left alone)

The classifier also owns anchor-cache invalidation: when the mode
changes, the memory produced by the previous mode is dropped so a new
gesture session starts from a fresh baseline instead of jumping.
"""

import logging
from typing import Sequence

from .state import GestureMode, TrackingCache

logger = logging.getLogger(__name__)


class GestureClassifier:
    """
    Hand-count based gesture mode classifier.

    Example:
        >>> classifier = GestureClassifier()
        >>> mode = classifier.classify(hands)
        >>> if mode != previous:
        ...     classifier.invalidate(previous, cache)
    """

    MODE_BY_COUNT = {
        0: GestureMode.IDLE,
        1: GestureMode.ROTATE,
        2: GestureMode.ZOOM,
    }

    # Counts outside MODE_BY_COUNT
    FALLBACK_MODE = GestureMode.IDLE

    def classify(self, hands: Sequence) -> GestureMode:
        """
        Classify a detection frame.

        Args:
            hands: Detected hands (any sized sequence)

        Returns:
            GestureMode for this frame
        """
        return self.MODE_BY_COUNT.get(len(hands), self.FALLBACK_MODE)

    @staticmethod
    def invalidate(previous: GestureMode, cache: TrackingCache) -> None:
        """Drop the cache entries owned by the mode being left."""
        if previous == GestureMode.ROTATE:
            cache.last_anchor = None
        elif previous == GestureMode.ZOOM:
            cache.last_pinch_distance = None

    def transition(self, previous: GestureMode, current: GestureMode,
                   cache: TrackingCache) -> bool:
        """Invalidate on a mode change. Returns True if the mode changed."""
        if current == previous:
            return False
        self.invalidate(previous, cache)
        logger.debug("Gesture mode: %s -> %s", previous.label, current.label)
        return True
