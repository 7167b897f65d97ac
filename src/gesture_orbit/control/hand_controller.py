"""
Hand Controller
===============

Per-frame gesture-to-camera control loop:

    HandFrame -> GestureClassifier -> MotionAccumulator
              -> Smoother -> OrbitCameraModel -> camera sink

The controller exclusively owns the orbit target, the smoothed current
state and the tracking cache. A frame is processed atomically under a
lock so a reset requested from another thread can never interleave with
an update.

Frames that cannot be trusted (non-finite coordinates, incomplete
skeletons, more hands than supported) are discarded at the frame
boundary: no state changes, no camera update, no mode transition.
"""

import logging
import threading
from typing import Callable, Hashable, Optional, Sequence

from ..config import OrbitConfig
from ..detection.landmarks import HandLandmarks, is_valid_hand
from .gesture_classifier import GestureClassifier
from .motion import MotionAccumulator
from .orbit_camera import OrbitCameraModel
from .reset import ResetController
from .smoother import Smoother
from .state import GestureMode, OrbitState, TrackingCache

logger = logging.getLogger(__name__)

GestureSink = Callable[[str], None]


class HandController:
    """
    Converts hand detections into a smooth orbit camera trajectory.

    Example:
        >>> camera = OrbitCamera()
        >>> controller = HandController(OrbitConfig(), camera, on_gesture=print)
        >>> controller.process_frame(hands, timestamp=frame.frame_number)
        >>> controller.reset()
    """

    def __init__(self, config: Optional[OrbitConfig] = None, camera=None,
                 on_gesture: Optional[GestureSink] = None):
        self.config = (config or OrbitConfig()).validate()
        self.camera = camera
        self.on_gesture = on_gesture

        self._classifier = GestureClassifier()
        self._accumulator = MotionAccumulator(self.config)
        self._smoother = Smoother(self.config)
        self._camera_model = OrbitCameraModel()
        self._resetter = ResetController(self.config)

        self._target = OrbitState.default(self.config)
        self._current = OrbitState.default(self.config)
        self._cache = TrackingCache()
        self._mode = GestureMode.IDLE

        self._lock = threading.RLock()
        self._last_timestamp: Optional[Hashable] = None
        self._enabled = True
        self._disabled_reason: Optional[str] = None

        self._processed_frames = 0
        self._discarded_frames = 0

        self._apply_camera()

    def process_frame(self, hands: Sequence[HandLandmarks],
                      timestamp: Optional[Hashable] = None) -> Optional[GestureMode]:
        """
        Run one control step for a detection frame.

        Args:
            hands: Detected hands for the frame
            timestamp: Unique frame identity; a repeat of the previous
                value is ignored. None always processes.

        Returns:
            The gesture mode for the frame, or None if the frame was
            skipped (duplicate, discarded or controller disabled)
        """
        with self._lock:
            if not self._enabled:
                return None
            if timestamp is not None and timestamp == self._last_timestamp:
                return None
            self._last_timestamp = timestamp

            if not self._is_trustworthy(hands):
                self._discarded_frames += 1
                logger.debug("Discarded frame %s (%d hands)", timestamp, len(hands))
                return None

            mode = self._classifier.classify(hands)
            self._classifier.transition(self._mode, mode, self._cache)
            self._mode = mode

            self._accumulator.accumulate(mode, hands, self._target, self._cache)
            self._smoother.advance(self._current, self._target)
            self._apply_camera()

            self._processed_frames += 1

        self._notify(mode)
        return mode

    def reset(self) -> GestureMode:
        """Snap the camera back to its default pose and forget all anchors."""
        with self._lock:
            mode = self._resetter.reset(self._target, self._current, self._cache)
            self._mode = mode
            self._apply_camera()
        logger.info("Camera reset to default orbit (radius=%.1f)", self.config.default_radius)
        self._notify(mode)
        return mode

    def disable(self, reason: str) -> None:
        """Stop reacting to frames; used when tracking is fatally unavailable."""
        with self._lock:
            if not self._enabled:
                return
            self._enabled = False
            self._disabled_reason = reason
        logger.error("Hand control disabled: %s", reason)

    def _is_trustworthy(self, hands: Sequence[HandLandmarks]) -> bool:
        if len(hands) > self.config.max_hands:
            return False
        return all(is_valid_hand(hand) for hand in hands)

    def _apply_camera(self) -> None:
        if self.camera is not None:
            self._camera_model.apply(self._current, self.camera)

    def _notify(self, mode: GestureMode) -> None:
        if self.on_gesture is None:
            return
        try:
            self.on_gesture(mode.label)
        except Exception as e:
            logger.error("Gesture sink error: %s", e)

    @property
    def mode(self) -> GestureMode:
        with self._lock:
            return self._mode

    @property
    def target(self) -> OrbitState:
        """Copy of the orbit target."""
        with self._lock:
            return self._target.copy()

    @property
    def current(self) -> OrbitState:
        """Copy of the smoothed orbit state applied to the camera."""
        with self._lock:
            return self._current.copy()

    @property
    def cache(self) -> TrackingCache:
        """Copy of the tracking cache."""
        with self._lock:
            return TrackingCache(self._cache.last_anchor, self._cache.last_pinch_distance)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def disabled_reason(self) -> Optional[str]:
        return self._disabled_reason

    @property
    def processed_frames(self) -> int:
        return self._processed_frames

    @property
    def discarded_frames(self) -> int:
        return self._discarded_frames
