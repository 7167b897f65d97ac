"""
Tracking Session
================

Owns the capture -> detect -> control lifecycle for one operator.

Each ``tick()`` checks for a new camera frame; the detector runs at most
once per unique frame and the controller is only stepped when it does.
Ticks without a new frame change nothing, so the camera simply holds.

Fatal problems (model cannot load, camera cannot open) are raised once
from ``start()`` as typed errors; the session and its controller then
stay inert and never retry.
"""

import logging
from typing import Optional

from .capture.camera import Camera, Frame
from .control.hand_controller import HandController
from .control.state import GestureMode
from .detection.landmarks import HandFrame
from .errors import CaptureError, DetectorInitError, TrackingUnavailableError
from .utils.performance import PerformanceMonitor

logger = logging.getLogger(__name__)


class TrackingSession:
    """
    Drives a HandController from live webcam detections.

    Example:
        >>> session = TrackingSession(camera, detector, controller)
        >>> session.start()
        >>> scheduler.subscribe(session.tick)
        >>> scheduler.run()
        >>> session.stop()
    """

    def __init__(self, camera: Camera, detector, controller: HandController,
                 performance: Optional[PerformanceMonitor] = None):
        self.camera = camera
        self.detector = detector
        self.controller = controller
        self.performance = performance or PerformanceMonitor()

        self._running = False
        self._failure: Optional[TrackingUnavailableError] = None
        self._last_frame_number: Optional[int] = None
        self._last_frame: Optional[Frame] = None
        self._last_hands: HandFrame = []

    def start(self) -> bool:
        """
        Load the detector and open the camera.

        Returns:
            True once running; False if the session already failed

        Raises:
            DetectorInitError: hand landmark model could not be loaded
            CaptureError: camera missing or access denied
        """
        if self._running:
            return True
        if self._failure is not None:
            logger.debug("Tracking unavailable (%s); not retrying", self._failure)
            return False

        if not self.detector.start():
            self._fail(DetectorInitError("Failed to load hand tracking models."))

        if not self.camera.start():
            self.detector.stop()
            self._fail(CaptureError("Camera access denied."))

        self._running = True
        self._last_frame_number = None
        self.performance.start()
        logger.info("Hand tracking active")
        return True

    def _fail(self, error: TrackingUnavailableError) -> None:
        self._failure = error
        self.controller.disable(str(error))
        raise error

    def tick(self) -> Optional[GestureMode]:
        """
        Process the newest camera frame if there is one.

        Returns:
            The controller's gesture mode for a processed frame, else None
        """
        if not self._running:
            return None

        with self.performance.measure("capture"):
            frame = self.camera.read()
        if frame is None or frame.frame_number == self._last_frame_number:
            return None
        self._last_frame_number = frame.frame_number

        self.performance.frame_start()
        try:
            with self.performance.measure("detection"):
                hands = self.detector.detect(frame.rgb, frame.timestamp_ms)
        except (RuntimeError, ValueError) as e:
            logger.warning("Detection failed on frame %d: %s", frame.frame_number, e)
            self.performance.frame_complete()
            return None

        with self.performance.measure("control"):
            mode = self.controller.process_frame(hands, timestamp=frame.frame_number)
        self.performance.frame_complete()

        self._last_frame = frame
        self._last_hands = hands
        return mode

    def stop(self) -> None:
        """Release the camera and the detector. Safe to call repeatedly."""
        if not self._running:
            return
        self._running = False
        self.camera.stop()
        self.detector.stop()
        self.performance.stop()
        logger.info("Hand tracking stopped")

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def failure(self) -> Optional[TrackingUnavailableError]:
        return self._failure

    @property
    def last_frame(self) -> Optional[Frame]:
        return self._last_frame

    @property
    def last_hands(self) -> HandFrame:
        return self._last_hands

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
