"""
Webcam Capture Module
=====================

Feeds video frames to the hand detector. Each captured frame carries a
monotonically increasing ``frame_number`` so consumers can tell a new
frame from the one they already processed.
"""

import cv2
import time
import threading
import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np

logger = logging.getLogger(__name__)

# V4L2 first on Linux; it copes better with USB webcams
BACKENDS = (cv2.CAP_V4L2, cv2.CAP_ANY)


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    buffer_size: int = 1  # Minimal buffering for low latency
    threaded: bool = True
    flip_horizontal: bool = False
    warmup_frames: int = 5

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        defaults = cls()
        return cls(**{
            name: config.get(name, getattr(defaults, name))
            for name in defaults.__dataclass_fields__
        })


@dataclass
class Frame:
    """One captured BGR image and when it was taken."""
    image: np.ndarray
    timestamp: float
    frame_number: int

    @property
    def rgb(self) -> np.ndarray:
        """RGB copy for the landmark model."""
        return cv2.cvtColor(self.image, cv2.COLOR_BGR2RGB)

    @property
    def timestamp_ms(self) -> int:
        return int(self.timestamp * 1000)


class Camera:
    """
    Webcam capture with an optional background reader.

    Threaded mode keeps only the newest frame; ``read()`` never blocks and
    returns the same Frame until a newer one arrives. Without a thread,
    every ``read()`` grabs a fresh frame.

    Example:
        >>> with Camera(CameraConfig()) as camera:
        ...     frame = camera.read()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame_number = 0
        self._running = False

        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()
        self._latest_frame: Optional[Frame] = None

    def start(self) -> bool:
        """
        Open the capture device.

        Returns:
            True if the camera is delivering frames; False when the device
            is missing or access was denied
        """
        logger.info("Starting camera (device=%d, %dx%d@%dfps)",
                    self.config.device_id, self.config.width,
                    self.config.height, self.config.fps)

        self._cap = self._open_device()
        if self._cap is None:
            logger.error("Failed to open camera device %d (missing or access denied)",
                         self.config.device_id)
            return False

        logger.info("Camera initialized: %dx%d",
                    int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
                    int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT)))

        # Let auto exposure settle
        for _ in range(self.config.warmup_frames):
            self._cap.read()

        self._frame_number = 0
        self._running = True

        if self.config.threaded:
            self._thread = threading.Thread(target=self._capture_loop,
                                            name="camera-capture", daemon=True)
            self._thread.start()
        return True

    def _open_device(self) -> Optional[cv2.VideoCapture]:
        """First backend that opens the device and returns a frame."""
        for backend in BACKENDS:
            cap = cv2.VideoCapture(self.config.device_id, backend)
            if cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
                cap.set(cv2.CAP_PROP_FPS, self.config.fps)
                cap.set(cv2.CAP_PROP_BUFFERSIZE, self.config.buffer_size)
                ok, image = cap.read()
                if ok and image is not None:
                    return cap
                logger.warning("Backend %s opened but returned no frames", backend)
            else:
                logger.warning("Backend %s could not open device", backend)
            cap.release()
        return None

    def stop(self) -> None:
        """Stop capture and release the device. Safe to call repeatedly."""
        if not self._running and self._cap is None:
            return

        self._running = False
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

        if self._cap is not None:
            self._cap.release()
            self._cap = None

        with self._lock:
            self._latest_frame = None
        logger.info("Camera stopped")

    def read(self) -> Optional[Frame]:
        """Newest frame, or None before the first frame or after stop()."""
        if not self._running:
            return None
        if self.config.threaded:
            with self._lock:
                return self._latest_frame
        return self._grab()

    def _grab(self) -> Optional[Frame]:
        if self._cap is None:
            return None

        ok, image = self._cap.read()
        if not ok or image is None:
            logger.warning("Failed to capture frame")
            return None

        if self.config.flip_horizontal:
            image = cv2.flip(image, 1)

        self._frame_number += 1
        return Frame(image=image, timestamp=time.time(), frame_number=self._frame_number)

    def _capture_loop(self) -> None:
        while self._running:
            frame = self._grab()
            if frame is not None:
                with self._lock:
                    self._latest_frame = frame

    @property
    def is_running(self) -> bool:
        return self._running

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
