"""
Gesture Orbit - Main Application
=================================

Touchless orbit camera: one hand rotates the view around the object,
two hands zoom. Keyboard: r resets the camera, p prints a performance
report, q/ESC quits.
"""

import argparse
import logging
import signal
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from .capture.camera import Camera, CameraConfig
from .config import LoggingConfig, OrbitConfig, load_config
from .control.hand_controller import HandController
from .control.orbit_camera import OrbitCamera
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .errors import ConfigError, TrackingUnavailableError
from .session import TrackingSession
from .utils.logger import GestureLogger, setup_logging
from .utils.performance import PerformanceMonitor
from .utils.scheduler import FrameScheduler, SchedulerConfig
from .utils.visualization import Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "Gesture Orbit"
INSTRUCTIONS = ["1 hand: rotate", "2 hands: zoom", "r: reset  q: quit"]


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: HandDetectorConfig = field(default_factory=HandDetectorConfig)
    orbit: OrbitConfig = field(default_factory=OrbitConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    visualization: VisualizerConfig = field(default_factory=VisualizerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    app_config = AppConfig(
        camera=CameraConfig.from_dict(config_dict.get("camera", {})),
        mediapipe=HandDetectorConfig.from_dict(config_dict.get("mediapipe", {})),
        orbit=OrbitConfig.from_dict(config_dict.get("orbit", {})),
        scheduler=SchedulerConfig.from_dict(config_dict.get("scheduler", {})),
        visualization=VisualizerConfig.from_dict(config_dict.get("visualization", {})),
        logging=LoggingConfig.from_dict(config_dict.get("logging", {})),
    )
    app_config.orbit.validate()
    return app_config


class GestureOrbitApp:
    """
    Wires the tracking session, the orbit camera and the preview window
    onto one scheduler loop.
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.orbit_camera = OrbitCamera(aspect=config.camera.width / config.camera.height)
        self.gesture_log = GestureLogger()
        self.controller = HandController(config.orbit, self.orbit_camera,
                                         on_gesture=self.gesture_log)
        self.session = TrackingSession(
            Camera(config.camera),
            HandDetector(config.mediapipe),
            self.controller,
            PerformanceMonitor(frame_budget_ms=1000 / config.camera.fps),
        )
        self.scheduler = FrameScheduler(config.scheduler)
        self.visualizer = Visualizer(config.visualization)

    def run(self) -> int:
        """Run until quit. Returns a process exit code."""
        try:
            self.session.start()
        except TrackingUnavailableError as e:
            logger.error("Hand tracking unavailable: %s", e)
            return 1

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        self.scheduler.subscribe(self._on_tick)
        try:
            self.scheduler.run()
        finally:
            self.shutdown()
        return 0

    def reset_camera(self) -> None:
        """Reset trigger for the owning application."""
        self.controller.reset()

    def shutdown(self) -> None:
        self.scheduler.stop()
        self.session.stop()
        cv2.destroyAllWindows()

    def _on_tick(self) -> None:
        self.session.tick()
        cv2.imshow(WINDOW_NAME, self._render())
        self._handle_key(cv2.waitKey(1) & 0xFF)

    def _render(self) -> np.ndarray:
        frame = self.session.last_frame
        if frame is None:
            display = np.zeros((self.config.camera.height, self.config.camera.width, 3),
                               dtype=np.uint8)
        else:
            display = frame.image.copy()
            self.visualizer.draw_hands(display, self.session.last_hands)

        display = self.visualizer.mirror(display)
        self.visualizer.draw_performance(display, fps=self.session.performance.fps)
        self.visualizer.draw_gesture(display, self.controller.mode.label)
        self.visualizer.draw_orbit_info(display, self.controller.current)
        self.visualizer.draw_orbit_preview(display, self.orbit_camera)
        self.visualizer.draw_instructions(display, INSTRUCTIONS)
        return display

    def _handle_key(self, key: int) -> None:
        if key in (ord("q"), 27):
            self.scheduler.stop()
        elif key == ord("r"):
            self.reset_camera()
        elif key == ord("p"):
            print(self.session.performance.get_report())

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self.scheduler.stop()


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Touchless orbit camera control from hand gestures",
    )
    parser.add_argument("--config", "-c", default=None,
                        help="Path to configuration file (default: config/config.yaml)")
    parser.add_argument("--device", type=int, default=None,
                        help="Camera device index (overrides config)")
    parser.add_argument("--debug", "-d", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.debug else "INFO")

    try:
        config_dict = load_config(Path(args.config) if args.config else None)
        app_config = create_app_config(config_dict)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    log_cfg = app_config.logging
    setup_logging("DEBUG" if args.debug else log_cfg.level, log_cfg.file or None,
                  log_cfg.max_size_mb, log_cfg.backup_count)

    if args.device is not None:
        app_config.camera.device_id = args.device

    app = GestureOrbitApp(app_config)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
