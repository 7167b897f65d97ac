"""
Visualization Module
=====================

Preview overlays: hand skeletons on the webcam feed, the active gesture,
the orbit readout, and a wireframe reference cube seen through the
orbit camera.
"""

import cv2
import math
import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..detection.landmarks import HandLandmarks
from ..control.state import OrbitState


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_landmarks: bool = True
    show_connections: bool = True
    show_orbit_preview: bool = True
    show_fps: bool = True
    mirror_preview: bool = True

    # Colors (BGR format)
    landmark_color: Tuple[int, int, int] = (255, 255, 255)  # White
    connection_color: Tuple[int, int, int] = (0, 0, 255)    # Red
    text_color: Tuple[int, int, int] = (0, 255, 255)        # Yellow
    cube_color: Tuple[int, int, int] = (220, 220, 220)

    font_scale: float = 0.6
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_connections=config.get("show_connections", True),
            show_orbit_preview=config.get("show_orbit_preview", True),
            show_fps=config.get("show_fps", True),
            mirror_preview=config.get("mirror_preview", True),
            landmark_color=tuple(colors.get("landmarks", [255, 255, 255])),
            connection_color=tuple(colors.get("connections", [0, 0, 255])),
            text_color=tuple(colors.get("text", [0, 255, 255])),
            cube_color=tuple(colors.get("cube", [220, 220, 220])),
            font_scale=config.get("font_scale", 0.6),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Draws the preview window contents.

    Example:
        >>> viz = Visualizer(VisualizerConfig())
        >>> viz.draw_hands(frame.image, hands)
        >>> display = viz.mirror(frame.image)
        >>> viz.draw_gesture(display, "ROTATE")
        >>> viz.draw_orbit_preview(display, camera)
    """

    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),         # Thumb
        (0, 5), (5, 6), (6, 7), (7, 8),         # Index
        (5, 9), (9, 10), (10, 11), (11, 12),    # Middle
        (9, 13), (13, 14), (14, 15), (15, 16),  # Ring
        (13, 17), (17, 18), (18, 19), (19, 20), # Pinky
        (0, 17),                                # Palm base
    ]

    # Unit cube around the origin, plus world axes
    CUBE_VERTICES = np.array([
        [x, y, z] for x in (-1, 1) for y in (-1, 1) for z in (-1, 1)
    ], dtype=np.float64)
    CUBE_EDGES = [
        (0, 1), (2, 3), (4, 5), (6, 7),
        (0, 2), (1, 3), (4, 6), (5, 7),
        (0, 4), (1, 5), (2, 6), (3, 7),
    ]
    AXES = [
        (np.array([1.5, 0.0, 0.0]), (0, 0, 255)),   # X red
        (np.array([0.0, 1.5, 0.0]), (0, 255, 0)),   # Y green
        (np.array([0.0, 0.0, 1.5]), (255, 0, 0)),   # Z blue
    ]

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_hands(self, image: np.ndarray, hands: List[HandLandmarks]) -> np.ndarray:
        """Draw all detected hand skeletons."""
        for hand in hands:
            self.draw_hand(image, hand)
        return image

    def draw_hand(self, image: np.ndarray, hand: HandLandmarks) -> np.ndarray:
        """Draw one hand's connections and landmarks."""
        height, width = image.shape[:2]
        points = [lm.to_pixel(width, height) for lm in hand.landmarks]

        if self.config.show_connections:
            for start_idx, end_idx in self.HAND_CONNECTIONS:
                cv2.line(image, points[start_idx], points[end_idx],
                         self.config.connection_color, 2)

        if self.config.show_landmarks:
            for point in points:
                cv2.circle(image, point, 2, self.config.landmark_color, -1)

        return image

    def mirror(self, image: np.ndarray) -> np.ndarray:
        """Selfie view; text must be drawn after mirroring."""
        if self.config.mirror_preview:
            return cv2.flip(image, 1)
        return image

    def draw_gesture(self, image: np.ndarray, mode_label: str) -> np.ndarray:
        """Draw the active gesture mode in the bottom-left corner."""
        height = image.shape[0]
        cv2.putText(image, f"Gesture: {mode_label}", (20, height - 30),
                    self._font, self.config.font_scale * 1.2,
                    self.config.text_color, self.config.font_thickness)
        return image

    def draw_orbit_info(self, image: np.ndarray, state: OrbitState) -> np.ndarray:
        """Draw azimuth/elevation (degrees) and radius."""
        height = image.shape[0]
        text = "Az {:7.1f}  El {:5.1f}  R {:4.2f}".format(
            math.degrees(state.azimuth), math.degrees(state.elevation), state.radius)
        cv2.putText(image, text, (20, height - 60), self._font,
                    self.config.font_scale, self.config.text_color, 1)
        return image

    def draw_performance(self, image: np.ndarray, fps: float = 0.0) -> np.ndarray:
        if self.config.show_fps:
            cv2.putText(image, f"FPS: {fps:.1f}", (20, 30), self._font,
                        self.config.font_scale, self.config.text_color,
                        self.config.font_thickness)
        return image

    def draw_orbit_preview(self, image: np.ndarray, camera,
                           inset: Tuple[int, int] = (320, 240)) -> np.ndarray:
        """
        Render the reference cube as seen by the orbit camera into an
        inset panel in the top-right corner.
        """
        if not self.config.show_orbit_preview:
            return image

        height, width = image.shape[:2]
        panel_w, panel_h = min(inset[0], width), min(inset[1], height)
        panel = np.full((panel_h, panel_w, 3), 30, dtype=np.uint8)

        pixels, visible = camera.project(self.CUBE_VERTICES, panel_w, panel_h)
        for a, b in self.CUBE_EDGES:
            if visible[a] and visible[b]:
                cv2.line(panel, _pt(pixels[a]), _pt(pixels[b]), self.config.cube_color, 1)

        origin_px, origin_vis = camera.project(np.zeros((1, 3)), panel_w, panel_h)
        for tip, color in self.AXES:
            tip_px, tip_vis = camera.project(tip[None, :], panel_w, panel_h)
            if origin_vis[0] and tip_vis[0]:
                cv2.line(panel, _pt(origin_px[0]), _pt(tip_px[0]), color, 2)

        image[0:panel_h, width - panel_w:width] = panel
        cv2.rectangle(image, (width - panel_w, 0), (width - 1, panel_h - 1), (255, 255, 255), 1)
        return image

    def draw_instructions(self, image: np.ndarray, instructions: List[str]) -> np.ndarray:
        """Draw key help in the bottom-right corner."""
        height, width = image.shape[:2]
        line_height = 20
        x = width - 220
        y = height - len(instructions) * line_height - 10
        for i, line in enumerate(instructions):
            cv2.putText(image, line, (x, y + i * line_height),
                        self._font, 0.5, self.config.text_color, 1)
        return image


def _pt(p: np.ndarray) -> Tuple[int, int]:
    return (int(round(p[0])), int(round(p[1])))
