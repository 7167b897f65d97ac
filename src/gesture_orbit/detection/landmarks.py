"""
Hand Landmark Types
===================

Plain containers for the 21-point hand skeleton produced by the detector.
Coordinates are normalized to the frame (x, y in [0, 1]); z is depth
relative to the wrist.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Tuple

import numpy as np

NUM_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float  # Depth relative to wrist

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass
class HandLandmarks:
    """Container for detected hand landmarks with utility methods."""
    landmarks: List[Landmark]
    handedness: str = "Right"  # "Left" or "Right"
    confidence: float = 1.0
    image_width: int = 1280
    image_height: int = 720

    def get(self, index: int) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def planar(self, index: int) -> Tuple[float, float]:
        """Normalized (x, y) of a landmark, depth dropped."""
        lm = self.get(index)
        return (lm.x, lm.y)

    def to_numpy(self) -> np.ndarray:
        """Convert landmarks to numpy array of shape (21, 3)."""
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks], dtype=np.float64)


# One detection result: 0, 1 or 2+ hands in detector order.
HandFrame = List[HandLandmarks]


def is_valid_hand(hand: HandLandmarks) -> bool:
    """True if the hand has a full skeleton with finite coordinates."""
    if hand is None or len(hand.landmarks) != NUM_LANDMARKS:
        return False
    return bool(np.isfinite(hand.to_numpy()).all())


def planar_distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    """Euclidean distance between two normalized (x, y) points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])
