"""
Mock hand skeletons for tests.

Only the middle finger MCP (index 9) matters to the controller; the other
landmarks are laid out around it so the skeleton looks like a hand.
"""

from typing import List, Tuple

from gesture_orbit.detection.landmarks import HandLandmarks, Landmark, LandmarkIndex

# Offsets from the middle finger MCP for each landmark (x, y)
_OFFSETS = [
    (0.00, 0.09),                                               # Wrist
    (-0.04, 0.07), (-0.07, 0.05), (-0.09, 0.03), (-0.11, 0.01), # Thumb
    (-0.05, 0.00), (-0.05, -0.06), (-0.05, -0.11), (-0.05, -0.15),  # Index
    (0.00, 0.00), (0.00, -0.07), (0.00, -0.13), (0.00, -0.18),      # Middle
    (0.05, 0.00), (0.05, -0.06), (0.05, -0.11), (0.05, -0.15),      # Ring
    (0.09, 0.02), (0.09, -0.03), (0.09, -0.07), (0.09, -0.10),      # Pinky
]


def make_hand(anchor: Tuple[float, float] = (0.5, 0.5), handedness: str = "Right") -> HandLandmarks:
    """Create a 21-point hand whose anchor landmark sits at ``anchor``."""
    ax, ay = anchor
    landmarks = [Landmark(x=ax + dx, y=ay + dy, z=0.0) for dx, dy in _OFFSETS]
    assert landmarks[LandmarkIndex.MIDDLE_MCP][:2] == (ax, ay)
    return HandLandmarks(landmarks=landmarks, handedness=handedness, confidence=0.95)


def make_pair(distance: float, center: Tuple[float, float] = (0.5, 0.5)) -> List[HandLandmarks]:
    """Two hands whose anchors are ``distance`` apart horizontally."""
    cx, cy = center
    return [
        make_hand((cx - distance / 2, cy), handedness="Left"),
        make_hand((cx + distance / 2, cy), handedness="Right"),
    ]


def with_landmark(hand: HandLandmarks, index: int, landmark: Landmark) -> HandLandmarks:
    """Copy of ``hand`` with one landmark replaced."""
    landmarks = list(hand.landmarks)
    landmarks[index] = landmark
    return HandLandmarks(landmarks=landmarks, handedness=hand.handedness,
                         confidence=hand.confidence)
