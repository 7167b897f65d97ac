"""Hand landmark types; the MediaPipe detector lives in ``hand_detector``."""
from .landmarks import HandFrame, HandLandmarks, Landmark, LandmarkIndex, is_valid_hand

__all__ = ["HandFrame", "HandLandmarks", "Landmark", "LandmarkIndex", "is_valid_hand"]
