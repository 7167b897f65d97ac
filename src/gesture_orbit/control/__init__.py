"""Gesture-to-orbit-camera control."""
from .state import GestureMode, OrbitState, TrackingCache
from .gesture_classifier import GestureClassifier
from .motion import MotionAccumulator
from .smoother import Smoother
from .orbit_camera import OrbitCamera, OrbitCameraModel, spherical_to_cartesian
from .reset import ResetController
from .hand_controller import HandController

__all__ = [
    "GestureMode",
    "OrbitState",
    "TrackingCache",
    "GestureClassifier",
    "MotionAccumulator",
    "Smoother",
    "OrbitCamera",
    "OrbitCameraModel",
    "spherical_to_cartesian",
    "ResetController",
    "HandController",
]
