"""
Typed failures raised by the gesture orbit system.

Per-frame problems (bad landmarks, odd hand counts) are never raised;
they are discarded inside the controller. Only configuration mistakes
and feature-fatal tracking failures surface to the caller.
"""


class GestureOrbitError(Exception):
    """Base class for all gesture orbit errors."""


class ConfigError(GestureOrbitError):
    """Invalid configuration values."""


class TrackingUnavailableError(GestureOrbitError):
    """Hand tracking cannot run; the feature is disabled without retry."""


class DetectorInitError(TrackingUnavailableError):
    """The hand landmark model could not be loaded."""


class CaptureError(TrackingUnavailableError):
    """The capture device could not be opened (missing or access denied)."""
