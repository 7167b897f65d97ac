"""
Gesture Orbit
=============

Touchless orbit-camera control: hand skeletons from a webcam drive the
rotation and zoom of a camera circling a 3D object.

Modules:
    - capture: Camera frame acquisition
    - detection: MediaPipe hand landmark detection
    - control: Gesture classification, motion accumulation, smoothing
      and orbit camera projection
    - session: Capture -> detect -> control lifecycle
    - utils: Logging, performance monitoring, scheduling, visualization
"""

__version__ = "1.0.0"
__author__ = "HCI Team"
