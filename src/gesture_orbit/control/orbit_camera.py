"""
Orbit Camera
============

Places a perspective camera on a sphere around the scene origin.

Spherical convention (Y up): elevation is the polar angle from +Y,
azimuth turns around Y starting at +Z.

    x = r * sin(elevation) * sin(azimuth)
    y = r * cos(elevation)
    z = r * sin(elevation) * cos(azimuth)

``OrbitCamera`` is the camera sink: anything with a settable
``position``, ``look_at(target)`` and ``update_projection_matrix()``
can stand in for it.
"""

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .state import OrbitState

ORIGIN = np.zeros(3)
WORLD_UP = np.array([0.0, 1.0, 0.0])


def spherical_to_cartesian(radius: float, elevation: float, azimuth: float) -> np.ndarray:
    """Convert orbit parameters to a world position."""
    sin_el = math.sin(elevation)
    return np.array([
        radius * sin_el * math.sin(azimuth),
        radius * math.cos(elevation),
        radius * sin_el * math.cos(azimuth),
    ])


class OrbitCamera:
    """
    Minimal perspective camera with view and projection matrices.

    Example:
        >>> camera = OrbitCamera(fov=50.0, aspect=16 / 9)
        >>> camera.position = (0.0, 0.0, 5.0)
        >>> camera.look_at((0.0, 0.0, 0.0))
        >>> camera.update_projection_matrix()
        >>> pixels, visible = camera.project(points, 1280, 720)
    """

    def __init__(self, fov: float = 50.0, aspect: float = 16 / 9,
                 near: float = 0.1, far: float = 100.0,
                 position: Sequence[float] = (0.0, 0.0, 5.0)):
        self.fov = fov        # Vertical field of view, degrees
        self.aspect = aspect
        self.near = near
        self.far = far

        self._position = np.asarray(position, dtype=np.float64).copy()
        self.view_matrix = np.eye(4)
        self.projection_matrix = np.eye(4)

        self.look_at(ORIGIN)
        self.update_projection_matrix()

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = np.asarray(value, dtype=np.float64).copy()

    @property
    def forward(self) -> np.ndarray:
        """Unit viewing direction in world space."""
        return -self.view_matrix[2, :3]

    def look_at(self, target: Sequence[float]) -> None:
        """Orient the camera toward ``target`` keeping +Y up."""
        target = np.asarray(target, dtype=np.float64)
        back = self._position - target
        norm = np.linalg.norm(back)
        if norm == 0.0:
            return
        back /= norm

        right = np.cross(WORLD_UP, back)
        right_norm = np.linalg.norm(right)
        if right_norm < 1e-9:
            # Looking straight along the up axis
            right = np.array([1.0, 0.0, 0.0])
        else:
            right /= right_norm
        up = np.cross(back, right)

        rotation = np.stack([right, up, back])
        view = np.eye(4)
        view[:3, :3] = rotation
        view[:3, 3] = -rotation @ self._position
        self.view_matrix = view

    def update_projection_matrix(self) -> None:
        """Rebuild the perspective projection from fov/aspect/near/far."""
        f = 1.0 / math.tan(math.radians(self.fov) / 2)
        depth = self.near - self.far
        self.projection_matrix = np.array([
            [f / self.aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (self.far + self.near) / depth, 2 * self.far * self.near / depth],
            [0.0, 0.0, -1.0, 0.0],
        ])

    def project(self, points: np.ndarray, width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Project world points to pixel coordinates.

        Args:
            points: (N, 3) world positions
            width, height: Target image size

        Returns:
            (N, 2) pixel coordinates and an (N,) mask of points in front
            of the camera
        """
        points = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        homogeneous = np.hstack([points, np.ones((len(points), 1))])
        clip = (self.projection_matrix @ self.view_matrix @ homogeneous.T).T

        w = clip[:, 3]
        visible = w > self.near
        safe_w = np.where(visible, w, 1.0)
        ndc = clip[:, :2] / safe_w[:, None]

        pixels = np.empty((len(points), 2))
        pixels[:, 0] = (ndc[:, 0] + 1.0) * 0.5 * width
        pixels[:, 1] = (1.0 - ndc[:, 1]) * 0.5 * height
        return pixels, visible


class OrbitCameraModel:
    """Applies a smoothed orbit state to a camera sink."""

    def __init__(self, look_target: Optional[Sequence[float]] = None):
        self.look_target = np.asarray(look_target if look_target is not None else ORIGIN,
                                      dtype=np.float64)

    def apply(self, current: OrbitState, camera) -> np.ndarray:
        """Position the camera on the orbit and aim it at the scene origin."""
        position = spherical_to_cartesian(current.radius, current.elevation, current.azimuth)
        camera.position = position
        camera.look_at(self.look_target)
        camera.update_projection_matrix()
        return position
