"""
Tests for Orbit Camera Projection
==================================
"""

import math
from unittest.mock import MagicMock

import numpy as np
import pytest

from gesture_orbit.control.orbit_camera import OrbitCamera, OrbitCameraModel, spherical_to_cartesian
from gesture_orbit.control.state import OrbitState


class TestSphericalToCartesian:
    """Physics convention, Y up."""

    def test_default_pose_is_on_positive_z(self):
        np.testing.assert_allclose(spherical_to_cartesian(5.0, math.pi / 2, 0.0),
                                   [0.0, 0.0, 5.0], atol=1e-12)

    def test_quarter_azimuth_is_on_positive_x(self):
        np.testing.assert_allclose(spherical_to_cartesian(2.0, math.pi / 2, math.pi / 2),
                                   [2.0, 0.0, 0.0], atol=1e-12)

    def test_small_elevation_is_near_the_top(self):
        x, y, z = spherical_to_cartesian(4.0, 0.1, 0.0)
        assert y == pytest.approx(4.0 * math.cos(0.1))
        assert z == pytest.approx(4.0 * math.sin(0.1))
        assert x == pytest.approx(0.0)

    def test_length_equals_radius(self):
        pos = spherical_to_cartesian(7.0, 1.1, -2.5)
        assert np.linalg.norm(pos) == pytest.approx(7.0)


class TestOrbitCamera:
    """View and projection matrices."""

    @pytest.fixture
    def camera(self):
        return OrbitCamera(fov=50.0, aspect=16 / 9)

    def test_initial_pose_looks_at_origin(self, camera):
        np.testing.assert_allclose(camera.position, [0.0, 0.0, 5.0])
        np.testing.assert_allclose(camera.forward, [0.0, 0.0, -1.0], atol=1e-12)

    def test_origin_projects_to_image_center(self, camera):
        pixels, visible = camera.project(np.zeros((1, 3)), 1280, 720)

        assert visible[0]
        np.testing.assert_allclose(pixels[0], [640.0, 360.0], atol=1e-9)

    def test_point_behind_camera_is_not_visible(self, camera):
        _, visible = camera.project(np.array([[0.0, 0.0, 10.0]]), 1280, 720)
        assert not visible[0]

    def test_up_is_up_on_screen(self, camera):
        pixels, _ = camera.project(np.array([[0.0, 1.0, 0.0]]), 1280, 720)
        assert pixels[0, 1] < 360.0

    def test_narrower_fov_magnifies(self, camera):
        point = np.array([[1.0, 0.0, 0.0]])
        wide, _ = camera.project(point, 1280, 720)

        camera.fov = 25.0
        camera.update_projection_matrix()
        narrow, _ = camera.project(point, 1280, 720)

        assert narrow[0, 0] - 640.0 > wide[0, 0] - 640.0

    def test_position_is_copied(self, camera):
        pos = camera.position
        pos[0] = 99.0
        assert camera.position[0] == 0.0


class TestOrbitCameraModel:
    """Applying orbit state to a camera sink."""

    def test_apply_places_camera_and_aims_at_origin(self):
        camera = OrbitCamera()
        state = OrbitState(azimuth=0.7, elevation=1.2, radius=6.0)

        position = OrbitCameraModel().apply(state, camera)

        np.testing.assert_allclose(camera.position, position)
        assert np.linalg.norm(camera.position) == pytest.approx(6.0)
        np.testing.assert_allclose(camera.forward, -position / 6.0, atol=1e-12)

    def test_apply_uses_sink_contract(self):
        sink = MagicMock()
        OrbitCameraModel().apply(OrbitState(), sink)

        np.testing.assert_allclose(sink.position, [0.0, 0.0, 5.0], atol=1e-12)
        sink.look_at.assert_called_once()
        np.testing.assert_allclose(sink.look_at.call_args[0][0], [0.0, 0.0, 0.0])
        sink.update_projection_matrix.assert_called_once_with()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
