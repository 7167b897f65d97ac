"""
Tests for the Application Wiring
=================================
"""

import math
from unittest.mock import patch

import numpy as np
import pytest

pytest.importorskip("mediapipe")

from gesture_orbit.main import AppConfig, GestureOrbitApp
from mock_hands import make_hand


@pytest.fixture
def app():
    with patch("gesture_orbit.main.Camera") as camera_cls, \
         patch("gesture_orbit.main.HandDetector") as detector_cls:
        camera_cls.return_value.start.return_value = True
        camera_cls.return_value.read.return_value = None
        detector_cls.return_value.start.return_value = True
        yield GestureOrbitApp(AppConfig())


class TestGestureOrbitApp:

    def test_reset_key_resets_camera(self, app):
        app.controller.process_frame([make_hand((0.5, 0.5))], timestamp=1)
        app.controller.process_frame([make_hand((0.7, 0.5))], timestamp=2)

        app._handle_key(ord("r"))

        assert app.controller.current.as_tuple() == (0.0, math.pi / 2, 5.0)
        np.testing.assert_allclose(app.orbit_camera.position, [0.0, 0.0, 5.0], atol=1e-12)
        assert app.gesture_log.current == "IDLE"

    def test_quit_key_stops_scheduler(self, app):
        calls = []
        app.scheduler.subscribe(lambda: calls.append(1))
        app._handle_key(ord("q"))
        app.scheduler.tick()

        assert not app.scheduler.is_running
        assert calls == []

    def test_slow_frame_budget_follows_camera_rate(self, app):
        assert app.session.performance.frame_budget_ms == pytest.approx(1000 / 30)

    def test_render_without_frame(self, app):
        display = app._render()
        assert display.shape == (720, 1280, 3)
        # Orbit preview inset is drawn in the top-right corner
        assert display[10:200, -300:-20].any()

    def test_run_reports_unavailable_tracking(self, app):
        app.session.detector.start.return_value = False

        assert app.run() == 1
        assert not app.controller.enabled


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
