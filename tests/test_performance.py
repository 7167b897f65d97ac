"""
Tests for Performance, Scheduling and Logging Utilities
========================================================
"""

import logging

import pytest

from gesture_orbit.utils.logger import GestureLogger, setup_logging
from gesture_orbit.utils.performance import PerformanceMonitor, RollingAverage
from gesture_orbit.utils.scheduler import FrameScheduler, SchedulerConfig


class FakeClock:
    """Clock that only advances when slept on."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class TestRollingAverage:

    def test_keeps_only_recent_samples(self):
        avg = RollingAverage(3)
        for value in [100.0, 1.0, 2.0, 3.0]:
            avg.add(value)

        assert len(avg) == 3
        assert avg.mean == pytest.approx(2.0)

    def test_empty_mean_is_zero(self):
        assert RollingAverage(5).mean == 0.0


class TestPerformanceMonitor:

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def monitor(self, clock):
        mon = PerformanceMonitor(window_size=5, frame_budget_ms=1000 / 30, clock=clock)
        mon.start()
        return mon

    def run_frame(self, monitor, clock, capture_ms=1.0, detection_ms=10.0, gap_ms=0.0):
        monitor.frame_start()
        with monitor.measure("capture"):
            clock.now += capture_ms / 1000
        with monitor.measure("detection"):
            clock.now += detection_ms / 1000
        monitor.frame_complete()
        clock.now += gap_ms / 1000

    def test_throughput_follows_completed_frames(self, monitor, clock):
        for _ in range(4):
            self.run_frame(monitor, clock, capture_ms=1.0, detection_ms=9.0, gap_ms=40.0)

        assert monitor.fps == pytest.approx(20.0)

    def test_single_frame_has_no_throughput_yet(self, monitor, clock):
        self.run_frame(monitor, clock)

        assert monitor.fps == 0.0
        assert monitor.get_metrics().total_frames == 1

    def test_slow_frames_measured_against_camera_period(self, monitor, clock):
        self.run_frame(monitor, clock, detection_ms=20.0)
        self.run_frame(monitor, clock, detection_ms=25.0)
        self.run_frame(monitor, clock, detection_ms=50.0)

        metrics = monitor.get_metrics()
        assert metrics.total_frames == 3
        assert metrics.slow_frames == 1

    def test_stage_timing(self, monitor, clock):
        for _ in range(3):
            self.run_frame(monitor, clock, capture_ms=2.0, detection_ms=12.0)

        assert monitor.stage_time_ms("capture") == pytest.approx(2.0)
        assert monitor.stage_time_ms("detection") == pytest.approx(12.0)
        assert monitor.stage_time_ms("control") == 0.0
        assert monitor.get_metrics().latency_ms == pytest.approx(14.0)

    def test_frame_complete_without_start_is_ignored(self, monitor):
        monitor.frame_complete()
        assert monitor.get_metrics().total_frames == 0

    def test_start_clears_counters(self, monitor, clock):
        self.run_frame(monitor, clock, detection_ms=50.0)
        monitor.start()

        metrics = monitor.get_metrics()
        assert metrics.total_frames == 0
        assert metrics.slow_frames == 0
        assert monitor.stage_time_ms("detection") == 0.0

    def test_report_generation(self, monitor, clock):
        self.run_frame(monitor, clock, gap_ms=20.0)
        self.run_frame(monitor, clock)

        report = monitor.get_report()
        assert "Throughput" in report
        assert "Control" in report
        assert "camera period 33.3ms" in report

    def test_rejects_non_positive_budget(self):
        with pytest.raises(ValueError):
            PerformanceMonitor(frame_budget_ms=0)


class TestFrameScheduler:

    def test_runs_callbacks_each_tick(self):
        clock = FakeClock()
        scheduler = FrameScheduler(SchedulerConfig(target_fps=60), clock=clock, sleep=clock.sleep)
        calls = []
        scheduler.subscribe(lambda: calls.append("a"))
        scheduler.subscribe(lambda: calls.append("b"))

        assert scheduler.run(max_ticks=3) == 3
        assert calls == ["a", "b"] * 3

    def test_paces_to_target_rate(self):
        clock = FakeClock()
        scheduler = FrameScheduler(SchedulerConfig(target_fps=50), clock=clock, sleep=clock.sleep)
        scheduler.subscribe(lambda: None)

        scheduler.run(max_ticks=4)

        assert clock.sleeps == pytest.approx([0.02] * 4)

    def test_stop_from_callback_ends_loop_and_unsubscribes(self):
        clock = FakeClock()
        scheduler = FrameScheduler(clock=clock, sleep=clock.sleep)
        later = []
        scheduler.subscribe(scheduler.stop)
        scheduler.subscribe(lambda: later.append(1))

        assert scheduler.run() == 1
        assert later == []
        assert not scheduler.is_running

        # Nothing fires after teardown
        scheduler.tick()
        assert later == []

    def test_unsubscribe(self):
        clock = FakeClock()
        scheduler = FrameScheduler(clock=clock, sleep=clock.sleep)
        calls = []

        def callback():
            calls.append(1)

        scheduler.subscribe(callback)
        scheduler.unsubscribe(callback)
        scheduler.run(max_ticks=2)

        assert calls == []

    def test_rejects_non_positive_rate(self):
        with pytest.raises(ValueError):
            FrameScheduler(SchedulerConfig(target_fps=0))


class TestLogging:

    def test_gesture_logger_records_changes_only(self):
        log = GestureLogger()
        for label in ["IDLE", "IDLE", "ROTATE", "ROTATE", "ZOOM", "IDLE"]:
            log(label)

        assert [h["mode"] for h in log.get_history()] == ["IDLE", "ROTATE", "ZOOM", "IDLE"]
        assert log.current == "IDLE"
        assert len(log.get_history(last_n=2)) == 2

    def test_gesture_history_is_bounded(self):
        log = GestureLogger(max_history=4)
        for i in range(10):
            log("ROTATE" if i % 2 else "IDLE")

        history = log.get_history()
        assert len(history) == 4
        assert history[-1]["mode"] == "ROTATE"
        assert history[0]["previous"] == "ROTATE"

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "orbit.log"
        previous_level = logging.getLogger().level
        root = setup_logging("DEBUG", str(log_file))
        try:
            logging.getLogger("gesture_orbit.test").debug("hello")
            for handler in root.handlers:
                handler.flush()
            assert "hello" in log_file.read_text()
        finally:
            for handler in list(root.handlers):
                handler.close()
            root.handlers.clear()
            root.setLevel(previous_level)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
