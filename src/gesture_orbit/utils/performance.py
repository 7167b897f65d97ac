"""
Performance Monitoring Module
==============================

Throughput and per-stage latency for the capture -> detect -> control loop.

Throughput is measured between completed frames, so it reports how many
camera frames actually reached the controller each second. A frame counts
as slow when its processing took longer than one camera frame period,
i.e. the next frame was already waiting before this one was done.
"""

import time
import logging
import threading
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

STAGES = ("capture", "detection", "control")


class RollingAverage:
    """Mean over the most recent ``size`` samples."""

    def __init__(self, size: int):
        self._samples: deque = deque(maxlen=size)

    def add(self, value: float) -> None:
        self._samples.append(value)

    def clear(self) -> None:
        self._samples.clear()

    @property
    def mean(self) -> float:
        if not self._samples:
            return 0.0
        return sum(self._samples) / len(self._samples)

    def __len__(self) -> int:
        return len(self._samples)


@dataclass
class PerformanceMetrics:
    """Snapshot of performance metrics."""
    fps: float = 0.0
    latency_ms: float = 0.0
    capture_time_ms: float = 0.0
    detection_time_ms: float = 0.0
    control_time_ms: float = 0.0
    total_frames: int = 0
    slow_frames: int = 0


class PerformanceMonitor:
    """
    Rolling-window throughput and stage latency tracker.

    Args:
        window_size: Samples kept per rolling average
        frame_budget_ms: Camera frame period; longer frames count as slow
        clock: Monotonic seconds source, replaceable in tests

    Example:
        >>> monitor = PerformanceMonitor(frame_budget_ms=1000 / 30)
        >>> monitor.start()
        >>> monitor.frame_start()
        >>> with monitor.measure("detection"):
        ...     hands = detector.detect(image, ts)
        >>> monitor.frame_complete()
    """

    def __init__(self, window_size: int = 30, frame_budget_ms: float = 1000 / 30,
                 clock: Callable[[], float] = time.perf_counter):
        if frame_budget_ms <= 0:
            raise ValueError(f"frame_budget_ms must be positive, got {frame_budget_ms}")
        self.window_size = window_size
        self.frame_budget_ms = frame_budget_ms
        self._clock = clock

        self._intervals = RollingAverage(window_size)
        self._latency = RollingAverage(window_size)
        self._stages: Dict[str, RollingAverage] = {}
        self._frame_started: Optional[float] = None
        self._last_completed: Optional[float] = None
        self._total_frames = 0
        self._slow_frames = 0
        self._lock = threading.Lock()

    def start(self) -> None:
        """Clear all counters for a new session."""
        with self._lock:
            self._intervals.clear()
            self._latency.clear()
            self._stages.clear()
            self._frame_started = None
            self._last_completed = None
            self._total_frames = 0
            self._slow_frames = 0
        logger.debug("Performance monitor started (frame budget %.1fms)", self.frame_budget_ms)

    def stop(self) -> None:
        logger.info("Performance monitor stopped. Frames: %d, slow: %d",
                    self._total_frames, self._slow_frames)

    def frame_start(self) -> None:
        """Mark the start of processing for a new camera frame."""
        self._frame_started = self._clock()

    def frame_complete(self) -> None:
        """Mark the current frame done and update the rolling figures."""
        if self._frame_started is None:
            return

        now = self._clock()
        latency_ms = (now - self._frame_started) * 1000
        with self._lock:
            self._latency.add(latency_ms)
            if self._last_completed is not None:
                self._intervals.add(now - self._last_completed)
            self._last_completed = now
            self._total_frames += 1
            if latency_ms > self.frame_budget_ms:
                self._slow_frames += 1
        self._frame_started = None

    @contextmanager
    def measure(self, stage: str):
        """Time one processing stage of the current frame."""
        start = self._clock()
        try:
            yield
        finally:
            elapsed_ms = (self._clock() - start) * 1000
            with self._lock:
                if stage not in self._stages:
                    self._stages[stage] = RollingAverage(self.window_size)
                self._stages[stage].add(elapsed_ms)

    @property
    def fps(self) -> float:
        """Frames reaching the controller per second."""
        with self._lock:
            interval = self._intervals.mean
        return 1.0 / interval if interval > 0 else 0.0

    def stage_time_ms(self, stage: str) -> float:
        with self._lock:
            stats = self._stages.get(stage)
            return stats.mean if stats is not None else 0.0

    def get_metrics(self) -> PerformanceMetrics:
        capture, detection, control = (self.stage_time_ms(s) for s in STAGES)
        with self._lock:
            latency = self._latency.mean
            total, slow = self._total_frames, self._slow_frames
        return PerformanceMetrics(
            fps=self.fps,
            latency_ms=latency,
            capture_time_ms=capture,
            detection_time_ms=detection,
            control_time_ms=control,
            total_frames=total,
            slow_frames=slow,
        )

    def get_report(self) -> str:
        """Formatted performance report."""
        m = self.get_metrics()
        return (
            f"Performance Report\n"
            f"{'=' * 40}\n"
            f"Throughput: {m.fps:.1f} fps (camera period {self.frame_budget_ms:.1f}ms)\n"
            f"Latency: {m.latency_ms:.1f}ms\n"
            f"\nPer-Stage Breakdown:\n"
            f"  Capture: {m.capture_time_ms:.2f}ms\n"
            f"  Detection: {m.detection_time_ms:.2f}ms\n"
            f"  Control: {m.control_time_ms:.2f}ms\n"
            f"\nFrames: {m.total_frames}, over camera period: {m.slow_frames} "
            f"({100 * m.slow_frames / max(1, m.total_frames):.1f}%)\n"
        )
