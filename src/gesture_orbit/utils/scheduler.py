"""
Frame Scheduler
===============

Cooperative periodic callback loop standing in for the host's
frame-presentation clock. Every subscribed callback runs to completion,
in subscription order, once per tick in the calling thread.
"""

import time
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class SchedulerConfig:
    """Scheduler settings."""
    target_fps: float = 60.0

    @classmethod
    def from_dict(cls, config: dict) -> "SchedulerConfig":
        """Create config from dictionary."""
        return cls(target_fps=float(config.get("target_fps", 60.0)))


class FrameScheduler:
    """
    Runs callbacks at a target rate until stopped.

    Example:
        >>> scheduler = FrameScheduler(SchedulerConfig(target_fps=60))
        >>> scheduler.subscribe(session.tick)
        >>> scheduler.run()        # blocks until scheduler.stop()
    """

    def __init__(self, config: Optional[SchedulerConfig] = None,
                 clock: Callable[[], float] = time.perf_counter,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config or SchedulerConfig()
        if self.config.target_fps <= 0:
            raise ValueError(f"target_fps must be positive, got {self.config.target_fps}")
        self._clock = clock
        self._sleep = sleep
        self._callbacks: List[Callable[[], None]] = []
        self._running = False
        self._tick_count = 0

    @property
    def interval(self) -> float:
        return 1.0 / self.config.target_fps

    def subscribe(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        self._callbacks = [cb for cb in self._callbacks if cb is not callback]

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until ``stop()`` is called (or ``max_ticks`` is reached).

        Returns:
            Number of ticks executed in this run
        """
        self._running = True
        ticks = 0
        next_deadline = self._clock()
        logger.debug("Scheduler running at %.0f Hz", self.config.target_fps)

        try:
            while self._running and (max_ticks is None or ticks < max_ticks):
                self.tick()
                ticks += 1

                next_deadline += self.interval
                remaining = next_deadline - self._clock()
                if remaining > 0:
                    self._sleep(remaining)
                else:
                    # Overran; don't try to catch up with a burst of ticks
                    next_deadline = self._clock()
        finally:
            self._running = False

        return ticks

    def tick(self) -> None:
        """Run every subscribed callback once."""
        self._tick_count += 1
        for callback in list(self._callbacks):
            # stop() during this tick unsubscribes the rest
            if callback not in self._callbacks:
                continue
            callback()

    def stop(self) -> None:
        """Stop the loop and drop all subscriptions."""
        self._running = False
        self._callbacks.clear()
        logger.debug("Scheduler stopped after %d ticks", self._tick_count)

    @property
    def is_running(self) -> bool:
        return self._running
