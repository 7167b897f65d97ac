"""Utility modules for logging, performance, scheduling and visualization."""
from .logger import setup_logging, GestureLogger
from .performance import PerformanceMonitor
from .scheduler import FrameScheduler, SchedulerConfig

__all__ = ["setup_logging", "GestureLogger", "PerformanceMonitor",
           "FrameScheduler", "SchedulerConfig"]
