"""
Logging setup and gesture session logging.
"""

import os
import logging
import logging.handlers
import time
from collections import deque
from typing import List, Optional


def setup_logging(level: str = "INFO", log_file: Optional[str] = None,
                  max_size_mb: int = 10, backup_count: int = 3) -> logging.Logger:
    """Configure console logging and an optional rotating log file."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-32s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class GestureLogger:
    """Records gesture mode changes as reported by the controller's gesture sink."""

    def __init__(self, max_history: int = 100):
        self.logger = logging.getLogger("gesture_events")
        self._history: deque = deque(maxlen=max_history)
        self._current: Optional[str] = None

    def __call__(self, mode_label: str) -> None:
        self.log_mode(mode_label)

    def log_mode(self, mode_label: str) -> None:
        """Log a mode label; only changes are recorded."""
        if mode_label == self._current:
            return
        self._history.append({"timestamp": time.time(), "mode": mode_label,
                              "previous": self._current})
        self.logger.info("Gesture: %-7s (was %s)", mode_label, self._current or "none")
        self._current = mode_label

    @property
    def current(self) -> Optional[str]:
        return self._current

    def get_history(self, last_n: Optional[int] = None) -> List[dict]:
        """Get recent mode changes."""
        if last_n:
            return list(self._history)[-last_n:]
        return list(self._history)
