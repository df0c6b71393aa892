"""In-memory logging handler backing the status bar.

curses owns the terminal while the dashboard runs, so log output cannot
go to stderr. Records are kept in a bounded ring buffer instead and the
UI shows the most recent warning.
"""

import logging
import threading
from collections import deque
from typing import Deque, List, Optional, Tuple

DEFAULT_CAPACITY = 200


class RecentLogBuffer(logging.Handler):
    """Logging handler that keeps the last ``capacity`` records.

    Each entry is stored as ``(levelno, formatted line, bare message)``;
    formatting happens in the emitting thread.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY,
                 level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self._entries: Deque[Tuple[int, str, str]] = deque(maxlen=capacity)
        self._buffer_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        with self._buffer_lock:
            self._entries.append((record.levelno, line, message))

    def lines(self, min_level: int = logging.NOTSET) -> List[str]:
        with self._buffer_lock:
            return [line for lvl, line, _ in self._entries if lvl >= min_level]

    def latest(self, min_level: int = logging.WARNING) -> Optional[str]:
        """Bare message of the newest record at or above ``min_level``."""
        with self._buffer_lock:
            for lvl, _, message in reversed(self._entries):
                if lvl >= min_level:
                    return message
        return None

    def __len__(self) -> int:
        with self._buffer_lock:
            return len(self._entries)
