"""
Debug Dash - Configuration Management

Holds runtime settings with defaults. Nothing is persisted: the
dashboard is ephemeral, so settings live only for the process lifetime
and are overridden from the command line.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9337

DEFAULT_CONFIG: Dict[str, Any] = {
    "host": "127.0.0.1",
    "port": DEFAULT_PORT,
    # UI tick: how long getch() waits before the next redraw
    "refresh_ms": 250,
    # Upper bound on a single framed message before the NUL terminator
    "max_frame_bytes": 16 * 1024 * 1024,
    "log_buffer_size": 200,
    "log_level": "INFO",
}


class DashConfig:
    """Configuration manager for Debug Dash."""

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        self._settings: Dict[str, Any] = dict(DEFAULT_CONFIG)
        if settings:
            self.update(settings)

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        if key in DEFAULT_CONFIG:
            self._settings[key] = value
        else:
            logger.debug("Ignoring unknown setting %r", key)

    def update(self, settings: Dict[str, Any]) -> None:
        for key, value in settings.items():
            self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._settings)

    @property
    def address(self) -> str:
        return f"{self._settings['host']}:{self._settings['port']}"
