"""Debug Dash TUI - Core Application

Curses-based terminal UI. Each tick takes a snapshot of the EventStore,
draws the three panels and waits (up to ``refresh_ms``) for a key.

Layout:
  +----------+-----------------------------+
  | Entries  | Details                     |
  |          |  Logged on: <time>          |
  |          |  flattened payload lines    |
  |          +-----------------------------+
  |          | Backtrace  File Line Func   |
  +----------+-----------------------------+

Keys:
  j    select next entry (wraps to the top)
  k    select previous entry (wraps to the bottom)
  Esc  quit
"""

import curses
import logging
from typing import Any, Optional

from .. import __version__
from ..listener import EventListener
from ..utils.config import DashConfig
from ..utils.event_store import EventStore
from ..utils.log_buffer import RecentLogBuffer
from .helpers import (
    CP_HEADER,
    CP_STATUS_BAR,
    CP_WARNING,
    MIN_COLS,
    MIN_ROWS,
    _init_colors,
    safe_addstr,
    split_layout,
)
from .panels.backtrace import draw_backtrace
from .panels.details import draw_details
from .panels.entries import draw_entries

logger = logging.getLogger(__name__)

KEY_ESCAPE = 27
KEY_NEXT = ord("j")
KEY_PREVIOUS = ord("k")


class DashboardApp:
    """Main TUI application controller."""

    def __init__(self, store: EventStore,
                 listener: Optional[EventListener] = None,
                 config: Optional[DashConfig] = None,
                 log_buffer: Optional[RecentLogBuffer] = None):
        self._store = store
        self._listener = listener
        self._config = config or DashConfig()
        self._log_buffer = log_buffer
        self._running = False
        self._stdscr: Any = None

    def run(self) -> None:
        """Launch the TUI (blocks until quit)."""
        curses.wrapper(self._main)

    def _main(self, stdscr: Any) -> None:
        self._stdscr = stdscr
        _init_colors()

        try:
            curses.curs_set(0)  # hide cursor
        except curses.error:
            pass
        # Esc otherwise waits a full second for a possible escape sequence
        curses.set_escdelay(25)
        stdscr.nodelay(False)
        stdscr.timeout(int(self._config.get("refresh_ms", 250)))

        self._running = True
        logger.info("Dashboard started")
        while self._running:
            self._draw()
            self._handle_input()
        logger.info("Dashboard stopped")

    def _handle_input(self) -> None:
        """Process keyboard input."""
        try:
            key = self._stdscr.getch()
        except curses.error:
            return

        if key == KEY_ESCAPE:
            self._running = False
        elif key == KEY_NEXT:
            self._store.select_next()
        elif key == KEY_PREVIOUS:
            self._store.select_previous()

    def _draw(self) -> None:
        """Render the full TUI frame."""
        self._stdscr.erase()
        rows, cols = self._stdscr.getmaxyx()
        if rows < MIN_ROWS or cols < MIN_COLS:
            safe_addstr(self._stdscr, 0, 0, "Terminal too small")
            self._stdscr.refresh()
            return

        layout = split_layout(rows, cols)
        snapshot = self._store.render_snapshot()
        event = snapshot.selected()

        self._draw_header(cols)
        draw_entries(self._stdscr, layout.entries, snapshot)
        draw_details(self._stdscr, layout.details, event)
        draw_backtrace(self._stdscr, layout.backtrace,
                       event.backtrace if event else None)
        self._draw_status_bar(rows, cols, len(snapshot))

        self._stdscr.refresh()

    def _draw_header(self, cols: int) -> None:
        """Draw the top header bar."""
        attr = curses.color_pair(CP_HEADER) | curses.A_BOLD
        safe_addstr(self._stdscr, 0, 0, " " * cols, attr)
        safe_addstr(self._stdscr, 0, 1, f"Debug Dash {__version__}", attr)
        if self._listener:
            where = f"tcp://{self._listener.address}"
            safe_addstr(self._stdscr, 0, cols - len(where) - 2, where, attr)

    def _draw_status_bar(self, rows: int, cols: int, count: int) -> None:
        """Draw the bottom status bar."""
        attr = curses.color_pair(CP_STATUS_BAR)
        y = rows - 1
        safe_addstr(self._stdscr, y, 0, " " * cols, attr)

        if self._listener:
            stats = self._listener.stats
            state = "LISTENING" if stats["running"] else "STOPPED"
            dropped = stats["dropped"]
        else:
            state = "OFFLINE"
            dropped = 0
        left = f"{state}  Events: {count}  Dropped: {dropped}"
        safe_addstr(self._stdscr, y, 1, left, attr | curses.A_BOLD)

        hint = "Esc:Quit  j/k:Select"
        hint_x = cols - len(hint) - 2

        warning = self._log_buffer.latest() if self._log_buffer else None
        if warning:
            x = len(left) + 3
            safe_addstr(self._stdscr, y, x, warning,
                        curses.color_pair(CP_WARNING) | curses.A_BOLD,
                        max_width=max(0, hint_x - x - 1))

        safe_addstr(self._stdscr, y, hint_x, hint, attr)


def run_dashboard(store: EventStore,
                  listener: Optional[EventListener] = None,
                  config: Optional[DashConfig] = None,
                  log_buffer: Optional[RecentLogBuffer] = None) -> None:
    """Entry point for launching the TUI."""
    app = DashboardApp(store, listener, config, log_buffer)
    app.run()
