"""Shared helpers for the Debug Dash TUI.

Color constants, screen layout, bordered panels and safe drawing
utilities used by the panel modules.
"""

import curses
import textwrap
import unicodedata
from typing import Any, Iterable, List, NamedTuple, Sequence


# ── Color pair IDs ────────────────────────────────────────────────

CP_HEADER = 1
CP_STATUS_BAR = 2
CP_TABLE_HEADER = 3
CP_PANEL_TITLE = 4
CP_WARNING = 5

# Smallest screen the three-panel layout is drawn on
MIN_ROWS = 10
MIN_COLS = 60

ENTRIES_WIDTH_PCT = 25
DETAILS_HEIGHT_PCT = 70


def _init_colors() -> None:
    """Set up curses color pairs."""
    curses.start_color()
    curses.use_default_colors()

    curses.init_pair(CP_HEADER, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(CP_STATUS_BAR, curses.COLOR_BLACK, curses.COLOR_WHITE)
    curses.init_pair(CP_TABLE_HEADER, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(CP_PANEL_TITLE, curses.COLOR_CYAN, -1)
    curses.init_pair(CP_WARNING, curses.COLOR_YELLOW, -1)


class Rect(NamedTuple):
    top: int
    left: int
    height: int
    width: int

    @property
    def inner(self) -> "Rect":
        """Area inside the one-cell border."""
        return Rect(self.top + 1, self.left + 1,
                    max(0, self.height - 2), max(0, self.width - 2))


class Layout(NamedTuple):
    header: Rect
    entries: Rect
    details: Rect
    backtrace: Rect
    status: Rect


def split_layout(rows: int, cols: int) -> Layout:
    """Divide the screen: header row, 25/75 body split, status row.

    The right-hand column is split 70/30 between Details and Backtrace.
    """
    body_top = 1
    body_height = max(0, rows - 2)
    left_width = cols * ENTRIES_WIDTH_PCT // 100
    # safe_addstr never writes the last column
    right_width = cols - 1 - left_width
    details_height = body_height * DETAILS_HEIGHT_PCT // 100
    return Layout(
        header=Rect(0, 0, 1, cols),
        entries=Rect(body_top, 0, body_height, left_width),
        details=Rect(body_top, left_width, details_height, right_width),
        backtrace=Rect(body_top + details_height, left_width,
                       body_height - details_height, right_width),
        status=Rect(rows - 1, 0, 1, cols),
    )


def safe_addstr(win: Any, y: int, x: int, text: str,
                attr: int = 0, max_width: int = 0) -> None:
    """Write text to curses window, clipping to avoid curses errors."""
    rows, cols = win.getmaxyx()
    if y < 0 or y >= rows or x >= cols:
        return
    available = cols - x - 1  # keep off the last column (bottom-right corner)
    if max_width > 0:
        available = min(available, max_width)
    if available <= 0:
        return
    try:
        win.addstr(y, x, clip(printable(text), available), attr)
    except curses.error:
        pass


def draw_box(win: Any, rect: Rect, title: str = "") -> None:
    """Draw a single-line border around ``rect`` with an optional title."""
    if rect.height < 2 or rect.width < 2:
        return
    top, left, height, width = rect
    span = width - 2
    safe_addstr(win, top, left, "┌" + "─" * span + "┐")
    for y in range(top + 1, top + height - 1):
        safe_addstr(win, y, left, "│")
        safe_addstr(win, y, left + width - 1, "│")
    safe_addstr(win, top + height - 1, left, "└" + "─" * span + "┘")
    if title and span > 2:
        safe_addstr(win, top, left + 1, f" {title} "[:span],
                    curses.color_pair(CP_PANEL_TITLE) | curses.A_BOLD)


def printable(text: str) -> str:
    """Replace control characters with ``?``.

    Event text is arbitrary JSON string content; curses rejects NUL
    outright and newlines or tabs move the cursor out of the cell.
    """
    if text.isprintable():
        return text
    return "".join("?" if unicodedata.category(ch) == "Cc" else ch
                   for ch in text)


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def text_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies."""
    return sum(_char_width(ch) for ch in text)


def clip(text: str, width: int) -> str:
    """Longest prefix of ``text`` that fits in ``width`` cells."""
    used = 0
    for i, ch in enumerate(text):
        used += _char_width(ch)
        if used > width:
            return text[:i]
    return text


def fit(text: str, width: int) -> str:
    """Truncate or pad ``text`` to exactly ``width`` terminal cells.

    A wide character that would straddle the edge is dropped and the
    gap padded, so columns stay aligned.
    """
    if width <= 0:
        return ""
    text = clip(text, width)
    return text + " " * (width - text_width(text))


def format_columns(cells: Sequence[str], widths: Sequence[int]) -> str:
    """Lay out one table row, each cell fitted to its column width."""
    return "".join(fit(cell, w) for cell, w in zip(cells, widths))


def wrap_lines(lines: Iterable[str], width: int) -> List[str]:
    """Word-wrap each line to ``width``, keeping blank lines."""
    if width <= 0:
        return []
    wrapped: List[str] = []
    for line in lines:
        if not line.strip():
            wrapped.append("")
            continue
        wrapped.extend(textwrap.wrap(line, width) or [""])
    return wrapped
