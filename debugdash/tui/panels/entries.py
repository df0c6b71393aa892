"""Entries panel: one row per event label, newest first, cursor highlighted."""

import curses
from typing import Any, Optional

from ...utils.event_store import StoreSnapshot
from ..helpers import CP_TABLE_HEADER, Rect, draw_box, fit, safe_addstr

HIGHLIGHT_SYMBOL = "> "


def scroll_offset(count: int, selection: Optional[int], visible: int) -> int:
    """First row to show so that the selected row is on screen."""
    if visible <= 0 or selection is None or count <= visible:
        return 0
    return min(max(0, selection - visible + 1), count - visible)


def draw_entries(win: Any, rect: Rect, snapshot: StoreSnapshot) -> None:
    """Render the Entries panel into ``rect``."""
    draw_box(win, rect, "Entries")
    inner = rect.inner
    if inner.height < 1 or inner.width < 1:
        return

    safe_addstr(win, inner.top, inner.left,
                fit(" " * len(HIGHLIGHT_SYMBOL) + "Entry", inner.width),
                curses.color_pair(CP_TABLE_HEADER) | curses.A_BOLD)

    # header row plus one blank spacer row
    list_top = inner.top + 2
    visible = inner.height - 2
    if visible <= 0:
        return

    count = len(snapshot)
    start = scroll_offset(count, snapshot.selection, visible)
    for row, index in enumerate(range(start, min(count, start + visible))):
        event = snapshot.events[index]
        if index == snapshot.selection:
            text = HIGHLIGHT_SYMBOL + event.label
            attr = curses.A_REVERSE
        else:
            text = " " * len(HIGHLIGHT_SYMBOL) + event.label
            attr = 0
        safe_addstr(win, list_top + row, inner.left, fit(text, inner.width), attr)
