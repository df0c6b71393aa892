"""Backtrace panel: the selected event's call stack as a three-column table."""

import curses
from typing import Any, List, Optional, Sequence, Tuple

from ...ingest.models import Frame
from ..helpers import (
    CP_TABLE_HEADER,
    Rect,
    draw_box,
    format_columns,
    safe_addstr,
)

COLUMN_TITLES = ("File", "Line", "Calling function")
COLUMN_PCTS = (50, 10, 40)


def column_widths(total: int) -> List[int]:
    """Split ``total`` columns 50/10/40; the last column takes the remainder."""
    widths = [total * pct // 100 for pct in COLUMN_PCTS[:-1]]
    widths.append(max(0, total - sum(widths)))
    return widths


def backtrace_rows(frames: Sequence[Frame]) -> List[Tuple[str, str, str]]:
    return [(f.file, str(f.line), f.function) for f in frames]


def draw_backtrace(win: Any, rect: Rect,
                   frames: Optional[Sequence[Frame]]) -> None:
    """Render the Backtrace panel; an empty box when there is no event."""
    draw_box(win, rect, "Backtrace")
    if frames is None:
        return
    inner = rect.inner
    if inner.height < 1 or inner.width < 1:
        return

    widths = column_widths(inner.width)
    safe_addstr(win, inner.top, inner.left,
                format_columns(COLUMN_TITLES, widths),
                curses.color_pair(CP_TABLE_HEADER) | curses.A_BOLD)

    rows = backtrace_rows(frames)
    for i, cells in enumerate(rows[:max(0, inner.height - 2)]):
        safe_addstr(win, inner.top + 2 + i, inner.left,
                    format_columns(cells, widths))
