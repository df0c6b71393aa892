"""Details panel: the selected event's timestamp and flattened payload."""

from typing import Any, List, Optional

from ...ingest.models import Event
from ...utils.flatten import flatten
from ..helpers import Rect, draw_box, safe_addstr, wrap_lines


def build_detail_lines(event: Event) -> List[str]:
    """Text shown for ``event`` before wrapping."""
    lines = [f"Logged on: {event.timestamp}", ""]
    lines.extend(flatten(event.payload))
    return lines


def draw_details(win: Any, rect: Rect, event: Optional[Event]) -> None:
    """Render the Details panel; an empty box when there is no event."""
    draw_box(win, rect, "Details")
    if event is None:
        return
    inner = rect.inner
    lines = wrap_lines(build_detail_lines(event), inner.width)
    for i, line in enumerate(lines[:inner.height]):
        safe_addstr(win, inner.top + i, inner.left, line, max_width=inner.width)
