"""
Debug Dash - Event Store

Ordered collection of received events plus the selection cursor shown
in the Entries panel. The newest event is always at index 0.

The selection is positional: inserting a new event keeps the same index
selected, so the highlighted row now shows a different (older) event.
When nothing has been selected yet, the render path defaults the cursor
to the oldest event.

Thread-safe: the listener thread inserts while the UI thread reads and
moves the cursor. Every operation takes the same lock with a blocking
acquire and holds it only long enough to copy or update references.
"""

import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..ingest.models import Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreSnapshot:
    """Point-in-time copy of the store for one render tick."""
    events: Tuple[Event, ...]
    selection: Optional[int]

    def __len__(self) -> int:
        return len(self.events)

    def selected(self) -> Optional[Event]:
        if self.selection is None:
            return None
        return self.events[self.selection]


class EventStore:
    """Thread-safe, newest-first event list with a wrapping cursor.

    Usage:
        store = EventStore()
        store.insert(event)           # listener thread
        store.select_next()           # UI thread, on 'j'
        snap = store.render_snapshot()
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: List[Event] = []
        self._selection: Optional[int] = None

    def insert(self, event: Event) -> None:
        """Prepend a fully decoded event. The cursor index is unchanged."""
        with self._lock:
            self._events.insert(0, event)
            count = len(self._events)
        logger.debug("Stored event %r (%d total)", event.label, count)

    def select_next(self) -> None:
        """Move the cursor down one row, wrapping to the top."""
        with self._lock:
            count = len(self._events)
            if not count:
                return
            if self._selection is None:
                self._selection = 0
            else:
                self._selection = (self._selection + 1) % count

    def select_previous(self) -> None:
        """Move the cursor up one row, wrapping to the bottom."""
        with self._lock:
            count = len(self._events)
            if not count:
                return
            if self._selection is None or self._selection == 0:
                self._selection = count - 1
            else:
                self._selection -= 1

    def ensure_default_selection(self) -> None:
        """Select the oldest event if nothing is selected yet."""
        with self._lock:
            self._ensure_default_selection_locked()

    def _ensure_default_selection_locked(self) -> None:
        if self._selection is None and self._events:
            self._selection = len(self._events) - 1

    def snapshot(self) -> StoreSnapshot:
        with self._lock:
            return StoreSnapshot(tuple(self._events), self._selection)

    def render_snapshot(self) -> StoreSnapshot:
        """Apply the default selection and snapshot under one lock hold."""
        with self._lock:
            self._ensure_default_selection_locked()
            return StoreSnapshot(tuple(self._events), self._selection)

    @property
    def selection(self) -> Optional[int]:
        with self._lock:
            return self._selection

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
