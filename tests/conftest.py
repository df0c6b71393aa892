"""Shared fixtures for the debugdash test suite."""

import socket
import time
from typing import Any, Callable, Dict

import pytest

from debugdash.ingest.models import Event, Frame
from debugdash.listener import EventListener
from debugdash.utils.event_store import EventStore


@pytest.fixture
def sample_event_dict() -> Dict[str, Any]:
    """A well-formed event as an instrumented program would send it."""
    return {
        "label": "checkout.total",
        "time": "2024-03-01 12:00:05",
        "data": {
            "cart": {"items": 3, "coupon": None, "owner": {"id": 42}},
            "total": 99.5,
            "paid": False,
            "tags": ["a", "b"],
        },
        "backtrace": [
            {"file": "app/cart.py", "line": 120, "function": "compute_total"},
            {"file": "app/views.py", "line": 33, "function": "checkout"},
        ],
    }


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory for Event objects with sensible defaults."""
    def _make(label: str = "evt", timestamp: str = "t0",
              payload: Any = None, frames: Any = ()) -> Event:
        return Event(
            label=label,
            timestamp=timestamp,
            payload=payload if payload is not None else {},
            backtrace=tuple(Frame(*f) for f in frames),
        )
    return _make


@pytest.fixture
def store() -> EventStore:
    return EventStore()


@pytest.fixture
def listener(store):
    """An EventListener bound to an ephemeral loopback port."""
    lst = EventListener(store, host="127.0.0.1", port=0)
    assert lst.start(), "listener failed to bind"
    yield lst
    lst.stop()


def send_raw(port: int, payload: bytes) -> None:
    """Connect, write ``payload`` as-is and close."""
    with socket.create_connection(("127.0.0.1", port), timeout=2) as sock:
        sock.sendall(payload)


def wait_for(predicate: Callable[[], bool], timeout: float = 3.0) -> bool:
    """Poll ``predicate`` until true or ``timeout`` seconds pass."""
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()
