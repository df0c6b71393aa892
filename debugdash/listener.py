"""
Debug Dash - Event Listener

TCP server that accepts debug events from instrumented programs and
merges them into the shared EventStore.

Connections are handled one at a time on the listener thread: the next
connection is not accepted until the current one has been read to its
NUL terminator (or failed). A malformed message is logged and dropped;
it never stops the accept loop.

There is no read timeout, so a client that connects and never sends
NUL holds up the listener until it disconnects.

Usage:
    listener = EventListener(store, port=9337)
    if not listener.start():
        sys.exit(1)
    ...
    listener.stop()
"""

import logging
import socketserver
import threading
from typing import Any, Dict, Optional

from .ingest.protocol import IngestError, read_event
from .utils.config import DEFAULT_CONFIG, DEFAULT_PORT
from .utils.event_store import EventStore

logger = logging.getLogger(__name__)


class IngestServer(socketserver.TCPServer):
    """TCPServer subclass with typed attributes for the ingest handler."""

    allow_reuse_address = True

    def __init__(self, server_address: tuple, handler_class: type,
                 store: EventStore,
                 stats: "_IngestStats",
                 max_frame_bytes: int = 0) -> None:
        super().__init__(server_address, handler_class)
        self.store = store
        self.stats = stats
        self.max_frame_bytes = max_frame_bytes

    def handle_error(self, request: Any, client_address: Any) -> None:
        # The default prints a traceback to stderr, which is the curses screen
        self.stats.inc_dropped()
        logger.exception("Unexpected error handling connection from %s",
                         client_address)


class IngestRequestHandler(socketserver.StreamRequestHandler):
    """Reads exactly one event from a connection and stores it."""

    server: IngestServer  # type annotation for IDE support

    def handle(self) -> None:
        peer = "%s:%s" % self.client_address[:2]
        self.server.stats.inc_accepted()
        try:
            event = read_event(self.rfile, self.server.max_frame_bytes)
        except IngestError as e:
            self.server.stats.inc_dropped()
            logger.warning("Dropped message from %s: %s", peer, e)
            return
        except OSError as e:
            self.server.stats.inc_dropped()
            logger.warning("Connection error from %s: %s", peer, e)
            return
        self.server.store.insert(event)
        self.server.stats.inc_ingested()
        logger.info("Received %r from %s", event.label, peer)


class EventListener:
    """Manages the ingest server lifecycle on a background thread."""

    def __init__(self, store: EventStore, host: str = "127.0.0.1",
                 port: int = DEFAULT_PORT,
                 max_frame_bytes: int = DEFAULT_CONFIG["max_frame_bytes"]):
        self._store = store
        self._host = host
        self._port = port
        self._max_frame_bytes = max_frame_bytes
        self._server: Optional[IngestServer] = None
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._stats = _IngestStats()

    def start(self) -> bool:
        """Bind the socket and start accepting in a background thread.

        Returns False (after logging why) if the address cannot be bound.
        """
        if self._running:
            return True
        try:
            self._server = IngestServer(
                (self._host, self._port), IngestRequestHandler,
                store=self._store,
                stats=self._stats,
                max_frame_bytes=self._max_frame_bytes,
            )
        except OSError as e:
            logger.error("Failed to bind %s:%d: %s", self._host, self._port, e)
            return False

        # Port 0 binds an ephemeral port; report the real one
        self._port = self._server.server_address[1]
        self._thread = threading.Thread(
            target=self._serve_forever_safe,
            name="debugdash-listener",
            daemon=True,
        )
        self._running = True
        self._thread.start()
        logger.info("Listening for events on %s:%d", self._host, self._port)
        return True

    def _serve_forever_safe(self) -> None:
        """Wrapper around serve_forever that sets _running=False on failure."""
        try:
            if self._server:
                self._server.serve_forever()
        except Exception as e:
            logger.error("Listener serve_forever failed: %s", e)
        finally:
            self._running = False

    def stop(self) -> None:
        """Stop accepting, close the socket and join the thread."""
        self._running = False
        if self._server:
            # shutdown() waits for the in-flight connection; bound the wait
            waiter = threading.Thread(target=self._server.shutdown, daemon=True)
            waiter.start()
            waiter.join(timeout=5)
            if waiter.is_alive():
                logger.warning("Listener busy with a stalled connection, abandoning it")
            self._server.server_close()
            self._server = None
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5)
            if self._thread.is_alive():
                logger.warning("Listener thread did not exit within 5s")
        self._thread = None
        logger.info("Listener stopped")

    @property
    def port(self) -> int:
        """The bound port (the configured one until start() succeeds)."""
        return self._port

    @property
    def address(self) -> str:
        return f"{self._host}:{self._port}"

    @property
    def running(self) -> bool:
        return self._running

    @property
    def stats(self) -> Dict[str, Any]:
        return {
            "running": self._running,
            "accepted": self._stats.accepted,
            "ingested": self._stats.ingested,
            "dropped": self._stats.dropped,
        }


class _IngestStats:
    """Thread-safe counters for listener diagnostics."""
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accepted = 0
        self._ingested = 0
        self._dropped = 0

    def inc_accepted(self) -> None:
        with self._lock:
            self._accepted += 1

    def inc_ingested(self) -> None:
        with self._lock:
            self._ingested += 1

    def inc_dropped(self) -> None:
        with self._lock:
            self._dropped += 1

    @property
    def accepted(self) -> int:
        with self._lock:
            return self._accepted

    @property
    def ingested(self) -> int:
        with self._lock:
            return self._ingested

    @property
    def dropped(self) -> int:
        with self._lock:
            return self._dropped
