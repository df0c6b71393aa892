"""
Debug Dash - Wire Protocol

One event per TCP connection: the client writes a UTF-8 JSON document,
then a single NUL byte, then may close. There is no length prefix and
no reply.

    {"label": "...", "time": "...", "data": {...}, "backtrace": [...]}\\0

Invalid UTF-8 is replaced rather than rejected. Anything else that goes
wrong raises an IngestError subclass so the caller can drop the
connection and carry on.
"""

import json
from typing import BinaryIO

from .models import Event, SchemaError

FRAME_DELIMITER = b"\x00"
READ_CHUNK_SIZE = 4096


class IngestError(Exception):
    """A single connection's message could not be turned into an Event."""


class FramingError(IngestError):
    """The stream ended (or overflowed) before the NUL terminator."""


class DecodeError(IngestError):
    """The framed text is not JSON matching the event schema."""


def read_frame(stream: BinaryIO, max_bytes: int = 0) -> bytes:
    """Read from ``stream`` up to the first NUL byte.

    Returns the bytes before the delimiter; anything after it is left
    unread or discarded. ``max_bytes`` > 0 caps the frame size.

    Raises FramingError if the stream closes first.
    """
    buf = bytearray()
    while True:
        # read1: return what is available, never wait for a full chunk
        chunk = stream.read1(READ_CHUNK_SIZE)
        if not chunk:
            raise FramingError(
                f"connection closed after {len(buf)} bytes without NUL terminator"
            )
        end = chunk.find(FRAME_DELIMITER)
        buf += chunk if end < 0 else chunk[:end]
        if max_bytes and len(buf) > max_bytes:
            raise FramingError(f"frame exceeds {max_bytes} bytes")
        if end >= 0:
            return bytes(buf)


def decode_event(frame: bytes) -> Event:
    """Decode one frame (without its NUL) into an Event."""
    text = frame.decode("utf-8", errors="replace")
    try:
        doc = json.loads(text)
    except ValueError as e:
        raise DecodeError(f"invalid JSON: {e}") from e
    try:
        return Event.from_dict(doc)
    except SchemaError as e:
        raise DecodeError(str(e)) from e


def read_event(stream: BinaryIO, max_bytes: int = 0) -> Event:
    """Read and decode a single event from a connection stream."""
    return decode_event(read_frame(stream, max_bytes))
