"""Event decoding for the NUL-terminated JSON wire format."""

from .models import Event, Frame, SchemaError
from .protocol import (
    DecodeError,
    FramingError,
    IngestError,
    decode_event,
    read_event,
    read_frame,
)

__all__ = [
    "DecodeError",
    "Event",
    "Frame",
    "FramingError",
    "IngestError",
    "SchemaError",
    "decode_event",
    "read_event",
    "read_frame",
]
