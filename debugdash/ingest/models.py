"""Event and call-stack frame types decoded from the wire JSON."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


class SchemaError(ValueError):
    """A decoded JSON document does not match the event schema."""


def _require(obj: Dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in obj:
        raise SchemaError(f"{where}: missing field {key!r}")
    value = obj[key]
    # bool is an int subclass; a line number of `true` is not a line number
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SchemaError(
            f"{where}: field {key!r} must be {kind.__name__}, "
            f"got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class Frame:
    """One call-stack entry attached to an event."""
    file: str
    line: int
    function: str

    @classmethod
    def from_dict(cls, obj: Any, index: int = 0) -> "Frame":
        where = f"backtrace[{index}]"
        if not isinstance(obj, dict):
            raise SchemaError(f"{where} must be an object")
        return cls(
            file=_require(obj, "file", str, where),
            line=_require(obj, "line", int, where),
            function=_require(obj, "function", str, where),
        )


@dataclass(frozen=True)
class Event:
    """One structured debug report received from a single connection.

    ``timestamp`` is whatever the sender put in the ``time`` field; it is
    displayed verbatim and never parsed.
    """
    label: str
    timestamp: str
    payload: Dict[str, Any] = field(default_factory=dict)
    backtrace: Tuple[Frame, ...] = ()

    @classmethod
    def from_dict(cls, obj: Any) -> "Event":
        """Build an Event from a parsed JSON document.

        Raises SchemaError if a required field is missing or has the
        wrong type. Unknown fields are ignored.
        """
        if not isinstance(obj, dict):
            raise SchemaError("event must be a JSON object")
        label = _require(obj, "label", str, "event")
        timestamp = _require(obj, "time", str, "event")
        payload = _require(obj, "data", dict, "event")
        raw_frames = _require(obj, "backtrace", list, "event")
        frames = tuple(Frame.from_dict(f, i) for i, f in enumerate(raw_frames))
        return cls(label=label, timestamp=timestamp, payload=payload,
                   backtrace=frames)
