"""
Debug Dash - Payload Flattener

Turns an event's nested JSON payload into indented display lines for the
Details panel. Each nesting level adds two dashes of indentation:

    {"user": {"id": 7, "prefs": {"theme": "dark"}}, "ok": true}

becomes

     ok true
    -- id 7
    -- prefs (user)
    ---- theme dark

Top-level objects are descended into without a header line. Nested
objects get a ``key (parent)`` header, except for keys named ``array``.
Arrays are not rendered. Keys are visited in sorted order at every level
so the same payload always produces the same lines.
"""

import json
from typing import Any, Dict, Iterator, List, Tuple

# Nested objects stored under this key skip their header line
HEADERLESS_KEY = "array"


def _indent(depth: int) -> str:
    return "-" * (depth * 2)


def format_scalar(value: Any) -> str:
    """Render a JSON scalar the way it appears on the wire (strings unquoted)."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _sorted_items(mapping: Dict[str, Any]) -> Iterator[Tuple[str, Any]]:
    return ((key, mapping[key]) for key in sorted(mapping))


def flatten(payload: Dict[str, Any]) -> List[str]:
    """Flatten a top-level payload mapping into display lines.

    Walks depth-first with an explicit stack; payloads can nest as deep
    as the JSON decoder allows.
    """
    lines: List[str] = []
    # (remaining items, depth, label of the enclosing key)
    stack = [(_sorted_items(payload), 0, "")]
    while stack:
        items, depth, parent_label = stack[-1]
        indent = _indent(depth)
        for key, value in items:
            if value is None:
                lines.append(f"{indent} {key}")
            elif isinstance(value, dict):
                if depth > 0 and key != HEADERLESS_KEY:
                    lines.append(f"{indent} {key} ({parent_label})")
                stack.append((_sorted_items(value), depth + 1, key))
                break
            elif isinstance(value, list):
                continue
            else:
                lines.append(f"{indent} {key} {format_scalar(value)}")
        else:
            stack.pop()
    return lines
