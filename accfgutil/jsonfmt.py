"""JSON output in the layout of the listing commands.

Objects print with two-space indentation and ``"key":value`` pairs; sizes
can be shown in human units and some integers as hexadecimal strings.
"""

from __future__ import annotations

import sys
from enum import IntFlag
from typing import Any, TextIO

_U64_MASK = (1 << 64) - 1
_INDENT = "  "

_ESCAPES = {
    "\b": "\\b",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
}


class JsonFlags(IntFlag):
    """Flags that select what the listing shows and how."""

    NONE = 0
    IDLE = 1 << 0
    HUMAN = 1 << 1
    VERBOSE = 1 << 2
    SAVE = 1 << 3


def format_size(value: int) -> str:
    """Return the JSON text of a byte count in human units.

    Counts below 5000 KiB print as plain numbers; larger ones as a string
    with both binary and decimal units, switching to giga at 2 GiB.
    """
    size = value & _U64_MASK
    if size < 5000 * 1024:
        return str(size)
    if size < 2 * 1024 * 1024 * 1024:
        binary = (((size * 200) & _U64_MASK) // (1 << 20) + 1) // 2
        decimal = (size // (1000000 // 200) + 1) // 2
        units = ("MiB", "MB")
    else:
        binary = (((size * 200) & _U64_MASK) // (1 << 30) + 1) // 2
        decimal = (size // (1000000000 // 200) + 1) // 2
        units = ("GiB", "GB")
    return (
        f'"{binary // 100}.{binary % 100:02d} {units[0]}'
        f' ({decimal // 100}.{decimal % 100:02d} {units[1]})"'
    )


def format_hex(value: int) -> str:
    """Return the JSON text of an integer as a hexadecimal string."""
    number = value & _U64_MASK
    return f'"{number:#x}"' if number else '"0"'


class SizeValue(int):
    """An integer that serializes as a human-readable size."""

    def to_json(self) -> str:
        return format_size(self)


class HexValue(int):
    """An integer that serializes as a hexadecimal string."""

    def to_json(self) -> str:
        return format_hex(self)


def size_value(size: int, flags: int = JsonFlags.NONE) -> int:
    """Wrap a size so that it prints in human units when ``HUMAN`` is set."""
    if flags & JsonFlags.HUMAN:
        return SizeValue(size)
    return int(size)


def hex_value(value: int) -> HexValue:
    """Wrap an integer so that it prints as a hexadecimal string."""
    return HexValue(value)


def _escape(text: str) -> str:
    parts = []
    for ch in text:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ord(ch) < 0x20:
            parts.append(f"\\u{ord(ch):04x}")
        else:
            parts.append(ch)
    return '"' + "".join(parts) + '"'


def _encode(obj: Any, level: int) -> str:
    if isinstance(obj, (SizeValue, HexValue)):
        return obj.to_json()
    if obj is None:
        return "null"
    if obj is True:
        return "true"
    if obj is False:
        return "false"
    if isinstance(obj, int):
        return str(int(obj))
    if isinstance(obj, float):
        return repr(obj)
    if isinstance(obj, str):
        return _escape(obj)
    inner = _INDENT * (level + 1)
    outer = _INDENT * level
    if isinstance(obj, dict):
        if not obj:
            return "{}"
        items = [
            f"{inner}{_escape(str(key))}:{_encode(val, level + 1)}"
            for key, val in obj.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + outer + "}"
    if isinstance(obj, (list, tuple)):
        if not obj:
            return "[]"
        items = [f"{inner}{_encode(val, level + 1)}" for val in obj]
        return "[\n" + ",\n".join(items) + "\n" + outer + "]"
    raise TypeError(f"cannot serialize {type(obj).__name__} to JSON")


def dumps(obj: Any) -> str:
    """Serialize ``obj`` as pretty-printed JSON."""
    return _encode(obj, 0)


def display_json_array(
    array: list, flags: int = JsonFlags.NONE, stream: TextIO | None = None
) -> None:
    """Print a JSON array to ``stream`` (stdout by default).

    In human mode a single-element array prints as just its element and
    an empty one prints nothing.
    """
    out = stream if stream is not None else sys.stdout
    if len(array) > 1 or not flags & JsonFlags.HUMAN:
        out.write(dumps(array) + "\n")
    elif array:
        out.write(dumps(array[0]) + "\n")