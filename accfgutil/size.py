"""Parsing of sizes with K/M/G/T suffixes and alignment helpers."""

from __future__ import annotations

import re

SZ_1K = 0x00000400
SZ_4K = 0x00001000
SZ_1M = 0x00100000
SZ_2M = 0x00200000
SZ_4M = 0x00400000
SZ_16M = 0x01000000
SZ_64M = 0x04000000
SZ_1G = 0x40000000
SZ_1T = 0x10000000000

HPAGE_SIZE = 2 << 20

_U64_MAX = (1 << 64) - 1
_U64_MASK = _U64_MAX

_SUFFIXES = {"k": SZ_1K, "m": SZ_1M, "g": SZ_1G, "t": SZ_1T}

_NUMBER = re.compile(
    r"[ \t\n\v\f\r]*(?P<sign>[+-]?)"
    r"(?:0[xX](?P<hex>[0-9a-fA-F]+)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*))"
)


class SizeError(ValueError):
    """Raised when a size string cannot be parsed or does not fit 64 bits."""


def _parse_unsigned(text: str) -> tuple[int, str]:
    """Parse a leading unsigned number with C base detection.

    Returns the 64-bit value and the unparsed remainder.
    """
    match = _NUMBER.match(text)
    if match is None:
        return 0, text
    if match["hex"] is not None:
        magnitude = int(match["hex"], 16)
    elif match["oct"] is not None:
        magnitude = int(match["oct"], 8)
    else:
        magnitude = int(match["dec"], 10)
    rest = text[match.end():]
    if magnitude > _U64_MAX:
        return _U64_MAX, rest
    if match["sign"] == "-":
        magnitude = -magnitude & _U64_MASK
    return magnitude, rest


def parse_size_units(text: str) -> tuple[int, int]:
    """Parse a size such as ``"4k"`` or ``"0x1000"``.

    Returns the size in bytes and the unit that the suffix selected
    (1 when there is none). Raises :class:`SizeError` on trailing text,
    on overflow, and on the all-ones value.
    """
    value, rest = _parse_unsigned(text)
    if value == _U64_MAX:
        raise SizeError(f"invalid size: {text!r}")
    units = 1
    if rest and rest[0].lower() in _SUFFIXES:
        units = _SUFFIXES[rest[0].lower()]
        rest = rest[1:]
    value *= units
    if value > _U64_MAX or rest:
        raise SizeError(f"invalid size: {text!r}")
    return value, units


def parse_size64(text: str) -> int:
    """Parse a size string and return the number of bytes."""
    value, _ = parse_size_units(text)
    return value


def align(value: int, alignment: int) -> int:
    """Round ``value`` up to a multiple of the power-of-two ``alignment``."""
    return ((value & _U64_MASK) + (alignment - 1)) & ~(alignment - 1) & _U64_MASK


def align_down(value: int, alignment: int) -> int:
    """Round ``value`` down to a multiple of the power-of-two ``alignment``."""
    return ((((value & _U64_MASK) + alignment) & ~(alignment - 1)) - alignment) & _U64_MASK