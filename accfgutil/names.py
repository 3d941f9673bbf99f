"""Parsing of accelerator device, group, work queue and engine names.

Device names look like ``dsa0``; child objects are addressed as
``<device>/<child>``, for example ``dsa0/wq0.1``, where the child name
carries the parent id and its own id.
"""

from __future__ import annotations

import re

_C_SPACE = "[ \t\n\v\f\r]*"
_UINT = _C_SPACE + r"([+-]?[0-9]+)"

_DEVICE_TYPE_ID = re.compile(r"([a-z]+)" + _UINT)
_PARENT_CHILD = re.compile(r"([^/]+)/" + _C_SPACE + r"([^ \t\n\v\f\r]+)")
_PARENT_CHILD_IDS = re.compile(r"[a-z]+" + _UINT + r"\." + _UINT)

_U32_MASK = 0xFFFFFFFF


def _to_uint(text: str) -> int:
    return int(text) & _U32_MASK


def scan_device_type_id(name: str) -> tuple[str, int]:
    """Split a name such as ``dsa0`` into its type and its number.

    Raises ValueError when the name does not start with lower-case
    letters followed by a number.
    """
    match = _DEVICE_TYPE_ID.match(name)
    if match is None:
        raise ValueError(f"invalid device name: {name!r}")
    return match.group(1), _to_uint(match.group(2))


def scan_parent_child_names(name: str) -> tuple[str, str]:
    """Split ``<parent>/<child>`` into the parent and child names.

    The child name ends at the first whitespace. Raises ValueError when
    either part is missing.
    """
    match = _PARENT_CHILD.match(name)
    if match is None:
        raise ValueError(f"invalid parent/child name: {name!r}")
    return match.group(1), match.group(2)


def scan_parent_child_ids(name: str) -> tuple[int, int]:
    """Extract both ids from a child name such as ``wq0.1``.

    Raises ValueError when the name is not letters followed by
    ``<parent id>.<child id>``.
    """
    match = _PARENT_CHILD_IDS.match(name)
    if match is None:
        raise ValueError(f"invalid child name: {name!r}")
    return _to_uint(match.group(1)), _to_uint(match.group(2))