"""Reading and writing sysfs attributes and scanning device directories."""

from __future__ import annotations

import errno
import logging
import os
import re
from typing import Any, Callable

SYSFS_ATTR_SIZE = 1024

_log = logging.getLogger(__name__)

_DEVICE_ID = re.compile(r"[a-z]+[ \t\n\v\f\r]*([+-]?[0-9]+)")

AddDevFn = Callable[[Any, "int | None", str, str, str], Any]
FilterFn = Callable[[os.DirEntry], bool]


def read_attr(path: str) -> str:
    """Read an attribute, dropping one trailing newline.

    Raises OSError when the file cannot be read or holds
    ``SYSFS_ATTR_SIZE`` bytes or more.
    """
    with open(path, "rb") as f:
        data = f.read(SYSFS_ATTR_SIZE)
    if len(data) >= SYSFS_ATTR_SIZE:
        _log.debug("failed to read %s: attribute too large", path)
        raise OSError(errno.EFBIG, "attribute too large", path)
    text = data.decode()
    if text.endswith("\n"):
        text = text[:-1]
    return text


def write_attr(path: str, value: str, quiet: bool = False) -> None:
    """Write ``value`` to an existing attribute file.

    Raises OSError when the file cannot be opened or the write is short.
    """
    flags = os.O_WRONLY | getattr(os, "O_CLOEXEC", 0)
    try:
        fd = os.open(path, flags)
    except OSError as exc:
        _log.debug("failed to open %s: %s", path, exc.strerror)
        raise
    data = value.encode()
    try:
        written = os.write(fd, data)
    except OSError as exc:
        if not quiet:
            _log.debug("failed to write %s to %s: %s", value, path, exc.strerror)
        raise
    finally:
        os.close(fd)
    if written < len(data):
        if not quiet:
            _log.debug("failed to write %s to %s: short write", value, path)
        raise OSError(errno.EIO, "short write", path)


def _device_id(name: str) -> int | None:
    match = _DEVICE_ID.match(name)
    return int(match.group(1)) if match else None


def device_parse(
    base_path: str,
    dev_prefix: str,
    bus_type: str,
    filter_fn: FilterFn | None,
    parent: Any,
    add_dev: AddDevFn,
) -> int:
    """Call ``add_dev`` for each matching entry of ``base_path``, in name order.

    Entries whose names contain ``!`` are skipped. Returns the number of
    entries for which ``add_dev`` returned None. Raises OSError with
    ``ENODEV`` when the directory cannot be scanned.
    """
    try:
        with os.scandir(base_path) as it:
            entries = [e for e in it if filter_fn is None or filter_fn(e)]
    except OSError as exc:
        raise OSError(errno.ENODEV, os.strerror(errno.ENODEV), base_path) from exc

    add_errors = 0
    for entry in sorted(entries, key=lambda e: e.name):
        name = entry.name
        if not name:
            raise ValueError("empty directory entry name")
        dev_id = _device_id(name)
        if "!" in name:
            continue
        dev_path = f"{base_path}/{name}"
        if add_dev(parent, dev_id, dev_path, dev_prefix, bus_type) is None:
            add_errors += 1
            _log.error("%s: add_dev() failed", dev_id)
        else:
            _log.debug("%s: processed", dev_id)
    return add_errors


def devpath_to_devname(devpath: str) -> str:
    """Return the last component of a device path."""
    head, sep, tail = devpath.rpartition("/")
    if not sep:
        raise ValueError(f"not a device path: {devpath!r}")
    return tail