"""String and file name helpers."""

from __future__ import annotations

from itertools import zip_longest


def prefixcmp(text: str, prefix: str) -> int:
    """Compare ``text`` against ``prefix``.

    Return 0 when ``text`` starts with ``prefix``, otherwise the difference
    between the first mismatching character of ``prefix`` and of ``text``
    (a missing character of ``text`` counts as 0).
    """
    head = text[: len(prefix)]
    for expected, actual in zip_longest(prefix, head, fillvalue="\0"):
        if expected != actual:
            return ord(expected) - ord(actual)
    return 0


def skip_prefix(text: str, prefix: str) -> str | None:
    """Return what follows ``prefix`` in ``text``, or None if it does not start so."""
    if text.startswith(prefix):
        return text[len(prefix):]
    return None


def is_absolute_path(path: str) -> bool:
    """Tell whether ``path`` starts with a slash."""
    return path.startswith("/")


def prefix_filename(prefix: str | None, arg: str) -> str:
    """Put ``prefix`` in front of ``arg`` unless it is empty or ``arg`` is absolute."""
    if not prefix or is_absolute_path(arg):
        return arg
    return prefix + arg


def fix_filename(prefix: str | None, filename: str | None) -> str | None:
    """Return ``filename`` relative to ``prefix``.

    None, empty names, absolute paths and ``-`` (standard input/output)
    are returned unchanged, as is every name when there is no prefix.
    """
    if (
        not filename
        or prefix is None
        or is_absolute_path(filename)
        or filename == "-"
    ):
        return filename
    return prefix_filename(prefix, filename)