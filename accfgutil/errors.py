"""Reporting of fatal errors, errors, warnings and usage messages on stderr."""

from __future__ import annotations

import sys
from typing import Callable, NoReturn

_MESSAGE_LIMIT = 1023

DieRoutine = Callable[[str], None]


class FatalError(Exception):
    """Raised by :func:`die`; the process should exit with ``exit_code``."""

    exit_code = 128


class UsageError(Exception):
    """Raised by :func:`usage`; the process should exit with ``exit_code``."""

    exit_code = 129


def _report(prefix: str, message: str) -> None:
    sys.stderr.write(f" {prefix}{message[:_MESSAGE_LIMIT]}\n")


def _default_die_routine(message: str) -> None:
    _report(" Fatal: ", message)


_die_routine: DieRoutine = _default_die_routine


def set_die_routine(routine: DieRoutine | None) -> DieRoutine:
    """Install the routine that :func:`die` calls; return the previous one.

    Passing ``None`` restores the default routine, which writes to stderr.
    """
    global _die_routine
    previous = _die_routine
    _die_routine = routine if routine is not None else _default_die_routine
    return previous


def die(message: str) -> NoReturn:
    """Report a fatal error and raise :class:`FatalError`."""
    _die_routine(message)
    raise FatalError(message)


def error(message: str) -> None:
    """Report an error on stderr."""
    _report(" Error: ", message)


def warning(message: str) -> None:
    """Report a warning on stderr."""
    _report(" Warning: ", message)


def usage(message: str) -> NoReturn:
    """Print a usage message on stderr and raise :class:`UsageError`."""
    sys.stderr.write(f"\n Usage: {message}\n")
    raise UsageError(message)