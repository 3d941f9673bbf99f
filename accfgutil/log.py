"""A small logging context with syslog priorities, configured from the environment."""

from __future__ import annotations

import os
import re
import sys
from enum import IntEnum
from typing import Callable


class LogPriority(IntEnum):
    """Syslog priority levels; a lower value is more severe."""

    EMERG = 0
    ALERT = 1
    CRIT = 2
    ERR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7


_C_SPACE = " \t\n\v\f\r"
_LEADING_INT = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+")
_NAMED = (
    ("err", LogPriority.ERR),
    ("info", LogPriority.INFO),
    ("debug", LogPriority.DEBUG),
    ("notice", LogPriority.NOTICE),
)


def parse_priority(text: str) -> int:
    """Turn a priority setting into a number.

    A leading integer followed by nothing or whitespace is taken as is;
    otherwise a name starting with err, info, debug or notice selects that
    level, and anything else gives 0.
    """
    match = _LEADING_INT.match(text)
    rest = text[match.end():] if match else text
    if not rest or rest[0] in _C_SPACE:
        return int(match.group()) if match else 0
    for name, priority in _NAMED:
        if text.startswith(name):
            return priority
    return 0


LogFn = Callable[["LogContext", int, str, str], None]


def _log_stderr(ctx: "LogContext", priority: int, function: str, message: str) -> None:
    sys.stderr.write(f"{ctx.owner}: {function}: {message}")


class LogContext:
    """Messages at or above the configured priority go to ``log_fn``."""

    def __init__(self, owner: str, env_var: str) -> None:
        self.owner = owner
        self.log_fn: LogFn = _log_stderr
        self.priority: int = LogPriority.ERR
        env = os.environ.get(env_var)
        if env is not None:
            self.priority = parse_priority(env)

    def log(self, priority: int, function: str, message: str) -> None:
        """Emit ``message`` if ``priority`` passes the context's threshold."""
        if self.priority >= priority:
            self.log_fn(self, priority, function, message)

    def err(self, function: str, message: str) -> None:
        self.log(LogPriority.ERR, function, message)

    def info(self, function: str, message: str) -> None:
        self.log(LogPriority.INFO, function, message)

    def notice(self, function: str, message: str) -> None:
        self.log(LogPriority.NOTICE, function, message)

    def debug(self, function: str, message: str) -> None:
        self.log(LogPriority.DEBUG, function, message)