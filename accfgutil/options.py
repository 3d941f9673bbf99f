"""Option descriptions for command-line parsing and their help text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from itertools import takewhile
from typing import Any, Callable, Iterable, Sequence

USAGE_OPTS_WIDTH = 24
USAGE_GAP = 2


class OptionType(IntEnum):
    """Kinds of option, which decide how a value is taken and stored."""

    END = 0
    ARGUMENT = 1
    GROUP = 2
    BIT = 3
    BOOLEAN = 4
    INCR = 5
    SET_UINT = 6
    SET_PTR = 7
    STRING = 8
    INTEGER = 9
    LONG = 10
    CALLBACK = 11
    U64 = 12
    UINTEGER = 13
    FILENAME = 14


class OptionFlag(IntFlag):
    """Per-option behaviour flags."""

    NONE = 0
    OPTARG = 1
    NOARG = 2
    NONEG = 4
    HIDDEN = 8
    LASTARG_DEFAULT = 16


class ParseFlag(IntFlag):
    """Flags that control a whole parse."""

    NONE = 0
    KEEP_DASHDASH = 1
    STOP_AT_NON_OPTION = 2
    KEEP_ARGV0 = 4
    KEEP_UNKNOWN = 8
    NO_INTERNAL_HELP = 16


Callback = Callable[..., Any]


@dataclass(frozen=True)
class Option:
    """One command-line option.

    ``dest`` names the key under which the parsed value is stored,
    ``set_dest`` the key that records that a boolean option was given.
    ``defval`` is the value stored for optional arguments, the mask for
    bit options and the constant for set options.
    """

    type: OptionType
    short_name: str | None = None
    long_name: str | None = None
    dest: str | None = None
    argh: str | None = None
    help: str = ""
    flags: OptionFlag = OptionFlag.NONE
    callback: Callback | None = None
    defval: Any = None
    set_dest: str | None = None

    def __post_init__(self) -> None:
        if self.short_name is not None and len(self.short_name) != 1:
            raise ValueError(f"short option name must be one character: {self.short_name!r}")


def _active(options: Iterable[Option]) -> list[Option]:
    """Options up to, not including, the first END entry."""
    return list(takewhile(lambda o: o.type != OptionType.END, options))


def _argument_hint(option: Option) -> str:
    optarg = bool(option.flags & OptionFlag.OPTARG)
    kind = option.type
    if kind in (OptionType.LONG, OptionType.U64, OptionType.INTEGER, OptionType.UINTEGER):
        if optarg:
            return "[=<n>]" if option.long_name else "[<n>]"
        return " <n>"
    if kind == OptionType.CALLBACK and option.flags & OptionFlag.NOARG:
        return ""
    if kind in (OptionType.CALLBACK, OptionType.FILENAME, OptionType.STRING):
        if option.argh:
            if optarg:
                return f"[=<{option.argh}>]" if option.long_name else f"[<{option.argh}>]"
            return f" <{option.argh}>"
        if optarg:
            return "[=...]" if option.long_name else "[...]"
        return " ..."
    return ""


def format_option_help(option: Option, full: bool = False) -> str:
    """Return the help line(s) for one option.

    Group entries give a blank line and their header; hidden options give
    nothing unless ``full`` is set.
    """
    if option.type == OptionType.GROUP:
        return "\n" + (f"{option.help}\n" if option.help else "")
    if not full and option.flags & OptionFlag.HIDDEN:
        return ""

    head = "    "
    head += f"-{option.short_name}" if option.short_name else "    "
    if option.long_name and option.short_name:
        head += ", "
    if option.long_name:
        head += f"--{option.long_name}"
    head += _argument_hint(option)

    if len(head) <= USAGE_OPTS_WIDTH:
        pad = USAGE_OPTS_WIDTH - len(head)
    else:
        head += "\n"
        pad = USAGE_OPTS_WIDTH
    return f"{head}{' ' * (pad + USAGE_GAP)}{option.help}\n"


def _format_usage_header(usagestr: Sequence[str]) -> str:
    lines = [f"\n usage: {usagestr[0]}\n"]
    rest = list(usagestr[1:])
    while rest and rest[0]:
        lines.append(f"    or: {rest.pop(0)}\n")
    lines.extend(f"{'    ' if text else ''}{text}\n" for text in rest)
    return "".join(lines)


def format_usage(
    usagestr: Sequence[str] | None, options: Iterable[Option], full: bool = False
) -> str:
    """Return the full usage text: usage lines followed by option help."""
    if not usagestr:
        return ""
    opts = _active(options)
    parts = [_format_usage_header(usagestr)]
    if not opts or opts[0].type != OptionType.GROUP:
        parts.append("\n")
    parts.extend(format_option_help(opt, full) for opt in opts)
    parts.append("\n")
    return "".join(parts)


def _matches(option: Option, optstr: str, short_opt: bool) -> bool:
    if short_opt:
        return bool(optstr) and option.short_name == optstr[0]
    if option.long_name is None:
        return False
    if optstr.startswith(option.long_name):
        return True
    return optstr.startswith("no-") and optstr[3:].startswith(option.long_name)


def format_option_usage(
    usagestr: Sequence[str] | None,
    options: Iterable[Option],
    optstr: str,
    short_opt: bool,
) -> str:
    """Return the usage lines plus the help of the option named by ``optstr``."""
    parts = []
    if usagestr:
        parts.append(_format_usage_header(usagestr))
        parts.append("\n")
    for opt in _active(options):
        if _matches(opt, optstr, short_opt):
            parts.append(format_option_help(opt, False))
            break
    return "".join(parts)