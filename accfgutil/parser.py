"""Command-line option parsing driven by :class:`~accfgutil.options.Option` tables.

Parsed values are stored in a dictionary under each option's ``dest``
(or its long name, or its short name, when no ``dest`` is given).
"""

from __future__ import annotations

import re
import sys
from collections import deque
from enum import IntEnum
from itertools import takewhile
from typing import Any, Iterable, Sequence

from .errors import UsageError, die, error
from .options import (
    Option,
    OptionFlag,
    OptionType,
    ParseFlag,
    format_option_usage,
    format_usage,
)
from .strutil import fix_filename, skip_prefix

_SHORT = 1
_UNSET = 2

_LONG_MIN = -(1 << 63)
_LONG_MAX = (1 << 63) - 1
_U64_MAX = (1 << 64) - 1

_NUMBER = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_NO_VALUE_TYPES = (
    OptionType.BOOLEAN,
    OptionType.INCR,
    OptionType.BIT,
    OptionType.SET_UINT,
    OptionType.SET_PTR,
)


class OptionError(Exception):
    """An option was given a bad value or was used in a way it does not allow.

    ``optstr`` is the option text as written (without dashes) and
    ``short_opt`` tells whether it was a short option.
    """

    def __init__(self, message: str = "", optstr: str | None = None,
                 short_opt: bool = False) -> None:
        super().__init__(message)
        self.message = message
        self.optstr = optstr
        self.short_opt = short_opt


class HelpRequested(Exception):
    """Help or a listing was printed; the process should exit with ``exit_code``."""

    def __init__(self, exit_code: int = 0) -> None:
        super().__init__(exit_code)
        self.exit_code = exit_code


class StepResult(IntEnum):
    """Outcome of one :meth:`ParseContext.step` call."""

    HELP = -1
    DONE = 0
    LIST_OPTS = 1
    LIST_SUBCMDS = 2
    UNKNOWN = 3


def _active(options: Iterable[Option]) -> list[Option]:
    return list(takewhile(lambda o: o.type != OptionType.END, options))


def _key(option: Option) -> str | None:
    if option.dest is not None:
        return option.dest
    return option.long_name if option.long_name else option.short_name


def _opterror(option: Option, reason: str, flags: int) -> OptionError:
    if flags & _SHORT:
        return OptionError(f"switch `{option.short_name}' {reason}")
    if flags & _UNSET:
        return OptionError(f"option `no-{option.long_name}' {reason}")
    return OptionError(f"option `{option.long_name}' {reason}")


def _to_long(value: int) -> int:
    return max(_LONG_MIN, min(_LONG_MAX, value))


def _to_int32(value: int) -> int:
    bits = _to_long(value) & 0xFFFFFFFF
    return bits - (1 << 32) if bits & 0x80000000 else bits


def _to_uint32(value: int) -> int:
    return _to_long(value) & 0xFFFFFFFF


def _to_u64(value: int) -> int:
    if abs(value) > _U64_MAX:
        return _U64_MAX
    return value & _U64_MAX


_NUMERIC = {
    OptionType.INTEGER: _to_int32,
    OptionType.UINTEGER: _to_uint32,
    OptionType.LONG: _to_long,
    OptionType.U64: _to_u64,
}


def _parse_number(text: str) -> tuple[int, str]:
    match = _NUMBER.match(text)
    if match is None:
        return 0, text
    return int(match.group(1)), text[match.end():]


class ParseContext:
    """Incremental parser over an argument vector.

    ``argv[0]`` is the program or command name. Parsed values collect in
    :attr:`values`; :meth:`end` returns the arguments left over.
    """

    def __init__(self, argv: Sequence[str], prefix: str | None = None,
                 flags: int = ParseFlag.NONE) -> None:
        flags = ParseFlag(flags)
        if flags & ParseFlag.KEEP_UNKNOWN and flags & ParseFlag.STOP_AT_NON_OPTION:
            die("STOP_AT_NON_OPTION and KEEP_UNKNOWN don't go together")
        args = list(argv)
        self.prefix = prefix
        self.flags = flags
        self.values: dict[str | None, Any] = {}
        self.opt: str | None = None
        self._args: deque[str] = deque(args[1:])
        self._out: list[str] = args[:1] if flags & ParseFlag.KEEP_ARGV0 else []

    @property
    def current_arg(self) -> str | None:
        """The argument the parser stopped at, if any."""
        return self._args[0] if self._args else None

    def step(self, options: Iterable[Option],
             usagestr: Sequence[str] | None = None) -> StepResult:
        """Parse until done, until help or a listing is asked for, or until
        an unknown option. Raises :class:`OptionError` on a bad option."""
        opts = _active(options)
        internal_help = not self.flags & ParseFlag.NO_INTERNAL_HELP
        self.opt = None

        while self._args:
            arg = self._args[0]
            if not arg.startswith("-") or arg == "-":
                if self.flags & ParseFlag.STOP_AT_NON_OPTION:
                    break
                self._out.append(arg)
                self._args.popleft()
                continue

            if arg[1] != "-":
                result = self._step_short(arg, opts, usagestr, internal_help)
            elif arg == "--":
                if not self.flags & ParseFlag.KEEP_DASHDASH:
                    self._args.popleft()
                break
            else:
                result = self._step_long(arg[2:], opts, usagestr, internal_help)

            if result is StepResult.UNKNOWN:
                if not self.flags & ParseFlag.KEEP_UNKNOWN:
                    return StepResult.UNKNOWN
                self._out.append(self._args[0])
                self.opt = None
            elif result is not None:
                return result
            self._args.popleft()
        return StepResult.DONE

    def end(self) -> list[str]:
        """Return the arguments not consumed as options."""
        return self._out + list(self._args)

    def _help(self, usagestr, options, full: bool) -> StepResult:
        if usagestr:
            sys.stderr.write(format_usage(usagestr, options, full))
        return StepResult.HELP

    def _step_short(self, arg, options, usagestr, internal_help):
        self.opt = arg[1:]
        if internal_help and self.opt[0] == "h":
            return self._help(usagestr, options, False)
        if not self._parse_short_reporting(options, arg[1:]):
            return StepResult.UNKNOWN
        if self.opt is not None:
            self._check_typos(arg[1:], options)
        while self.opt is not None:
            if internal_help and self.opt[0] == "h":
                return self._help(usagestr, options, False)
            if not self._parse_short_reporting(options, self.opt):
                self._args[0] = "-" + self.opt
                return StepResult.UNKNOWN
        return None

    def _parse_short_reporting(self, options, optstr: str) -> bool:
        try:
            return self._parse_short(options)
        except OptionError as exc:
            exc.optstr = optstr
            exc.short_opt = True
            raise

    def _step_long(self, name, options, usagestr, internal_help):
        if internal_help and name == "help-all":
            return self._help(usagestr, options, True)
        if internal_help and name == "help":
            return self._help(usagestr, options, False)
        if name == "list-opts":
            return StepResult.LIST_OPTS
        if name == "list-cmds":
            return StepResult.LIST_SUBCMDS
        try:
            found = self._parse_long(name, options)
        except OptionError as exc:
            exc.optstr = name
            exc.short_opt = False
            raise
        return None if found else StepResult.UNKNOWN

    def _check_typos(self, arg: str, options: list[Option]) -> None:
        if len(arg) < 3:
            return
        message = f"did you mean `--{arg}` (with two dashes ?)"
        if arg.startswith("no-") or any(
            o.long_name and o.long_name.startswith(arg) for o in options
        ):
            error(message)
            raise UsageError(message)

    def _parse_short(self, options: list[Option]) -> bool:
        current = self.opt[0]
        for option in options:
            if option.short_name is not None and option.short_name == current:
                self.opt = self.opt[1:] or None
                self._get_value(option, _SHORT)
                return True
        return False

    def _parse_long(self, arg: str, options: list[Option]) -> bool:
        eq = arg.find("=")
        arg_end = eq if eq >= 0 else len(arg)
        abbrev: Option | None = None
        ambiguous: Option | None = None
        abbrev_flags = ambiguous_flags = 0

        for option in options:
            name = option.long_name
            if not name:
                continue
            flags = 0
            rest = skip_prefix(arg, name)

            if option.type == OptionType.ARGUMENT:
                if rest is None:
                    continue
                if rest.startswith("="):
                    raise _opterror(option, "takes no value", flags)
                if rest:
                    continue
                self._out.append(self._args[0])
                return True

            abbreviated = False
            if rest is None:
                if name.startswith("no-"):
                    rest = skip_prefix(arg, name[3:])
                    if rest is not None:
                        flags |= _UNSET
                    elif name[3:].startswith(arg):
                        flags |= _UNSET
                        abbreviated = True
                if rest is None and not abbreviated:
                    if name.startswith(arg[:arg_end]):
                        abbreviated = True
                    elif "no-".startswith(arg):
                        flags |= _UNSET
                        abbreviated = True
                    elif not arg.startswith("no-"):
                        continue
                    else:
                        flags |= _UNSET
                        rest = skip_prefix(arg[3:], name)
                        if rest is None:
                            if not name.startswith(arg[3:]):
                                continue
                            abbreviated = True
                if abbreviated:
                    if abbrev is not None:
                        ambiguous, ambiguous_flags = abbrev, abbrev_flags
                    if not flags & _UNSET and arg_end < len(arg):
                        self.opt = arg[arg_end + 1:]
                    abbrev, abbrev_flags = option, flags
                    continue

            if rest:
                if rest[0] != "=":
                    continue
                self.opt = rest[1:]
            self._get_value(option, flags)
            return True

        if ambiguous is not None:
            first = "no-" if ambiguous_flags & _UNSET else ""
            second = "no-" if abbrev_flags & _UNSET else ""
            raise OptionError(
                f"Ambiguous option: {arg} (could be --{first}{ambiguous.long_name}"
                f" or --{second}{abbrev.long_name})"
            )
        if abbrev is not None:
            self._get_value(abbrev, abbrev_flags)
            return True
        return False

    def _get_arg(self, option: Option, flags: int) -> Any:
        if self.opt is not None:
            arg, self.opt = self.opt, None
            return arg
        if option.flags & OptionFlag.LASTARG_DEFAULT and (
            len(self._args) == 1 or self._args[1].startswith("-")
        ):
            return option.defval
        if len(self._args) > 1:
            self._args.popleft()
            return self._args[0]
        raise _opterror(option, "requires a value", flags)

    def _get_value(self, option: Option, flags: int) -> None:
        unset = bool(flags & _UNSET)
        if unset and self.opt is not None:
            raise _opterror(option, "takes no value", flags)
        if unset and option.flags & OptionFlag.NONEG:
            raise _opterror(option, "isn't available", flags)
        if not flags & _SHORT and self.opt is not None:
            if option.type in _NO_VALUE_TYPES or (
                option.type == OptionType.CALLBACK and option.flags & OptionFlag.NOARG
            ):
                raise _opterror(option, "takes no value", flags)

        values = self.values
        key = _key(option)
        kind = option.type
        optional = bool(option.flags & OptionFlag.OPTARG) and self.opt is None

        if kind == OptionType.BIT:
            mask = option.defval or 0
            current = values.get(key, 0)
            values[key] = current & ~mask if unset else current | mask
        elif kind == OptionType.BOOLEAN:
            values[key] = not unset
            if option.set_dest is not None:
                values[option.set_dest] = True
        elif kind == OptionType.INCR:
            values[key] = 0 if unset else values.get(key, 0) + 1
        elif kind == OptionType.SET_UINT:
            values[key] = 0 if unset else option.defval
        elif kind == OptionType.SET_PTR:
            values[key] = None if unset else option.defval
        elif kind in (OptionType.STRING, OptionType.FILENAME):
            if unset:
                values[key] = None
            elif optional:
                values[key] = option.defval
            else:
                values[key] = self._get_arg(option, flags)
            if kind == OptionType.FILENAME:
                values[key] = fix_filename(self.prefix, values[key])
        elif kind == OptionType.CALLBACK:
            if option.callback is None:
                die("should not happen, someone must be hit on the forehead")
            if unset or option.flags & OptionFlag.NOARG or optional:
                arg = None
            else:
                arg = self._get_arg(option, flags)
            if option.callback(option, arg, unset, values):
                raise OptionError("")
        elif kind in _NUMERIC:
            if unset:
                values[key] = 0
            elif optional:
                values[key] = option.defval
            else:
                number, rest = _parse_number(self._get_arg(option, flags))
                if rest:
                    raise _opterror(option, "expects a numerical value", flags)
                values[key] = _NUMERIC[kind](number)
        else:
            die("should not happen, someone must be hit on the forehead")


def _parse(argv, prefix, options, subcommands, usagestr, flags):
    opts = _active(options)
    usage = list(usagestr) if usagestr else []
    if subcommands and (not usage or not usage[0]):
        line = f"accel-config {argv[0]} [<options>] {{{'|'.join(subcommands)}}}"
        if usage:
            usage[0] = line
        else:
            usage.append(line)

    ctx = ParseContext(argv, prefix, flags)
    try:
        result = ctx.step(opts, usage)
    except OptionError as exc:
        if exc.message:
            error(exc.message)
        sys.stderr.write(
            format_option_usage(usage or None, opts, exc.optstr or "", exc.short_opt)
        )
        raise HelpRequested(0) from exc

    if result == StepResult.HELP:
        raise HelpRequested(0)
    if result == StepResult.LIST_OPTS:
        sys.stdout.write("".join(f"--{o.long_name} " for o in opts if o.long_name))
        raise HelpRequested(0)
    if result == StepResult.LIST_SUBCMDS:
        sys.stdout.write("".join(f"{name} " for name in subcommands or ()))
        raise HelpRequested(0)
    if result == StepResult.UNKNOWN:
        current = ctx.current_arg or ""
        if current[1:2] == "-":
            message = f"unknown option `{current[2:]}'"
        else:
            message = f"unknown switch `{(ctx.opt or '?')[0]}'"
        error(message)
        sys.stderr.write(format_usage(usage, opts, False))
        raise UsageError(message)
    return ctx.end(), ctx.values


def parse_options(argv: Sequence[str], options: Iterable[Option],
                  usagestr: Sequence[str] | None = None,
                  flags: int = ParseFlag.NONE):
    """Parse ``argv`` and return ``(remaining_args, values)``.

    Raises :class:`HelpRequested` after printing help or a listing, and
    :class:`~accfgutil.errors.UsageError` on an unknown option.
    """
    return _parse(argv, None, options, None, usagestr, flags)


def parse_options_prefix(argv: Sequence[str], prefix: str | None,
                         options: Iterable[Option],
                         usagestr: Sequence[str] | None = None,
                         flags: int = ParseFlag.NONE):
    """Like :func:`parse_options`, putting ``prefix`` before relative file names."""
    return _parse(argv, prefix, options, None, usagestr, flags)


def parse_options_subcommand(argv: Sequence[str], options: Iterable[Option],
                             subcommands: Sequence[str] | None,
                             usagestr: Sequence[str] | None = None,
                             flags: int = ParseFlag.NONE):
    """Like :func:`parse_options`, building a usage line from ``subcommands``
    when none is given."""
    return _parse(argv, None, options, subcommands, usagestr, flags)


def parse_opt_verbosity_cb(option: Option, arg: str | None, unset: bool,
                           values: dict) -> int:
    """Callback for -v/-q: raise or lower the verbosity level stored for ``option``."""
    key = _key(option)
    target = values.get(key, 0)
    if unset:
        target = 0
    elif option.short_name == "v":
        target = target + 1 if target >= 0 else 1
    else:
        target = target - 1 if target <= 0 else -1
    values[key] = target
    return 0