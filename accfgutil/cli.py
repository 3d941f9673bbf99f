"""Top-level command dispatch and man page display for a multi-command tool."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Sequence

from .errors import usage, warning
from .strutil import is_absolute_path, prefixcmp

DEFAULT_PREFIX = "/usr"
DEFAULT_MAN_PATH = "share/man"

_HIDDEN_FROM_LISTING = frozenset({"create-nfit", "test", "bat"})

CommandFn = Callable[[list, Any], int]


@dataclass(frozen=True)
class Command:
    """A named sub-command; ``fn`` is called with the argument list and a context."""

    name: str
    fn: CommandFn


def handle_options(
    argv: Sequence[str], usage_msg: str, commands: Iterable[Command]
) -> list[str]:
    """Handle options given before the sub-command.

    Returns the argument list, with ``-h`` and ``-v`` turned into
    ``--help`` and ``--version``. ``--list-cmds`` prints the command names
    and exits; any other option is a usage error.
    """
    args = list(argv)
    if not args:
        return args
    cmd = args[0]
    if not cmd.startswith("-"):
        return args
    if cmd in ("--version", "--help"):
        return args
    if cmd == "-h":
        args[0] = "--help"
        return args
    if cmd == "-v":
        args[0] = "--version"
        return args
    if cmd == "--list-cmds":
        for command in commands:
            if command.name not in _HIDDEN_FROM_LISTING:
                sys.stdout.write(f"{command.name}\n")
        raise SystemExit(0)
    sys.stderr.write(f"Unknown option: {cmd}\n")
    usage(usage_msg)


def handle_internal_command(
    argv: Sequence[str], ctx: Any, commands: Iterable[Command]
) -> int:
    """Run the command named by ``argv[0]`` and return its result.

    ``<cmd> --help`` is run as ``help <cmd>``. Raises ValueError when no
    command has that name.
    """
    args = list(argv)
    if len(args) > 1 and args[1] == "--help":
        args[1] = args[0]
        args[0] = "help"
    name = args[0]
    for command in commands:
        if command.name == name:
            return command.fn(args, ctx)
    sys.stderr.write(f"Unknown command: '{name}'\n")
    raise ValueError(f"Unknown command: '{name}'")


def cmd_to_page(cmd: str | None, util_name: str) -> str:
    """Return the man page name for ``cmd`` of the tool ``util_name``."""
    if cmd is None:
        return util_name
    if prefixcmp(cmd, util_name) == 0:
        return cmd
    return f"{util_name}-{cmd}"


def system_path(path: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Return ``path`` under ``prefix`` unless it is already absolute."""
    if is_absolute_path(path):
        return path
    return f"{prefix}/{path}"


def setup_man_path(man_path: str = DEFAULT_MAN_PATH, prefix: str = DEFAULT_PREFIX) -> str:
    """Put the tool's man directory in front of ``MANPATH``; return the new value.

    A ':' always follows, so that man also searches the system directories.
    """
    new_path = system_path(man_path, prefix) + ":" + os.environ.get("MANPATH", "")
    os.environ["MANPATH"] = new_path
    return new_path


def _exec_man_konqueror(path: str | None, page: str) -> None:
    display = os.environ.get("DISPLAY")
    if not display:
        return
    filename = "kfmclient"
    if path:
        slash = path.rfind("/")
        if slash >= 0:
            if path[slash + 1:] == "konqueror":
                path = path[: slash + 1] + "kfmclient"
            filename = path[slash:]
    else:
        path = "kfmclient"
    try:
        os.execlp(path, filename, "newTab", f"man:{page}(1)")
    except OSError as exc:
        warning(f"failed to exec '{path}': {exc.strerror}")


def _exec_man_man(path: str | None, page: str) -> None:
    path = path or "man"
    try:
        os.execlp(path, "man", page)
    except OSError as exc:
        warning(f"failed to exec '{path}': {exc.strerror}")


def _exec_viewer(name: str, page: str) -> None:
    lowered = name.lower()
    if lowered == "man":
        _exec_man_man(None, page)
    elif lowered == "konqueror":
        _exec_man_konqueror(None, page)
    else:
        warning(f"'{name}': unknown man viewer.")


def show_man_page(cmd: str | None, util_name: str, viewer: str) -> None:
    """Replace the process with a man page viewer showing ``cmd``'s page.

    The environment variable named by ``viewer`` may select a viewer;
    ``man`` is tried after it. Raises RuntimeError when no viewer started.
    """
    fallback = os.environ.get(viewer)
    page = cmd_to_page(cmd, util_name)
    setup_man_path()
    if fallback:
        _exec_viewer(fallback, page)
    _exec_viewer("man", page)
    sys.stderr.write("no man viewer handled the request")
    raise RuntimeError("no man viewer handled the request")