from unittest import mock

import pytest

from accfgutil.cli import (
    Command,
    cmd_to_page,
    handle_internal_command,
    handle_options,
    setup_man_path,
    show_man_page,
    system_path,
)
from accfgutil.errors import UsageError


def _commands(calls):
    def make(name):
        def fn(argv, ctx):
            calls.append((name, argv, ctx))
            return len(argv)
        return Command(name, fn)

    return [make(n) for n in ("list", "help", "test", "config-device", "bat")]


def test_cmd_to_page_without_command():
    assert cmd_to_page(None, "accel-config") == "accel-config"


def test_cmd_to_page_already_prefixed():
    assert cmd_to_page("accel-config-list", "accel-config") == "accel-config-list"


def test_cmd_to_page_adds_prefix():
    assert cmd_to_page("list", "accel-config") == "accel-config-list"


def test_system_path_absolute_unchanged():
    assert system_path("/opt/man", "/usr") == "/opt/man"


def test_system_path_relative_gets_prefix():
    assert system_path("share/man", "/usr") == "/usr/share/man"


def test_setup_man_path_without_old(monkeypatch):
    monkeypatch.delenv("MANPATH", raising=False)
    result = setup_man_path("share/man", "/usr")
    assert result == "/usr/share/man:"
    import os
    assert os.environ["MANPATH"] == result


def test_setup_man_path_keeps_old(monkeypatch):
    monkeypatch.setenv("MANPATH", "/old/man")
    assert setup_man_path("share/man", "/usr") == "/usr/share/man:/old/man"


def test_handle_options_leaves_command_alone():
    assert handle_options(["list", "-v"], "usage", []) == ["list", "-v"]


def test_handle_options_short_help():
    assert handle_options(["-h", "list"], "usage", []) == ["--help", "list"]


def test_handle_options_short_version():
    assert handle_options(["-v"], "usage", []) == ["--version"]


def test_handle_options_long_help_kept():
    assert handle_options(["--help"], "usage", []) == ["--help"]


def test_handle_options_empty():
    assert handle_options([], "usage", []) == []


def test_handle_options_unknown(capsys):
    with pytest.raises(UsageError):
        handle_options(["--bogus"], "accel-config <cmd>", [])
    assert "Unknown option: --bogus" in capsys.readouterr().err


def test_handle_options_list_cmds(capsys):
    with pytest.raises(SystemExit) as info:
        handle_options(["--list-cmds"], "usage", _commands([]))
    assert info.value.code == 0
    assert capsys.readouterr().out.split() == ["list", "help", "config-device"]


def test_handle_internal_command_dispatches():
    calls = []
    result = handle_internal_command(["list", "-i"], "ctx", _commands(calls))
    assert result == 2
    assert calls == [("list", ["list", "-i"], "ctx")]


def test_handle_internal_command_help_rewrite():
    calls = []
    handle_internal_command(["list", "--help"], None, _commands(calls))
    assert calls == [("help", ["help", "list"], None)]


def test_handle_internal_command_unknown(capsys):
    with pytest.raises(ValueError):
        handle_internal_command(["nope"], None, _commands([]))
    assert "Unknown command: 'nope'" in capsys.readouterr().err


def test_show_man_page_falls_back_to_man(monkeypatch, capsys):
    monkeypatch.delenv("ACCFG_VIEWER", raising=False)
    with mock.patch("accfgutil.cli.os.execlp", side_effect=OSError(2, "missing")) as ex:
        with pytest.raises(RuntimeError):
            show_man_page("list", "accel-config", "ACCFG_VIEWER")
    ex.assert_called_once_with("man", "man", "accel-config-list")
    assert "failed to exec 'man'" in capsys.readouterr().err


def test_show_man_page_konqueror_first(monkeypatch):
    monkeypatch.setenv("ACCFG_VIEWER", "Konqueror")
    monkeypatch.setenv("DISPLAY", ":0")
    with mock.patch("accfgutil.cli.os.execlp", side_effect=OSError(2, "missing")) as ex:
        with pytest.raises(RuntimeError):
            show_man_page(None, "accel-config", "ACCFG_VIEWER")
    assert ex.call_args_list == [
        mock.call("kfmclient", "kfmclient", "newTab", "man:accel-config(1)"),
        mock.call("man", "man", "accel-config"),
    ]


def test_show_man_page_unknown_viewer(monkeypatch, capsys):
    monkeypatch.setenv("ACCFG_VIEWER", "lynx")
    with mock.patch("accfgutil.cli.os.execlp", side_effect=OSError(2, "missing")):
        with pytest.raises(RuntimeError):
            show_man_page("list", "accel-config", "ACCFG_VIEWER")
    assert "'lynx': unknown man viewer." in capsys.readouterr().err