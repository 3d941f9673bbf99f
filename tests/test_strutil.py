import pytest

from accfgutil.strutil import (
    fix_filename,
    is_absolute_path,
    prefix_filename,
    prefixcmp,
    skip_prefix,
)


@pytest.mark.parametrize(
    "text, prefix",
    [("--help", "--"), ("no-verbose", "no-"), ("abc", ""), ("same", "same")],
)
def test_prefixcmp_matches(text, prefix):
    assert prefixcmp(text, prefix) == 0


def test_prefixcmp_mismatch_sign():
    assert prefixcmp("abc", "abd") == ord("d") - ord("c")
    assert prefixcmp("abd", "abc") < 0


def test_prefixcmp_text_shorter_than_prefix():
    assert prefixcmp("ab", "abc") == ord("c")


def test_prefixcmp_agrees_with_startswith():
    pairs = [("list-cmds", "list"), ("list", "list-cmds"), ("x", "y"), ("", "a")]
    for text, prefix in pairs:
        assert (prefixcmp(text, prefix) == 0) == text.startswith(prefix)


def test_skip_prefix():
    assert skip_prefix("no-verbose", "no-") == "verbose"
    assert skip_prefix("verbose", "no-") is None
    assert skip_prefix("verbose", "verbose") == ""


def test_is_absolute_path():
    assert is_absolute_path("/etc/accel-config")
    assert not is_absolute_path("relative/path")
    assert not is_absolute_path("")


def test_prefix_filename_joins_relative():
    assert prefix_filename("dir/", "file.conf") == "dir/file.conf"


def test_prefix_filename_keeps_absolute():
    assert prefix_filename("dir/", "/abs/file") == "/abs/file"


@pytest.mark.parametrize("prefix", [None, ""])
def test_prefix_filename_without_prefix(prefix):
    assert prefix_filename(prefix, "file.conf") == "file.conf"


@pytest.mark.parametrize("name", [None, "", "-", "/abs/file"])
def test_fix_filename_leaves_special_names(name):
    assert fix_filename("sub/", name) == name


def test_fix_filename_without_prefix():
    assert fix_filename(None, "file.conf") == "file.conf"


def test_fix_filename_applies_prefix():
    assert fix_filename("sub/", "file.conf") == "sub/file.conf"