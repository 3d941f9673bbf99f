import pytest

from accfgutil.size import (
    SZ_1G,
    SZ_1K,
    SZ_1M,
    SZ_1T,
    SZ_4K,
    SizeError,
    align,
    align_down,
    parse_size64,
    parse_size_units,
)


def test_plain_decimal():
    assert parse_size64("4096") == 4096


def test_hex_and_octal():
    assert parse_size64("0x1000") == 0x1000
    assert parse_size64("010") == 0o10
    assert parse_size64("0") == 0


@pytest.mark.parametrize(
    "text, unit",
    [
        ("1k", SZ_1K),
        ("1K", SZ_1K),
        ("2m", SZ_1M),
        ("2M", SZ_1M),
        ("3g", SZ_1G),
        ("3G", SZ_1G),
        ("4t", SZ_1T),
        ("4T", SZ_1T),
    ],
)
def test_suffixes(text, unit):
    number = int(text[:-1])
    assert parse_size64(text) == number * unit
    assert parse_size_units(text) == (number * unit, unit)


def test_units_without_suffix():
    assert parse_size_units("12") == (12, 1)


def test_hex_with_suffix():
    assert parse_size_units("0x10k") == (0x10 * SZ_1K, SZ_1K)


def test_leading_whitespace_is_accepted():
    assert parse_size64("  64") == 64


@pytest.mark.parametrize(
    "text",
    [
        "12q",
        "4kb",
        "08",
        "0x",
        "1 k",
        "99999999999999999999",
        "18446744073709551615",
        "-1",
        "16777216T",
    ],
)
def test_invalid_sizes(text):
    with pytest.raises(SizeError):
        parse_size64(text)


def test_size_error_is_value_error():
    with pytest.raises(ValueError):
        parse_size_units("bogus")


@pytest.mark.parametrize("value", [0, 1, 4095, 4096, 4097, 123456789])
@pytest.mark.parametrize("alignment", [1, 8, SZ_4K])
def test_align_invariants(value, alignment):
    up = align(value, alignment)
    assert up % alignment == 0
    assert value <= up < value + alignment


@pytest.mark.parametrize("value", [1, 4095, 4096, 4097, 123456789])
@pytest.mark.parametrize("alignment", [1, 8, SZ_4K])
def test_align_down_invariants(value, alignment):
    down = align_down(value, alignment)
    assert down % alignment == 0
    assert value - alignment < down <= value


def test_align_is_identity_on_aligned_values():
    assert align(SZ_1M, SZ_4K) == SZ_1M
    assert align_down(SZ_1M, SZ_4K) == SZ_1M


def test_align_matches_parsed_units():
    value, units = parse_size_units("3k")
    assert align(value - 1, units) == value
    assert align_down(value + 1, units) == value