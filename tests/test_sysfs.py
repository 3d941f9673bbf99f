import errno

import pytest

from accfgutil.sysfs import (
    SYSFS_ATTR_SIZE,
    device_parse,
    devpath_to_devname,
    read_attr,
    write_attr,
)


def test_read_attr_strips_one_newline(tmp_path):
    attr = tmp_path / "size"
    attr.write_text("128\n")
    assert read_attr(str(attr)) == "128"


def test_read_attr_without_newline(tmp_path):
    attr = tmp_path / "mode"
    attr.write_text("dedicated")
    assert read_attr(str(attr)) == "dedicated"


def test_read_attr_too_large(tmp_path):
    attr = tmp_path / "big"
    attr.write_text("x" * SYSFS_ATTR_SIZE)
    with pytest.raises(OSError) as info:
        read_attr(str(attr))
    assert info.value.errno == errno.EFBIG


def test_read_attr_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_attr(str(tmp_path / "absent"))


def test_write_then_read_round_trip(tmp_path):
    attr = tmp_path / "priority"
    attr.write_text("")
    write_attr(str(attr), "10")
    assert read_attr(str(attr)) == "10"


def test_write_attr_requires_existing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        write_attr(str(tmp_path / "absent"), "1", quiet=True)


def test_device_parse_calls_add_dev_in_order(tmp_path):
    for name in ["dsa2", "dsa0", "iax1", "dsa!skip"]:
        (tmp_path / name).mkdir()
    seen = []

    def add_dev(parent, dev_id, dev_path, prefix, bus):
        seen.append((parent, dev_id, dev_path, prefix, bus))
        return object()

    errors = device_parse(str(tmp_path), "dsa", "bus", None, "ctx", add_dev)
    assert errors == 0
    base = str(tmp_path)
    assert seen == [
        ("ctx", 0, f"{base}/dsa0", "dsa", "bus"),
        ("ctx", 2, f"{base}/dsa2", "dsa", "bus"),
        ("ctx", 1, f"{base}/iax1", "dsa", "bus"),
    ]


def test_device_parse_filter_and_error_count(tmp_path):
    for name in ["wq0", "wq1", "engine0"]:
        (tmp_path / name).mkdir()
    errors = device_parse(
        str(tmp_path),
        "wq",
        "bus",
        lambda entry: entry.name.startswith("wq"),
        None,
        lambda *args: None,
    )
    assert errors == 2


def test_device_parse_missing_dir(tmp_path):
    with pytest.raises(OSError) as info:
        device_parse(str(tmp_path / "nope"), "", "", None, None, lambda *a: 1)
    assert info.value.errno == errno.ENODEV


def test_devpath_to_devname():
    assert devpath_to_devname("/sys/bus/dsa/devices/wq0.1") == "wq0.1"
    with pytest.raises(ValueError):
        devpath_to_devname("wq0.1")