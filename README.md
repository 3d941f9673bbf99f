# accfgutil

Building blocks for command-line tools that configure accelerator devices
through sysfs. The package has no dependencies outside the standard library
and supports Python 3.10 and later.

## Modules

- `accfgutil.options` – option descriptions: `Option`, `OptionType`,
  `OptionFlag`, `ParseFlag`, and help text from `format_option_help`,
  `format_usage` and `format_option_usage`.
- `accfgutil.parser` – an option parser with short options, bundled short
  switches, abbreviated and negated long options (`--no-...`), optional
  arguments, `--help`, `--help-all`, `--list-opts` and `--list-cmds`
  (`ParseContext`, `StepResult`, `parse_options`, `parse_options_prefix`,
  `parse_options_subcommand`, `parse_opt_verbosity_cb`). Bad option values
  raise `OptionError` inside a `ParseContext`; the `parse_options*`
  functions print help and raise `HelpRequested`, and raise
  `accfgutil.errors.UsageError` on an unknown option.
- `accfgutil.cli` – handling of options given before a sub-command
  (`handle_options`), dispatch to a `Command` by name
  (`handle_internal_command`, where `<cmd> --help` runs `help <cmd>`), and
  man page display (`cmd_to_page`, `system_path`, `setup_man_path`,
  `show_man_page`, which replaces the process with `man` or `kfmclient`).
- `accfgutil.size` – sizes such as `4K`, `2M`, `1G` or `0x1000`
  (`parse_size64`, `parse_size_units`) and `align` / `align_down`.
  Invalid input raises `SizeError`.
- `accfgutil.bitmap` – a fixed-size `Bitmap` with range `set`/`clear`,
  `test`, `find_next_bit`, `find_next_zero_bit` and `full`.
- `accfgutil.sysfs` – `read_attr`, `write_attr`, `device_parse` (calls a
  function for each entry of a device directory, in name order) and
  `devpath_to_devname`.
- `accfgutil.log` – `LogContext`, whose threshold may be set from an
  environment variable (`parse_priority`), with levels from `LogPriority`.
  Messages go to stderr as `owner: function: message`.
- `accfgutil.names` – device names such as `dsa0` and `dsa0/wq0.1`
  (`scan_device_type_id`, `scan_parent_child_names`, `scan_parent_child_ids`).
- `accfgutil.jsonfmt` – pretty-printed JSON with human-readable sizes and
  hexadecimal values (`JsonFlags`, `SizeValue`, `HexValue`, `size_value`,
  `hex_value`, `format_size`, `format_hex`, `dumps`, `display_json_array`).
- `accfgutil.errors` – `die`, `error`, `warning` and `usage`, with
  `FatalError` (exit code 128), `UsageError` (exit code 129) and
  `set_die_routine`.
- `accfgutil.strutil` – `prefixcmp`, `skip_prefix`, `is_absolute_path`,
  `prefix_filename` and `fix_filename`.

## Examples

Parsing options:

```python
from accfgutil.options import Option, OptionType
from accfgutil.parser import parse_options

opts = [
    Option(OptionType.BOOLEAN, "v", "verbose", help="be verbose"),
    Option(OptionType.STRING, "c", "config", argh="file", help="config file"),
]
args, values = parse_options(["load", "-v", "--config=x.json", "extra"], opts)
# args == ["extra"]
# values == {"verbose": True, "config": "x.json"}
```

Values are stored under an option's `dest`, or else its long name, or else
its short name.

Sizes:

```python
from accfgutil.size import parse_size64, SizeError

parse_size64("4K")      # 4096
parse_size64("0x1000")  # 4096

try:
    parse_size64("12Q")
except SizeError:
    ...
```

Bitmaps:

```python
from accfgutil.bitmap import Bitmap

engines = Bitmap(64)
engines.set(0, 4)               # bits 0..3
engines.test(2)                 # True
engines.find_next_zero_bit(0)   # 4
engines.full()                  # False
```

Device names:

```python
from accfgutil.names import scan_device_type_id, scan_parent_child_names

scan_device_type_id("dsa0")             # ("dsa", 0)
scan_parent_child_names("dsa0/wq0.1")   # ("dsa0", "wq0.1")
```

JSON:

```python
from accfgutil.jsonfmt import JsonFlags, dumps, hex_value, size_value

print(dumps({
    "size": size_value(8 * 1024 * 1024, JsonFlags.HUMAN),
    "gen_cap": hex_value(0x1F),
}))
# {
#   "size":"8.00 MiB (8.39 MB)",
#   "gen_cap":"0x1f"
# }
```

File names relative to a prefix:

```python
from accfgutil.strutil import prefix_filename

prefix_filename("conf/", "dsa.json")   # "conf/dsa.json"
prefix_filename("conf/", "/etc/x")     # "/etc/x"
```

## What the package does not do

The package is a toolkit, not a finished tool. It installs no command of
its own and does not talk to accelerator devices by itself: it does not
enumerate devices, groups, work queues or engines, look them up by name,
walk them with filters, or turn them into JSON listings. `accfgutil.names`
only splits names into their parts, and `accfgutil.sysfs` only reads and
writes the attribute files it is pointed at.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.