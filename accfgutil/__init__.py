"""Utilities for accelerator configuration tools: option parsing, command
dispatch, size parsing, bitmaps, sysfs access, logging and JSON output."""

__version__ = "0.1.0"