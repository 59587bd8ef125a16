"""Shared utility library for the probe."""

from volquota.lib.process import run_command
from volquota.lib.units import Formatter, format_iec, format_raw, get_formatter

__all__ = [
    "Formatter",
    "format_iec",
    "format_raw",
    "get_formatter",
    "run_command",
]
