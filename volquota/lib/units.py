"""Size formatters for report text. Inputs are kilobytes."""

from typing import Callable

Formatter = Callable[[int], str]

IEC_UNITS = ["KiB", "MiB", "GiB", "TiB", "PiB"]


def format_raw(size_kb: int) -> str:
    """Render the plain kilobyte count."""
    return str(size_kb)


def format_iec(size_kb: int) -> str:
    """Format kilobytes as an IEC-scaled string, e.g. 4.8GiB."""
    value = float(size_kb)
    for unit in IEC_UNITS[:-1]:
        if abs(value) < 1024.0:
            return f"{value:.1f}{unit}"
        value /= 1024.0
    return f"{value:.1f}{IEC_UNITS[-1]}"


def get_formatter(human_readable: bool = False) -> Formatter:
    """Pick the formatter for the report."""
    return format_iec if human_readable else format_raw
