"""Human-readable formatting helpers for progress output."""

import math

SIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")

# Seconds in a week.
WEEK = 604_800


def seconds_to_time(seconds: float) -> str:
    """Render a duration as HH:MM:SS."""
    if not math.isfinite(seconds):
        return "??:??:??"

    seconds = int(seconds)
    if seconds > 2 * WEEK:
        return "> 2 weeks"

    return f"{seconds // 3600:02d}:{seconds // 60 % 60:02d}:{seconds % 60:02d}"


def percentage(numerator: float, denominator: float, ndigits: int = 2) -> float:
    """Return numerator/denominator as a rounded percentage.

    An empty denominator counts as complete.
    """
    if denominator == 0:
        return 100.0
    return round(numerator / denominator * 100, ndigits)


def pretty_number(number: float) -> str:
    """Insert thousands separators: 1234567 -> '1,234,567'."""
    return f"{number:,}"


def humanize_bytes(num_bytes: float, ndigits: int = 1) -> str:
    """Render a byte count with a binary unit, e.g. '1.5 MiB'."""
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    return f"{num_bytes / 1024**exponent:.{ndigits}f} {SIZE_UNITS[exponent]}"
