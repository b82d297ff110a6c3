"""Shared constants and snapshot type for progress reporting."""

from dataclasses import dataclass

# Seconds between two progress snapshots.
DEFAULT_PROGRESS_INTERVAL = 1.0

# Clears the current terminal line before redrawing it.
ESCAPE_SEQUENCE = "\r\033[K"

# Shown instead of a percentage when the input size is unknown.
UNKNOWN_PERCENTAGE = "??"


@dataclass(frozen=True, slots=True)
class ProgressSnapshot:
    """A consistent read of a phase's counters."""

    elapsed: float
    lines: int
    bytes: int
    position: int | None = None
    total: int | None = None
