"""Shared constants and result type for partition shuffling."""

from dataclasses import dataclass

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024

# Prefix of the temporary file a partition is rewritten into.
TMP_PREFIX = ".shuffling-"


@dataclass(frozen=True, slots=True)
class PartitionResult:
    """Result of shuffling a single partition."""

    path: str
    lines: int
    bytes: int
    seconds: float
