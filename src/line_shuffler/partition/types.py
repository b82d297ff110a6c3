"""Shared constants and metadata structures for partitioning."""

from dataclasses import dataclass, field
from pathlib import Path

# Default number of partitions a job disperses into.
DEFAULT_PARTITION_COUNT = 128

# Per-handle write buffer; all N handles are open at once during dispersal.
PARTITION_BUFFER_SIZE = 64 * 1024

# Descriptors kept free beyond the partition handles (input, stdio, logging).
FD_HEADROOM = 16


@dataclass
class Partition:
    """One partition file and what has been written to it."""

    path: Path
    lines: int = 0
    bytes: int = 0


@dataclass
class DispersalResult:
    """Outcome of the dispersal pass."""

    partitions: list[Partition] = field(default_factory=list)

    @property
    def paths(self) -> list[Path]:
        return [p.path for p in self.partitions]

    @property
    def total_lines(self) -> int:
        return sum(p.lines for p in self.partitions)

    @property
    def total_bytes(self) -> int:
        return sum(p.bytes for p in self.partitions)

    @property
    def largest_partition_bytes(self) -> int:
        return max((p.bytes for p in self.partitions), default=0)
