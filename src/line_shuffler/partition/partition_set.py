"""The set of partition files written during dispersal."""

import random
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import BinaryIO, Self

from line_shuffler.errors import PartitionIOError
from line_shuffler.partition.types import PARTITION_BUFFER_SIZE, DispersalResult, Partition


def max_open_files() -> int | None:
    """Soft limit on open file descriptors, or None where unavailable."""
    if sys.platform == "win32":
        return None

    import resource

    soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
    if soft == resource.RLIM_INFINITY:
        return None
    return soft


class PartitionSet:
    """
    Owns the N partition files and their write handles.

    All handles are opened up front, so the process holds N descriptors for
    the whole dispersal; N must fit within the open-file limit. Use as a
    context manager so every handle is flushed and closed on any exit path.
    """

    def __init__(self, paths: Iterable[Path], rng: random.Random | None = None):
        self.partitions = [Partition(Path(path)) for path in paths]
        if not self.partitions:
            raise ValueError("a partition set needs at least one path")
        self._rng = rng if rng is not None else random.Random()
        self._handles: list[BinaryIO] = []

    def __len__(self) -> int:
        return len(self.partitions)

    def open(self) -> Self:
        """Create the output directory and truncate/open every partition."""
        self.partitions[0].path.parent.mkdir(parents=True, exist_ok=True)
        try:
            for partition in self.partitions:
                handle = open(partition.path, "wb", buffering=PARTITION_BUFFER_SIZE)  # noqa: SIM115
                self._handles.append(handle)
        except BaseException:
            self.close_all()
            raise
        return self

    def __enter__(self) -> Self:
        if not self._handles:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close_all()
            return
        # Already failing: release the handles without masking the original error.
        try:
            self.close_all()
        except OSError:
            pass

    def route(self, line: bytes) -> int:
        """Pick a partition for line: a uniform draw, independent of content."""
        return self._rng.randrange(len(self.partitions))

    def write(self, index: int, line: bytes) -> None:
        """Append line verbatim to partition index."""
        partition = self.partitions[index]
        try:
            self._handles[index].write(line)
        except OSError as exc:
            raise PartitionIOError(str(partition.path), exc.strerror or str(exc)) from exc
        partition.lines += 1
        partition.bytes += len(line)

    def close_all(self) -> None:
        """Flush and close every handle, raising the first failure after all are closed."""
        first_error: PartitionIOError | None = None
        for partition, handle in zip(self.partitions, self._handles):
            try:
                handle.close()
            except OSError as exc:
                if first_error is None:
                    first_error = PartitionIOError(str(partition.path), exc.strerror or str(exc))
                    first_error.__cause__ = exc
        self._handles.clear()
        if first_error is not None:
            raise first_error

    def result(self) -> DispersalResult:
        return DispersalResult(partitions=list(self.partitions))
