"""Counters shared between a running phase and its progress reporter."""

import threading
import time
from typing import TypeAlias
from collections.abc import Callable

from line_shuffler.progress.types import ProgressSnapshot

Probe: TypeAlias = Callable[[], int | None]


class ProgressStats:
    """
    Line and byte counters for one phase.

    The phase calls record(); the reporter calls snapshot() from its own
    thread. position and total are optional probes, e.g. a source's byte
    offset and file size. Without a position probe, the byte counter is the
    position, which suits phases with a known total amount of work.
    """

    def __init__(self, position: Probe | None = None, total: Probe | None = None):
        self._position = position
        self._total = total
        self._lock = threading.Lock()
        self.lines = 0
        self.bytes = 0
        self.started_at = time.monotonic()

    def record(self, num_bytes: int, lines: int = 1) -> None:
        with self._lock:
            self.lines += lines
            self.bytes += num_bytes

    def elapsed(self) -> float:
        return time.monotonic() - self.started_at

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            lines, num_bytes = self.lines, self.bytes
        total = self._total() if self._total is not None else None
        if self._position is not None:
            position = self._position()
        else:
            position = num_bytes if total is not None else None
        return ProgressSnapshot(
            elapsed=self.elapsed(),
            lines=lines,
            bytes=num_bytes,
            position=position,
            total=total,
        )
