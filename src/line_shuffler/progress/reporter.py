"""Periodic progress reporting on a background thread."""

import sys
import threading
from typing import Self, TextIO

from line_shuffler.formatting import humanize_bytes, percentage, pretty_number, seconds_to_time
from line_shuffler.progress.stats import ProgressStats
from line_shuffler.progress.types import (
    DEFAULT_PROGRESS_INTERVAL,
    ESCAPE_SEQUENCE,
    UNKNOWN_PERCENTAGE,
    ProgressSnapshot,
)


def render(snapshot: ProgressSnapshot, previous: ProgressSnapshot | None = None) -> str:
    """
    Format one snapshot line.

    Rates are measured since previous, or since the phase start when there
    is no previous snapshot.
    """
    if previous is None:
        previous = ProgressSnapshot(elapsed=0.0, lines=0, bytes=0)

    interval = snapshot.elapsed - previous.elapsed
    if interval > 0:
        bytes_per_second = (snapshot.bytes - previous.bytes) / interval
        lines_per_second = (snapshot.lines - previous.lines) / interval
    else:
        bytes_per_second = lines_per_second = 0.0

    if snapshot.position is None or snapshot.total is None:
        percent = UNKNOWN_PERCENTAGE
    else:
        percent = str(percentage(snapshot.position, snapshot.total))

    return " | ".join(
        [
            seconds_to_time(snapshot.elapsed),
            f"{humanize_bytes(snapshot.bytes)} [{humanize_bytes(bytes_per_second)}/s]",
            f"{pretty_number(snapshot.lines)} lines [{pretty_number(round(lines_per_second))} lines/s]",
            f"{percent}%",
        ]
    )


class ProgressReporter:
    """
    Writes a snapshot of stats every interval seconds until stopped.

    Bound to one phase: enter it when the phase starts and leave it when the
    phase ends. Leaving stops and joins the thread, then writes a final
    snapshot, whether the phase succeeded or not.
    """

    def __init__(
        self,
        stats: ProgressStats,
        interval: float = DEFAULT_PROGRESS_INTERVAL,
        stream: TextIO | None = None,
    ):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._stats = stats
        self._interval = interval
        self._stream = stream if stream is not None else sys.stderr
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._previous: ProgressSnapshot | None = None
        self._redraw = self._stream.isatty()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("reporter already started")
        self._thread = threading.Thread(target=self._run, name="progress-reporter", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the thread and write the final snapshot. Safe to call twice."""
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        self._emit(final=True)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _run(self) -> None:
        self._emit()
        while not self._stop.wait(self._interval):
            self._emit()

    def _emit(self, final: bool = False) -> None:
        snapshot = self._stats.snapshot()
        message = render(snapshot, self._previous)
        self._previous = snapshot

        if self._redraw:
            ending = "\n" if final else ""
            self._stream.write(f"{ESCAPE_SEQUENCE}{message}{ending}")
        else:
            self._stream.write(f"{message}\n")
        self._stream.flush()
