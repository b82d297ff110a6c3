"""Job configuration and run results."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from line_shuffler.errors import ConfigError
from line_shuffler.partition.partition_set import max_open_files
from line_shuffler.partition.types import DEFAULT_PARTITION_COUNT, FD_HEADROOM, DispersalResult
from line_shuffler.progress.types import DEFAULT_PROGRESS_INTERVAL


@dataclass(frozen=True)
class ShuffleJob:
    """
    Configuration of one shuffle run.

    workers bounds how many partitions are in memory at once (None: one per
    processing unit). seed makes a run reproducible. progress_interval of
    None disables progress output.
    """

    input_path: str
    partition_count: int = DEFAULT_PARTITION_COUNT
    output_directory: str = field(default_factory=os.getcwd)
    workers: int | None = None
    seed: int | None = None
    progress_interval: float | None = DEFAULT_PROGRESS_INTERVAL

    def validate(self) -> None:
        """Raise ConfigError for unusable parameters; creates the output directory."""
        count = self.partition_count
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ConfigError(f"partition count must be a positive integer, got {count!r}")

        if self.workers is not None and self.workers < 1:
            raise ConfigError(f"workers must be a positive integer, got {self.workers!r}")

        if self.progress_interval is not None and self.progress_interval <= 0:
            raise ConfigError(f"progress interval must be positive, got {self.progress_interval!r}")

        limit = max_open_files()
        if limit is not None and count + FD_HEADROOM > limit:
            raise ConfigError(
                f"{count} partitions need {count + FD_HEADROOM} open files, "
                f"but the limit is {limit} (raise it with `ulimit -n` or use fewer partitions)"
            )

        directory = Path(self.output_directory)
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"cannot create output directory {directory}: {exc.strerror or exc}") from exc
        if not directory.is_dir() or not os.access(directory, os.W_OK | os.X_OK):
            raise ConfigError(f"output directory {directory} is not writable")


@dataclass
class ShuffleResult:
    """Outcome of a completed run."""

    dispersal: DispersalResult
    disperse_seconds: float
    shuffle_seconds: float
    total_seconds: float

    @property
    def paths(self) -> list[Path]:
        return self.dispersal.paths

    @property
    def total_lines(self) -> int:
        return self.dispersal.total_lines

    @property
    def total_bytes(self) -> int:
        return self.dispersal.total_bytes
