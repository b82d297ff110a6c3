"""Choosing how phase 2 runs: in the main thread, on threads, or on processes."""

import os
import sys
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass

from line_shuffler.errors import ConfigError

# Environment variable forcing one execution mode.
LS_EXECUTOR_ENV = "LS_EXECUTOR"

SERIAL = "serial"
THREADS = "threads"
PROCESSES = "processes"
MODES = (SERIAL, THREADS, PROCESSES)


def default_workers() -> int:
    """Number of processing units available to this process."""
    try:
        return len(os.sched_getaffinity(0))
    except AttributeError:
        return os.cpu_count() or 1


def _shuffle_holds_gil() -> bool:
    # Random.shuffle is a Python-level loop, so threads only overlap the
    # file I/O of a partition unless the interpreter is free-threaded.
    is_gil_enabled = getattr(sys, "_is_gil_enabled", None)
    return is_gil_enabled is None or is_gil_enabled()


@dataclass(frozen=True, slots=True)
class ExecutionPlan:
    """How many partitions are shuffled at once, and on what."""

    mode: str
    workers: int

    def create_executor(self) -> Executor | None:
        """A pool sized to the plan, or None to shuffle in the calling thread."""
        if self.mode == THREADS:
            return ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="shuffle")
        if self.mode == PROCESSES:
            return ProcessPoolExecutor(max_workers=self.workers)
        return None

    def describe(self) -> str:
        if self.mode == SERIAL:
            return SERIAL
        return f"{self.mode} x{self.workers}"


def plan_execution(workers: int | None, partition_count: int) -> ExecutionPlan:
    """
    Decide how phase 2 runs for a job.

    The worker count defaults to the available CPUs and is capped at the
    partition count, since each worker holds one whole partition in memory
    and extra workers would sit idle. One worker means serial: a pool of one
    only adds pickling and start-up cost.

    LS_EXECUTOR forces a mode ("serial", "threads" or "processes"); "serial"
    is useful for debugging with breakpoints. Otherwise processes are used
    while the shuffle itself holds the GIL, and threads on free-threaded
    interpreters, where partitions need not be pickled between processes.

    Raises:
        ConfigError: LS_EXECUTOR names an unknown mode.
    """
    requested = os.environ.get(LS_EXECUTOR_ENV, "").strip().lower()
    if requested and requested not in MODES:
        raise ConfigError(f"{LS_EXECUTOR_ENV} must be one of {', '.join(MODES)}, got {requested!r}")

    count = workers if workers is not None else default_workers()
    count = max(1, min(count, partition_count))

    if requested:
        mode = requested
    elif count == 1:
        mode = SERIAL
    elif _shuffle_holds_gil():
        mode = PROCESSES
    else:
        mode = THREADS

    if mode == SERIAL:
        count = 1
    return ExecutionPlan(mode=mode, workers=count)
