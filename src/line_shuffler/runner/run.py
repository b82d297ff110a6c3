"""Orchestration of the two-phase shuffle."""

import contextlib
import logging
import random
import sys
import time
from concurrent.futures import as_completed
from pathlib import Path
from typing import TextIO

from line_shuffler.errors import ShuffleInterrupted
from line_shuffler.formatting import humanize_bytes, pretty_number, seconds_to_time
from line_shuffler.partition.disperse import disperse
from line_shuffler.partition.naming import partition_paths
from line_shuffler.partition.partition_set import PartitionSet
from line_shuffler.partition.types import DispersalResult
from line_shuffler.progress.reporter import ProgressReporter
from line_shuffler.progress.stats import ProgressStats
from line_shuffler.runner.execution import LS_EXECUTOR_ENV, ExecutionPlan, plan_execution
from line_shuffler.runner.types import ShuffleJob, ShuffleResult
from line_shuffler.shuffle.inplace import shuffle_partition
from line_shuffler.source.reader import LineSource

logger = logging.getLogger(__name__)


def _reporting(stats: ProgressStats, job: ShuffleJob, stream: TextIO | None):
    """Progress reporter scoped to one phase, or a no-op when disabled."""
    if job.progress_interval is None:
        return contextlib.nullcontext()
    return ProgressReporter(stats, interval=job.progress_interval, stream=stream)


def _shuffle_partitions(
    paths: list[str],
    seeds: list[int | None],
    plan: ExecutionPlan,
    stats: ProgressStats,
) -> None:
    """
    Shuffle every partition with at most plan.workers partitions in flight.

    The first failure cancels the partitions not yet started and is
    re-raised; partitions already rewritten stay shuffled.
    """
    executor = plan.create_executor()
    if executor is None:
        for path, seed in zip(paths, seeds):
            result = shuffle_partition(path, seed)
            stats.record(result.bytes, lines=result.lines)
        return

    try:
        futures = [executor.submit(shuffle_partition, path, seed) for path, seed in zip(paths, seeds)]
        for future in as_completed(futures):
            result = future.result()
            stats.record(result.bytes, lines=result.lines)
            logger.debug("Shuffled %s: %d lines in %.2fs", Path(result.path).name, result.lines, result.seconds)
    except KeyboardInterrupt:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    executor.shutdown(wait=True)


def shuffle_file(job: ShuffleJob, progress_stream: TextIO | None = None) -> ShuffleResult:
    """
    Shuffle the lines of job.input_path into job.partition_count files.

    Two-phase algorithm:
    1. Disperse every line to a uniformly random partition (one sequential pass)
    2. Shuffle each partition in memory, in parallel across partitions

    Errors propagate unchanged after open handles are released. On
    KeyboardInterrupt the run stops and ShuffleInterrupted is raised; the
    output directory then holds whatever was already written, with no
    rollback: partitions may be dispersed but not yet shuffled.
    """
    plan = plan_execution(job.workers, job.partition_count)
    job.validate()
    total_start = time.perf_counter()

    input_path = str(Path(job.input_path).resolve())
    output_directory = Path(job.output_directory).resolve()
    paths = partition_paths(input_path, job.partition_count, output_directory)
    rng = random.Random(job.seed)

    logger.info("Input file:       %s", input_path)
    logger.info("Output directory: %s", output_directory)
    logger.info("Parts:            %d", job.partition_count)
    logger.debug("Partition shuffle: %s (%s to override)", plan.describe(), LS_EXECUTOR_ENV)

    try:
        # Phase 1: disperse lines to partitions.
        logger.info("Dispersing %s", Path(input_path).name)
        t1_start = time.perf_counter()
        with LineSource(input_path) as source:
            stats = ProgressStats(position=source.position, total=source.size)
            with _reporting(stats, job, progress_stream):
                dispersal: DispersalResult = disperse(source, PartitionSet(paths, rng), stats)
        t1 = time.perf_counter() - t1_start

        logger.info(
            "Dispersal done: %s lines (%s) into %d partitions in %.2fs",
            pretty_number(dispersal.total_lines),
            humanize_bytes(dispersal.total_bytes),
            len(paths),
            t1,
        )

        # Phase 2: shuffle each partition in memory.
        logger.info(
            "In-memory shuffle of %d files (largest %s)",
            len(paths),
            humanize_bytes(dispersal.largest_partition_bytes),
        )
        if job.seed is None:
            seeds: list[int | None] = [None] * len(paths)
        else:
            seeds = [rng.getrandbits(64) for _ in paths]

        t2_start = time.perf_counter()
        total_bytes = dispersal.total_bytes
        stats = ProgressStats(total=lambda: total_bytes)
        with _reporting(stats, job, progress_stream):
            _shuffle_partitions([str(p) for p in paths], seeds, plan, stats)
        t2 = time.perf_counter() - t2_start
    except KeyboardInterrupt as exc:
        raise ShuffleInterrupted(
            f"interrupted; partitions in {output_directory} may be dispersed but not shuffled"
        ) from exc

    total_time = time.perf_counter() - total_start
    logger.info("Shuffle done: %d partitions in %.2fs", len(paths), t2)
    if t1 + t2 > 0:
        logger.debug(
            "Timing breakdown: Disperse=%.2fs (%.0f%%), Shuffle=%.2fs (%.0f%%)",
            t1,
            100 * t1 / (t1 + t2),
            t2,
            100 * t2 / (t1 + t2),
        )
    logger.info("Total duration: %s", seconds_to_time(total_time))

    return ShuffleResult(
        dispersal=dispersal,
        disperse_seconds=t1,
        shuffle_seconds=t2,
        total_seconds=total_time,
    )


def main_shuffle(input_path: str, **options) -> None:
    """Run a job and print the partition paths to stdout."""
    result = shuffle_file(ShuffleJob(input_path=input_path, **options))
    for path in result.paths:
        print(path, file=sys.stdout)
