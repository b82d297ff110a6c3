"""Phase 1: random dispersal of input lines into partitions."""

import logging

from line_shuffler.partition.partition_set import PartitionSet
from line_shuffler.partition.types import DispersalResult
from line_shuffler.progress.stats import ProgressStats
from line_shuffler.source.reader import LineSource

logger = logging.getLogger(__name__)


def disperse(
    source: LineSource,
    partitions: PartitionSet,
    stats: ProgressStats | None = None,
) -> DispersalResult:
    """
    Append every line of source to one uniformly chosen partition.

    Each line gets an independent draw, so partition sizes are binomial
    rather than equal. Lines keep their relative order inside a partition;
    the shuffle happens in phase 2. The source is opened before the
    partitions so a missing input leaves no output files behind. Both are
    closed on return and on failure.
    """
    with source, partitions:
        route = partitions.route
        write = partitions.write
        for line in source:
            write(route(line), line)
            if stats is not None:
                stats.record(len(line))

    result = partitions.result()
    logger.debug(
        "Dispersed %d lines (%d bytes) from %s into %d partitions",
        result.total_lines,
        result.total_bytes,
        source.path,
        len(partitions),
    )
    return result
