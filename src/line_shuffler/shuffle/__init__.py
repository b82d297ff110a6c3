"""In-memory shuffling of individual partitions."""

from line_shuffler.shuffle.inplace import permute_lines, shuffle_partition
from line_shuffler.shuffle.types import PartitionResult

__all__ = ["PartitionResult", "permute_lines", "shuffle_partition"]
