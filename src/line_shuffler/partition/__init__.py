"""Partition naming, the partition set and phase 1 dispersal."""

from line_shuffler.partition.disperse import disperse
from line_shuffler.partition.naming import partition_paths
from line_shuffler.partition.partition_set import PartitionSet

__all__ = ["PartitionSet", "disperse", "partition_paths"]
