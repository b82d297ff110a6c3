"""Job configuration, execution policy and the two-phase run."""

from line_shuffler.runner.run import main_shuffle, shuffle_file
from line_shuffler.runner.types import ShuffleJob, ShuffleResult

__all__ = ["ShuffleJob", "ShuffleResult", "main_shuffle", "shuffle_file"]
