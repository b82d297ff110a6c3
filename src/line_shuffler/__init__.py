"""Line Shuffler - Shuffle the lines of files too large to fit in memory."""

from line_shuffler.errors import (
    ConfigError,
    DecodeError,
    PartitionIOError,
    ShuffleError,
    ShuffleInterrupted,
)
from line_shuffler.runner import ShuffleJob, ShuffleResult, main_shuffle, shuffle_file

__all__ = [
    "ConfigError",
    "DecodeError",
    "PartitionIOError",
    "ShuffleError",
    "ShuffleInterrupted",
    "ShuffleJob",
    "ShuffleResult",
    "main_shuffle",
    "shuffle_file",
]
