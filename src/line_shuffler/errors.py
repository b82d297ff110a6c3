"""Error taxonomy for shuffle runs."""


class ShuffleError(Exception):
    """Base class for all shuffle failures."""


class ConfigError(ShuffleError, ValueError):
    """Invalid job parameters, raised before any output is created."""


class _PathError(ShuffleError, OSError):
    """An I/O failure tied to one file."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
        self.filename = path

    def __str__(self) -> str:
        return f"{self.path}: {self.reason}"

    def __reduce__(self):
        # Worker processes send these back to the coordinator pickled.
        return type(self), (self.path, self.reason)


class DecodeError(_PathError):
    """A compressed input could not be decompressed."""

    def __str__(self) -> str:
        return f"cannot decompress {self.path}: {self.reason}"


class PartitionIOError(_PathError):
    """Reading or writing a partition file failed."""


class ShuffleInterrupted(ShuffleError):
    """The run was cancelled from outside (e.g. Ctrl-C)."""
