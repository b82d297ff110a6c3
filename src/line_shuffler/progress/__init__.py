"""Phase-scoped progress counters and their background reporter."""

from line_shuffler.progress.reporter import ProgressReporter, render
from line_shuffler.progress.stats import ProgressStats

__all__ = ["ProgressReporter", "ProgressStats", "render"]
