"""Line sources: plain and compressed input readers."""

from line_shuffler.source.compression import compression_suffix
from line_shuffler.source.reader import LineSource

__all__ = ["LineSource", "compression_suffix"]
