"""Shared constants for line sources."""

# 1MB buffer for efficient I/O.
BUFFER_SIZE = 1024 * 1024
