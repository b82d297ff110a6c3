"""Streaming line reader over plain or compressed files."""

import io
import os
import stat
import zlib
from collections.abc import Iterator
from typing import BinaryIO, Self

from line_shuffler.errors import DecodeError
from line_shuffler.source.compression import get_decoder
from line_shuffler.source.types import BUFFER_SIZE

# Errors raised by the gzip/bz2 decoders on corrupt or truncated data.
_DECODE_ERRORS = (EOFError, zlib.error)


class LineSource:
    """
    Sequential reader yielding raw lines, terminators included.

    Compressed inputs (.gz, .bz2) are decoded transparently. Iteration is
    single-pass. position() and size() describe the underlying file and
    return None when it is not a regular file (pipes, FIFOs, devices).
    """

    def __init__(self, path: str):
        self.path = str(path)
        self._raw: BinaryIO | None = None
        self._stream: BinaryIO | None = None
        self._size: int | None = None
        self._closed_position: int | None = None
        self._compressed = get_decoder(self.path) is not None

    def open(self) -> Self:
        """Open the underlying file; raises OSError naming the path."""
        raw = open(self.path, "rb", buffering=0)  # noqa: SIM115
        try:
            info = os.fstat(raw.fileno())
            if stat.S_ISREG(info.st_mode):
                self._size = info.st_size

            decoder = get_decoder(self.path)
            if decoder is None:
                self._stream = io.BufferedReader(raw, buffer_size=BUFFER_SIZE)
            else:
                self._stream = decoder(io.BufferedReader(raw, buffer_size=BUFFER_SIZE))
        except BaseException:
            raw.close()
            raise

        self._raw = raw
        return self

    def close(self) -> None:
        raw, stream = self._raw, self._stream
        if raw is not None and self._size is not None:
            self._closed_position = raw.tell()
        self._raw = self._stream = None
        if stream is not None:
            stream.close()
        if raw is not None:
            raw.close()

    def __enter__(self) -> Self:
        if self._stream is None:
            self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __iter__(self) -> Iterator[bytes]:
        if self._stream is None:
            raise ValueError(f"{self.path} is not open")
        if not self._compressed:
            yield from self._stream
            return

        try:
            yield from self._stream
        except _DECODE_ERRORS as exc:
            raise DecodeError(self.path, str(exc) or type(exc).__name__) from exc
        except OSError as exc:
            # Decoders report bad data as OSError without an errno.
            if exc.errno is not None:
                raise
            raise DecodeError(self.path, str(exc)) from exc

    def size(self) -> int | None:
        """Total size of the underlying file in bytes, if known."""
        return self._size

    def position(self) -> int | None:
        """Current byte offset in the underlying file, if known.

        For compressed inputs this is the offset into the compressed data.
        The offset runs ahead of the consumed lines by at most one buffer.
        """
        raw = self._raw
        if raw is None:
            return self._closed_position
        if self._size is None:
            return None
        try:
            return raw.tell()
        except (OSError, ValueError):
            return None
