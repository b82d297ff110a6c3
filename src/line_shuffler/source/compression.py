"""Compressed input detection and decoding."""

import bz2
import gzip
import os
from collections.abc import Callable
from typing import BinaryIO, TypeAlias

Decoder: TypeAlias = Callable[[BinaryIO], BinaryIO]

# Known compression suffixes and the decoder wrapping a raw file object.
DECODERS: dict[str, Decoder] = {
    ".gz": lambda raw: gzip.GzipFile(fileobj=raw, mode="rb"),
    ".bz2": lambda raw: bz2.BZ2File(raw, mode="rb"),
}


def compression_suffix(path: str) -> str | None:
    """Return the compression suffix of path, or None for plain files."""
    suffix = os.path.splitext(path)[1].lower()
    return suffix if suffix in DECODERS else None


def get_decoder(path: str) -> Decoder | None:
    """Return the decoder for path, or None when it is not compressed."""
    suffix = compression_suffix(path)
    return DECODERS[suffix] if suffix is not None else None
