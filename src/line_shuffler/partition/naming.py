"""Output path naming for partition files."""

import os
from collections.abc import Iterator
from pathlib import Path

from line_shuffler.source.compression import compression_suffix


def next_index(index: str) -> str:
    """Increment a decimal string keeping its width: '009' -> '010'."""
    digits = list(index)
    for pos in range(len(digits) - 1, -1, -1):
        if digits[pos] != "9":
            digits[pos] = chr(ord(digits[pos]) + 1)
            return "".join(digits)
        digits[pos] = "0"
    return "1" + "".join(digits)


def iter_indices(count: int) -> Iterator[str]:
    """Yield count zero-padded indices, padded to the digit count of count."""
    index = "0" * len(str(count))
    for _ in range(count):
        yield index
        index = next_index(index)


def split_name(input_path: str) -> tuple[str, str]:
    """
    Split an input file name into (stem, extension) for output naming.

    Compression suffixes are dropped and the inner extension is used:
    'data.tsv.gz' -> ('data', '.tsv').
    """
    name = os.path.basename(input_path)
    stem, ext = os.path.splitext(name)
    if compression_suffix(name) is not None:
        stem, ext = os.path.splitext(stem)
    return stem, ext


def partition_paths(input_path: str, count: int, output_directory: str | Path) -> list[Path]:
    """Return the count output paths: <stem>.<index><ext> in output_directory."""
    stem, ext = split_name(str(input_path))
    directory = Path(output_directory)
    return [directory / f"{stem}.{index}{ext}" for index in iter_indices(count)]
