"""Phase 2: shuffling one partition in memory."""

import os
import random
import stat
import tempfile
import time

from line_shuffler.errors import PartitionIOError
from line_shuffler.shuffle.types import BUFFER_SIZE, TMP_PREFIX, PartitionResult


def line_terminator(line: bytes) -> bytes:
    """Return the trailing b"\\r\\n" or b"\\n" of line, or b"" if it has none."""
    if line.endswith(b"\r\n"):
        return b"\r\n"
    if line.endswith(b"\n"):
        return b"\n"
    return b""


def permute_lines(lines: list[bytes], rng: random.Random) -> list[bytes]:
    """
    Shuffle lines in place with a Fisher-Yates pass and return them.

    A final line without a terminator (the end of an unterminated input) may
    not stay in the middle of the output, where it would run into its
    neighbour. After the shuffle it swaps terminators with whichever line
    lands last: that line gives up its whole terminator (b"\\n" or b"\\r\\n")
    and the unterminated line takes it. Line contents, terminator styles and
    the byte total are unchanged.
    """
    unterminated = bool(lines) and not lines[-1].endswith(b"\n")

    rng.shuffle(lines)

    if unterminated and lines[-1].endswith(b"\n"):
        # The only line without b"\n" is the one that ended the partition.
        index = next(i for i, line in enumerate(lines) if not line.endswith(b"\n"))
        last = lines[-1]
        terminator = line_terminator(last)
        lines[index] += terminator
        lines[-1] = last[: -len(terminator)]
    return lines


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def shuffle_partition(path: str, seed: int | None = None) -> PartitionResult:
    """
    Load the partition at path, permute its lines uniformly and rewrite it.

    The permuted lines go to a temporary file next to the partition, which
    then replaces it atomically: a failed rewrite leaves the previous
    contents in place and raises PartitionIOError. Memory use is the size
    of this one partition.
    """
    start = time.perf_counter()
    path = str(path)
    rng = random.Random(seed)

    try:
        with open(path, "rb", buffering=BUFFER_SIZE) as handle:
            lines = handle.readlines()
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except OSError as exc:
        raise PartitionIOError(path, exc.strerror or str(exc)) from exc

    permute_lines(lines, rng)
    num_bytes = sum(len(line) for line in lines)

    directory, name = os.path.split(os.path.abspath(path))
    try:
        fd, tmp_path = tempfile.mkstemp(prefix=f"{TMP_PREFIX}{name}.", dir=directory)
    except OSError as exc:
        raise PartitionIOError(path, exc.strerror or str(exc)) from exc

    try:
        with open(fd, "wb", buffering=BUFFER_SIZE) as out:
            out.writelines(lines)
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        _discard(tmp_path)
        raise PartitionIOError(path, exc.strerror or str(exc)) from exc
    except BaseException:
        _discard(tmp_path)
        raise

    return PartitionResult(
        path=path,
        lines=len(lines),
        bytes=num_bytes,
        seconds=time.perf_counter() - start,
    )
