"""Tests for the end-to-end shuffle run."""

import bz2
import gzip
import io
import tempfile
from collections import Counter
from pathlib import Path

import pytest

from line_shuffler import (
    ConfigError,
    PartitionIOError,
    ShuffleInterrupted,
    ShuffleJob,
    shuffle_file,
)
from line_shuffler.runner import run, types
from line_shuffler.runner.execution import LS_EXECUTOR_ENV


def write_lines(path: Path, count: int) -> list[bytes]:
    lines = [f"record {i:06d}\t{'z' * (i % 11)}\n".encode() for i in range(count)]
    path.write_bytes(b"".join(lines))
    return lines


def read_partitions(paths: list[Path]) -> list[list[bytes]]:
    partitions = []
    for path in paths:
        with open(path, "rb") as handle:
            partitions.append(handle.readlines())
    return partitions


def make_job(input_path: Path, out_dir: Path, **options) -> ShuffleJob:
    options.setdefault("progress_interval", None)
    return ShuffleJob(input_path=str(input_path), output_directory=str(out_dir), **options)


@pytest.fixture(autouse=True)
def thread_executor(monkeypatch) -> None:
    monkeypatch.setenv(LS_EXECUTOR_ENV, "threads")


class TestShuffleFile:
    """Test cases for shuffle_file."""

    @pytest.mark.parametrize("count", [1, 5, 128])
    def test_conservation_and_naming(self, count) -> None:
        """Test that N files are created and hold exactly the input lines."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            lines = write_lines(input_path, 2000)
            out_dir = Path(tmp_dir) / "out"

            result = shuffle_file(make_job(input_path, out_dir, partition_count=count))

            width = len(str(count))
            expected = {f"corpus.{i:0{width}d}.txt" for i in range(count)}
            assert {path.name for path in out_dir.iterdir()} == expected
            assert len(result.paths) == count

            partitions = read_partitions(result.paths)
            assert sum(len(p) for p in partitions) == 2000 == result.total_lines
            assert sum(path.stat().st_size for path in result.paths) == input_path.stat().st_size
            assert Counter(line for p in partitions for line in p) == Counter(lines)

    def test_single_partition_is_shuffled_input(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            lines = write_lines(input_path, 500)

            result = shuffle_file(make_job(input_path, tmp_dir, partition_count=1, seed=4))

            (content,) = read_partitions(result.paths)
            assert sorted(content) == sorted(lines)
            assert content != lines

    def test_example_scenario(self) -> None:
        """Test eight lines into two partitions, each a permutation of its split."""
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "numbers.txt"
            input_path.write_bytes(b"1\n2\n3\n4\n5\n6\n7\n8\n")

            result = shuffle_file(make_job(input_path, tmp_dir, partition_count=2, seed=11))

            first, second = read_partitions(result.paths)
            assert [p.name for p in result.paths] == ["numbers.0.txt", "numbers.1.txt"]
            assert not set(first) & set(second)
            assert sorted(first + second) == [f"{i}\n".encode() for i in range(1, 9)]
            assert [p.lines for p in result.dispersal.partitions] == [len(first), len(second)]

    def test_empty_input(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "empty.txt"
            input_path.write_bytes(b"")

            result = shuffle_file(make_job(input_path, Path(tmp_dir) / "out", partition_count=5))

            assert len(result.paths) == 5
            assert all(path.read_bytes() == b"" for path in result.paths)
            assert result.total_lines == 0

    def test_rerun_gives_new_order_same_content(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            lines = write_lines(input_path, 1000)

            runs = []
            for name in ("first", "second"):
                result = shuffle_file(make_job(input_path, Path(tmp_dir) / name, partition_count=4))
                runs.append(read_partitions(result.paths))

            flattened = [[line for p in partitions for line in p] for partitions in runs]
            assert Counter(flattened[0]) == Counter(flattened[1]) == Counter(lines)
            assert flattened[0] != flattened[1]

    def test_seed_reproduces_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 300)

            runs = []
            for name in ("first", "second"):
                result = shuffle_file(make_job(input_path, Path(tmp_dir) / name, partition_count=3, seed=99))
                runs.append([path.read_bytes() for path in result.paths])

            assert runs[0] == runs[1]

    @pytest.mark.parametrize(("suffix", "opener"), [(".gz", gzip.open), (".bz2", bz2.open)])
    def test_compressed_input_gives_plain_output(self, suffix, opener) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / f"corpus.tsv{suffix}"
            lines = [f"{i}\tvalue\n".encode() for i in range(400)]
            with opener(input_path, "wb") as handle:
                handle.writelines(lines)
            out_dir = Path(tmp_dir) / "out"

            result = shuffle_file(make_job(input_path, out_dir, partition_count=3))

            assert [p.name for p in result.paths] == ["corpus.0.tsv", "corpus.1.tsv", "corpus.2.tsv"]
            assert sorted(line for p in read_partitions(result.paths) for line in p) == sorted(lines)

    @pytest.mark.parametrize("mode", ["serial", "processes"])
    def test_executor_modes(self, monkeypatch, mode) -> None:
        monkeypatch.setenv(LS_EXECUTOR_ENV, mode)
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            lines = write_lines(input_path, 600)

            result = shuffle_file(make_job(input_path, tmp_dir, partition_count=3, workers=2))

            assert Counter(line for p in read_partitions(result.paths) for line in p) == Counter(lines)

    def test_reports_progress_for_both_phases(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 1000)
            stream = io.StringIO()

            shuffle_file(
                make_job(input_path, tmp_dir, partition_count=3, progress_interval=0.01),
                progress_stream=stream,
            )

            final_lines = [line for line in stream.getvalue().splitlines() if "| 1,000 lines [" in line]
            assert len(final_lines) >= 2
            assert all(line.endswith("100.0%") for line in final_lines)


class TestShuffleFileErrors:
    """Test cases for configuration, I/O and interrupt failures."""

    @pytest.mark.parametrize(
        "options",
        [
            {"partition_count": 0},
            {"partition_count": -3},
            {"workers": 0},
            {"progress_interval": 0},
        ],
    )
    def test_invalid_parameters(self, options) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 10)
            out_dir = Path(tmp_dir) / "out"

            with pytest.raises(ConfigError):
                shuffle_file(make_job(input_path, out_dir, **options))

            assert not out_dir.exists()

    def test_unknown_executor_mode(self, monkeypatch) -> None:
        monkeypatch.setenv(LS_EXECUTOR_ENV, "fibers")
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 10)
            out_dir = Path(tmp_dir) / "out"

            with pytest.raises(ConfigError, match="fibers"):
                shuffle_file(make_job(input_path, out_dir, partition_count=2))

            assert not out_dir.exists()

    def test_output_directory_is_a_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 10)

            with pytest.raises(ConfigError):
                shuffle_file(make_job(input_path, input_path, partition_count=2))

    def test_partition_count_over_file_limit(self, monkeypatch) -> None:
        monkeypatch.setattr(types, "max_open_files", lambda: 64)
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 10)

            with pytest.raises(ConfigError, match="limit is 64"):
                shuffle_file(make_job(input_path, tmp_dir, partition_count=128))

    def test_missing_input(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            out_dir = Path(tmp_dir) / "out"
            input_path = Path(tmp_dir) / "missing.txt"

            with pytest.raises(FileNotFoundError) as excinfo:
                shuffle_file(make_job(input_path, out_dir, partition_count=3))

            assert Path(excinfo.value.filename).name == "missing.txt"
            assert list(out_dir.iterdir()) == []

    def test_first_partition_failure_propagates(self, monkeypatch) -> None:
        def failing_shuffle(path, seed=None):
            raise PartitionIOError(path, "disk on fire")

        monkeypatch.setattr(run, "shuffle_partition", failing_shuffle)
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            write_lines(input_path, 100)

            with pytest.raises(PartitionIOError, match="disk on fire"):
                shuffle_file(make_job(input_path, tmp_dir, partition_count=4))

    def test_interrupt_leaves_dispersed_partitions(self, monkeypatch) -> None:
        """Test that an interrupt is reported and written output is kept."""
        monkeypatch.setenv(LS_EXECUTOR_ENV, "serial")

        def interrupted_shuffle(path, seed=None):
            raise KeyboardInterrupt

        monkeypatch.setattr(run, "shuffle_partition", interrupted_shuffle)
        with tempfile.TemporaryDirectory() as tmp_dir:
            input_path = Path(tmp_dir) / "corpus.txt"
            lines = write_lines(input_path, 100)
            out_dir = Path(tmp_dir) / "out"

            with pytest.raises(ShuffleInterrupted):
                shuffle_file(make_job(input_path, out_dir, partition_count=4))

            paths = sorted(out_dir.iterdir())
            assert len(paths) == 4
            assert Counter(line for p in read_partitions(paths) for line in p) == Counter(lines)
