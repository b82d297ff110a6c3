"""Tests for partition path naming."""

from pathlib import Path

from line_shuffler.partition.naming import iter_indices, next_index, partition_paths, split_name


def test_next_index_keeps_width() -> None:
    assert next_index("000") == "001"
    assert next_index("009") == "010"
    assert next_index("099") == "100"
    assert next_index("0") == "1"


def test_next_index_grows_past_width() -> None:
    assert next_index("9") == "10"
    assert next_index("999") == "1000"


def test_iter_indices_width_follows_count() -> None:
    assert list(iter_indices(1)) == ["0"]
    assert list(iter_indices(5)) == ["0", "1", "2", "3", "4"]
    assert list(iter_indices(10)) == [f"{i:02d}" for i in range(10)]

    indices = list(iter_indices(128))
    assert len(indices) == 128
    assert indices[0] == "000"
    assert indices[-1] == "127"
    assert indices == [f"{i:03d}" for i in range(128)]


def test_split_name() -> None:
    assert split_name("data.txt") == ("data", ".txt")
    assert split_name("/some/dir/data.tsv.gz") == ("data", ".tsv")
    assert split_name("corpus.json.bz2") == ("corpus", ".json")
    assert split_name("corpus.bz2") == ("corpus", "")
    assert split_name("noext") == ("noext", "")


def test_partition_paths() -> None:
    paths = partition_paths("/in/data.txt.gz", 3, "/out")
    assert paths == [Path("/out/data.0.txt"), Path("/out/data.1.txt"), Path("/out/data.2.txt")]


def test_partition_paths_are_unique_and_ordered() -> None:
    paths = partition_paths("lines.csv", 128, "out")
    assert len(set(paths)) == 128
    assert paths[0].name == "lines.000.csv"
    assert paths[127].name == "lines.127.csv"
    assert paths == sorted(paths)
