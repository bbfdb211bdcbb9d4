"""Tests for the DataStore module."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from occurrence_pipeline.store import DataStore


class TestDataStoreInit:
    """Test DataStore initialization."""

    def test_creates_tier_paths(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.base == tmp_path
        assert store.raw == tmp_path / "raw"
        assert store.secondary == tmp_path / "secondary"
        assert store.processed == tmp_path / "processed"


class TestDataStoreWrite:
    """Test writing CSV tables."""

    def test_write_creates_file(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.write_table(Path("raw/test.csv"), pd.DataFrame({"a": [1]}))
        assert path == tmp_path / "raw" / "test.csv"
        assert path.exists()

    def test_write_has_header_and_no_index(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(Path("processed/t.csv"), pd.DataFrame({"a": [1, 2], "b": ["x", "y"]}))

        lines = (tmp_path / "processed" / "t.csv").read_text().splitlines()
        assert lines == ["a,b", "1,x", "2,y"]

    def test_write_creates_parent_dirs(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(Path("secondary/deep/nested.csv"), pd.DataFrame({"a": [1]}))
        assert (tmp_path / "secondary" / "deep" / "nested.csv").exists()

    def test_write_overwrites(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(Path("raw/t.csv"), pd.DataFrame({"a": [1, 2, 3]}))
        store.write_table(Path("raw/t.csv"), pd.DataFrame({"a": [9]}))

        result = store.read_table(Path("raw/t.csv"))
        assert result is not None
        assert list(result["a"]) == [9]

    def test_write_empty_table(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(Path("raw/empty.csv"), pd.DataFrame(columns=["a", "b"]))
        assert (tmp_path / "raw" / "empty.csv").read_text().strip() == "a,b"


class TestDataStoreRead:
    """Test reading CSV tables."""

    def test_read_round_trips_values(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        frame = pd.DataFrame({"decimalLatitude": [45.5], "species": ["Danaus plexippus"]})
        store.write_table(Path("raw/t.csv"), frame)

        result = store.read_table(Path("raw/t.csv"))
        assert result is not None
        pd.testing.assert_frame_equal(result, frame)

    def test_read_missing_file(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.read_table(Path("nonexistent.csv")) is None


class TestDataStorePaths:
    """Test path resolution."""

    def test_file_path_returns_path(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        store.write_table(Path("processed/t.csv"), pd.DataFrame({"a": [1]}))

        result = store.file_path(Path("processed/t.csv"))
        assert result is not None
        assert result.exists()

    def test_file_path_missing(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        assert store.file_path(Path("processed/missing.csv")) is None

    def test_absolute_path_inside_base(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path)
        path = store.write_table(tmp_path / "raw" / "abs.csv", pd.DataFrame({"a": [1]}))
        assert path == tmp_path / "raw" / "abs.csv"

    def test_rejects_escaping_path(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path / "data")
        with pytest.raises(ValueError, match="escapes"):
            store.write_table(Path("../outside.csv"), pd.DataFrame({"a": [1]}))

    def test_rejects_absolute_outside(self, tmp_path: Path) -> None:
        store = DataStore(tmp_path / "data")
        with pytest.raises(ValueError, match="escapes"):
            store.read_table(tmp_path / "other.csv")
