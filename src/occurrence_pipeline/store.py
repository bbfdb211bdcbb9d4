"""Flat-table data store.

Reads and writes CSV tables under a base directory, organized into tiers by
where they sit in the pipeline:
  - raw/: Occurrence records exactly as acquired from GBIF
  - secondary/: Supporting datasets joined onto occurrences (covariates)
  - processed/: Pipeline outputs (cleaned table, audit trail, completeness)

Every table is written with a header row and without a row index column.
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003

import pandas as pd


class DataStore:
    """Manages read/write of CSV tables under one base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.raw = base_dir / "raw"
        self.secondary = base_dir / "secondary"
        self.processed = base_dir / "processed"

    def write_table(self, path: Path, frame: pd.DataFrame) -> Path:
        """Write a table as CSV.

        Args:
            path: Relative path under base_dir (e.g. ``raw/monarch_raw_data.csv``).
            frame: Table to write. The index is not written.

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(full, index=False)
        return full

    def read_table(self, path: Path) -> pd.DataFrame | None:
        """Read a CSV table, or None if the file doesn't exist."""
        full = self._resolve(path)
        if not full.exists():
            return None
        return pd.read_csv(full, low_memory=False)

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
