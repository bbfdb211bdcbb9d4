"""Audit trail of row counts through the pipeline.

Each stage that receives a table records how many rows went in and how many
came out, so the exported trail shows exactly where records were dropped.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

import pandas as pd

from occurrence_pipeline.schemas import AUDIT_COLUMNS


@dataclass(frozen=True)
class AuditEntry:
    """Row counts for one pipeline step."""

    step: str
    records_before: int
    records_after: int
    description: str

    @property
    def removed(self) -> int:
        return self.records_before - self.records_after


class AuditTrail:
    """Ordered, append-only list of :class:`AuditEntry`."""

    def __init__(self) -> None:
        self._entries: list[AuditEntry] = []

    def record(self, step: str, before: int, after: int, description: str) -> AuditEntry:
        """Append an entry.

        Raises:
            ValueError: If a count is negative or the step added rows.
        """
        if before < 0 or after < 0:
            msg = f"{step}: row counts must be non-negative ({before} -> {after})"
            raise ValueError(msg)
        if after > before:
            msg = f"{step}: row count increased from {before} to {after}"
            raise ValueError(msg)
        entry = AuditEntry(step, before, after, description)
        self._entries.append(entry)
        return entry

    def finalize(self, final_count: int) -> tuple[AuditEntry, ...]:
        """Close the trail with a summary entry spanning the whole run.

        The summary's ``records_before`` is the first entry's input count.
        """
        acquired = self._entries[0].records_before if self._entries else final_count
        self.record(
            "Final state",
            acquired,
            final_count,
            f"Retained {final_count} of {acquired} acquired records",
        )
        return self.entries

    @property
    def entries(self) -> tuple[AuditEntry, ...]:
        return tuple(self._entries)

    def to_frame(self) -> pd.DataFrame:
        """Flat table with one row per entry."""
        return pd.DataFrame([asdict(e) for e in self._entries], columns=AUDIT_COLUMNS)

    def __len__(self) -> int:
        return len(self._entries)
