"""Data quality assessment of a cleaned occurrence table."""

from __future__ import annotations

from typing import Any

import pandas as pd

from occurrence_pipeline.schemas import EVENT_DATE, SPECIES


def completeness(frame: pd.DataFrame) -> pd.DataFrame:
    """Missing-value counts per column.

    Returns:
        Table with ``variable``, ``missing_count`` and ``missing_percent``
        (rounded to 2 decimals; 0 for an empty table).
    """
    missing = frame.isna().sum()
    total = len(frame)
    percent = (missing / total * 100).round(2) if total else missing * 0.0
    return pd.DataFrame(
        {
            "variable": list(frame.columns),
            "missing_count": missing.astype(int).to_list(),
            "missing_percent": percent.to_list(),
        }
    )


def top_counts(frame: pd.DataFrame, column: str, n: int = 10) -> dict[str, int]:
    """The ``n`` most frequent values of ``column``, most frequent first.

    Returns an empty dict when the column is absent.
    """
    if column not in frame.columns:
        return {}
    counts = frame[column].dropna().value_counts().head(n)
    return {str(k): int(v) for k, v in counts.items()}


def value_counts_sorted(frame: pd.DataFrame, column: str) -> dict[str, int]:
    """Counts per value of ``column`` ordered by value (e.g. per year)."""
    if column not in frame.columns:
        return {}
    counts = frame[column].dropna().value_counts().sort_index()
    return {_label(k): int(v) for k, v in counts.items()}


def summary_stats(frame: pd.DataFrame) -> dict[str, Any]:
    """Headline numbers for a report: counts, date span, temperature range."""
    stats: dict[str, Any] = {
        "records": len(frame),
        "species": int(frame[SPECIES].nunique()) if SPECIES in frame.columns else 0,
        "date_start": None,
        "date_end": None,
        "mean_temp": None,
    }

    if EVENT_DATE in frame.columns:
        dates = frame[EVENT_DATE].dropna()
        if not dates.empty:
            stats["date_start"] = str(min(dates))
            stats["date_end"] = str(max(dates))

    if "mean_temp" in frame.columns:
        temps = pd.to_numeric(frame["mean_temp"], errors="coerce").dropna()
        if not temps.empty:
            stats["mean_temp"] = {
                "mean": round(float(temps.mean()), 2),
                "min": round(float(temps.min()), 2),
                "max": round(float(temps.max()), 2),
            }

    return stats


def _label(value: Any) -> str:
    """Render whole floats (years read back from CSV) without a trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
