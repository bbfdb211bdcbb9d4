"""Cleaning stages for integrated occurrence tables.

Each stage is a pure function ``DataFrame -> DataFrame`` that never mutates
its input. :func:`clean` runs them in a fixed order and records every
stage's row counts in an :class:`~occurrence_pipeline.analysis.audit.AuditTrail`.

Stage order:
  1. Column selection       keep allow-listed fields that are present
  2. Duplicate removal      first row per (lat, lon, eventDate) wins
  3. Uncertainty filter     drop coordinateUncertaintyInMeters > limit
  4. Missing coordinates    drop rows without latitude or longitude
  5. Coordinate validation  latitude in [-90, 90], longitude in [-180, 180]
  6. Date standardization   eventDate -> datetime.date or None
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

import pandas as pd

from occurrence_pipeline.analysis.audit import AuditTrail
from occurrence_pipeline.schemas import (
    CLEANED_FIELDS,
    EVENT_DATE,
    LATITUDE,
    LONGITUDE,
    UNCERTAINTY,
)

UNCERTAINTY_LIMIT_M = 10000.0
KEY_SEPARATOR = "_"

_ISO_DATE_PREFIX = r"^(\d{4}-\d{2}-\d{2})"


# =============================================================================
# Stages
# =============================================================================


def select_columns(frame: pd.DataFrame, columns: Sequence[str] = CLEANED_FIELDS) -> pd.DataFrame:
    """Project onto ``columns``, skipping any the table doesn't have."""
    keep = [c for c in columns if c in frame.columns]
    return frame.loc[:, keep].copy()


def dedup_key(frame: pd.DataFrame) -> pd.Series:
    """Synthetic record key ``"{lat}_{lon}_{eventDate}"``.

    Missing values render as ``"nan"``, so rows at one location that both
    lack a date share a key.
    """
    parts = [c for c in (LATITUDE, LONGITUDE, EVENT_DATE) if c in frame.columns]
    key = frame[parts[0]].astype(str)
    for col in parts[1:]:
        key = key + KEY_SEPARATOR + frame[col].astype(str)
    return key


def remove_duplicates(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep the first row of each dedup key, preserving row order."""
    return frame.loc[~dedup_key(frame).duplicated(keep="first")].copy()


def filter_uncertainty(
    frame: pd.DataFrame, limit_m: float = UNCERTAINTY_LIMIT_M
) -> pd.DataFrame:
    """Drop rows whose coordinate uncertainty exceeds ``limit_m``.

    Rows with no uncertainty value (or a non-numeric one) are kept.
    """
    if UNCERTAINTY not in frame.columns:
        return frame.copy()
    values = pd.to_numeric(frame[UNCERTAINTY], errors="coerce")
    return frame.loc[values.isna() | (values <= limit_m)].copy()


def drop_missing_coordinates(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.dropna(subset=[LATITUDE, LONGITUDE]).copy()


def filter_coordinate_range(frame: pd.DataFrame) -> pd.DataFrame:
    """Keep rows with latitude in [-90, 90] and longitude in [-180, 180]."""
    lat = pd.to_numeric(frame[LATITUDE], errors="coerce")
    lon = pd.to_numeric(frame[LONGITUDE], errors="coerce")
    return frame.loc[lat.between(-90, 90) & lon.between(-180, 180)].copy()


def parse_event_dates(values: pd.Series) -> pd.Series:
    """Parse the leading ``YYYY-MM-DD`` of each value into a ``date``.

    GBIF event dates may carry a time (``2021-07-15T10:30:00``) or be an
    interval (``2021-07-01/2021-07-31``); the first calendar date is used.
    Anything else, including impossible dates, becomes None.
    """
    leading = values.astype(str).str.extract(_ISO_DATE_PREFIX, expand=False)
    parsed = pd.to_datetime(leading, format="%Y-%m-%d", errors="coerce")
    dates: list[date | None] = [None if pd.isna(ts) else ts.date() for ts in parsed]
    return pd.Series(dates, index=values.index, dtype=object)


def normalize_dates(frame: pd.DataFrame) -> pd.DataFrame:
    if EVENT_DATE not in frame.columns:
        return frame.copy()
    return frame.assign(**{EVENT_DATE: parse_event_dates(frame[EVENT_DATE])})


# =============================================================================
# Pipeline
# =============================================================================


@dataclass(frozen=True)
class CleaningStage:
    """One named, audited step of :func:`clean`."""

    step: str
    description: str
    apply: Callable[[pd.DataFrame], pd.DataFrame]
    requires: str | None = None  # stage is skipped when this column is absent


def build_stages(uncertainty_limit_m: float = UNCERTAINTY_LIMIT_M) -> list[CleaningStage]:
    """The cleaning stages in execution order."""
    return [
        CleaningStage(
            "Column selection",
            "Kept key biodiversity and environmental fields",
            select_columns,
        ),
        CleaningStage(
            "Duplicate removal",
            "Removed duplicate records based on coordinates and date",
            remove_duplicates,
        ),
        CleaningStage(
            "Coordinate uncertainty filter",
            f"Removed records with coordinate uncertainty > {uncertainty_limit_m:g}m",
            lambda f: filter_uncertainty(f, uncertainty_limit_m),
            requires=UNCERTAINTY,
        ),
        CleaningStage(
            "Missing coordinate removal",
            "Removed records with missing coordinates",
            drop_missing_coordinates,
        ),
        CleaningStage(
            "Coordinate validation",
            "Validated coordinate ranges",
            filter_coordinate_range,
        ),
        CleaningStage(
            "Date standardization",
            "Parsed event dates; unparseable values set to missing",
            normalize_dates,
            requires=EVENT_DATE,
        ),
    ]


def clean(
    frame: pd.DataFrame,
    audit: AuditTrail,
    *,
    uncertainty_limit_m: float = UNCERTAINTY_LIMIT_M,
) -> pd.DataFrame:
    """
    Run every cleaning stage in order, auditing each one.

    Stages whose required column is absent are recorded as skipped with
    unchanged counts rather than failing.

    Args:
        frame: Integrated occurrence table.
        audit: Trail that receives one entry per stage.
        uncertainty_limit_m: Coordinate uncertainty threshold in meters.

    Returns:
        The cleaned table with a fresh 0..n-1 index.
    """
    current = frame
    for stage in build_stages(uncertainty_limit_m):
        before = len(current)
        if stage.requires is not None and stage.requires not in current.columns:
            audit.record(stage.step, before, before, f"Skipped: no {stage.requires} field")
            continue
        current = stage.apply(current)
        audit.record(stage.step, before, len(current), stage.description)
    return current.reset_index(drop=True)
