"""Occurrence search and conversion to a flat table."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pandas as pd

from occurrence_pipeline.datasources.gbif import client

if TYPE_CHECKING:
    from occurrence_pipeline.schemas import OccurrenceQuery


def search_occurrences(
    taxon_key: int,
    *,
    country: str,
    year_range: str,
    limit: int,
    has_coordinate: bool = True,
) -> list[dict[str, Any]]:
    """
    Page through the occurrence search API until ``limit`` records are collected.

    Args:
        taxon_key: GBIF backbone taxon key.
        country: ISO 3166-1 alpha-2 country code.
        year_range: ``"2020"`` or ``"2020,2023"`` (inclusive).
        limit: Maximum number of records to return.
        has_coordinate: Only request georeferenced records.

    Returns:
        Raw occurrence dicts in API order, at most ``limit`` long.
    """
    records: list[dict[str, Any]] = []
    offset = 0

    while len(records) < limit:
        page_size = min(client.MAX_PAGE_SIZE, limit - len(records))
        params: dict[str, Any] = {
            "taxonKey": taxon_key,
            "country": country,
            "hasCoordinate": str(has_coordinate).lower(),
            "year": year_range,
            "limit": page_size,
            "offset": offset,
        }
        data = client.get_json(client.OCCURRENCE_SEARCH_URL, params)

        results: list[dict[str, Any]] = data.get("results", [])
        if not results:
            break
        records.extend(results)

        if data.get("endOfRecords", True):
            break
        offset += len(results)

    return records[:limit]


def records_to_frame(records: list[dict[str, Any]]) -> pd.DataFrame:
    """Flatten occurrence dicts into a table.

    Nested fields (media, extensions, identifiers, ...) can't be written to a
    flat CSV and are dropped; scalar fields keep GBIF's names.
    """
    if not records:
        return pd.DataFrame()

    frame = pd.DataFrame.from_records(records)
    nested = [
        col
        for col in frame.columns
        if frame[col].map(lambda v: isinstance(v, (list, dict))).any()
    ]
    return frame.drop(columns=nested)


def fetch_occurrence_table(query: OccurrenceQuery, taxon_key: int) -> pd.DataFrame:
    """Run a full occurrence search for ``query`` and return it as a table."""
    records = search_occurrences(
        taxon_key,
        country=query.country,
        year_range=query.year_range,
        limit=query.limit,
        has_coordinate=query.has_coordinate,
    )
    return records_to_frame(records)
