"""Shared fixtures: small GBIF-shaped occurrence tables."""

from __future__ import annotations

from typing import Any

import pandas as pd
import pytest


def make_occurrence(**overrides: Any) -> dict[str, Any]:
    """One occurrence row with GBIF field names; override any field."""
    row: dict[str, Any] = {
        "key": 1,
        "gbifID": "1",
        "species": "Danaus plexippus",
        "scientificName": "Danaus plexippus (Linnaeus, 1758)",
        "decimalLatitude": 45.5,
        "decimalLongitude": -122.6,
        "eventDate": "2021-07-15T10:30:00",
        "year": 2021,
        "month": 7,
        "day": 15,
        "stateProvince": "Oregon",
        "locality": "Portland",
        "coordinateUncertaintyInMeters": 25.0,
        "basisOfRecord": "HUMAN_OBSERVATION",
        "datasetKey": "50c9509d-22c7-4a22-a47d-8c48425ef4a7",
    }
    row.update(overrides)
    return row


@pytest.fixture
def occurrences() -> pd.DataFrame:
    """Five rows: one exact duplicate, one imprecise, one out of range."""
    return pd.DataFrame(
        [
            make_occurrence(key=1, decimalLatitude=45.5, decimalLongitude=-122.6),
            make_occurrence(key=2, decimalLatitude=44.05, decimalLongitude=-123.09,
                            stateProvince="Oregon", eventDate="2022-06-01"),
            make_occurrence(key=3, decimalLatitude=45.5, decimalLongitude=-122.6),
            make_occurrence(key=4, decimalLatitude=47.61, decimalLongitude=-122.33,
                            stateProvince="Washington", coordinateUncertaintyInMeters=15000.0),
            make_occurrence(key=5, decimalLatitude=95.0, decimalLongitude=-122.0,
                            stateProvince="Washington"),
        ]
    )
