"""GBIF API client constants and shared request helper.

API docs:
  - Species match: https://techdocs.gbif.org/en/openapi/v1/species
  - Occurrence search: https://techdocs.gbif.org/en/openapi/v1/occurrence
"""

from __future__ import annotations

from typing import Any

from occurrence_pipeline.services.http import session

API_BASE = "https://api.gbif.org/v1"
SPECIES_MATCH_URL = f"{API_BASE}/species/match"
OCCURRENCE_SEARCH_URL = f"{API_BASE}/occurrence/search"

# The occurrence search endpoint caps a single page at 300 records
MAX_PAGE_SIZE = 300


def get_json(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """GET a GBIF endpoint and return the decoded JSON body.

    Raises:
        requests.HTTPError: On any non-2xx response.
    """
    resp = session.get(url, params=params)
    resp.raise_for_status()
    result: dict[str, Any] = resp.json()
    return result
