"""GBIF occurrence data source.

Resolves species names against the GBIF backbone taxonomy and downloads
georeferenced occurrence records through the public search API.

Public API:
  - client: URLs, page size, JSON request helper
  - species: match_species, require_species_key
  - occurrences: search_occurrences, records_to_frame, fetch_occurrence_table
"""

from occurrence_pipeline.datasources.gbif.occurrences import (
    fetch_occurrence_table,
    records_to_frame,
    search_occurrences,
)
from occurrence_pipeline.datasources.gbif.species import match_species, require_species_key

__all__ = [
    "fetch_occurrence_table",
    "match_species",
    "records_to_frame",
    "require_species_key",
    "search_occurrences",
]
