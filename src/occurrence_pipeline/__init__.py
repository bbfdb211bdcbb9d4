"""Occurrence Pipeline - GBIF occurrence acquisition, integration and cleaning.

Architecture::

    datasources/   External APIs (GBIF species match + occurrence search)
    store.py       Flat CSV tables under a data directory (raw → secondary → processed)
    analysis/      Pure table logic (covariates, integration, cleaning, audit, quality)
    renderers/     Pure data → HTML (report page, coordinate scatter, temperature histogram)
    flows/         Prefect orchestration (pipeline runs one species, reports loops species)
    services/      Shared utilities (HTTP session)

Data flow: datasources → store (raw) → analysis → store (processed) → renderers
"""

__version__ = "0.1.0"

from occurrence_pipeline.config import Settings
from occurrence_pipeline.schemas import OccurrenceQuery

__all__ = ["OccurrenceQuery", "Settings", "__version__"]
