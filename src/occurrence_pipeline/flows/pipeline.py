"""
Prefect flow for acquiring, integrating and cleaning occurrence records.

Steps: GBIF download → raw CSV → simulated covariates → rounded-coordinate
join → cleaning stages → exports (cleaned table, audit trail, completeness).

Run locally:
    python -m occurrence_pipeline.flows.pipeline

Run with Prefect dashboard:
    prefect server start &
    python -m occurrence_pipeline.flows.pipeline
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task

from occurrence_pipeline.analysis import quality
from occurrence_pipeline.analysis.audit import AuditEntry, AuditTrail
from occurrence_pipeline.analysis.cleaning import clean
from occurrence_pipeline.analysis.covariates import simulate_covariates, unique_coordinates
from occurrence_pipeline.analysis.integration import IntegrationResult, integrate
from occurrence_pipeline.config import get_settings
from occurrence_pipeline.datasources import gbif
from occurrence_pipeline.schemas import STATE_PROVINCE, YEAR, OccurrenceQuery
from occurrence_pipeline.store import DataStore

# Data store with tiered directories
store = DataStore(Path(get_settings().data_dir))

# Relative paths within the store
COVARIATES_PATH = Path("secondary/environmental_data.csv")
AUDIT_PATH = Path("processed/data_processing_metadata.csv")
COMPLETENESS_PATH = Path("processed/data_completeness.csv")


def raw_path(slug: str) -> Path:
    return Path(f"raw/{slug}_raw_data.csv")


def cleaned_path(slug: str) -> Path:
    return Path(f"processed/{slug}_cleaned_integrated.csv")


# =============================================================================
# Tasks
# =============================================================================


@task(name="acquire-occurrences")
def acquire_occurrences(query: OccurrenceQuery) -> pd.DataFrame:
    """Resolve the species name and download its occurrence records."""
    taxon_key = gbif.require_species_key(query.species_name)
    print(f"Species key for {query.species_name}: {taxon_key}")
    return gbif.fetch_occurrence_table(query, taxon_key)


@task(name="save-table")
def save_table(path: Path, frame: pd.DataFrame) -> Path:
    """Write a table via store."""
    return store.write_table(path, frame)


@task(name="load-table")
def load_table(path: Path) -> pd.DataFrame | None:
    """Read a table from store."""
    return store.read_table(path)


@task(name="simulate-covariates")
def simulate_environment(occurrences: pd.DataFrame, seed: int) -> pd.DataFrame:
    """Simulate one covariate record per unique occurrence location."""
    return simulate_covariates(unique_coordinates(occurrences), seed)


@task(name="integrate-covariates")
def integrate_covariates(
    occurrences: pd.DataFrame, covariates: pd.DataFrame, precision: int
) -> IntegrationResult:
    """Left join covariates onto occurrences."""
    return integrate(occurrences, covariates, precision=precision)


@task(name="clean-records")
def clean_records(
    integrated: pd.DataFrame, uncertainty_limit_m: float
) -> tuple[pd.DataFrame, tuple[AuditEntry, ...]]:
    """Run the cleaning stages; returns the cleaned table and its audit entries."""
    trail = AuditTrail()
    cleaned = clean(integrated, trail, uncertainty_limit_m=uncertainty_limit_m)
    return cleaned, trail.entries


# =============================================================================
# Flow
# =============================================================================


@flow(name="occurrence-pipeline", log_prints=True)
def run_pipeline(
    species_name: str | None = None,
    country: str | None = None,
    year_range: str | None = None,
    limit: int | None = None,
    seed: int | None = None,
    offline: bool = False,
) -> dict[str, Any]:
    """
    Acquire, integrate, clean and export occurrence records for one species.

    Unset arguments fall back to settings. With ``offline=True`` the raw CSV
    from a previous run is reused instead of calling GBIF.

    Returns:
        Summary dict with row counts and output paths, or ``{"error": ...}``
        when there is nothing to process.
    """
    settings = get_settings()
    query = OccurrenceQuery(
        species_name=species_name or settings.species_name,
        country=country or settings.country,
        year_range=year_range or settings.year_range,
        limit=settings.record_limit if limit is None else limit,
    )
    seed = settings.seed if seed is None else seed

    # --- Acquisition ---
    if offline:
        print(f"Reading raw records for {query.species_name} from store...")
        occurrences = load_table(raw_path(query.slug))
        if occurrences is None:
            missing = store.base / raw_path(query.slug)
            msg = f"No raw data at {missing}; run without offline first"
            raise FileNotFoundError(msg)
    else:
        print(
            f"Fetching up to {query.limit} {query.species_name} records "
            f"({query.country}, {query.year_range})..."
        )
        raw = acquire_occurrences(query)
        if raw.empty:
            print(f"No records found for {query.species_name}.")
            return {"species": query.species_name, "error": "no records"}
        saved = save_table(raw_path(query.slug), raw)
        print(f"Saved {len(raw)} raw records to {saved}")
        # Continue from the exported file so every run sees CSV-typed columns
        occurrences = load_table(raw_path(query.slug))

    if occurrences is None or occurrences.empty:
        print(f"No records to process for {query.species_name}.")
        return {"species": query.species_name, "error": "no records"}

    audit = AuditTrail()
    acquired = len(occurrences)
    if offline:
        source = f"Read {acquired} records from {raw_path(query.slug)}"
    else:
        source = f"Downloaded {acquired} records from GBIF"
    audit.record("Data acquisition", acquired, acquired, source)

    # --- Secondary dataset ---
    covariates = simulate_environment(occurrences, seed)
    save_table(COVARIATES_PATH, covariates)
    print(f"Simulated covariates for {len(covariates)} unique locations (seed={seed})")

    # --- Integration ---
    integration = integrate_covariates(occurrences, covariates, settings.join_precision)
    if integration.key_collisions:
        print(
            f"Warning: {integration.key_collisions} covariate rows shared a rounded "
            "coordinate key; kept the first of each"
        )
    print(
        f"Integrated {integration.rows_after} rows, "
        f"{integration.matched} with covariate matches"
    )
    audit.record(
        "Data integration",
        integration.rows_before,
        integration.rows_after,
        f"Merged with environmental data at {len(covariates)} unique locations",
    )

    # --- Cleaning ---
    cleaned, stage_entries = clean_records(integration.table, settings.uncertainty_limit_m)
    for entry in stage_entries:
        audit.record(entry.step, entry.records_before, entry.records_after, entry.description)
        print(f"{entry.step}: {entry.records_before} -> {entry.records_after}")
    audit.finalize(len(cleaned))

    # --- Quality assessment ---
    completeness = quality.completeness(cleaned)
    states = quality.top_counts(cleaned, STATE_PROVINCE)
    if states:
        print(f"Spatial coverage by state (top {len(states)}): {states}")
    years = quality.value_counts_sorted(cleaned, YEAR)
    if years:
        print(f"Temporal coverage by year: {years}")

    # --- Exports ---
    outputs = {
        "raw": str(store.base / raw_path(query.slug)),
        "covariates": str(store.base / COVARIATES_PATH),
        "cleaned": str(save_table(cleaned_path(query.slug), cleaned)),
        "audit": str(save_table(AUDIT_PATH, audit.to_frame())),
        "completeness": str(save_table(COMPLETENESS_PATH, completeness)),
    }
    print(f"Cleaned data exported to: {outputs['cleaned']}")

    return {
        "species": query.species_name,
        "acquired": acquired,
        "integrated": integration.rows_after,
        "matched": integration.matched,
        "cleaned": len(cleaned),
        "outputs": outputs,
    }


if __name__ == "__main__":
    result = run_pipeline()
    print(f"Flow complete: {result}")
