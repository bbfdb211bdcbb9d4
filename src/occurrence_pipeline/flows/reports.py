"""
Prefect flow for rendering one HTML report per species.

Runs the occurrence pipeline for each species in turn, then renders the
cleaned table and audit trail into ``reports/{Species_name}_report.html``.

Run locally:
    python -m occurrence_pipeline.flows.reports
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from occurrence_pipeline.config import get_settings
from occurrence_pipeline.flows import pipeline
from occurrence_pipeline.renderers.report import build_species_report_html, report_filename
from occurrence_pipeline.schemas import species_slug

REPORTS_DIR = Path(get_settings().reports_dir)


@task(name="render-report")
def render_report(species: str, region: str, n_records: int) -> str:
    """Load the latest pipeline exports for ``species`` and render its report page."""
    cleaned = pipeline.store.read_table(pipeline.cleaned_path(species_slug(species)))
    audit = pipeline.store.read_table(pipeline.AUDIT_PATH)
    if cleaned is None or audit is None:
        msg = f"Pipeline outputs missing for {species} under {pipeline.store.base}"
        raise FileNotFoundError(msg)

    return build_species_report_html(
        species,
        region,
        n_records,
        cleaned,
        audit,
        generated=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )


@task(name="write-report")
def write_report(species: str, html: str) -> Path:
    """Write a report page named after the species."""
    REPORTS_DIR.mkdir(parents=True, exist_ok=True)
    output_path = REPORTS_DIR / report_filename(species)
    with output_path.open("w", encoding="utf-8") as f:
        f.write(html)
    return output_path


@flow(name="species-reports", log_prints=True)
def build_reports(
    species_list: list[str] | None = None,
    region: str | None = None,
    n_records: int | None = None,
) -> dict[str, Any]:
    """
    Run the pipeline and render a report for every species in the list.

    Species with no records are skipped and listed under ``"skipped"``.
    """
    settings = get_settings()
    species_list = species_list or settings.report_species
    region = region or settings.region
    n_records = settings.record_limit if n_records is None else n_records

    written: dict[str, str] = {}
    skipped: list[str] = []
    for species in species_list:
        print(f"Building report for {species}...")
        result = pipeline.run_pipeline(species_name=species, limit=n_records)
        if "error" in result:
            print(f"Skipping {species}: {result['error']}")
            skipped.append(species)
            continue

        html = render_report(species, region, n_records)
        output_path = write_report(species, html)
        print(f"Report written: {output_path}")
        written[species] = str(output_path)

    return {"reports": written, "skipped": skipped}


if __name__ == "__main__":
    result = build_reports()
    print(f"Flow complete: {result}")
