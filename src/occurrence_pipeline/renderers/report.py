"""Per-species HTML report.

One self-contained page per species: headline numbers, the processing audit
trail, data completeness, spatial/temporal coverage and the two charts.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from occurrence_pipeline.analysis import quality
from occurrence_pipeline.renderers import render_template
from occurrence_pipeline.renderers.charts import (
    build_coordinate_scatter_html,
    build_temperature_histogram_html,
)
from occurrence_pipeline.schemas import STATE_PROVINCE, YEAR


def report_filename(species: str) -> str:
    """``"Danaus plexippus"`` -> ``"Danaus_plexippus_report.html"``."""
    return f"{species.replace(' ', '_')}_report.html"


def build_species_report_html(
    species: str,
    region: str,
    n_records: int,
    cleaned: pd.DataFrame,
    audit: pd.DataFrame,
    generated: str = "",
) -> str:
    """Render the full report page for one species.

    Args:
        species: Scientific name shown in the title.
        region: Human-readable region label (e.g. "United States").
        n_records: Record limit the data was requested with.
        cleaned: Cleaned, integrated occurrence table.
        audit: Audit trail table (step, records_before, records_after, description).
        generated: Timestamp string for the footer.
    """
    audit_rows: list[dict[str, Any]] = audit.to_dict(orient="records")
    completeness_rows: list[dict[str, Any]] = quality.completeness(cleaned).to_dict(
        orient="records"
    )

    return render_template(
        "report.html.j2",
        species=species,
        region=region,
        n_records=n_records,
        stats=quality.summary_stats(cleaned),
        audit_rows=audit_rows,
        completeness_rows=completeness_rows,
        state_counts=quality.top_counts(cleaned, STATE_PROVINCE),
        year_counts=quality.value_counts_sorted(cleaned, YEAR),
        scatter=build_coordinate_scatter_html(cleaned),
        histogram=build_temperature_histogram_html(cleaned),
        generated=generated,
    )
