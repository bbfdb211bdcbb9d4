"""Tests for the HTML renderers."""

from __future__ import annotations

from datetime import date

import pandas as pd

from occurrence_pipeline.analysis.audit import AuditTrail
from occurrence_pipeline.renderers.charts import (
    HISTOGRAM_BINS,
    build_coordinate_scatter_html,
    build_temperature_histogram_html,
)
from occurrence_pipeline.renderers.report import build_species_report_html, report_filename


def _cleaned() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "species": ["Danaus plexippus"] * 3,
            "decimalLatitude": [30.0, 35.0, 40.0],
            "decimalLongitude": [-100.0, -95.0, -90.0],
            "eventDate": [date(2021, 6, 1), date(2022, 7, 1), date(2020, 5, 1)],
            "year": [2021, 2022, 2020],
            "stateProvince": ["Texas", "Texas", "Kansas"],
            "mean_temp": [15.0, 20.0, 25.0],
        }
    )


class TestCoordinateScatter:
    def test_one_point_per_row(self) -> None:
        html = build_coordinate_scatter_html(_cleaned())
        assert "<svg" in html
        assert html.count("<circle") == 3
        assert "Longitude" in html
        assert "Latitude" in html

    def test_points_inside_plot(self) -> None:
        html = build_coordinate_scatter_html(_cleaned())
        assert 'cx="-' not in html
        assert 'cy="-' not in html

    def test_skips_missing_coordinates(self) -> None:
        frame = _cleaned()
        frame.loc[1, "decimalLatitude"] = None
        assert build_coordinate_scatter_html(frame).count("<circle") == 2

    def test_empty(self) -> None:
        assert "No coordinates" in build_coordinate_scatter_html(pd.DataFrame())

    def test_single_point(self) -> None:
        frame = pd.DataFrame({"decimalLatitude": [45.0], "decimalLongitude": [-122.0]})
        assert build_coordinate_scatter_html(frame).count("<circle") == 1


class TestTemperatureHistogram:
    def test_bins(self) -> None:
        html = build_temperature_histogram_html(_cleaned())
        assert html.count("<rect") == HISTOGRAM_BINS
        assert "Mean temperature" in html

    def test_custom_bins(self) -> None:
        assert build_temperature_histogram_html(_cleaned(), bins=5).count("<rect") == 5

    def test_constant_values(self) -> None:
        frame = pd.DataFrame({"mean_temp": [18.0, 18.0]})
        assert "<svg" in build_temperature_histogram_html(frame, bins=3)

    def test_no_temperatures(self) -> None:
        frame = pd.DataFrame({"mean_temp": [None, None]})
        assert "No temperature data" in build_temperature_histogram_html(frame)

    def test_absent_column(self) -> None:
        assert "No temperature data" in build_temperature_histogram_html(pd.DataFrame())


class TestSpeciesReport:
    def test_filename(self) -> None:
        assert report_filename("Danaus plexippus") == "Danaus_plexippus_report.html"

    def test_report_contents(self) -> None:
        trail = AuditTrail()
        trail.record("Data acquisition", 5, 5, "Downloaded 5 records from GBIF")
        trail.record("Duplicate removal", 5, 3, "Removed duplicates")
        trail.finalize(3)

        html = build_species_report_html(
            "Danaus plexippus", "United States", 500, _cleaned(), trail.to_frame(),
            generated="2026-01-01 12:00",
        )

        assert "<title>Danaus plexippus occurrence report</title>" in html
        assert "United States" in html
        assert "3. Final state" in html
        assert "Downloaded 5 records from GBIF" in html
        assert "<circle" in html
        assert "<rect" in html
        assert "Texas" in html
        assert "2020-05-01" in html
        assert "2026-01-01 12:00" in html

    def test_escapes_text(self) -> None:
        trail = AuditTrail()
        trail.record("<b>step</b>", 1, 1, "x")
        html = build_species_report_html(
            "Danaus plexippus", "US", 1, _cleaned(), trail.to_frame()
        )
        assert "<b>step</b>" not in html
        assert "&lt;b&gt;step&lt;/b&gt;" in html
