"""Inline SVG charts for the cleaned occurrence table.

- Spatial distribution: scatter of (longitude, latitude)
- Mean temperature at observation sites: histogram of ``mean_temp``
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from occurrence_pipeline.renderers import render_template
from occurrence_pipeline.schemas import LATITUDE, LONGITUDE

# SVG layout shared by both charts
SVG_WIDTH = 640
SVG_HEIGHT = 360
MARGIN_LEFT = 55
MARGIN_TOP = 20
MARGIN_RIGHT = 20
MARGIN_BOTTOM = 40
PLOT_RIGHT = SVG_WIDTH - MARGIN_RIGHT
PLOT_BOTTOM = SVG_HEIGHT - MARGIN_BOTTOM
PLOT_WIDTH = PLOT_RIGHT - MARGIN_LEFT
PLOT_HEIGHT = PLOT_BOTTOM - MARGIN_TOP

HISTOGRAM_BINS = 20
N_TICKS = 5


def build_coordinate_scatter_html(frame: pd.DataFrame) -> str:
    """Scatter plot of observation locations.

    Axes span the data extent with a small pad, so regional datasets are
    not squashed into a corner of the globe.
    """
    if LATITUDE not in frame.columns or LONGITUDE not in frame.columns:
        return "<p>No coordinates available.</p>"

    coords = frame[[LONGITUDE, LATITUDE]].apply(pd.to_numeric, errors="coerce").dropna()
    if coords.empty:
        return "<p>No coordinates available.</p>"

    x_min, x_max = _padded_range(coords[LONGITUDE])
    y_min, y_max = _padded_range(coords[LATITUDE])

    def x_for(lon: float) -> float:
        return MARGIN_LEFT + (lon - x_min) / (x_max - x_min) * PLOT_WIDTH

    def y_for(lat: float) -> float:
        return PLOT_BOTTOM - (lat - y_min) / (y_max - y_min) * PLOT_HEIGHT

    points = [
        {"x": round(x_for(lon), 1), "y": round(y_for(lat), 1)}
        for lon, lat in coords.itertuples(index=False)
    ]

    return render_template(
        "coordinate_scatter.html.j2",
        **_layout(),
        points=points,
        x_ticks=_ticks(x_min, x_max, x_for),
        y_ticks=_ticks(y_min, y_max, y_for),
        n_points=len(points),
    )


def build_temperature_histogram_html(frame: pd.DataFrame, bins: int = HISTOGRAM_BINS) -> str:
    """Histogram of mean temperature at observation sites."""
    if "mean_temp" not in frame.columns:
        return "<p>No temperature data available.</p>"

    temps = pd.to_numeric(frame["mean_temp"], errors="coerce").dropna()
    if temps.empty:
        return "<p>No temperature data available.</p>"

    counts, edges = np.histogram(temps.to_numpy(), bins=bins)
    x_min, x_max = float(edges[0]), float(edges[-1])
    if x_max == x_min:
        x_max = x_min + 1.0
    y_max = max(int(counts.max()), 1)

    def x_for(value: float) -> float:
        return MARGIN_LEFT + (value - x_min) / (x_max - x_min) * PLOT_WIDTH

    def y_for(count: float) -> float:
        return PLOT_BOTTOM - count / y_max * PLOT_HEIGHT

    bars = []
    for count, left, right in zip(counts, edges[:-1], edges[1:], strict=True):
        x0, x1 = x_for(float(left)), x_for(float(right))
        y = y_for(float(count))
        bars.append(
            {
                "x": round(x0, 1),
                "y": round(y, 1),
                "width": round(max(x1 - x0 - 1, 1), 1),
                "height": round(PLOT_BOTTOM - y, 1),
                "label": f"{left:.1f}–{right:.1f} °C: {int(count)}",
            }
        )

    return render_template(
        "temperature_histogram.html.j2",
        **_layout(),
        bars=bars,
        x_ticks=_ticks(x_min, x_max, x_for),
        y_ticks=_ticks(0, y_max, y_for, fmt="{:.0f}"),
        n_values=len(temps),
    )


def _layout() -> dict[str, int]:
    return {
        "svg_width": SVG_WIDTH,
        "svg_height": SVG_HEIGHT,
        "margin_left": MARGIN_LEFT,
        "margin_top": MARGIN_TOP,
        "plot_right": PLOT_RIGHT,
        "plot_bottom": PLOT_BOTTOM,
    }


def _padded_range(values: pd.Series, pad_fraction: float = 0.05) -> tuple[float, float]:
    """Min/max of ``values`` widened by ``pad_fraction`` (at least 0.5 units)."""
    lo, hi = float(values.min()), float(values.max())
    pad = max((hi - lo) * pad_fraction, 0.5)
    return lo - pad, hi + pad


def _ticks(
    lo: float, hi: float, to_svg: Any, fmt: str = "{:.1f}"
) -> list[dict[str, float | str]]:
    """Evenly spaced axis ticks with their SVG position."""
    ticks: list[dict[str, float | str]] = []
    for i in range(N_TICKS + 1):
        value = lo + (hi - lo) * i / N_TICKS
        ticks.append({"pos": round(to_svg(value), 1), "label": fmt.format(value)})
    return ticks
