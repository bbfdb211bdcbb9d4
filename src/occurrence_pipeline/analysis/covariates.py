"""Simulated environmental covariates for occurrence locations.

Stands in for a real secondary dataset (WorldClim, PRISM, ...) so the
integration and cleaning stages have something to join. Values are drawn
from fixed distributions; only the seed makes them reproducible.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from occurrence_pipeline.schemas import LATITUDE, LONGITUDE

HABITAT_LEVELS = ("high", "medium", "low")

# (mean, standard deviation) of each simulated variable
MEAN_TEMP_DIST = (20.0, 5.0)  # °C
PRECIPITATION_DIST = (800.0, 200.0)  # mm
ELEVATION_DIST = (500.0, 300.0)  # m


def unique_coordinates(occurrences: pd.DataFrame) -> pd.DataFrame:
    """Distinct (latitude, longitude) pairs in first-seen order.

    Pairs are compared exactly, without rounding. Rows missing either
    coordinate have no location to describe and are left out.
    """
    coords = occurrences[[LATITUDE, LONGITUDE]].dropna().drop_duplicates()
    return coords.reset_index(drop=True)


def simulate_covariates(coordinates: pd.DataFrame, seed: int) -> pd.DataFrame:
    """
    Draw one synthetic covariate record per coordinate pair.

    Draw order is fixed (all temperatures, then precipitation, elevation and
    habitat labels), so the same seed and coordinates give the same table.

    Args:
        coordinates: Table of unique pairs, as from :func:`unique_coordinates`.
        seed: Seed for a fresh ``numpy.random.Generator``.

    Returns:
        Table with the coordinate columns plus mean_temp, precipitation,
        elevation (2 decimals) and habitat_quality.
    """
    n = len(coordinates)
    rng = np.random.default_rng(seed)

    return pd.DataFrame(
        {
            LATITUDE: coordinates[LATITUDE].to_numpy(),
            LONGITUDE: coordinates[LONGITUDE].to_numpy(),
            "mean_temp": rng.normal(*MEAN_TEMP_DIST, size=n).round(2),
            "precipitation": rng.normal(*PRECIPITATION_DIST, size=n).round(2),
            "elevation": rng.normal(*ELEVATION_DIST, size=n).round(2),
            "habitat_quality": rng.choice(HABITAT_LEVELS, size=n),
        }
    )
