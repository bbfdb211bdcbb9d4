"""Join occurrence records with covariates by rounded coordinates.

Coordinates from different sources rarely agree to the last digit, so both
tables are matched on latitude/longitude rounded to a fixed precision. The
join is a left join: every occurrence row survives exactly once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd

from occurrence_pipeline.schemas import COVARIATE_FIELDS, LATITUDE, LONGITUDE

LAT_KEY = "lat_rounded"
LON_KEY = "lon_rounded"
JOIN_KEY = [LAT_KEY, LON_KEY]

DEFAULT_PRECISION = 4

CollisionPolicy = Literal["first", "error"]


class JoinKeyCollisionError(ValueError):
    """Raised when several covariate rows share one rounded coordinate key."""


@dataclass
class IntegrationResult:
    """Joined table plus the counts the audit trail needs."""

    table: pd.DataFrame
    rows_before: int
    rows_after: int
    matched: int
    key_collisions: int


def add_join_key(frame: pd.DataFrame, precision: int = DEFAULT_PRECISION) -> pd.DataFrame:
    """Return a copy of ``frame`` with ``lat_rounded``/``lon_rounded`` columns."""
    return frame.assign(
        **{
            LAT_KEY: frame[LATITUDE].round(precision),
            LON_KEY: frame[LONGITUDE].round(precision),
        }
    )


def unique_covariates_by_key(
    covariates: pd.DataFrame,
    on_collision: CollisionPolicy = "first",
) -> tuple[pd.DataFrame, int]:
    """Reduce keyed covariates to one row per join key.

    Distinct exact coordinates can round to the same key. With ``"first"``
    the earliest row wins; with ``"error"`` any collision raises.

    Returns:
        Tuple of (deduplicated covariates, number of rows dropped).
    """
    if on_collision not in ("first", "error"):
        msg = f"Unknown collision policy: {on_collision!r}"
        raise ValueError(msg)

    duplicated = covariates.duplicated(subset=JOIN_KEY, keep="first")
    collisions = int(duplicated.sum())
    if collisions and on_collision == "error":
        keys = covariates.loc[duplicated, JOIN_KEY].drop_duplicates()
        sample = ", ".join(f"({lat}, {lon})" for lat, lon in keys.head(5).itertuples(index=False))
        msg = f"{collisions} covariate rows share a rounded coordinate key: {sample}"
        raise JoinKeyCollisionError(msg)

    return covariates.loc[~duplicated], collisions


def integrate(
    occurrences: pd.DataFrame,
    covariates: pd.DataFrame,
    *,
    precision: int = DEFAULT_PRECISION,
    on_collision: CollisionPolicy = "first",
) -> IntegrationResult:
    """
    Left join covariates onto occurrences by rounded coordinates.

    The occurrence table keeps its own coordinate columns; the covariate side
    contributes only its covariate fields. Row order of ``occurrences`` is
    preserved and the helper key columns are dropped from the result.

    Args:
        occurrences: Occurrence table with decimalLatitude/decimalLongitude.
        covariates: Covariate table with the same coordinate columns.
        precision: Decimal places used for the join key.
        on_collision: What to do when covariate keys collide after rounding.

    Returns:
        IntegrationResult with the joined table and audit counts.

    Raises:
        JoinKeyCollisionError: If ``on_collision="error"`` and keys collide.
    """
    keyed_occ = add_join_key(occurrences, precision)
    keyed_cov = add_join_key(covariates, precision)
    keyed_cov, collisions = unique_covariates_by_key(keyed_cov, on_collision)

    fields = [f for f in COVARIATE_FIELDS if f in keyed_cov.columns]
    merged = keyed_occ.merge(
        keyed_cov[[*JOIN_KEY, *fields]],
        on=JOIN_KEY,
        how="left",
        sort=False,
        validate="many_to_one",
    ).drop(columns=JOIN_KEY)

    matched = int(merged["mean_temp"].notna().sum()) if "mean_temp" in merged.columns else 0

    return IntegrationResult(
        table=merged,
        rows_before=len(occurrences),
        rows_after=len(merged),
        matched=matched,
        key_collisions=collisions,
    )
