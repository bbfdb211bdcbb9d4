"""
Domain models and field names for the occurrence pipeline.

Occurrence tables keep GBIF's own (camelCase) column names end to end, so the
names the cleaning stages depend on are declared here once.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Field names
# =============================================================================

LATITUDE = "decimalLatitude"
LONGITUDE = "decimalLongitude"
EVENT_DATE = "eventDate"
UNCERTAINTY = "coordinateUncertaintyInMeters"
STATE_PROVINCE = "stateProvince"
YEAR = "year"
SPECIES = "species"

COVARIATE_FIELDS = ["mean_temp", "precipitation", "elevation", "habitat_quality"]

# Columns retained by the projection stage, in output order.
CLEANED_FIELDS = [
    SPECIES,
    "scientificName",
    LATITUDE,
    LONGITUDE,
    EVENT_DATE,
    YEAR,
    "month",
    "day",
    STATE_PROVINCE,
    "locality",
    UNCERTAINTY,
    "basisOfRecord",
    *COVARIATE_FIELDS,
]

AUDIT_COLUMNS = ["step", "records_before", "records_after", "description"]


# =============================================================================
# Query
# =============================================================================

_YEAR_RANGE = re.compile(r"^\d{4}(,\d{4})?$")


class OccurrenceQuery(BaseModel):
    """Parameters for one occurrence download."""

    model_config = {"str_strip_whitespace": True, "frozen": True}

    species_name: str = Field(..., min_length=1, description="Scientific name")
    country: str = Field(default="US", min_length=2, max_length=2)
    year_range: str = Field(default="2020,2023", description="Single year or 'start,end'")
    limit: int = Field(default=500, ge=1)
    has_coordinate: bool = True

    @field_validator("year_range")
    @classmethod
    def _check_year_range(cls, value: str) -> str:
        if not _YEAR_RANGE.match(value):
            msg = f"year_range must look like '2020' or '2020,2023', got {value!r}"
            raise ValueError(msg)
        return value

    @field_validator("country")
    @classmethod
    def _upper_country(cls, value: str) -> str:
        return value.upper()

    @property
    def slug(self) -> str:
        return species_slug(self.species_name)


def species_slug(name: str) -> str:
    """File-name stem for a species, e.g. ``danaus_plexippus``."""
    return name.strip().lower().replace(" ", "_")
