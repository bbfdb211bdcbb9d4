"""Tests for the query model and settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from occurrence_pipeline.config import Settings, get_settings
from occurrence_pipeline.schemas import CLEANED_FIELDS, OccurrenceQuery, species_slug


class TestOccurrenceQuery:
    """Validation of download parameters."""

    def test_defaults(self) -> None:
        query = OccurrenceQuery(species_name="Danaus plexippus")
        assert query.country == "US"
        assert query.year_range == "2020,2023"
        assert query.limit == 500
        assert query.has_coordinate is True

    def test_country_uppercased(self) -> None:
        assert OccurrenceQuery(species_name="x", country="ca").country == "CA"

    def test_strips_whitespace(self) -> None:
        assert OccurrenceQuery(species_name="  Danaus plexippus ").species_name == "Danaus plexippus"

    @pytest.mark.parametrize("value", ["2021", "2020,2023"])
    def test_valid_year_range(self, value: str) -> None:
        assert OccurrenceQuery(species_name="x", year_range=value).year_range == value

    @pytest.mark.parametrize("value", ["20-23", "2020-2023", "last year", ""])
    def test_invalid_year_range(self, value: str) -> None:
        with pytest.raises(ValidationError):
            OccurrenceQuery(species_name="x", year_range=value)

    def test_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            OccurrenceQuery(species_name="x", limit=0)

    def test_empty_species_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OccurrenceQuery(species_name="")

    def test_frozen(self) -> None:
        query = OccurrenceQuery(species_name="x")
        with pytest.raises(ValidationError):
            query.limit = 10  # type: ignore[misc]

    def test_slug(self) -> None:
        assert OccurrenceQuery(species_name="Danaus plexippus").slug == "danaus_plexippus"


class TestSpeciesSlug:
    def test_lowercases_and_joins(self) -> None:
        assert species_slug(" Libytheana carinenta ") == "libytheana_carinenta"


class TestCleanedFields:
    def test_covariates_last(self) -> None:
        assert CLEANED_FIELDS[-4:] == ["mean_temp", "precipitation", "elevation", "habitat_quality"]

    def test_no_duplicates(self) -> None:
        assert len(CLEANED_FIELDS) == len(set(CLEANED_FIELDS))


class TestSettings:
    """Environment-driven configuration."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("OCCURRENCE_SPECIES_NAME", raising=False)
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.species_name == "Danaus plexippus"
        assert settings.record_limit == 500
        assert settings.seed == 123
        assert settings.uncertainty_limit_m == 10000
        assert settings.join_precision == 4

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCCURRENCE_SPECIES_NAME", "Vanessa cardui")
        monkeypatch.setenv("OCCURRENCE_RECORD_LIMIT", "200")
        settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.species_name == "Vanessa cardui"
        assert settings.record_limit == 200

    def test_invalid_limit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OCCURRENCE_RECORD_LIMIT", "0")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)  # type: ignore[call-arg]

    def test_get_settings_cached(self) -> None:
        assert get_settings() is get_settings()
