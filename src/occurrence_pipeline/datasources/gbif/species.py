"""Species name resolution against the GBIF backbone taxonomy."""

from __future__ import annotations

from occurrence_pipeline.datasources.gbif import client


def match_species(name: str) -> int | None:
    """
    Look up the GBIF backbone usage key for a scientific name.

    Args:
        name: Scientific name, e.g. ``"Danaus plexippus"``.

    Returns:
        The taxon key, or None when GBIF reports no match.
    """
    data = client.get_json(client.SPECIES_MATCH_URL, {"name": name})
    if data.get("matchType") == "NONE":
        return None
    key = data.get("usageKey")
    return int(key) if key is not None else None


def require_species_key(name: str) -> int:
    """Like :func:`match_species` but raises ``LookupError`` when unmatched."""
    key = match_species(name)
    if key is None:
        msg = f"No GBIF backbone match for species {name!r}"
        raise LookupError(msg)
    return key
