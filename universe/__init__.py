"""
Universe module — catalogue store and solar system bodies.

Usage:
    from universe import CatalogStore
    store = CatalogStore()
    store.initialize(external_source)   # source is optional

    # Query
    stars = store.stars
    vega = store.find_star_by_name("Vega")
    lines = store.resolved_segments()
"""

from .catalogue_loader import (
    CatalogError,
    ExternalStarSource,
    has_star_capability,
    load_constellations,
    load_planets,
    load_stars,
    merge_external,
)
from .catalog_store import CatalogStore
from .solar_bodies import (
    BodyPlacement,
    BodyPositionApproximator,
    moon_age,
    moon_equatorial,
    moon_illumination,
    moon_phase,
    planet_equatorial,
    sun_equatorial,
)

__all__ = [
    "CatalogError",
    "ExternalStarSource",
    "has_star_capability",
    "load_constellations",
    "load_planets",
    "load_stars",
    "merge_external",
    "CatalogStore",
    "BodyPlacement",
    "BodyPositionApproximator",
    "moon_age",
    "moon_equatorial",
    "moon_illumination",
    "moon_phase",
    "planet_equatorial",
    "sun_equatorial",
]
