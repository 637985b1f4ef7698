"""
Core — coordinate engine, value types and configuration.

Main exports:
    local_sidereal_time       — LST in hours for a UTC instant + longitude
    equatorial_to_horizontal  — RA/Dec → Alt/Az (+ hour angle)
    horizontal_to_cartesian   — Alt/Az → renderer xyz on the dome
    ObserverContext           — explicit observer (lat, lon, utc, lst)
    RendererSettings          — tunables
    TimeController            — simulated clock
"""
from .astro_time import julian_date, gmst_deg, local_sidereal_time, day_of_year, utc_hours
from .celestial_math import (
    equatorial_to_horizontal,
    horizontal_to_cartesian,
    cartesian_to_horizontal,
    equatorial_to_cartesian,
)
from .settings import RendererSettings
from .time_controller import TimeController
from .types import (
    CartesianPoint,
    ConstellationLine,
    ConstellationRecord,
    HorizontalPosition,
    ObserverContext,
    PlanetRecord,
    RenderableStar,
    ResolvedSegment,
    StarRecord,
)

__all__ = [
    "julian_date",
    "gmst_deg",
    "local_sidereal_time",
    "day_of_year",
    "utc_hours",
    "equatorial_to_horizontal",
    "horizontal_to_cartesian",
    "cartesian_to_horizontal",
    "equatorial_to_cartesian",
    "RendererSettings",
    "TimeController",
    "CartesianPoint",
    "ConstellationLine",
    "ConstellationRecord",
    "HorizontalPosition",
    "ObserverContext",
    "PlanetRecord",
    "RenderableStar",
    "ResolvedSegment",
    "StarRecord",
]
