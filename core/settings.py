"""
Renderer configuration.

All tunables of the sky dome live in one dataclass so the host application
can override them from whatever config source it uses:

    settings = RendererSettings.from_mapping({"latitude": 51.5, "max_stars": 3000})
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

LOG = logging.getLogger(__name__)

# Defaults
SPHERE_RADIUS        = 200.0
DEFAULT_LATITUDE     = 35.0
DEFAULT_LONGITUDE    = 45.0
MAX_CATALOG_STARS    = 5000
NEAR_MAX_STARS       = 5000
FAR_MAX_STARS        = 2000
LOD_DISTANCE         = 100.0    # camera travel that triggers a LOD re-check
FAR_LOD_DISTANCE     = 300.0    # camera range beyond which the far budget applies
UPDATE_INTERVAL_S    = 30.0
CONSTELLATION_COLOR  = 0x4488FF
CONSTELLATION_ALPHA  = 0.6


@dataclass
class RendererSettings:
    sphere_radius: float = SPHERE_RADIUS

    # Appearance (forwarded to the sink)
    star_size_multiplier: float = 1.0
    star_brightness: float = 1.0

    # Layer toggles
    show_constellations: bool = True
    show_sun: bool = True
    show_moon: bool = True
    show_planets: bool = True

    # Star budget / level of detail
    max_stars: int = NEAR_MAX_STARS
    far_max_stars: int = FAR_MAX_STARS
    lod_distance: float = LOD_DISTANCE
    far_lod_distance: float = FAR_LOD_DISTANCE
    catalog_cap: int = MAX_CATALOG_STARS

    # Cadence of full position recomputes (host clock seconds)
    update_interval_s: float = UPDATE_INTERVAL_S

    # Observer
    latitude: float = DEFAULT_LATITUDE
    longitude: float = DEFAULT_LONGITUDE

    # Constellation lines
    constellation_color: int = CONSTELLATION_COLOR
    constellation_opacity: float = CONSTELLATION_ALPHA

    # Solar system mesh scale relative to the celestial sphere
    body_scale: float = 0.1

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be in [-90, 90], got {self.latitude}")
        if self.sphere_radius <= 0:
            raise ValueError(f"sphere_radius must be positive, got {self.sphere_radius}")
        if self.update_interval_s < 0:
            raise ValueError(f"update_interval_s must be >= 0, got {self.update_interval_s}")
        for name in ("max_stars", "far_max_stars", "catalog_cap"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if not 0.0 <= self.constellation_opacity <= 1.0:
            raise ValueError(f"constellation_opacity must be in [0, 1], got {self.constellation_opacity}")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RendererSettings":
        """Build settings from a plain mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        accepted = {}
        for key, value in values.items():
            if key in known:
                accepted[key] = value
            else:
                LOG.warning("Ignoring unknown renderer setting %r", key)
        return cls(**accepted)

    def updated(self, **changes: Any) -> "RendererSettings":
        """Copy with changes applied (validated)."""
        return replace(self, **changes)
