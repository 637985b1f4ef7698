"""
Solar system bodies on the dome — Sun, Moon and planets.

These are cosmetic approximations, not an ephemeris:
  - Sun:     declination from a yearly sinusoid, RA advancing linearly with
             the day of year from the March equinox
  - Moon:    age/phase from a fixed synodic month and one known new moon;
             RA runs ahead of the sidereal clock, declination swings with age
  - Planets: fixed offsets from the meridian keyed by planet id

Every body goes through the same RA/Dec → Alt/Az → dome chain as the stars
and is placed slightly inside the star sphere so it draws in front of it.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from core.astro_time import as_utc, day_of_year
from core.celestial_math import equatorial_to_cartesian
from core.coords import wrap_hours
from core.types import ObserverContext, PlanetRecord


# ── Constants ────────────────────────────────────────────────────────────────

OBLIQUITY_DEG      = 23.44
MARCH_EQUINOX_DOY  = 80
DAYS_PER_YEAR      = 365.0

SYNODIC_MONTH_DAYS = 29.53
KNOWN_NEW_MOON     = datetime(2024, 1, 11, tzinfo=timezone.utc)
MOON_MAX_DEC_DEG   = 28.0

PLANET_MAX_DEC_DEG = 20.0

# Fraction of the star sphere radius each body sits at
SUN_DISTANCE_FRAC    = 0.95
MOON_DISTANCE_FRAC   = 0.97
PLANET_DISTANCE_FRAC = 0.99

# Mesh radii in scene units
SUN_DISPLAY_RADIUS  = 15.0
MOON_DISPLAY_RADIUS = 8.0
PLANET_RADIUS_SCALE = 50.0   # × planet.radius × body_scale

SUN_COLOR  = 0xFFD700
MOON_COLOR = 0xCCCCCC


# ── Sun ──────────────────────────────────────────────────────────────────────

def sun_equatorial(when: datetime) -> Tuple[float, float]:
    """(ra_hours, dec_deg) of the Sun."""
    doy = day_of_year(when)
    dec = OBLIQUITY_DEG * math.sin(2.0 * math.pi * (doy - MARCH_EQUINOX_DOY) / DAYS_PER_YEAR)
    ra_deg = ((doy - MARCH_EQUINOX_DOY) % DAYS_PER_YEAR) * (360.0 / DAYS_PER_YEAR)
    return wrap_hours(ra_deg / 15.0), dec


# ── Moon ─────────────────────────────────────────────────────────────────────

def moon_age(when: datetime) -> float:
    """Days since the last new moon, [0, 29.53)."""
    days = (as_utc(when) - KNOWN_NEW_MOON).total_seconds() / 86400.0
    return days % SYNODIC_MONTH_DAYS


def moon_phase(when: datetime) -> float:
    """0 = new, 0.5 = full."""
    return moon_age(when) / SYNODIC_MONTH_DAYS


def moon_illumination(phase: float) -> float:
    """1 at full moon, 0 at new moon, linear in between."""
    return 1.0 - abs(phase - 0.5) * 2.0


def moon_equatorial(when: datetime, lst_hours: float) -> Tuple[float, float]:
    age = moon_age(when)
    ra = wrap_hours(lst_hours + age * 0.5)
    dec = math.sin(age * 0.2) * MOON_MAX_DEC_DEG
    return ra, dec


# ── Planets ──────────────────────────────────────────────────────────────────

def planet_equatorial(planet_id: int, lst_hours: float) -> Tuple[float, float]:
    ra = wrap_hours(lst_hours + planet_id * 2.0)
    dec = math.sin(planet_id * 0.5) * PLANET_MAX_DEC_DEG
    return ra, dec


# ── Placements ───────────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class BodyPlacement:
    """Where and how the sink should draw one body mesh."""
    body_id: str
    kind: str                 # "sun" | "moon" | "planet"
    name: str
    ra_hours: float
    dec_deg: float
    altitude: float
    azimuth: float
    x: float
    y: float
    z: float
    color: int
    display_radius: float
    visible: bool = True
    symbol: str = ""
    phase: Optional[float] = None
    illumination: Optional[float] = None


class BodyPositionApproximator:
    """
    Computes BodyPlacements for an observer.

    Parameters
    ----------
    sphere_radius : radius of the star sphere
    body_scale    : planet mesh scale relative to the sphere
    """

    def __init__(self, sphere_radius: float = 200.0, body_scale: float = 0.1):
        self.sphere_radius = sphere_radius
        self.body_scale = body_scale

    def _place(self, ctx: ObserverContext, ra: float, dec: float,
               frac: float, **kw) -> BodyPlacement:
        hor, p = equatorial_to_cartesian(ra, dec, ctx.latitude, ctx.lst_hours,
                                         self.sphere_radius * frac)
        return BodyPlacement(
            ra_hours=ra, dec_deg=dec,
            altitude=hor.altitude, azimuth=hor.azimuth,
            x=p.x, y=p.y, z=p.z, **kw,
        )

    def sun(self, ctx: ObserverContext, visible: bool = True) -> BodyPlacement:
        ra, dec = sun_equatorial(ctx.utc)
        return self._place(ctx, ra, dec, SUN_DISTANCE_FRAC,
                           body_id="sun", kind="sun", name="Sun", symbol="☉",
                           color=SUN_COLOR, display_radius=SUN_DISPLAY_RADIUS,
                           visible=visible)

    def moon(self, ctx: ObserverContext, visible: bool = True) -> BodyPlacement:
        ra, dec = moon_equatorial(ctx.utc, ctx.lst_hours)
        phase = moon_phase(ctx.utc)
        return self._place(ctx, ra, dec, MOON_DISTANCE_FRAC,
                           body_id="moon", kind="moon", name="Moon", symbol="☾",
                           color=MOON_COLOR, display_radius=MOON_DISPLAY_RADIUS,
                           visible=visible, phase=phase,
                           illumination=moon_illumination(phase))

    def planet(self, ctx: ObserverContext, planet: PlanetRecord,
               visible: bool = True) -> BodyPlacement:
        ra, dec = planet_equatorial(planet.id, ctx.lst_hours)
        return self._place(ctx, ra, dec, PLANET_DISTANCE_FRAC,
                           body_id=f"planet-{planet.id}", kind="planet",
                           name=planet.name, symbol=planet.symbol,
                           color=planet.color,
                           display_radius=planet.radius * self.body_scale * PLANET_RADIUS_SCALE,
                           visible=visible)

    def all(self, ctx: ObserverContext, planets: Iterable[PlanetRecord], *,
            show_sun: bool = True, show_moon: bool = True,
            show_planets: bool = True) -> List[BodyPlacement]:
        bodies = [self.sun(ctx, show_sun), self.moon(ctx, show_moon)]
        bodies.extend(self.planet(ctx, p, show_planets) for p in planets)
        return bodies
