"""
Celestial Mathematics

Coordinate conversions for the sky dome:
- RA/Dec (J2000) -> Altitude/Azimuth for an observer at a given LST
- Altitude/Azimuth -> renderer cartesian space on a sphere

Renderer axis convention (must not change, consumers rely on it):
    -X = East,  +Y = Up (zenith),  +Z = North
"""

import math
from typing import Sequence

from core.coords import cart_to_sph, clamp, sph_to_cart, wrap_deg, wrap_hours
from core.types import CartesianPoint, HorizontalPosition


def equatorial_to_horizontal(ra_hours: float, dec_deg: float,
                             lat_deg: float, lst_hours: float) -> HorizontalPosition:
    """
    Convert RA/Dec to Altitude/Azimuth

    Args:
        ra_hours: Right Ascension in hours (wrapped to [0, 24) before use)
        dec_deg: Declination in degrees
        lat_deg: Observer latitude in degrees
        lst_hours: Local Sidereal Time in hours

    Returns:
        HorizontalPosition(altitude, azimuth, hour_angle) -
        alt in [-90, 90], az in [0, 360), hour angle in hours [0, 24)

    At the zenith or a pole the azimuth is undefined; the clamp keeps it
    finite (0 when the denominator vanishes) instead of raising.
    """
    ra_hours = wrap_hours(ra_hours)

    # Hour angle
    ha_deg = wrap_deg(lst_hours * 15.0 - ra_hours * 15.0)
    ha = math.radians(ha_deg)
    dec = math.radians(dec_deg)
    lat = math.radians(lat_deg)

    # Altitude
    sin_alt = math.sin(dec) * math.sin(lat) + math.cos(dec) * math.cos(lat) * math.cos(ha)
    alt = math.asin(clamp(sin_alt, -1.0, 1.0))

    # Azimuth
    denom = math.cos(lat) * math.cos(alt)
    if denom == 0.0:
        cos_az = 1.0
    else:
        cos_az = (math.sin(dec) - math.sin(lat) * math.sin(alt)) / denom
    az = math.degrees(math.acos(clamp(cos_az, -1.0, 1.0)))

    if math.sin(ha) > 0:
        az = 360.0 - az

    return HorizontalPosition(
        altitude=clamp(math.degrees(alt), -90.0, 90.0),
        azimuth=wrap_deg(az),
        hour_angle=ha_deg / 15.0,
    )


def horizontal_to_cartesian(azimuth_deg: float, altitude_deg: float,
                            radius: float) -> CartesianPoint:
    """Place an Alt/Az direction on a sphere of the given radius."""
    az = math.radians(azimuth_deg)
    alt = math.radians(altitude_deg)
    cos_alt = math.cos(alt)
    return CartesianPoint(
        x=-radius * cos_alt * math.sin(az),
        y=radius * math.sin(alt),
        z=radius * cos_alt * math.cos(az),
    )


def cartesian_to_horizontal(x: float, y: float, z: float) -> tuple[float, float]:
    """
    Inverse of horizontal_to_cartesian.

    Returns:
        (azimuth_deg, altitude_deg); (0, 0) for the origin.
    """
    r = math.sqrt(x * x + y * y + z * z)
    if r == 0.0:
        return 0.0, 0.0
    alt = math.degrees(math.asin(clamp(y / r, -1.0, 1.0)))
    az = wrap_deg(math.degrees(math.atan2(-x, z)))
    return az, alt


def equatorial_to_cartesian(ra_hours: float, dec_deg: float, lat_deg: float,
                            lst_hours: float, radius: float) -> tuple[HorizontalPosition, CartesianPoint]:
    """Full chain RA/Dec -> Alt/Az -> sphere point."""
    hor = equatorial_to_horizontal(ra_hours, dec_deg, lat_deg, lst_hours)
    return hor, horizontal_to_cartesian(hor.azimuth, hor.altitude, radius)


def mean_direction(points: Sequence[tuple[float, float]]) -> tuple[float, float]:
    """
    Mean of (ra_hours, dec_deg) directions on the unit sphere.
    Safe across the 0h/24h seam.
    """
    sx = sy = sz = 0.0
    for ra_h, dec in points:
        x, y, z = sph_to_cart(ra_h * 15.0, dec)
        sx += x; sy += y; sz += z
    ra_deg, dec_deg = cart_to_sph(sx, sy, sz)
    return wrap_hours(ra_deg / 15.0), dec_deg
