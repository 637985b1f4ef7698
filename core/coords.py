"""Angle and vector helpers shared by the coordinate code."""

from __future__ import annotations
import math
from typing import Sequence

Vec3 = tuple[float, float, float]


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def _wrap(x: float, period: float) -> float:
    x = math.fmod(x, period)
    if x < 0.0:
        x += period
    # -1e-20 + 360 rounds to 360
    return 0.0 if x >= period else x


def wrap_deg(x: float) -> float:
    """Angle in [0, 360)."""
    return _wrap(x, 360.0)


def wrap_hours(x: float) -> float:
    """Right ascension / hour angle in [0, 24)."""
    return _wrap(x, 24.0)


def ang_diff_deg(a: float, b: float) -> float:
    """Signed shortest rotation from b to a, in [-180, 180)."""
    return wrap_deg(a - b + 180.0) - 180.0


def sph_to_cart(ra_deg: float, dec_deg: float) -> Vec3:
    """Unit vector for an equatorial direction (x towards RA 0h, z towards the pole)."""
    ra, dec = math.radians(ra_deg), math.radians(dec_deg)
    return (math.cos(dec) * math.cos(ra), math.cos(dec) * math.sin(ra), math.sin(dec))


def cart_to_sph(x: float, y: float, z: float) -> tuple[float, float]:
    """(ra_deg, dec_deg) of any non-zero vector."""
    return (wrap_deg(math.degrees(math.atan2(y, x))),
            math.degrees(math.atan2(z, math.hypot(x, y))))


def distance(a: Sequence[float], b: Sequence[float]) -> float:
    """Euclidean distance between two x, y, z points."""
    return math.dist((a[0], a[1], a[2]), (b[0], b[1], b[2]))
