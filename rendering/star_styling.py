"""
Star styling — colour, size and transparency from magnitude + spectral type.

All functions are pure and total: any magnitude (even absurd ones) and any
spectral string (including empty / None) produce a value inside the
documented range.
"""

from __future__ import annotations
from typing import Optional, Tuple

from core.coords import clamp
from core.types import RenderableStar, StarRecord


# ── Colour ────────────────────────────────────────────────────────────────────

DEFAULT_STAR_COLOR = 0xFFFFFF

SPECTRAL_COLORS = {
    "O": 0x9BB0FF,   # very pale blue
    "B": 0xAABFFF,   # blue
    "A": 0xCAD7FF,   # blue-white
    "F": 0xF8F7FF,   # white-yellow
    "G": 0xFFF4EA,   # yellow (Sun-like)
    "K": 0xFFD2A1,   # light orange
    "M": 0xFFCC6F,   # orange-red
    "R": 0xFF9999,   # carbon / S-type stars share one reddish tone
    "N": 0xFF9999,
    "S": 0xFF9999,
}


def _spectral_letter(spectral_type: Optional[str]) -> str:
    if not spectral_type:
        return ""
    return spectral_type[0].upper()


def classify_color(spectral_type: Optional[str]) -> int:
    """0xRRGGBB for a spectral class string ("A1V", "m2", ...)."""
    return SPECTRAL_COLORS.get(_spectral_letter(spectral_type), DEFAULT_STAR_COLOR)


def color_to_rgb(color: int) -> Tuple[float, float, float]:
    """0xRRGGBB → (r, g, b) floats in [0, 1]."""
    return (((color >> 16) & 0xFF) / 255.0,
            ((color >> 8) & 0xFF) / 255.0,
            (color & 0xFF) / 255.0)


# ── Size ──────────────────────────────────────────────────────────────────────

BASE_STAR_SIZE = 1.5
VISUAL_MAG_MIN, VISUAL_MAG_MAX = -2.0, 8.0
VISUAL_SIZE_MIN = 0.0
VISUAL_SIZE_MAX = BASE_STAR_SIZE * 1.5
DYNAMIC_SIZE_MIN, DYNAMIC_SIZE_MAX = 0.5, 8.0

_SPECTRAL_SIZE_FACTOR = {"O": 1.3, "B": 1.3, "M": 0.8, "R": 0.8, "N": 0.8, "S": 0.8}


def star_visual_size(magnitude: float) -> float:
    """Linear size from magnitude: mag -2 → 2.25, mag 8 → 0."""
    mag = clamp(magnitude, VISUAL_MAG_MIN, VISUAL_MAG_MAX)
    return BASE_STAR_SIZE * (1.5 - (mag + 2.0) * 0.15)


def dynamic_size(star: StarRecord | RenderableStar) -> float:
    """
    Point size for the star buffer.

    Brighter stars grow by 30% per magnitude above mag 3, hot O/B stars are
    drawn 1.3x larger and cool M/R/N/S stars 0.8x. Missing spectral type
    counts as G. Result clamped to [0.5, 8].
    """
    size = BASE_STAR_SIZE * (1.0 + (3.0 - star.magnitude) * 0.3)
    letter = _spectral_letter(star.spectral_type) or "G"
    size *= _SPECTRAL_SIZE_FACTOR.get(letter, 1.0)
    return clamp(size, DYNAMIC_SIZE_MIN, DYNAMIC_SIZE_MAX)


# ── Transparency ──────────────────────────────────────────────────────────────

ALPHA_MIN, ALPHA_MAX = 0.1, 1.0
FAINT_MAG = 4.0
HORIZON_FADE_ALT = 20.0


def star_alpha(magnitude: float, altitude: float) -> float:
    """
    Faint stars (mag > 4) lose 0.15 alpha per magnitude from 0.8; stars
    below 20° altitude fade linearly to zero at -10°. Clamped to [0.1, 1].
    """
    alpha = 1.0
    if magnitude > FAINT_MAG:
        alpha = 0.8 - (magnitude - FAINT_MAG) * 0.15
    if altitude < HORIZON_FADE_ALT:
        alpha *= (altitude + 10.0) / 30.0
    return clamp(alpha, ALPHA_MIN, ALPHA_MAX)


def alpha(star: RenderableStar) -> float:
    return star_alpha(star.magnitude, star.altitude)
