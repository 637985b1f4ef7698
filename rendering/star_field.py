"""
Star field — from catalogue records to renderable data.

Pipeline per recompute:
    StarRecord ─► equatorial_to_horizontal ─► altitude > -10° ? ─► dome xyz
               ─► size / colour / alpha ─► RenderableStar ─► StarBuffer

The buffer is a preallocated float32 array the sink uploads once; periodic
refreshes overwrite it in place.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from core.celestial_math import (
    equatorial_to_horizontal,
    horizontal_to_cartesian,
    mean_direction,
)
from core.types import (
    ConstellationRecord,
    ObserverContext,
    RenderableStar,
    ResolvedSegment,
    StarRecord,
)
from .star_styling import classify_color, color_to_rgb, dynamic_size, star_alpha, star_visual_size

# Stars at or below this altitude are culled (horizon margin)
VISIBILITY_ALTITUDE = -10.0


# ---------------------------------------------------------------------------
# Visibility
# ---------------------------------------------------------------------------

def is_visible(altitude: float) -> bool:
    return altitude > VISIBILITY_ALTITUDE


def render_star(star: StarRecord, ctx: ObserverContext, radius: float) -> RenderableStar:
    """Project one star for the observer (no culling)."""
    hor = equatorial_to_horizontal(star.ra_hours, star.dec_deg, ctx.latitude, ctx.lst_hours)
    p = horizontal_to_cartesian(hor.azimuth, hor.altitude, radius)
    return RenderableStar(
        star=star,
        altitude=hor.altitude,
        azimuth=hor.azimuth,
        hour_angle=hor.hour_angle,
        x=p.x, y=p.y, z=p.z,
        size=star_visual_size(star.magnitude),
        color=classify_color(star.spectral_type),
        alpha=star_alpha(star.magnitude, hor.altitude),
        visible=is_visible(hor.altitude),
    )


def filter_visible(stars: Iterable[RenderableStar]) -> List[RenderableStar]:
    """Keep stars strictly above -10° altitude."""
    return [s for s in stars if is_visible(s.altitude)]


def calculate_positions(stars: Iterable[StarRecord], ctx: ObserverContext,
                        radius: float = 200.0) -> List[RenderableStar]:
    """
    All catalogue stars visible to the observer, in catalogue order, with
    dome position, size, colour and alpha attached.
    """
    return filter_visible(render_star(s, ctx, radius) for s in stars)


def brightest_stars(stars: Iterable[RenderableStar], limit: int = 20) -> List[RenderableStar]:
    return sorted(stars, key=lambda s: s.magnitude)[:limit]


# ---------------------------------------------------------------------------
# Star buffer
# ---------------------------------------------------------------------------

# x, y, z, r, g, b, size, alpha
STAR_STRIDE = 8


class StarBuffer:
    """
    Flat per-star attribute buffer handed to the render sink.

    Layout (float32, one row per star):
        [0:3] position   [3:6] colour (0-1)   [6] size   [7] alpha

    `count` rows are live; rows past it are kept at alpha 0 so a sink that
    draws the whole buffer shows nothing there.
    """

    def __init__(self, capacity: int):
        self.capacity = max(0, int(capacity))
        self.data = np.zeros((self.capacity, STAR_STRIDE), dtype=np.float32)
        self.count = 0
        self.star_ids: List[int] = []

    @property
    def positions(self) -> np.ndarray:
        return self.data[:, 0:3]

    @property
    def colors(self) -> np.ndarray:
        return self.data[:, 3:6]

    @property
    def sizes(self) -> np.ndarray:
        return self.data[:, 6]

    @property
    def alphas(self) -> np.ndarray:
        return self.data[:, 7]

    @property
    def flat(self) -> np.ndarray:
        """1D view (x,y,z,r,g,b,size,alpha, x,y,z,...)."""
        return self.data.reshape(-1)

    def fill(self, stars: Sequence[RenderableStar]) -> int:
        """
        Overwrite rows in place with the first `capacity` stars.
        Returns the number of live rows.
        """
        n = min(len(stars), self.capacity)
        for i in range(n):
            s = stars[i]
            r, g, b = color_to_rgb(s.color)
            self.data[i] = (s.x, s.y, s.z, r, g, b, dynamic_size(s), s.alpha)
        if n < self.count:
            self.data[n:self.count, 7] = 0.0
        self.count = n
        self.star_ids = [stars[i].id for i in range(n)]
        return n

    def clear(self) -> None:
        self.data[:] = 0.0
        self.count = 0
        self.star_ids = []

    def __len__(self) -> int:
        return self.count


def order_for_buffer(stars: Iterable[RenderableStar]) -> List[RenderableStar]:
    """Brightest first, so a capped buffer keeps the brightest stars."""
    return sorted(stars, key=lambda s: s.magnitude)


# ---------------------------------------------------------------------------
# Constellations
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class LineSegment:
    constellation: str
    start: Tuple[float, float, float]
    end: Tuple[float, float, float]
    color: int
    opacity: float


def constellation_segments(segments: Iterable[ResolvedSegment],
                           visible: Iterable[RenderableStar],
                           color: int = 0x4488FF,
                           opacity: float = 0.6) -> List[LineSegment]:
    """Line segments whose two endpoint stars are both visible."""
    by_id: Dict[int, RenderableStar] = {s.id: s for s in visible}
    lines = []
    for seg in segments:
        a = by_id.get(seg.from_id)
        b = by_id.get(seg.to_id)
        if a is None or b is None:
            continue
        lines.append(LineSegment(
            constellation=seg.constellation,
            start=(a.x, a.y, a.z),
            end=(b.x, b.y, b.z),
            color=color,
            opacity=opacity,
        ))
    return lines


@dataclass(frozen=True, slots=True)
class ConstellationLabel:
    name: str
    abbreviation: str
    altitude: float
    azimuth: float
    position: Tuple[float, float, float]


def constellation_labels(constellations: Iterable[ConstellationRecord],
                         ctx: ObserverContext,
                         radius: float = 200.0) -> List[ConstellationLabel]:
    """
    One label per constellation at the mean direction of its cached line
    endpoints, for constellations above the visibility limit.
    """
    labels = []
    for c in constellations:
        pts = [(l.ra1, l.dec1) for l in c.lines] + [(l.ra2, l.dec2) for l in c.lines]
        if not pts:
            continue
        ra, dec = mean_direction(pts)
        hor = equatorial_to_horizontal(ra, dec, ctx.latitude, ctx.lst_hours)
        if not is_visible(hor.altitude):
            continue
        p = horizontal_to_cartesian(hor.azimuth, hor.altitude, radius)
        labels.append(ConstellationLabel(
            name=c.name, abbreviation=c.abbreviation,
            altitude=hor.altitude, azimuth=hor.azimuth,
            position=(p.x, p.y, p.z),
        ))
    return labels
