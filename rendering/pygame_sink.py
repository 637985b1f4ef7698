"""
PygameSkySink: reference RenderSink drawing the dome as an all-sky chart.

Projection: azimuthal equidistant, zenith at the centre, horizon on the
rim, North up. Only the upper hemisphere is drawn.
"""

from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple

import pygame

from core.celestial_math import cartesian_to_horizontal
from universe.solar_bodies import BodyPlacement
from .star_field import ConstellationLabel, LineSegment, StarBuffer

BACKGROUND    = (2, 4, 12)
HORIZON_COLOR = (40, 60, 90)
LABEL_COLOR   = (110, 150, 210)


def _scale_rgb(color: int, factor: float) -> Tuple[int, int, int]:
    factor = max(0.0, min(1.0, factor))
    return (int(((color >> 16) & 0xFF) * factor),
            int(((color >> 8) & 0xFF) * factor),
            int((color & 0xFF) * factor))


class PygameSkySink:

    def __init__(self, surface: pygame.Surface, radius_px: Optional[float] = None,
                 sphere_radius: float = 200.0,
                 label_font: Optional[pygame.font.Font] = None):
        self.surface = surface
        w, h = surface.get_size()
        self.cx = w / 2.0
        self.cy = h / 2.0
        self.radius_px = radius_px if radius_px is not None else 0.46 * min(w, h)
        self.sphere_radius = sphere_radius
        self.label_font = label_font

        self.buffer: Optional[StarBuffer] = None
        self.lines: List[LineSegment] = []
        self.lines_visible = True
        self.labels: List[ConstellationLabel] = []
        self.labels_visible = True
        self.bodies: List[BodyPlacement] = []
        self.size_multiplier = 1.0
        self.brightness = 1.0
        self.uploads = 0
        self.disposed = False

    # ── RenderSink ────────────────────────────────────────────────────────────

    def upload_stars(self, buffer: StarBuffer) -> None:
        self.buffer = buffer
        self.uploads += 1

    def refresh_stars(self, buffer: StarBuffer) -> None:
        self.buffer = buffer

    def set_constellation_lines(self, segments: Sequence[LineSegment], visible: bool) -> None:
        self.lines = list(segments)
        self.lines_visible = visible

    def set_constellation_labels(self, labels: Sequence[ConstellationLabel], visible: bool) -> None:
        self.labels = list(labels)
        self.labels_visible = visible

    def place_bodies(self, placements: Sequence[BodyPlacement]) -> None:
        self.bodies = list(placements)

    def set_star_appearance(self, size_multiplier: float, brightness: float) -> None:
        self.size_multiplier = size_multiplier
        self.brightness = brightness

    def dispose(self) -> None:
        self.buffer = None
        self.lines = []
        self.labels = []
        self.bodies = []
        self.disposed = True

    # ── Drawing ───────────────────────────────────────────────────────────────

    def project(self, x: float, y: float, z: float) -> Optional[Tuple[int, int]]:
        """Dome point → screen pixel, None below the horizon."""
        az, alt = cartesian_to_horizontal(x, y, z)
        if alt < 0.0:
            return None
        r = (90.0 - alt) / 90.0 * self.radius_px
        a = math.radians(az)
        return int(round(self.cx + r * math.sin(a))), int(round(self.cy - r * math.cos(a)))

    def draw(self) -> None:
        surf = self.surface
        surf.fill(BACKGROUND)
        if self.disposed:
            return
        pygame.draw.circle(surf, HORIZON_COLOR, (int(self.cx), int(self.cy)),
                           int(self.radius_px), 1)

        if self.lines_visible:
            for seg in self.lines:
                a = self.project(*seg.start)
                b = self.project(*seg.end)
                if a and b:
                    pygame.draw.aaline(surf, _scale_rgb(seg.color, seg.opacity), a, b)

        if self.labels_visible and self.label_font is not None:
            for label in self.labels:
                p = self.project(*label.position)
                if p is not None:
                    text = self.label_font.render(label.abbreviation, True, LABEL_COLOR)
                    surf.blit(text, text.get_rect(center=p))

        if self.buffer is not None:
            data = self.buffer.data
            for i in range(self.buffer.count):
                x, y, z, r, g, b, size, alpha = (float(v) for v in data[i])
                p = self.project(x, y, z)
                if p is None:
                    continue
                k = 255.0 * min(1.0, self.brightness * alpha)
                color = (int(min(255, r * k)), int(min(255, g * k)), int(min(255, b * k)))
                pygame.draw.circle(surf, color, p, max(1, int(round(size * self.size_multiplier))))

        for body in self.bodies:
            if not body.visible:
                continue
            p = self.project(body.x, body.y, body.z)
            if p is None:
                continue
            rad = max(2, int(body.display_radius * self.radius_px / self.sphere_radius))
            light = 1.0 if body.illumination is None else max(0.25, body.illumination)
            pygame.draw.circle(surf, _scale_rgb(body.color, light), p, rad)
