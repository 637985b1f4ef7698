"""
Sink contracts — what the sky dome hands to a graphics backend.

The dome never touches scene graphs, materials or widgets; it pushes plain
data into a RenderSink (and optionally a HudSink) and the backend turns it
into pixels.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from universe.solar_bodies import BodyPlacement
    from .star_field import ConstellationLabel, LineSegment, StarBuffer


@runtime_checkable
class RenderSink(Protocol):

    def upload_stars(self, buffer: "StarBuffer") -> None:
        """A new star buffer replaces the previous one (full rebuild)."""

    def refresh_stars(self, buffer: "StarBuffer") -> None:
        """The current buffer was rewritten in place."""

    def set_constellation_lines(self, segments: Sequence["LineSegment"], visible: bool) -> None:
        ...

    def set_constellation_labels(self, labels: Sequence["ConstellationLabel"], visible: bool) -> None:
        ...

    def place_bodies(self, placements: Sequence["BodyPlacement"]) -> None:
        ...

    def set_star_appearance(self, size_multiplier: float, brightness: float) -> None:
        ...

    def dispose(self) -> None:
        """Release every backend resource created for the dome."""


@runtime_checkable
class HudSink(Protocol):

    def show_star_count(self, count: int) -> None:
        ...


def format_star_count(count: int) -> str:
    return f"Visible stars: {count}"
