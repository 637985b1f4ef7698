from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.time_controller import TimeController

FIXED_UTC = datetime(2024, 3, 20, 21, 30, 0, tzinfo=timezone.utc)


class RecordingSink:
    """RenderSink that remembers every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.buffer = None
        self.uploads = 0
        self.refreshes = 0
        self.lines = []
        self.lines_visible = None
        self.labels = []
        self.labels_visible = None
        self.bodies = []
        self.appearance = None
        self.disposed = 0

    def upload_stars(self, buffer) -> None:
        self.calls.append("upload_stars")
        self.buffer = buffer
        self.uploads += 1

    def refresh_stars(self, buffer) -> None:
        self.calls.append("refresh_stars")
        self.buffer = buffer
        self.refreshes += 1

    def set_constellation_lines(self, segments, visible) -> None:
        self.calls.append("set_constellation_lines")
        self.lines = list(segments)
        self.lines_visible = visible

    def set_constellation_labels(self, labels, visible) -> None:
        self.calls.append("set_constellation_labels")
        self.labels = list(labels)
        self.labels_visible = visible

    def place_bodies(self, placements) -> None:
        self.calls.append("place_bodies")
        self.bodies = list(placements)

    def set_star_appearance(self, size_multiplier, brightness) -> None:
        self.calls.append("set_star_appearance")
        self.appearance = (size_multiplier, brightness)

    def dispose(self) -> None:
        self.calls.append("dispose")
        self.disposed += 1


class RecordingHud:

    def __init__(self) -> None:
        self.counts: list[int] = []

    def show_star_count(self, count: int) -> None:
        self.counts.append(count)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def hud() -> RecordingHud:
    return RecordingHud()


@pytest.fixture
def paused_clock() -> TimeController:
    return TimeController(start_utc=FIXED_UTC, speed_idx=0)
