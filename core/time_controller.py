"""
TimeController — simulated UTC clock driving the sky dome.

The dome never reads the system clock itself. Once per frame the host
passes the wall time elapsed since the previous frame to step(), and the
simulated instant moves by that amount times the selected rate. The sky can
therefore be frozen, fast-forwarded or run backwards.

    tc = TimeController(speed_idx=3)     # 1 simulated minute per second
    tc.step(frame_dt)                    # every frame
    ctx = tc.observer_context(lat, lon)  # what the pipeline consumes
"""

from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from core.astro_time import as_utc, local_sidereal_time
from core.types import ObserverContext


class Rate(NamedTuple):
    seconds: int    # simulated seconds per wall second
    label: str


RATES = (
    Rate(0, "PAUSED"),
    Rate(1, "1×"),
    Rate(10, "10×"),
    Rate(60, "1min/s"),
    Rate(300, "5min/s"),
    Rate(3600, "1h/s"),
    Rate(86400, "1d/s"),
    Rate(7 * 86400, "1wk/s"),
)
SPEEDS = [r.seconds for r in RATES]
SPEED_LABELS = [r.label for r in RATES]
REAL_TIME = 1


def _clamp_rate(idx: int) -> int:
    return max(0, min(int(idx), len(RATES) - 1))


class TimeController:
    """
    Parameters
    ----------
    start_utc : starting instant, default now (naive values are UTC)
    speed_idx : index into RATES, 0 starts paused
    """

    def __init__(self, start_utc: Optional[datetime] = None, speed_idx: int = REAL_TIME):
        self._utc = as_utc(start_utc) if start_utc is not None else datetime.now(timezone.utc)
        self._rate = _clamp_rate(speed_idx)
        self._reversed = False
        self._paused = self._rate == 0

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def utc(self) -> datetime:
        return self._utc

    @property
    def speed_idx(self) -> int:
        return self._rate

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def speed(self) -> float:
        """Signed simulated seconds per wall second (0 when paused)."""
        if self._paused:
            return 0.0
        sign = -1 if self._reversed else 1
        return RATES[self._rate].seconds * sign

    @property
    def speed_label(self) -> str:
        if self._paused:
            return "PAUSED"
        prefix = "◀◀ " if self._reversed else ""
        return prefix + RATES[self._rate].label

    # ── Controls ─────────────────────────────────────────────────────────────

    def _resume(self) -> None:
        self._paused = False
        if self._rate == 0:
            self._rate = REAL_TIME

    def speed_up(self) -> None:
        if self._paused:
            self._resume()
        else:
            self._rate = _clamp_rate(self._rate + 1)

    def speed_down(self) -> None:
        self._rate = _clamp_rate(self._rate - 1)
        if self._rate == 0:
            self._paused = True

    def toggle_pause(self) -> None:
        if self._paused:
            self._resume()
        else:
            self._paused = True

    def reverse(self) -> None:
        self._reversed = not self._reversed

    def realtime(self) -> None:
        """Forward at 1x from the current system time."""
        self._utc = datetime.now(timezone.utc)
        self._rate = REAL_TIME
        self._reversed = False
        self._paused = False

    def set_speed_idx(self, idx: int) -> None:
        self._rate = _clamp_rate(idx)
        self._paused = self._rate == 0

    def set_utc(self, when: datetime) -> None:
        self._utc = as_utc(when)

    def jump(self, delta_seconds: float) -> None:
        self._utc += timedelta(seconds=delta_seconds)

    # ── Frame update ─────────────────────────────────────────────────────────

    def step(self, dt_wall: float) -> datetime:
        """
        Advance by dt_wall wall-clock seconds and return the new instant.
        Non-positive deltas leave the clock where it is.
        """
        rate = self.speed
        if dt_wall > 0 and rate:
            self._utc += timedelta(seconds=dt_wall * rate)
        return self._utc

    # ── Observer ─────────────────────────────────────────────────────────────

    def lst(self, lon_deg: float) -> float:
        """Local sidereal time in hours [0, 24)."""
        return local_sidereal_time(self._utc, lon_deg)

    def observer_context(self, lat_deg: float, lon_deg: float) -> ObserverContext:
        return ObserverContext.at(lat_deg, lon_deg, self._utc)
