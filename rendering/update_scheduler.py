"""
Update scheduling for the sky dome.

UpdateScheduler
    Throttles full position recomputes to a fixed cadence. claim() records
    the tick *before* the caller does any work, so a nested call arriving
    while that recompute runs sees the tick as taken.

LODPolicy
    Tracks the camera. When it has travelled more than `lod_distance` since
    the last check, the star budget is re-evaluated from the camera's range
    to the dome centre: near → `near_budget`, far → `far_budget`. A new
    budget only affects the next full rebuild.
"""

from __future__ import annotations
import logging
import math
from typing import Optional, Sequence, Tuple

from core.coords import distance
from core.settings import FAR_LOD_DISTANCE, FAR_MAX_STARS, LOD_DISTANCE, NEAR_MAX_STARS, UPDATE_INTERVAL_S

LOG = logging.getLogger(__name__)


class UpdateScheduler:

    def __init__(self, interval_s: float = UPDATE_INTERVAL_S):
        self.interval_s = interval_s
        self.last_update: Optional[float] = None

    def due(self, now: float) -> bool:
        if self.last_update is None:
            return True
        return now - self.last_update >= self.interval_s

    def claim(self, now: float) -> bool:
        """True if a recompute should run now; marks the tick as taken."""
        if not self.due(now):
            return False
        self.last_update = now
        return True

    def reset(self) -> None:
        self.last_update = None


class LODPolicy:

    def __init__(self,
                 lod_distance: float = LOD_DISTANCE,
                 far_distance: float = FAR_LOD_DISTANCE,
                 near_budget: int = NEAR_MAX_STARS,
                 far_budget: int = FAR_MAX_STARS):
        self.lod_distance = lod_distance
        self.far_distance = far_distance
        self.near_budget  = near_budget
        self.far_budget   = far_budget
        self.budget       = near_budget
        self.last_position: Optional[Tuple[float, float, float]] = None

    def budget_for(self, position: Sequence[float]) -> int:
        r = math.sqrt(position[0]**2 + position[1]**2 + position[2]**2)
        return self.far_budget if r > self.far_distance else self.near_budget

    def observe(self, position: Sequence[float]) -> bool:
        """
        Feed the current camera position.
        Returns True when the star budget changed.
        """
        pos = (float(position[0]), float(position[1]), float(position[2]))
        if self.last_position is None:
            self.last_position = pos
            return False

        if distance(pos, self.last_position) <= self.lod_distance:
            return False

        self.last_position = pos
        budget = self.budget_for(pos)
        if budget == self.budget:
            return False
        LOG.debug("LOD star budget %d → %d", self.budget, budget)
        self.budget = budget
        return True

    def reset(self) -> None:
        self.budget = self.near_budget
        self.last_position = None
