"""
CatalogStore — the single source of truth for stars, constellations and
planets shown on the dome.

Populated at startup from the embedded datasets, optionally extended by an
external star source. All other systems (star field, constellation lines,
solar system) query the store; they never hold their own catalogue lists.

Query interface
---------------
  store.stars                      → all stars (catalogue order)
  store.star_by_id(7)              → single star
  store.find_star_by_name("vega")  → name / localized name lookup
  store.brightest(20)              → brightest stars first
  store.resolved_segments()        → constellation lines bound to star ids

Name → id binding
-----------------
Constellation lines name their endpoint stars. The store binds those names
to star ids once per catalogue change (load / merge); from then on the
pipeline works with ids only. Lines naming an unknown star are dropped.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from core.settings import MAX_CATALOG_STARS
from core.types import ConstellationRecord, PlanetRecord, ResolvedSegment, StarRecord
from .catalogue_loader import (
    load_constellations,
    load_planets,
    load_stars,
    merge_external,
)

LOG = logging.getLogger(__name__)


class CatalogStore:
    """
    Central repository of catalogue records.

    Records are immutable; the star list only grows (external merge) until
    clear() is called.
    """

    def __init__(self, cap: int = MAX_CATALOG_STARS):
        self.cap = cap
        self._stars: List[StarRecord] = []
        self._constellations: List[ConstellationRecord] = []
        self._planets: List[PlanetRecord] = []

        # Derived lookups (rebuilt when the catalogue changes)
        self._by_id: Dict[int, StarRecord] = {}
        self._by_name: Dict[str, int] = {}
        self._segments: List[ResolvedSegment] = []
        self._dirty = True
        self.initialized = False

    # -----------------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------------

    def load_stars(self) -> None:
        self._stars = load_stars()[: self.cap]
        self._dirty = True

    def load_constellations(self) -> None:
        self._constellations = load_constellations()
        self._dirty = True

    def load_planets(self) -> None:
        self._planets = load_planets()

    def merge_external(self, source: Any) -> int:
        """
        Merge stars from an optional external source.
        Absent source → no-op. Returns the number of stars added.
        """
        added = merge_external(self._stars, source, self.cap)
        if added:
            self._dirty = True
            LOG.info("Merged %d external stars (catalogue now %d)", added, len(self._stars))
        return added

    def initialize(self, source: Any = None) -> bool:
        """
        Load all embedded data, merge the external source, bind constellation
        lines. Returns False (and logs) on failure instead of raising.
        """
        try:
            self.load_stars()
            self.load_constellations()
            self.load_planets()
            self.merge_external(source)
            self._rebuild_index()
        except Exception:
            LOG.exception("Catalogue initialisation failed")
            self.clear()
            return False

        self.initialized = True
        LOG.info("Catalogue ready: %d stars, %d constellations, %d planets",
                 len(self._stars), len(self._constellations), len(self._planets))
        return True

    def clear(self) -> None:
        self._stars = []
        self._constellations = []
        self._planets = []
        self._by_id = {}
        self._by_name = {}
        self._segments = []
        self._dirty = True
        self.initialized = False

    # -----------------------------------------------------------------------
    # Internal index
    # -----------------------------------------------------------------------

    def _rebuild_index(self) -> None:
        if not self._dirty:
            return
        self._by_id = {s.id: s for s in self._stars}

        by_name: Dict[str, int] = {}
        for s in self._stars:
            for key in (s.name, s.localized_name):
                if not key:
                    continue
                key = key.casefold()
                if key in by_name and by_name[key] != s.id:
                    LOG.warning("Star name %r is ambiguous (ids %d, %d); keeping the first",
                                key, by_name[key], s.id)
                    continue
                by_name[key] = s.id
        self._by_name = by_name

        segments = []
        for c in self._constellations:
            for line in c.lines:
                a = by_name.get(line.from_name.casefold())
                b = by_name.get(line.to_name.casefold())
                if a is None or b is None:
                    LOG.debug("Skipping %s line %s → %s: star not in catalogue",
                              c.abbreviation, line.from_name, line.to_name)
                    continue
                segments.append(ResolvedSegment(
                    constellation_id=c.id, constellation=c.name,
                    from_id=a, to_id=b,
                ))
        self._segments = segments
        self._dirty = False

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    @property
    def stars(self) -> Tuple[StarRecord, ...]:
        return tuple(self._stars)

    @property
    def constellations(self) -> Tuple[ConstellationRecord, ...]:
        return tuple(self._constellations)

    @property
    def planets(self) -> Tuple[PlanetRecord, ...]:
        return tuple(self._planets)

    @property
    def star_count(self) -> int:
        return len(self._stars)

    def star_by_id(self, star_id: int) -> Optional[StarRecord]:
        self._rebuild_index()
        return self._by_id.get(star_id)

    def find_star_by_name(self, name: str) -> Optional[StarRecord]:
        """
        Exact (case-insensitive) match on name or localized name first,
        then the first star whose name contains `name`.
        """
        if not name:
            return None
        self._rebuild_index()
        key = name.casefold()
        sid = self._by_name.get(key)
        if sid is not None:
            return self._by_id[sid]
        for s in self._stars:
            if key in s.name.casefold() or key in s.localized_name.casefold():
                return s
        return None

    def brightest(self, limit: int = 20) -> List[StarRecord]:
        return sorted(self._stars, key=lambda s: s.magnitude)[:limit]

    def resolved_segments(self) -> List[ResolvedSegment]:
        self._rebuild_index()
        return list(self._segments)

    def __len__(self) -> int:
        return len(self._stars)

    def __repr__(self) -> str:
        return (f"CatalogStore(stars={len(self._stars)}, "
                f"constellations={len(self._constellations)}, "
                f"planets={len(self._planets)})")
