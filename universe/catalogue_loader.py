"""
Catalogue Loader

Converts the embedded raw datasets into immutable records, and merges an
optional external star source into an existing star list. This is the
bridge between the raw data tables and the CatalogStore.
"""

from __future__ import annotations
import logging
import math
from typing import Any, Iterable, List, Optional, Protocol, Sequence, runtime_checkable

from core.coords import ang_diff_deg, clamp, wrap_hours
from core.types import ConstellationLine, ConstellationRecord, PlanetRecord, StarRecord
from rendering.star_styling import classify_color

LOG = logging.getLogger(__name__)


class CatalogError(Exception):
    """Malformed catalogue data."""


# ---------------------------------------------------------------------------
# Embedded datasets
# ---------------------------------------------------------------------------

def load_stars(data: Optional[Sequence[tuple]] = None) -> List[StarRecord]:
    """
    Load the embedded bright-star sample as StarRecord instances.
    """
    if data is None:
        from catalogs.star_data import STAR_DATA
        data = STAR_DATA

    stars = []
    for entry in data:
        try:
            sid, name, local, bayer, ra, dec, mag, sp_type, dist = entry
        except ValueError as e:
            raise CatalogError(f"Malformed star entry {entry!r}") from e
        stars.append(StarRecord(
            id=int(sid),
            name=name,
            localized_name=local,
            designation=bayer,
            ra_hours=wrap_hours(float(ra)),
            dec_deg=clamp(float(dec), -90.0, 90.0),
            magnitude=float(mag),
            spectral_type=sp_type,
            distance_ly=float(dist),
            color=classify_color(sp_type),
        ))
    return stars


def load_constellations(data: Optional[Sequence[tuple]] = None) -> List[ConstellationRecord]:
    """
    Load constellation figures. Endpoints stay keyed by star name here;
    CatalogStore binds them to ids.
    """
    if data is None:
        from core.constellation_data import CONSTELLATION_DATA
        data = CONSTELLATION_DATA

    records = []
    for entry in data:
        try:
            cid, name, local, abbr, lines = entry
            segs = tuple(
                ConstellationLine(from_name=a, to_name=b,
                                  ra1=wrap_hours(float(ra1)), dec1=float(dec1),
                                  ra2=wrap_hours(float(ra2)), dec2=float(dec2))
                for a, b, ra1, dec1, ra2, dec2 in lines
            )
        except ValueError as e:
            raise CatalogError(f"Malformed constellation entry {entry!r}") from e
        records.append(ConstellationRecord(
            id=int(cid), name=name, localized_name=local,
            abbreviation=abbr, lines=segs,
        ))
    return records


def load_planets(data: Optional[Sequence[tuple]] = None) -> List[PlanetRecord]:
    if data is None:
        from catalogs.planet_data import PLANET_DATA
        data = PLANET_DATA

    planets = []
    for entry in data:
        try:
            pid, name, local, symbol, color, radius, orbit = entry
        except ValueError as e:
            raise CatalogError(f"Malformed planet entry {entry!r}") from e
        planets.append(PlanetRecord(
            id=int(pid), name=name, localized_name=local, symbol=symbol,
            color=int(color), radius=float(radius), orbit_radius=float(orbit),
        ))
    return planets


# ---------------------------------------------------------------------------
# External source merge
# ---------------------------------------------------------------------------

# Two stars closer than this in both RA and Dec are the same star
MERGE_TOLERANCE_DEG = 0.1

DEFAULT_MAG      = 6.0
DEFAULT_TYPE     = "G"
DEFAULT_DISTANCE = 100.0


@runtime_checkable
class ExternalStarSource(Protocol):
    """
    Optional star provider. `stars` yields mappings or objects with
    ra (hours), dec (degrees) and optionally name, arabicName, bayer,
    mag, type, distance.
    """
    @property
    def stars(self) -> Iterable[Any]: ...


def has_star_capability(source: Any) -> bool:
    """True if the source can provide stars to merge."""
    if source is None:
        return False
    stars = getattr(source, "stars", None)
    if stars is None or isinstance(stars, (str, bytes)):
        return False
    try:
        iter(stars)
    except TypeError:
        return False
    return True


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, dict):
        return entry.get(name)
    return getattr(entry, name, None)


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value:
        return value
    return default


def _number(value: Any) -> Optional[float]:
    try:
        f = float(value)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def _is_near(star: StarRecord, ra_hours: float, dec_deg: float) -> bool:
    return (abs(ang_diff_deg(star.ra_hours * 15.0, ra_hours * 15.0)) < MERGE_TOLERANCE_DEG
            and abs(star.dec_deg - dec_deg) < MERGE_TOLERANCE_DEG)


_RA_TILES = int(round(360.0 / MERGE_TOLERANCE_DEG))


def _tile(ra_hours: float, dec_deg: float) -> tuple[int, int]:
    return (int(math.floor(ra_hours * 15.0 / MERGE_TOLERANCE_DEG)) % _RA_TILES,
            int(math.floor((dec_deg + 90.0) / MERGE_TOLERANCE_DEG)))


class _ProximityIndex:
    """
    Tile grid (tile size = merge tolerance) over RA/Dec so each proximity
    check only looks at the 3x3 neighbouring tiles.
    """

    def __init__(self, stars: Iterable[StarRecord]):
        self._tiles: dict[tuple[int, int], List[StarRecord]] = {}
        for s in stars:
            self.add(s)

    def add(self, star: StarRecord) -> None:
        self._tiles.setdefault(_tile(star.ra_hours, star.dec_deg), []).append(star)

    def has_near(self, ra_hours: float, dec_deg: float) -> bool:
        tr, td = _tile(ra_hours, dec_deg)
        for dr in (-1, 0, 1):
            for dd in (-1, 0, 1):
                for s in self._tiles.get(((tr + dr) % _RA_TILES, td + dd), ()):
                    if _is_near(s, ra_hours, dec_deg):
                        return True
        return False


def merge_external(stars: List[StarRecord], source: Any, cap: int) -> int:
    """
    Append external stars that are not already in `stars`.

    A record is added when no existing star lies within 0.1° of it in both
    RA and Dec and the list is still below `cap`. Missing fields get
    defaults; records without a usable ra/dec are skipped.

    Returns:
        Number of stars appended (0 when the source is absent).
    """
    if not has_star_capability(source):
        return 0

    index = _ProximityIndex(stars)
    next_id = max((s.id for s in stars), default=0) + 1
    added = 0
    for entry in source.stars:
        if len(stars) >= cap:
            LOG.info("Star catalogue cap (%d) reached, ignoring remaining external stars", cap)
            break

        ra = _number(_field(entry, "ra"))
        dec = _number(_field(entry, "dec"))
        if ra is None or dec is None:
            LOG.warning("Skipping external star without usable ra/dec: %r", entry)
            continue
        ra = wrap_hours(ra)
        dec = clamp(dec, -90.0, 90.0)

        if index.has_near(ra, dec):
            continue

        # non-string text fields fall back to their defaults
        name = _text(_field(entry, "name"), f"Star {len(stars) + 1}")
        mag = _number(_field(entry, "mag"))
        dist = _number(_field(entry, "distance"))
        sp_type = _text(_field(entry, "type"), DEFAULT_TYPE)

        star = StarRecord(
            id=next_id,
            name=name,
            localized_name=_text(_field(entry, "arabicName"), _text(_field(entry, "name"), "")),
            designation=_text(_field(entry, "bayer"), ""),
            ra_hours=ra,
            dec_deg=dec,
            magnitude=DEFAULT_MAG if mag is None else mag,
            spectral_type=sp_type,
            distance_ly=DEFAULT_DISTANCE if dist is None else dist,
            color=classify_color(sp_type),
        )
        stars.append(star)
        index.add(star)
        next_id += 1
        added += 1

    return added
