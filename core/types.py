from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import NamedTuple, Tuple


class HorizontalPosition(NamedTuple):
    altitude: float     # degrees [-90, 90]
    azimuth: float      # degrees [0, 360), North → East
    hour_angle: float   # hours [0, 24)


class CartesianPoint(NamedTuple):
    x: float
    y: float
    z: float


@dataclass(frozen=True, slots=True)
class StarRecord:
    id: int
    name: str
    ra_hours: float
    dec_deg: float
    magnitude: float
    spectral_type: str = "G"
    localized_name: str = ""
    designation: str = ""
    distance_ly: float = 100.0
    color: int = 0xFFFFFF


@dataclass(frozen=True, slots=True)
class ConstellationLine:
    from_name: str
    to_name: str
    # cached J2000 endpoints (hours / degrees)
    ra1: float
    dec1: float
    ra2: float
    dec2: float


@dataclass(frozen=True, slots=True)
class ConstellationRecord:
    id: int
    name: str
    abbreviation: str
    lines: Tuple[ConstellationLine, ...] = ()
    localized_name: str = ""


@dataclass(frozen=True, slots=True)
class ResolvedSegment:
    """A constellation line whose endpoints are bound to star ids."""
    constellation_id: int
    constellation: str
    from_id: int
    to_id: int


@dataclass(frozen=True, slots=True)
class PlanetRecord:
    id: int
    name: str
    symbol: str
    color: int
    radius: float            # relative to Jupiter
    orbit_radius: float      # 10^6 km, informational only
    localized_name: str = ""


@dataclass(frozen=True, slots=True)
class ObserverContext:
    """Where and when the sky is being computed. Rebuilt every tick."""
    latitude: float
    longitude: float
    utc: datetime
    lst_hours: float

    @classmethod
    def at(cls, latitude: float, longitude: float,
           when: datetime | None = None) -> "ObserverContext":
        from core.astro_time import as_utc, local_sidereal_time

        if not -90.0 <= latitude <= 90.0:
            raise ValueError(f"latitude out of range: {latitude}")
        when = datetime.now(timezone.utc) if when is None else as_utc(when)
        return cls(latitude=latitude, longitude=longitude, utc=when,
                   lst_hours=local_sidereal_time(when, longitude))


@dataclass(frozen=True, slots=True)
class RenderableStar:
    star: StarRecord
    altitude: float
    azimuth: float
    hour_angle: float
    x: float
    y: float
    z: float
    size: float
    color: int
    alpha: float
    visible: bool = True

    @property
    def id(self) -> int:
        return self.star.id

    @property
    def name(self) -> str:
        return self.star.name

    @property
    def magnitude(self) -> float:
        return self.star.magnitude

    @property
    def spectral_type(self) -> str:
        return self.star.spectral_type

    @property
    def position(self) -> CartesianPoint:
        return CartesianPoint(self.x, self.y, self.z)
