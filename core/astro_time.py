from __future__ import annotations
from datetime import datetime, timezone

# Lightweight time utilities (no external deps).
# We use UTC internally; naive datetimes are taken as UTC.

UNIX_EPOCH_JD = 2440587.5
J2000_JD      = 2451545.0
MS_PER_DAY    = 86400000.0


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def epoch_millis(dt: datetime) -> float:
    """Milliseconds since 1970-01-01T00:00Z."""
    return as_utc(dt).timestamp() * 1000.0


def julian_date(dt: datetime) -> float:
    """Julian Date straight from the Unix epoch offset."""
    return UNIX_EPOCH_JD + epoch_millis(dt) / MS_PER_DAY


def utc_hours(dt: datetime) -> float:
    """Fractional UTC hour of day (whole seconds only)."""
    dt = as_utc(dt)
    return dt.hour + dt.minute / 60.0 + dt.second / 3600.0


def day_of_year(dt: datetime) -> int:
    """1 on January 1st (UTC)."""
    return as_utc(dt).timetuple().tm_yday


def gmst_deg(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees [0, 360).
    IAU 1982 polynomial in Julian centuries from J2000.
    """
    T = (jd - J2000_JD) / 36525.0
    gmst = 280.46061837 + 360.98564736629*(jd - J2000_JD) + 0.000387933*T*T - (T*T*T)/38710000.0
    return gmst % 360.0


def local_sidereal_time(dt: datetime, longitude_deg: float) -> float:
    """
    Local Sidereal Time in hours [0, 24).

    LST = (GMST/15 + longitude/15 + UT) mod 24, longitude positive East.
    """
    gmst = gmst_deg(julian_date(dt))
    lst = (gmst / 15.0 + longitude_deg / 15.0 + utc_hours(dt)) % 24.0
    return 0.0 if lst >= 24.0 else lst
