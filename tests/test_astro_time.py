from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from core.astro_time import day_of_year, gmst_deg, julian_date, local_sidereal_time, utc_hours

UTC = timezone.utc
J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=UTC)


def _approx(a: float, b: float, tol: float = 1e-9) -> bool:
    return math.isclose(a, b, rel_tol=tol, abs_tol=tol)


def test_julian_date_at_j2000() -> None:
    assert _approx(julian_date(J2000), 2451545.0)


def test_julian_date_at_unix_epoch() -> None:
    assert _approx(julian_date(datetime(1970, 1, 1, tzinfo=UTC)), 2440587.5)


def test_naive_datetime_is_utc() -> None:
    assert julian_date(datetime(2000, 1, 1, 12)) == julian_date(J2000)


def test_aware_datetime_is_converted_to_utc() -> None:
    plus3 = timezone(timedelta(hours=3))
    local = datetime(2000, 1, 1, 15, 0, 0, tzinfo=plus3)
    assert _approx(julian_date(local), 2451545.0)
    assert utc_hours(local) == 12.0


def test_gmst_at_j2000() -> None:
    assert _approx(gmst_deg(2451545.0), 280.46061837)


def test_utc_hours_ignores_fractional_seconds() -> None:
    dt = datetime(2024, 5, 1, 6, 30, 15, 900000, tzinfo=UTC)
    assert _approx(utc_hours(dt), 6 + 30 / 60 + 15 / 3600)


def test_local_sidereal_time_formula_at_j2000() -> None:
    # GMST/15 + lon/15 + UT, wrapped
    expected = (280.46061837 / 15.0 + 12.0) % 24.0
    assert _approx(local_sidereal_time(J2000, 0.0), expected)


def test_local_sidereal_time_longitude_shift() -> None:
    base = local_sidereal_time(J2000, 0.0)
    east = local_sidereal_time(J2000, 45.0)
    assert _approx((east - base) % 24.0, 3.0)


@pytest.mark.parametrize("lon", [-180.0, -45.0, 0.0, 45.0, 179.9])
def test_local_sidereal_time_in_range(lon: float) -> None:
    for hours in range(0, 48, 5):
        lst = local_sidereal_time(J2000 + timedelta(hours=hours), lon)
        assert 0.0 <= lst < 24.0


def test_local_sidereal_time_advances_with_time() -> None:
    t = datetime(2024, 6, 1, 0, 0, 0, tzinfo=UTC)
    prev = local_sidereal_time(t, 45.0)
    for _ in range(24 * 60):
        t += timedelta(minutes=1)
        cur = local_sidereal_time(t, 45.0)
        step = (cur - prev) % 24.0
        assert 0.0 < step < 0.1
        prev = cur


def test_day_of_year() -> None:
    assert day_of_year(datetime(2024, 1, 1, tzinfo=UTC)) == 1
    assert day_of_year(datetime(2024, 3, 20, tzinfo=UTC)) == 80
    assert day_of_year(datetime(2024, 12, 31, tzinfo=UTC)) == 366
