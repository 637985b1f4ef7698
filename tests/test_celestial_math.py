from __future__ import annotations

import math

import pytest

from core.celestial_math import (
    cartesian_to_horizontal,
    equatorial_to_cartesian,
    equatorial_to_horizontal,
    horizontal_to_cartesian,
    mean_direction,
)
from core.coords import ang_diff_deg, wrap_deg

hypothesis = pytest.importorskip("hypothesis")
st = pytest.importorskip("hypothesis.strategies")
given = hypothesis.given
settings = hypothesis.settings


def _approx(a: float, b: float, tol: float = 1e-6) -> bool:
    return math.isclose(a, b, rel_tol=tol, abs_tol=tol)


_ra = st.floats(min_value=0.0, max_value=24.0, allow_nan=False, allow_infinity=False)
_dec = st.floats(min_value=-90.0, max_value=90.0, allow_nan=False, allow_infinity=False)
_lat = st.floats(min_value=-90.0, max_value=90.0, allow_nan=False, allow_infinity=False)
_lst = st.floats(min_value=0.0, max_value=24.0, allow_nan=False, allow_infinity=False)


@settings(max_examples=300, deadline=None)
@given(_ra, _dec, _lat, _lst)
def test_horizontal_ranges(ra: float, dec: float, lat: float, lst: float) -> None:
    hor = equatorial_to_horizontal(ra, dec, lat, lst)
    assert -90.0 <= hor.altitude <= 90.0
    assert 0.0 <= hor.azimuth < 360.0
    assert 0.0 <= hor.hour_angle < 24.0
    assert all(math.isfinite(v) for v in hor)


@pytest.mark.parametrize("lat,dec", [(35.0, -16.7161), (35.0, 20.0), (-33.9, -60.0), (0.0, 0.0)])
def test_meridian_altitude(lat: float, dec: float) -> None:
    hor = equatorial_to_horizontal(6.0, dec, lat, 6.0)
    assert _approx(hor.altitude, 90.0 - abs(lat - dec))
    assert hor.hour_angle == 0.0


def test_star_south_of_zenith_transits_due_south() -> None:
    hor = equatorial_to_horizontal(6.7525, -16.7161, 35.0, 6.7525)
    assert _approx(hor.azimuth, 180.0)


def test_star_north_of_zenith_transits_due_north() -> None:
    hor = equatorial_to_horizontal(2.5, 80.0, 35.0, 2.5)
    assert abs(ang_diff_deg(hor.azimuth, 0.0)) < 1e-4


def test_rising_star_is_in_the_east() -> None:
    # hour angle 18h (-6h): on the celestial equator it rises due east
    hor = equatorial_to_horizontal(18.0, 0.0, 35.0, 12.0)
    assert _approx(hor.altitude, 0.0)
    assert _approx(hor.azimuth, 90.0)


def test_setting_star_is_in_the_west() -> None:
    hor = equatorial_to_horizontal(6.0, 0.0, 35.0, 12.0)
    assert _approx(hor.azimuth, 270.0)


def test_ra_is_wrapped() -> None:
    a = equatorial_to_horizontal(25.0, 10.0, 35.0, 3.0)
    b = equatorial_to_horizontal(1.0, 10.0, 35.0, 3.0)
    assert _approx(a.altitude, b.altitude)
    assert _approx(a.azimuth, b.azimuth)


@pytest.mark.parametrize("lat,dec", [(90.0, 45.0), (-90.0, -30.0), (35.0, 35.0), (90.0, 90.0)])
def test_pole_and_zenith_stay_finite(lat: float, dec: float) -> None:
    for lst in (0.0, 6.0, 12.0, 18.0):
        hor = equatorial_to_horizontal(3.0, dec, lat, lst)
        assert math.isfinite(hor.altitude)
        assert math.isfinite(hor.azimuth)
        assert 0.0 <= hor.azimuth < 360.0


def test_cartesian_axes() -> None:
    r = 200.0
    north = horizontal_to_cartesian(0.0, 0.0, r)
    east = horizontal_to_cartesian(90.0, 0.0, r)
    zenith = horizontal_to_cartesian(123.0, 90.0, r)
    assert _approx(north.z, r) and _approx(north.x, 0.0)
    assert _approx(east.x, -r) and _approx(east.z, 0.0)
    assert _approx(zenith.y, r)


@settings(max_examples=200, deadline=None)
@given(st.floats(min_value=0.0, max_value=359.99), st.floats(min_value=-89.0, max_value=89.0),
       st.floats(min_value=1.0, max_value=1000.0))
def test_cartesian_round_trip(az: float, alt: float, radius: float) -> None:
    p = horizontal_to_cartesian(az, alt, radius)
    assert _approx(math.sqrt(p.x ** 2 + p.y ** 2 + p.z ** 2), radius, 1e-9)
    az2, alt2 = cartesian_to_horizontal(*p)
    assert abs(alt2 - alt) < 1e-6
    assert abs(ang_diff_deg(az2, az)) < 1e-6


def test_cartesian_to_horizontal_origin() -> None:
    assert cartesian_to_horizontal(0.0, 0.0, 0.0) == (0.0, 0.0)


def test_equatorial_to_cartesian_chain() -> None:
    hor, p = equatorial_to_cartesian(6.7525, -16.7161, 35.0, 6.7525, 200.0)
    assert _approx(hor.altitude, 38.2839)
    assert _approx(p.y, 200.0 * math.sin(math.radians(hor.altitude)))
    assert p.z < 0.0


def test_mean_direction_across_ra_seam() -> None:
    ra, dec = mean_direction([(23.9, 10.0), (0.1, 10.0)])
    assert abs(ang_diff_deg(wrap_deg(ra * 15.0), 0.0)) < 1e-6
    assert dec == pytest.approx(10.0, abs=0.01)
