from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from core.types import ObserverContext, PlanetRecord
from universe.solar_bodies import (
    KNOWN_NEW_MOON,
    MOON_MAX_DEC_DEG,
    SYNODIC_MONTH_DAYS,
    BodyPositionApproximator,
    moon_age,
    moon_equatorial,
    moon_illumination,
    moon_phase,
    planet_equatorial,
    sun_equatorial,
)

UTC = timezone.utc


def _radius(p) -> float:
    return math.sqrt(p.x ** 2 + p.y ** 2 + p.z ** 2)


def _ctx(when: datetime, lst: float = 6.0) -> ObserverContext:
    return ObserverContext(latitude=35.0, longitude=45.0, utc=when, lst_hours=lst)


def test_sun_at_march_equinox() -> None:
    ra, dec = sun_equatorial(datetime(2024, 3, 20, 12, tzinfo=UTC))
    assert ra == pytest.approx(0.0, abs=1e-9)
    assert dec == pytest.approx(0.0, abs=1e-9)


def test_sun_at_june_solstice() -> None:
    ra, dec = sun_equatorial(datetime(2023, 6, 21, tzinfo=UTC))
    assert dec == pytest.approx(23.44, abs=0.1)
    # RA in hours: a quarter year after the equinox is ~6h
    assert ra == pytest.approx(6.0, abs=0.2)
    assert 0.0 <= ra < 24.0


def test_sun_ra_before_equinox_wraps() -> None:
    ra, dec = sun_equatorial(datetime(2023, 1, 1, tzinfo=UTC))
    assert 18.0 < ra < 24.0
    assert dec < -20.0


def test_moon_age_at_known_new_moon() -> None:
    assert moon_age(KNOWN_NEW_MOON) == pytest.approx(0.0)
    assert moon_phase(KNOWN_NEW_MOON) == pytest.approx(0.0)
    assert moon_illumination(0.0) == 0.0


def test_moon_full_half_a_month_later() -> None:
    full = KNOWN_NEW_MOON + timedelta(days=SYNODIC_MONTH_DAYS / 2)
    phase = moon_phase(full)
    assert phase == pytest.approx(0.5)
    assert moon_illumination(phase) == pytest.approx(1.0)


def test_moon_age_is_positive_before_reference() -> None:
    age = moon_age(KNOWN_NEW_MOON - timedelta(days=1))
    assert age == pytest.approx(SYNODIC_MONTH_DAYS - 1.0)


def test_moon_age_naive_is_utc() -> None:
    assert moon_age(datetime(2024, 1, 12)) == pytest.approx(1.0)


def test_moon_equatorial_runs_ahead_of_lst() -> None:
    when = KNOWN_NEW_MOON + timedelta(days=4)
    ra, dec = moon_equatorial(when, 23.0)
    assert ra == pytest.approx(1.0)
    assert abs(dec) <= MOON_MAX_DEC_DEG
    assert dec == pytest.approx(math.sin(0.8) * MOON_MAX_DEC_DEG)


def test_planet_offsets() -> None:
    ra, dec = planet_equatorial(1, 0.0)
    assert ra == pytest.approx(2.0)
    assert dec == pytest.approx(math.sin(0.5) * 20.0)
    ra, _ = planet_equatorial(5, 20.0)
    assert ra == pytest.approx(6.0)


def test_placements_sit_inside_star_sphere() -> None:
    approx = BodyPositionApproximator(sphere_radius=200.0, body_scale=0.1)
    ctx = _ctx(datetime(2024, 3, 20, 21, 30, tzinfo=UTC))
    jupiter = PlanetRecord(id=4, name="Jupiter", symbol="♃", color=0xFFA726, radius=1.0, orbit_radius=778.5)

    sun = approx.sun(ctx)
    moon = approx.moon(ctx)
    planet = approx.planet(ctx, jupiter)

    assert _radius(sun) == pytest.approx(190.0)
    assert _radius(moon) == pytest.approx(194.0)
    assert _radius(planet) == pytest.approx(198.0)

    assert sun.kind == "sun" and sun.display_radius == 15.0
    assert moon.phase is not None and 0.0 <= moon.illumination <= 1.0
    assert planet.body_id == "planet-4"
    assert planet.display_radius == pytest.approx(5.0)
    assert planet.color == 0xFFA726


def test_all_respects_visibility_flags() -> None:
    approx = BodyPositionApproximator()
    planets = [PlanetRecord(id=i, name=f"P{i}", symbol="", color=0, radius=0.5, orbit_radius=1.0)
               for i in (1, 2)]
    bodies = approx.all(_ctx(KNOWN_NEW_MOON), planets, show_sun=False, show_planets=False)
    assert [b.kind for b in bodies] == ["sun", "moon", "planet", "planet"]
    assert [b.visible for b in bodies] == [False, True, False, False]


def test_body_uses_star_pipeline_coordinates() -> None:
    approx = BodyPositionApproximator()
    when = datetime(2024, 3, 20, 12, tzinfo=UTC)
    # sun at RA 0 on the meridian for lst 0
    sun = approx.sun(_ctx(when, lst=0.0))
    assert sun.altitude == pytest.approx(90.0 - 35.0, abs=1e-6)
    assert sun.azimuth == pytest.approx(180.0, abs=1e-3)
