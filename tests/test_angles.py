import math

import pytest

from birthwheel.angles import (
    OBLIQUITY_J2000,
    deg_to_rad,
    ecliptic_to_equatorial,
    equatorial_to_ecliptic,
    normalize_degrees,
    rad_to_deg,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, 0.0),
        (359.5, 359.5),
        (360.0, 0.0),
        (725.0, 5.0),
        (-30.0, 330.0),
        (-720.5, 359.5),
    ],
)
def test_normalize_degrees(value: float, expected: float) -> None:
    assert normalize_degrees(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [-1e-17, -1e9, -359.999, 0.0, 12.5, 1e6, 1e9 + 0.25])
def test_normalize_degrees_is_idempotent_and_in_range(value: float) -> None:
    once = normalize_degrees(value)
    assert 0.0 <= once < 360.0
    assert normalize_degrees(once) == once


def test_degree_radian_conversions() -> None:
    assert deg_to_rad(180.0) == pytest.approx(math.pi)
    assert rad_to_deg(math.pi / 2) == pytest.approx(90.0)
    assert rad_to_deg(deg_to_rad(23.4392911)) == pytest.approx(23.4392911, abs=1e-12)


def test_equinoxes_and_solstices_project_to_known_equatorial_points() -> None:
    assert ecliptic_to_equatorial(0.0) == pytest.approx((0.0, 0.0), abs=1e-12)
    ra, dec = ecliptic_to_equatorial(90.0)
    assert ra == pytest.approx(6.0)
    assert dec == pytest.approx(OBLIQUITY_J2000)
    ra, dec = ecliptic_to_equatorial(270.0)
    assert ra == pytest.approx(18.0)
    assert dec == pytest.approx(-OBLIQUITY_J2000)


def test_right_ascension_stays_in_hours_range() -> None:
    for step in range(0, 3600):
        ra, _ = ecliptic_to_equatorial(step / 10)
        assert 0.0 <= ra < 24.0


def test_ecliptic_round_trip_within_tolerance() -> None:
    for step in range(0, 3600, 7):
        lam = step / 10
        back, beta = equatorial_to_ecliptic(*ecliptic_to_equatorial(lam))
        diff = (back - lam + 180.0) % 360.0 - 180.0
        assert abs(diff) < 1e-6
        assert abs(beta) < 1e-6
