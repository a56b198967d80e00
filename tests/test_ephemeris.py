"""Checks against the real skyfield provider and JPL kernel."""

from datetime import datetime, timezone

import pytest
from skyfield.errors import EphemerisRangeError

from birthwheel.compute import compute_chart_snapshot
from birthwheel.models import BirthMoment

pytestmark = pytest.mark.ephemeris

NEW_YEAR_2000 = datetime(2000, 1, 1, 0, 0)


def test_new_year_2000_sun_in_capricorn_against_sagittarius(sky) -> None:
    moment = BirthMoment(when=NEW_YEAR_2000, latitude=0.0, longitude=0.0)

    chart = compute_chart_snapshot(moment, ephemeris=sky, current_year=2026, timezone_name="UTC")

    assert chart.sun.ecliptic.longitude == pytest.approx(279.86, abs=0.05)
    assert chart.sun.ecliptic.sign == "Capricorn"
    assert chart.sun.at_birth.abbreviation == "Sgr"
    assert chart.sun.anchor.name == "Sagittarius"
    assert chart.sun.anchor.instant == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)


def test_london_midnight_ascendant(sky) -> None:
    moment = BirthMoment(when=NEW_YEAR_2000, latitude=51.5074, longitude=-0.1278)

    chart = compute_chart_snapshot(
        moment, ephemeris=sky, current_year=2026, timezone_name="Europe/London"
    )

    assert chart.ascendant.ecliptic.sign == "Libra"
    assert chart.ascendant.anchor is None


def test_constellation_at_north_celestial_pole(sky) -> None:
    assert sky.constellation_lookup(0.0, 90.0) == ("Ursa Minor", "UMi")


def test_sidereal_time_range(sky) -> None:
    gast = sky.sidereal_time(datetime(2000, 1, 1, tzinfo=timezone.utc))
    assert 0.0 <= gast < 24.0
    assert gast == pytest.approx(6.66, abs=0.01)


def test_ecliptic_of_date_matches_vector_instant(sky) -> None:
    when = datetime(2010, 3, 20, 17, 32, tzinfo=timezone.utc)
    lon, lat = sky.ecliptic_of_date(sky.geocentric_vector("sun", when))
    # March equinox 2010
    assert min(lon % 360.0, 360.0 - lon % 360.0) < 0.01
    assert abs(lat) < 0.001


def test_unsupported_body(sky) -> None:
    with pytest.raises(KeyError):
        sky.geocentric_vector("mars", datetime(2000, 1, 1, tzinfo=timezone.utc))


def test_out_of_kernel_range_propagates(sky) -> None:
    moment = BirthMoment(when=datetime(1800, 6, 1, 12, 0), latitude=10.0, longitude=10.0)
    with pytest.raises(EphemerisRangeError):
        compute_chart_snapshot(moment, ephemeris=sky, current_year=2026, timezone_name="UTC")


def test_real_chart_is_deterministic(sky) -> None:
    moment = BirthMoment(when=datetime(1990, 6, 15, 14, 30), latitude=37.5665, longitude=126.978)
    kwargs = {"ephemeris": sky, "current_year": 2026, "timezone_name": "Asia/Seoul"}
    assert compute_chart_snapshot(moment, **kwargs) == compute_chart_snapshot(moment, **kwargs)
