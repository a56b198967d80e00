"""Shared fixtures: a deterministic fake ephemeris and the real skyfield one."""

from __future__ import annotations

import math
from datetime import datetime

import pytest

from birthwheel.angles import ecliptic_to_equatorial
from birthwheel.compute import compute_chart_snapshot
from birthwheel.config import load_settings
from birthwheel.ephemeris import SkyfieldEphemeris
from birthwheel.models import BirthMoment, ChartSnapshot, GeoVector


class FakeEphemeris:
    """EphemerisProvider stub with fixed longitudes that records every call."""

    def __init__(self, longitudes: dict[str, float] | None = None, gast: float = 6.0) -> None:
        self.longitudes = longitudes or {"sun": 280.0, "moon": 45.0}
        self.gast = gast
        self.calls: list[tuple] = []
        self._bodies: dict[GeoVector, str] = {}

    def geocentric_vector(self, body: str, when: datetime) -> GeoVector:
        self.calls.append(("geocentric_vector", body, when))
        lam = math.radians(self.longitudes[body])
        vector = GeoVector(x=math.cos(lam), y=math.sin(lam), z=0.0, when=when)
        self._bodies[vector] = body
        return vector

    def ecliptic_of_date(self, vector: GeoVector) -> tuple[float, float]:
        self.calls.append(("ecliptic_of_date", vector.when))
        # configured value exactly, wrapped to (-180, 180] so callers must normalize
        lon = self.longitudes[self._bodies[vector]]
        return (lon - 360.0 if lon > 180.0 else lon), 0.0

    def equatorial_coordinates(
        self,
        body: str,
        when: datetime,
        latitude: float,
        longitude: float,
        j2000: bool = True,
        aberration: bool = True,
    ) -> tuple[float, float]:
        self.calls.append(("equatorial_coordinates", body, when, latitude, longitude, aberration))
        return ecliptic_to_equatorial(self.longitudes[body])

    def sidereal_time(self, when: datetime) -> float:
        self.calls.append(("sidereal_time", when))
        return self.gast

    def constellation_lookup(self, ra_hours: float, dec_degrees: float) -> tuple[str, str]:
        self.calls.append(("constellation_lookup", ra_hours, dec_degrees))
        return f"Hour{int(ra_hours)}", f"H{int(ra_hours)}"


@pytest.fixture
def fake_ephemeris() -> FakeEphemeris:
    return FakeEphemeris()


@pytest.fixture(scope="session")
def sky() -> SkyfieldEphemeris:
    """Real skyfield provider. Skips when the kernel cannot be loaded or downloaded."""
    try:
        return SkyfieldEphemeris.from_settings(load_settings())
    except OSError as exc:
        pytest.skip(f"ephemeris kernel unavailable: {exc}")


@pytest.fixture
def make_ephemeris():
    """Factory for fakes with custom longitudes or sidereal time."""
    return FakeEphemeris


@pytest.fixture
def chart_snapshot(fake_ephemeris) -> ChartSnapshot:
    """New York 1990-06-15 14:30 against the fake provider: Sun 280, Moon 45."""
    moment = BirthMoment(when=datetime(1990, 6, 15, 14, 30), latitude=40.7128, longitude=-74.006)
    return compute_chart_snapshot(
        moment, ephemeris=fake_ephemeris, current_year=2026, timezone_name="UTC"
    )
