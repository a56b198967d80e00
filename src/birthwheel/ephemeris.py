"""Ephemeris provider contract and its skyfield implementation.

The compute layer only talks to :class:`EphemerisProvider`; tests inject a
fake, the application uses :func:`default_ephemeris`.
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Protocol

from skyfield.api import (
    Loader,
    load_constellation_map,
    load_constellation_names,
    position_of_radec,
    wgs84,
)
from skyfield.framelib import ecliptic_frame
from skyfield.functions import mxv, to_spherical

from birthwheel.angles import rad_to_deg
from birthwheel.config import Settings, load_settings
from birthwheel.models import GeoVector

logger = logging.getLogger(__name__)

BODIES = ("sun", "moon")


class EphemerisProvider(Protocol):
    """What the compute layer needs from an ephemeris engine.

    All instants are timezone-aware UTC datetimes.
    """

    def geocentric_vector(self, body: str, when: datetime) -> GeoVector:
        """Apparent (aberration-corrected) geocentric position of body."""
        ...

    def ecliptic_of_date(self, vector: GeoVector) -> tuple[float, float]:
        """(longitude, latitude) in degrees on the true ecliptic and equinox of vector.when."""
        ...

    def equatorial_coordinates(
        self,
        body: str,
        when: datetime,
        latitude: float,
        longitude: float,
        j2000: bool = True,
        aberration: bool = True,
    ) -> tuple[float, float]:
        """(right ascension hours, declination degrees) seen from the observer."""
        ...

    def sidereal_time(self, when: datetime) -> float:
        """Greenwich apparent sidereal time in hours."""
        ...

    def constellation_lookup(self, ra_hours: float, dec_degrees: float) -> tuple[str, str]:
        """(IAU name, abbreviation) of the constellation holding a J2000 RA/Dec."""
        ...


class SkyfieldEphemeris:
    """EphemerisProvider backed by skyfield and a JPL kernel."""

    def __init__(self, data_dir: str, kernel: str = "de421.bsp") -> None:
        self._loader = Loader(data_dir)
        logger.info("Loading ephemeris %s from %s", kernel, data_dir)
        self._eph = self._loader(kernel)
        self._earth = self._eph["earth"]
        self._ts = self._loader.timescale()
        self._constellation_at = load_constellation_map()
        self._constellation_names = dict(load_constellation_names())

    @classmethod
    def from_settings(cls, settings: Settings) -> "SkyfieldEphemeris":
        return cls(str(settings.data_dir), settings.ephemeris)

    def _body(self, body: str):
        if body not in BODIES:
            raise KeyError(f"Unsupported body: {body}")
        return self._eph[body]

    def geocentric_vector(self, body: str, when: datetime) -> GeoVector:
        t = self._ts.from_datetime(when)
        apparent = self._earth.at(t).observe(self._body(body)).apparent()
        x, y, z = apparent.position.au
        return GeoVector(x=float(x), y=float(y), z=float(z), when=when)

    def ecliptic_of_date(self, vector: GeoVector) -> tuple[float, float]:
        t = self._ts.from_datetime(vector.when)
        rotated = mxv(ecliptic_frame.rotation_at(t), [vector.x, vector.y, vector.z])
        _, lat, lon = to_spherical(rotated)
        return rad_to_deg(float(lon)), rad_to_deg(float(lat))

    def equatorial_coordinates(
        self,
        body: str,
        when: datetime,
        latitude: float,
        longitude: float,
        j2000: bool = True,
        aberration: bool = True,
    ) -> tuple[float, float]:
        t = self._ts.from_datetime(when)
        observer = self._earth + wgs84.latlon(
            latitude_degrees=latitude, longitude_degrees=longitude
        )
        position = observer.at(t).observe(self._body(body))
        if aberration:
            position = position.apparent()
        ra, dec, _ = position.radec() if j2000 else position.radec(epoch="date")
        return float(ra.hours), float(dec.degrees)

    def sidereal_time(self, when: datetime) -> float:
        return float(self._ts.from_datetime(when).gast)

    def constellation_lookup(self, ra_hours: float, dec_degrees: float) -> tuple[str, str]:
        abbreviation = str(self._constellation_at(position_of_radec(ra_hours, dec_degrees)))
        return self._constellation_names.get(abbreviation, abbreviation), abbreviation


@lru_cache(maxsize=1)
def default_ephemeris() -> SkyfieldEphemeris:
    """Process-wide provider, loaded on first use."""
    return SkyfieldEphemeris.from_settings(load_settings())
