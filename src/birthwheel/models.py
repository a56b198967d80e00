"""Data model definitions: explicit boundaries between input, compute, and render layers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SignMode(str, Enum):
    """Which label set the wheel and legend show."""

    STAR_ALIGNED = "starAligned"
    TROPICAL = "tropical"


@dataclass(frozen=True)
class BirthMoment:
    """Raw birth input. Validated by the compute entry points, not here."""

    when: datetime  # Civil wall-clock time at the birth place (naive)
    latitude: float  # Latitude (decimal degrees, north positive)
    longitude: float  # Longitude (decimal degrees, east positive)


@dataclass(frozen=True)
class GeoVector:
    """Apparent geocentric position of a body at an instant."""

    x: float  # au, ICRS
    y: float
    z: float
    when: datetime  # UTC instant the vector belongs to


@dataclass(frozen=True)
class EclipticPosition:
    """A point on the ecliptic with its tropical slice."""

    longitude: float  # Degrees from the vernal equinox, [0, 360)
    slice_index: int  # floor(longitude / 30) mod 12
    sign: str  # Tropical sign name ("Aries" ... "Pisces")


@dataclass(frozen=True)
class ConstellationLabel:
    """IAU constellation behind a point, with the coordinates used to find it."""

    name: str  # "Sagittarius"
    abbreviation: str  # "Sgr"
    ra_hours: float  # Right ascension (hours, [0, 24))
    dec_degrees: float  # Declination (degrees)
    instant: datetime  # UTC instant the coordinates were computed for
    anchored: bool = False  # True when instant is the anchor instant, not birth


@dataclass(frozen=True)
class BodyReading:
    """Everything computed for one body. Only the Sun ever carries an anchor label."""

    body: str  # "sun", "moon" or "ascendant"
    ecliptic: EclipticPosition
    at_birth: ConstellationLabel
    anchor: ConstellationLabel | None = None

    @property
    def star_aligned(self) -> ConstellationLabel:
        """Label shown in star-aligned mode: anchor when present, else at-birth."""
        return self.anchor if self.anchor is not None else self.at_birth


@dataclass(frozen=True)
class ChartSnapshot:
    """The sole input to renderers. Fully computed state."""

    moment: BirthMoment
    utc_dt: datetime  # Birth instant resolved to UTC
    sun: BodyReading
    moon: BodyReading
    ascendant: BodyReading

    @property
    def readings(self) -> tuple[BodyReading, ...]:
        return (self.sun, self.moon, self.ascendant)


@dataclass(frozen=True)
class SunSnapshot:
    """Solar-only result for callers that only need the Sun."""

    moment: BirthMoment
    utc_dt: datetime
    sun: BodyReading


@dataclass(frozen=True)
class Place:
    """A geocoder or gazetteer hit."""

    name: str
    country: str
    latitude: float
    longitude: float
    admin1: str | None = None  # State / region
    id: int = 0

    @property
    def label(self) -> str:
        if self.admin1 and self.admin1 != self.name:
            return f"{self.name}, {self.admin1}, {self.country}"
        return f"{self.name}, {self.country}"
