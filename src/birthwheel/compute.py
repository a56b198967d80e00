"""Chart computation layer for Sun/Moon/Ascendant longitudes, signs, and constellations.

Everything here is a pure function of its arguments and the injected
ephemeris provider. Provider errors are not caught.
"""

import calendar
import logging
import math
from datetime import datetime, timedelta

import pytz
from timezonefinder import TimezoneFinder

from birthwheel.angles import (
    OBLIQUITY_J2000,
    deg_to_rad,
    ecliptic_to_equatorial,
    normalize_degrees,
    rad_to_deg,
)
from birthwheel.config import load_settings
from birthwheel.ephemeris import EphemerisProvider, default_ephemeris
from birthwheel.exceptions import ChartValidationError
from birthwheel.models import (
    BirthMoment,
    BodyReading,
    ChartSnapshot,
    ConstellationLabel,
    EclipticPosition,
    SunSnapshot,
)
from birthwheel.zodiac import classify_longitude

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()

ANCHOR_HOUR_UTC = 12


def validate_moment(moment: BirthMoment, allow_poles: bool = False) -> None:
    """Reject inputs the computation cannot use.

    Raises:
        ChartValidationError: Naming the first offending field.
    """
    if not isinstance(moment.when, datetime):
        raise ChartValidationError("when", "Birth time must be a datetime")
    for field, value, limit in (
        ("latitude", moment.latitude, 90.0),
        ("longitude", moment.longitude, 180.0),
    ):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ChartValidationError(field, f"{field.capitalize()} must be a number")
        if not math.isfinite(value):
            raise ChartValidationError(field, f"{field.capitalize()} must be finite")
        if value < -limit or value > limit:
            raise ChartValidationError(
                field, f"{field.capitalize()} must be between -{limit:g} and {limit:g}"
            )
    # tan(latitude) diverges at the poles and the Ascendant is undefined there
    if not allow_poles and abs(moment.latitude) == 90.0:
        raise ChartValidationError(
            "latitude", "Latitude must be strictly between -90 and 90"
        )


def resolve_utc(moment: BirthMoment, timezone_name: str | None = None) -> datetime:
    """Turn the birth wall-clock time into a UTC datetime.

    Aware datetimes are converted directly. Naive ones are localized to
    timezone_name, or to the zone found at the birth coordinates.

    Raises:
        ChartValidationError: Unknown zone name, or a local time that is
            skipped or repeated by a DST transition.
    """
    if moment.when.tzinfo is not None:
        return moment.when.astimezone(pytz.utc)

    tz_str = timezone_name or _tf.timezone_at(lat=moment.latitude, lng=moment.longitude)
    if tz_str is None:
        tz_str = load_settings().default_timezone
        logger.warning(
            "No timezone at lat=%s lng=%s, using %s",
            moment.latitude,
            moment.longitude,
            tz_str,
        )
    try:
        local_tz = pytz.timezone(tz_str)
    except pytz.UnknownTimeZoneError as exc:
        raise ChartValidationError("timezone_name", f"Unknown timezone: {tz_str}") from exc
    try:
        local_dt = local_tz.localize(moment.when, is_dst=None)
    except pytz.NonExistentTimeError as exc:
        raise ChartValidationError(
            "when", f"{moment.when:%Y-%m-%d %H:%M} does not exist in {tz_str}"
        ) from exc
    except pytz.AmbiguousTimeError as exc:
        raise ChartValidationError(
            "when", f"{moment.when:%Y-%m-%d %H:%M} is ambiguous in {tz_str}"
        ) from exc
    logger.debug("Resolved %s in %s", moment.when, tz_str)
    return local_dt.astimezone(pytz.utc)


def ecliptic_longitude(ephemeris: EphemerisProvider, body: str, when: datetime) -> float:
    """True ecliptic longitude of date for body, in [0, 360)."""
    vector = ephemeris.geocentric_vector(body, when)
    lon, _ = ephemeris.ecliptic_of_date(vector)
    return normalize_degrees(lon)


def ascendant_longitude(
    sidereal_hours: float,
    latitude: float,
    longitude: float,
    obliquity: float = OBLIQUITY_J2000,
) -> float:
    """Ecliptic longitude of the eastern horizon point.

    Args:
        sidereal_hours: Greenwich apparent sidereal time in hours.
        latitude: Observer latitude in degrees. At exactly ±90 tan() blows up
            and atan2 returns a limiting angle rather than raising.
        longitude: Observer longitude in degrees, east positive.
        obliquity: Ecliptic tilt in degrees.

    Returns:
        Longitude in degrees, [0, 360).
    """
    local_sidereal = sidereal_hours + longitude / 15.0
    theta = deg_to_rad(normalize_degrees(local_sidereal * 15.0))
    phi = deg_to_rad(latitude)
    eps = deg_to_rad(obliquity)

    y = -math.cos(theta)
    x = math.sin(theta) * math.cos(eps) + math.tan(phi) * math.sin(eps)
    lam = normalize_degrees(rad_to_deg(math.atan2(y, x)))

    # This atan2 form lands on the descendant; flip to the rising side
    if lam < 180.0:
        lam += 180.0
    else:
        lam -= 180.0
    # lam just under 180 rounds up to 360.0
    return normalize_degrees(lam)


def anchor_instant(birth_when: datetime, current_year: int) -> datetime:
    """Birth month/day in current_year at 12:00 UTC.

    Feb 29 in a non-leap year overflows into Mar 1.
    """
    month, day = birth_when.month, birth_when.day
    if month == 2 and day == 29 and not calendar.isleap(current_year):
        return datetime(current_year, 2, 28, ANCHOR_HOUR_UTC, tzinfo=pytz.utc) + timedelta(
            days=1
        )
    return datetime(current_year, month, day, ANCHOR_HOUR_UTC, tzinfo=pytz.utc)


def resolve_constellation(
    ephemeris: EphemerisProvider,
    ra_hours: float,
    dec_degrees: float,
    instant: datetime,
    anchored: bool = False,
) -> ConstellationLabel:
    name, abbreviation = ephemeris.constellation_lookup(ra_hours, dec_degrees)
    return ConstellationLabel(
        name=name,
        abbreviation=abbreviation,
        ra_hours=ra_hours,
        dec_degrees=dec_degrees,
        instant=instant,
        anchored=anchored,
    )


def body_constellation_at_birth(
    ephemeris: EphemerisProvider, body: str, utc_dt: datetime, moment: BirthMoment
) -> ConstellationLabel:
    """Constellation behind body as seen from the birth place at the birth instant."""
    ra, dec = ephemeris.equatorial_coordinates(
        body, utc_dt, moment.latitude, moment.longitude, j2000=True, aberration=True
    )
    return resolve_constellation(ephemeris, ra, dec, utc_dt)


def sun_anchor_constellation(
    ephemeris: EphemerisProvider, birth_when: datetime, current_year: int
) -> ConstellationLabel:
    """Constellation behind the Sun on the birth calendar date of current_year.

    This is the date-based convention published in popular tables, so it
    ignores the birth year and the observer.
    """
    instant = anchor_instant(birth_when, current_year)
    ra, dec = ephemeris.equatorial_coordinates(
        "sun", instant, 0.0, 0.0, j2000=True, aberration=False
    )
    return resolve_constellation(ephemeris, ra, dec, instant, anchored=True)


def body_reading(
    ephemeris: EphemerisProvider, body: str, utc_dt: datetime, moment: BirthMoment
) -> BodyReading:
    lon = ecliptic_longitude(ephemeris, body, utc_dt)
    logger.debug("%s longitude %.6f at %s", body, lon, utc_dt.isoformat())
    return BodyReading(
        body=body,
        ecliptic=classify_longitude(lon),
        at_birth=body_constellation_at_birth(ephemeris, body, utc_dt, moment),
    )


def ascendant_reading(
    ephemeris: EphemerisProvider, utc_dt: datetime, moment: BirthMoment
) -> BodyReading:
    """Ascendant longitude, sign, and the constellation at that ecliptic point."""
    lon = ascendant_longitude(
        ephemeris.sidereal_time(utc_dt), moment.latitude, moment.longitude
    )
    logger.debug("ascendant longitude %.6f at %s", lon, utc_dt.isoformat())
    ecliptic: EclipticPosition = classify_longitude(lon)
    ra, dec = ecliptic_to_equatorial(ecliptic.longitude, OBLIQUITY_J2000)
    return BodyReading(
        body="ascendant",
        ecliptic=ecliptic,
        at_birth=resolve_constellation(ephemeris, ra, dec, utc_dt),
    )


def _sun_reading(
    ephemeris: EphemerisProvider,
    utc_dt: datetime,
    moment: BirthMoment,
    current_year: int,
) -> BodyReading:
    reading = body_reading(ephemeris, "sun", utc_dt, moment)
    return BodyReading(
        body=reading.body,
        ecliptic=reading.ecliptic,
        at_birth=reading.at_birth,
        anchor=sun_anchor_constellation(ephemeris, moment.when, current_year),
    )


def _current_year() -> int:
    return datetime.now(pytz.utc).year


def compute_chart_snapshot(
    moment: BirthMoment,
    ephemeris: EphemerisProvider | None = None,
    current_year: int | None = None,
    timezone_name: str | None = None,
) -> ChartSnapshot:
    """Top-level entry point: Sun, Moon and Ascendant for one birth moment.

    Args:
        moment: Birth wall-clock time and place.
        ephemeris: Provider to use. The shared skyfield provider if None.
        current_year: Year of the Sun's anchor instant. Read from the clock if None.
        timezone_name: IANA zone for a naive moment.when. Looked up from the
            coordinates if None.

    Returns:
        A fresh ChartSnapshot.

    Raises:
        ChartValidationError: Before any ephemeris call, for bad input.
    """
    validate_moment(moment)
    utc_dt = resolve_utc(moment, timezone_name)
    if ephemeris is None:
        ephemeris = default_ephemeris()
    year = current_year if current_year is not None else _current_year()

    return ChartSnapshot(
        moment=moment,
        utc_dt=utc_dt,
        sun=_sun_reading(ephemeris, utc_dt, moment, year),
        moon=body_reading(ephemeris, "moon", utc_dt, moment),
        ascendant=ascendant_reading(ephemeris, utc_dt, moment),
    )


def compute_sun_snapshot(
    moment: BirthMoment,
    ephemeris: EphemerisProvider | None = None,
    current_year: int | None = None,
    timezone_name: str | None = None,
) -> SunSnapshot:
    """Sun only: tropical sign plus at-birth and anchor constellations.

    Unlike the full chart, the poles are accepted since no Ascendant is derived.
    """
    validate_moment(moment, allow_poles=True)
    utc_dt = resolve_utc(moment, timezone_name)
    if ephemeris is None:
        ephemeris = default_ephemeris()
    year = current_year if current_year is not None else _current_year()

    return SunSnapshot(
        moment=moment,
        utc_dt=utc_dt,
        sun=_sun_reading(ephemeris, utc_dt, moment, year),
    )
