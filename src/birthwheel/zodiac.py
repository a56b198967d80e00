"""Tropical sign classification and the label rings drawn on the wheel."""

from birthwheel.angles import normalize_degrees
from birthwheel.models import BodyReading, EclipticPosition, SignMode

SIGN_LABELS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

# The 13 constellations the Sun crosses, in wheel order
STAR_ALIGNED_LABELS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Ophiuchus",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

# IAU names that differ from the wheel's short names
_IAU_TO_WHEEL: dict[str, str] = {
    "Scorpius": "Scorpio",
    "Capricornus": "Capricorn",
}


def slice_index(longitude: float, slices: int = 12) -> int:
    """Zero-based slice for a longitude. Boundary values belong to the upper slice."""
    step = 360.0 / slices
    return int(normalize_degrees(longitude) // step) % slices


def classify_longitude(longitude: float) -> EclipticPosition:
    """Normalize a longitude and attach its tropical sign."""
    lon = normalize_degrees(longitude)
    idx = slice_index(lon)
    return EclipticPosition(longitude=lon, slice_index=idx, sign=SIGN_LABELS[idx])


def wheel_name(constellation_name: str) -> str:
    """Map an IAU constellation name onto the wheel's label spelling."""
    return _IAU_TO_WHEEL.get(constellation_name, constellation_name)


def label_for(reading: BodyReading, mode: SignMode) -> str:
    """The label a body gets in the given mode."""
    if mode is SignMode.TROPICAL:
        return reading.ecliptic.sign
    return wheel_name(reading.star_aligned.name)


def rotate(labels: tuple[str, ...], offset: int) -> tuple[str, ...]:
    """Rotate a label ring left by offset (negative rotates right)."""
    n = len(labels)
    if not n:
        return ()
    k = offset % n
    return labels[k:] + labels[:k]


def ring_labels(
    mode: SignMode,
    sun_longitude: float | None = None,
    sun_constellation: str | None = None,
) -> tuple[str, ...]:
    """Labels for the wheel slices, starting at 0° ecliptic longitude.

    The tropical ring is fixed. The star-aligned ring is rotated so that the
    slice holding the Sun carries the Sun's anchor constellation. Without a
    Sun position the ring is left unrotated.
    """
    if mode is SignMode.TROPICAL:
        return SIGN_LABELS
    labels = STAR_ALIGNED_LABELS
    if sun_longitude is None or not sun_constellation:
        return labels
    target_name = wheel_name(sun_constellation).lower()
    targets = [i for i, s in enumerate(labels) if s.lower() == target_name]
    if not targets:
        return labels
    sun_slice = slice_index(sun_longitude, len(labels))
    return rotate(labels, targets[0] - sun_slice)


def name_on_ring(ring: tuple[str, ...], longitude: float) -> str:
    """Label of the ring slice that holds longitude."""
    return ring[slice_index(longitude, len(ring))]
