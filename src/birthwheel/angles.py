"""Angle helpers and the fixed-obliquity ecliptic/equatorial rotation."""

import math

# J2000 mean obliquity of the ecliptic. Held constant instead of using the
# obliquity of date: costs a few arcseconds, keeps every derived value stable.
OBLIQUITY_J2000 = 23.4392911


def normalize_degrees(value: float) -> float:
    """Wrap an angle into [0, 360)."""
    m = value % 360.0
    if m < 0:
        m += 360.0
    # -1e-17 % 360 rounds up to 360.0
    if m >= 360.0:
        m -= 360.0
    return m


def deg_to_rad(value: float) -> float:
    return value * math.pi / 180.0


def rad_to_deg(value: float) -> float:
    return value * 180.0 / math.pi


def ecliptic_to_equatorial(
    longitude: float, obliquity: float = OBLIQUITY_J2000
) -> tuple[float, float]:
    """Project a point on the ecliptic (beta = 0) to equatorial coordinates.

    Args:
        longitude: Ecliptic longitude in degrees.
        obliquity: Tilt of the ecliptic in degrees.

    Returns:
        (right ascension in hours [0, 24), declination in degrees).
    """
    lam = deg_to_rad(longitude)
    eps = deg_to_rad(obliquity)
    alpha = math.atan2(math.sin(lam) * math.cos(eps), math.cos(lam))
    if alpha < 0:
        alpha += 2 * math.pi
    delta = math.asin(math.sin(eps) * math.sin(lam))
    ra_hours = rad_to_deg(alpha) / 15.0
    if ra_hours >= 24.0:
        ra_hours -= 24.0
    return ra_hours, rad_to_deg(delta)


def equatorial_to_ecliptic(
    ra_hours: float, dec_degrees: float, obliquity: float = OBLIQUITY_J2000
) -> tuple[float, float]:
    """Inverse of :func:`ecliptic_to_equatorial` for any point on the sphere.

    Returns:
        (ecliptic longitude in degrees [0, 360), ecliptic latitude in degrees).
    """
    alpha = deg_to_rad(ra_hours * 15.0)
    delta = deg_to_rad(dec_degrees)
    eps = deg_to_rad(obliquity)
    lam = math.atan2(
        math.sin(alpha) * math.cos(eps) + math.tan(delta) * math.sin(eps),
        math.cos(alpha),
    )
    beta = math.asin(
        math.sin(delta) * math.cos(eps)
        - math.cos(delta) * math.sin(eps) * math.sin(alpha)
    )
    return normalize_degrees(rad_to_deg(lam)), rad_to_deg(beta)
