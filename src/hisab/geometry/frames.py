"""Time scales and reference-frame quantities (Meeus, Astronomical Algorithms).

Everything here is a pure function of a timestamp. Angles are degrees unless a
name says otherwise.
"""

import math
from datetime import datetime, timezone

import numpy as np

J2000 = 2451545.0
DAYS_PER_CENTURY = 36525.0
SECONDS_PER_DAY = 86400.0


def as_utc(instant: datetime) -> datetime:
    """Return ``instant`` as an aware UTC datetime (naive values are taken as UTC)."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def _julian_day(year: int, month: int, day: float) -> float:
    """Calculate Julian Day number for a Gregorian calendar date."""
    if month <= 2:
        year -= 1
        month += 12

    a = year // 100
    b = 2 - a + a // 4

    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
    )


def julian_day(instant: datetime) -> float:
    """Julian Day (UT) of an instant."""
    utc = as_utc(instant)
    day_fraction = (
        utc.hour * 3600.0 + utc.minute * 60.0 + utc.second + utc.microsecond / 1e6
    ) / SECONDS_PER_DAY
    return _julian_day(utc.year, utc.month, utc.day + day_fraction)


def decimal_year(instant: datetime) -> float:
    utc = as_utc(instant)
    return utc.year + (utc.month - 0.5) / 12.0


def delta_t(year: float) -> float:
    """TT - UT in seconds from the Espenak-Meeus polynomials.

    Valid between 1860 and 2150; outside that span the long-term parabola is
    used and the error grows to minutes. That is an accuracy degradation, the
    value is still returned.
    """
    if 1860.0 <= year < 1900.0:
        t = year - 1860.0
        return (
            7.62
            + 0.5737 * t
            - 0.251754 * t**2
            + 0.01680668 * t**3
            - 0.0004473624 * t**4
            + t**5 / 233174.0
        )
    if 1900.0 <= year < 1920.0:
        t = year - 1900.0
        return -2.79 + 1.494119 * t - 0.0598939 * t**2 + 0.0061966 * t**3 - 0.000197 * t**4
    if 1920.0 <= year < 1941.0:
        t = year - 1920.0
        return 21.20 + 0.84493 * t - 0.076100 * t**2 + 0.0020936 * t**3
    if 1941.0 <= year < 1961.0:
        t = year - 1950.0
        return 29.07 + 0.407 * t - t**2 / 233.0 + t**3 / 2547.0
    if 1961.0 <= year < 1986.0:
        t = year - 1975.0
        return 45.45 + 1.067 * t - t**2 / 260.0 - t**3 / 718.0
    if 1986.0 <= year < 2005.0:
        t = year - 2000.0
        return (
            63.86
            + 0.3345 * t
            - 0.060374 * t**2
            + 0.0017275 * t**3
            + 0.000651814 * t**4
            + 0.00002373599 * t**5
        )
    if 2005.0 <= year < 2050.0:
        t = year - 2000.0
        return 62.92 + 0.32217 * t + 0.005589 * t**2
    u = (year - 1820.0) / 100.0
    if 2050.0 <= year < 2150.0:
        return -20.0 + 32.0 * u**2 - 0.5628 * (2150.0 - year)
    return -20.0 + 32.0 * u**2


def julian_ephemeris_day(instant: datetime) -> float:
    """Julian Ephemeris Day (TT) of a UTC instant."""
    return julian_day(instant) + delta_t(decimal_year(instant)) / SECONDS_PER_DAY


def julian_centuries(jd: float) -> float:
    """Julian centuries elapsed since J2000.0."""
    return (jd - J2000) / DAYS_PER_CENTURY


def mean_obliquity(t: float) -> float:
    """Mean obliquity of the ecliptic (Meeus 22.2)."""
    seconds = 21.448 - 46.8150 * t - 0.00059 * t * t + 0.001813 * t * t * t
    return 23.0 + 26.0 / 60.0 + seconds / 3600.0


# IAU 1980 nutation: multiples of D, M, M', F, Omega, then
# delta-psi (A + B*T) and delta-epsilon (C + D*T) in units of 0.0001".
_NUTATION_TERMS = np.array(
    [
        [0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9],
        [-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1],
        [0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5],
        [0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5],
        [0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1],
        [0, 0, 1, 0, 0, 712, 0.1, -7, 0],
        [-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6],
        [0, 0, 0, 2, 1, -386, -0.4, 200, 0],
        [0, 0, 1, 2, 2, -301, 0, 129, -0.1],
        [-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3],
        [-2, 0, 1, 0, 0, -158, 0, 0, 0],
        [-2, 0, 0, 2, 1, 129, 0.1, -70, 0],
        [0, 0, -1, 2, 2, 123, 0, -53, 0],
        [2, 0, 0, 0, 0, 63, 0, 0, 0],
        [0, 0, 1, 0, 1, 63, 0.1, -33, 0],
        [2, 0, -1, 2, 2, -59, 0, 26, 0],
        [0, 0, -1, 0, 1, -58, -0.1, 32, 0],
        [0, 0, 1, 2, 1, -51, 0, 27, 0],
        [-2, 0, 2, 0, 0, 48, 0, 0, 0],
        [0, 0, -2, 2, 1, 46, 0, -24, 0],
        [2, 0, 0, 2, 2, -38, 0, 16, 0],
        [0, 0, 2, 2, 2, -31, 0, 13, 0],
        [0, 0, 2, 0, 0, 29, 0, 0, 0],
        [-2, 0, 1, 2, 2, 29, 0, -12, 0],
        [0, 0, 0, 2, 0, 26, 0, 0, 0],
        [-2, 0, 0, 2, 0, -22, 0, 0, 0],
        [0, 0, -1, 2, 1, 21, 0, -10, 0],
        [0, 2, 0, 0, 0, 17, -0.1, 0, 0],
        [2, 0, -1, 0, 1, 16, 0, -8, 0],
        [-2, 2, 0, 2, 2, -16, 0.1, 7, 0],
        [0, 1, 0, 0, 1, -15, 0, 9, 0],
        [-2, 0, 1, 0, 1, -13, 0, 7, 0],
        [0, -1, 0, 0, 1, -12, 0, 6, 0],
        [0, 0, 2, -2, 0, 11, 0, 0, 0],
        [2, 0, -1, 2, 1, -10, 0, 5, 0],
        [2, 0, 1, 2, 2, -8, 0, 3, 0],
        [0, 1, 0, 2, 2, 7, 0, -3, 0],
        [-2, 1, 1, 0, 0, -7, 0, 0, 0],
        [0, -1, 0, 2, 2, -7, 0, 3, 0],
        [2, 0, 0, 2, 1, -7, 0, 3, 0],
        [2, 0, 1, 0, 0, 6, 0, 0, 0],
        [-2, 0, 2, 2, 2, 6, 0, -3, 0],
        [-2, 0, 1, 2, 1, 6, 0, -3, 0],
        [2, 0, -2, 0, 1, -6, 0, 3, 0],
        [2, 0, 0, 0, 1, -6, 0, 3, 0],
        [0, -1, 1, 0, 0, 5, 0, 0, 0],
        [-2, -1, 0, 2, 1, -5, 0, 3, 0],
        [-2, 0, 0, 0, 1, -5, 0, 3, 0],
        [0, 0, 2, 2, 1, -5, 0, 3, 0],
        [-2, 0, 2, 0, 1, 4, 0, 0, 0],
        [-2, 1, 0, 2, 1, 4, 0, 0, 0],
        [0, 0, 1, -2, 0, 4, 0, 0, 0],
        [-1, 0, 1, 0, 0, -4, 0, 0, 0],
        [-2, 1, 0, 0, 0, -4, 0, 0, 0],
        [1, 0, 0, 0, 0, -4, 0, 0, 0],
        [0, 0, 1, 2, 0, 3, 0, 0, 0],
        [0, 0, -2, 2, 2, -3, 0, 0, 0],
        [-1, -1, 1, 0, 0, -3, 0, 0, 0],
        [0, 1, 1, 0, 0, -3, 0, 0, 0],
        [0, -1, 1, 2, 2, -3, 0, 0, 0],
        [2, -1, -1, 2, 2, -3, 0, 0, 0],
        [0, 0, 3, 2, 2, -3, 0, 0, 0],
        [2, -1, 0, 2, 2, -3, 0, 0, 0],
    ],
    dtype=np.float64,
)
_NUTATION_TERMS.setflags(write=False)


def _nutation_arguments(t: float) -> np.ndarray:
    """D, M, M', F and Omega in radians for the nutation series."""
    d = 297.85036 + 445267.111480 * t - 0.0019142 * t**2 + t**3 / 189474.0
    m = 357.52772 + 35999.050340 * t - 0.0001603 * t**2 - t**3 / 300000.0
    mp = 134.96298 + 477198.867398 * t + 0.0086972 * t**2 + t**3 / 56250.0
    f = 93.27191 + 483202.017538 * t - 0.0036825 * t**2 + t**3 / 327270.0
    omega = 125.04452 - 1934.136261 * t + 0.0020708 * t**2 + t**3 / 450000.0
    return np.radians(np.array([d, m, mp, f, omega]) % 360.0)


def nutation(t: float) -> tuple[float, float]:
    """Nutation in longitude and in obliquity, in degrees."""
    multiples = _NUTATION_TERMS[:, :5]
    argument = multiples @ _nutation_arguments(t)
    psi = (_NUTATION_TERMS[:, 5] + _NUTATION_TERMS[:, 6] * t) @ np.sin(argument)
    eps = (_NUTATION_TERMS[:, 7] + _NUTATION_TERMS[:, 8] * t) @ np.cos(argument)
    return float(psi) / 1e4 / 3600.0, float(eps) / 1e4 / 3600.0


def true_obliquity(t: float) -> float:
    return mean_obliquity(t) + nutation(t)[1]


def greenwich_mean_sidereal_time(jd_ut: float) -> float:
    """Greenwich mean sidereal time in degrees (Meeus 12.4)."""
    t = julian_centuries(jd_ut)
    gmst = (
        280.46061837
        + 360.98564736629 * (jd_ut - J2000)
        + 0.000387933 * t * t
        - t * t * t / 38710000.0
    )
    return gmst % 360.0


def greenwich_apparent_sidereal_time(jd_ut: float, jde: float) -> float:
    """GMST corrected by the equation of the equinoxes."""
    t = julian_centuries(jde)
    delta_psi, delta_eps = nutation(t)
    epsilon = mean_obliquity(t) + delta_eps
    return (
        greenwich_mean_sidereal_time(jd_ut)
        + delta_psi * math.cos(math.radians(epsilon))
    ) % 360.0


def local_sidereal_time(jd_ut: float, jde: float, longitude: float) -> float:
    """Local apparent sidereal time in degrees for an east-positive longitude."""
    return (greenwich_apparent_sidereal_time(jd_ut, jde) + longitude) % 360.0
