"""Lunar position from the truncated ELP2000-82 theory (Meeus, chapter 47).

Each periodic term is a multiple of the four fundamental arguments D (mean
elongation), M (solar mean anomaly), M' (lunar mean anomaly) and F (argument
of latitude). Longitude and latitude coefficients are in 1e-6 degree, distance
coefficients in 1e-3 km. Terms involving M are scaled by the eccentricity
factor E once per unit of |M|.
"""

import math
from datetime import datetime

import numpy as np

from ..geometry.frames import julian_centuries, julian_ephemeris_day, nutation
from ..models.positions import EclipticPosition

MEAN_DISTANCE_KM = 385000.56

# D, M, M', F, sigma-l, sigma-r
_LONGITUDE_DISTANCE_TERMS = np.array(
    [
        [0, 0, 1, 0, 6288774, -20905355],
        [2, 0, -1, 0, 1274027, -3699111],
        [2, 0, 0, 0, 658314, -2955968],
        [0, 0, 2, 0, 213618, -569925],
        [0, 1, 0, 0, -185116, 48888],
        [0, 0, 0, 2, -114332, -3149],
        [2, 0, -2, 0, 58793, 246158],
        [2, -1, -1, 0, 57066, -152138],
        [2, 0, 1, 0, 53322, -170733],
        [2, -1, 0, 0, 45758, -204586],
        [0, 1, -1, 0, -40923, -129620],
        [1, 0, 0, 0, -34720, 108743],
        [0, 1, 1, 0, -30383, 104755],
        [2, 0, 0, -2, 15327, 10321],
        [0, 0, 1, 2, -12528, 0],
        [0, 0, 1, -2, 10980, 79661],
        [4, 0, -1, 0, 10675, -34782],
        [0, 0, 3, 0, 10034, -23210],
        [4, 0, -2, 0, 8548, -21636],
        [2, 1, -1, 0, -7888, 24208],
        [2, 1, 0, 0, -6766, 30824],
        [1, 0, -1, 0, -5163, -8379],
        [1, 1, 0, 0, 4987, -16675],
        [2, -1, 1, 0, 4036, -12831],
        [2, 0, 2, 0, 3994, -10445],
        [4, 0, 0, 0, 3861, -11650],
        [2, 0, -3, 0, 3665, 14403],
        [0, 1, -2, 0, -2689, -7003],
        [2, 0, -1, 2, -2602, 0],
        [2, -1, -2, 0, 2390, 10056],
        [1, 0, 1, 0, -2348, 6322],
        [2, -2, 0, 0, 2236, -9884],
        [0, 1, 2, 0, -2120, 5751],
        [0, 2, 0, 0, -2069, 0],
        [2, -2, -1, 0, 2048, -4950],
        [2, 0, 1, -2, -1773, 4130],
        [2, 0, 0, 2, -1595, 0],
        [4, -1, -1, 0, 1215, -3958],
        [0, 0, 2, 2, -1110, 0],
        [3, 0, -1, 0, -892, 3258],
        [2, 1, 1, 0, -810, 2616],
        [4, -1, -2, 0, 759, -1897],
        [0, 2, -1, 0, -713, -2117],
        [2, 2, -1, 0, -700, 2354],
        [2, 1, -2, 0, 691, 0],
        [2, -1, 0, -2, 596, 0],
        [4, 0, 1, 0, 549, -1423],
        [0, 0, 4, 0, 537, -1117],
        [4, -1, 0, 0, 520, -1571],
        [1, 0, -2, 0, -487, -1739],
        [2, 1, 0, -2, -399, 0],
        [0, 0, 2, -2, -381, -4421],
        [1, 1, 1, 0, 351, 0],
        [3, 0, -2, 0, -340, 0],
        [4, 0, -3, 0, 330, 0],
        [2, -1, 2, 0, 327, 0],
        [0, 2, 1, 0, -323, 1165],
        [1, 1, -1, 0, 299, 0],
        [2, 0, 3, 0, 294, 0],
        [2, 0, -1, -2, 0, 8752],
    ],
    dtype=np.float64,
)
_LONGITUDE_DISTANCE_TERMS.setflags(write=False)

# D, M, M', F, sigma-b
_LATITUDE_TERMS = np.array(
    [
        [0, 0, 0, 1, 5128122],
        [0, 0, 1, 1, 280602],
        [0, 0, 1, -1, 277693],
        [2, 0, 0, -1, 173237],
        [2, 0, -1, 1, 55413],
        [2, 0, -1, -1, 46271],
        [2, 0, 0, 1, 32573],
        [0, 0, 2, 1, 17198],
        [2, 0, 1, -1, 9266],
        [0, 0, 2, -1, 8822],
        [2, -1, 0, -1, 8216],
        [2, 0, -2, -1, 4324],
        [2, 0, 1, 1, 4200],
        [2, 1, 0, -1, -3359],
        [2, -1, -1, 1, 2463],
        [2, -1, 0, 1, 2211],
        [2, -1, -1, -1, 2065],
        [0, 1, -1, -1, -1870],
        [4, 0, -1, -1, 1828],
        [0, 1, 0, 1, -1794],
        [0, 0, 0, 3, -1749],
        [0, 1, -1, 1, -1565],
        [1, 0, 0, 1, -1491],
        [0, 1, 1, 1, -1475],
        [0, 1, 1, -1, -1410],
        [0, 1, 0, -1, -1344],
        [1, 0, 0, -1, -1335],
        [0, 0, 3, 1, 1107],
        [4, 0, 0, -1, 1021],
        [4, 0, -1, 1, 833],
        [0, 0, 1, -3, 777],
        [4, 0, -2, 1, 671],
        [2, 0, 0, -3, 607],
        [2, 0, 2, -1, 596],
        [2, -1, 1, -1, 491],
        [2, 0, -2, 1, -451],
        [0, 0, 3, -1, 439],
        [2, 0, 2, 1, 422],
        [2, 0, -3, -1, 421],
        [2, 1, -1, 1, -366],
        [2, 1, 0, 1, -351],
        [4, 0, 0, 1, 331],
        [2, -1, 1, 1, 315],
        [2, -2, 0, -1, 302],
        [0, 0, 1, 3, -283],
        [2, 1, 1, -1, -229],
        [1, 1, 0, -1, 223],
        [1, 1, 0, 1, 223],
        [0, 1, -2, -1, -220],
        [2, 1, -1, -1, -220],
        [1, 0, 1, 1, -185],
        [2, -1, -2, -1, 181],
        [0, 1, 2, 1, -177],
        [4, 0, -2, -1, 176],
        [4, -1, -1, -1, 166],
        [1, 0, 1, -1, -164],
        [4, 0, 1, -1, 132],
        [1, 0, -1, -1, -119],
        [4, -1, 0, -1, 115],
        [2, -2, 0, 1, 107],
    ],
    dtype=np.float64,
)
_LATITUDE_TERMS.setflags(write=False)


def _polynomial(t: float, *coefficients: float) -> float:
    return sum(c * t**k for k, c in enumerate(coefficients))


def fundamental_arguments(t: float) -> dict[str, float]:
    """Mean lunar arguments in degrees for Julian centuries ``t`` (Meeus 47.1-47.5)."""
    mean_longitude = _polynomial(
        t, 218.3164477, 481267.88123421, -0.0015786, 1 / 538841, -1 / 65194000
    )
    elongation = _polynomial(
        t, 297.8501921, 445267.1114034, -0.0018819, 1 / 545868, -1 / 113065000
    )
    sun_anomaly = _polynomial(
        t, 357.5291092, 35999.0502909, -0.0001536, 1 / 24490000
    )
    moon_anomaly = _polynomial(
        t, 134.9633964, 477198.8675055, 0.0087414, 1 / 69699, -1 / 14712000
    )
    latitude_argument = _polynomial(
        t, 93.2720950, 483202.0175233, -0.0036539, -1 / 3526000, 1 / 863310000
    )
    return {
        "L": mean_longitude % 360.0,
        "D": elongation % 360.0,
        "M": sun_anomaly % 360.0,
        "Mp": moon_anomaly % 360.0,
        "F": latitude_argument % 360.0,
        "A1": (119.75 + 131.849 * t) % 360.0,
        "A2": (53.09 + 479264.290 * t) % 360.0,
        "A3": (313.45 + 481266.484 * t) % 360.0,
    }


def _eccentricity_scale(multiples_of_m: np.ndarray, t: float) -> np.ndarray:
    e = 1.0 - 0.002516 * t - 0.0000074 * t * t
    return e ** np.abs(multiples_of_m)


def geometric_coordinates(jde: float) -> EclipticPosition:
    """Geocentric ecliptic position of the Moon referred to the mean equinox of date."""
    t = julian_centuries(jde)
    args = fundamental_arguments(t)
    base = np.radians([args["D"], args["M"], args["Mp"], args["F"]])

    terms = _LONGITUDE_DISTANCE_TERMS
    angle = terms[:, :4] @ base
    scale = _eccentricity_scale(terms[:, 1], t)
    sigma_l = float(np.sum(terms[:, 4] * scale * np.sin(angle)))
    sigma_r = float(np.sum(terms[:, 5] * scale * np.cos(angle)))

    terms = _LATITUDE_TERMS
    angle = terms[:, :4] @ base
    scale = _eccentricity_scale(terms[:, 1], t)
    sigma_b = float(np.sum(terms[:, 4] * scale * np.sin(angle)))

    lp = math.radians(args["L"])
    mp = math.radians(args["Mp"])
    f = math.radians(args["F"])
    a1 = math.radians(args["A1"])
    a2 = math.radians(args["A2"])
    a3 = math.radians(args["A3"])

    # Venus, Jupiter and Earth-flattening contributions
    sigma_l += 3958 * math.sin(a1) + 1962 * math.sin(lp - f) + 318 * math.sin(a2)
    sigma_b += (
        -2235 * math.sin(lp)
        + 382 * math.sin(a3)
        + 175 * math.sin(a1 - f)
        + 175 * math.sin(a1 + f)
        + 127 * math.sin(lp - mp)
        - 115 * math.sin(lp + mp)
    )

    return EclipticPosition(
        longitude=(args["L"] + sigma_l / 1e6) % 360.0,
        latitude=sigma_b / 1e6,
        distance=MEAN_DISTANCE_KM + sigma_r / 1000.0,
        distance_unit="km",
    )


def lunar_coordinates(jde: float) -> EclipticPosition:
    """Apparent geocentric ecliptic position of the Moon at a Julian Ephemeris Day.

    Light-time and aberration are already folded into the mean longitude of the
    theory, so only nutation in longitude is added.
    """
    geometric = geometric_coordinates(jde)
    delta_psi, _ = nutation(julian_centuries(jde))
    return EclipticPosition(
        longitude=(geometric.longitude + delta_psi) % 360.0,
        latitude=geometric.latitude,
        distance=geometric.distance,
        distance_unit="km",
    )


def moon_position(instant: datetime) -> EclipticPosition:
    """Apparent geocentric ecliptic position of the Moon at a UTC instant."""
    return lunar_coordinates(julian_ephemeris_day(instant))
