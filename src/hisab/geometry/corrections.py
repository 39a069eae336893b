"""Topocentric and atmospheric corrections to geometric horizontal positions.

The order is fixed: parallax first, refraction second. Horizon dip never
moves a body; callers subtract it from their altitude thresholds instead.
"""

import math
from typing import Optional

from ..models.atmosphere import STANDARD_ATMOSPHERE, AtmosphericConditions
from ..models.observer import GeoCoordinate
from ..models.positions import HorizontalPosition

EARTH_EQUATORIAL_RADIUS_KM = 6378.14
EARTH_AXIS_RATIO = 0.99664719
DIP_COEFFICIENT = 0.0293
REFRACTION_FLOOR = -1.0
ZENITH_REFRACTION_ARCMIN = 0.0019279  # makes the formula vanish at 90 degrees


def _geocentric_radius(observer: GeoCoordinate) -> float:
    """Observer distance from the Earth's center in equatorial radii (Meeus 11)."""
    phi = math.radians(observer.latitude)
    u = math.atan(EARTH_AXIS_RATIO * math.tan(phi))
    height = observer.altitude_m / (EARTH_EQUATORIAL_RADIUS_KM * 1000.0)
    rho_sin = EARTH_AXIS_RATIO * math.sin(u) + height * math.sin(phi)
    rho_cos = math.cos(u) + height * math.cos(phi)
    return math.hypot(rho_sin, rho_cos)


def horizontal_parallax(distance_km: float) -> float:
    """Equatorial horizontal parallax in degrees for a body at ``distance_km``."""
    return math.degrees(math.asin(EARTH_EQUATORIAL_RADIUS_KM / distance_km))


def parallax_in_altitude(
    altitude: float, observer: GeoCoordinate, distance_km: float
) -> float:
    """Amount in degrees by which parallax lowers a geocentric altitude."""
    sin_pi = EARTH_EQUATORIAL_RADIUS_KM / distance_km
    rho = _geocentric_radius(observer)
    value = rho * sin_pi * math.cos(math.radians(altitude))
    return math.degrees(math.asin(max(-1.0, min(1.0, value))))


def refraction(
    altitude: float, conditions: Optional[AtmosphericConditions] = None
) -> float:
    """Atmospheric refraction in degrees for an airless (true) altitude.

    Uses Saemundsson's inversion of Bennett's formula, scaled for pressure and
    temperature. Below -1 degree no refraction is applied, and the result is
    never negative.
    """
    if altitude < REFRACTION_FLOOR:
        return 0.0
    conditions = conditions or STANDARD_ATMOSPHERE
    arcmin = (
        1.02 / math.tan(math.radians(altitude + 10.3 / (altitude + 5.11)))
        + ZENITH_REFRACTION_ARCMIN
    )
    return max(0.0, arcmin / 60.0 * conditions.refraction_factor)


def horizon_dip(altitude_m: float) -> float:
    """Dip of the visible horizon in degrees for an observer ``altitude_m`` high."""
    if altitude_m <= 0.0:
        return 0.0
    return DIP_COEFFICIENT * math.sqrt(altitude_m)


def apply_corrections(
    horizontal: HorizontalPosition,
    observer: GeoCoordinate,
    distance_km: float,
    conditions: Optional[AtmosphericConditions] = None,
) -> HorizontalPosition:
    """Turn a geometric geocentric altitude into an observed topocentric one.

    Args:
        horizontal: Geometric horizontal position
        observer: Observer location, including altitude above sea level
        distance_km: Geocentric distance of the body in kilometers
        conditions: Surface weather for refraction (standard atmosphere if None)

    Returns:
        HorizontalPosition with parallax removed and refraction added. The
        azimuth is unchanged.
    """
    altitude = horizontal.altitude - parallax_in_altitude(
        horizontal.altitude, observer, distance_km
    )
    altitude += refraction(altitude, conditions)
    return HorizontalPosition(altitude=altitude, azimuth=horizontal.azimuth)
