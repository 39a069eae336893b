import logging
from datetime import datetime

from ..ephemeris import lunar_coordinates, solar_coordinates
from ..geometry.corrections import horizon_dip
from ..geometry.frames import as_utc
from ..geometry.resolver import resolve_body
from ..geometry.transforms import angular_separation
from ..models.criteria import VisibilityCriteria, VisibilityReport
from ..models.observer import GeoCoordinate

logger = logging.getLogger(__name__)


def calculate_visibility(
    sunset_instant: datetime,
    observer: GeoCoordinate,
    criteria: VisibilityCriteria,
) -> VisibilityReport:
    """Evaluate whether the crescent satisfies a visibility criterion.

    Args:
        sunset_instant: Instant of observation, normally local sunset (UTC)
        observer: Observer location
        criteria: Altitude/elongation thresholds

    Returns:
        VisibilityReport with observed altitudes, geocentric elongation and
        the horizon dip that lowered the altitude threshold
    """
    instant = as_utc(sunset_instant)
    sun = resolve_body(solar_coordinates, instant, observer)
    moon = resolve_body(lunar_coordinates, instant, observer)

    elongation = angular_separation(moon.equatorial, sun.equatorial)
    dip = horizon_dip(observer.altitude_m)
    moon_altitude = moon.observed.altitude

    meets = (
        moon_altitude >= criteria.min_altitude - dip
        and elongation >= criteria.min_elongation
    )

    logger.debug(
        "Visibility at %s: moon alt %.4f°, elongation %.4f°, dip %.4f° -> %s",
        instant.isoformat(),
        moon_altitude,
        elongation,
        dip,
        meets,
    )

    return VisibilityReport(
        instant=instant,
        moon_altitude=moon_altitude,
        sun_altitude=sun.observed.altitude,
        elongation=elongation,
        horizon_dip=dip,
        meets_criteria=meets,
        criteria=criteria,
    )
