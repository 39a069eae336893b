from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..models.atmosphere import AtmosphericConditions
from ..models.observer import GeoCoordinate
from ..models.positions import EclipticPosition, EquatorialPosition, HorizontalPosition
from .corrections import apply_corrections
from .frames import (
    julian_centuries,
    julian_day,
    julian_ephemeris_day,
    local_sidereal_time,
    true_obliquity,
)
from .transforms import to_equatorial, to_horizontal


@dataclass(frozen=True)
class ResolvedBody:
    """One body at one instant, seen from one observer."""

    ecliptic: EclipticPosition
    equatorial: EquatorialPosition
    geometric: HorizontalPosition
    observed: HorizontalPosition
    sidereal_time: float


def resolve_body(
    ephemeris: Callable[[float], EclipticPosition],
    instant: datetime,
    observer: GeoCoordinate,
    conditions: Optional[AtmosphericConditions] = None,
) -> ResolvedBody:
    """Run the full pipeline for a body at an instant.

    Args:
        ephemeris: Function from Julian Ephemeris Day to apparent ecliptic
            position (``solar_coordinates`` or ``lunar_coordinates``)
        instant: UTC instant
        observer: Observer location
        conditions: Surface weather for refraction

    Returns:
        ResolvedBody with geocentric apparent equatorial coordinates, the
        geometric horizontal position and the parallax/refraction corrected one
    """
    jd_ut = julian_day(instant)
    jde = julian_ephemeris_day(instant)

    ecliptic = ephemeris(jde)
    equatorial = to_equatorial(ecliptic, true_obliquity(julian_centuries(jde)))
    lst = local_sidereal_time(jd_ut, jde, observer.longitude)
    geometric = to_horizontal(equatorial, observer, lst)
    observed = apply_corrections(
        geometric, observer, ecliptic.distance_km, conditions
    )

    return ResolvedBody(
        ecliptic=ecliptic,
        equatorial=equatorial,
        geometric=geometric,
        observed=observed,
        sidereal_time=lst,
    )
