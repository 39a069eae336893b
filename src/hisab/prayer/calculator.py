"""Prayer boundaries from the solar ephemeris.

Every boundary except Dhuhr and Imsak is the instant the Sun's observed
altitude crosses a target. The target is lowered by the horizon dip of the
observer. A crossing exists when the observed altitude is above the target at
transit and below it at the neighbouring anti-transit. It is then found from
an hour-angle estimate followed by Newton steps on the fully corrected
altitude, kept inside that bracket and finished by bisection when Newton
stalls.
"""

import logging
import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from ..ephemeris import solar_coordinates
from ..errors import UnsolvablePrayerAngleError
from ..geometry.corrections import horizon_dip
from ..geometry.frames import SECONDS_PER_DAY
from ..geometry.resolver import ResolvedBody, resolve_body
from ..geometry.transforms import hour_angle
from ..models.atmosphere import AtmosphericConditions
from ..models.observer import GeoCoordinate
from ..models.prayer import PrayerParams, PrayerTimes

logger = logging.getLogger(__name__)

SOLAR_SEMIDIAMETER = 16.0 / 60.0
HOUR_ANGLE_RATE = 360.9856  # degrees per day
HALF_DAY = 180.0 / HOUR_ANGLE_RATE  # days from transit to anti-transit
MAX_ITERATIONS = 10
MAX_BISECTIONS = 40
TOLERANCE_SECONDS = 0.5

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _sun(
    instant: datetime,
    observer: GeoCoordinate,
    conditions: Optional[AtmosphericConditions],
) -> ResolvedBody:
    return resolve_body(solar_coordinates, instant, observer, conditions)


def _solar_transit(
    day: date,
    observer: GeoCoordinate,
    conditions: Optional[AtmosphericConditions],
) -> datetime:
    """Instant the Sun crosses the local meridian (hour angle zero)."""
    instant = datetime.combine(day, time(12), tzinfo=timezone.utc) - timedelta(
        hours=observer.longitude / 15.0
    )
    for _ in range(MAX_ITERATIONS):
        sun = _sun(instant, observer, conditions)
        ha = hour_angle(sun.equatorial, sun.sidereal_time)
        step = timedelta(days=ha / HOUR_ANGLE_RATE)
        instant -= step
        if abs(step.total_seconds()) < TOLERANCE_SECONDS:
            break
    return instant


def _crossing(
    prayer: str,
    day: date,
    transit: datetime,
    target: float,
    morning: bool,
    observer: GeoCoordinate,
    conditions: Optional[AtmosphericConditions],
) -> datetime:
    """Instant the observed solar altitude crosses ``target`` degrees.

    The crossing is searched between ``transit`` and the anti-transit on the
    requested side, so the result always lies within half a day of transit.

    Args:
        prayer: Name used in logs and errors
        day: Civil date being computed
        transit: Solar transit of that date
        target: Observed altitude to reach, in degrees
        morning: True for the rising branch, False for the setting branch
        observer: Observer location
        conditions: Surface weather for refraction

    Raises:
        UnsolvablePrayerAngleError: If the Sun never reaches ``target``
    """

    def at(offset: float) -> ResolvedBody:
        return _sun(transit + timedelta(days=offset), observer, conditions)

    # Offsets in days from transit; the Sun is above target at `above`
    # and below it at `below`.
    above = 0.0
    below = -HALF_DAY if morning else HALF_DAY

    transit_sun = at(above)
    if (
        transit_sun.observed.altitude < target
        or at(below).observed.altitude > target
    ):
        raise UnsolvablePrayerAngleError(
            prayer, day.isoformat(), observer.latitude, target
        )

    phi = math.radians(observer.latitude)
    delta = math.radians(transit_sun.equatorial.declination)
    cos_h = (math.sin(math.radians(target)) - math.sin(phi) * math.sin(delta)) / (
        math.cos(phi) * math.cos(delta)
    )
    h0 = math.degrees(math.acos(max(-1.0, min(1.0, cos_h))))
    offset = -h0 / HOUR_ANGLE_RATE if morning else h0 / HOUR_ANGLE_RATE

    for iteration in range(MAX_ITERATIONS):
        sun = at(offset)
        error = sun.observed.altitude - target
        if error >= 0.0:
            above = offset
        else:
            below = offset

        ha = math.radians(hour_angle(sun.equatorial, sun.sidereal_time))
        alt = math.radians(sun.geometric.altitude)
        rate = (
            -HOUR_ANGLE_RATE
            * math.cos(phi)
            * math.cos(math.radians(sun.equatorial.declination))
            * math.sin(ha)
            / math.cos(alt)
        )

        candidate = offset - error / rate if rate != 0.0 else None
        low, high = sorted((above, below))
        if candidate is None or not low <= candidate <= high:
            candidate = (above + below) / 2.0

        step = (candidate - offset) * SECONDS_PER_DAY
        offset = candidate
        logger.debug(
            "%s iteration %d: error %.6f°, step %.3fs",
            prayer,
            iteration,
            error,
            step,
        )
        if abs(step) < TOLERANCE_SECONDS:
            return transit + timedelta(days=offset)

    logger.debug("%s on %s: Newton did not settle, bisecting", prayer, day.isoformat())
    for _ in range(MAX_BISECTIONS):
        if abs(above - below) * SECONDS_PER_DAY < TOLERANCE_SECONDS:
            break
        middle = (above + below) / 2.0
        if at(middle).observed.altitude >= target:
            above = middle
        else:
            below = middle

    return transit + timedelta(days=(above + below) / 2.0)


def _asr_altitude(latitude: float, declination: float, shadow_factor: float) -> float:
    """Altitude at which a gnomon's shadow is ``shadow_factor`` plus its noon shadow."""
    noon_shadow = math.tan(math.radians(abs(latitude - declination)))
    return math.degrees(math.atan(1.0 / (shadow_factor + noon_shadow)))


def round_half_up(instant: datetime, seconds: int) -> datetime:
    """Round an aware instant to the nearest multiple of ``seconds``, ties upward."""
    elapsed = (instant - _EPOCH) / timedelta(seconds=1)
    rounded = math.floor(elapsed / seconds + 0.5) * seconds
    return _EPOCH + timedelta(seconds=rounded)


def sunset_time(
    day: date,
    observer: GeoCoordinate,
    conditions: Optional[AtmosphericConditions] = None,
) -> datetime:
    """Unrounded instant of sunset (Maghrib without ihtiyat) for a civil date.

    Raises:
        UnsolvablePrayerAngleError: If the Sun does not set that day
    """
    transit = _solar_transit(day, observer, conditions)
    target = -SOLAR_SEMIDIAMETER - horizon_dip(observer.altitude_m)
    return _crossing("maghrib", day, transit, target, False, observer, conditions)


def calculate_prayer_times(
    day: date,
    observer: GeoCoordinate,
    params: PrayerParams,
    conditions: Optional[AtmosphericConditions] = None,
) -> PrayerTimes:
    """Compute the seven daily boundaries for a civil date.

    Args:
        day: Civil date at the observer's location
        observer: Observer location, altitude lowers every threshold by dip
        params: Twilight angles, offsets, ihtiyat and rounding
        conditions: Surface weather for refraction (standard atmosphere if None)

    Returns:
        PrayerTimes in UTC, rounded to ``params.rounding_seconds``

    Raises:
        UnsolvablePrayerAngleError: If the Sun never reaches a required altitude
    """
    dip = horizon_dip(observer.altitude_m)

    transit = _solar_transit(day, observer, conditions)
    declination = _sun(transit, observer, conditions).equatorial.declination

    def solve(prayer: str, target: float, morning: bool) -> datetime:
        return _crossing(
            prayer, day, transit, target - dip, morning, observer, conditions
        )

    fajr = solve("fajr", params.fajr_angle, True)
    sunrise = solve("sunrise", -SOLAR_SEMIDIAMETER, True)
    asr = _crossing(
        "asr",
        day,
        transit,
        _asr_altitude(observer.latitude, declination, params.asr_shadow_factor),
        False,
        observer,
        conditions,
    )
    maghrib = solve("maghrib", -SOLAR_SEMIDIAMETER, False)
    if params.isha_interval_minutes is not None:
        isha = maghrib + timedelta(minutes=params.isha_interval_minutes)
    else:
        isha = solve("isha", params.isha_angle, False)
    imsak = fajr - timedelta(minutes=params.imsak_offset_minutes)

    ihtiyat = timedelta(minutes=params.ihtiyat_minutes)
    raw = {
        "imsak": imsak - ihtiyat,
        "fajr": fajr - ihtiyat,
        "sunrise": sunrise - ihtiyat,
        "dhuhr": transit + ihtiyat,
        "asr": asr + ihtiyat,
        "maghrib": maghrib + ihtiyat,
        "isha": isha + ihtiyat,
    }

    logger.debug(
        "Prayer times for %s at (%.4f, %.4f): %s",
        day.isoformat(),
        observer.latitude,
        observer.longitude,
        {name: value.isoformat() for name, value in raw.items()},
    )

    return PrayerTimes(
        **{
            name: round_half_up(value, params.rounding_seconds)
            for name, value in raw.items()
        }
    )
