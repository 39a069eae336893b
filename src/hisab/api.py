"""Entry points combining the astronomical and fiqh engines."""

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from .errors import UnsolvablePrayerAngleError
from .fiqh.daud import DaudSchedule
from .fiqh.rules import analyze_date, resolve
from .geometry.frames import as_utc
from .models import (
    FastingAnalysis,
    GeoCoordinate,
    RuleContext,
)
from .prayer.calculator import calculate_prayer_times, sunset_time
from .visibility.resolver import calculate_visibility

logger = logging.getLogger(__name__)


def effective_date(instant: datetime, observer: Optional[GeoCoordinate] = None) -> date:
    """Civil date whose fasting ruling applies at ``instant``.

    The Islamic day begins at sunset, so an instant after that day's Maghrib
    at the observer belongs to the following civil date. The civil date is
    the observer's local mean date (UTC shifted by longitude / 15 hours), so
    an afternoon west of Greenwich is not mistaken for the next UTC day.
    Without an observer the UTC date is used. Where the Sun does not set the
    local date is kept.
    """
    instant = as_utc(instant)
    if observer is None:
        return instant.date()

    civil = (instant + timedelta(hours=observer.longitude / 15.0)).date()
    try:
        maghrib = sunset_time(civil, observer)
    except UnsolvablePrayerAngleError as e:
        logger.warning("No sunset on %s, using the civil date: %s", civil, e.message)
        return civil

    if instant > maghrib:
        logger.debug("%s is after Maghrib (%s)", instant.isoformat(), maghrib.isoformat())
        return civil + timedelta(days=1)
    return civil


def analyze(
    instant: datetime,
    context: Optional[RuleContext] = None,
    observer: Optional[GeoCoordinate] = None,
) -> FastingAnalysis:
    """Analyze the fasting status in effect at an instant.

    Args:
        instant: UTC instant (naive values are taken as UTC)
        context: Adjustment and Daud configuration
        observer: Location used to find Maghrib; without it the UTC date is used

    Raises:
        CalendarConversionError: If the effective date is outside the table
    """
    return analyze_date(effective_date(instant, observer), context)


def daud_schedule(
    start: date,
    end: Optional[date] = None,
    context: Optional[RuleContext] = None,
) -> DaudSchedule:
    """Lazy Daud fasting schedule from ``start`` to ``end`` (default one year)."""
    return DaudSchedule(start, end, context)


__all__ = [
    "analyze",
    "analyze_date",
    "calculate_prayer_times",
    "calculate_visibility",
    "daud_schedule",
    "effective_date",
    "resolve",
]
