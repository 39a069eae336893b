"""Gregorian/Hijri conversion backed by the Umm al-Qura tables of ``hijridate``."""

import logging
from datetime import date, timedelta

from hijridate import Gregorian, Hijri

from ..errors import CalendarConversionError
from ..models.fasting import HijriDate

logger = logging.getLogger(__name__)


def to_hijri(gregorian: date, adjustment: int = 0) -> HijriDate:
    """Convert a civil date to its Umm al-Qura Hijri date.

    Args:
        gregorian: Civil date
        adjustment: Signed day offset applied before conversion. A positive
            value means the month started earlier than the table says
            (the crescent was seen a day early).

    Returns:
        HijriDate

    Raises:
        CalendarConversionError: If the adjusted date is outside the table
    """
    try:
        adjusted = gregorian + timedelta(days=adjustment)
        converted = Gregorian(adjusted.year, adjusted.month, adjusted.day).to_hijri()
    except (OverflowError, ValueError) as e:
        raise CalendarConversionError(gregorian.isoformat(), str(e)) from e

    result = HijriDate(converted.year, converted.month, converted.day)
    logger.debug("%s (adjustment %+d) -> %s", gregorian.isoformat(), adjustment, result)
    return result


def to_gregorian(hijri: HijriDate) -> date:
    """Convert a Hijri date back to its civil date.

    Raises:
        CalendarConversionError: If the Hijri date is invalid or outside the table
    """
    try:
        converted = Hijri(hijri.year, hijri.month, hijri.day).to_gregorian()
    except (OverflowError, ValueError) as e:
        raise CalendarConversionError(str(hijri), str(e)) from e
    return date(converted.year, converted.month, converted.day)
