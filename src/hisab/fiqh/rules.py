"""Fasting-status resolution for a Hijri date and weekday.

Rules are evaluated in table order and every match is collected. Conflicts are
then settled by status: a forbidden day keeps only its forbidding reasons, an
obligatory day drops the voluntary ones, and the singled-out Friday/Saturday
dislike only survives when nothing tied to the date itself matched.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from ..calendar.hijri import to_hijri
from ..caption.generator import generate_explanation
from ..models.fasting import (
    FastingAnalysis,
    FastingStatus,
    FastingType,
    HijriDate,
    RuleContext,
    RuleTrace,
    Weekday,
)

logger = logging.getLogger(__name__)

MUHARRAM = 1
RAMADHAN = 9
SHAWWAL = 10
DHU_AL_HIJJAH = 12


@dataclass(frozen=True)
class Rule:
    tag: FastingType
    status: FastingStatus
    predicate: Callable[[HijriDate, Weekday], bool]
    weekday_only: bool = False

    def matches(self, hijri_date: HijriDate, weekday: Weekday) -> bool:
        return self.predicate(hijri_date, weekday)


def _on(month: int, *days: int) -> Callable[[HijriDate, Weekday], bool]:
    return lambda h, _: h.month == month and h.day in days


RULES: tuple[Rule, ...] = (
    Rule(FastingType.EID_AL_FITR, FastingStatus.HARAM, _on(SHAWWAL, 1)),
    Rule(FastingType.EID_AL_ADHA, FastingStatus.HARAM, _on(DHU_AL_HIJJAH, 10)),
    Rule(FastingType.TASHRIQ, FastingStatus.HARAM, _on(DHU_AL_HIJJAH, 11, 12, 13)),
    Rule(FastingType.RAMADHAN, FastingStatus.WAJIB, lambda h, _: h.month == RAMADHAN),
    Rule(FastingType.ARAFAH, FastingStatus.SUNNAH_MUAKKADAH, _on(DHU_AL_HIJJAH, 9)),
    Rule(FastingType.ASHURA, FastingStatus.SUNNAH_MUAKKADAH, _on(MUHARRAM, 10)),
    Rule(FastingType.TASUA, FastingStatus.SUNNAH, _on(MUHARRAM, 9)),
    Rule(
        FastingType.AYYAMUL_BIDH,
        FastingStatus.SUNNAH,
        lambda h, _: 13 <= h.day <= 15,
    ),
    Rule(
        FastingType.MONDAY,
        FastingStatus.SUNNAH,
        lambda _, w: w == Weekday.MONDAY,
        weekday_only=True,
    ),
    Rule(
        FastingType.THURSDAY,
        FastingStatus.SUNNAH,
        lambda _, w: w == Weekday.THURSDAY,
        weekday_only=True,
    ),
    Rule(
        FastingType.SHAWWAL,
        FastingStatus.SUNNAH,
        lambda h, _: h.month == SHAWWAL and h.day >= 2,
    ),
    Rule(
        FastingType.SINGLED_OUT_FRIDAY_OR_SATURDAY,
        FastingStatus.MAKRUH,
        lambda _, w: w in (Weekday.FRIDAY, Weekday.SATURDAY),
        weekday_only=True,
    ),
)


def _settle(matched: list[Rule]) -> list[Rule]:
    """Drop reasons overridden by a stronger ruling on the same day."""
    for dominant in (FastingStatus.HARAM, FastingStatus.WAJIB):
        winners = [rule for rule in matched if rule.status == dominant]
        if winners:
            return winners

    date_bound = any(not rule.weekday_only for rule in matched)
    return [
        rule
        for rule in matched
        if not (rule.status == FastingStatus.MAKRUH and date_bound)
    ]


def resolve(
    hijri_date: HijriDate,
    weekday: Weekday,
    is_hilal_adjusted: bool = False,
    gregorian_date: Optional[date] = None,
) -> FastingAnalysis:
    """Resolve the fasting status of one day.

    Args:
        hijri_date: Hijri date of the day
        weekday: Weekday of the civil date
        is_hilal_adjusted: Whether the Hijri date was shifted by moon sighting
        gregorian_date: Civil date, carried through to the result

    Returns:
        FastingAnalysis whose primary status is the highest-priority status
        among the surviving reasons, or MUBAH if none matched
    """
    matched = [rule for rule in RULES if rule.matches(hijri_date, weekday)]
    kept = _settle(matched)

    reasons = tuple(rule.tag for rule in kept)
    traces = tuple(RuleTrace(rule.tag, rule.status, rule in kept) for rule in matched)
    status = max((rule.status for rule in kept), default=FastingStatus.MUBAH)

    logger.debug(
        "%s (%s): matched %s, kept %s -> %s",
        hijri_date,
        weekday.name,
        [rule.tag.name for rule in matched],
        [tag.name for tag in reasons],
        status.name,
    )

    return FastingAnalysis(
        primary_status=status,
        reasons=reasons,
        explanation=generate_explanation(
            status, reasons, hijri_date, weekday, is_hilal_adjusted
        ),
        hijri_date=hijri_date,
        weekday=weekday,
        is_hilal_adjusted=is_hilal_adjusted,
        gregorian_date=gregorian_date,
        traces=traces,
    )


def analyze_date(
    gregorian: date, context: Optional[RuleContext] = None
) -> FastingAnalysis:
    """Convert a civil date to Hijri and resolve its fasting status.

    Raises:
        CalendarConversionError: If the date is outside the Umm al-Qura table
    """
    context = context or RuleContext()
    hijri_date = to_hijri(gregorian, context.adjustment)
    return resolve(
        hijri_date,
        Weekday.of(gregorian),
        is_hilal_adjusted=context.is_hilal_adjusted,
        gregorian_date=gregorian,
    )
