import logging
from datetime import date, timedelta
from typing import Iterator, Optional

from ..errors import CalendarConversionError
from ..models.fasting import DaudEntry, DaudStrategy, FastingStatus, RuleContext
from .rules import analyze_date

logger = logging.getLogger(__name__)

DEFAULT_SPAN_DAYS = 365


class DaudSchedule:
    """Alternate-day (Daud) fasting days between two dates, inclusive.

    Iteration is lazy and starts over on every ``iter()`` call. The first day
    is a fasting turn. Forbidden days are never emitted; under ``SKIP`` such a
    day consumes the turn, under ``POSTPONE`` the turn carries to the next day.
    A day that cannot be converted to Hijri is emitted with its error and
    still consumes its turn.
    """

    def __init__(
        self,
        start: date,
        end: Optional[date] = None,
        context: Optional[RuleContext] = None,
    ):
        self.start = start
        self.end = end or start + timedelta(days=DEFAULT_SPAN_DAYS)
        self.context = context or RuleContext()

    @property
    def strategy(self) -> DaudStrategy:
        return self.context.daud_strategy

    def __iter__(self) -> Iterator[DaudEntry]:
        should_fast = True
        current = self.start
        while current <= self.end:
            day = current
            current += timedelta(days=1)

            try:
                analysis = analyze_date(day, self.context)
            except CalendarConversionError as e:
                logger.warning("Daud schedule: %s", e.message)
                if should_fast:
                    yield DaudEntry(gregorian_date=day, error=e)
                should_fast = not should_fast
                continue

            if analysis.primary_status == FastingStatus.HARAM:
                logger.debug("Daud schedule: %s is forbidden", day.isoformat())
                if self.strategy is DaudStrategy.SKIP:
                    should_fast = not should_fast
                continue

            if should_fast:
                yield DaudEntry(gregorian_date=day, hijri_date=analysis.hijri_date)
            should_fast = not should_fast
