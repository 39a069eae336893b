import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from hisab.api import analyze, analyze_date, daud_schedule, effective_date
from hisab.calendar.hijri import to_gregorian
from hisab.errors import CalendarConversionError
from hisab.models import (
    DaudStrategy,
    FastingStatus,
    FastingType,
    GeoCoordinate,
    HijriDate,
    RuleContext,
)

JAKARTA = GeoCoordinate(latitude=-6.2088, longitude=106.8456)
TROMSO = GeoCoordinate(latitude=69.6496, longitude=18.9560)
EID_AL_FITR_1445 = to_gregorian(HijriDate(1445, 10, 1))


class TestAnalyzeDate:
    def test_first_of_ramadhan(self):
        analysis = analyze_date(date(2024, 3, 11))
        assert analysis.primary_status == FastingStatus.WAJIB
        assert analysis.reasons == (FastingType.RAMADHAN,)
        assert analysis.hijri_date == HijriDate(1445, 9, 1)
        assert analysis.gregorian_date == date(2024, 3, 11)
        assert not analysis.is_hilal_adjusted

    def test_eid_is_haram(self):
        analysis = analyze_date(EID_AL_FITR_1445)
        assert analysis.primary_status == FastingStatus.HARAM
        assert analysis.has_reason(FastingType.EID_AL_FITR)

    def test_adjustment_is_reported(self):
        context = RuleContext.create(adjustment=1)
        analysis = analyze_date(date(2024, 3, 10), context)
        assert analysis.hijri_date == HijriDate(1445, 9, 1)
        assert analysis.is_hilal_adjusted

    def test_out_of_range(self):
        with pytest.raises(CalendarConversionError):
            analyze_date(date(1900, 1, 1))


class TestSunsetAwareAnalysis:
    """The Islamic day begins at Maghrib (about 11:08 UTC in Jakarta)."""

    def test_before_maghrib_keeps_civil_date(self):
        instant = datetime(2024, 3, 10, 5, 0, tzinfo=timezone.utc)
        assert effective_date(instant, JAKARTA) == date(2024, 3, 10)

    def test_after_maghrib_moves_to_next_day(self):
        instant = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        assert effective_date(instant, JAKARTA) == date(2024, 3, 11)

        analysis = analyze(instant, observer=JAKARTA)
        assert analysis.hijri_date == HijriDate(1445, 9, 1)
        assert analysis.primary_status == FastingStatus.WAJIB

    def test_without_observer_uses_utc_date(self):
        instant = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
        analysis = analyze(instant)
        assert analysis.hijri_date.month == 8

    def test_west_of_greenwich_uses_local_date(self):
        # Los Angeles sets at about 02:05 UTC on 2024-03-11 (19:05 local, 10 March)
        los_angeles = GeoCoordinate(latitude=34.0522, longitude=-118.2437)
        afternoon = datetime(2024, 3, 11, 1, 0, tzinfo=timezone.utc)
        evening = datetime(2024, 3, 11, 3, 0, tzinfo=timezone.utc)

        assert effective_date(afternoon, los_angeles) == date(2024, 3, 10)
        assert effective_date(evening, los_angeles) == date(2024, 3, 11)

    def test_no_sunset_logs_warning(self, caplog):
        instant = datetime(2024, 6, 21, 20, 0, tzinfo=timezone.utc)
        with caplog.at_level(logging.WARNING, logger="hisab.api"):
            day = effective_date(instant, TROMSO)
        assert day == date(2024, 6, 21)
        assert "No sunset" in caplog.text


def _fast_days(strategy, start, days=10):
    context = RuleContext.create(daud_strategy=strategy)
    schedule = daud_schedule(start, start + timedelta(days=days), context)
    return [entry.gregorian_date for entry in schedule]


class TestDaudSchedule:
    def test_skip_consumes_turn_on_eid(self):
        days = _fast_days(DaudStrategy.SKIP, EID_AL_FITR_1445)
        assert EID_AL_FITR_1445 not in days
        assert EID_AL_FITR_1445 + timedelta(days=1) not in days
        assert EID_AL_FITR_1445 + timedelta(days=2) in days

    def test_postpone_keeps_turn_after_eid(self):
        days = _fast_days(DaudStrategy.POSTPONE, EID_AL_FITR_1445)
        assert EID_AL_FITR_1445 not in days
        assert EID_AL_FITR_1445 + timedelta(days=1) in days
        assert EID_AL_FITR_1445 + timedelta(days=2) not in days

    @pytest.mark.parametrize("strategy", list(DaudStrategy))
    def test_never_fasts_forbidden_days(self, strategy):
        start = to_gregorian(HijriDate(1445, 12, 1))
        for day in _fast_days(strategy, start, days=30):
            assert analyze_date(day).primary_status != FastingStatus.HARAM

    @pytest.mark.parametrize("strategy", list(DaudStrategy))
    def test_fasting_days_never_consecutive(self, strategy):
        start = to_gregorian(HijriDate(1445, 12, 1))
        days = _fast_days(strategy, start, days=30)
        gaps = [(b - a).days for a, b in zip(days, days[1:])]
        assert all(gap >= 2 for gap in gaps)

    def test_alternates_on_ordinary_days(self):
        start = date(2024, 1, 1)
        days = _fast_days(DaudStrategy.SKIP, start, days=6)
        assert days == [start + timedelta(days=n) for n in (0, 2, 4, 6)]

    def test_restartable(self):
        schedule = daud_schedule(date(2024, 1, 1), date(2024, 1, 20))
        assert list(schedule) == list(schedule)

    def test_default_end_is_one_year(self):
        schedule = daud_schedule(date(2024, 1, 1))
        assert schedule.end == date(2024, 12, 31)

    def test_entries_carry_conversion_errors(self):
        schedule = daud_schedule(date(2077, 11, 10), date(2077, 11, 25))
        entries = list(schedule)

        assert entries[0].ok
        assert entries[0].hijri_date is not None
        failed = [entry for entry in entries if not entry.ok]
        assert failed
        assert all(isinstance(entry.error, CalendarConversionError) for entry in failed)
        assert all(entry.gregorian_date > date(2077, 11, 16) for entry in failed)
