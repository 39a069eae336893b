from datetime import date, datetime, timedelta, timezone

import pytest

from hisab.ephemeris import solar_coordinates
from hisab.errors import InvalidPrayerParamsError, UnsolvablePrayerAngleError
from hisab.geometry.resolver import resolve_body
from hisab.models import PRAYER_NAMES, PRAYER_PRESETS, GeoCoordinate, PrayerParams
from hisab.prayer.calculator import (
    SOLAR_SEMIDIAMETER,
    calculate_prayer_times,
    round_half_up,
    sunset_time,
)

JAKARTA = GeoCoordinate(latitude=-6.2088, longitude=106.8456)
DAY = date(2024, 3, 11)
RAW = PRAYER_PRESETS["mabims"].replace(ihtiyat_minutes=0.0, rounding_seconds=1)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def _observed_altitude(instant: datetime, observer: GeoCoordinate) -> float:
    return resolve_body(solar_coordinates, instant, observer).observed.altitude


class TestJakarta:
    """Jakarta on 1 Ramadhan 1445 (2024-03-11)."""

    def test_chronological_order(self):
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        values = [times[name] for name in PRAYER_NAMES]
        assert values == sorted(values)

    def test_fajr_matches_published_schedule(self):
        # Kemenag: Subuh 04:38 WIB (UTC+7)
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        assert abs(times.fajr - utc(2024, 3, 10, 21, 38)) <= timedelta(minutes=4)

    def test_maghrib_matches_published_schedule(self):
        # Kemenag: Maghrib 18:10 WIB
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        assert abs(times.maghrib - utc(2024, 3, 11, 11, 10)) <= timedelta(minutes=4)

    def test_dhuhr_follows_equation_of_time(self):
        # Local mean noon 04:52:37 UTC, equation of time about -10 minutes
        times = calculate_prayer_times(DAY, JAKARTA, RAW)
        assert abs(times.dhuhr - utc(2024, 3, 11, 5, 2, 50)) <= timedelta(seconds=90)

    def test_day_is_symmetric_around_transit(self):
        times = calculate_prayer_times(DAY, JAKARTA, RAW)
        morning = times.dhuhr - times.sunrise
        evening = times.maghrib - times.dhuhr
        assert abs(morning - evening) <= timedelta(seconds=60)
        assert timedelta(hours=6) < evening < timedelta(hours=6, minutes=10)

    def test_idempotent(self):
        params = PRAYER_PRESETS["mabims"]
        assert calculate_prayer_times(DAY, JAKARTA, params) == calculate_prayer_times(
            DAY, JAKARTA, params
        )

    def test_sunset_time_is_unrounded_maghrib(self):
        times = calculate_prayer_times(DAY, JAKARTA, RAW)
        assert abs(sunset_time(DAY, JAKARTA) - times.maghrib) <= timedelta(seconds=1)


class TestOffsets:
    def test_imsak_before_fajr(self):
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        assert times.imsak < times.fajr
        assert times.fajr - times.imsak == timedelta(minutes=10)

    def test_imsak_buffer(self):
        ten = calculate_prayer_times(DAY, JAKARTA, RAW.replace(imsak_offset_minutes=10))
        fifteen = calculate_prayer_times(DAY, JAKARTA, RAW.replace(imsak_offset_minutes=15))
        assert ten.imsak - fifteen.imsak == timedelta(minutes=5)

    def test_ihtiyat_direction(self):
        plain = calculate_prayer_times(DAY, JAKARTA, RAW)
        safe = calculate_prayer_times(DAY, JAKARTA, RAW.replace(ihtiyat_minutes=2))

        two = timedelta(minutes=2)
        tolerance = timedelta(seconds=1)
        for name in ("imsak", "fajr", "sunrise"):
            assert abs((plain[name] - safe[name]) - two) <= tolerance
        for name in ("dhuhr", "asr", "maghrib", "isha"):
            assert abs((safe[name] - plain[name]) - two) <= tolerance

    def test_isha_interval(self):
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["umm_al_qura"])
        assert times.isha - times.maghrib == timedelta(minutes=90)

    def test_hanafi_asr_is_later(self):
        shafii = calculate_prayer_times(DAY, JAKARTA, RAW)
        hanafi = calculate_prayer_times(DAY, JAKARTA, RAW.replace(asr_shadow_factor=2.0))
        assert hanafi.asr > shafii.asr + timedelta(minutes=30)

    def test_deeper_fajr_angle_is_earlier(self):
        isna = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["isna"])
        mabims = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        assert mabims.fajr < isna.fajr

    def test_elevation_delays_maghrib(self):
        sea_level = calculate_prayer_times(DAY, JAKARTA, RAW)
        hilltop = calculate_prayer_times(DAY, JAKARTA.with_altitude(500.0), RAW)
        assert hilltop.maghrib > sea_level.maghrib
        assert hilltop.sunrise < sea_level.sunrise


class TestRounding:
    def test_rounded_to_minute(self):
        times = calculate_prayer_times(DAY, JAKARTA, PRAYER_PRESETS["mabims"])
        for instant in times.values():
            assert instant.second == 0
            assert instant.microsecond == 0

    def test_half_rounds_up(self):
        assert round_half_up(utc(2024, 3, 11, 12, 0, 30), 60) == utc(2024, 3, 11, 12, 1)

    def test_below_half_rounds_down(self):
        instant = utc(2024, 3, 11, 12, 0, 29, 999000)
        assert round_half_up(instant, 60) == utc(2024, 3, 11, 12, 0)

    def test_coarse_granularity(self):
        assert round_half_up(utc(2024, 3, 11, 12, 7, 31), 300) == utc(2024, 3, 11, 12, 10)


class TestHighLatitude:
    def test_midsummer_fajr_unsolvable(self):
        tromso = GeoCoordinate(latitude=69.6496, longitude=18.9560)
        with pytest.raises(UnsolvablePrayerAngleError) as exc_info:
            calculate_prayer_times(date(2024, 6, 21), tromso, PRAYER_PRESETS["mwl"])
        assert exc_info.value.prayer == "fajr"
        assert "69.6496" in str(exc_info.value)

    def test_polar_night_sunrise_unsolvable(self):
        longyearbyen = GeoCoordinate(latitude=78.2232, longitude=15.6267)
        with pytest.raises(UnsolvablePrayerAngleError) as exc_info:
            calculate_prayer_times(date(2024, 12, 21), longyearbyen, PRAYER_PRESETS["mwl"])
        assert exc_info.value.prayer == "sunrise"

    def test_midnight_sun_has_no_sunset(self):
        tromso = GeoCoordinate(latitude=69.6496, longitude=18.9560)
        with pytest.raises(UnsolvablePrayerAngleError):
            sunset_time(date(2024, 6, 21), tromso)

    def test_refracted_sun_clears_horizon_at_polar_circle(self):
        # Geometric transit altitude is about -0.34 deg, refraction lifts it above -0.27
        observer = GeoCoordinate(latitude=66.9, longitude=25.0)
        day = date(2024, 12, 21)
        noon = utc(2024, 12, 21, 12) - timedelta(hours=observer.longitude / 15.0)

        sunset = sunset_time(day, observer)

        assert noon < sunset < noon + timedelta(hours=3)
        assert _observed_altitude(sunset, observer) == pytest.approx(
            -SOLAR_SEMIDIAMETER, abs=0.01
        )

    def test_sunset_near_lower_culmination_stays_on_date(self):
        observer = GeoCoordinate(latitude=65.8, longitude=20.0)
        noon = utc(2024, 6, 14, 12) - timedelta(hours=observer.longitude / 15.0)
        try:
            sunset = sunset_time(date(2024, 6, 14), observer)
        except UnsolvablePrayerAngleError:
            return
        assert noon < sunset <= noon + timedelta(hours=12, minutes=5)
        assert _observed_altitude(sunset, observer) == pytest.approx(
            -SOLAR_SEMIDIAMETER, abs=0.01
        )

    @pytest.mark.parametrize("latitude", [64.0, 65.0, 66.0, 67.0])
    def test_summer_sunsets_hit_target_or_raise(self, latitude):
        observer = GeoCoordinate(latitude=latitude, longitude=20.0)
        for offset in range(0, 40, 4):
            day = date(2024, 6, 1) + timedelta(days=offset)
            noon = utc(day.year, day.month, day.day, 12) - timedelta(hours=20.0 / 15.0)
            try:
                sunset = sunset_time(day, observer)
            except UnsolvablePrayerAngleError:
                continue
            assert noon < sunset <= noon + timedelta(hours=12, minutes=5)
            assert _observed_altitude(sunset, observer) == pytest.approx(
                -SOLAR_SEMIDIAMETER, abs=0.01
            )


class TestParams:
    def test_positive_fajr_angle_rejected(self):
        with pytest.raises(InvalidPrayerParamsError):
            PrayerParams(fajr_angle=18.0, isha_angle=-17.0)

    def test_missing_isha_rule_rejected(self):
        with pytest.raises(InvalidPrayerParamsError):
            PrayerParams(fajr_angle=-18.0, isha_angle=None)

    def test_replace_revalidates(self):
        with pytest.raises(InvalidPrayerParamsError):
            PRAYER_PRESETS["mwl"].replace(rounding_seconds=0)

    def test_presets_are_data(self):
        assert PRAYER_PRESETS["mabims"].fajr_angle == -20.0
        assert PRAYER_PRESETS["mabims"].ihtiyat_minutes == 2.0
        assert PRAYER_PRESETS["umm_al_qura"].isha_angle is None
        assert PRAYER_PRESETS["umm_al_qura"].isha_interval_minutes == 90.0
