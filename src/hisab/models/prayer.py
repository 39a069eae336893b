from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Optional

from ..errors import InvalidPrayerParamsError

PRAYER_NAMES = ("imsak", "fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")


@dataclass(frozen=True)
class PrayerParams:
    fajr_angle: float
    isha_angle: Optional[float]
    imsak_offset_minutes: float = 10.0
    ihtiyat_minutes: float = 0.0
    rounding_seconds: int = 60
    asr_shadow_factor: float = 1.0
    isha_interval_minutes: Optional[float] = None
    preset: Optional[str] = None

    def __post_init__(self):
        if self.fajr_angle >= 0.0:
            raise InvalidPrayerParamsError(
                "fajr_angle", self.fajr_angle, "must be below the horizon (< 0)"
            )
        if self.isha_angle is None and self.isha_interval_minutes is None:
            raise InvalidPrayerParamsError(
                "isha_angle", float("nan"), "either an angle or an interval is required"
            )
        if self.isha_angle is not None and self.isha_angle >= 0.0:
            raise InvalidPrayerParamsError(
                "isha_angle", self.isha_angle, "must be below the horizon (< 0)"
            )
        if self.isha_interval_minutes is not None and self.isha_interval_minutes <= 0:
            raise InvalidPrayerParamsError(
                "isha_interval_minutes", self.isha_interval_minutes, "must be positive"
            )
        if self.imsak_offset_minutes < 0 or self.ihtiyat_minutes < 0:
            raise InvalidPrayerParamsError(
                "imsak_offset_minutes/ihtiyat_minutes",
                min(self.imsak_offset_minutes, self.ihtiyat_minutes),
                "offsets cannot be negative",
            )
        if self.rounding_seconds < 1:
            raise InvalidPrayerParamsError(
                "rounding_seconds", self.rounding_seconds, "must be at least 1"
            )
        if self.asr_shadow_factor <= 0:
            raise InvalidPrayerParamsError(
                "asr_shadow_factor", self.asr_shadow_factor, "must be positive"
            )

    def replace(self, **changes) -> "PrayerParams":
        return replace(self, **changes)


@dataclass(frozen=True)
class PrayerTimes(Mapping):
    """Prayer boundaries for one day, as UTC instants in chronological order."""

    imsak: datetime
    fajr: datetime
    sunrise: datetime
    dhuhr: datetime
    asr: datetime
    maghrib: datetime
    isha: datetime

    def __getitem__(self, name: str) -> datetime:
        if name not in PRAYER_NAMES:
            raise KeyError(name)
        return getattr(self, name)

    def __iter__(self):
        return iter(PRAYER_NAMES)

    def __len__(self) -> int:
        return len(fields(self))


PRAYER_PRESETS = {
    "mabims": PrayerParams(
        fajr_angle=-20.0,
        isha_angle=-18.0,
        imsak_offset_minutes=10.0,
        ihtiyat_minutes=2.0,
        preset="MABIMS",
    ),
    "mwl": PrayerParams(
        fajr_angle=-18.0,
        isha_angle=-17.0,
        preset="MWL",
    ),
    "isna": PrayerParams(
        fajr_angle=-15.0,
        isha_angle=-15.0,
        preset="ISNA",
    ),
    "egyptian": PrayerParams(
        fajr_angle=-19.5,
        isha_angle=-17.5,
        preset="Egyptian",
    ),
    "umm_al_qura": PrayerParams(
        fajr_angle=-18.5,
        isha_angle=None,
        isha_interval_minutes=90.0,
        preset="UmmAlQura",
    ),
}
