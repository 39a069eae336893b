from dataclasses import dataclass
from datetime import date
from enum import Enum, IntEnum
from typing import Optional

from ..errors import CalendarConversionError, InvalidConfigError

HIJRI_MONTH_NAMES = (
    "Muharram",
    "Safar",
    "Rabi' al-Awwal",
    "Rabi' al-Thani",
    "Jumada al-Ula",
    "Jumada al-Akhirah",
    "Rajab",
    "Sha'ban",
    "Ramadhan",
    "Shawwal",
    "Dhu al-Qi'dah",
    "Dhu al-Hijjah",
)


@dataclass(frozen=True)
class HijriDate:
    year: int
    month: int
    day: int

    @property
    def month_name(self) -> str:
        return HIJRI_MONTH_NAMES[self.month - 1]

    def __str__(self) -> str:
        return f"{self.day} {self.month_name} {self.year} AH"


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, gregorian: date) -> "Weekday":
        return cls(gregorian.weekday())


class FastingStatus(IntEnum):
    """Legal status of fasting; the integer value is the resolution priority."""

    MUBAH = 0
    MAKRUH = 1
    SUNNAH = 2
    SUNNAH_MUAKKADAH = 3
    WAJIB = 4
    HARAM = 5

    @property
    def is_sunnah(self) -> bool:
        return self in (FastingStatus.SUNNAH, FastingStatus.SUNNAH_MUAKKADAH)


class FastingType(Enum):
    RAMADHAN = "Ramadhan"
    ARAFAH = "Arafah"
    TASUA = "Tasu'a"
    ASHURA = "Ashura"
    AYYAMUL_BIDH = "Ayyamul Bidh"
    MONDAY = "Monday"
    THURSDAY = "Thursday"
    SHAWWAL = "Shawwal"
    EID_AL_FITR = "Eid al-Fitr"
    EID_AL_ADHA = "Eid al-Adha"
    TASHRIQ = "Tashriq"
    SINGLED_OUT_FRIDAY_OR_SATURDAY = "Singled-out Friday or Saturday"


class DaudStrategy(Enum):
    """What a Daud schedule does with its turn when that day is forbidden."""

    SKIP = "skip"
    POSTPONE = "postpone"


@dataclass(frozen=True)
class RuleTrace:
    """A rule that matched a day, and whether it survived conflict settling."""

    tag: FastingType
    status: FastingStatus
    kept: bool


@dataclass(frozen=True)
class FastingAnalysis:
    primary_status: FastingStatus
    reasons: tuple[FastingType, ...]
    explanation: str
    hijri_date: HijriDate
    weekday: Weekday
    is_hilal_adjusted: bool = False
    gregorian_date: Optional[date] = None
    traces: tuple[RuleTrace, ...] = ()

    def has_reason(self, fasting_type: FastingType) -> bool:
        return fasting_type in self.reasons

    @property
    def suppressed(self) -> tuple[FastingType, ...]:
        """Tags that matched but were overridden by a stronger ruling."""
        return tuple(trace.tag for trace in self.traces if not trace.kept)


MAX_ADJUSTMENT = 30
STRICT_ADJUSTMENT = 2


@dataclass(frozen=True)
class RuleContext:
    """Caller configuration for date analysis and Daud schedules."""

    adjustment: int = 0
    daud_strategy: DaudStrategy = DaudStrategy.SKIP

    @classmethod
    def create(
        cls,
        adjustment: int = 0,
        daud_strategy: DaudStrategy = DaudStrategy.SKIP,
        strict_adjustment: bool = False,
    ) -> "RuleContext":
        """Build a context, clamping the adjustment to [-30, 30].

        Raises:
            InvalidConfigError: If ``strict_adjustment`` is set and the
                adjustment is outside [-2, 2]
        """
        if strict_adjustment and abs(adjustment) > STRICT_ADJUSTMENT:
            raise InvalidConfigError(
                f"Adjustment {adjustment} outside strict bounds "
                f"[-{STRICT_ADJUSTMENT}, {STRICT_ADJUSTMENT}]",
                ["Moon sighting rarely differs from the table by more than two days"],
            )
        clamped = max(-MAX_ADJUSTMENT, min(MAX_ADJUSTMENT, adjustment))
        return cls(adjustment=clamped, daud_strategy=DaudStrategy(daud_strategy))

    @property
    def is_hilal_adjusted(self) -> bool:
        return self.adjustment != 0


@dataclass(frozen=True)
class DaudEntry:
    """One fasting day of a Daud schedule, or the reason it could not be analyzed."""

    gregorian_date: date
    hijri_date: Optional[HijriDate] = None
    error: Optional[CalendarConversionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
