from .observer import GeoCoordinate
from .atmosphere import AtmosphericConditions, STANDARD_ATMOSPHERE
from .positions import EclipticPosition, EquatorialPosition, HorizontalPosition
from .criteria import VisibilityCriteria, VisibilityReport, CRITERIA_PRESETS
from .prayer import PrayerParams, PrayerTimes, PRAYER_PRESETS, PRAYER_NAMES
from .fasting import (
    DaudEntry,
    DaudStrategy,
    FastingAnalysis,
    FastingStatus,
    FastingType,
    HijriDate,
    RuleContext,
    RuleTrace,
    Weekday,
)

__all__ = [
    "GeoCoordinate",
    "AtmosphericConditions",
    "STANDARD_ATMOSPHERE",
    "EclipticPosition",
    "EquatorialPosition",
    "HorizontalPosition",
    "VisibilityCriteria",
    "VisibilityReport",
    "CRITERIA_PRESETS",
    "PrayerParams",
    "PrayerTimes",
    "PRAYER_PRESETS",
    "PRAYER_NAMES",
    "DaudEntry",
    "DaudStrategy",
    "FastingAnalysis",
    "FastingStatus",
    "FastingType",
    "HijriDate",
    "RuleContext",
    "RuleTrace",
    "Weekday",
]
