"""Error handling utilities for hisab computations."""

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)


class HisabError(Exception):
    """Base exception for hisab-specific errors."""

    def __init__(self, message: str, suggestions: Optional[list[str]] = None):
        """Initialize with message and optional suggestions.

        Args:
            message: Error description
            suggestions: Optional list of actionable suggestions
        """
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with suggestions."""
        formatted = f"{self.message}"
        if self.suggestions:
            formatted += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                formatted += f"\n  - {suggestion}"
        return formatted


class InvalidCoordinateError(HisabError):
    """Raised when an observer coordinate is outside the valid range."""

    def __init__(self, field: str, value: float, valid_range: str):
        self.field = field
        self.value = value
        message = f"Invalid {field}: {value} (expected {valid_range})"
        suggestions = [
            "Latitude must be within [-90, 90] and longitude within [-180, 180]",
            "Altitude is meters above sea level and cannot be negative",
        ]
        super().__init__(message, suggestions)


class CalendarConversionError(HisabError):
    """Raised when a Gregorian date has no Hijri equivalent in the table."""

    def __init__(self, date_repr: str, reason: str = ""):
        self.date_repr = date_repr
        message = f"Cannot convert {date_repr} to a Hijri date"
        if reason:
            message += f": {reason}"
        suggestions = [
            "The Umm al-Qura table covers 1343-1500 AH (1924-08-01 to 2077-11-16)",
            "Check that the day adjustment does not push the date out of range",
        ]
        super().__init__(message, suggestions)


class UnsolvablePrayerAngleError(HisabError):
    """Raised when the Sun never reaches the altitude a prayer requires."""

    def __init__(self, prayer: str, date_repr: str, latitude: float, angle: float):
        self.prayer = prayer
        self.angle = angle
        message = (
            f"Sun never reaches {angle:.3f}° for {prayer} on {date_repr} "
            f"at latitude {latitude:.4f}°"
        )
        suggestions = [
            "This happens near and beyond the polar circles around the solstices",
            "Use a fixed-interval Isha (isha_interval_minutes) or a nearby lower latitude",
        ]
        super().__init__(message, suggestions)


class InvalidCriteriaError(HisabError):
    """Raised when visibility criteria thresholds are negative."""

    def __init__(self, field: str, value: float):
        self.field = field
        message = f"Visibility criterion {field} must be non-negative, got {value}"
        suggestions = [
            "Thresholds are degrees above the horizon and degrees of separation",
            "Known presets can be used instead, e.g. CRITERIA_PRESETS['mabims']",
        ]
        super().__init__(message, suggestions)


class InvalidPrayerParamsError(HisabError):
    """Raised when prayer parameters violate their invariants."""

    def __init__(self, field: str, value: float, requirement: str):
        self.field = field
        message = f"Prayer parameter {field}={value} is invalid: {requirement}"
        suggestions = [
            "Twilight angles are degrees below the horizon and must be negative",
            "Start from a preset, e.g. PRAYER_PRESETS['mwl'].replace(...)",
        ]
        super().__init__(message, suggestions)


class InvalidConfigError(HisabError):
    """Raised when a rule context is configured with out-of-bounds values."""


class TimeParseError(HisabError):
    """Raised when a date or UTC time cannot be parsed."""

    def __init__(self, value: str, expected: str = "ISO-8601"):
        message = f"Invalid {expected} value: '{value}'"
        suggestions = [
            "Dates use YYYY-MM-DD (e.g., '2024-03-11')",
            "Instants use ISO-8601 with 'Z' suffix for UTC (e.g., '2024-03-10T11:05:00Z')",
        ]
        super().__init__(message, suggestions)


def print_error(error: Exception) -> None:
    """Print error to stderr with formatted output.

    Args:
        error: Exception to print
    """
    print(f"Error: {error}", file=sys.stderr)

    if isinstance(error, HisabError):
        if error.suggestions:
            print(file=sys.stderr)


def handle_error(error: Exception, context: Optional[str] = None) -> int:
    """Handle an error with optional context and return exit code.

    Args:
        error: Exception that occurred
        context: Optional description of what was being attempted

    Returns:
        Exit code (1 for error)
    """
    if context:
        print(f"Error while {context}:", file=sys.stderr)

    print_error(error)

    import traceback

    if not isinstance(error, HisabError):
        logger.debug("Unexpected error", exc_info=error)
        traceback.print_exc()

    return 1
