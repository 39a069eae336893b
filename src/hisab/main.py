import argparse
import logging
import sys
from datetime import date, datetime, timezone

from . import __version__
from .api import (
    analyze_date,
    calculate_prayer_times,
    calculate_visibility,
    daud_schedule,
)
from .errors import TimeParseError, handle_error
from .models import (
    CRITERIA_PRESETS,
    PRAYER_PRESETS,
    DaudStrategy,
    FastingAnalysis,
    GeoCoordinate,
    PrayerTimes,
    RuleContext,
    VisibilityReport,
)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise TimeParseError(value, "date")


def _parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant, treating 'Z' and naive values as UTC."""
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        instant = datetime.fromisoformat(text)
    except ValueError:
        raise TimeParseError(value)
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="hisab",
        description="Astronomical prayer times, crescent visibility and fasting rulings.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    analyze = commands.add_parser("analyze", help="Fasting ruling for a civil date")
    analyze.add_argument("date", help="Civil date (YYYY-MM-DD)")
    analyze.add_argument(
        "--adjustment",
        type=int,
        default=0,
        help="Hijri day offset for local moon sighting (default: 0)",
    )

    prayer = commands.add_parser("prayer", help="Prayer times for a civil date")
    prayer.add_argument("date", help="Civil date (YYYY-MM-DD)")
    _add_location(prayer)
    prayer.add_argument(
        "--preset",
        choices=list(PRAYER_PRESETS.keys()),
        default="mabims",
        help="Calculation method (default: mabims)",
    )

    visibility = commands.add_parser(
        "visibility", help="Crescent visibility at an instant"
    )
    visibility.add_argument("instant", help="ISO-8601 UTC instant, usually sunset")
    _add_location(visibility)
    visibility.add_argument(
        "--criteria",
        choices=list(CRITERIA_PRESETS.keys()),
        default="mabims",
        help="Visibility criterion (default: mabims)",
    )

    daud = commands.add_parser("daud", help="Alternate-day fasting schedule")
    daud.add_argument("start", help="First day of the schedule (YYYY-MM-DD)")
    daud.add_argument("--end", default=None, help="Last day (default: one year later)")
    daud.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in DaudStrategy],
        default=DaudStrategy.SKIP.value,
        help="What a forbidden day does to the turn (default: skip)",
    )
    return parser


def _add_location(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", type=float, required=True, help="Latitude in degrees")
    parser.add_argument("--lng", type=float, required=True, help="Longitude in degrees")
    parser.add_argument(
        "--alt", type=float, default=0.0, help="Altitude above sea level in meters"
    )


def format_analysis(analysis: FastingAnalysis) -> str:
    reasons = ", ".join(reason.value for reason in analysis.reasons) or "none"
    lines = [
        f"Date:        {analysis.gregorian_date}",
        f"Hijri:       {analysis.hijri_date}",
        f"Status:      {analysis.primary_status.name}",
        f"Reasons:     {reasons}",
    ]
    if analysis.suppressed:
        set_aside = ", ".join(tag.value for tag in analysis.suppressed)
        lines.append(f"Set aside:   {set_aside}")
    lines += [
        "",
        analysis.explanation,
    ]
    return "\n".join(lines)


def format_prayer_times(times: PrayerTimes) -> str:
    return "\n".join(
        f"{name.capitalize():<8} {instant.strftime('%H:%M:%S')} UTC"
        for name, instant in times.items()
    )


def format_visibility(report: VisibilityReport) -> str:
    verdict = "meets" if report.meets_criteria else "does not meet"
    lines = [
        f"Instant:     {report.instant.isoformat()}",
        f"Moon alt:    {report.moon_altitude:.4f}°",
        f"Sun alt:     {report.sun_altitude:.4f}°",
        f"Elongation:  {report.elongation:.4f}°",
        f"Horizon dip: {report.horizon_dip:.4f}°",
        "",
        f"Crescent {verdict} {report.criteria.name} "
        f"({report.criteria.min_altitude}° / {report.criteria.min_elongation}°)",
    ]
    return "\n".join(lines)


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command and print its result.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        if args.command == "analyze":
            context = RuleContext.create(adjustment=args.adjustment)
            print(format_analysis(analyze_date(_parse_date(args.date), context)))

        elif args.command == "prayer":
            observer = GeoCoordinate(args.lat, args.lng, args.alt)
            times = calculate_prayer_times(
                _parse_date(args.date), observer, PRAYER_PRESETS[args.preset]
            )
            print(format_prayer_times(times))

        elif args.command == "visibility":
            observer = GeoCoordinate(args.lat, args.lng, args.alt)
            report = calculate_visibility(
                _parse_instant(args.instant),
                observer,
                CRITERIA_PRESETS[args.criteria],
            )
            print(format_visibility(report))

        elif args.command == "daud":
            start = _parse_date(args.start)
            end = _parse_date(args.end) if args.end else None
            context = RuleContext.create(daud_strategy=DaudStrategy(args.strategy))
            for entry in daud_schedule(start, end, context):
                if entry.ok:
                    print(f"{entry.gregorian_date}  {entry.hijri_date}")
                else:
                    print(f"{entry.gregorian_date}  (unavailable: {entry.error.message})")

        return 0

    except Exception as e:
        return handle_error(e, f"running '{args.command}'")


def main(argv=None):
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
