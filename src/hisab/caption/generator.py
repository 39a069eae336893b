from ..models.fasting import FastingStatus, FastingType, HijriDate, Weekday

STATUS_PHRASES = {
    FastingStatus.HARAM: "Fasting is forbidden (haram)",
    FastingStatus.WAJIB: "Fasting is obligatory (wajib)",
    FastingStatus.SUNNAH_MUAKKADAH: "Fasting is strongly recommended (sunnah muakkadah)",
    FastingStatus.SUNNAH: "Fasting is recommended (sunnah)",
    FastingStatus.MAKRUH: "Fasting is disliked (makruh)",
    FastingStatus.MUBAH: "Fasting is permissible (mubah)",
}

REASON_PHRASES = {
    FastingType.RAMADHAN: "it is a day of Ramadhan",
    FastingType.ARAFAH: "it is the Day of Arafah",
    FastingType.TASUA: "it is Tasu'a, the 9th of Muharram",
    FastingType.ASHURA: "it is Ashura, the 10th of Muharram",
    FastingType.AYYAMUL_BIDH: "it is one of the white days (13-15)",
    FastingType.MONDAY: "it is a Monday",
    FastingType.THURSDAY: "it is a Thursday",
    FastingType.SHAWWAL: "it is one of the six days of Shawwal",
    FastingType.EID_AL_FITR: "it is Eid al-Fitr",
    FastingType.EID_AL_ADHA: "it is Eid al-Adha",
    FastingType.TASHRIQ: "it is one of the days of Tashriq",
    FastingType.SINGLED_OUT_FRIDAY_OR_SATURDAY: (
        "a Friday or Saturday should not be singled out for fasting"
    ),
}


def _join(phrases: list[str]) -> str:
    if len(phrases) <= 1:
        return "".join(phrases)
    return ", ".join(phrases[:-1]) + " and " + phrases[-1]


def generate_explanation(
    status: FastingStatus,
    reasons: tuple[FastingType, ...],
    hijri_date: HijriDate,
    weekday: Weekday,
    is_hilal_adjusted: bool = False,
) -> str:
    """Generate a one-paragraph explanation of a fasting analysis.

    Args:
        status: Resolved primary status
        reasons: Matched fasting types in rule order
        hijri_date: The Hijri date that was analyzed
        weekday: Weekday of the civil date
        is_hilal_adjusted: Whether a manual hilal offset shifted the date

    Returns:
        Human-readable explanation string.
    """
    parts = [f"{weekday.name.title()}, {hijri_date}"]

    if reasons:
        parts.append(
            f"{STATUS_PHRASES[status]} because "
            + _join([REASON_PHRASES[reason] for reason in reasons])
        )
    else:
        parts.append(f"{STATUS_PHRASES[status]}; no special ruling applies")

    if is_hilal_adjusted:
        parts.append("Hijri date adjusted for local moon sighting")

    return ". ".join(parts) + "."
