"""Which schedule entry is next, and which period of the day we are in.

The period between sunrise and Dhuhr is reported as the sunrise period so a
timetable can highlight a row for every part of the day. That is a display
choice; sunrise is not a time of prayer (see Prayer.is_prayer).
"""

from datetime import datetime, timedelta
from enum import Enum

from qiblafinder.models import PRAYER_ORDER, DailyPrayerSchedule, Prayer


class SchedulePeriod(Enum):
    """Day states in order. Only moves forward as time advances."""

    BEFORE_FAJR = "before_fajr"
    FAJR = "fajr"
    SUNRISE = "sunrise"
    DHUHR = "dhuhr"
    ASR = "asr"
    MAGHRIB = "maghrib"
    ISHA = "isha"


_PERIOD_FOR: dict[Prayer, SchedulePeriod] = {
    Prayer.FAJR: SchedulePeriod.FAJR,
    Prayer.SUNRISE: SchedulePeriod.SUNRISE,
    Prayer.DHUHR: SchedulePeriod.DHUHR,
    Prayer.ASR: SchedulePeriod.ASR,
    Prayer.MAGHRIB: SchedulePeriod.MAGHRIB,
    Prayer.ISHA: SchedulePeriod.ISHA,
}


def _require_aware(now: datetime) -> None:
    if now.tzinfo is None or now.tzinfo.utcoffset(now) is None:
        raise ValueError("now must be timezone-aware")


def next_prayer(schedule: DailyPrayerSchedule, now: datetime) -> Prayer | None:
    """First entry strictly after now; None once Isha has started."""
    _require_aware(now)
    for prayer in PRAYER_ORDER:
        if schedule.time_for(prayer) > now:
            return prayer
    return None


def current_prayer(schedule: DailyPrayerSchedule, now: datetime) -> Prayer | None:
    """Latest entry at or before now; None before Fajr."""
    _require_aware(now)
    current = None
    for prayer in PRAYER_ORDER:
        if schedule.time_for(prayer) <= now:
            current = prayer
        else:
            break
    return current


def period(schedule: DailyPrayerSchedule, now: datetime) -> SchedulePeriod:
    prayer = current_prayer(schedule, now)
    if prayer is None:
        return SchedulePeriod.BEFORE_FAJR
    return _PERIOD_FOR[prayer]


def time_remaining(
    schedule: DailyPrayerSchedule, prayer: Prayer, now: datetime
) -> timedelta:
    """Time until prayer; negative once it has passed."""
    _require_aware(now)
    return schedule.time_for(prayer) - now


def upcoming(
    today: DailyPrayerSchedule,
    tomorrow: DailyPrayerSchedule | None,
    now: datetime,
) -> tuple[Prayer, datetime] | None:
    """Next entry and its time, rolling over to tomorrow's schedule after Isha.

    The caller computes tomorrow's schedule; None there (unsolvable date)
    gives None here once today is exhausted.
    """
    prayer = next_prayer(today, now)
    if prayer is not None:
        return prayer, today.time_for(prayer)
    if tomorrow is None:
        return None
    prayer = next_prayer(tomorrow, now)
    if prayer is None:
        return None
    return prayer, tomorrow.time_for(prayer)
