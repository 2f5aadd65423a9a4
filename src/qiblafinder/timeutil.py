"""Calendar and clock helpers: minute rounding, countdowns, Hijri dates, display strings."""

import math
from datetime import date, datetime, timedelta

from qiblafinder.models import Rounding

_HIJRI_EPOCH = 1948439.5  # 1 Muharram 1 AH, civil (Friday) epoch

HIJRI_MONTHS: tuple[str, ...] = (
    "Muharram",
    "Safar",
    "Rabi' al-awwal",
    "Rabi' al-thani",
    "Jumada al-awwal",
    "Jumada al-thani",
    "Rajab",
    "Sha'ban",
    "Ramadan",
    "Shawwal",
    "Dhu al-Qi'dah",
    "Dhu al-Hijjah",
)


def round_to_minute(value: datetime, rounding: Rounding = Rounding.NEAREST) -> datetime:
    """Snap a datetime to a whole minute."""
    if rounding is Rounding.NONE:
        return value
    base = value.replace(second=0, microsecond=0)
    remainder = value - base
    if rounding is Rounding.UP:
        return base + timedelta(minutes=1) if remainder else base
    return base + timedelta(minutes=1) if remainder >= timedelta(seconds=30) else base


def countdown_string(target: datetime, reference: datetime) -> str:
    """Short countdown label such as "in 2h 15m", "Now" or "Passed"."""
    interval = (target - reference).total_seconds()
    if interval < 0:
        return "Passed"
    if interval < 60:
        return "Now"
    hours = int(interval) // 3600
    minutes = (int(interval) % 3600) // 60
    if hours > 0:
        return f"in {hours}h {minutes}m"
    return f"in {minutes}m"


def _hijri_to_jd(year: int, month: int, day: int) -> float:
    return (
        day
        + math.ceil(29.5 * (month - 1))
        + (year - 1) * 354
        + math.floor((3 + 11 * year) / 30)
        + _HIJRI_EPOCH
        - 1
    )


def hijri_date(day: date) -> tuple[int, int, int]:
    """Tabular Islamic civil calendar date as (year, month, day).

    Arithmetic calendar only; it can differ by a day or two from
    sighting-based calendars.
    """
    jd = day.toordinal() + 1721424.5
    year = math.floor((30 * (jd - _HIJRI_EPOCH) + 10646) / 10631)
    month = min(12, math.ceil((jd - (29 + _hijri_to_jd(year, 1, 1))) / 29.5) + 1)
    hijri_day = int(jd - _hijri_to_jd(year, month, 1)) + 1
    return year, month, hijri_day


def hijri_date_string(day: date) -> str:
    """Hijri date formatted as "1 Ramadan 1446"."""
    year, month, hijri_day = hijri_date(day)
    return f"{hijri_day} {HIJRI_MONTHS[month - 1]} {year}"
