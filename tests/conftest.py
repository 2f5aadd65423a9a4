from datetime import date, datetime, timezone

import pytest
from hypothesis import strategies as st

from qiblafinder.models import (
    CalculationMethod,
    DailyPrayerSchedule,
    GeoCoordinate,
    Madhab,
)

# ---------- Shared fixtures ----------

NEW_YORK = GeoCoordinate(40.7580, -73.9855)
LONDON = GeoCoordinate(51.5007, -0.1246)
TOKYO = GeoCoordinate(35.6586, 139.7454)
SYDNEY = GeoCoordinate(-33.8568, 151.2153)
CAPE_TOWN = GeoCoordinate(-33.9249, 18.4241)
JAKARTA = GeoCoordinate(-6.2088, 106.8456)
FIJI = GeoCoordinate(-17.7134, 178.0650)
TEHRAN = GeoCoordinate(35.6892, 51.3890)
MECCA_CITY = GeoCoordinate(21.4225, 39.8262)
STOCKHOLM = GeoCoordinate(59.3293, 18.0686)
TROMSO = GeoCoordinate(69.6492, 18.9553)
EDINBURGH = GeoCoordinate(55.9533, -3.1883)

EQUINOX = date(2024, 3, 20)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def fixed_schedule() -> DailyPrayerSchedule:
    """A hand-built schedule with round UTC times for navigator tests."""
    return DailyPrayerSchedule(
        date=EQUINOX,
        coordinate=LONDON,
        method=CalculationMethod.MUSLIM_WORLD_LEAGUE,
        madhab=Madhab.SHAFI,
        fajr=utc(2024, 3, 20, 4, 30),
        sunrise=utc(2024, 3, 20, 6, 0),
        dhuhr=utc(2024, 3, 20, 12, 9),
        asr=utc(2024, 3, 20, 15, 25),
        maghrib=utc(2024, 3, 20, 18, 15),
        isha=utc(2024, 3, 20, 19, 45),
    )


@pytest.fixture
def next_day_schedule(fixed_schedule) -> DailyPrayerSchedule:
    return DailyPrayerSchedule(
        date=date(2024, 3, 21),
        coordinate=LONDON,
        method=CalculationMethod.MUSLIM_WORLD_LEAGUE,
        madhab=Madhab.SHAFI,
        fajr=utc(2024, 3, 21, 4, 28),
        sunrise=utc(2024, 3, 21, 5, 58),
        dhuhr=utc(2024, 3, 21, 12, 9),
        asr=utc(2024, 3, 21, 15, 26),
        maghrib=utc(2024, 3, 21, 18, 17),
        isha=utc(2024, 3, 21, 19, 47),
    )


# ---------- Hypothesis strategies ----------


def latitude():
    return st.floats(min_value=-90.0, max_value=90.0, allow_nan=False, allow_infinity=False)


def longitude():
    return st.floats(
        min_value=-180.0, max_value=180.0, allow_nan=False, allow_infinity=False
    )


def coordinate():
    return st.builds(GeoCoordinate, latitude(), longitude())


def any_angle():
    return st.floats(
        min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False
    )
