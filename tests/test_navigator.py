from datetime import datetime, timedelta

import pytest
from hypothesis import given, strategies as st

from conftest import EQUINOX, LONDON, utc
from qiblafinder.models import CalculationMethod, DailyPrayerSchedule, Madhab, Prayer
from qiblafinder.navigator import (
    SchedulePeriod,
    current_prayer,
    next_prayer,
    period,
    time_remaining,
    upcoming,
)


def test_before_fajr(fixed_schedule):
    now = utc(2024, 3, 20, 3, 0)
    assert current_prayer(fixed_schedule, now) is None
    assert next_prayer(fixed_schedule, now) is Prayer.FAJR
    assert period(fixed_schedule, now) is SchedulePeriod.BEFORE_FAJR


def test_exactly_at_an_entry_counts_as_current(fixed_schedule):
    now = fixed_schedule.dhuhr
    assert current_prayer(fixed_schedule, now) is Prayer.DHUHR
    assert next_prayer(fixed_schedule, now) is Prayer.ASR


def test_between_sunrise_and_dhuhr_reports_sunrise(fixed_schedule):
    now = utc(2024, 3, 20, 9, 0)
    assert current_prayer(fixed_schedule, now) is Prayer.SUNRISE
    assert period(fixed_schedule, now) is SchedulePeriod.SUNRISE
    assert next_prayer(fixed_schedule, now) is Prayer.DHUHR


def test_after_isha(fixed_schedule):
    now = utc(2024, 3, 20, 23, 0)
    assert current_prayer(fixed_schedule, now) is Prayer.ISHA
    assert next_prayer(fixed_schedule, now) is None
    assert period(fixed_schedule, now) is SchedulePeriod.ISHA


def test_time_remaining(fixed_schedule):
    now = utc(2024, 3, 20, 15, 0)
    assert time_remaining(fixed_schedule, Prayer.ASR, now) == timedelta(minutes=25)
    assert time_remaining(fixed_schedule, Prayer.DHUHR, now) < timedelta(0)


def test_upcoming_same_day(fixed_schedule, next_day_schedule):
    now = utc(2024, 3, 20, 16, 0)
    assert upcoming(fixed_schedule, next_day_schedule, now) == (
        Prayer.MAGHRIB,
        fixed_schedule.maghrib,
    )


def test_upcoming_rolls_to_tomorrow(fixed_schedule, next_day_schedule):
    now = utc(2024, 3, 20, 22, 0)
    assert upcoming(fixed_schedule, next_day_schedule, now) == (
        Prayer.FAJR,
        next_day_schedule.fajr,
    )


def test_upcoming_without_tomorrow(fixed_schedule):
    assert upcoming(fixed_schedule, None, utc(2024, 3, 20, 22, 0)) is None


def test_naive_now_is_rejected(fixed_schedule):
    with pytest.raises(ValueError):
        next_prayer(fixed_schedule, datetime(2024, 3, 20, 12, 0))
    with pytest.raises(ValueError):
        current_prayer(fixed_schedule, datetime(2024, 3, 20, 12, 0))


_ORDER = list(SchedulePeriod)


@given(
    st.integers(min_value=0, max_value=24 * 60 - 1),
    st.integers(min_value=0, max_value=24 * 60 - 1),
)
def test_period_never_moves_backwards(first, second):
    # Built inline: function-scoped fixtures do not mix with @given
    schedule = DailyPrayerSchedule(
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
    midnight = utc(2024, 3, 20)
    early, late = sorted((first, second))
    a = period(schedule, midnight + timedelta(minutes=early))
    b = period(schedule, midnight + timedelta(minutes=late))
    assert _ORDER.index(a) <= _ORDER.index(b)
