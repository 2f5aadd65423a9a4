from datetime import date, datetime, timedelta, timezone

import pytest
from hypothesis import given

from conftest import any_angle
from qiblafinder.angles import signed_angle, unwind_angle
from qiblafinder.models import Rounding
from qiblafinder.timeutil import (
    countdown_string,
    hijri_date,
    hijri_date_string,
    round_to_minute,
)


@pytest.mark.parametrize(
    "seconds, rounding, expected_minute",
    [
        (29, Rounding.NEAREST, 10),
        (30, Rounding.NEAREST, 11),
        (1, Rounding.UP, 11),
        (0, Rounding.UP, 10),
    ],
)
def test_round_to_minute(seconds, rounding, expected_minute):
    value = datetime(2024, 3, 20, 5, 10, seconds, tzinfo=timezone.utc)
    assert round_to_minute(value, rounding).minute == expected_minute


def test_round_none_keeps_seconds():
    value = datetime(2024, 3, 20, 5, 10, 42, tzinfo=timezone.utc)
    assert round_to_minute(value, Rounding.NONE) == value


def test_countdown_strings():
    ref = datetime(2024, 3, 20, 12, 0, tzinfo=timezone.utc)
    assert countdown_string(ref - timedelta(minutes=1), ref) == "Passed"
    assert countdown_string(ref + timedelta(seconds=30), ref) == "Now"
    assert countdown_string(ref + timedelta(minutes=45), ref) == "in 45m"
    assert countdown_string(ref + timedelta(hours=2, minutes=15), ref) == "in 2h 15m"


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2025, 3, 1), (1446, 9, 1)),
        (date(2025, 1, 1), (1446, 7, 1)),
    ],
)
def test_hijri_date(day, expected):
    assert hijri_date(day) == expected


def test_hijri_date_string():
    assert hijri_date_string(date(2025, 3, 1)) == "1 Ramadan 1446"


def test_angle_helpers():
    assert unwind_angle(-90.0) == 270.0
    assert unwind_angle(720.0) == 0.0
    assert signed_angle(-180.0) == 180.0


@given(any_angle())
def test_unwind_range(angle):
    assert 0.0 <= unwind_angle(angle) < 360.0
