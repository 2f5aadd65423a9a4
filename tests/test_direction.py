import math

import pytest
from hypothesis import given

from conftest import (
    CAPE_TOWN,
    FIJI,
    JAKARTA,
    LONDON,
    NEW_YORK,
    SYDNEY,
    TOKYO,
    any_angle,
    coordinate,
)
from qiblafinder.direction import (
    MECCA,
    align,
    cardinal_direction,
    compute_direction,
    haversine_distance,
    initial_bearing,
    is_aligned,
    relative_bearing,
)
from qiblafinder.models import GeoCoordinate


@pytest.mark.parametrize(
    "origin, bearing",
    [
        (NEW_YORK, 58.5),
        (LONDON, 119.0),
        (TOKYO, 293.0),
        (SYDNEY, 277.5),
        (CAPE_TOWN, 23.4),
        (JAKARTA, 295.1),
    ],
)
def test_known_city_bearings(origin, bearing):
    assert compute_direction(origin).bearing == pytest.approx(bearing, abs=1.0)


def test_new_york_distance():
    # Great circle on a 6,371 km sphere
    assert compute_direction(NEW_YORK).distance == pytest.approx(10_303_000, abs=20_000)


def test_at_the_kaaba():
    direction = compute_direction(MECCA)
    assert direction.distance < 100
    assert 0 <= direction.bearing < 360


def test_north_pole_points_south():
    direction = compute_direction(GeoCoordinate(90.0, 0.0))
    assert direction.bearing == pytest.approx(180.0, abs=10.0)
    assert direction.distance == pytest.approx(7_625_000, abs=10_000)


def test_south_pole_points_north():
    direction = compute_direction(GeoCoordinate(-90.0, 0.0))
    bearing = direction.bearing if direction.bearing < 180 else direction.bearing - 360
    assert bearing == pytest.approx(0.0, abs=10.0)
    assert direction.distance == pytest.approx(12_390_000, abs=10_000)


def test_antipode_distance_is_half_circumference():
    antipode = GeoCoordinate(-MECCA.latitude, MECCA.longitude - 180)
    direction = compute_direction(antipode)
    assert direction.distance == pytest.approx(math.pi * 6_371_000, abs=10_000)
    assert 0 <= direction.bearing < 360


def test_date_line_crossing():
    direction = compute_direction(FIJI)
    assert 0 <= direction.bearing < 360
    assert 13_000_000 < direction.distance < 16_000_000
    # Same point written east of the date line
    wrapped = compute_direction(GeoCoordinate(FIJI.latitude, FIJI.longitude - 360))
    assert wrapped.bearing == pytest.approx(direction.bearing, abs=1e-9)
    assert wrapped.distance == pytest.approx(direction.distance, abs=1e-3)


def test_out_of_range_latitude_does_not_raise():
    direction = compute_direction(GeoCoordinate(95.0, 0.0))
    assert 0 <= direction.bearing < 360


def test_non_finite_input_does_not_raise():
    direction = compute_direction(GeoCoordinate(math.nan, 10.0))
    assert direction.bearing == 0.0
    assert math.isnan(direction.distance)


def test_repeated_calls_are_identical():
    assert compute_direction(NEW_YORK) == compute_direction(NEW_YORK)


def test_formatted_strings():
    direction = compute_direction(NEW_YORK)
    assert direction.formatted_bearing == "58° NE"
    assert direction.formatted_distance.endswith(" km")
    assert direction.distance_km == pytest.approx(direction.distance / 1000)


@pytest.mark.parametrize(
    "bearing, label",
    [
        (0.0, "N"),
        (22.4, "N"),
        (22.5, "NE"),
        (58.5, "NE"),
        (119.0, "SE"),
        (180.0, "S"),
        (337.5, "N"),
        (359.9, "N"),
        (-90.0, "W"),
        (450.0, "E"),
    ],
)
def test_cardinal_8(bearing, label):
    assert cardinal_direction(bearing) == label


@pytest.mark.parametrize(
    "bearing, label",
    [
        (0.0, "N"),
        (11.24, "N"),
        (11.25, "NNE"),
        (58.5, "ENE"),
        (202.5, "SSW"),
        (348.75, "N"),
    ],
)
def test_cardinal_16(bearing, label):
    assert cardinal_direction(bearing, points=16) == label


def test_cardinal_rejects_other_roses():
    with pytest.raises(ValueError):
        cardinal_direction(10.0, points=4)


def test_no_heading_means_not_aligned():
    direction = compute_direction(NEW_YORK)
    assert direction.is_aligned is False
    assert direction.relative_bearing is None


def test_alignment_against_heading():
    direction = compute_direction(NEW_YORK, heading=60.0)
    assert direction.is_aligned
    assert direction.relative_bearing == pytest.approx(-1.5, abs=1.0)

    turned = align(direction, heading=200.0)
    assert not turned.is_aligned
    assert turned.bearing == direction.bearing
    assert turned.distance == direction.distance


def test_alignment_wraps_through_north():
    assert is_aligned(2.0, 358.0)
    assert relative_bearing(2.0, 358.0) == pytest.approx(4.0)
    assert relative_bearing(358.0, 2.0) == pytest.approx(-4.0)


def test_relative_bearing_half_turn_is_positive():
    assert relative_bearing(180.0, 0.0) == pytest.approx(180.0)
    assert relative_bearing(0.0, 180.0) == pytest.approx(180.0)


@given(coordinate(), coordinate())
def test_bearing_in_range(origin, target):
    bearing = initial_bearing(origin, target)
    assert 0.0 <= bearing < 360.0


@given(coordinate(), coordinate())
def test_distance_bounded(origin, target):
    distance = haversine_distance(origin, target)
    assert 0.0 <= distance <= math.pi * 6_371_000 + 1e-6


@given(coordinate(), coordinate())
def test_distance_symmetric(origin, target):
    assert haversine_distance(origin, target) == pytest.approx(
        haversine_distance(target, origin), abs=1e-6
    )


@given(any_angle(), any_angle())
def test_relative_bearing_in_half_open_range(bearing, heading):
    relative = relative_bearing(bearing, heading)
    assert -180.0 < relative <= 180.0


@given(any_angle())
def test_cardinal_always_labelled(bearing):
    assert cardinal_direction(bearing) in ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
