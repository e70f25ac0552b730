"""
Tests for positions.py - marker placement.
"""

import itertools

import pytest

from aeolus_map.positions import POSITION_OFFSET, resolve_position
from aeolus_map.types import validate_location


def test_current_uses_reference_location(new_york):
    assert resolve_position("CURRENT", new_york) == new_york


def test_satellite_offset_north_east(new_york):
    position = resolve_position("SATELLITE", new_york)
    assert position["lat"] == pytest.approx(new_york["lat"] + POSITION_OFFSET)
    assert position["lon"] == pytest.approx(new_york["lon"] + POSITION_OFFSET)


def test_ground_offset_south_west(new_york):
    position = resolve_position("GROUND", new_york)
    assert position["lat"] == pytest.approx(new_york["lat"] - POSITION_OFFSET)
    assert position["lon"] == pytest.approx(new_york["lon"] - POSITION_OFFSET)


def test_default_offset_is_two_hundredths():
    assert POSITION_OFFSET == 0.02


@pytest.mark.parametrize(
    "location",
    [
        {"lat": 40.7128, "lon": -74.0060},
        {"lat": 0.0, "lon": 0.0},
        {"lat": -33.8688, "lon": 151.2093},
    ],
)
def test_sources_never_share_a_position(location):
    positions = [
        resolve_position(source, location) for source in ("CURRENT", "SATELLITE", "GROUND")
    ]
    for a, b in itertools.combinations(positions, 2):
        assert a != b


def test_custom_offset(london):
    position = resolve_position("SATELLITE", london, offset=0.5)
    assert position["lat"] == pytest.approx(london["lat"] + 0.5)


def test_non_positive_offset_raises(london):
    with pytest.raises(ValueError, match="must be positive"):
        resolve_position("GROUND", london, offset=0)


def test_does_not_modify_location(london):
    original = dict(london)
    resolve_position("GROUND", london)
    assert london == original


def test_unknown_source_raises(london):
    with pytest.raises(ValueError, match="Unknown source"):
        resolve_position("DRONE", london)


def test_positions_near_poles_stay_valid():
    north = resolve_position("SATELLITE", {"lat": 89.99, "lon": 0.0})
    south = resolve_position("GROUND", {"lat": -89.99, "lon": 0.0})

    assert north["lat"] == 90.0
    assert south["lat"] == -90.0
    validate_location(north)
    validate_location(south)


def test_positions_wrap_across_antimeridian():
    east = resolve_position("SATELLITE", {"lat": 0.0, "lon": 179.99})
    west = resolve_position("GROUND", {"lat": 0.0, "lon": -179.99})

    assert east["lon"] == pytest.approx(-179.99)
    assert west["lon"] == pytest.approx(179.99)
    validate_location(east)
    validate_location(west)
