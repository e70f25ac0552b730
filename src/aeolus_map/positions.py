# Aeolus Map: reconcile air quality readings onto an interactive map
# Copyright (C) 2025 Ruaraidh Dobson, South London Scientific

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.

# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""
Marker placement for co-located sources.

All three sources describe the same reference point, so drawing them at
their true position would stack the markers on top of each other. The
auxiliary sources are nudged diagonally instead: satellite to the
north-east, ground station to the south-west. The offsets are for
legibility only and carry no geographic meaning.
"""

from .types import Location, SourceId, normalise_source

# Offset in decimal degrees (roughly 2 km at mid latitudes)
POSITION_OFFSET = 0.02

# (lat, lon) offset direction per source
OFFSET_DIRECTIONS: dict[SourceId, tuple[int, int]] = {
    "CURRENT": (0, 0),
    "SATELLITE": (1, 1),
    "GROUND": (-1, -1),
}


def resolve_position(
    source: str, location: Location, offset: float = POSITION_OFFSET
) -> Location:
    """
    Compute where a source's marker should be drawn.

    Args:
        source: Source identifier
        location: Reference location
        offset: Offset in degrees applied to auxiliary sources

    Returns:
        Location: Marker position, always a valid coordinate

    Raises:
        ValueError: If the source is unknown or offset is not positive

    Example:
        >>> resolve_position("SATELLITE", {"lat": 40.0, "lon": -74.0})
        {'lat': 40.02, 'lon': -73.98}
    """
    if offset <= 0:
        raise ValueError(f"Position offset must be positive, got {offset}")

    d_lat, d_lon = OFFSET_DIRECTIONS[normalise_source(source)]

    # Clamp at the poles and wrap across the antimeridian
    lat = max(-90.0, min(90.0, location["lat"] + d_lat * offset))
    lon = location["lon"] + d_lon * offset
    if lon > 180.0:
        lon -= 360.0
    elif lon < -180.0:
        lon += 360.0

    return {"lat": lat, "lon": lon}
