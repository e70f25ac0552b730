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
Core type definitions for Aeolus Map.

This module defines the record schemas and type aliases shared by the
registry, the layer filter and the marker manager, so that every part of
the package agrees on what a source, a layer and a reading look like.
"""

from datetime import datetime
from typing import Callable, Literal, TypeAlias, TypedDict

# Source and layer identifiers
SourceId: TypeAlias = Literal["CURRENT", "SATELLITE", "GROUND"]
LayerName: TypeAlias = Literal["AQI", "SATELLITE", "GROUND", "COMPARISON", "POLLUTANTS"]

# Fixed set of sources, in drawing order
SOURCE_IDS: tuple[SourceId, ...] = ("CURRENT", "SATELLITE", "GROUND")

# Sources gated by the "show stations" toggle
AUXILIARY_SOURCES: frozenset[SourceId] = frozenset({"SATELLITE", "GROUND"})

# Human-readable source names, as shown in marker tooltips
SOURCE_NAMES: dict[SourceId, str] = {
    "CURRENT": "Current Location",
    "SATELLITE": "TEMPO Satellite",
    "GROUND": "OpenAQ Ground",
}


class Location(TypedDict):
    """
    A single geographic point in decimal degrees.

    Fields:
        lat: Latitude, -90 to 90
        lon: Longitude, -180 to 180
    """

    lat: float
    lon: float


class Reading(TypedDict, total=False):
    """
    Latest known reading for one source.

    Required fields:
        source: Source identifier ("CURRENT", "SATELLITE" or "GROUND")
        aqi: AQI value, or None if the source has no data yet

    Optional fields:
        pollutants: Mapping of pollutant name to concentration
        fetched_at: Timestamp when the reading was received
    """

    # Required fields
    source: SourceId
    aqi: float | None

    # Optional fields
    pollutants: dict[str, float] | None
    fetched_at: datetime


# Default reference location - New York
DEFAULT_LOCATION: Location = {"lat": 40.7128, "lon": -74.0060}


# Function type aliases - these define the "interface" for collaborators
Fetcher: TypeAlias = Callable[[SourceId, Location], Reading]
"""
A function that fetches the latest reading for a source.

Args:
    source: Source identifier
    location: Reference location to fetch for

Returns:
    Reading: The reading, with aqi=None if the service has no data
"""

EventHandler: TypeAlias = Callable[..., None]
"""
A function subscribed to an event topic. Receives the event payload as
keyword arguments.
"""


def normalise_source(source: str) -> SourceId:
    """
    Validate and normalise a source identifier (case-insensitive).

    Args:
        source: Source name, e.g. "current" or "SATELLITE"

    Returns:
        SourceId: The upper-case source identifier

    Raises:
        ValueError: If the source is not one of the known sources
    """
    normalized = str(source).upper()
    if normalized not in SOURCE_IDS:
        available = ", ".join(SOURCE_IDS)
        raise ValueError(f"Unknown source '{source}'. Available sources: {available}")
    return normalized  # type: ignore[return-value]


def validate_location(location: Location) -> Location:
    """
    Check that a location has usable coordinates.

    Args:
        location: Location to validate

    Returns:
        Location: A new Location with float coordinates

    Raises:
        ValueError: If latitude or longitude is missing or out of range
    """
    try:
        lat = float(location["lat"])
        lon = float(location["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid location {location!r}: {e}") from e

    if not -90 <= lat <= 90:
        raise ValueError(f"Latitude {lat} out of range (-90 to 90)")
    if not -180 <= lon <= 180:
        raise ValueError(f"Longitude {lon} out of range (-180 to 180)")

    return {"lat": lat, "lon": lon}
