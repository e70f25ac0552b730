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
Aeolus Map visualisation module.

Provides the colour palette, marker styles and the map backends the
marker manager draws on.

Available backends:
    - InMemoryMap: Records markers without drawing anything
    - MatplotlibMap: Draws markers on a matplotlib Axes

Colour palette:
    - theme.AQI_5_BAND: Five-colour AQI palette
    - theme.get_colour_for_level: Get colour for a level name
"""

from .backends import InMemoryMap, MapBackend, MatplotlibMap, MatplotlibMarker
from .theme import (
    AQI_5_BAND,
    AQI_LEVEL_COLOURS,
    AUXILIARY_SCALE,
    PRIMARY_SCALE,
    SOURCE_GLYPHS,
    get_colour_for_level,
    get_marker_scale,
)

__all__ = [
    # Backends
    "MapBackend",
    "InMemoryMap",
    "MatplotlibMap",
    "MatplotlibMarker",
    # Palette
    "AQI_5_BAND",
    "AQI_LEVEL_COLOURS",
    # Marker styles
    "PRIMARY_SCALE",
    "AUXILIARY_SCALE",
    "SOURCE_GLYPHS",
    # Utilities
    "get_colour_for_level",
    "get_marker_scale",
]
