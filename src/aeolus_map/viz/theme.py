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
Aeolus Map visual theme, colour palette and marker styles.

The palette is a five-band AQI progression (green, amber, orange, red,
purple). Marker styles are fixed constants: every marker is a filled
circle with a white outline, the primary source drawn larger than the
auxiliary ones so it reads as the main value on the map.
"""

from ..types import SourceId

# =============================================================================
# Brand Colours
# =============================================================================

SLS_CHARCOAL = "#4A4A4A"
WHITE = "#FFFFFF"

# =============================================================================
# AQI Palette
# =============================================================================

AQI_5_BAND = {
    "good": "#10B981",  # Emerald green
    "moderate": "#F59E0B",  # Amber
    "unhealthy_sensitive": "#F97316",  # Orange
    "unhealthy": "#EF4444",  # Red
    "very_unhealthy": "#8B5CF6",  # Purple
}

AQI_LEVEL_COLOURS = {
    "Good": AQI_5_BAND["good"],
    "Moderate": AQI_5_BAND["moderate"],
    "Unhealthy for Sensitive Groups": AQI_5_BAND["unhealthy_sensitive"],
    "Unhealthy": AQI_5_BAND["unhealthy"],
    "Very Unhealthy": AQI_5_BAND["very_unhealthy"],
}

# =============================================================================
# Marker Styles
# =============================================================================

MARKER_STROKE_COLOUR = WHITE
MARKER_STROKE_WIDTH = 2
MARKER_FILL_OPACITY = 1.0
MARKER_LABEL_COLOUR = WHITE

# Circle scale (radius in pixels) for the primary and auxiliary sources
PRIMARY_SCALE = 15
AUXILIARY_SCALE = 12

# Short glyphs for auxiliary sources. The primary source shows its AQI.
SOURCE_GLYPHS: dict[SourceId, str] = {
    "SATELLITE": "T",
    "GROUND": "O",
}

# =============================================================================
# Map Settings
# =============================================================================

# Half-width of the visible map window in degrees, roughly zoom level 10
DEFAULT_ZOOM_DEGREES = 0.1

FIGURE_SIZE = (8, 6)
COLOUR_GRID = "#E5E5E5"
COLOUR_TEXT = SLS_CHARCOAL


def get_colour_for_level(level: str) -> str:
    """
    Get the colour for an AQI severity level.

    Args:
        level: Level name (e.g., "Good", "Moderate")

    Returns:
        Hex colour code, charcoal for unknown levels
    """
    return AQI_LEVEL_COLOURS.get(level, SLS_CHARCOAL)


def get_marker_scale(source: SourceId) -> int:
    """Circle scale for a source's marker."""
    return PRIMARY_SCALE if source == "CURRENT" else AUXILIARY_SCALE
