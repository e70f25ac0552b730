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
AQI severity classification.

Maps a numeric AQI onto one of five severity levels, using the US EPA
category boundaries up to "Very Unhealthy":

    Good (0-50), Moderate (51-100), Unhealthy for Sensitive Groups (101-150),
    Unhealthy (151-200), Very Unhealthy (above 200).

Upper bounds are inclusive, so 50, 100, 150 and 200 belong to the lower
band. Fractional values between bands (e.g. 50.5) go to the upper band.

Missing values are treated as 0 by callers (see `aqi_or_zero`), which
means a source without data is displayed as "Good".

Reference: https://www.airnow.gov/aqi/aqi-basics/
"""

from dataclasses import dataclass

import pandas as pd

from .viz.theme import AQI_LEVEL_COLOURS

# =============================================================================
# Category Definitions
# =============================================================================

# (inclusive upper bound, level), checked in order
CATEGORIES: list[tuple[float, str]] = [
    (50, "Good"),
    (100, "Moderate"),
    (150, "Unhealthy for Sensitive Groups"),
    (200, "Unhealthy"),
]

# Everything above the last bound
TOP_LEVEL = "Very Unhealthy"

LEVELS = [level for _, level in CATEGORIES] + [TOP_LEVEL]


@dataclass(frozen=True)
class Classification:
    """Severity level and display colour for an AQI value."""

    level: str  # Level name (e.g., "Good", "Moderate")
    colour: str  # Hex colour code for display


def aqi_or_zero(aqi: float | None) -> float:
    """
    Replace a missing AQI with 0.

    None and NaN both count as missing.

    Args:
        aqi: AQI value or None

    Returns:
        float: The AQI, or 0 if missing
    """
    if aqi is None or pd.isna(aqi):
        return 0
    return aqi


def classify(aqi: float | None) -> Classification:
    """
    Classify an AQI value into a severity level and colour.

    This is a total function: negative values fall into "Good" by the
    same <= 50 rule, and anything above 200 is "Very Unhealthy".

    Args:
        aqi: AQI value. None/NaN is treated as 0.

    Returns:
        Classification: Level name and hex colour

    Example:
        >>> classify(42)
        Classification(level='Good', colour='#10B981')
        >>> classify(150).level
        'Unhealthy for Sensitive Groups'
    """
    value = aqi_or_zero(aqi)

    for upper, level in CATEGORIES:
        if value <= upper:
            return Classification(level=level, colour=AQI_LEVEL_COLOURS[level])

    return Classification(level=TOP_LEVEL, colour=AQI_LEVEL_COLOURS[TOP_LEVEL])


def format_aqi(aqi: float | None, missing: str = "N/A") -> str:
    """
    Format an AQI value for display.

    Integral floats lose their decimal point (42.0 -> "42").

    Args:
        aqi: AQI value or None
        missing: Text to show when the value is missing

    Returns:
        str: Display text
    """
    if aqi is None or pd.isna(aqi):
        return missing
    if isinstance(aqi, float) and aqi.is_integer():
        return str(int(aqi))
    return str(aqi)
