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
Map layers and source eligibility.

A layer decides which sources may appear on the map, independent of
whether they have data:

    AQI         -> CURRENT
    SATELLITE   -> SATELLITE (only with stations shown)
    GROUND      -> GROUND (only with stations shown)
    COMPARISON  -> CURRENT, plus SATELLITE and GROUND with stations shown
    POLLUTANTS  -> same sources as COMPARISON

The "show stations" toggle only ever gates the auxiliary sources; the
current location is never hidden by it.
"""

from typing import TypedDict

from .types import AUXILIARY_SOURCES, LayerName, SourceId


class LayerInfo(TypedDict):
    """Metadata about a map layer."""

    name: str  # Display name
    sources: frozenset[SourceId]  # Sources the layer can show
    description: str


LAYERS: dict[LayerName, LayerInfo] = {
    "AQI": {
        "name": "Air Quality Index",
        "sources": frozenset({"CURRENT"}),
        "description": "AQI at the current location only.",
    },
    "SATELLITE": {
        "name": "TEMPO Satellite",
        "sources": frozenset({"SATELLITE"}),
        "description": "Satellite-derived AQI from NASA TEMPO.",
    },
    "GROUND": {
        "name": "OpenAQ Ground",
        "sources": frozenset({"GROUND"}),
        "description": "Nearest OpenAQ ground monitoring station.",
    },
    "COMPARISON": {
        "name": "Data Comparison",
        "sources": frozenset({"CURRENT", "SATELLITE", "GROUND"}),
        "description": "All sources side by side.",
    },
    "POLLUTANTS": {
        "name": "Pollutants",
        "sources": frozenset({"CURRENT", "SATELLITE", "GROUND"}),
        "description": "All sources, for pollutant-level detail.",
    },
}

# Layer values used by the web client's layer selector
LAYER_ALIASES: dict[str, LayerName] = {
    "TEMPO": "SATELLITE",
    "OPENAQ": "GROUND",
}

DEFAULT_LAYER: LayerName = "AQI"


def normalise_layer(layer: str) -> LayerName:
    """
    Validate and normalise a layer name (case-insensitive).

    Accepts the web client aliases "tempo" and "openaq".

    Raises:
        ValueError: If the layer is unknown
    """
    normalized = str(layer).upper()
    normalized = LAYER_ALIASES.get(normalized, normalized)

    if normalized not in LAYERS:
        available = ", ".join(LAYERS)
        raise ValueError(f"Unknown layer '{layer}'. Available layers: {available}")

    return normalized  # type: ignore[return-value]


def eligible_sources(layer: str, show_auxiliary: bool) -> frozenset[SourceId]:
    """
    Decide which sources a layer may display.

    Args:
        layer: Layer name (case-insensitive)
        show_auxiliary: Whether satellite and ground sources are shown

    Returns:
        frozenset: Eligible source identifiers (possibly empty)

    Example:
        >>> sorted(eligible_sources("COMPARISON", show_auxiliary=False))
        ['CURRENT']
        >>> sorted(eligible_sources("COMPARISON", show_auxiliary=True))
        ['CURRENT', 'GROUND', 'SATELLITE']
    """
    sources = LAYERS[normalise_layer(layer)]["sources"]

    if show_auxiliary:
        return sources
    return sources - AUXILIARY_SOURCES


def list_layers() -> list[LayerName]:
    """List all layer names, in selector order."""
    return list(LAYERS)


def get_layer_info(layer: str) -> LayerInfo:
    """
    Get information about a layer.

    Raises:
        ValueError: If the layer is unknown
    """
    return LAYERS[normalise_layer(layer)]
