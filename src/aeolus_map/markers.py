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
Marker preparation and lifecycle.

Drawing happens in two steps, keeping preparation separate from
rendering:

1. `prepare_markers` turns the registry, the selected layer and the
   stations toggle into a list of MarkerSpecs. This is pure - it only
   reads state.
2. `MarkerManager.reconcile` makes the map show exactly those specs. It
   removes every marker it drew last time and then creates one marker per
   spec. There is no diffing: at most three markers exist, so recreating
   them is cheaper than reasoning about which changed.

Drawing rules:
    - CURRENT is drawn whenever it is eligible and a reading has arrived.
      A missing AQI is shown as 0 ("Good").
    - SATELLITE and GROUND are drawn only when eligible and their reading
      has an AQI.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable

from .classify import aqi_or_zero, classify, format_aqi
from .layers import eligible_sources
from .positions import resolve_position
from .types import SOURCE_IDS, SOURCE_NAMES, Location, Reading, SourceId
from .viz.theme import (
    MARKER_FILL_OPACITY,
    MARKER_LABEL_COLOUR,
    MARKER_STROKE_COLOUR,
    MARKER_STROKE_WIDTH,
    SOURCE_GLYPHS,
    get_marker_scale,
)

if TYPE_CHECKING:
    from .registry import SourceRegistry
    from .viz.backends import MapBackend

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class MarkerSpec:
    """
    Specification for one map marker.

    This is the prepared structure passed to map backends. Specs compare
    by content, so two preparations from the same state are equal.
    """

    source: SourceId
    lat: float
    lon: float

    # AQI classification
    colour: str
    level: str

    # Text
    label: str  # Glyph drawn inside the circle
    tooltip: str  # Hover text

    # Circle style
    scale: int = 12
    stroke_colour: str = MARKER_STROKE_COLOUR
    stroke_width: int = MARKER_STROKE_WIDTH
    fill_opacity: float = MARKER_FILL_OPACITY
    label_colour: str = MARKER_LABEL_COLOUR

    @property
    def position(self) -> Location:
        return {"lat": self.lat, "lon": self.lon}


# =============================================================================
# Preparation
# =============================================================================


def should_draw(source: SourceId, reading: Reading | None) -> bool:
    """
    Whether a source with this reading has enough data to be drawn.

    Eligibility by layer is checked separately.
    """
    if reading is None:
        return False
    if source == "CURRENT":
        return True
    return reading.get("aqi") is not None


def prepare_marker(source: SourceId, reading: Reading, location: Location) -> MarkerSpec:
    """
    Build the marker spec for a single source.

    Args:
        source: Source identifier
        reading: Latest reading for the source
        location: Reference location

    Returns:
        MarkerSpec: Marker position, colours, label and tooltip
    """
    aqi = reading.get("aqi")
    classification = classify(aqi_or_zero(aqi))
    position = resolve_position(source, location)

    if source == "CURRENT":
        # Primary source shows its value; missing data reads as 0
        label = format_aqi(aqi_or_zero(aqi))
        shown_value = label
    else:
        label = SOURCE_GLYPHS[source]
        shown_value = format_aqi(aqi)

    tooltip = f"{SOURCE_NAMES[source]} - AQI: {shown_value} ({classification.level})"

    return MarkerSpec(
        source=source,
        lat=position["lat"],
        lon=position["lon"],
        colour=classification.colour,
        level=classification.level,
        label=label,
        tooltip=tooltip,
        scale=get_marker_scale(source),
    )


def prepare_markers(
    registry: "SourceRegistry", layer: str, show_auxiliary: bool
) -> list[MarkerSpec]:
    """
    Compute the full desired marker set from current state.

    Args:
        registry: Registry holding the latest readings and location
        layer: Selected layer name
        show_auxiliary: Whether the satellite and ground sources are shown

    Returns:
        list[MarkerSpec]: One spec per drawable source, in source order

    Example:
        >>> registry.update({"source": "CURRENT", "aqi": 42})
        >>> [m.label for m in prepare_markers(registry, "AQI", True)]
        ['42']
    """
    eligible = eligible_sources(layer, show_auxiliary)
    location = registry.location

    specs = []
    for source in SOURCE_IDS:
        if source not in eligible:
            continue
        reading = registry.get(source)
        if not should_draw(source, reading):
            continue
        specs.append(prepare_marker(source, reading, location))

    return specs


# =============================================================================
# Lifecycle
# =============================================================================


class MarkerManager:
    """
    Owns every marker drawn on a map.

    The manager is the only thing that creates or removes markers, so its
    record of drawn markers is the map's marker set. Nothing else should
    call the backend's create/remove methods.
    """

    def __init__(self):
        self._drawn: dict[SourceId, tuple[Any, MarkerSpec]] = {}

    @property
    def markers(self) -> dict[SourceId, MarkerSpec]:
        """Currently drawn specs by source (a copy)."""
        return {source: spec for source, (_, spec) in self._drawn.items()}

    def __len__(self) -> int:
        return len(self._drawn)

    def clear(self, map_handle: "MapBackend | None") -> None:
        """
        Remove every drawn marker from the map.

        A marker is forgotten only once the backend has removed it, so a
        failed removal is retried by the next clear.
        """
        if map_handle is None:
            return

        for source in list(self._drawn):
            handle, _ = self._drawn[source]
            map_handle.remove_marker(handle)
            del self._drawn[source]

    def reconcile(
        self, desired: Iterable[MarkerSpec], map_handle: "MapBackend | None"
    ) -> None:
        """
        Make the map show exactly the desired markers.

        Every existing marker is removed before any new marker is created,
        so a source never has two live markers.

        Args:
            desired: Marker specs to draw, at most one per source
            map_handle: Map backend, or None if the map isn't ready yet (no-op)

        Raises:
            ValueError: If two specs share a source
        """
        if map_handle is None:
            logger.debug("Map not ready, skipping reconcile")
            return

        desired = list(desired)
        sources = [spec.source for spec in desired]
        if len(sources) != len(set(sources)):
            raise ValueError(f"Duplicate sources in desired markers: {sources}")

        removed = len(self._drawn)
        self.clear(map_handle)

        for spec in desired:
            handle = map_handle.create_marker(spec)
            self._drawn[spec.source] = (handle, spec)
            logger.debug(f"Drew {spec.source} marker: {spec.tooltip}")

        logger.info(f"Reconciled map: removed {removed}, drew {len(desired)} marker(s)")
