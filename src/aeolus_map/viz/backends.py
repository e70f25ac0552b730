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
Map backends.

A map backend is anything with two methods:

    create_marker(spec) -> handle
    remove_marker(handle) -> None

The handle is opaque to the caller. Two backends are provided:

- InMemoryMap records markers in a dictionary. Useful headless and in
  tests.
- MatplotlibMap draws each marker as a filled circle with its glyph on a
  matplotlib Axes centred on the reference location.
"""

import itertools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

import matplotlib.pyplot as plt

from ..types import DEFAULT_LOCATION, Location
from .theme import (
    COLOUR_GRID,
    COLOUR_TEXT,
    DEFAULT_ZOOM_DEGREES,
    FIGURE_SIZE,
)

if TYPE_CHECKING:
    from ..markers import MarkerSpec


class MapBackend(Protocol):
    """Primitives the marker manager needs from a map."""

    def create_marker(self, spec: "MarkerSpec") -> Any: ...

    def remove_marker(self, handle: Any) -> None: ...


# =============================================================================
# In-memory
# =============================================================================


class InMemoryMap:
    """
    A map that just remembers its markers.

    Handles are increasing integers. Removing an unknown handle raises,
    so double removal shows up as an error rather than passing silently.
    """

    def __init__(self):
        self._markers: dict[int, "MarkerSpec"] = {}
        self._next_handle = itertools.count(1)
        self.created = 0
        self.removed = 0

    def create_marker(self, spec: "MarkerSpec") -> int:
        handle = next(self._next_handle)
        self._markers[handle] = spec
        self.created += 1
        return handle

    def remove_marker(self, handle: int) -> None:
        if handle not in self._markers:
            raise ValueError(f"Unknown marker handle {handle}")
        del self._markers[handle]
        self.removed += 1

    @property
    def markers(self) -> list["MarkerSpec"]:
        """Live markers, in creation order."""
        return list(self._markers.values())

    def __len__(self) -> int:
        return len(self._markers)


# =============================================================================
# Matplotlib
# =============================================================================


@dataclass
class MatplotlibMarker:
    """Artists making up one drawn marker."""

    circle: Any  # PathCollection from Axes.scatter
    text: Any  # Text with the glyph


class MatplotlibMap:
    """
    Draw markers on a matplotlib Axes in longitude/latitude coordinates.

    Args:
        center: Location the view is centred on
        zoom_degrees: Half-width of the visible window in degrees
        ax: Existing Axes to use (creates new figure if None)
        title: Axes title

    Example:
        >>> from aeolus_map.viz import MatplotlibMap
        >>> map_ = MatplotlibMap(title="Interactive Air Quality Map")
        >>> session.attach_map(map_)
        >>> map_.figure.savefig("map.png", dpi=300)
    """

    def __init__(
        self,
        center: Location | None = None,
        zoom_degrees: float = DEFAULT_ZOOM_DEGREES,
        ax: plt.Axes | None = None,
        title: str | None = None,
    ):
        center = center or DEFAULT_LOCATION

        if ax is None:
            fig, ax = plt.subplots(figsize=FIGURE_SIZE)
        else:
            fig = ax.figure

        self.figure = fig
        self.ax = ax
        self._markers: list[MatplotlibMarker] = []

        ax.set_xlim(center["lon"] - zoom_degrees, center["lon"] + zoom_degrees)
        ax.set_ylim(center["lat"] - zoom_degrees, center["lat"] + zoom_degrees)
        ax.set_aspect("equal")
        ax.set_xlabel("Longitude", color=COLOUR_TEXT)
        ax.set_ylabel("Latitude", color=COLOUR_TEXT)
        ax.grid(True, color=COLOUR_GRID)
        if title:
            ax.set_title(title, color=COLOUR_TEXT)

    def create_marker(self, spec: "MarkerSpec") -> MatplotlibMarker:
        # scale is a radius in pixels; scatter sizes are diameter squared in points
        size = (2 * spec.scale) ** 2

        circle = self.ax.scatter(
            [spec.lon],
            [spec.lat],
            s=size,
            c=spec.colour,
            alpha=spec.fill_opacity,
            edgecolors=spec.stroke_colour,
            linewidths=spec.stroke_width,
            zorder=3,
            label=spec.tooltip,
        )
        text = self.ax.text(
            spec.lon,
            spec.lat,
            spec.label,
            ha="center",
            va="center",
            fontsize=8,
            fontweight="bold",
            color=spec.label_colour,
            zorder=4,
        )

        marker = MatplotlibMarker(circle=circle, text=text)
        self._markers.append(marker)
        return marker

    def remove_marker(self, handle: MatplotlibMarker) -> None:
        if handle not in self._markers:
            raise ValueError("Marker is not on this map")
        handle.circle.remove()
        handle.text.remove()
        self._markers.remove(handle)

    @property
    def tooltips(self) -> list[str]:
        """Tooltip text of every live marker."""
        return [marker.circle.get_label() for marker in self._markers]

    def __len__(self) -> int:
        return len(self._markers)

    def show_legend(self) -> None:
        """Show marker tooltips as a legend, since static figures can't hover."""
        if self._markers:
            self.ax.legend(loc="upper left", fontsize=8)
