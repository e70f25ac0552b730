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
Map session: the single place where state changes turn into markers.

A MapSession owns the reading registry, the selected layer, the stations
toggle and the map backend. It subscribes one handler to every
recomputation topic (map ready, reading updated, layer changed,
visibility changed); each event recomputes the full marker set and
reconciles it against the map.

Everything runs on the thread that owns the session. `refresh` fetches
the three sources concurrently in worker threads, but handles each
completion back on the calling thread as soon as it arrives - there is
no barrier waiting for all three.

Basic usage:
    >>> from aeolus_map import MapSession
    >>> from aeolus_map.viz import MatplotlibMap
    >>>
    >>> session = MapSession()
    >>> session.attach_map(MatplotlibMap())
    >>> session.refresh()
    >>> session.set_layer("COMPARISON")
    >>> session.summary()
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from enum import Enum
from typing import Mapping

import pandas as pd

from .events import (
    FETCH_FAILED,
    LAYER_CHANGED,
    MAP_READY,
    RECOMPUTE_TOPICS,
    VISIBILITY_CHANGED,
    EventBus,
)
from .layers import DEFAULT_LAYER, normalise_layer
from .markers import MarkerManager, MarkerSpec, prepare_markers
from .registry import SourceRegistry, validate_reading
from .sources import get_fetcher
from .types import (
    SOURCE_IDS,
    SOURCE_NAMES,
    Fetcher,
    LayerName,
    Location,
    SourceId,
    normalise_source,
)
from .viz.backends import MapBackend

logger = logging.getLogger(__name__)


class MapState(str, Enum):
    """Lifecycle of the session's map handle. READY is terminal."""

    UNINITIALISED = "uninitialised"
    READY = "ready"


class MapSession:
    """
    Reconcile readings, layer and toggle onto a single map.

    Args:
        location: Reference location (defaults to New York)
        layer: Initially selected layer
        show_auxiliary: Whether satellite and ground sources start visible
        fetchers: Optional mapping of source -> fetcher. Sources not in the
            mapping use the registered fetcher from `aeolus_map.sources`.
        bus: Event bus to use (a new one is created if None)
    """

    def __init__(
        self,
        location: Location | None = None,
        layer: str = DEFAULT_LAYER,
        show_auxiliary: bool = True,
        fetchers: Mapping[str, Fetcher] | None = None,
        bus: EventBus | None = None,
    ):
        self.bus = bus or EventBus()
        self.registry = SourceRegistry(location, bus=self.bus)

        self._layer: LayerName = normalise_layer(layer)
        self._show_auxiliary = bool(show_auxiliary)
        self._fetchers = {
            normalise_source(source): fetcher
            for source, fetcher in (fetchers or {}).items()
        }

        self._map: MapBackend | None = None
        self._map_state = MapState.UNINITIALISED
        self._manager = MarkerManager()

        self._error: str | None = None
        self.loading = False

        for topic in RECOMPUTE_TOPICS:
            self.bus.subscribe(topic, self._recompute)
        self.bus.subscribe(FETCH_FAILED, self._on_fetch_failed)

    # ------------------------------------------------------------------
    # Map lifecycle
    # ------------------------------------------------------------------

    @property
    def map_state(self) -> MapState:
        return self._map_state

    def attach_map(self, map_backend: MapBackend) -> None:
        """
        Initialise the session's map. Allowed exactly once.

        Publishes MAP_READY, which draws markers for any readings that
        arrived before the map existed.

        Raises:
            RuntimeError: If a map is already attached
        """
        if self._map_state is MapState.READY:
            raise RuntimeError("Map is already initialised for this session")

        self._map = map_backend
        self._map_state = MapState.READY
        logger.info(f"Map ready: {type(map_backend).__name__}")
        self.bus.publish(MAP_READY, map=map_backend)

    # ------------------------------------------------------------------
    # User controls
    # ------------------------------------------------------------------

    @property
    def layer(self) -> LayerName:
        return self._layer

    def set_layer(self, layer: str) -> None:
        """
        Select a layer. Publishes LAYER_CHANGED if the layer changes.

        Raises:
            ValueError: If the layer is unknown
        """
        layer = normalise_layer(layer)
        if layer == self._layer:
            return
        self._layer = layer
        self.bus.publish(LAYER_CHANGED, layer=layer)

    @property
    def show_auxiliary(self) -> bool:
        return self._show_auxiliary

    def set_show_auxiliary(self, show: bool) -> None:
        """Show or hide the satellite and ground sources."""
        show = bool(show)
        if show == self._show_auxiliary:
            return
        self._show_auxiliary = show
        self.bus.publish(VISIBILITY_CHANGED, show_auxiliary=show)

    def toggle_auxiliary(self) -> bool:
        """Flip the stations toggle. Returns the new value."""
        self.set_show_auxiliary(not self._show_auxiliary)
        return self._show_auxiliary

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _get_fetcher(self, source: SourceId) -> Fetcher:
        return self._fetchers.get(source) or get_fetcher(source)

    def _fail(self, source: SourceId, error: Exception, ticket: int) -> None:
        logger.warning(f"Failed to fetch {source} reading: {error}")
        self.registry.record_error(source, error, ticket=ticket)

    def refresh(self, sources: list[str] | None = None) -> None:
        """
        Fetch fresh readings for every source (or the given ones).

        Fetches run concurrently; each completion updates its own reading
        and redraws the map as it arrives. A failed fetch leaves the last
        good reading in place and sets `error`; a source with no fetcher
        counts as a failed fetch. Responses overtaken by a newer fetch of
        the same source are discarded. Errors from earlier refreshes are
        cleared first.

        Args:
            sources: Sources to fetch (default: all three)

        Raises:
            Exception: The first error raised while redrawing the map, after
                every other completion has been handled
        """
        targets = [normalise_source(s) for s in (sources or SOURCE_IDS)]
        location = self.registry.location

        self._error = None
        self.registry.clear_errors()
        self.loading = True
        logger.info(f"Refreshing {', '.join(targets)}")

        # Redraw errors are raised once every completion has been handled
        redraw_errors = []

        try:
            tickets = {source: self.registry.begin_fetch(source) for source in targets}
            fetchers = {}
            for source in targets:
                try:
                    fetchers[source] = self._get_fetcher(source)
                except ValueError as e:
                    self._fail(source, e, tickets[source])

            with ThreadPoolExecutor(max_workers=max(len(fetchers), 1)) as executor:
                futures = {
                    executor.submit(fetcher, source, location): source
                    for source, fetcher in fetchers.items()
                }

                for future in as_completed(futures):
                    source = futures[future]
                    ticket = tickets[source]
                    try:
                        reading = validate_reading({**future.result(), "source": source})
                    except Exception as e:
                        self._fail(source, e, ticket)
                        continue

                    try:
                        self.registry.update(reading, ticket=ticket)
                    except Exception as e:
                        logger.error(f"Failed to redraw after {source} reading: {e}")
                        redraw_errors.append(e)
        finally:
            self.loading = False

        if redraw_errors:
            raise redraw_errors[0]

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _recompute(self, **event) -> None:
        desired = prepare_markers(self.registry, self._layer, self._show_auxiliary)
        self._manager.reconcile(desired, self._map)

    def _on_fetch_failed(self, source: SourceId, error: str) -> None:
        self._error = f"{SOURCE_NAMES[source]}: {error}"

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def error(self) -> str | None:
        """Latest fetch error message for display, or None."""
        return self._error

    @property
    def markers(self) -> dict[SourceId, MarkerSpec]:
        """Markers currently on the map, by source."""
        return self._manager.markers

    def summary(self) -> pd.DataFrame:
        """Per-source summary table (see SourceRegistry.to_frame)."""
        return self.registry.to_frame()
