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
Latest-reading registry for Aeolus Map.

The registry holds one Reading per source (CURRENT, SATELLITE, GROUND)
and the single reference location they all describe. It is just a
dictionary keyed by source - readings are replaced wholesale, never
merged field by field.

Fetches can complete in any order. Callers that want protection from
slow, stale responses take a ticket with `begin_fetch` and pass it back
with the reading; a reading whose ticket is older than the newest one
already accepted for that source is dropped. Readings stored without a
ticket always win.

Example:
    >>> registry = SourceRegistry()
    >>> ticket = registry.begin_fetch("CURRENT")
    >>> registry.update({"source": "CURRENT", "aqi": 42}, ticket=ticket)
    True
    >>> registry.get("CURRENT")["aqi"]
    42
"""

import logging
import numbers
from datetime import datetime, timezone

import pandas as pd

from .classify import classify, format_aqi
from .events import FETCH_FAILED, READING_UPDATED, EventBus
from .types import (
    DEFAULT_LOCATION,
    SOURCE_IDS,
    SOURCE_NAMES,
    Location,
    Reading,
    SourceId,
    normalise_source,
    validate_location,
)

logger = logging.getLogger(__name__)

# Columns of the summary table returned by SourceRegistry.to_frame
SUMMARY_COLUMNS = ["source", "name", "aqi", "level", "colour", "fetched_at", "error"]


def validate_reading(reading: Reading) -> Reading:
    """
    Return a normalised copy of a reading.

    Raises:
        ValueError: If the source is unknown or aqi is negative/non-numeric
    """
    if "source" not in reading:
        raise ValueError("Reading must include a 'source'")

    source = normalise_source(reading["source"])
    aqi = reading.get("aqi")

    if aqi is not None:
        if isinstance(aqi, bool) or not isinstance(aqi, numbers.Real):
            raise ValueError(f"AQI for {source} must be a number, got {aqi!r}")
        if pd.isna(aqi):
            aqi = None
        elif aqi < 0:
            raise ValueError(f"AQI for {source} must be non-negative, got {aqi}")

    pollutants = reading.get("pollutants")

    return {
        "source": source,
        "aqi": aqi,
        "pollutants": dict(pollutants) if pollutants else None,
        "fetched_at": reading.get("fetched_at") or datetime.now(timezone.utc),
    }


class SourceRegistry:
    """
    Holds the latest Reading for each source plus the reference location.

    Args:
        location: Reference location shared by every source
        bus: Optional event bus. When given, READING_UPDATED is published
            for every accepted reading and FETCH_FAILED for every recorded
            error.
    """

    def __init__(self, location: Location | None = None, bus: EventBus | None = None):
        self._location = validate_location(location or DEFAULT_LOCATION)
        self._bus = bus
        self._readings: dict[SourceId, Reading] = {}
        self._errors: dict[SourceId, str] = {}

        # Per-source fetch tickets
        self._issued: dict[SourceId, int] = {source: 0 for source in SOURCE_IDS}
        self._accepted: dict[SourceId, int] = {source: 0 for source in SOURCE_IDS}

    @property
    def location(self) -> Location:
        """The reference location (a copy)."""
        return dict(self._location)  # type: ignore[return-value]

    def begin_fetch(self, source: str) -> int:
        """
        Issue a new ticket for a fetch of `source`.

        Tickets increase monotonically per source.

        Returns:
            int: Ticket to pass back to `update` or `record_error`
        """
        source = normalise_source(source)
        self._issued[source] += 1
        return self._issued[source]

    def _is_stale(self, source: SourceId, ticket: int | None) -> bool:
        return ticket is not None and ticket < self._accepted[source]

    def update(self, reading: Reading, ticket: int | None = None) -> bool:
        """
        Replace the stored reading for a source.

        Args:
            reading: New reading. Its 'source' key picks the slot.
            ticket: Ticket from `begin_fetch`, or None for last-write-wins

        Returns:
            bool: True if the reading was stored, False if it was stale

        Raises:
            ValueError: If the reading is invalid
        """
        reading = validate_reading(reading)
        source = reading["source"]

        if self._is_stale(source, ticket):
            logger.debug(
                f"Discarding stale {source} reading (ticket {ticket} < "
                f"{self._accepted[source]})"
            )
            return False

        if ticket is not None:
            self._accepted[source] = ticket

        self._readings[source] = reading
        self._errors.pop(source, None)
        logger.debug(f"Stored {source} reading: AQI {format_aqi(reading['aqi'])}")

        if self._bus is not None:
            self._bus.publish(READING_UPDATED, source=source, reading=reading)
        return True

    def record_error(
        self, source: str, error: Exception | str, ticket: int | None = None
    ) -> bool:
        """
        Record a failed fetch for a source.

        The previous reading (if any) is left in place.

        Returns:
            bool: True if recorded, False if the failure was for a stale ticket
        """
        source = normalise_source(source)

        if self._is_stale(source, ticket):
            logger.debug(f"Ignoring stale {source} failure (ticket {ticket})")
            return False

        message = str(error) or type(error).__name__
        self._errors[source] = message

        if self._bus is not None:
            self._bus.publish(FETCH_FAILED, source=source, error=message)
        return True

    def get(self, source: str) -> Reading | None:
        """
        Retrieve the latest reading for a source.

        Returns:
            Reading | None: The reading, or None if nothing has arrived yet
        """
        return self._readings.get(normalise_source(source))

    def get_aqi(self, source: str) -> float | None:
        """AQI of the latest reading, or None if missing."""
        reading = self.get(source)
        return None if reading is None else reading.get("aqi")

    def has_reading(self, source: str) -> bool:
        """Whether any reading (even one without AQI) has arrived for a source."""
        return normalise_source(source) in self._readings

    def get_error(self, source: str) -> str | None:
        """Last recorded error for a source, cleared by the next good reading."""
        return self._errors.get(normalise_source(source))

    @property
    def errors(self) -> dict[SourceId, str]:
        """Outstanding errors by source."""
        return dict(self._errors)

    def clear_errors(self) -> None:
        """Forget every recorded error, keeping the readings."""
        self._errors.clear()

    def clear(self) -> None:
        """
        Forget every reading and error.

        Tickets are kept, so responses to fetches issued before the clear
        can still be recognised as stale.
        """
        self._readings.clear()
        self._errors.clear()

    def to_frame(self) -> pd.DataFrame:
        """
        Summarise the registry as a DataFrame, one row per source.

        Returns:
            pd.DataFrame: Columns source, name, aqi, level, colour,
                fetched_at and error. aqi is NaN and fetched_at is NaT where
                missing; level, colour and error are None.

        Example:
            >>> registry.to_frame()[["source", "aqi", "level"]]
                  source   aqi     level
            0    CURRENT  42.0      Good
            1  SATELLITE   NaN      None
            2     GROUND   NaN      None
        """
        rows = []
        for source in SOURCE_IDS:
            reading = self._readings.get(source) or {}
            aqi = reading.get("aqi")
            classification = classify(aqi) if aqi is not None else None
            rows.append(
                {
                    "source": source,
                    "name": SOURCE_NAMES[source],
                    "aqi": aqi,
                    "level": classification.level if classification else None,
                    "colour": classification.colour if classification else None,
                    "fetched_at": reading.get("fetched_at"),
                    "error": self._errors.get(source),
                }
            )

        # object dtype keeps None in the text columns
        df = pd.DataFrame(rows, columns=SUMMARY_COLUMNS, dtype=object)
        df["aqi"] = pd.to_numeric(df["aqi"])
        df["fetched_at"] = pd.to_datetime(df["fetched_at"], utc=True)
        return df
