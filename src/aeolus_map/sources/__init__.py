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
Fetcher registry.

Each source has one fetcher: a function taking (source, location) and
returning a Reading. The registry is just a dictionary; the HTTP backend
fetchers register themselves when this package is imported, and can be
replaced with `register_fetcher` (e.g. to point a source at a different
service, or at a stub in tests).

Example:
    >>> from aeolus_map.sources import get_fetcher, register_fetcher
    >>>
    >>> register_fetcher("GROUND", my_station_fetcher)
    >>> reading = get_fetcher("GROUND")("GROUND", {"lat": 51.5, "lon": -0.1})
"""

import warnings

from ..types import Fetcher, SourceId, normalise_source

_FETCHERS: dict[SourceId, Fetcher] = {}


def register_fetcher(source: str, fetcher: Fetcher) -> None:
    """
    Register the fetcher for a source.

    Replacing an existing fetcher emits a warning.

    Args:
        source: Source identifier (case-insensitive)
        fetcher: Function (source, location) -> Reading
    """
    source = normalise_source(source)

    if source in _FETCHERS:
        warnings.warn(
            f"Fetcher for '{source}' is already registered and will be replaced",
            UserWarning,
            stacklevel=2,
        )

    _FETCHERS[source] = fetcher


def unregister_fetcher(source: str) -> bool:
    """
    Remove the fetcher for a source.

    Returns:
        bool: True if a fetcher was removed, False if none was registered
    """
    return _FETCHERS.pop(normalise_source(source), None) is not None


def get_fetcher(source: str) -> Fetcher:
    """
    Retrieve the fetcher for a source.

    Raises:
        ValueError: If no fetcher is registered for the source
    """
    source = normalise_source(source)
    fetcher = _FETCHERS.get(source)
    if fetcher is None:
        raise ValueError(f"No fetcher registered for source '{source}'")
    return fetcher


def list_fetchers() -> list[SourceId]:
    """List sources with a registered fetcher."""
    return sorted(_FETCHERS)


# Import the backend to register the default fetchers
from . import backend  # noqa: E402, F401

__all__ = [
    "register_fetcher",
    "unregister_fetcher",
    "get_fetcher",
    "list_fetchers",
]
