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
Fetchers for the air quality backend service.

The backend exposes one JSON endpoint per source, each taking the
reference location as `lat` and `lon` query parameters:

    CURRENT    GET {base}/air-quality/current
    SATELLITE  GET {base}/tempo
    GROUND     GET {base}/openaq

Responses carry the AQI either at the top level or under "data":

    {"aqi": 42, "pollutants": {"pm25": 10.1, "no2": 17.0}}
    {"data": {"aqi": 42, "components": {...}}}

Configuration (read at call time):
    AEOLUS_MAP_API_BASE: Base URL (default http://localhost:5000/api)
    AEOLUS_MAP_TIMEOUT: Request timeout in seconds (default 30)
"""

import logging
import numbers
import os
from datetime import datetime, timezone
from typing import Any

import requests

from ..decorators import retry_on_network_error, with_logging
from ..types import Location, Reading, SourceId, normalise_source
from . import register_fetcher

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_API_BASE = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 30

ENDPOINTS: dict[SourceId, str] = {
    "CURRENT": "air-quality/current",
    "SATELLITE": "tempo",
    "GROUND": "openaq",
}


def get_api_base() -> str:
    """Backend base URL, without a trailing slash."""
    return os.getenv("AEOLUS_MAP_API_BASE", DEFAULT_API_BASE).rstrip("/")


def get_timeout() -> float:
    """Request timeout in seconds."""
    value = os.getenv("AEOLUS_MAP_TIMEOUT")
    if not value:
        return DEFAULT_TIMEOUT
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"AEOLUS_MAP_TIMEOUT must be a number, got {value!r}") from None


# ============================================================================
# LOW-LEVEL API FUNCTIONS
# ============================================================================


@retry_on_network_error
def _call_backend_api(endpoint: str, params: dict) -> dict | None:
    """
    Low-level backend caller with error handling.

    Args:
        endpoint: Endpoint path relative to the base URL
        params: Query parameters

    Returns:
        dict | None: JSON response, or None if the backend has no data (404)

    Raises:
        requests.HTTPError: If the backend returns an error status
    """
    url = f"{get_api_base()}/{endpoint}"

    response = requests.get(
        url,
        params=params,
        headers={"Accept": "application/json"},
        timeout=get_timeout(),
    )

    if response.status_code == 429:
        raise requests.HTTPError(
            "Air quality backend rate limit exceeded. Wait before refreshing.",
            response=response,
        )

    if response.status_code == 404:
        # No data for this location - common, not an error
        return None

    response.raise_for_status()
    return response.json()


def _parse_reading(source: SourceId, payload: dict | None) -> Reading:
    """
    Turn a backend response into a Reading.

    Unknown or non-numeric values are dropped rather than raising, so
    a partial response still yields whatever AQI it carried.
    """
    fetched_at = datetime.now(timezone.utc)

    if not payload:
        return {"source": source, "aqi": None, "pollutants": None, "fetched_at": fetched_at}

    body: dict[str, Any] = payload
    if isinstance(payload.get("data"), dict):
        body = payload["data"]

    aqi = body.get("aqi", body.get("AQI"))
    if isinstance(aqi, bool) or not isinstance(aqi, numbers.Real) or aqi < 0:
        if aqi is not None:
            logger.warning(f"Ignoring invalid {source} AQI from backend: {aqi!r}")
        aqi = None

    raw_pollutants = body.get("pollutants") or body.get("components") or {}
    pollutants = {
        str(name): float(value)
        for name, value in raw_pollutants.items()
        if isinstance(value, numbers.Real) and not isinstance(value, bool)
    }

    return {
        "source": source,
        "aqi": aqi,
        "pollutants": pollutants or None,
        "fetched_at": fetched_at,
    }


# ============================================================================
# FETCHERS
# ============================================================================


@with_logging()
def fetch_backend_reading(source: str, location: Location) -> Reading:
    """
    Fetch the latest reading for a source from the backend.

    Args:
        source: Source identifier
        location: Reference location

    Returns:
        Reading: Latest reading; aqi is None if the backend has no data

    Raises:
        requests.HTTPError: If the backend returns an error status
        requests.RequestException: If the request fails after retries
    """
    source = normalise_source(source)
    params = {"lat": location["lat"], "lon": location["lon"]}

    payload = _call_backend_api(ENDPOINTS[source], params)
    reading = _parse_reading(source, payload)

    logger.info(f"Fetched {source} reading: AQI {reading['aqi']}")
    return reading


for _source in ENDPOINTS:
    register_fetcher(_source, fetch_backend_reading)
