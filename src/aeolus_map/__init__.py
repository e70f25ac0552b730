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

"""Air quality map markers: classification, layers and reconciliation"""

from .classify import Classification, aqi_or_zero, classify, format_aqi
from .events import EventBus
from .layers import eligible_sources, get_layer_info, list_layers
from .markers import MarkerManager, MarkerSpec, prepare_markers
from .positions import resolve_position
from .registry import SourceRegistry
from .session import MapSession, MapState

__version__ = "0.1.0"

__all__ = [
    "Classification",
    "classify",
    "aqi_or_zero",
    "format_aqi",
    "EventBus",
    "eligible_sources",
    "list_layers",
    "get_layer_info",
    "resolve_position",
    "SourceRegistry",
    "MarkerSpec",
    "MarkerManager",
    "prepare_markers",
    "MapSession",
    "MapState",
]
