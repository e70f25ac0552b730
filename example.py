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
Example usage of Aeolus Map.

This script demonstrates how to:
1. Classify AQI values
2. Drive a map session from hand-made readings
3. Switch layers and the stations toggle
4. Fetch live readings from the backend and save the map as an image

Examples 1-3 run offline. Example 4 needs the backend API running at
AEOLUS_MAP_API_BASE (default http://localhost:5000/api).
"""

import matplotlib

matplotlib.use("Agg")

from aeolus_map import MapSession, classify, list_layers
from aeolus_map.viz import InMemoryMap, MatplotlibMap


def example_1_classify():
    """Example 1: Classify AQI values into severity levels."""
    print("=" * 60)
    print("Example 1: AQI Classification")
    print("=" * 60)

    for aqi in (None, 42, 75, 120, 160, 250):
        result = classify(aqi)
        print(f"  • AQI {str(aqi):>4s}: {result.level:32s} {result.colour}")
    print()


def example_2_session():
    """Example 2: Readings arriving on a session draw markers."""
    print("=" * 60)
    print("Example 2: Markers from Readings")
    print("=" * 60)

    map_ = InMemoryMap()
    session = MapSession(layer="COMPARISON")
    session.attach_map(map_)

    session.registry.update({"source": "CURRENT", "aqi": 75})
    session.registry.update({"source": "SATELLITE", "aqi": 160})
    session.registry.update({"source": "GROUND", "aqi": None})

    print(f"✓ {len(map_)} markers on the map\n")
    for spec in map_.markers:
        print(f"  • {spec.tooltip} [{spec.label}] at {spec.lat:.4f}, {spec.lon:.4f}")
    print()

    print("Summary:")
    print(session.summary()[["source", "aqi", "level"]])
    print()

    return session, map_


def example_3_controls(session, map_):
    """Example 3: Layers and the stations toggle."""
    print("=" * 60)
    print("Example 3: Layers and Stations Toggle")
    print("=" * 60)

    print(f"Layers: {', '.join(list_layers())}\n")

    for layer in ("AQI", "SATELLITE", "POLLUTANTS"):
        session.set_layer(layer)
        sources = ", ".join(spec.source for spec in map_.markers) or "(none)"
        print(f"  • {layer:12s} -> {sources}")

    session.toggle_auxiliary()
    sources = ", ".join(spec.source for spec in map_.markers) or "(none)"
    print(f"  • stations off -> {sources}")
    print()


def example_4_live(output="aeolus_map.png"):
    """Example 4: Fetch live readings and save the map."""
    print("=" * 60)
    print("Example 4: Live Readings")
    print("=" * 60)

    map_ = MatplotlibMap(title="Interactive Air Quality Map")
    session = MapSession(layer="COMPARISON")
    session.attach_map(map_)

    print("Fetching readings...")
    session.refresh()

    if session.error:
        print(f"✗ {session.error}")
    print(f"✓ {len(map_)} markers drawn")

    map_.show_legend()
    map_.figure.savefig(output, dpi=150)
    print(f"Saved map to {output}")
    print()


def main():
    """Run all examples."""
    print("\n")
    print("╔" + "=" * 58 + "╗")
    print("║" + "  Aeolus Map - Examples".center(58) + "║")
    print("╚" + "=" * 58 + "╝")
    print("\n")

    example_1_classify()
    session, map_ = example_2_session()
    example_3_controls(session, map_)

    try:
        example_4_live()
    except Exception as e:
        print(f"\n✗ Live example failed with error: {e}")


if __name__ == "__main__":
    main()
