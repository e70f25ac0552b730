"""
Tests for layers.py - which sources each layer may show.
"""

import pytest

from aeolus_map.layers import (
    LAYERS,
    eligible_sources,
    get_layer_info,
    list_layers,
    normalise_layer,
)

ALL_SOURCES = {"CURRENT", "SATELLITE", "GROUND"}


class TestEligibleSources:
    @pytest.mark.parametrize("show_auxiliary", [True, False])
    def test_aqi_layer_is_current_only(self, show_auxiliary):
        assert eligible_sources("AQI", show_auxiliary) == {"CURRENT"}

    def test_satellite_layer(self):
        assert eligible_sources("SATELLITE", True) == {"SATELLITE"}
        assert eligible_sources("SATELLITE", False) == set()

    def test_ground_layer(self):
        assert eligible_sources("GROUND", True) == {"GROUND"}
        assert eligible_sources("GROUND", False) == set()

    def test_comparison_layer(self):
        assert eligible_sources("COMPARISON", False) == {"CURRENT"}
        assert eligible_sources("COMPARISON", True) == ALL_SOURCES

    @pytest.mark.parametrize("show_auxiliary", [True, False])
    def test_pollutants_matches_comparison(self, show_auxiliary):
        assert eligible_sources("POLLUTANTS", show_auxiliary) == eligible_sources(
            "COMPARISON", show_auxiliary
        )

    @pytest.mark.parametrize("layer", list(LAYERS))
    def test_current_never_gated_by_toggle(self, layer):
        with_stations = eligible_sources(layer, True)
        without_stations = eligible_sources(layer, False)
        assert ("CURRENT" in with_stations) == ("CURRENT" in without_stations)

    def test_returns_frozenset(self):
        assert isinstance(eligible_sources("COMPARISON", True), frozenset)


class TestNormaliseLayer:
    def test_case_insensitive(self):
        assert normalise_layer("comparison") == "COMPARISON"
        assert normalise_layer("Aqi") == "AQI"

    def test_web_client_aliases(self):
        assert normalise_layer("tempo") == "SATELLITE"
        assert normalise_layer("openaq") == "GROUND"

    def test_unknown_layer_raises(self):
        with pytest.raises(ValueError, match="Unknown layer 'heatmap'"):
            normalise_layer("heatmap")

    def test_unknown_layer_lists_available(self):
        with pytest.raises(ValueError, match="AQI, SATELLITE, GROUND"):
            eligible_sources("nope", True)


class TestLayerInfo:
    def test_list_layers_in_selector_order(self):
        assert list_layers() == ["AQI", "SATELLITE", "GROUND", "COMPARISON", "POLLUTANTS"]

    def test_display_names(self):
        assert get_layer_info("aqi")["name"] == "Air Quality Index"
        assert get_layer_info("tempo")["name"] == "TEMPO Satellite"
        assert get_layer_info("comparison")["name"] == "Data Comparison"
