"""
Tests for classify.py - AQI severity levels and colours.
"""

import math

import pytest

from aeolus_map.classify import (
    LEVELS,
    Classification,
    aqi_or_zero,
    classify,
    format_aqi,
)
from aeolus_map.viz.theme import AQI_5_BAND

# ============================================================================
# Tests for classify()
# ============================================================================


class TestClassifyBands:
    """Each band, including its inclusive upper boundary."""

    @pytest.mark.parametrize("aqi", [0, 1, 25, 49.9, 50])
    def test_good(self, aqi):
        assert classify(aqi).level == "Good"

    @pytest.mark.parametrize("aqi", [50.1, 51, 75, 100])
    def test_moderate(self, aqi):
        assert classify(aqi).level == "Moderate"

    @pytest.mark.parametrize("aqi", [100.5, 101, 150])
    def test_unhealthy_for_sensitive_groups(self, aqi):
        assert classify(aqi).level == "Unhealthy for Sensitive Groups"

    @pytest.mark.parametrize("aqi", [151, 175, 200])
    def test_unhealthy(self, aqi):
        assert classify(aqi).level == "Unhealthy"

    @pytest.mark.parametrize("aqi", [200.01, 201, 300, 500, 10_000])
    def test_very_unhealthy(self, aqi):
        assert classify(aqi).level == "Very Unhealthy"

    def test_infinity_is_very_unhealthy(self):
        assert classify(math.inf).level == "Very Unhealthy"


class TestClassifyColours:
    def test_colours_follow_palette(self):
        assert classify(42).colour == AQI_5_BAND["good"]
        assert classify(75).colour == AQI_5_BAND["moderate"]
        assert classify(120).colour == AQI_5_BAND["unhealthy_sensitive"]
        assert classify(160).colour == AQI_5_BAND["unhealthy"]
        assert classify(250).colour == AQI_5_BAND["very_unhealthy"]

    def test_every_level_has_distinct_colour(self):
        colours = {classify(aqi).colour for aqi in (0, 75, 125, 175, 250)}
        assert len(colours) == len(LEVELS)

    def test_returns_classification(self):
        result = classify(42)
        assert isinstance(result, Classification)
        assert result == Classification(level="Good", colour="#10B981")


class TestClassifyEdgeCases:
    def test_negative_values_are_good(self):
        assert classify(-10).level == "Good"

    def test_none_is_treated_as_zero(self):
        assert classify(None) == classify(0)

    def test_nan_is_treated_as_zero(self):
        assert classify(float("nan")) == classify(0)


# ============================================================================
# Tests for helpers
# ============================================================================


class TestAqiOrZero:
    def test_missing_values_become_zero(self):
        assert aqi_or_zero(None) == 0
        assert aqi_or_zero(float("nan")) == 0

    def test_values_pass_through(self):
        assert aqi_or_zero(42) == 42
        assert aqi_or_zero(0) == 0


class TestFormatAqi:
    def test_integral_float_drops_decimal(self):
        assert format_aqi(42.0) == "42"

    def test_int(self):
        assert format_aqi(42) == "42"

    def test_fractional_float_is_kept(self):
        assert format_aqi(42.5) == "42.5"

    def test_missing_shows_na(self):
        assert format_aqi(None) == "N/A"
        assert format_aqi(float("nan")) == "N/A"

    def test_custom_missing_text(self):
        assert format_aqi(None, missing="-") == "-"
