"""Tests for unit conversion."""

import pytest

from skyboard.ingest.units import (
    celsius_to_fahrenheit,
    convert_speed,
    convert_temperature,
    fahrenheit_to_celsius,
    kph_to_mph,
    mph_to_kph,
    wind_direction,
)
from skyboard.models.common import Units


class TestTemperature:
    def test_freezing(self):
        assert celsius_to_fahrenheit(0) == 32

    def test_boiling(self):
        assert celsius_to_fahrenheit(100) == 212

    def test_convert_imperial(self):
        assert convert_temperature(15.0, Units.IMPERIAL) == 59.0

    def test_convert_metric_rounds(self):
        assert convert_temperature(14.96, Units.METRIC) == 15.0

    @pytest.mark.parametrize("celsius", [-40.0, -12.3, 0.0, 21.7, 38.9])
    def test_round_trip_within_one_degree(self, celsius: float):
        fahrenheit = convert_temperature(celsius, Units.IMPERIAL)
        assert abs(fahrenheit_to_celsius(fahrenheit) - celsius) <= 1


class TestSpeed:
    def test_kph_to_mph(self):
        assert kph_to_mph(1.609344) == pytest.approx(1.0)

    def test_mph_to_kph(self):
        assert mph_to_kph(10) == pytest.approx(16.09344)

    def test_convert_imperial(self):
        assert convert_speed(14.4, Units.IMPERIAL) == 8.9

    def test_convert_metric_keeps_kph(self):
        assert convert_speed(14.4, Units.METRIC) == 14.4


class TestWindDirection:
    @pytest.mark.parametrize(
        "degrees,label", [(0, "N"), (44, "NE"), (90, "E"), (230, "SW"), (350, "N")]
    )
    def test_labels(self, degrees: float, label: str):
        assert wind_direction(degrees) == label
