"""Unit conversion from the provider's metric readings to the requested system."""

from skyboard.models.common import Units

KM_PER_MILE = 1.609344
COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def kph_to_mph(kph: float) -> float:
    return kph / KM_PER_MILE


def mph_to_kph(mph: float) -> float:
    return mph * KM_PER_MILE


def convert_temperature(celsius: float, units: Units) -> float:
    """Express a Celsius reading in the requested unit system, one decimal."""
    if units == Units.IMPERIAL:
        return round(celsius_to_fahrenheit(celsius), 1)
    return round(celsius, 1)


def convert_speed(kph: float, units: Units) -> float:
    """Express a km/h reading in the requested unit system (mph for imperial)."""
    if units == Units.IMPERIAL:
        return round(kph_to_mph(kph), 1)
    return round(kph, 1)


def wind_direction(degrees: float) -> str:
    """Eight-point compass label for a wind bearing."""
    return COMPASS_POINTS[round(degrees / 45) % 8]
