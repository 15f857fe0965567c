"""Default city tables for the other-cities panel and favorite resolution."""

from skyboard.config.schema import CityConfig

DEFAULT_OTHER_CITIES: list[CityConfig] = [
    CityConfig(name="San Francisco", country="US"),
    CityConfig(name="Tokyo", country="JP"),
    CityConfig(name="London", country="GB"),
    CityConfig(name="Sydney", country="AU"),
    CityConfig(name="Toronto", country="CA"),
]

DEFAULT_KNOWN_CITIES: list[CityConfig] = [
    CityConfig(name="Paris", country="FR"),
    CityConfig(name="Berlin", country="DE"),
    CityConfig(name="Madrid", country="ES"),
    CityConfig(name="Rome", country="IT"),
    CityConfig(name="Amsterdam", country="NL"),
    CityConfig(name="Vienna", country="AT"),
    CityConfig(name="Dubai", country="AE"),
    CityConfig(name="Singapore", country="SG"),
    CityConfig(name="Hong Kong", country="HK"),
    CityConfig(name="Bangkok", country="TH"),
]
