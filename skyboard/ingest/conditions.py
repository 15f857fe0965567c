"""Provider condition codes -> canonical {code, main, description}.

The canonical codes follow the OpenWeatherMap numbering the dashboard icons
are keyed on. Every documented WeatherAPI.com code has an entry; anything
else lands in the clear-sky bucket.
"""

from skyboard.models.weather import WeatherCondition

FALLBACK_CODE = 800
FALLBACK_MAIN = "Clear"

# provider code -> (canonical code, description)
PROVIDER_CONDITIONS: dict[int, tuple[int, str]] = {
    1000: (800, "clear sky"),
    1003: (802, "partly cloudy"),
    1006: (803, "cloudy"),
    1009: (804, "overcast"),
    1030: (701, "mist"),
    1063: (500, "patchy rain possible"),
    1066: (600, "patchy snow possible"),
    1069: (611, "patchy sleet possible"),
    1072: (301, "patchy freezing drizzle possible"),
    1087: (200, "thundery outbreaks possible"),
    1114: (601, "blowing snow"),
    1117: (602, "blizzard"),
    1135: (741, "fog"),
    1147: (741, "freezing fog"),
    1150: (300, "patchy light drizzle"),
    1153: (300, "light drizzle"),
    1168: (301, "freezing drizzle"),
    1171: (302, "heavy freezing drizzle"),
    1180: (500, "patchy light rain"),
    1183: (500, "light rain"),
    1186: (501, "moderate rain at times"),
    1189: (501, "moderate rain"),
    1192: (502, "heavy rain at times"),
    1195: (502, "heavy rain"),
    1198: (511, "light freezing rain"),
    1201: (511, "moderate or heavy freezing rain"),
    1204: (612, "light sleet"),
    1207: (613, "moderate or heavy sleet"),
    1210: (600, "patchy light snow"),
    1213: (600, "light snow"),
    1216: (601, "patchy moderate snow"),
    1219: (601, "moderate snow"),
    1222: (602, "patchy heavy snow"),
    1225: (602, "heavy snow"),
    1237: (611, "ice pellets"),
    1240: (520, "light rain shower"),
    1243: (521, "moderate or heavy rain shower"),
    1246: (522, "torrential rain shower"),
    1249: (612, "light sleet showers"),
    1252: (613, "moderate or heavy sleet showers"),
    1255: (620, "light snow showers"),
    1258: (621, "moderate or heavy snow showers"),
    1261: (611, "light showers of ice pellets"),
    1264: (611, "moderate or heavy showers of ice pellets"),
    1273: (200, "patchy light rain with thunder"),
    1276: (201, "moderate or heavy rain with thunder"),
    1279: (200, "patchy light snow with thunder"),
    1282: (201, "moderate or heavy snow with thunder"),
}


def main_category(code: int) -> str:
    """Short category for a canonical code."""
    if 200 <= code < 300:
        return "Thunderstorm"
    if 300 <= code < 400:
        return "Drizzle"
    if 500 <= code < 600:
        return "Rain"
    if 600 <= code < 700:
        return "Snow"
    if code == 741:
        return "Fog"
    if 700 <= code < 800:
        return "Mist"
    if 801 <= code <= 804:
        return "Clouds"
    return FALLBACK_MAIN


def map_condition(provider_code: int | None, text: str = "", icon: str = "") -> WeatherCondition:
    entry = PROVIDER_CONDITIONS.get(provider_code) if provider_code is not None else None
    if entry is None:
        code, default_description = FALLBACK_CODE, "clear sky"
    else:
        code, default_description = entry
    description = text.strip().lower() or default_description
    return WeatherCondition(
        code=code,
        main=main_category(code),
        description=description,
        icon=normalize_icon(icon),
    )


def normalize_icon(icon: str) -> str:
    """WeatherAPI serves protocol-relative icon URLs."""
    if icon.startswith("//"):
        return "https:" + icon
    return icon
