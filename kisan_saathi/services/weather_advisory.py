from typing import List

from kisan_saathi.models.advisory import Tip
from kisan_saathi.models.weather import WeatherReading

HOT_TEMPERATURE = 35
COLD_TEMPERATURE = 10
HIGH_HUMIDITY = 80
LOW_HUMIDITY = 30
STRONG_WIND = 20

FAVORABLE_TIP = Tip(
    icon="🌱",
    text="Current weather conditions are favorable for most farming activities.",
)


def advise_weather(weather: WeatherReading) -> List[Tip]:
    """
    Turns one weather reading into farming tips.

    Every rule is checked on its own and all matching rules contribute, in
    table order. Thresholds are strict, so a reading sitting exactly on a
    threshold does not trigger it. The result is never empty.
    """
    tips: List[Tip] = []

    if weather.temperature > HOT_TEMPERATURE:
        tips.append(
            Tip(
                icon="🌡️",
                text="Very hot weather! Ensure adequate irrigation and shade for crops.",
            )
        )
        tips.append(
            Tip(
                icon="💧",
                text="Increase watering frequency, especially for young plants.",
            )
        )
    if weather.temperature < COLD_TEMPERATURE:
        tips.append(
            Tip(icon="❄️", text="Cold weather alert! Protect sensitive crops from frost.")
        )
        tips.append(Tip(icon="🛡️", text="Consider using row covers or plastic tunnels."))

    if weather.humidity > HIGH_HUMIDITY:
        tips.append(
            Tip(icon="💨", text="High humidity detected! Monitor for fungal diseases.")
        )
        tips.append(Tip(icon="🍃", text="Ensure good air circulation around plants."))
    if weather.humidity < LOW_HUMIDITY:
        tips.append(
            Tip(icon="🏜️", text="Low humidity! Increase watering and consider mulching.")
        )

    if weather.wind_speed > STRONG_WIND:
        tips.append(
            Tip(
                icon="💨",
                text="Strong winds expected! Secure tall plants and provide windbreaks.",
            )
        )

    if "rain" in weather.description:
        tips.append(
            Tip(icon="🌧️", text="Rain expected! Avoid field work and ensure proper drainage.")
        )
        tips.append(
            Tip(icon="🚿", text="Good natural irrigation - reduce manual watering.")
        )

    return tips or [FAVORABLE_TIP]


def condition_glyph(description: str) -> str:
    """Picks the glyph shown next to a weather description."""
    if "rain" in description:
        return "🌧️"
    if "cloud" in description:
        return "⛅"
    if "clear" in description or "sunny" in description:
        return "☀️"
    return "🌤️"
