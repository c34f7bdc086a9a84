import logging
from datetime import datetime, timedelta, timezone, tzinfo
from typing import List, Optional, Protocol
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError

from kisan_saathi.core.config import settings
from kisan_saathi.models.weather import (
    CurrentWeatherResponse,
    ForecastDay,
    ForecastResponse,
    ForecastSample,
    TemperatureRange,
    WeatherReading,
)
from kisan_saathi.services.forecast import aggregate_by_day, round_half_up

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"

MS_TO_KMH = 3.6


class WeatherSource(Protocol):
    async def get_current_weather(self, city: str) -> WeatherReading: ...

    async def get_location_weather(self, lat: float, lon: float) -> WeatherReading: ...

    async def get_forecast(self, city: str) -> List[ForecastDay]: ...


def reading_from_current(data: CurrentWeatherResponse) -> WeatherReading:
    """Converts a metric Current Weather payload to display units."""
    condition = data.weather[0]
    location = f"{data.name}, {data.sys.country}" if data.sys.country else data.name
    return WeatherReading(
        temperature=int(round_half_up(data.main.temp)),
        description=condition.description,
        humidity=data.main.humidity,
        wind_speed=round_half_up(data.wind.speed * MS_TO_KMH, 1),
        pressure=data.main.pressure,
        visibility=data.visibility / 1000,
        location=location,
        icon=condition.icon,
    )


def samples_from_forecast(data: ForecastResponse) -> List[ForecastSample]:
    return [
        ForecastSample(
            timestamp=int(item.dt.timestamp()),
            temperature=item.main.temp,
            description=item.weather[0].description,
            icon=item.weather[0].icon,
            humidity=item.main.humidity,
            wind_speed=round_half_up(item.wind.speed * MS_TO_KMH, 1),
        )
        for item in data.list
    ]


class MockWeatherSource:
    """Fixed demo data used when no API key is configured or a fetch fails."""

    def __init__(self, tz: tzinfo = timezone.utc) -> None:
        self.tz = tz

    def current(self, location: str) -> WeatherReading:
        return WeatherReading(
            temperature=28,
            description="Partly cloudy",
            humidity=65,
            wind_speed=12,
            pressure=1013,
            visibility=10,
            location=location or "Demo Location",
            icon="02d",
        )

    def forecast(self) -> List[ForecastDay]:
        today = datetime.now(self.tz).date()
        descriptions = ["Sunny", "Partly cloudy", "Cloudy", "Light rain", "Sunny"]
        icons = ["01d", "02d", "03d", "10d", "01d"]
        return [
            ForecastDay(
                date=today + timedelta(days=index),
                temperature=TemperatureRange(min=22 + index, max=30 + index),
                description=descriptions[index],
                icon=icons[index],
                humidity=60 + index * 5,
                wind_speed=10 + index * 2,
            )
            for index in range(len(descriptions))
        ]

    async def get_current_weather(self, city: str) -> WeatherReading:
        return self.current(city)

    async def get_location_weather(self, lat: float, lon: float) -> WeatherReading:
        return self.current("Your Location")

    async def get_forecast(self, city: str) -> List[ForecastDay]:
        return self.forecast()


class OpenWeatherMapSource:
    """
    Live OpenWeatherMap source.

    Every failure (transport error, non-2xx status, unexpected payload) is
    logged and answered with the mock data instead of being raised.
    """

    def __init__(
        self,
        api_key: str,
        tz: tzinfo = timezone.utc,
        days: int = 5,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.tz = tz
        self.days = days
        self.timeout = timeout
        self.transport = transport
        self.fallback = MockWeatherSource(tz=tz)

    async def _get(self, path: str, params: dict) -> dict:
        params = {**params, "appid": self.api_key, "units": "metric"}
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            response = await client.get(f"{BASE_URL}/{path}", params=params)
            response.raise_for_status()
            return response.json()

    async def _current(self, params: dict, fallback_location: str) -> WeatherReading:
        try:
            data = await self._get("weather", params)
            return reading_from_current(CurrentWeatherResponse(**data))
        except httpx.HTTPError as e:
            logger.warning("Weather request failed (%s), using mock data", e)
        except (ValidationError, ValueError, IndexError) as e:
            logger.warning("Unexpected weather payload (%s), using mock data", e)
        return self.fallback.current(fallback_location)

    async def get_current_weather(self, city: str) -> WeatherReading:
        return await self._current({"q": city}, city)

    async def get_location_weather(self, lat: float, lon: float) -> WeatherReading:
        return await self._current({"lat": lat, "lon": lon}, "Your Location")

    async def get_forecast(self, city: str) -> List[ForecastDay]:
        try:
            data = await self._get("forecast", {"q": city})
            samples = samples_from_forecast(ForecastResponse(**data))
        except httpx.HTTPError as e:
            logger.warning("Forecast request failed (%s), using mock data", e)
            return self.fallback.forecast()
        except (ValidationError, ValueError, IndexError) as e:
            logger.warning("Unexpected forecast payload (%s), using mock data", e)
            return self.fallback.forecast()
        return aggregate_by_day(samples, tz=self.tz)[: self.days]


def get_forecast_timezone() -> tzinfo:
    return ZoneInfo(settings.FORECAST_TIMEZONE)


def get_weather_source() -> WeatherSource:
    """Picks the weather source from configuration; mock unless live is usable."""
    tz = get_forecast_timezone()
    if settings.WEATHER_SOURCE == "live":
        if settings.OPENWEATHERMAP_API_KEY:
            return OpenWeatherMapSource(
                api_key=settings.OPENWEATHERMAP_API_KEY,
                tz=tz,
                days=settings.FORECAST_DAYS,
                timeout=settings.HTTP_TIMEOUT_SECONDS,
            )
        logger.warning("WEATHER_SOURCE=live but no OpenWeatherMap key; using mock")
    return MockWeatherSource(tz=tz)
