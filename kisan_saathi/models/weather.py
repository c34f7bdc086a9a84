from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from kisan_saathi.models.advisory import Tip

# --- OpenWeatherMap payload models ---


class WeatherCondition(BaseModel):
    """Describes the weather condition (e.g., 'Clouds', 'Rain')."""

    id: int
    main: str
    description: str
    icon: str


class MainWeatherData(BaseModel):
    """Core weather metrics like temperature and humidity."""

    temp: float
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: int
    humidity: int


class Wind(BaseModel):
    """Wind speed (m/s in metric units) and direction."""

    speed: float
    deg: Optional[int] = None
    gust: Optional[float] = None


class Sys(BaseModel):
    country: Optional[str] = None
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None


class CurrentWeatherResponse(BaseModel):
    """Model for the Current Weather API response."""

    weather: List[WeatherCondition]
    main: MainWeatherData
    visibility: int = Field(default=10000, description="Visibility in metres.")
    wind: Wind
    dt: datetime
    sys: Sys
    name: str


class ForecastListItem(BaseModel):
    """A single 3-hour forecast entry."""

    dt: datetime
    main: MainWeatherData
    weather: List[WeatherCondition]
    wind: Wind
    pop: Optional[float] = Field(
        default=None, description="Probability of precipitation"
    )
    dt_txt: Optional[str] = None


class City(BaseModel):
    name: str
    country: Optional[str] = None
    timezone: Optional[int] = None


class ForecastResponse(BaseModel):
    """Model for the 5-day/3-hour Forecast API response."""

    list: List[ForecastListItem]
    city: City


# --- Domain models ---


class WeatherReading(BaseModel):
    """Current conditions for one location, already converted to display units."""

    model_config = ConfigDict(frozen=True)

    temperature: int = Field(description="Temperature in °C.")
    description: str
    humidity: int = Field(description="Relative humidity, 0-100.")
    wind_speed: float = Field(description="Wind speed in km/h.")
    pressure: int = Field(description="Pressure in hPa.")
    visibility: float = Field(description="Visibility in km.")
    location: str
    icon: Optional[str] = None
    uv_index: Optional[float] = None


class ForecastSample(BaseModel):
    """One sub-daily forecast observation."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(description="Unix epoch seconds.")
    temperature: float
    description: str
    icon: str
    humidity: float
    wind_speed: float


class TemperatureRange(BaseModel):
    min: int
    max: int


class ForecastDay(BaseModel):
    """Daily summary built from one or more forecast samples."""

    date: date
    temperature: TemperatureRange
    description: str
    icon: str
    humidity: int
    wind_speed: float


class CurrentWeatherAdvisory(BaseModel):
    weather: WeatherReading
    glyph: str
    tips: List[Tip]


class ForecastResponseModel(BaseModel):
    location: str
    days: List[ForecastDay]


class WeatherAdviceRequest(BaseModel):
    city: str = ""
