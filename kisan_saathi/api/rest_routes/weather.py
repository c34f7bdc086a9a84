from fastapi import APIRouter, Depends, Query

from kisan_saathi.models.weather import CurrentWeatherAdvisory, ForecastResponseModel
from kisan_saathi.services.weather_advisory import advise_weather, condition_glyph
from kisan_saathi.services.weather_service import WeatherSource, get_weather_source

router = APIRouter(prefix="/weather", tags=["Weather"])


@router.get("/current", response_model=CurrentWeatherAdvisory)
async def get_current_weather_data(
    city: str = Query("", description="City name, e.g. 'Pune'"),
    source: WeatherSource = Depends(get_weather_source),
):
    """
    Get current weather for a city together with farming tips.
    """
    weather = await source.get_current_weather(city)
    return CurrentWeatherAdvisory(
        weather=weather,
        glyph=condition_glyph(weather.description),
        tips=advise_weather(weather),
    )


@router.get("/coordinates", response_model=CurrentWeatherAdvisory)
async def get_location_weather_data(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    source: WeatherSource = Depends(get_weather_source),
):
    """
    Get current weather for a coordinate pair together with farming tips.
    """
    weather = await source.get_location_weather(lat, lon)
    return CurrentWeatherAdvisory(
        weather=weather,
        glyph=condition_glyph(weather.description),
        tips=advise_weather(weather),
    )


@router.get("/forecast", response_model=ForecastResponseModel)
async def get_weather_forecast(
    city: str = Query("", description="City name"),
    source: WeatherSource = Depends(get_weather_source),
):
    """
    Get the daily forecast built from 3-hour samples.
    """
    days = await source.get_forecast(city)
    return ForecastResponseModel(location=city or "Demo Location", days=days)
