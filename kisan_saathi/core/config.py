import os
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENWEATHERMAP_API_KEY: str = os.environ.get("OPENWEATHERMAP_API_KEY", "")
    DATA_GOV_API_KEY: str = os.environ.get("DATA_GOV_API_KEY", "")
    WEATHER_SOURCE: str = "mock"  # "mock" or "live"
    MARKET_SOURCE: str = "mock"  # "mock" or "live"
    FORECAST_TIMEZONE: str = "UTC"
    FORECAST_DAYS: int = 5
    CHAT_RESPONSE_DELAY_SECONDS: float = 1.0
    CHAT_SESSION_TTL_SECONDS: float = 24 * 60 * 60
    CHAT_SESSION_LIMIT: int = 1000
    HTTP_TIMEOUT_SECONDS: float = 10.0
    LOG_LEVEL: str = "INFO"

    @field_validator("FORECAST_TIMEZONE")
    @classmethod
    def validate_forecast_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown IANA timezone '{v}'.") from e
        return v


settings = Settings()
