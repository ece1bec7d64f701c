from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # OpenWeather (primary provider). Leaving the key unset skips straight to wttr.in
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_URL: str = "https://api.openweathermap.org/data/2.5/weather"
    OPENWEATHER_CITY: str = "Guayaquil,ECU"
    OPENWEATHER_LANG: str = "es"

    # wttr.in (secondary and tertiary providers)
    WTTR_URL: str = "https://wttr.in"
    WTTR_LOCATION: str = "Guayaquil"

    # Shown as "location" when the provider doesn't report a place name
    LOCATION_NAME: str = "Guayaquil"
    WEATHER_TIMEZONE: str = "America/Guayaquil"

    CACHE_TTL_SECONDS: int = 15 * 60
    PROVIDER_TIMEOUT: float = 10.0

    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
