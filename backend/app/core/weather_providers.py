"""
Weather Provider Implementations
Each provider fetches current conditions for the configured location and
normalizes them into a WeatherSnapshot.
"""
import httpx
import math
import logging
from abc import ABC, abstractmethod
from typing import Optional
from app.core.config import settings
from app.core.errors import ConfigurationError, FormatError, TransportError
from app.core.logger import logs
from app.core.time_format import format_last_updated
from app.models.weather_model import WeatherSnapshot

# Lets intermediaries reuse a response for as long as our own cache would
REVALIDATE_HEADERS = {"Cache-Control": f"max-age={settings.CACHE_TTL_SECONDS}"}


def round_half_up(value: float) -> int:
    # round() is banker's rounding: round(27.5) == 28 but round(28.5) == 28
    return int(math.floor(value + 0.5))


class BaseWeatherProvider(ABC):
    """Base class for all weather providers"""

    @abstractmethod
    async def fetch(self, client: httpx.AsyncClient) -> WeatherSnapshot:
        """Fetch current conditions; raises a WeatherProviderError on failure"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return the name of the provider"""
        pass

    async def _get(self, client: httpx.AsyncClient, url: str, params: dict = None) -> httpx.Response:
        """GET with the revalidation hint; any non-2xx or network error becomes a TransportError."""
        name = self.get_provider_name()
        try:
            response = await client.get(url, params=params, headers=REVALIDATE_HEADERS)
        except httpx.HTTPError as e:
            # str(e) can embed the request URL (and with it the API key)
            raise TransportError(name, f"request failed ({e.__class__.__name__})") from e

        if not response.is_success:
            raise TransportError(name, f"API error: {response.status_code}")
        return response


class OpenWeatherProvider(BaseWeatherProvider):
    """OpenWeather current weather API (needs an API key)"""

    def __init__(
        self,
        api_key: Optional[str],
        city: str = "Guayaquil,ECU",
        lang: str = "es",
        base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    ):
        self.api_key = api_key
        self.city = city
        self.lang = lang
        self.base_url = base_url

    async def fetch(self, client: httpx.AsyncClient) -> WeatherSnapshot:
        if not self.api_key:
            raise ConfigurationError(self.get_provider_name(), "No OpenWeather API key configured")

        params = {
            "q": self.city,
            "appid": self.api_key,
            "units": "metric",
            "lang": self.lang
        }
        response = await self._get(client, self.base_url, params=params)

        try:
            data = response.json()
            main = data["main"]
            return WeatherSnapshot(
                temperature=f"{round_half_up(main['temp'])}°C",
                condition=data["weather"][0]["description"],
                feels_like=f"{round_half_up(main['feels_like'])}°C",
                humidity=f"{main['humidity']}%",
                wind_speed=f"{round_half_up(data['wind']['speed'] * 3.6)} km/h",
                location=data["name"],
                last_updated=format_last_updated(),
                source=self.get_provider_name()
            )
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise FormatError(self.get_provider_name(), f"Invalid weather data format ({e.__class__.__name__})") from e

    def get_provider_name(self) -> str:
        return "OpenWeather"


class WttrJsonProvider(BaseWeatherProvider):
    """wttr.in structured JSON format (format=j1)"""

    def __init__(self, location: str = "Guayaquil", location_name: str = "Guayaquil", base_url: str = "https://wttr.in"):
        self.location = location
        self.location_name = location_name
        self.url = f"{base_url.rstrip('/')}/{location}"

    async def fetch(self, client: httpx.AsyncClient) -> WeatherSnapshot:
        name = self.get_provider_name()
        response = await self._get(client, self.url, params={"format": "j1"})

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise FormatError(name, "Invalid response from wttr.in")

        try:
            data = response.json()
        except ValueError as e:
            raise FormatError(name, "Invalid response from wttr.in") from e

        conditions = data.get("current_condition") if isinstance(data, dict) else None
        if not conditions:
            raise FormatError(name, "Invalid weather data format")

        try:
            current = conditions[0]
            return WeatherSnapshot(
                temperature=f"{current['temp_C']}°C",
                condition=current["weatherDesc"][0]["value"],
                feels_like=f"{current['FeelsLikeC']}°C",
                humidity=f"{current['humidity']}%",
                wind_speed=f"{current['windspeedKmph']} km/h",
                location=self.location_name,
                last_updated=format_last_updated(),
                source=name
            )
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise FormatError(name, "Invalid weather data format") from e

    def get_provider_name(self) -> str:
        return "wttr.in"


class WttrPlainProvider(BaseWeatherProvider):
    """wttr.in one-line format: temperature|condition|humidity|wind"""

    FORMAT = "%t|%C|%h|%w"

    def __init__(self, location: str = "Guayaquil", location_name: str = "Guayaquil", base_url: str = "https://wttr.in"):
        self.location = location
        self.location_name = location_name
        self.url = f"{base_url.rstrip('/')}/{location}"

    async def fetch(self, client: httpx.AsyncClient) -> WeatherSnapshot:
        response = await self._get(client, self.url, params={"format": self.FORMAT})
        return self.parse(response.text)

    def parse(self, text: str) -> WeatherSnapshot:
        parts = text.strip().split("|")
        temp = parts[0].replace("+", "").strip()
        condition = parts[1].strip() if len(parts) > 1 else ""
        # Temperature and condition are required; an error page has no pipes
        if not temp or not condition:
            raise FormatError(self.get_provider_name(), "Invalid response from basic wttr.in")

        humidity = parts[2].strip() if len(parts) > 2 else ""
        wind = parts[3].strip() if len(parts) > 3 else ""

        return WeatherSnapshot(
            temperature=temp,
            condition=condition,
            humidity=humidity or "N/A",
            wind_speed=wind or "N/A",
            location=self.location_name,
            last_updated=format_last_updated(),
            source=self.get_provider_name()
        )

    def get_provider_name(self) -> str:
        return "wttr.in (basic)"


def build_default_providers() -> list[BaseWeatherProvider]:
    """Providers in fallback order, configured from settings"""
    providers = [
        OpenWeatherProvider(
            api_key=settings.OPENWEATHER_API_KEY,
            city=settings.OPENWEATHER_CITY,
            lang=settings.OPENWEATHER_LANG,
            base_url=settings.OPENWEATHER_URL
        ),
        WttrJsonProvider(
            location=settings.WTTR_LOCATION,
            location_name=settings.LOCATION_NAME,
            base_url=settings.WTTR_URL
        ),
        WttrPlainProvider(
            location=settings.WTTR_LOCATION,
            location_name=settings.LOCATION_NAME,
            base_url=settings.WTTR_URL
        ),
    ]
    logs.log(logging.INFO, f"Weather providers: {' -> '.join(p.get_provider_name() for p in providers)}")
    return providers
