import httpx
import logging
from typing import Callable, Optional, Sequence
from app.core.config import settings
from app.core.errors import WeatherProviderError, WeatherUnavailableError
from app.core.logger import logs
from app.core.time_format import format_last_updated
from app.core.weather_providers import BaseWeatherProvider
from app.models.weather_model import WeatherResponse, WeatherSnapshot
from app.repos.weather_repo import WeatherCache

class WeatherService:
    """
    Serves current weather from the cache or, on a miss, from the first
    provider that answers. Degrade order:
    fresh cache -> providers in order -> stale cache (any age) -> WeatherUnavailableError
    """

    def __init__(
        self,
        cache: WeatherCache,
        providers: Sequence[BaseWeatherProvider],
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None
    ):
        self.cache = cache
        self.providers = list(providers)
        self.client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=settings.PROVIDER_TIMEOUT, follow_redirects=True)
        )

    async def get_weather(self) -> WeatherResponse:
        try:
            # 1. Check Cache
            fresh = self._fresh_response()
            if fresh:
                return fresh

            async with self.cache.lock:
                # Someone else may have refreshed while we waited for the lock
                fresh = self._fresh_response()
                if fresh:
                    return fresh

                # 2. Call providers in order
                logs.log(logging.INFO, "✗ Weather cache MISS. Calling providers...")
                snapshot = await self._fetch_with_fallback()

                # 3. Save to Cache (replaces the whole entry)
                self.cache.save(snapshot)

            return WeatherResponse.from_snapshot(snapshot, cached=False)

        except Exception as e:
            logs.log(logging.ERROR, f"❌ Final error fetching weather: {str(e)}")

            # 4. Anything cached beats an error, however old
            stale = self.cache.get_any()
            if stale is not None:
                logs.log(logging.WARNING, "↩️ Returning cached weather data")
                return WeatherResponse.from_snapshot(stale, cached=True)

            message = e.message if isinstance(e, WeatherUnavailableError) else str(e)
            raise WeatherUnavailableError(message or "Unknown error") from e

    def _fresh_response(self) -> Optional[WeatherResponse]:
        entry = self.cache.get_fresh()
        if entry is None:
            return None

        logs.log(logging.INFO, "✓ Weather cache HIT")
        # lastUpdated reflects when we cached it, not when the provider built it
        return WeatherResponse.from_snapshot(
            entry.data,
            cached=True,
            last_updated=format_last_updated(entry.timestamp)
        )

    async def _fetch_with_fallback(self) -> WeatherSnapshot:
        last_error: Optional[WeatherProviderError] = None

        async with self.client_factory() as client:
            for provider in self.providers:
                name = provider.get_provider_name()
                try:
                    snapshot = await provider.fetch(client)
                except WeatherProviderError as e:
                    logs.log(logging.WARNING, f"⚠️ {name} failed: {e.message}")
                    last_error = e
                    continue

                logs.log(logging.INFO, f"✅ Weather data from {name}")
                return snapshot

        logs.log(logging.ERROR, "❌ All weather providers failed")
        if last_error is None:
            raise WeatherUnavailableError("No weather providers configured")
        raise WeatherUnavailableError(str(last_error))
