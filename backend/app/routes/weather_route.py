from functools import lru_cache
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.errors import WeatherUnavailableError
from app.core.weather_providers import BaseWeatherProvider, build_default_providers
from app.models.weather_model import WeatherErrorResponse, WeatherResponse
from app.repos.weather_repo import WeatherCache
from app.services.Weather_service import WeatherService

router = APIRouter()

# --- Dependency Injection ---
@lru_cache(maxsize=None)
def get_weather_cache() -> WeatherCache:
    # One cache per process, shared by every request
    return WeatherCache(ttl_seconds=settings.CACHE_TTL_SECONDS)

@lru_cache(maxsize=None)
def get_weather_providers() -> tuple[BaseWeatherProvider, ...]:
    return tuple(build_default_providers())

def get_weather_service(
    cache: WeatherCache = Depends(get_weather_cache),
    providers: tuple[BaseWeatherProvider, ...] = Depends(get_weather_providers)
) -> WeatherService:
    return WeatherService(cache, providers)

@router.get(
    "/api/weather",
    response_model=WeatherResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    responses={503: {"model": WeatherErrorResponse}}
)
async def get_weather_endpoint(service: WeatherService = Depends(get_weather_service)):
    try:
        weather = await service.get_weather()
    except WeatherUnavailableError as e:
        return JSONResponse(
            status_code=503,
            content=WeatherErrorResponse(message=e.message).model_dump()
        )
    return weather
