from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class WeatherSnapshot(BaseModel):
    """Normalized current weather, already formatted for display."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temperature: str = Field(..., alias="temp")  # "28°C"
    condition: str
    feels_like: Optional[str] = Field(None, alias="feelsLike")
    humidity: Optional[str] = None  # "74%"
    wind_speed: Optional[str] = Field(None, alias="windSpeed")  # "13 km/h"
    location: Optional[str] = None
    last_updated: str = Field(..., alias="lastUpdated")
    source: Optional[str] = Field(None, exclude=True)  # provider name, logging only

class WeatherResponse(WeatherSnapshot):
    cached: bool

    @classmethod
    def from_snapshot(cls, snapshot: WeatherSnapshot, cached: bool, **overrides) -> "WeatherResponse":
        data = snapshot.model_dump()
        data.update(overrides)
        return cls(cached=cached, **data)

class WeatherErrorResponse(BaseModel):
    error: str = "Unable to fetch weather data"
    message: str

class CacheStatus(BaseModel):
    populated: bool
    age_seconds: Optional[float] = None
    fresh: bool = False
