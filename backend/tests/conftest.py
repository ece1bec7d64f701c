"""
Shared fixtures for the weather backend test suite.

No network access: every provider request goes through httpx.MockTransport,
and the cache runs on a controllable clock.
"""

import os
import tempfile
from typing import Any, Callable

# Ensure test env vars before any app imports
os.environ.setdefault("LOG_DIRECTORY", os.path.join(tempfile.gettempdir(), "portfolio-weather-test-logs"))
os.environ.setdefault("LOGGER", "30")

import httpx
import pytest

from app.core.weather_providers import OpenWeatherProvider, WttrJsonProvider, WttrPlainProvider
from app.repos.weather_repo import WeatherCache
from app.services.Weather_service import WeatherService

OPENWEATHER_URL = "https://api.openweathermap.test/data/2.5/weather"
WTTR_URL = "https://wttr.test"

# 2026-10-17 20:05:00 UTC, i.e. 3:05 p. m. in Guayaquil
START_MS = 1_792_267_500_000.0


# ---------------------------------------------------------------------------
# Provider payload factories
# ---------------------------------------------------------------------------

def make_openweather_payload(**overrides: Any) -> dict:
    base = {
        "main": {"temp": 27.6, "feels_like": 30.2, "humidity": 74},
        "weather": [{"description": "nubes dispersas"}],
        "wind": {"speed": 3.6},
        "name": "Guayaquil",
    }
    base.update(overrides)
    return base


def make_wttr_payload(**overrides: Any) -> dict:
    current = {
        "temp_C": "26",
        "FeelsLikeC": "29",
        "humidity": "80",
        "windspeedKmph": "11",
        "weatherDesc": [{"value": "Partly cloudy"}],
    }
    current.update(overrides)
    return {"current_condition": [current]}


WTTR_PLAIN_LINE = "+25°C|Light rain|88%|↙9km/h\n"


class Clock:
    """Epoch-millisecond clock the tests can move forward."""

    def __init__(self, now: float = START_MS):
        self.now = now

    def advance(self, seconds: float):
        self.now += seconds * 1000

    def __call__(self) -> float:
        return self.now


class FakeUpstream:
    """
    Routes requests to the three providers and records them.

    Each route holds a factory returning a fresh httpx.Response, or raising
    to simulate a network failure.
    """

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.openweather: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json=make_openweather_payload())
        )
        self.wttr_json: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json=make_wttr_payload())
        )
        self.wttr_plain: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, text=WTTR_PLAIN_LINE)
        )

    def fail_all(self, status_code: int = 503):
        self.openweather = lambda request: httpx.Response(500, text="server error")
        self.wttr_json = lambda request: httpx.Response(status_code, text="unavailable")
        self.wttr_plain = lambda request: httpx.Response(status_code, text="unavailable")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if request.url.host == "api.openweathermap.test":
            return self.openweather(request)
        if request.url.params.get("format") == "j1":
            return self.wttr_json(request)
        return self.wttr_plain(request)

    def client_factory(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def hosts(self) -> list[str]:
        return [
            "openweather" if r.url.host == "api.openweathermap.test"
            else f"wttr:{r.url.params.get('format')}"
            for r in self.calls
        ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def cache(clock):
    return WeatherCache(ttl_seconds=15 * 60, time_func=clock)


@pytest.fixture
def upstream():
    return FakeUpstream()


def make_providers(api_key: str | None = "test-key-123"):
    return [
        OpenWeatherProvider(api_key=api_key, base_url=OPENWEATHER_URL),
        WttrJsonProvider(base_url=WTTR_URL),
        WttrPlainProvider(base_url=WTTR_URL),
    ]


@pytest.fixture
def service(cache, upstream):
    return WeatherService(cache, make_providers(), client_factory=upstream.client_factory)
