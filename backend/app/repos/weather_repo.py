import asyncio
from dataclasses import dataclass
from typing import Callable, Optional

from app.core.time_format import now_ms
from app.models.weather_model import WeatherSnapshot, CacheStatus

@dataclass(frozen=True)
class CacheEntry:
    data: Optional[WeatherSnapshot] = None
    timestamp: float = 0.0  # epoch milliseconds

class WeatherCache:
    """
    Single-slot, in-process cache for the latest weather snapshot.

    The entry is only ever replaced as a whole. `lock` serializes refreshes so
    concurrent requests that all see a stale entry trigger a single fetch.
    """

    def __init__(self, ttl_seconds: int = 15 * 60, time_func: Callable[[], float] = now_ms):
        self.ttl_ms = ttl_seconds * 1000
        self._time_func = time_func
        self._entry = CacheEntry()
        self.lock = asyncio.Lock()

    def now(self) -> float:
        return self._time_func()

    @property
    def entry(self) -> CacheEntry:
        return self._entry

    def age_ms(self) -> Optional[float]:
        if self._entry.data is None:
            return None
        return self.now() - self._entry.timestamp

    def get_fresh(self) -> Optional[CacheEntry]:
        """Returns the entry only if it is inside the freshness window."""
        entry = self._entry
        if entry.data is not None and self.now() - entry.timestamp < self.ttl_ms:
            return entry
        return None

    def get_any(self) -> Optional[WeatherSnapshot]:
        """Returns whatever is cached, regardless of age."""
        return self._entry.data

    def save(self, data: WeatherSnapshot) -> CacheEntry:
        self._entry = CacheEntry(data=data, timestamp=self.now())
        return self._entry

    def status(self) -> CacheStatus:
        age = self.age_ms()
        if age is None:
            return CacheStatus(populated=False)
        return CacheStatus(populated=True, age_seconds=round(age / 1000, 1), fresh=age < self.ttl_ms)
