import datetime
import time
from typing import Optional, Union

import pytz

from app.core.config import settings

SPANISH_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre"
]

Timestamp = Union[int, float, datetime.datetime]


def now_ms() -> float:
    return time.time() * 1000


def format_last_updated(timestamp: Optional[Timestamp] = None, tz_name: Optional[str] = None) -> str:
    """
    Format a moment the way the widget shows it, e.g. "17 de octubre de 2026, 3:05 p. m.".

    `timestamp` is epoch milliseconds or an aware datetime; defaults to now.
    Naive datetimes are taken as UTC.
    """
    tz = pytz.timezone(tz_name or settings.WEATHER_TIMEZONE)

    if timestamp is None:
        moment = datetime.datetime.now(datetime.timezone.utc)
    elif isinstance(timestamp, datetime.datetime):
        moment = timestamp if timestamp.tzinfo else timestamp.replace(tzinfo=datetime.timezone.utc)
    else:
        moment = datetime.datetime.fromtimestamp(timestamp / 1000, tz=datetime.timezone.utc)

    local = moment.astimezone(tz)
    hour = local.hour % 12 or 12
    period = "a. m." if local.hour < 12 else "p. m."
    month = SPANISH_MONTHS[local.month - 1]

    return f"{local.day} de {month} de {local.year}, {hour}:{local.minute:02d} {period}"
