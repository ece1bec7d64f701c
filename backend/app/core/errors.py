"""
Weather error taxonomy.
Every provider failure is a WeatherProviderError; the service treats the
subclasses the same way and moves on to the next provider.
"""


class WeatherProviderError(Exception):
    """Base class for a single provider's failed attempt"""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class ConfigurationError(WeatherProviderError):
    """Provider is missing required configuration (e.g. API key)"""


class TransportError(WeatherProviderError):
    """Non-success HTTP status or network failure"""


class FormatError(WeatherProviderError):
    """Response body doesn't have the expected shape"""


class WeatherUnavailableError(Exception):
    """All providers failed and there is nothing cached to fall back on"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
