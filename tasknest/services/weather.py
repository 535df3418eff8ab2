"""
Client for the external weather provider (weatherapi.com current conditions).
"""
import logging
from typing import Optional
import httpx

from ..core.config import Settings

logger = logging.getLogger(__name__)


class WeatherError(Exception):
    """The provider could not answer for the requested city."""


class WeatherClient:
    """Async client for current weather lookups."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._api_key = api_key
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "WeatherClient":
        return cls(
            base_url=settings.weather_api_url,
            api_key=settings.weather_api_key,
            timeout=settings.weather_timeout,
            **kwargs,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def current(self, city: str) -> dict:
        """
        Current temperature for a city.

        Returns:
            dict: ``{"city": <resolved name>, "temp": <celsius>}``

        Raises:
            WeatherError: on network failure, error status or unexpected payload
        """
        try:
            response = await self.client.get(
                self.base_url,
                params={"key": self._api_key, "q": city},
            )
        except httpx.TimeoutException:
            logger.warning(f"Weather provider timeout for city {city!r}")
            raise WeatherError("Weather provider timed out")
        except httpx.HTTPError as e:
            logger.warning(f"Weather provider connection error: {type(e).__name__}")
            raise WeatherError("Weather provider is unreachable")

        if response.status_code != 200:
            message = self._error_message(response)
            logger.warning(f"Weather provider returned status {response.status_code}: {message}")
            raise WeatherError(message)

        try:
            data = response.json()
            return {
                "city": data["location"]["name"],
                "temp": data["current"]["temp_c"],
            }
        except (ValueError, KeyError, TypeError):
            raise WeatherError("Unexpected response from weather provider")

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            return response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            return f"Weather provider returned status {response.status_code}"
