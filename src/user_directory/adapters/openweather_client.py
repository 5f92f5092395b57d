"""OpenWeather API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OpenWeatherClient(Protocol):
    """Interface for OpenWeather API interactions."""

    async def get_zip_location(self, zip_code: str, country: str) -> dict[str, object]:
        """Geocode a zip code and return raw API data."""

    async def get_current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        """Fetch current weather for coordinates and return raw API data."""


@dataclass
class HttpxOpenWeatherClient(OpenWeatherClient):
    """HTTPX-backed OpenWeather client."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10.0

    @classmethod
    def create(
        cls, api_key: str, base_url: str, timeout_seconds: float = 10.0
    ) -> "HttpxOpenWeatherClient":
        """Create an OpenWeather client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_zip_location(self, zip_code: str, country: str) -> dict[str, object]:
        """Geocode a zip code using the geo/1.0/zip endpoint."""
        url = f"{self.base_url}/geo/1.0/zip"
        response = await self.http_client.get(
            url,
            params={"zip": f"{zip_code},{country}", "appid": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def get_current_weather(
        self, latitude: float, longitude: float
    ) -> dict[str, object]:
        """Fetch current weather using the data/2.5/weather endpoint."""
        url = f"{self.base_url}/data/2.5/weather"
        response = await self.http_client.get(
            url,
            params={"lat": latitude, "lon": longitude, "appid": self.api_key},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
