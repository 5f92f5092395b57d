"""Geolocation lookups backed by OpenWeather."""

import logging
from dataclasses import dataclass

import httpx

from user_directory.adapters.openweather_client import OpenWeatherClient
from user_directory.domain.models import Location
from user_directory.errors import ResolutionError

_logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600


@dataclass
class GeolocationResolver:
    """Resolve a zip code and country into coordinates and a timezone."""

    client: OpenWeatherClient

    async def resolve(self, zip_code: str, country: str) -> Location:
        """Return the location for a zip code, or raise ``ResolutionError``."""
        try:
            geo = await self.client.get_zip_location(zip_code, country)
            latitude = float(geo["lat"])
            longitude = float(geo["lon"])
            weather = await self.client.get_current_weather(latitude, longitude)
            timezone = _normalize_timezone(weather["timezone"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            message = _upstream_message(exc)
            _logger.warning(
                "Location lookup failed for zip=%s country=%s: %s",
                zip_code,
                country,
                message,
            )
            raise ResolutionError(message) from exc

        return Location(
            name=str(geo.get("name") or ""),
            latitude=latitude,
            longitude=longitude,
            country=str(geo.get("country") or country),
            timezone=timezone,
        )


def _normalize_timezone(raw: object) -> str:
    """Turn the weather API timezone into a string identifier.

    The API reports a UTC shift in seconds. Whole-hour shifts map to the
    ``Etc/GMT`` zones, whose sign is inverted (UTC-8 is ``Etc/GMT+8``).
    """
    if isinstance(raw, str) and raw:
        return raw
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        raise ValueError(f"Unexpected timezone value: {raw!r}")
    offset = int(raw)
    if offset == 0:
        return "UTC"
    if offset % _SECONDS_PER_HOUR == 0:
        hours = offset // _SECONDS_PER_HOUR
        return f"Etc/GMT{-hours:+d}"
    sign = "+" if offset > 0 else "-"
    hours, remainder = divmod(abs(offset), _SECONDS_PER_HOUR)
    return f"UTC{sign}{hours:02d}:{remainder // 60:02d}"


def _upstream_message(exc: Exception) -> str:
    """Prefer the API's own error message when the response carries one."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            payload = exc.response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
    if isinstance(exc, KeyError):
        return f"Missing field in location response: {exc.args[0]}"
    return str(exc) or type(exc).__name__
