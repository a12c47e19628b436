"""Weather API client for QWeather."""

from __future__ import annotations

import logging
import threading
from typing import Any, Final

from rainalert.settings import UserSettings

from .fetcher import RetryingFetcher
from .locations import LocationResolver
from .models import CompositeReading, HourlyResponse, NowResponse
from .utils import PrecipitationUtils

logger = logging.getLogger(__name__)

# API endpoints (relative to the configured host)
NOW_PATH: Final = "/v7/weather/now"
HOURLY_PATH: Final = "/v7/weather/24h"


class WeatherAPI:
    """QWeather client that produces one CompositeReading per check cycle.

    Resolves the location, fetches current conditions and the 24-hour
    hourly forecast through a shared RetryingFetcher, and merges the two.
    Any failure aborts the acquisition; a partial reading is never returned.
    """

    def __init__(
        self,
        config: UserSettings,
        fetcher: RetryingFetcher | None = None,
        resolver: LocationResolver | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        """Initialize the weather API client.

        Args:
            config: User settings with provider host, key and retry budget
            fetcher: Optional custom fetcher
            resolver: Optional custom location resolver
            cancel: Cancellation token for the default fetcher
        """
        self.config = config
        self.fetcher = fetcher or RetryingFetcher(
            max_retries=config.app.max_retries, cancel=cancel
        )
        self.resolver = resolver or LocationResolver(
            self.fetcher,
            config.weather_api.api_host,
            config.weather_api.api_key,
        )

    def acquire(self, location: str | None = None) -> CompositeReading:
        """Fetch and merge current and hourly weather for a location.

        Args:
            location: Location name (defaults to the configured one)

        Returns:
            Merged reading with the current-precipitation flag set

        Raises:
            WeatherAPIError: Resolution or either fetch failed
        """
        name = location or self.config.location
        location_id = self.resolver.resolve(name)
        params = self._params(location_id)

        current = self.fetcher.fetch(self._url(NOW_PATH), NowResponse, params)
        hourly = self.fetcher.fetch(self._url(HOURLY_PATH), HourlyResponse, params)

        raining_now = PrecipitationUtils.is_precipitating(
            current.now.text, current.now.precip
        )
        logger.info(
            "Current weather in %s: %s, %s°C, precip %smm, precipitating: %s",
            name,
            current.now.text,
            current.now.temp,
            current.now.precip,
            raining_now,
        )

        return CompositeReading(
            location_id=location_id,
            now=current.now,
            hourly=tuple(hourly.hourly),
            has_current_precipitation=raining_now,
            update_time=hourly.update_time or current.update_time,
            fx_link=hourly.fx_link or current.fx_link,
        )

    def _url(self, path: str) -> str:
        return f"https://{self.config.weather_api.api_host}{path}"

    def _params(self, location_id: str) -> dict[str, Any]:
        return {
            "location": location_id,
            "key": self.config.weather_api.api_key,
            "lang": self.config.weather_api.lang,
        }
