"""Bark push notifications for precipitation alerts."""

from __future__ import annotations

import logging
from typing import Final, Protocol, runtime_checkable

import requests
from pydantic import BaseModel
from requests.exceptions import RequestException

from rainalert.forecast import ForecastWindow
from rainalert.settings import BarkSettings, UserSettings
from rainalert.weather.models import CompositeReading

logger: Final = logging.getLogger(__name__)

ALERT_TITLE: Final = "☔️ Precipitation alert"
PROVIDER_LINK: Final = "https://www.qweather.com/"


class Notification(BaseModel):
    """Request body accepted by a Bark server."""

    device_key: str
    title: str
    body: str
    category: str
    sound: str
    level: str
    url: str


@runtime_checkable
class Notifier(Protocol):
    """Protocol for anything that can deliver a notification."""

    def send(self, notification: Notification) -> bool:
        """Deliver the notification.

        Returns:
            True if the delivery was accepted
        """
        ...


class BarkNotifier:
    """Deliver notifications by POSTing them to a Bark server."""

    def __init__(self, settings: BarkSettings, timeout: float = 10.0, verbose: bool = False) -> None:
        self.settings = settings
        self.timeout = timeout
        self.verbose = verbose

    @property
    def endpoint(self) -> str:
        return f"{self.settings.server_url}/{self.settings.device_key}"

    def send(self, notification: Notification) -> bool:
        """POST the notification to Bark.

        Returns:
            True only if the server answered HTTP 200
        """
        if self.verbose:
            logger.info("Sending Bark notification:")
            logger.info("  title: %s", notification.title)
            logger.info("  body: %s", notification.body)
            logger.info("  category: %s", notification.category)
            logger.info("  sound: %s", notification.sound)
            logger.info("  level: %s", notification.level)
            logger.info("  url: %s", self.settings.server_url)

        try:
            resp = requests.post(
                self.endpoint,
                json=notification.model_dump(),
                timeout=self.timeout,
            )
        except RequestException as exc:
            logger.error("Bark request failed: %s", exc)
            return False

        try:
            if resp.status_code != 200:
                logger.error("Bark server returned %s: %s", resp.status_code, resp.text)
                return False
        finally:
            resp.close()

        if self.verbose:
            logger.info("Bark notification delivered")
        return True


def build_notification(
    config: UserSettings,
    reading: CompositeReading,
    window: ForecastWindow,
) -> Notification:
    """Compose the alert for a precipitation window.

    Args:
        config: User settings (location name and Bark options)
        reading: Reading the window was derived from
        window: Window with ``will_precipitate`` set

    Returns:
        Notification ready to send
    """
    now = reading.now
    if window.is_current:
        body = (
            f"{config.location} {now.text}, {now.temp}°C, "
            f"{window.intensity} ({window.amount}). Take an umbrella!"
        )
    else:
        body = (
            f"{config.location}: {window.weather_type} expected from {window.start_time}, "
            f"{_describe_strength(window)}. Now: {now.text}, {now.temp}°C. "
            "Take an umbrella!"
        )

    bark = config.bark
    return Notification(
        device_key=bark.device_key,
        title=ALERT_TITLE,
        body=body,
        category=bark.category,
        sound=bark.sound,
        level=bark.level,
        url=reading.fx_link or PROVIDER_LINK,
    )


def _describe_strength(window: ForecastWindow) -> str:
    # keyword-only hits carry neither tier nor amount
    if not window.intensity:
        return "amount unknown"
    return f"{window.intensity} ({window.amount})"
