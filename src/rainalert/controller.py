# filepath: src/rainalert/controller.py
"""Core controller for the precipitation alert service."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Final

from rainalert.forecast import ForecastWindow, aggregate
from rainalert.notify import BarkNotifier, Notifier, build_notification
from rainalert.settings import UserSettings
from rainalert.weather.api import WeatherAPI
from rainalert.weather.errors import WeatherAPIError

logger: Final = logging.getLogger(__name__)


class RainAlert:
    """Main controller class for the alert application.

    One call to ``check_and_notify`` is one check cycle:
    - Fetching the composite reading for the configured location
    - Reducing it to a precipitation window
    - Sending a notification when precipitation is current or imminent
    - Logging the outcome

    Failures end the cycle and are reported through the return value; the
    next cycle starts from scratch.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        settings: UserSettings | None = None,
        weather_api: WeatherAPI | None = None,
        notifier: Notifier | None = None,
        cancel: threading.Event | None = None,
        simulate: bool = False,
        debug: bool = False,
    ):
        """Initialize the alert controller.

        Args:
            config_path: Path to config.yaml (searched for if None)
            settings: Already loaded settings; takes precedence over config_path
            weather_api: Optional custom weather API client
            notifier: Optional custom notifier
            cancel: Cancellation token shared with the fetcher
            simulate: Replace the forecast with a canned precipitation window
            debug: Enable debug logging
        """
        # Configure logging
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(asctime)s [%(levelname)s] %(message)s",
        )

        self.config: UserSettings = settings or UserSettings.load(config_path)
        self.cancel = cancel or threading.Event()
        self.simulate = simulate

        # Allow dependency injection or create defaults
        self.weather_api = weather_api or WeatherAPI(self.config, cancel=self.cancel)
        self.notifier: Notifier = notifier or BarkNotifier(
            self.config.bark, verbose=self.config.app.verbose
        )

        if simulate:
            logger.info("Simulation mode: forecasts are replaced by a canned rain window")

    def check_and_notify(self) -> bool:
        """Run one check cycle.

        Returns:
            True if the cycle completed (including "no precipitation" and a
            delivered alert), False on acquisition or delivery failure
        """
        logger.info("Checking weather for %s...", self.config.location)

        try:
            reading = self.weather_api.acquire()
        except WeatherAPIError as err:
            logger.error("Weather check failed (%s): %s", type(err).__name__, err.message)
            return False

        window = ForecastWindow.simulated() if self.simulate else aggregate(reading)
        if not window.will_precipitate:
            logger.info("No precipitation expected in the next 3 hours")
            return True

        logger.info(
            "Precipitation detected: %s, %s to %s, %s, %s",
            window.weather_type,
            window.start_time,
            window.end_time,
            window.intensity or "-",
            window.amount or "-",
        )

        notification = build_notification(self.config, reading, window)
        if not self.notifier.send(notification):
            logger.error("Failed to send notification")
            return False

        logger.info("Notification sent")
        return True
