"""Scheduler for the precipitation alert service."""

import logging
import threading
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from rainalert.controller import RainAlert

logger: Final = logging.getLogger(__name__)


class Scheduler:
    """Runs check cycles on a fixed interval.

    The first cycle runs immediately. Cycles never overlap: a slow cycle
    simply delays the next one. ``stop()`` sets the controller's cancellation
    event, which ends the wait between cycles and aborts pending retries of
    an in-flight fetch.
    """

    def __init__(self, controller: "RainAlert") -> None:
        self.controller = controller
        self.config = controller.config
        self.stop_event: threading.Event = controller.cancel

    def run(self, once: bool = False) -> None:
        """Run check cycles until stopped (or after one cycle if ``once``)."""
        interval_minutes = self.config.app.check_interval_minutes
        if once:
            logger.info("Running a single weather check")
        else:
            logger.info("Checking every %d min", interval_minutes)

        while not self.stop_event.is_set():
            ok = self.controller.check_and_notify()
            if not ok:
                logger.warning("Check cycle failed; retrying at the next interval")

            if once:
                break

            logger.debug("Sleeping %d min until next check", interval_minutes)
            if self.stop_event.wait(interval_minutes * 60):
                break

        logger.info("Scheduler stopped")

    def stop(self) -> None:
        """Request the loop to exit and cancel in-flight retries."""
        self.stop_event.set()
