"""Reduction of an hourly forecast into a single precipitation window."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Final

from pydantic import BaseModel, ConfigDict

from rainalert.utils.time import TimeUtils
from rainalert.weather.models import CompositeReading, HourlyObservation
from rainalert.weather.utils import PrecipitationUtils

logger: Final = logging.getLogger(__name__)

DEFAULT_HORIZON: Final = timedelta(hours=3)

CURRENT_START: Final = "now"
CURRENT_END: Final = "ongoing"
CURRENT_INTENSITY: Final = "current precipitation"
AMOUNT_UNIT: Final = "mm"


class ForecastWindow(BaseModel):
    """Classified precipitation forecast for the look-ahead horizon.

    When ``will_precipitate`` is False every other field is empty and
    carries no meaning.

    ``intensity`` and ``amount`` are also empty when every hit was flagged
    by its description alone (all amounts zero or unparseable), so no
    average exists to classify or print.
    """

    model_config = ConfigDict(frozen=True)

    will_precipitate: bool
    start_time: str = ""
    end_time: str = ""
    weather_type: str = ""
    intensity: str = ""
    amount: str = ""

    @classmethod
    def none(cls) -> ForecastWindow:
        """Window meaning "nothing expected"."""
        return cls(will_precipitate=False)

    @classmethod
    def simulated(cls) -> ForecastWindow:
        """Fixed window used to exercise the notification path."""
        return cls(
            will_precipitate=True,
            start_time="15:30",
            end_time="18:30",
            weather_type="light rain",
            intensity="light to moderate rain",
            amount="5-15mm",
        )

    @property
    def is_current(self) -> bool:
        """Whether this window describes precipitation already under way."""
        return self.will_precipitate and self.start_time == CURRENT_START


def aggregate(
    reading: CompositeReading,
    horizon: timedelta = DEFAULT_HORIZON,
    now: datetime | None = None,
) -> ForecastWindow:
    """Reduce a reading to one precipitation window.

    Hourly entries strictly after ``now`` and at most ``now + horizon`` that
    the classifier flags are "hits". Hits need not be adjacent: the window
    runs from the first hit to the last even when dry hours fall between
    them, so it does not promise continuous precipitation.

    The dominant weather type is the most frequent hit description. On a
    tie, the description that first reached the winning count during the
    in-order scan is kept.

    Args:
        reading: Merged current and hourly data
        horizon: Look-ahead duration
        now: Reference time (defaults to the current local time; a naive
            value is taken as local time)

    Returns:
        The forecast window
    """
    if reading.has_current_precipitation:
        return ForecastWindow(
            will_precipitate=True,
            start_time=CURRENT_START,
            end_time=CURRENT_END,
            weather_type=reading.now.text,
            intensity=CURRENT_INTENSITY,
            amount=reading.now.precip + AMOUNT_UNIT,
        )

    now = TimeUtils.ensure_aware(now or TimeUtils.now_localized())
    hits = _collect_hits(reading.hourly, now, now + horizon)
    if not hits:
        return ForecastWindow.none()

    total = 0.0
    for _, hour in hits:
        total += PrecipitationUtils.parse_amount(hour.precip) or 0.0

    amount = ""
    intensity = ""
    if total > 0:
        rendered = f"{total / len(hits):.1f}"
        intensity = PrecipitationUtils.intensity_tier(float(rendered))
        amount = rendered + AMOUNT_UNIT

    return ForecastWindow(
        will_precipitate=True,
        start_time=TimeUtils.format_clock(hits[0][0]),
        end_time=TimeUtils.format_clock(hits[-1][0]),
        weather_type=_dominant_type(hour.text for _, hour in hits),
        intensity=intensity,
        amount=amount,
    )


def _collect_hits(
    hourly: tuple[HourlyObservation, ...], start: datetime, end: datetime
) -> list[tuple[datetime, HourlyObservation]]:
    hits: list[tuple[datetime, HourlyObservation]] = []
    for hour in hourly:
        try:
            when = TimeUtils.parse_provider_time(hour.fx_time)
        except ValueError as exc:
            logger.warning("Skipping hourly entry with bad time %r: %s", hour.fx_time, exc)
            continue

        if not start < when <= end:
            continue

        logger.debug("In window: %s, %s, precip %s", hour.fx_time, hour.text, hour.precip)
        if PrecipitationUtils.is_precipitating(hour.text, hour.precip):
            logger.info("Precipitation expected at %s: %s, %smm", hour.fx_time, hour.text, hour.precip)
            hits.append((when, hour))
    return hits


def _dominant_type(descriptions: Iterable[str]) -> str:
    counts: dict[str, int] = {}
    leader = ""
    leader_count = 0
    for text in descriptions:
        counts[text] = counts.get(text, 0) + 1
        if counts[text] > leader_count:
            leader, leader_count = text, counts[text]
    return leader
