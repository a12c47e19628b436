"""Precipitation classification utilities."""

from __future__ import annotations

import math
from typing import Final

# Closed list of description fragments that mean something is falling.
# Chinese terms are what the provider returns for lang=zh; the English ones
# cover lang=en (matched against the lower-cased description).
PRECIP_KEYWORDS: Final[tuple[str, ...]] = (
    "雨",
    "雪",
    "阵雨",
    "雷阵雨",
    "毛毛雨",
    "小雪",
    "中雪",
    "大雪",
    "暴雪",
    "雨夹雪",
    "rain",
    "snow",
    "shower",
    "drizzle",
    "sleet",
    "thunderstorm",
)

# Upper bounds (mm, exclusive) of each intensity tier
LIGHT_MAX: Final = 2.5
MODERATE_MAX: Final = 10.0
HEAVY_MAX: Final = 25.0


class PrecipitationUtils:
    """Utilities for classifying precipitation in provider observations.

    Every method is pure and total: malformed amounts degrade to "no
    amount" rather than raising.
    """

    @staticmethod
    def parse_amount(text: str | None) -> float | None:
        """Parse a provider precipitation amount string.

        Args:
            text: Decimal string such as "0.0" or "1.2"

        Returns:
            The amount in millimetres, or None when it is not a finite number
        """
        if text is None:
            return None
        try:
            value = float(text)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(value):
            return None
        return value

    @staticmethod
    def has_keyword(text: str) -> bool:
        """Check whether a weather description names a precipitation type."""
        lowered = text.lower()
        return any(keyword in lowered for keyword in PRECIP_KEYWORDS)

    @classmethod
    def is_precipitating(cls, text: str, amount: str | None) -> bool:
        """Decide whether an observation shows precipitation.

        A keyword in the description wins regardless of the amount; otherwise
        any non-zero parseable amount counts.

        Args:
            text: Weather description
            amount: Precipitation amount string

        Returns:
            True if the observation is precipitating
        """
        if cls.has_keyword(text):
            return True
        value = cls.parse_amount(amount)
        return value is not None and value != 0

    @staticmethod
    def intensity_tier(amount: float) -> str:
        """Map an hourly average amount (mm) to an intensity tier."""
        if amount < LIGHT_MAX:
            return "light"
        elif amount < MODERATE_MAX:
            return "moderate"
        elif amount < HEAVY_MAX:
            return "heavy"
        return "extreme"
