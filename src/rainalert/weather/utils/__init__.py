"""Weather utility classes."""

from rainalert.weather.utils.precipitation import PRECIP_KEYWORDS, PrecipitationUtils

__all__ = ["PRECIP_KEYWORDS", "PrecipitationUtils"]
