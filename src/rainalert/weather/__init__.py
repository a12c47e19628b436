"""Weather package - holds API client, fetcher, location lookup, and custom errors."""

from .api import WeatherAPI
from .errors import (
    CancelledError,
    LocationLookupError,
    LocationNotFoundError,
    MaxRetriesExceededError,
    NetworkError,
    ParseError,
    ProviderError,
    WeatherAPIError,
)
from .fetcher import RetryingFetcher
from .locations import CITY_IDS, LocationResolver
from .models import (
    CompositeReading,
    CurrentObservation,
    HourlyObservation,
    HourlyResponse,
    LocationLookupResponse,
    NowResponse,
)
from .utils import PrecipitationUtils

# Define what gets imported with: from rainalert.weather import *
__all__ = [
    "CITY_IDS",
    "CancelledError",
    "CompositeReading",
    "CurrentObservation",
    "HourlyObservation",
    "HourlyResponse",
    "LocationLookupError",
    "LocationLookupResponse",
    "LocationNotFoundError",
    "LocationResolver",
    "MaxRetriesExceededError",
    "NetworkError",
    "NowResponse",
    "ParseError",
    "PrecipitationUtils",
    "ProviderError",
    "RetryingFetcher",
    "WeatherAPI",
    "WeatherAPIError",
]
