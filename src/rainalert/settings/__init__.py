"""Application settings management.

This package provides:
- UserSettings: User-configurable settings loaded from config.yaml
- WeatherAPISettings, BarkSettings, AppSettings: its sections
"""

from rainalert.settings.user import (
    AppSettings,
    BarkSettings,
    UserSettings,
    WeatherAPISettings,
)

__all__ = ["AppSettings", "BarkSettings", "UserSettings", "WeatherAPISettings"]
