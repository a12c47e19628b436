# src/rainalert/utils/time.py
"""Time and date handling utilities."""

from __future__ import annotations

from datetime import UTC, datetime

# Provider timestamps look like 2024-05-01T13:00+08:00
PROVIDER_TIME_FORMAT = "%Y-%m-%dT%H:%M%z"
CLOCK_FORMAT = "%H:%M"


class TimeUtils:
    """Time-related utility functions.

    Centralized utilities for working with dates and times:
    - Parsing provider timestamps
    - Clock-style formatting
    - Current time retrieval with proper timezone handling
    """

    @staticmethod
    def parse_provider_time(value: str) -> datetime:
        """Parse a provider forecast timestamp.

        Args:
            value: Timestamp with minute precision and UTC offset

        Returns:
            Timezone-aware datetime in the timestamp's own offset

        Raises:
            ValueError: If the string does not match the provider format
        """
        return datetime.strptime(value, PROVIDER_TIME_FORMAT)

    @staticmethod
    def format_clock(dt: datetime) -> str:
        """Format a datetime as HH:MM in its own timezone."""
        return dt.strftime(CLOCK_FORMAT)

    @staticmethod
    def now_localized() -> datetime:
        """Get current datetime with local timezone.

        Returns:
            Current datetime with local timezone
        """
        return datetime.now(UTC).astimezone()

    @staticmethod
    def ensure_aware(dt: datetime) -> datetime:
        """Attach the local timezone to a naive datetime.

        Args:
            dt: Datetime that may lack tzinfo

        Returns:
            The same instant as an aware datetime
        """
        if dt.tzinfo is None:
            return dt.astimezone()
        return dt
