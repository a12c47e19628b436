"""Exception classes for weather provider interactions.

This module defines a hierarchy of exception classes for handling
the error conditions met while resolving a location and fetching
weather data. Only network faults are ever retried; everything else
surfaces immediately to the caller.
"""

from __future__ import annotations

from typing import Optional


class WeatherAPIError(Exception):
    """Error during a weather provider request or response parsing.

    Base class for every failure of a check cycle's data acquisition.
    ``code`` is the HTTP status, the provider's numeric code, or 0 when the
    failure happened locally.
    """

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message

    @classmethod
    def from_response(cls, status_code: int, message: str = "") -> WeatherAPIError:
        """Create the error matching a non-success HTTP status.

        Args:
            status_code: HTTP status code
            message: Explanation taken from the body, if any

        Returns:
            Appropriate WeatherAPIError subclass
        """
        error_cls: type[WeatherAPIError]
        if status_code in (401, 403):
            error_cls, fallback = AuthenticationError, "Authentication failed"
        elif status_code == 404:
            error_cls, fallback = NotFoundError, "Resource not found"
        elif status_code == 429:
            error_cls, fallback = RateLimitError, "Rate limit exceeded"
        elif 400 <= status_code < 500:
            error_cls, fallback = ClientError, "Client error"
        elif status_code >= 500:
            error_cls, fallback = ServerError, "Server error"
        else:
            error_cls, fallback = cls, "Unknown error"
        return error_cls(status_code, message or fallback)


class NetworkError(WeatherAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with network error details.

        Args:
            message: Description of the network error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class MaxRetriesExceededError(NetworkError):
    """Raised when every attempt of a request hit a network fault."""

    def __init__(
        self, attempts: int, original_error: Optional[Exception] = None
    ) -> None:
        super().__init__(
            f"Max attempts exhausted after {attempts} tries: {original_error}",
            original_error,
        )
        self.attempts = attempts


class CancelledError(WeatherAPIError):
    """Raised when a fetch is aborted through its cancellation token."""

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(0, message)


class AuthenticationError(WeatherAPIError):
    """Raised when API authentication fails (invalid API key)."""

    pass


class NotFoundError(WeatherAPIError):
    """Raised when a requested resource doesn't exist."""

    pass


class RateLimitError(WeatherAPIError):
    """Raised when rate limits are exceeded."""

    pass


class ClientError(WeatherAPIError):
    """Raised for general 4xx client errors."""

    pass


class ServerError(WeatherAPIError):
    """Raised for 5xx server errors."""

    pass


class ParseError(WeatherAPIError):
    """Raised when a response body cannot be decompressed, decoded or validated."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(0, message)
        self.original_error = original_error


class ProviderError(WeatherAPIError):
    """Raised when the provider reports a failure code inside a 200 response.

    ``provider_code`` keeps the raw string; ``code`` holds it as an int when
    numeric, else 0.
    """

    def __init__(self, provider_code: str, message: str) -> None:
        super().__init__(
            int(provider_code) if provider_code.isdigit() else 0,
            f"Provider returned code {provider_code}: {message}",
        )
        self.provider_code = provider_code


class LocationLookupError(WeatherAPIError):
    """Raised when a location name cannot be resolved to a provider ID."""

    def __init__(
        self,
        location: str,
        message: str,
        original_error: Optional[Exception] = None,
        code: int = 0,
    ) -> None:
        super().__init__(code, f"Location lookup failed for {location!r}: {message}")
        self.location = location
        self.original_error = original_error


class LocationNotFoundError(LocationLookupError):
    """Raised when the provider returns no candidates for a location name."""

    def __init__(self, location: str) -> None:
        super().__init__(location, "no matching location", code=404)
