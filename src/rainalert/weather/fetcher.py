"""Retrying JSON fetcher shared by every provider endpoint."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Mapping
from typing import Any, Final, TypeVar

import requests
from pydantic import ValidationError
from requests.exceptions import ContentDecodingError

from .errors import (
    CancelledError,
    MaxRetriesExceededError,
    ParseError,
    ProviderError,
    WeatherAPIError,
)
from .models import ProviderResponse

logger: Final = logging.getLogger(__name__)

T = TypeVar("T", bound=ProviderResponse)

DEFAULT_TIMEOUT: Final = 10
BACKOFF_SECONDS: Final = 1

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check location or parameters",
    401: "Invalid or missing API key",
    403: "Access denied for this key",
    404: "Endpoint or location not found",
    429: "Rate limit exceeded",
    500: "Weather provider internal error",
    502: "Bad gateway at weather provider",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}

# Provider status codes reported inside the JSON body
PROVIDER_CODE_MAP: Final = {
    "204": "No data for the requested location",
    "400": "Request error - missing or invalid parameters",
    "401": "Authentication failed - check the API key",
    "402": "Request quota exceeded or account balance insufficient",
    "403": "No access to this endpoint",
    "404": "Requested data or location does not exist",
    "429": "Too many requests",
    "500": "No response or timeout from provider",
}


class RetryingFetcher:
    """GET a JSON endpoint and validate it into a provider response model.

    Only transport faults (connection errors, timeouts, DNS failures) are
    retried, with a linear backoff of ``attempt * 1s``. HTTP errors, bodies
    that fail to decode, and provider error codes fail immediately since
    repeating the request would give the same answer.

    An optional ``threading.Event`` acts as a cancellation token: once set,
    no further attempt is made and any pending backoff sleep ends early.
    """

    def __init__(
        self,
        max_retries: int = 3,
        timeout: int = DEFAULT_TIMEOUT,
        cancel: threading.Event | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            max_retries: Maximum number of attempts per request (at least 1)
            timeout: Timeout for each attempt in seconds
            cancel: Optional cancellation token
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries
        self.timeout = timeout
        self.cancel = cancel

    def fetch(
        self,
        url: str,
        model: type[T],
        params: Mapping[str, Any] | None = None,
    ) -> T:
        """Fetch ``url`` and return the validated response.

        Args:
            url: Endpoint URL without query string
            model: ProviderResponse subclass to validate the body into
            params: Query parameters

        Returns:
            Validated response whose ``code`` is "200"

        Raises:
            MaxRetriesExceededError: Every attempt hit a network fault
            CancelledError: The cancellation token was set
            ParseError: Body could not be decompressed, decoded or validated
            ProviderError: Provider reported a non-success code
            WeatherAPIError: HTTP status other than 200 (subclass by status)
        """
        last_error: Exception | None = None

        for attempt in range(1, self.max_retries + 1):
            self._check_cancelled()
            logger.debug("GET %s (attempt %d/%d)", url, attempt, self.max_retries)

            try:
                resp = requests.get(
                    url,
                    params=params,
                    timeout=self.timeout,
                    headers={"Accept-Encoding": "gzip"},
                )
            except ContentDecodingError as exc:
                raise ParseError(
                    f"Could not decompress response from {url}", exc
                ) from exc
            except requests.RequestException as exc:
                last_error = exc
                logger.warning(
                    "Request to %s failed (attempt %d/%d): %s",
                    url,
                    attempt,
                    self.max_retries,
                    _redact(str(exc), params),
                )
                if attempt < self.max_retries:
                    self._backoff(attempt)
                continue

            try:
                return self._decode(url, resp, model)
            finally:
                resp.close()

        logger.error("Giving up on %s after %d attempts", url, self.max_retries)
        raise MaxRetriesExceededError(self.max_retries, last_error) from last_error

    # Private helper methods
    def _check_cancelled(self) -> None:
        if self.cancel is not None and self.cancel.is_set():
            raise CancelledError()

    def _backoff(self, attempt: int) -> None:
        delay = attempt * BACKOFF_SECONDS
        logger.info("Retrying in %ds...", delay)
        if self.cancel is None:
            time.sleep(delay)
        elif self.cancel.wait(delay):
            raise CancelledError("Request cancelled during backoff")

    def _decode(self, url: str, resp: requests.Response, model: type[T]) -> T:
        """Turn one HTTP response into a validated model or a fatal error."""
        if resp.status_code != 200:
            try:
                body = resp.json()
                msg = body.get(
                    "message", HTTP_ERROR_MAP.get(resp.status_code, resp.text)
                )
            except (ValueError, AttributeError):
                msg = HTTP_ERROR_MAP.get(resp.status_code, resp.text)
            logger.error("Weather API error: %s - %s", resp.status_code, msg)
            raise WeatherAPIError.from_response(resp.status_code, msg)

        try:
            raw = resp.json()
        except ValueError as exc:
            raise ParseError(f"Malformed JSON from {url}: {exc}", exc) from exc

        try:
            result = model.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(f"Unexpected payload from {url}: {exc}", exc) from exc

        if not result.is_success:
            msg = PROVIDER_CODE_MAP.get(result.code, "Unknown provider error")
            logger.error("Provider error from %s: %s - %s", url, result.code, msg)
            raise ProviderError(result.code, msg)

        return result


def _redact(text: str, params: Mapping[str, Any] | None) -> str:
    """Mask the API key in exception text that may echo the request URL."""
    key = (params or {}).get("key")
    if key:
        text = text.replace(str(key), "***")
    return text
