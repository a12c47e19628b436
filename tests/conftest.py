import json
from pathlib import Path
from typing import Any

import pytest

from rainalert.settings import UserSettings

DATA_DIR = Path(__file__).parent / "data"


def load_json(name: str) -> dict[str, Any]:
    return json.loads((DATA_DIR / name).read_text(encoding="utf-8"))


class MockResponse:
    """Minimal requests.Response shim for testing."""

    def __init__(
        self,
        status_code: int = 200,
        payload: Any = None,
        *,  # keyword-only
        bad_json: bool = False,
        text: str = "",
    ) -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._bad_json = bad_json
        self.text = text or json.dumps(self._payload)
        self.closed = False

    # requests.Response.json()
    def json(self) -> Any:
        if self._bad_json:
            raise ValueError("Invalid JSON")
        return self._payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> UserSettings:
    return UserSettings.model_validate(
        {
            "weather_api": {
                "api_key": "test-api-key",
                "location": "北京",
                "api_host": "devapi.example.com",
                "lang": "zh",
            },
            "bark": {
                "device_key": "test-device",
                "server_url": "https://bark.example.com/",
            },
            "app": {"check_interval_minutes": 60, "max_retries": 3, "verbose": True},
        }
    )


@pytest.fixture
def now_payload() -> dict[str, Any]:
    return load_json("now_sample.json")


@pytest.fixture
def hourly_payload() -> dict[str, Any]:
    return load_json("hourly_sample.json")


@pytest.fixture
def lookup_payload() -> dict[str, Any]:
    return load_json("city_lookup_sample.json")
