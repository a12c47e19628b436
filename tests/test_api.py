import copy
from datetime import datetime
from typing import Any
from unittest.mock import Mock

import pytest

from conftest import MockResponse
from rainalert.forecast import aggregate
from rainalert.settings import UserSettings
from rainalert.weather.api import WeatherAPI
from rainalert.weather.errors import LocationLookupError, ServerError
from rainalert.weather.locations import LocationResolver
from rainalert.weather.models import CompositeReading


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("rainalert.weather.fetcher.time.sleep", lambda _s: None)


def _route(
    monkeypatch: pytest.MonkeyPatch, routes: dict[str, MockResponse]
) -> list[tuple[str, dict[str, Any]]]:
    calls: list[tuple[str, dict[str, Any]]] = []

    def mock_get(url: str, **kwargs: Any) -> MockResponse:
        calls.append((url, kwargs))
        for suffix, resp in routes.items():
            if url.endswith(suffix):
                return resp
        raise AssertionError(f"unexpected URL {url}")

    monkeypatch.setattr("rainalert.weather.fetcher.requests.get", mock_get)
    return calls


def test_acquire_merges_current_and_hourly(
    monkeypatch: pytest.MonkeyPatch,
    settings: UserSettings,
    now_payload: dict[str, Any],
    hourly_payload: dict[str, Any],
    no_sleep: None,
) -> None:
    calls = _route(
        monkeypatch,
        {
            "/v7/weather/now": MockResponse(200, now_payload),
            "/v7/weather/24h": MockResponse(200, hourly_payload),
        },
    )

    reading = WeatherAPI(settings).acquire()

    assert isinstance(reading, CompositeReading)
    assert reading.location_id == "101010100"  # from the static table
    assert reading.now.text == "多云"
    assert len(reading.hourly) == 6
    assert reading.hourly[1].text == "小雨"
    assert reading.has_current_precipitation is False
    assert reading.update_time == "2024-06-01T12:02+08:00"

    urls = [url for url, _ in calls]
    assert urls == [
        "https://devapi.example.com/v7/weather/now",
        "https://devapi.example.com/v7/weather/24h",
    ]
    for _, kwargs in calls:
        assert kwargs["params"] == {
            "location": "101010100",
            "key": "test-api-key",
            "lang": "zh",
        }


def test_acquire_flags_current_precipitation(
    monkeypatch: pytest.MonkeyPatch,
    settings: UserSettings,
    now_payload: dict[str, Any],
    hourly_payload: dict[str, Any],
    no_sleep: None,
) -> None:
    raining = copy.deepcopy(now_payload)
    raining["now"]["text"] = "阵雨"
    raining["now"]["precip"] = "0.6"
    _route(
        monkeypatch,
        {
            "/v7/weather/now": MockResponse(200, raining),
            "/v7/weather/24h": MockResponse(200, hourly_payload),
        },
    )

    reading = WeatherAPI(settings).acquire()

    assert reading.has_current_precipitation is True


def test_hourly_failure_aborts_acquisition(
    monkeypatch: pytest.MonkeyPatch,
    settings: UserSettings,
    now_payload: dict[str, Any],
    no_sleep: None,
) -> None:
    _route(
        monkeypatch,
        {
            "/v7/weather/now": MockResponse(200, now_payload),
            "/v7/weather/24h": MockResponse(500, bad_json=True, text="boom"),
        },
    )

    with pytest.raises(ServerError):
        WeatherAPI(settings).acquire()


def test_resolution_failure_skips_weather_requests(settings: UserSettings) -> None:
    resolver = Mock(spec=LocationResolver)
    resolver.resolve.side_effect = LocationLookupError("Nowhere", "no luck")
    fetcher = Mock()

    api = WeatherAPI(settings, fetcher=fetcher, resolver=resolver)
    with pytest.raises(LocationLookupError):
        api.acquire("Nowhere")

    fetcher.fetch.assert_not_called()


def test_acquire_uses_explicit_location(settings: UserSettings) -> None:
    resolver = Mock(spec=LocationResolver)
    resolver.resolve.return_value = "999"
    fetcher = Mock()
    fetcher.fetch.side_effect = RuntimeError("stop here")

    api = WeatherAPI(settings, fetcher=fetcher, resolver=resolver)
    with pytest.raises(RuntimeError):
        api.acquire("Springfield")

    resolver.resolve.assert_called_once_with("Springfield")


def test_default_fetcher_uses_configured_retries(settings: UserSettings) -> None:
    api = WeatherAPI(settings)
    assert api.fetcher.max_retries == settings.app.max_retries
    assert api.resolver.fetcher is api.fetcher


def test_incomplete_entries_are_kept_and_skipped_by_aggregation(
    monkeypatch: pytest.MonkeyPatch,
    settings: UserSettings,
    now_payload: dict[str, Any],
    hourly_payload: dict[str, Any],
    no_sleep: None,
) -> None:
    now_body = copy.deepcopy(now_payload)
    now_body["now"]["cloud"] = None
    hourly_body = copy.deepcopy(hourly_payload)
    hourly_body["hourly"][1]["pop"] = None
    hourly_body["hourly"][:0] = [
        {"text": "小雨", "precip": "1.0"},
        {"fxTime": None, "text": "大雨", "precip": "9.0"},
    ]
    _route(
        monkeypatch,
        {
            "/v7/weather/now": MockResponse(200, now_body),
            "/v7/weather/24h": MockResponse(200, hourly_body),
        },
    )

    reading = WeatherAPI(settings).acquire()

    assert reading.now.cloud == ""
    assert len(reading.hourly) == 8
    assert reading.hourly[0].fx_time == ""
    assert reading.hourly[1].fx_time == ""
    assert reading.hourly[3].pop == ""

    window = aggregate(reading, now=datetime.fromisoformat("2024-06-01T12:30+08:00"))

    assert window.will_precipitate
    assert window.start_time == "14:00"
    assert window.end_time == "15:00"
    assert window.weather_type == "小雨"
    assert window.amount == "2.9mm"
    assert window.intensity == "moderate"
