from unittest.mock import MagicMock

import pytest

from rainalert.controller import RainAlert
from rainalert.notify import Notification
from rainalert.settings import UserSettings
from rainalert.weather.api import WeatherAPI
from rainalert.weather.errors import MaxRetriesExceededError, ProviderError
from rainalert.weather.models import CompositeReading, CurrentObservation


def make_reading(raining: bool = False) -> CompositeReading:
    return CompositeReading(
        location_id="101010100",
        now=CurrentObservation(text="小雨" if raining else "晴", temp="22", precip="0.5" if raining else "0.0"),
        has_current_precipitation=raining,
    )


@pytest.fixture
def weather_api() -> MagicMock:
    return MagicMock(spec=WeatherAPI)


@pytest.fixture
def notifier() -> MagicMock:
    mock = MagicMock()
    mock.send.return_value = True
    return mock


def make_controller(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock, simulate: bool = False
) -> RainAlert:
    return RainAlert(settings=settings, weather_api=weather_api, notifier=notifier, simulate=simulate)


def test_current_precipitation_sends_alert(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock
) -> None:
    weather_api.acquire.return_value = make_reading(raining=True)

    assert make_controller(settings, weather_api, notifier).check_and_notify() is True

    notifier.send.assert_called_once()
    sent: Notification = notifier.send.call_args.args[0]
    assert "current precipitation (0.5mm)" in sent.body


def test_dry_forecast_sends_nothing(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock
) -> None:
    weather_api.acquire.return_value = make_reading(raining=False)

    assert make_controller(settings, weather_api, notifier).check_and_notify() is True

    notifier.send.assert_not_called()


@pytest.mark.parametrize(
    "error",
    [
        MaxRetriesExceededError(3, ConnectionError("down")),
        ProviderError("401", "bad key"),
    ],
)
def test_acquisition_failure_ends_cycle(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock, error: Exception
) -> None:
    weather_api.acquire.side_effect = error

    assert make_controller(settings, weather_api, notifier).check_and_notify() is False

    notifier.send.assert_not_called()


def test_delivery_failure_is_reported(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock
) -> None:
    weather_api.acquire.return_value = make_reading(raining=True)
    notifier.send.return_value = False

    assert make_controller(settings, weather_api, notifier).check_and_notify() is False


def test_simulation_replaces_forecast(
    settings: UserSettings, weather_api: MagicMock, notifier: MagicMock
) -> None:
    weather_api.acquire.return_value = make_reading(raining=False)

    controller = make_controller(settings, weather_api, notifier, simulate=True)
    assert controller.check_and_notify() is True

    sent: Notification = notifier.send.call_args.args[0]
    assert "light rain expected from 15:30" in sent.body
    assert "(5-15mm)" in sent.body


def test_default_collaborators_share_cancel_token(settings: UserSettings) -> None:
    controller = RainAlert(settings=settings)

    assert controller.weather_api.fetcher.cancel is controller.cancel
    assert controller.notifier.verbose is True
