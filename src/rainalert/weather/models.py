"""Typed models for QWeather v7 and GeoAPI v2 responses.

Only the fields used for precipitation alerts are modelled; the provider
sends every value as a string and we keep them that way. Numeric parsing
happens where a number is actually needed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ─────────────────────────── observations ────────────────────────────────────


class _Observation(BaseModel):
    """Base for observation blocks.

    The provider may send ``null`` or omit fields it has no value for; those
    become "" so one incomplete entry never invalidates the whole payload.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class CurrentObservation(_Observation):
    """Real-time weather conditions (the ``now`` block)."""

    obs_time: str = Field("", alias="obsTime")
    temp: str = ""
    feels_like: str = Field("", alias="feelsLike")
    icon: str = ""
    text: str = ""
    wind360: str = ""
    wind_dir: str = Field("", alias="windDir")
    wind_scale: str = Field("", alias="windScale")
    wind_speed: str = Field("", alias="windSpeed")
    humidity: str = ""
    precip: str = ""
    pressure: str = ""
    cloud: str = ""
    dew: str = ""


class HourlyObservation(_Observation):
    """Single entry of the hourly forecast series."""

    fx_time: str = Field("", alias="fxTime")
    temp: str = ""
    icon: str = ""
    text: str = ""
    precip: str = ""
    pop: str = ""
    wind360: str = ""
    wind_dir: str = Field("", alias="windDir")
    wind_scale: str = Field("", alias="windScale")
    wind_speed: str = Field("", alias="windSpeed")
    humidity: str = ""


class LocationCandidate(BaseModel):
    """A location returned by the city lookup endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str = ""
    country: str = ""
    adm1: str = ""
    adm2: str = ""
    lat: str = ""
    lon: str = ""
    tz: str = ""
    type: str = ""
    rank: str = ""
    fx_link: str = Field("", alias="fxLink")


# ─────────────────────────── endpoint payloads ───────────────────────────────


class ProviderResponse(BaseModel):
    """Common envelope of every provider response.

    The provider answers HTTP 200 even for most failures and reports the real
    outcome in ``code``; "200" is the only success value.
    """

    model_config = ConfigDict(populate_by_name=True)

    code: str

    @property
    def is_success(self) -> bool:
        return self.code == "200"


class NowResponse(ProviderResponse):
    """Payload of ``/v7/weather/now``."""

    update_time: str = Field("", alias="updateTime")
    fx_link: str = Field("", alias="fxLink")
    now: CurrentObservation = Field(default_factory=CurrentObservation)


class HourlyResponse(ProviderResponse):
    """Payload of ``/v7/weather/24h``."""

    update_time: str = Field("", alias="updateTime")
    fx_link: str = Field("", alias="fxLink")
    hourly: list[HourlyObservation] = Field(default_factory=list)


class LocationLookupResponse(ProviderResponse):
    """Payload of ``/geo/v2/city/lookup``."""

    info: str = ""
    count: int = 0
    location: list[LocationCandidate] = Field(default_factory=list)


# ─────────────────────────── merged reading ──────────────────────────────────


class CompositeReading(BaseModel):
    """Current conditions plus the hourly series for one check cycle."""

    model_config = ConfigDict(frozen=True)

    location_id: str
    now: CurrentObservation
    hourly: tuple[HourlyObservation, ...] = ()
    has_current_precipitation: bool = False
    update_time: str = ""
    fx_link: str = ""
