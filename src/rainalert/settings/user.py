"""User-configurable settings loaded from config.yaml."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import ClassVar

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

# Load environment variables from .env file(s)
load_dotenv()

DEFAULT_API_HOST = "devapi.qweather.com"
DEFAULT_LOCATION = "北京"


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class WeatherAPISettings(BaseModel):
    """Weather provider access and the monitored location."""

    api_key: str = Field("", description="QWeather API key (or WEATHER_API_KEY)")
    location: str = Field(DEFAULT_LOCATION, description="Name of the monitored location")
    api_host: str = Field(DEFAULT_API_HOST, description="QWeather API host")
    lang: str = Field("zh", description="Language of weather descriptions")

    @model_validator(mode="after")
    def apply_fallbacks(self) -> WeatherAPISettings:
        if not self.api_key:
            self.api_key = os.getenv("WEATHER_API_KEY", "")
        if not self.api_key:
            raise ValueError("weather API key is not set; set WEATHER_API_KEY")
        if not self.location:
            self.location = DEFAULT_LOCATION
        if not self.api_host:
            self.api_host = DEFAULT_API_HOST
        return self


class BarkSettings(BaseModel):
    """Bark push notification target."""

    device_key: str = Field("", description="Bark device key (or BARK_DEVICE_KEY)")
    server_url: str = Field("https://api.day.app", description="Bark server base URL")
    sound: str = "alarm"
    level: str = Field("timeSensitive", description="Interruption level")
    category: str = "weather"

    @model_validator(mode="after")
    def apply_fallbacks(self) -> BarkSettings:
        if not self.device_key:
            self.device_key = os.getenv("BARK_DEVICE_KEY", "")
        if not self.device_key:
            raise ValueError("Bark device key is not set; set BARK_DEVICE_KEY")
        self.server_url = self.server_url.rstrip("/")
        return self


class AppSettings(BaseModel):
    """Polling behaviour."""

    check_interval_minutes: int = Field(60, gt=0, description="Minutes between checks")
    max_retries: int = Field(3, ge=1, description="Attempts per provider request")
    verbose: bool = Field(True, description="Log full notification payloads")


class UserSettings(BaseModel):
    """User settings for the alerting application, read from config.yaml.

    Secrets may be given inline, as ``${VAR}`` placeholders, or left empty
    to be picked up from WEATHER_API_KEY / BARK_DEVICE_KEY.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("config.yaml"),
        Path("~/.config/rainalert/config.yaml").expanduser(),
        Path("/etc/rainalert/config.yaml"),
    ]

    weather_api: WeatherAPISettings = Field(default_factory=dict, validate_default=True)
    bark: BarkSettings = Field(default_factory=dict, validate_default=True)
    app: AppSettings = Field(default_factory=AppSettings)

    @property
    def location(self) -> str:
        """Configured location name."""
        return self.weather_api.location

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated UserSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        # Try to find config file
        if path is None:
            # Check environment variable first
            env_path = os.environ.get("RAINALERT_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(f"Config file from RAINALERT_CONFIG not found: {path}")
            else:
                # Try default paths
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create config.yaml or set RAINALERT_CONFIG."
                    )

        try:
            raw = _interpolate_env(path.read_text(encoding="utf-8"))
            data = yaml.safe_load(raw) or {}
        except Exception as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
