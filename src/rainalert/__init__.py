"""Precipitation alerts from QWeather forecasts, delivered through Bark."""

__version__ = "0.1.0"
