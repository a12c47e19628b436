"""Common utility functions and helpers for the rainalert package."""

from rainalert.utils.time import TimeUtils

__all__ = ["TimeUtils"]
