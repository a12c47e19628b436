"""Notification dispatch for precipitation alerts."""

from .bark import BarkNotifier, Notification, Notifier, build_notification

__all__ = ["BarkNotifier", "Notification", "Notifier", "build_notification"]
