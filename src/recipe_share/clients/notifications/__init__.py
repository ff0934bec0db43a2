"""Notification service client package."""

from recipe_share.clients.notifications.client import NotificationClient


__all__ = ["NotificationClient"]
