"""Notification relay factory.

NOTIFICATION_RELAY_ADAPTER selects ``log`` (default) or ``fake``.
"""

import os

from storefront.notifications.port import NotificationRelay


def build_notification_relay() -> NotificationRelay:
    adapter = os.environ.get("NOTIFICATION_RELAY_ADAPTER", "log")
    if adapter == "log":
        from storefront.notifications.log_adapter import LogNotificationRelay

        return LogNotificationRelay()
    if adapter == "fake":
        from storefront.notifications.fake_adapter import FakeNotificationRelay

        return FakeNotificationRelay()
    raise ValueError(f"Unknown notification relay adapter: {adapter}")
