"""Notification relay that renders messages into the structured log.

Stands in for the email/SMS transport in environments without one.
"""

import structlog

from storefront.notifications.port import NotificationRelay
from storefront.notifications.templates import get_template

logger = structlog.get_logger(__name__)


class LogNotificationRelay(NotificationRelay):
    def notify(self, event: str, payload: dict) -> None:
        template = get_template(event)
        message = template.render(payload)
        for channel in template.channels(payload):
            logger.info(
                "Notification dispatched",
                notification_event=event,
                channel=channel,
                subject=message["subject"],
            )
