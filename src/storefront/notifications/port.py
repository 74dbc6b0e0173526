"""Notification relay port (abstract interface).

Fire-and-forget: callers never wait on delivery and a relay failure never
undoes the business action that triggered it.
"""

from abc import ABC, abstractmethod


class NotificationRelay(ABC):
    @abstractmethod
    def notify(self, event: str, payload: dict) -> None:
        """Hand an event off for delivery to the merchant's channels."""
        ...
