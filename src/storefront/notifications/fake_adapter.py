"""Fake notification relay: records notifications for test assertions."""

from storefront.notifications.port import NotificationRelay


class FakeNotificationRelay(NotificationRelay):
    def __init__(self) -> None:
        self.notifications: list[dict] = []
        self.should_succeed = True
        self.failure_reason = "Relay unreachable"

    def configure(self, should_succeed: bool = True, failure_reason: str = "Relay unreachable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def notify(self, event: str, payload: dict) -> None:
        if not self.should_succeed:
            raise ConnectionError(self.failure_reason)
        self.notifications.append({"event": event, "payload": payload})

    def events(self, name: str) -> list[dict]:
        return [n["payload"] for n in self.notifications if n["event"] == name]

    def reset(self) -> None:
        self.notifications.clear()
        self.should_succeed = True
        self.failure_reason = "Relay unreachable"
