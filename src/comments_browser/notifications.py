from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

GENERIC_FAILURE_MESSAGE = "Something went wrong."


@dataclass(frozen=True)
class Notification:
    level: str
    message: str
    request_id: str | None = None

    def render(self) -> dict[str, Any]:
        return {"level": self.level, "message": self.message, "request_id": self.request_id}


def fetch_failed_notification(request_id: str | None = None) -> Notification:
    return Notification(level="error", message=GENERIC_FAILURE_MESSAGE, request_id=request_id)


@dataclass
class NotificationCenter:
    messages: list[Notification] = field(default_factory=list)

    def push(self, notification: Notification) -> Notification:
        self.messages.append(notification)
        return notification

    def drain(self) -> list[Notification]:
        pending = list(self.messages)
        self.messages.clear()
        return pending

    def clear(self) -> None:
        self.messages.clear()

    def render(self) -> dict[str, Any]:
        return {"count": len(self.messages), "messages": [item.render() for item in self.messages]}
