import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone

from vaultflow.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    )


class ErrorHandler:
    def __init__(self, max_notifications: int | None = None):
        self._notifications: deque[Notification] = deque(
            maxlen=max_notifications or settings.max_notifications
        )

    def handle(self, err: Exception) -> Notification:
        logger.error("%s: %s", type(err).__name__, err)
        notification = Notification(message=str(err) or type(err).__name__, kind=type(err).__name__)
        self._notifications.append(notification)
        return notification

    @property
    def notifications(self) -> list[Notification]:
        return list(self._notifications)

    def clear(self):
        self._notifications.clear()
