from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import NotificationType


@dataclass(frozen=True)
class NotificationDraft:
    """A notification to be written: recipient, rendered text and type."""

    user_id: int
    message: str
    type: NotificationType


@dataclass(frozen=True)
class Notification:
    notification_id: int
    user_id: int
    message: str
    type: NotificationType
    created_at: datetime
    is_read: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.notification_id,
            "userId": self.user_id,
            "message": self.message,
            "type": self.type.value,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat(),
        }
