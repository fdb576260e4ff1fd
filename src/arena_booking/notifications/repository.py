from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import NotificationType
from .model import Notification


class NotificationRepository(Protocol):
    def get_by_id(self, notification_id: int) -> Optional[Notification]:
        raise NotImplementedError

    def create_notification(self, *, user_id: int, message: str, type: NotificationType) -> int:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, limit: int = 100) -> Sequence[Notification]:
        """Newest first."""

        raise NotImplementedError

    def count_unread(self, user_id: int) -> int:
        raise NotImplementedError

    def mark_read(self, notification_id: int) -> bool:
        raise NotImplementedError
