from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from ..core.constants import DEFAULT_NOTIFICATION_LIMIT
from ..core.exceptions import AuthorizationError, NotFoundError
from .model import Notification, NotificationDraft
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, notifications: NotificationRepository):
        self._notifications = notifications

    def emit(self, drafts: Iterable[NotificationDraft]) -> list[int]:
        """Persist each draft independently.

        A failed write is logged and skipped; it never undoes the operation
        that triggered it. Returns the ids that were written.
        """
        written: list[int] = []
        for draft in drafts:
            try:
                written.append(
                    self._notifications.create_notification(
                        user_id=draft.user_id, message=draft.message, type=draft.type
                    )
                )
            except Exception:
                logger.exception(
                    "Failed to write %s notification for user %s: %r", draft.type.value, draft.user_id, draft.message
                )
        return written

    def emit_from(self, what: str, build: Callable[[], Iterable[NotificationDraft]]) -> list[int]:
        """Compute drafts with ``build`` and emit them.

        A failure while computing (e.g. reading supervisors) is logged like a
        failed write; the caller's change is already stored.
        """
        try:
            drafts = list(build())
        except Exception:
            logger.exception("Could not compute %s notifications", what)
            return []
        return self.emit(drafts)

    def list_for_user(self, user_id: int, *, limit: int = DEFAULT_NOTIFICATION_LIMIT) -> Sequence[Notification]:
        return self._notifications.list_for_user(int(user_id), limit=int(limit))

    def unread_count(self, user_id: int) -> int:
        return self._notifications.count_unread(int(user_id))

    def mark_read(self, *, actor_id: int, notification_id: int) -> Notification:
        notification = self._notifications.get_by_id(int(notification_id))
        if not notification:
            raise NotFoundError("Notification not found")
        if notification.user_id != int(actor_id):
            raise AuthorizationError("You can only mark your own notifications as read")

        if not notification.is_read and not self._notifications.mark_read(notification.notification_id):
            raise NotFoundError("Notification not found")
        return self._notifications.get_by_id(notification.notification_id)
