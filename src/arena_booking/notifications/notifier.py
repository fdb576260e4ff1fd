"""Who gets told what when bookings, shifts and tasks change.

Every function here is pure: it maps one transition to the list of
notifications it causes. Persisting them is ``NotificationService.emit``'s job.
"""

from __future__ import annotations

from typing import Iterable, Optional

from ..bookings.model import Booking
from ..core.enums import BookingStatus, NotificationType
from ..shifts.model import Shift
from ..tasks.model import Task
from ..users.model import User
from .model import NotificationDraft


def _room_label(room_id: int, room_name: Optional[str]) -> str:
    return room_name or f"#{room_id}"


def booking_created(booking: Booking, supervisors: Iterable[User]) -> list[NotificationDraft]:
    drafts = [
        NotificationDraft(
            user_id=s.user_id,
            message=f"New booking #{booking.booking_id} requires approval",
            type=NotificationType.BOOKING,
        )
        for s in supervisors
    ]
    drafts.append(
        NotificationDraft(
            user_id=booking.user_id,
            message=f"Your booking #{booking.booking_id} has been created and is pending approval",
            type=NotificationType.BOOKING,
        )
    )
    return drafts


def booking_status_changed(booking: Booking, new_status: BookingStatus) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            user_id=booking.user_id,
            message=f"Your booking #{booking.booking_id} has been {new_status.value}",
            type=NotificationType.BOOKING,
        )
    ]


def shifts_covering(booking: Booking, shifts: Iterable[Shift]) -> list[Shift]:
    """Active shifts in the booking's room, on its start date, whose interval contains its start."""
    day = booking.start_time.date()
    return [
        s
        for s in shifts
        if s.is_active and s.room_id == booking.room_id and s.shift_date == day and s.covers(booking.start_time)
    ]


def booking_approved(
    booking: Booking, shifts: Iterable[Shift], *, room_name: Optional[str] = None
) -> list[NotificationDraft]:
    """Shift-type notices for employees on duty when the booking starts.

    Sent in addition to the owner's status-change notice.
    """
    room = _room_label(booking.room_id, room_name)
    day = booking.start_time.date().isoformat()
    return [
        NotificationDraft(
            user_id=s.employee_id,
            message=f"New booking approved for room {room} during your shift on {day}",
            type=NotificationType.SHIFT,
        )
        for s in shifts_covering(booking, shifts)
    ]


def shift_created(shift: Shift) -> list[NotificationDraft]:
    return [
        NotificationDraft(
            user_id=shift.employee_id,
            message=f"You have been assigned a new shift on {shift.shift_date.isoformat()}",
            type=NotificationType.SHIFT,
        )
    ]


def shift_reassigned(before: Shift, after: Shift) -> list[NotificationDraft]:
    # Only the new assignee is told; the previous one gets nothing.
    if after.employee_id == before.employee_id:
        return []
    return [
        NotificationDraft(
            user_id=after.employee_id,
            message=f"You have been assigned a shift on {after.shift_date.isoformat()}",
            type=NotificationType.SHIFT,
        )
    ]


def task_completed(
    task: Task, shift: Shift, supervisors: Iterable[User], *, room_name: Optional[str] = None
) -> list[NotificationDraft]:
    room = _room_label(shift.room_id, room_name)
    return [
        NotificationDraft(
            user_id=s.user_id,
            message=f'Task "{task.name}" completed for room {room}',
            type=NotificationType.SYSTEM,
        )
        for s in supervisors
    ]
