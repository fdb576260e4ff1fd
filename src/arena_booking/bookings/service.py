from __future__ import annotations

import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_datetime
from ..common.validators import parse_enum, require_positive_int
from ..core.constants import DEFAULT_CLOSING_HOUR, DEFAULT_OPENING_HOUR, SLOT_MINUTES, SLOT_UNAVAILABLE_MESSAGE
from ..core.enums import BookingStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from ..notifications import notifier
from ..notifications.model import NotificationDraft
from ..notifications.service import NotificationService
from ..rooms.repository import RoomRepository
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository
from .conflict import has_conflict
from .model import Booking, TimeSlot
from .qr import JsonQrTokenGenerator, QrTokenGenerator
from .repository import BookingRepository
from .transitions import can_transition

logger = logging.getLogger(__name__)


class RoomLocks:
    """One lock per room, so check-then-insert for a room runs one request at a time.

    Only serializes within this process.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = defaultdict(threading.Lock)

    def for_room(self, room_id: int) -> threading.Lock:
        with self._guard:
            return self._locks[int(room_id)]


class BookingService:
    def __init__(
        self,
        bookings: BookingRepository,
        rooms: RoomRepository,
        users: UserRepository,
        shifts: ShiftRepository,
        notifications: NotificationService,
        *,
        qr_generator: QrTokenGenerator | None = None,
        room_locks: RoomLocks | None = None,
        opening_hour: int = DEFAULT_OPENING_HOUR,
        closing_hour: int = DEFAULT_CLOSING_HOUR,
    ):
        self._bookings = bookings
        self._rooms = rooms
        self._users = users
        self._shifts = shifts
        self._notifications = notifications
        self._qr = qr_generator or JsonQrTokenGenerator()
        self._locks = room_locks or RoomLocks()
        self._opening_hour = int(opening_hour)
        self._closing_hour = int(closing_hour)

    def _get(self, booking_id: int) -> Booking:
        booking = self._bookings.get_by_id(require_positive_int(booking_id, "Booking"))
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def create_booking(
        self,
        *,
        user_id: int,
        room_id: int,
        start_time,
        end_time,
    ) -> Booking:
        if start_time in (None, "") or end_time in (None, ""):
            raise ValidationError("Start time and end time are required")
        start = parse_iso_datetime(start_time)
        end = parse_iso_datetime(end_time)
        if end <= start:
            raise ValidationError("End time must be after start time")

        user_id = require_positive_int(user_id, "User")
        room_id = require_positive_int(room_id, "Room")
        if not self._users.get_by_id(user_id):
            raise NotFoundError("User not found")
        room = self._rooms.get_by_id(room_id)
        if not room:
            raise NotFoundError("Room not found")
        if not room.is_active:
            raise ValidationError("Room is not available for booking")

        with self._locks.for_room(room.room_id):
            existing = self._bookings.list_by_room(room.room_id)
            if has_conflict(room.room_id, start, end, existing):
                logger.info("Booking rejected: room %s is taken for %s - %s", room.room_id, start, end)
                raise ConflictError(SLOT_UNAVAILABLE_MESSAGE)

            booking_id = self._bookings.create_booking(
                user_id=user_id,
                room_id=room.room_id,
                start_time=start,
                end_time=end,
                status=BookingStatus.PENDING,
            )

        booking = self._get(booking_id)
        booking = self._attach_qr(booking)
        logger.info("Booking %s created for room %s by user %s", booking.booking_id, room.room_id, user_id)

        self._notifications.emit_from(
            "booking-created",
            lambda: notifier.booking_created(booking, self._users.list_by_role(Role.SUPERVISOR)),
        )
        return booking

    def _attach_qr(self, booking: Booking) -> Booking:
        try:
            token = self._qr.token_for(booking)
            self._bookings.set_qr_code(booking.booking_id, token)
        except Exception:
            logger.exception("Could not store QR token for booking %s", booking.booking_id)
            return booking
        return self._get(booking.booking_id)

    def update_status(
        self,
        *,
        actor_id: int,
        current_role: Role,
        booking_id: int,
        new_status,
        now: Optional[datetime] = None,
    ) -> Booking:
        status = parse_enum(BookingStatus, new_status, "Status")
        booking = self._get(booking_id)

        if current_role == Role.PLAYER:
            if booking.user_id != int(actor_id):
                raise AuthorizationError("You do not have permission to change this booking")
            if status != BookingStatus.CANCELLED:
                raise AuthorizationError("Players can only cancel their bookings")
        elif current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to change booking status")

        if not can_transition(booking.status, status):
            raise InvalidTransitionError(
                f"Cannot change booking #{booking.booking_id} from {booking.status.value} to {status.value}"
            )
        if status == BookingStatus.COMPLETED and (now or now_local()) < booking.end_time:
            raise InvalidTransitionError("A booking can only be completed after it has ended")

        if not self._bookings.update_status(booking.booking_id, status):
            raise NotFoundError("Booking not found")
        updated = self._get(booking.booking_id)
        logger.info("Booking %s: %s -> %s by user %s", booking.booking_id, booking.status.value, status.value, actor_id)

        self._notifications.emit_from("booking-status", lambda: notifier.booking_status_changed(updated, status))
        if status == BookingStatus.APPROVED:
            self._notifications.emit_from("booking-approved", lambda: self._approval_drafts(updated))
        return updated

    def _approval_drafts(self, booking: Booking) -> list[NotificationDraft]:
        shifts = self._shifts.list_for_room_and_date(booking.room_id, booking.start_time.date())
        room = self._rooms.get_by_id(booking.room_id)
        return notifier.booking_approved(booking, shifts, room_name=room.name if room else None)

    def cancel(self, *, actor_id: int, current_role: Role, booking_id: int) -> Booking:
        return self.update_status(
            actor_id=actor_id,
            current_role=current_role,
            booking_id=booking_id,
            new_status=BookingStatus.CANCELLED,
        )

    def get_booking(self, *, actor_id: int, current_role: Role, booking_id: int) -> Booking:
        booking = self._get(booking_id)
        if current_role == Role.PLAYER and booking.user_id != int(actor_id):
            raise AuthorizationError("You do not have permission to view this booking")
        return booking

    def list_bookings(self, *, actor_id: int, current_role: Role) -> Sequence[Booking]:
        """Players: their own. Employees: rooms they have shifts in. Supervisors: all."""
        if current_role == Role.PLAYER:
            return self._bookings.list_by_user(int(actor_id))

        if current_role == Role.EMPLOYEE:
            room_ids = sorted({s.room_id for s in self._shifts.list_by_employee(int(actor_id))})
            out: list[Booking] = []
            for room_id in room_ids:
                out.extend(self._bookings.list_by_room(room_id))
            return out

        return self._bookings.list_all()

    def qr_token(self, *, actor_id: int, current_role: Role, booking_id: int) -> str:
        booking = self.get_booking(actor_id=actor_id, current_role=current_role, booking_id=booking_id)
        if not booking.qr_code:
            booking = self._attach_qr(booking)
        return booking.qr_code or self._qr.token_for(booking)

    def availability(self, *, room_id: int, day: date) -> list[TimeSlot]:
        """Hourly slots between opening and closing hour for one room and day."""
        room = self._rooms.get_by_id(require_positive_int(room_id, "Room"))
        if not room:
            raise NotFoundError("Room not found")

        existing = self._bookings.list_by_room(room.room_id)
        step = timedelta(minutes=SLOT_MINUTES)
        slot_start = datetime.combine(day, datetime.min.time()).replace(hour=self._opening_hour)
        closing = datetime.combine(day, datetime.min.time()).replace(hour=self._closing_hour)

        slots: list[TimeSlot] = []
        while slot_start + step <= closing:
            slot_end = slot_start + step
            slots.append(
                TimeSlot(
                    start_time=slot_start,
                    end_time=slot_end,
                    is_available=room.is_active and not has_conflict(room.room_id, slot_start, slot_end, existing),
                    price=room.hourly_rate,
                )
            )
            slot_start = slot_end
        return slots
