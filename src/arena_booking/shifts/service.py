from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Sequence

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.validators import require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications import notifier
from ..notifications.service import NotificationService
from ..rooms.repository import RoomRepository
from ..tasks.expansion import ExpansionResult, ShiftTaskExpander
from ..users.repository import UserRepository
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftCreation:
    shift: Shift
    expansion: ExpansionResult = field(default_factory=ExpansionResult)


def _to_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


def _to_instant(day: date, value) -> datetime:
    """Accept a full timestamp, or ``HH:MM`` meaning that time on ``day``."""
    if value in (None, ""):
        raise ValidationError("Start time and end time are required")
    if isinstance(value, str) and "T" not in value and len(value.strip()) <= 8:
        try:
            t = datetime.strptime(value.strip()[:5], "%H:%M").time()
        except ValueError:
            raise ValidationError(f"Invalid time (HH:MM): {value!r}")
        return datetime.combine(day, t)
    return parse_iso_datetime(value)


class ShiftService:
    def __init__(
        self,
        shifts: ShiftRepository,
        users: UserRepository,
        rooms: RoomRepository,
        expander: ShiftTaskExpander,
        notifications: NotificationService,
    ):
        self._shifts = shifts
        self._users = users
        self._rooms = rooms
        self._expander = expander
        self._notifications = notifications

    @staticmethod
    def _require_supervisor(current_role: Role) -> None:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to manage shifts")

    def _get(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(require_positive_int(shift_id, "Shift"))
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def _validate(self, *, employee_id, room_id, shift_date, start_time, end_time) -> dict:
        if employee_id in (None, "") or room_id in (None, ""):
            raise ValidationError("Employee and room are required")
        if shift_date in (None, ""):
            raise ValidationError("Date is required")

        employee_id = require_positive_int(employee_id, "Employee")
        room_id = require_positive_int(room_id, "Room")
        day = _to_date(shift_date)
        start = _to_instant(day, start_time)
        end = _to_instant(day, end_time)
        if end <= start:
            raise ValidationError("End time must be after start time")

        employee = self._users.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.role != Role.EMPLOYEE:
            raise ValidationError("Shifts can only be assigned to employees")
        if not self._rooms.get_by_id(room_id):
            raise NotFoundError("Room not found")

        return {
            "employee_id": employee.user_id,
            "room_id": room_id,
            "shift_date": day,
            "start_time": start,
            "end_time": end,
        }

    def create_shift(
        self,
        *,
        current_role: Role,
        employee_id: int,
        room_id: int,
        shift_date,
        start_time,
        end_time,
    ) -> ShiftCreation:
        self._require_supervisor(current_role)
        fields = self._validate(
            employee_id=employee_id,
            room_id=room_id,
            shift_date=shift_date,
            start_time=start_time,
            end_time=end_time,
        )

        shift = self._get(self._shifts.create_shift(**fields))
        logger.info("Shift %s created for employee %s in room %s", shift.shift_id, shift.employee_id, shift.room_id)

        try:
            expansion = self._expander.expand(shift)
        except Exception:
            # Shift stays; tasks can be filled in later with retry_task_expansion.
            logger.exception("Task expansion failed for shift %s", shift.shift_id)
            expansion = ExpansionResult()
        if not expansion.complete:
            logger.warning(
                "Shift %s is missing %d default task(s)", shift.shift_id, len(expansion.failed_templates)
            )

        self._notifications.emit_from("shift-created", lambda: notifier.shift_created(shift))
        return ShiftCreation(shift=shift, expansion=expansion)

    def retry_task_expansion(self, *, current_role: Role, shift_id: int) -> ExpansionResult:
        self._require_supervisor(current_role)
        shift = self._get(shift_id)
        result = self._expander.expand_missing(shift)
        logger.info("Retried task expansion for shift %s: %d created", shift.shift_id, len(result.tasks))
        return result

    def update_shift(self, *, current_role: Role, shift_id: int, **changes) -> Shift:
        """Partial update; omitted fields keep their current values."""
        self._require_supervisor(current_role)
        before = self._get(shift_id)

        day = _to_date(changes.get("shift_date") or before.shift_date)
        # Kept times follow the shift to its new date.
        moved_by = day - before.shift_date
        fields = self._validate(
            employee_id=changes.get("employee_id", before.employee_id),
            room_id=changes.get("room_id", before.room_id),
            shift_date=day,
            start_time=changes.get("start_time") or before.start_time + moved_by,
            end_time=changes.get("end_time") or before.end_time + moved_by,
        )
        if not self._shifts.update_shift(before.shift_id, **fields):
            raise NotFoundError("Shift not found")

        if "is_active" in changes:
            self._shifts.set_active(before.shift_id, is_active=bool(changes["is_active"]))

        after = self._get(before.shift_id)
        logger.info("Shift %s updated", after.shift_id)
        self._notifications.emit_from("shift-reassigned", lambda: notifier.shift_reassigned(before, after))
        return after

    def deactivate(self, *, current_role: Role, shift_id: int) -> Shift:
        self._require_supervisor(current_role)
        shift = self._get(shift_id)
        self._shifts.set_active(shift.shift_id, is_active=False)
        logger.info("Shift %s deactivated", shift.shift_id)
        return self._get(shift.shift_id)

    def get_shift(self, *, actor_id: int, current_role: Role, shift_id: int) -> Shift:
        if current_role == Role.PLAYER:
            raise AuthorizationError("You do not have permission to view shifts")
        shift = self._get(shift_id)
        if current_role == Role.EMPLOYEE and shift.employee_id != int(actor_id):
            raise AuthorizationError("You do not have permission to view this shift")
        return shift

    def list_shifts(self, *, actor_id: int, current_role: Role) -> Sequence[Shift]:
        if current_role == Role.SUPERVISOR:
            return self._shifts.list_all()
        if current_role == Role.EMPLOYEE:
            return self._shifts.list_by_employee(int(actor_id))
        raise AuthorizationError("You do not have permission to view shifts")

