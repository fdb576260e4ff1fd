from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty, require_positive_int
from ..core.enums import Role, TaskCategory
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..notifications import notifier
from ..notifications.service import NotificationService
from ..rooms.repository import RoomRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository
from .model import Task, TaskTemplate
from .repository import TaskRepository, TaskTemplateRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftChecklist:
    shift: Shift
    tasks: Sequence[Task]


def _as_bool(value, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValidationError(f"{field_name} must be true or false")


class TaskService:
    def __init__(
        self,
        tasks: TaskRepository,
        shifts: ShiftRepository,
        rooms: RoomRepository,
        users: UserRepository,
        notifications: NotificationService,
    ):
        self._tasks = tasks
        self._shifts = shifts
        self._rooms = rooms
        self._users = users
        self._notifications = notifications

    def _shift(self, shift_id: int) -> Shift:
        shift = self._shifts.get_by_id(require_positive_int(shift_id, "Shift"))
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def toggle_task(
        self,
        *,
        actor_id: int,
        task_id: int,
        is_completed,
        now: Optional[datetime] = None,
    ) -> Task:
        """Tick or untick a checklist item on the actor's own shift."""
        if task_id in (None, "") or is_completed is None:
            raise ValidationError("Task ID and completion status are required")
        completed = _as_bool(is_completed, "Completion status")

        task = self._tasks.get_by_id(require_positive_int(task_id, "Task"))
        if not task:
            raise NotFoundError("Task not found")
        shift = self._shifts.get_by_id(task.shift_id)
        if not shift or shift.employee_id != int(actor_id):
            raise AuthorizationError("You do not have permission to update this task")

        if completed == task.is_completed:
            return task

        completed_at = (now or now_local()) if completed else None
        if not self._tasks.set_completion(task.task_id, is_completed=completed, completed_at=completed_at):
            raise NotFoundError("Task not found")
        updated = self._tasks.get_by_id(task.task_id)
        logger.info("Task %s on shift %s marked %s", task.task_id, shift.shift_id, "done" if completed else "open")

        if completed:
            self._notifications.emit_from("task-completed", lambda: self._completion_drafts(updated, shift))
        return updated

    def _completion_drafts(self, task: Task, shift: Shift):
        room = self._rooms.get_by_id(shift.room_id)
        return notifier.task_completed(
            task, shift, self._users.list_by_role(Role.SUPERVISOR), room_name=room.name if room else None
        )

    def add_task(self, *, actor_id: int, current_role: Role, shift_id: int, name: str, category) -> Task:
        if current_role == Role.PLAYER:
            raise AuthorizationError("You do not have permission to add tasks")
        shift = self._shift(shift_id)
        if current_role == Role.EMPLOYEE and shift.employee_id != int(actor_id):
            raise AuthorizationError("You do not have permission to add tasks to this shift")

        task_id = self._tasks.create_task(
            shift_id=shift.shift_id,
            name=require_non_empty(name, "Name"),
            category=parse_enum(TaskCategory, category, "Category"),
        )
        return self._tasks.get_by_id(task_id)

    def list_for_shift(self, *, actor_id: int, current_role: Role, shift_id: int) -> Sequence[Task]:
        if current_role == Role.PLAYER:
            raise AuthorizationError("You do not have permission to view these tasks")
        shift = self._shift(shift_id)
        if current_role == Role.EMPLOYEE and shift.employee_id != int(actor_id):
            raise AuthorizationError("You do not have permission to view these tasks")
        return self._tasks.list_by_shift(shift.shift_id)

    def current_tasks(self, *, employee_id: int, today: Optional[date] = None) -> ShiftChecklist:
        """Checklist for the employee's first active shift today."""
        day = today or now_local().date()
        todays = [
            s for s in self._shifts.list_by_employee(int(employee_id)) if s.is_active and s.shift_date == day
        ]
        if not todays:
            raise NotFoundError("No active shifts found for today")
        shift = min(todays, key=lambda s: s.start_time)
        return ShiftChecklist(shift=shift, tasks=self._tasks.list_by_shift(shift.shift_id))


class TaskTemplateService:
    def __init__(self, templates: TaskTemplateRepository):
        self._templates = templates

    def list_templates(self, *, category=None) -> Sequence[TaskTemplate]:
        if category in (None, ""):
            return self._templates.list_all()
        return self._templates.list_by_category(parse_enum(TaskCategory, category, "Category"))

    def create_template(self, *, current_role: Role, name: str, category, is_default=False) -> TaskTemplate:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to manage task templates")
        template_id = self._templates.create_template(
            name=require_non_empty(name, "Name"),
            category=parse_enum(TaskCategory, category, "Category"),
            is_default=_as_bool(is_default, "isDefault"),
        )
        logger.info("Task template %s created", template_id)
        return self._templates.get_by_id(template_id)

    def set_default(self, *, current_role: Role, template_id: int, is_default) -> TaskTemplate:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to manage task templates")
        template = self._templates.get_by_id(require_positive_int(template_id, "Task template"))
        if not template:
            raise NotFoundError("Task template not found")
        self._templates.set_default(template.template_id, is_default=_as_bool(is_default, "isDefault"))
        return self._templates.get_by_id(template.template_id)
