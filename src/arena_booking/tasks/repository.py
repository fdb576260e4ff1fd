from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TaskCategory
from .model import Task, TaskTemplate


class TaskRepository(Protocol):
    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def list_by_shift(self, shift_id: int) -> Sequence[Task]:
        raise NotImplementedError

    def create_task(self, *, shift_id: int, name: str, category: TaskCategory) -> int:
        """New tasks start incomplete with no completion time."""

        raise NotImplementedError

    def set_completion(self, task_id: int, *, is_completed: bool, completed_at: Optional[datetime]) -> bool:
        raise NotImplementedError


class TaskTemplateRepository(Protocol):
    def get_by_id(self, template_id: int) -> Optional[TaskTemplate]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TaskTemplate]:
        raise NotImplementedError

    def list_defaults(self) -> Sequence[TaskTemplate]:
        raise NotImplementedError

    def list_by_category(self, category: TaskCategory) -> Sequence[TaskTemplate]:
        raise NotImplementedError

    def create_template(self, *, name: str, category: TaskCategory, is_default: bool = False) -> int:
        raise NotImplementedError

    def set_default(self, template_id: int, *, is_default: bool) -> bool:
        raise NotImplementedError
