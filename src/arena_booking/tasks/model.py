from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TaskCategory


@dataclass(frozen=True)
class TaskTemplate:
    """Checklist item blueprint; defaults are copied into every new shift."""

    template_id: int
    name: str
    category: TaskCategory
    is_default: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "name": self.name,
            "category": self.category.value,
            "isDefault": self.is_default,
        }


@dataclass(frozen=True)
class Task:
    """A checklist item of one shift. ``completed_at`` is set iff ``is_completed``."""

    task_id: int
    shift_id: int
    name: str
    category: TaskCategory
    is_completed: bool = False
    completed_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.task_id,
            "shiftId": self.shift_id,
            "name": self.name,
            "category": self.category.value,
            "isCompleted": self.is_completed,
            "completedAt": self.completed_at.isoformat() if self.completed_at else None,
        }
