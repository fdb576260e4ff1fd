from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..shifts.model import Shift
from .model import Task, TaskTemplate
from .repository import TaskRepository, TaskTemplateRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExpansionResult:
    tasks: list[Task] = field(default_factory=list)
    failed_templates: list[TaskTemplate] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed_templates


class ShiftTaskExpander:
    """Copies the default task templates into a shift's checklist.

    Templates are read at expansion time; later template edits never touch
    tasks that already exist.
    """

    def __init__(self, tasks: TaskRepository, templates: TaskTemplateRepository):
        self._tasks = tasks
        self._templates = templates

    def expand(self, shift: Shift) -> ExpansionResult:
        return self._create_from(shift, self._templates.list_defaults())

    def expand_missing(self, shift: Shift) -> ExpansionResult:
        """Create tasks only for default templates the shift does not have yet.

        Used to retry an expansion that partially failed. Tasks are matched to
        templates by (name, category).
        """
        existing = {(t.name, t.category) for t in self._tasks.list_by_shift(shift.shift_id)}
        missing = [t for t in self._templates.list_defaults() if (t.name, t.category) not in existing]
        return self._create_from(shift, missing)

    def _create_from(self, shift: Shift, templates: Iterable[TaskTemplate]) -> ExpansionResult:
        created: list[Task] = []
        failed: list[TaskTemplate] = []
        for template in templates:
            try:
                task_id = self._tasks.create_task(
                    shift_id=shift.shift_id,
                    name=template.name,
                    category=template.category,
                )
            except Exception:
                logger.warning(
                    "Could not create task from template %s for shift %s",
                    template.template_id,
                    shift.shift_id,
                    exc_info=True,
                )
                failed.append(template)
                continue
            created.append(
                Task(
                    task_id=task_id,
                    shift_id=shift.shift_id,
                    name=template.name,
                    category=template.category,
                    is_completed=False,
                    completed_at=None,
                )
            )
        return ExpansionResult(tasks=created, failed_templates=failed)
