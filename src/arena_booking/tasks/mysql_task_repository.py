from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import TaskCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Task, TaskTemplate
from .repository import TaskRepository, TaskTemplateRepository

_TASK_COLUMNS = "task_id, shift_id, name, category, is_completed, completed_at"
_TEMPLATE_COLUMNS = "template_id, name, category, is_default"


def _row_to_task(row: dict) -> Task:
    return Task(
        task_id=int(row["task_id"]),
        shift_id=int(row["shift_id"]),
        name=row["name"],
        category=TaskCategory(row["category"]),
        is_completed=as_bool(row.get("is_completed")),
        completed_at=row.get("completed_at"),
    )


def _row_to_template(row: dict) -> TaskTemplate:
    return TaskTemplate(
        template_id=int(row["template_id"]),
        name=row["name"],
        category=TaskCategory(row["category"]),
        is_default=as_bool(row.get("is_default")),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TASK_COLUMNS} FROM tasks WHERE task_id=%s", (int(task_id),))
            row = fetchone(cur)
            return _row_to_task(row) if row else None

    def list_by_shift(self, shift_id: int) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_TASK_COLUMNS} FROM tasks WHERE shift_id=%s ORDER BY category, task_id",
                (int(shift_id),),
            )
            return [_row_to_task(r) for r in fetchall(cur)]

    def create_task(self, *, shift_id: int, name: str, category: TaskCategory) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(shift_id, name, category, is_completed, completed_at)
                VALUES(%s,%s,%s,0,NULL)
                """,
                (int(shift_id), name, category.value),
            )
            return int(cur.lastrowid)

    def set_completion(self, task_id: int, *, is_completed: bool, completed_at: Optional[datetime]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE tasks SET is_completed=%s, completed_at=%s WHERE task_id=%s",
                (1 if is_completed else 0, completed_at, int(task_id)),
            )
            return cur.rowcount > 0


class MySQLTaskTemplateRepository(TaskTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[TaskTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_TEMPLATE_COLUMNS} FROM task_templates {where} ORDER BY template_id", params)
            return [_row_to_template(r) for r in fetchall(cur)]

    def get_by_id(self, template_id: int) -> Optional[TaskTemplate]:
        rows = self._select("WHERE template_id=%s", (int(template_id),))
        return rows[0] if rows else None

    def list_all(self) -> Sequence[TaskTemplate]:
        return self._select()

    def list_defaults(self) -> Sequence[TaskTemplate]:
        return self._select("WHERE is_default=1")

    def list_by_category(self, category: TaskCategory) -> Sequence[TaskTemplate]:
        return self._select("WHERE category=%s", (category.value,))

    def create_template(self, *, name: str, category: TaskCategory, is_default: bool = False) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO task_templates(name, category, is_default) VALUES(%s,%s,%s)",
                (name, category.value, 1 if is_default else 0),
            )
            return int(cur.lastrowid)

    def set_default(self, template_id: int, *, is_default: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE task_templates SET is_default=%s WHERE template_id=%s",
                (1 if is_default else 0, int(template_id)),
            )
            return cur.rowcount > 0
