from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, employee_id, room_id, shift_date, start_time, end_time, is_active"


def _row_to_shift(row: dict) -> Shift:
    return Shift(
        shift_id=int(row["shift_id"]),
        employee_id=int(row["employee_id"]),
        room_id=int(row["room_id"]),
        shift_date=row["shift_date"],
        start_time=row["start_time"],
        end_time=row["end_time"],
        is_active=as_bool(row.get("is_active", 1)),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts {where} ORDER BY shift_date, start_time, shift_id", params)
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            row = fetchone(cur)
            return _row_to_shift(row) if row else None

    def list_all(self) -> Sequence[Shift]:
        return self._select()

    def list_by_employee(self, employee_id: int) -> Sequence[Shift]:
        return self._select("WHERE employee_id=%s", (int(employee_id),))

    def list_for_room_and_date(self, room_id: int, shift_date: date) -> Sequence[Shift]:
        return self._select("WHERE room_id=%s AND shift_date=%s", (int(room_id), shift_date))

    def create_shift(
        self,
        *,
        employee_id: int,
        room_id: int,
        shift_date: date,
        start_time: datetime,
        end_time: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(employee_id, room_id, shift_date, start_time, end_time, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (int(employee_id), int(room_id), shift_date, start_time, end_time),
            )
            return int(cur.lastrowid)

    def update_shift(
        self,
        shift_id: int,
        *,
        employee_id: int,
        room_id: int,
        shift_date: date,
        start_time: datetime,
        end_time: datetime,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET employee_id=%s, room_id=%s, shift_date=%s, start_time=%s, end_time=%s
                WHERE shift_id=%s
                """,
                (int(employee_id), int(room_id), shift_date, start_time, end_time, int(shift_id)),
            )
            return cur.rowcount > 0

    def set_active(self, shift_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE shifts SET is_active=%s WHERE shift_id=%s", (1 if is_active else 0, int(shift_id)))
            return cur.rowcount > 0
