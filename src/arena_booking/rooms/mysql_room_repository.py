from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, dump_json_list, fetchall, fetchone, load_json_list
from .model import Room
from .repository import RoomRepository

_COLUMNS = "room_id, name, capacity, equipment, hourly_rate, description, is_active"


def _row_to_room(row: dict) -> Room:
    return Room(
        room_id=int(row["room_id"]),
        name=row["name"],
        capacity=int(row["capacity"]),
        hourly_rate=float(row["hourly_rate"]),
        equipment=tuple(load_json_list(row.get("equipment"))),
        description=row.get("description"),
        is_active=as_bool(row.get("is_active", 1)),
    )


class MySQLRoomRepository(RoomRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, room_id: int) -> Optional[Room]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM rooms WHERE room_id=%s", (int(room_id),))
            row = fetchone(cur)
            return _row_to_room(row) if row else None

    def list_all(self, *, include_inactive: bool = False) -> Sequence[Room]:
        where = "" if include_inactive else "WHERE is_active=1"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM rooms {where} ORDER BY name")
            return [_row_to_room(r) for r in fetchall(cur)]

    def create_room(
        self,
        *,
        name: str,
        capacity: int,
        equipment: Sequence[str],
        hourly_rate: float,
        description: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rooms(name, capacity, equipment, hourly_rate, description, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, int(capacity), dump_json_list(equipment), hourly_rate, description),
            )
            return int(cur.lastrowid)

    def update_room(
        self,
        room_id: int,
        *,
        name: str,
        capacity: int,
        equipment: Sequence[str],
        hourly_rate: float,
        description: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE rooms
                SET name=%s, capacity=%s, equipment=%s, hourly_rate=%s, description=%s
                WHERE room_id=%s
                """,
                (name, int(capacity), dump_json_list(equipment), hourly_rate, description, int(room_id)),
            )
            return cur.rowcount > 0

    def set_active(self, room_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE rooms SET is_active=%s WHERE room_id=%s", (1 if is_active else 0, int(room_id)))
            return cur.rowcount > 0
