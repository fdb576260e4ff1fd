from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import BookingStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Booking
from .repository import BookingRepository

_COLUMNS = "booking_id, user_id, room_id, start_time, end_time, status, qr_code, created_at"


def _row_to_booking(row: dict) -> Booking:
    return Booking(
        booking_id=int(row["booking_id"]),
        user_id=int(row["user_id"]),
        room_id=int(row["room_id"]),
        start_time=row["start_time"],
        end_time=row["end_time"],
        status=BookingStatus(row["status"]),
        created_at=row["created_at"],
        qr_code=row.get("qr_code"),
    )


class MySQLBookingRepository(BookingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, where: str = "", params: tuple = ()) -> list[Booking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM bookings {where} ORDER BY start_time, booking_id", params)
            return [_row_to_booking(r) for r in fetchall(cur)]

    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM bookings WHERE booking_id=%s", (int(booking_id),))
            row = fetchone(cur)
            return _row_to_booking(row) if row else None

    def list_all(self) -> Sequence[Booking]:
        return self._select()

    def list_by_user(self, user_id: int) -> Sequence[Booking]:
        return self._select("WHERE user_id=%s", (int(user_id),))

    def list_by_room(self, room_id: int) -> Sequence[Booking]:
        return self._select("WHERE room_id=%s", (int(room_id),))

    def create_booking(
        self,
        *,
        user_id: int,
        room_id: int,
        start_time: datetime,
        end_time: datetime,
        status: BookingStatus = BookingStatus.PENDING,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO bookings(user_id, room_id, start_time, end_time, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), int(room_id), start_time, end_time, status.value),
            )
            return int(cur.lastrowid)

    def update_status(self, booking_id: int, status: BookingStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE bookings SET status=%s WHERE booking_id=%s", (status.value, int(booking_id)))
            return cur.rowcount > 0

    def set_qr_code(self, booking_id: int, qr_code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE bookings SET qr_code=%s WHERE booking_id=%s", (qr_code, int(booking_id)))
            return cur.rowcount > 0
