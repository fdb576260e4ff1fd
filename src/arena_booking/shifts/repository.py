from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def list_by_employee(self, employee_id: int) -> Sequence[Shift]:
        raise NotImplementedError

    def list_for_room_and_date(self, room_id: int, shift_date: date) -> Sequence[Shift]:
        raise NotImplementedError

    def create_shift(
        self,
        *,
        employee_id: int,
        room_id: int,
        shift_date: date,
        start_time: datetime,
        end_time: datetime,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_active(self, shift_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
