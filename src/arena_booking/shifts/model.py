from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Shift:
    """Domain entity: an employee's assignment to a room for [start_time, end_time) on ``shift_date``."""

    shift_id: int
    employee_id: int
    room_id: int
    shift_date: date
    start_time: datetime
    end_time: datetime
    is_active: bool = True

    def covers(self, instant: datetime) -> bool:
        return self.start_time <= instant < self.end_time

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "employeeId": self.employee_id,
            "roomId": self.room_id,
            "date": self.shift_date.isoformat(),
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "isActive": self.is_active,
        }
