from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import BookingStatus


@dataclass(frozen=True)
class Booking:
    """Domain entity: a player's reservation of a room for [start_time, end_time)."""

    booking_id: int
    user_id: int
    room_id: int
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    created_at: datetime
    qr_code: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.booking_id,
            "userId": self.user_id,
            "roomId": self.room_id,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "status": self.status.value,
            "qrCode": self.qr_code,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class TimeSlot:
    """Read-model for the availability calendar."""

    start_time: datetime
    end_time: datetime
    is_available: bool
    price: float

    def to_dict(self) -> dict:
        return {
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "isAvailable": self.is_available,
            "price": self.price,
        }
