from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BookingStatus
from .model import Booking


class BookingRepository(Protocol):
    def get_by_id(self, booking_id: int) -> Optional[Booking]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Booking]:
        raise NotImplementedError

    def list_by_user(self, user_id: int) -> Sequence[Booking]:
        raise NotImplementedError

    def list_by_room(self, room_id: int) -> Sequence[Booking]:
        raise NotImplementedError

    def create_booking(
        self,
        *,
        user_id: int,
        room_id: int,
        start_time: datetime,
        end_time: datetime,
        status: BookingStatus = BookingStatus.PENDING,
    ) -> int:
        raise NotImplementedError

    def update_status(self, booking_id: int, status: BookingStatus) -> bool:
        raise NotImplementedError

    def set_qr_code(self, booking_id: int, qr_code: str) -> bool:
        raise NotImplementedError
