"""Booking conflict detection over half-open intervals ``[start, end)``."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from ..core.enums import BookingStatus
from .model import Booking

# Rejected and cancelled bookings never hold their slot.
BLOCKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.APPROVED, BookingStatus.COMPLETED})


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """True when ``[a_start, a_end)`` and ``[b_start, b_end)`` share an instant.

    Abutting intervals (``a_end == b_start``) do not overlap.
    """
    return a_start < b_end and a_end > b_start


def blocks(booking: Booking) -> bool:
    return booking.status in BLOCKING_STATUSES


def has_conflict(room_id: int, start_time: datetime, end_time: datetime, existing: Iterable[Booking]) -> bool:
    """Whether the candidate interval overlaps any blocking booking of ``room_id``.

    ``existing`` may hold bookings of other rooms; they are ignored. The
    interval itself must already be validated (``start_time < end_time``).
    """
    for booking in existing:
        if booking.room_id != room_id or not blocks(booking):
            continue
        if intervals_overlap(start_time, end_time, booking.start_time, booking.end_time):
            return True
    return False
