from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Room:
    """Domain entity: a bookable gaming room.

    Rooms are never deleted; ``is_active=False`` hides them from booking.
    """

    room_id: int
    name: str
    capacity: int
    hourly_rate: float
    equipment: Tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "id": self.room_id,
            "name": self.name,
            "capacity": self.capacity,
            "equipment": list(self.equipment),
            "hourlyRate": self.hourly_rate,
            "description": self.description,
            "isActive": self.is_active,
        }
