from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import require_non_empty, require_positive, require_positive_int
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Room
from .repository import RoomRepository

logger = logging.getLogger(__name__)


def _clean_equipment(equipment) -> list[str]:
    if equipment is None:
        return []
    if isinstance(equipment, str) or not isinstance(equipment, Iterable):
        raise ValidationError("Equipment must be a list of strings")
    items = [str(e).strip() for e in equipment]
    return [e for e in items if e]


class RoomService:
    def __init__(self, rooms: RoomRepository):
        self._rooms = rooms

    @staticmethod
    def _require_supervisor(current_role: Role) -> None:
        if current_role != Role.SUPERVISOR:
            raise AuthorizationError("You do not have permission to manage rooms")

    def get(self, room_id: int) -> Room:
        room = self._rooms.get_by_id(require_positive_int(room_id, "Room"))
        if not room:
            raise NotFoundError("Room not found")
        return room

    def list_rooms(self, *, include_inactive: bool = False) -> Sequence[Room]:
        return self._rooms.list_all(include_inactive=include_inactive)

    def filter_rooms(
        self,
        *,
        equipment: Optional[str] = None,
        min_capacity: Optional[int] = None,
        min_rate: Optional[float] = None,
        max_rate: Optional[float] = None,
    ) -> list[Room]:
        """Active rooms matching every given criterion (``None`` means any)."""
        wanted = (equipment or "").strip().lower()
        out: list[Room] = []
        for room in self._rooms.list_all():
            if wanted and wanted not in {e.lower() for e in room.equipment}:
                continue
            if min_capacity is not None and room.capacity < int(min_capacity):
                continue
            if min_rate is not None and room.hourly_rate < float(min_rate):
                continue
            if max_rate is not None and room.hourly_rate > float(max_rate):
                continue
            out.append(room)
        return out

    def equipment_options(self) -> list[str]:
        seen: dict[str, None] = {}
        for room in self._rooms.list_all():
            for item in room.equipment:
                seen.setdefault(item, None)
        return sorted(seen)

    def create(
        self,
        *,
        current_role: Role,
        name: str,
        capacity,
        hourly_rate,
        equipment=None,
        description: Optional[str] = None,
    ) -> Room:
        self._require_supervisor(current_role)

        room_id = self._rooms.create_room(
            name=require_non_empty(name, "Name"),
            capacity=require_positive_int(capacity, "Capacity"),
            equipment=_clean_equipment(equipment),
            hourly_rate=require_positive(hourly_rate, "Hourly rate"),
            description=(description or "").strip() or None,
        )
        logger.info("Room %s created", room_id)
        return self.get(room_id)

    def update(self, *, current_role: Role, room_id: int, **changes) -> Room:
        """Partial update; omitted fields keep their current values."""
        self._require_supervisor(current_role)
        room = self.get(room_id)

        name = changes.get("name", room.name)
        capacity = changes.get("capacity", room.capacity)
        hourly_rate = changes.get("hourly_rate", room.hourly_rate)
        equipment = changes.get("equipment", list(room.equipment))
        description = changes.get("description", room.description)

        ok = self._rooms.update_room(
            room.room_id,
            name=require_non_empty(name, "Name"),
            capacity=require_positive_int(capacity, "Capacity"),
            equipment=_clean_equipment(equipment),
            hourly_rate=require_positive(hourly_rate, "Hourly rate"),
            description=(description or "").strip() or None,
        )
        if not ok:
            raise NotFoundError("Room not found")

        if "is_active" in changes:
            self._rooms.set_active(room.room_id, is_active=bool(changes["is_active"]))
        return self.get(room.room_id)

    def deactivate(self, *, current_role: Role, room_id: int) -> Room:
        self._require_supervisor(current_role)
        room = self.get(room_id)
        self._rooms.set_active(room.room_id, is_active=False)
        logger.info("Room %s deactivated", room.room_id)
        return self.get(room.room_id)
