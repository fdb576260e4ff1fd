from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Room


class RoomRepository(Protocol):
    def get_by_id(self, room_id: int) -> Optional[Room]:
        raise NotImplementedError

    def list_all(self, *, include_inactive: bool = False) -> Sequence[Room]:
        raise NotImplementedError

    def create_room(
        self,
        *,
        name: str,
        capacity: int,
        equipment: Sequence[str],
        hourly_rate: float,
        description: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

    def set_active(self, room_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError
