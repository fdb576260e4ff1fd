"""Using the service layer directly, without Flask."""

import importlib
from datetime import date

from arena_booking.config import get_settings_module
from arena_booking.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    for room in container.room_service.list_rooms():
        free = [s for s in container.booking_service.availability(room_id=room.room_id, day=date.today()) if s.is_available]
        print(f"{room.name}: {len(free)} free slot(s) today at {room.hourly_rate:.2f}/h")


if __name__ == "__main__":
    main()
