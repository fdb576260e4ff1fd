from __future__ import annotations

from dataclasses import dataclass

from .bookings.mysql_booking_repository import MySQLBookingRepository
from .bookings.service import BookingService
from .core.constants import DEFAULT_CLOSING_HOUR, DEFAULT_OPENING_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .rooms.mysql_room_repository import MySQLRoomRepository
from .rooms.service import RoomService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService
from .tasks.expansion import ShiftTaskExpander
from .tasks.mysql_task_repository import MySQLTaskRepository, MySQLTaskTemplateRepository
from .tasks.service import TaskService, TaskTemplateService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_service: UserService
    room_service: RoomService
    booking_service: BookingService
    shift_service: ShiftService
    task_service: TaskService
    template_service: TaskTemplateService
    notification_service: NotificationService


def build_services(
    *,
    users_repo,
    rooms_repo,
    bookings_repo,
    shifts_repo,
    tasks_repo,
    templates_repo,
    notifications_repo,
    opening_hour: int = DEFAULT_OPENING_HOUR,
    closing_hour: int = DEFAULT_CLOSING_HOUR,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory in tests)."""
    notification_service = NotificationService(notifications_repo)
    expander = ShiftTaskExpander(tasks_repo, templates_repo)

    return Container(
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        room_service=RoomService(rooms_repo),
        booking_service=BookingService(
            bookings_repo,
            rooms_repo,
            users_repo,
            shifts_repo,
            notification_service,
            opening_hour=opening_hour,
            closing_hour=closing_hour,
        ),
        shift_service=ShiftService(shifts_repo, users_repo, rooms_repo, expander, notification_service),
        task_service=TaskService(tasks_repo, shifts_repo, rooms_repo, users_repo, notification_service),
        template_service=TaskTemplateService(templates_repo),
        notification_service=notification_service,
    )


def build_container(
    *,
    db_config: dict,
    opening_hour: int = DEFAULT_OPENING_HOUR,
    closing_hour: int = DEFAULT_CLOSING_HOUR,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        users_repo=MySQLUserRepository(conn),
        rooms_repo=MySQLRoomRepository(conn),
        bookings_repo=MySQLBookingRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        templates_repo=MySQLTaskTemplateRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn),
        opening_hour=opening_hour,
        closing_hour=closing_hour,
    )
