from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from itertools import count

import pytest
from werkzeug.security import generate_password_hash

from arena_booking.bookings.model import Booking
from arena_booking.container import build_services
from arena_booking.core.enums import BookingStatus, Role, TaskCategory
from arena_booking.notifications.model import Notification
from arena_booking.rooms.model import Room
from arena_booking.shifts.model import Shift
from arena_booking.tasks.model import Task, TaskTemplate
from arena_booking.users.model import User

FIXED_CREATED_AT = datetime(2026, 3, 1, 8, 0, 0)


class FakeUsersRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, User] = {}

    def get_by_id(self, user_id):
        return self.rows.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self.rows.values() if u.username == username), None)

    def get_by_email(self, email):
        return next((u for u in self.rows.values() if u.email == email), None)

    def create_user(self, *, username, full_name, email, password_hash, role, phone=None):
        uid = next(self._ids)
        self.rows[uid] = User(
            user_id=uid,
            username=username,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
            phone=phone,
        )
        return uid

    def list_all(self):
        return list(self.rows.values())

    def list_by_role(self, role):
        return [u for u in self.rows.values() if u.role == role]


class FakeRoomsRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, Room] = {}

    def get_by_id(self, room_id):
        return self.rows.get(int(room_id))

    def list_all(self, *, include_inactive=False):
        return [r for r in self.rows.values() if include_inactive or r.is_active]

    def create_room(self, *, name, capacity, equipment, hourly_rate, description=None):
        rid = next(self._ids)
        self.rows[rid] = Room(
            room_id=rid,
            name=name,
            capacity=capacity,
            hourly_rate=hourly_rate,
            equipment=tuple(equipment),
            description=description,
        )
        return rid

    def update_room(self, room_id, *, name, capacity, equipment, hourly_rate, description=None):
        room = self.rows.get(int(room_id))
        if not room:
            return False
        self.rows[room.room_id] = replace(
            room,
            name=name,
            capacity=capacity,
            equipment=tuple(equipment),
            hourly_rate=hourly_rate,
            description=description,
        )
        return True

    def set_active(self, room_id, *, is_active):
        room = self.rows.get(int(room_id))
        if not room:
            return False
        self.rows[room.room_id] = replace(room, is_active=is_active)
        return True


class FakeBookingsRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, Booking] = {}

    def get_by_id(self, booking_id):
        return self.rows.get(int(booking_id))

    def list_all(self):
        return list(self.rows.values())

    def list_by_user(self, user_id):
        return [b for b in self.rows.values() if b.user_id == int(user_id)]

    def list_by_room(self, room_id):
        return [b for b in self.rows.values() if b.room_id == int(room_id)]

    def create_booking(self, *, user_id, room_id, start_time, end_time, status=BookingStatus.PENDING):
        bid = next(self._ids)
        self.rows[bid] = Booking(
            booking_id=bid,
            user_id=user_id,
            room_id=room_id,
            start_time=start_time,
            end_time=end_time,
            status=status,
            created_at=FIXED_CREATED_AT,
        )
        return bid

    def update_status(self, booking_id, status):
        booking = self.rows.get(int(booking_id))
        if not booking:
            return False
        self.rows[booking.booking_id] = replace(booking, status=status)
        return True

    def set_qr_code(self, booking_id, qr_code):
        booking = self.rows.get(int(booking_id))
        if not booking:
            return False
        self.rows[booking.booking_id] = replace(booking, qr_code=qr_code)
        return True


class FakeShiftsRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, Shift] = {}

    def get_by_id(self, shift_id):
        return self.rows.get(int(shift_id))

    def list_all(self):
        return list(self.rows.values())

    def list_by_employee(self, employee_id):
        return [s for s in self.rows.values() if s.employee_id == int(employee_id)]

    def list_for_room_and_date(self, room_id, shift_date):
        return [s for s in self.rows.values() if s.room_id == int(room_id) and s.shift_date == shift_date]

    def create_shift(self, *, employee_id, room_id, shift_date, start_time, end_time):
        sid = next(self._ids)
        self.rows[sid] = Shift(
            shift_id=sid,
            employee_id=employee_id,
            room_id=room_id,
            shift_date=shift_date,
            start_time=start_time,
            end_time=end_time,
        )
        return sid

    def update_shift(self, shift_id, *, employee_id, room_id, shift_date, start_time, end_time):
        shift = self.rows.get(int(shift_id))
        if not shift:
            return False
        self.rows[shift.shift_id] = replace(
            shift,
            employee_id=employee_id,
            room_id=room_id,
            shift_date=shift_date,
            start_time=start_time,
            end_time=end_time,
        )
        return True

    def set_active(self, shift_id, *, is_active):
        shift = self.rows.get(int(shift_id))
        if not shift:
            return False
        self.rows[shift.shift_id] = replace(shift, is_active=is_active)
        return True


class FakeTasksRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, Task] = {}
        # Task names whose insert raises, to simulate a failing write.
        self.fail_names: set[str] = set()

    def get_by_id(self, task_id):
        return self.rows.get(int(task_id))

    def list_by_shift(self, shift_id):
        return [t for t in self.rows.values() if t.shift_id == int(shift_id)]

    def create_task(self, *, shift_id, name, category):
        if name in self.fail_names:
            raise RuntimeError(f"insert failed for {name}")
        tid = next(self._ids)
        self.rows[tid] = Task(task_id=tid, shift_id=shift_id, name=name, category=category)
        return tid

    def set_completion(self, task_id, *, is_completed, completed_at):
        task = self.rows.get(int(task_id))
        if not task:
            return False
        self.rows[task.task_id] = replace(task, is_completed=is_completed, completed_at=completed_at)
        return True


class FakeTemplatesRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, TaskTemplate] = {}

    def get_by_id(self, template_id):
        return self.rows.get(int(template_id))

    def list_all(self):
        return list(self.rows.values())

    def list_defaults(self):
        return [t for t in self.rows.values() if t.is_default]

    def list_by_category(self, category):
        return [t for t in self.rows.values() if t.category == category]

    def create_template(self, *, name, category, is_default=False):
        tid = next(self._ids)
        self.rows[tid] = TaskTemplate(template_id=tid, name=name, category=category, is_default=is_default)
        return tid

    def set_default(self, template_id, *, is_default):
        template = self.rows.get(int(template_id))
        if not template:
            return False
        self.rows[template.template_id] = replace(template, is_default=is_default)
        return True


class FakeNotificationsRepo:
    def __init__(self):
        self._ids = count(1)
        self.rows: dict[int, Notification] = {}
        # Recipients whose notification insert raises.
        self.fail_for: set[int] = set()

    def get_by_id(self, notification_id):
        return self.rows.get(int(notification_id))

    def create_notification(self, *, user_id, message, type):
        if int(user_id) in self.fail_for:
            raise RuntimeError("notifications table unavailable")
        nid = next(self._ids)
        self.rows[nid] = Notification(
            notification_id=nid,
            user_id=int(user_id),
            message=message,
            type=type,
            created_at=FIXED_CREATED_AT,
        )
        return nid

    def list_for_user(self, user_id, *, limit=100):
        mine = [n for n in self.rows.values() if n.user_id == int(user_id)]
        mine.sort(key=lambda n: (n.created_at, n.notification_id), reverse=True)
        return mine[:limit]

    def count_unread(self, user_id):
        return sum(1 for n in self.rows.values() if n.user_id == int(user_id) and not n.is_read)

    def mark_read(self, notification_id):
        notification = self.rows.get(int(notification_id))
        if not notification:
            return False
        self.rows[notification.notification_id] = replace(notification, is_read=True)
        return True

    def for_user(self, user_id):
        return [n for n in self.rows.values() if n.user_id == int(user_id)]


class World:
    """All fake repositories plus the services wired over them."""

    def __init__(self):
        self.users = FakeUsersRepo()
        self.rooms = FakeRoomsRepo()
        self.bookings = FakeBookingsRepo()
        self.shifts = FakeShiftsRepo()
        self.tasks = FakeTasksRepo()
        self.templates = FakeTemplatesRepo()
        self.notifications = FakeNotificationsRepo()
        self.container = build_services(
            users_repo=self.users,
            rooms_repo=self.rooms,
            bookings_repo=self.bookings,
            shifts_repo=self.shifts,
            tasks_repo=self.tasks,
            templates_repo=self.templates,
            notifications_repo=self.notifications,
        )

    def add_user(self, username, role, *, password="secret123"):
        return self.users.create_user(
            username=username,
            full_name=username.title(),
            email=f"{username}@example.com",
            password_hash=generate_password_hash(password),
            role=role,
        )

    def add_room(self, name="Room A", *, capacity=4, hourly_rate=20.0, equipment=("PC",)):
        return self.rooms.create_room(name=name, capacity=capacity, equipment=list(equipment), hourly_rate=hourly_rate)

    def add_default_templates(self, n):
        categories = list(TaskCategory)
        return [
            self.templates.create_template(name=f"Task {i}", category=categories[i % len(categories)], is_default=True)
            for i in range(n)
        ]


@pytest.fixture()
def world():
    return World()


@pytest.fixture()
def people(world):
    return {
        "player": world.add_user("player", Role.PLAYER),
        "other_player": world.add_user("otherplayer", Role.PLAYER),
        "employee": world.add_user("staff", Role.EMPLOYEE),
        "other_employee": world.add_user("staff2", Role.EMPLOYEE),
        "supervisor": world.add_user("boss", Role.SUPERVISOR),
        "supervisor2": world.add_user("boss2", Role.SUPERVISOR),
    }


@pytest.fixture()
def room_id(world):
    return world.add_room()
