from __future__ import annotations

from datetime import date, datetime

import pytest

from arena_booking.core.enums import NotificationType, Role
from arena_booking.core.exceptions import AuthorizationError, NotFoundError, ValidationError

DAY = date(2026, 3, 10)


@pytest.fixture()
def shifts(world):
    return world.container.shift_service


def create(shifts, employee_id, room_id, *, start="09:00", end="17:00", day="2026-03-10"):
    return shifts.create_shift(
        current_role=Role.SUPERVISOR,
        employee_id=employee_id,
        room_id=room_id,
        shift_date=day,
        start_time=start,
        end_time=end,
    )


def test_shift_with_five_default_templates(world, people, room_id, shifts):
    world.add_default_templates(5)
    world.templates.create_template(name="Optional", category=world.templates.list_all()[0].category)

    created = create(shifts, people["employee"], room_id)

    tasks = world.tasks.list_by_shift(created.shift.shift_id)
    assert len(tasks) == 5
    assert all(not t.is_completed and t.completed_at is None for t in tasks)
    assert created.expansion.complete
    assert [n.message for n in world.notifications.for_user(people["employee"])] == [
        "You have been assigned a new shift on 2026-03-10"
    ]
    assert world.notifications.for_user(people["employee"])[0].type == NotificationType.SHIFT


def test_shift_times_accept_clock_or_timestamp(world, people, room_id, shifts):
    a = create(shifts, people["employee"], room_id, start="08:30", end="12:00").shift
    b = create(
        shifts, people["employee"], room_id, start="2026-03-10T13:00:00", end="2026-03-10T18:00:00"
    ).shift

    assert a.start_time == datetime(2026, 3, 10, 8, 30)
    assert a.shift_date == DAY
    assert b.end_time == datetime(2026, 3, 10, 18, 0)


def test_template_changes_do_not_touch_existing_shift(world, people, room_id, shifts):
    [first, second] = world.add_default_templates(2)
    created = create(shifts, people["employee"], room_id)

    world.templates.set_default(first, is_default=False)
    world.templates.create_template(name="New", category=world.templates.get_by_id(second).category, is_default=True)

    assert {t.name for t in world.tasks.list_by_shift(created.shift.shift_id)} == {"Task 0", "Task 1"}


def test_partial_expansion_keeps_shift_and_can_be_retried(world, people, room_id, shifts):
    world.add_default_templates(3)
    world.tasks.fail_names = {"Task 1"}

    created = create(shifts, people["employee"], room_id)

    assert world.shifts.get_by_id(created.shift.shift_id) is not None
    assert [t.name for t in created.expansion.failed_templates] == ["Task 1"]
    assert len(created.expansion.tasks) == 2
    assert len(world.notifications.for_user(people["employee"])) == 1

    world.tasks.fail_names = set()
    retry = shifts.retry_task_expansion(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id)

    assert [t.name for t in retry.tasks] == ["Task 1"]
    assert retry.complete
    assert len(world.tasks.list_by_shift(created.shift.shift_id)) == 3


def test_expansion_crash_still_notifies(world, people, room_id, shifts, monkeypatch):
    def broken():
        raise RuntimeError("templates table unavailable")

    monkeypatch.setattr(world.templates, "list_defaults", broken)

    created = create(shifts, people["employee"], room_id)

    assert created.expansion.tasks == []
    assert len(world.notifications.for_user(people["employee"])) == 1


@pytest.mark.parametrize(
    "kwargs,error",
    [
        ({"start": "17:00", "end": "09:00"}, ValidationError),
        ({"start": "09:00", "end": "09:00"}, ValidationError),
        ({"start": "9am", "end": "17:00"}, ValidationError),
        ({"day": "10/03/2026"}, ValidationError),
    ],
)
def test_invalid_input(people, room_id, shifts, kwargs, error):
    with pytest.raises(error):
        create(shifts, people["employee"], room_id, **kwargs)


def test_unknown_employee_or_room(people, room_id, shifts):
    with pytest.raises(NotFoundError):
        create(shifts, 999, room_id)
    with pytest.raises(NotFoundError):
        create(shifts, people["employee"], 999)


def test_assignee_must_be_employee(people, room_id, shifts):
    with pytest.raises(ValidationError):
        create(shifts, people["player"], room_id)


def test_only_supervisors_manage_shifts(people, room_id, shifts):
    with pytest.raises(AuthorizationError):
        shifts.create_shift(
            current_role=Role.EMPLOYEE,
            employee_id=people["employee"],
            room_id=room_id,
            shift_date=DAY,
            start_time="09:00",
            end_time="17:00",
        )


def test_reassignment_notifies_only_new_employee(world, people, room_id, shifts):
    created = create(shifts, people["employee"], room_id)
    before = len(world.notifications.for_user(people["employee"]))

    updated = shifts.update_shift(
        current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, employee_id=people["other_employee"]
    )

    assert updated.employee_id == people["other_employee"]
    assert updated.start_time == created.shift.start_time
    assert [n.message for n in world.notifications.for_user(people["other_employee"])] == [
        "You have been assigned a shift on 2026-03-10"
    ]
    assert len(world.notifications.for_user(people["employee"])) == before


def test_update_without_reassignment_is_silent(world, people, room_id, shifts):
    created = create(shifts, people["employee"], room_id)
    written = len(world.notifications.rows)

    shifts.update_shift(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, end_time="18:00")

    assert len(world.notifications.rows) == written
    assert world.shifts.get_by_id(created.shift.shift_id).end_time == datetime(2026, 3, 10, 18, 0)


def test_deactivate(people, room_id, shifts):
    created = create(shifts, people["employee"], room_id)
    assert not shifts.deactivate(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id).is_active


def test_visibility(people, room_id, shifts):
    mine = create(shifts, people["employee"], room_id).shift
    create(shifts, people["other_employee"], room_id)

    own = shifts.list_shifts(actor_id=people["employee"], current_role=Role.EMPLOYEE)
    assert [s.shift_id for s in own] == [mine.shift_id]
    assert len(shifts.list_shifts(actor_id=people["supervisor"], current_role=Role.SUPERVISOR)) == 2

    with pytest.raises(AuthorizationError):
        shifts.list_shifts(actor_id=people["player"], current_role=Role.PLAYER)
    with pytest.raises(AuthorizationError):
        shifts.get_shift(actor_id=people["other_employee"], current_role=Role.EMPLOYEE, shift_id=mine.shift_id)


def approve_booking(world, people, room_id, start, end):
    bookings = world.container.booking_service
    b = bookings.create_booking(user_id=people["player"], room_id=room_id, start_time=start, end_time=end)
    return bookings.update_status(
        actor_id=people["supervisor"], current_role=Role.SUPERVISOR, booking_id=b.booking_id, new_status="approved"
    )


def test_moving_date_keeps_clock_times(world, people, room_id, shifts):
    created = create(shifts, people["employee"], room_id)

    moved = shifts.update_shift(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, shift_date="2026-03-12")

    assert moved.shift_date == date(2026, 3, 12)
    assert moved.start_time == datetime(2026, 3, 12, 9, 0)
    assert moved.end_time == datetime(2026, 3, 12, 17, 0)

    approve_booking(world, people, room_id, datetime(2026, 3, 12, 10), datetime(2026, 3, 12, 11))
    assert [n.message for n in world.notifications.for_user(people["employee"])][-1] == (
        "New booking approved for room Room A during your shift on 2026-03-12"
    )


def test_moving_overnight_shift_keeps_its_length(people, room_id, shifts):
    created = create(shifts, people["employee"], room_id, start="2026-03-10T20:00:00", end="2026-03-11T02:00:00")

    moved = shifts.update_shift(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, shift_date="2026-03-12")

    assert moved.start_time == datetime(2026, 3, 12, 20, 0)
    assert moved.end_time == datetime(2026, 3, 13, 2, 0)


def test_moving_date_with_new_end_time(people, room_id, shifts):
    created = create(shifts, people["employee"], room_id)

    moved = shifts.update_shift(
        current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, shift_date="2026-03-12", end_time="13:00"
    )

    assert moved.start_time == datetime(2026, 3, 12, 9, 0)
    assert moved.end_time == datetime(2026, 3, 12, 13, 0)


def test_moving_room_redirects_approval_notices(world, people, room_id, shifts):
    other_room = world.add_room("Room B")
    created = create(shifts, people["employee"], room_id)

    shifts.update_shift(current_role=Role.SUPERVISOR, shift_id=created.shift.shift_id, room_id=other_room)

    approve_booking(world, people, room_id, datetime(2026, 3, 10, 10), datetime(2026, 3, 10, 11))
    assert len(world.notifications.for_user(people["employee"])) == 1

    approve_booking(world, people, other_room, datetime(2026, 3, 10, 10), datetime(2026, 3, 10, 11))
    assert [n.message for n in world.notifications.for_user(people["employee"])][-1] == (
        "New booking approved for room Room B during your shift on 2026-03-10"
    )


@pytest.mark.parametrize("field", ["employee_id", "room_id"])
def test_non_numeric_ids_are_validation_errors(world, people, room_id, shifts, field):
    ids = {"employee_id": people["employee"], "room_id": room_id}
    ids[field] = "x"
    with pytest.raises(ValidationError):
        shifts.create_shift(
            current_role=Role.SUPERVISOR, shift_date=DAY, start_time="09:00", end_time="17:00", **ids
        )
    assert world.shifts.rows == {}

    with pytest.raises(ValidationError):
        shifts.retry_task_expansion(current_role=Role.SUPERVISOR, shift_id="abc")
