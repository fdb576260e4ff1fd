from __future__ import annotations

from datetime import date, datetime

import pytest

from arena_booking.core.enums import NotificationType, Role, TaskCategory
from arena_booking.core.exceptions import AuthorizationError, NotFoundError, ValidationError

DAY = date(2026, 3, 10)
NOON = datetime(2026, 3, 10, 12, 0)


@pytest.fixture()
def tasks(world):
    return world.container.task_service


@pytest.fixture()
def shift(world, people, room_id):
    world.add_default_templates(3)
    return world.container.shift_service.create_shift(
        current_role=Role.SUPERVISOR,
        employee_id=people["employee"],
        room_id=room_id,
        shift_date=DAY,
        start_time="09:00",
        end_time="17:00",
    ).shift


def first_task(world, shift):
    return world.tasks.list_by_shift(shift.shift_id)[0]


def test_toggle_sets_and_clears_completed_at(world, people, shift, tasks):
    task = first_task(world, shift)

    done = tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=True, now=NOON)
    assert done.is_completed and done.completed_at == NOON

    undone = tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=False)
    assert not undone.is_completed and undone.completed_at is None


def test_completion_notifies_every_supervisor(world, people, shift, tasks):
    task = first_task(world, shift)

    tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=True)

    for sup in (people["supervisor"], people["supervisor2"]):
        [n] = world.notifications.for_user(sup)
        assert n.type == NotificationType.SYSTEM
        assert n.message == f'Task "{task.name}" completed for room Room A'


def test_only_false_to_true_notifies(world, people, shift, tasks):
    task = first_task(world, shift)
    tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=True, now=NOON)
    again = tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=True)
    tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=False)

    assert again.completed_at == NOON
    assert len(world.notifications.for_user(people["supervisor"])) == 1


def test_only_the_shift_employee_may_toggle(world, people, shift, tasks):
    task = first_task(world, shift)
    for actor in (people["other_employee"], people["supervisor"]):
        with pytest.raises(AuthorizationError):
            tasks.toggle_task(actor_id=actor, task_id=task.task_id, is_completed=True)
    assert not world.tasks.get_by_id(task.task_id).is_completed


def test_toggle_errors(people, shift, tasks):
    with pytest.raises(NotFoundError):
        tasks.toggle_task(actor_id=people["employee"], task_id=999, is_completed=True)
    with pytest.raises(ValidationError):
        tasks.toggle_task(actor_id=people["employee"], task_id=1, is_completed=None)
    with pytest.raises(ValidationError):
        tasks.toggle_task(actor_id=people["employee"], task_id=1, is_completed="maybe")


def test_current_tasks_picks_todays_active_shift(world, people, shift, tasks):
    checklist = tasks.current_tasks(employee_id=people["employee"], today=DAY)
    assert checklist.shift.shift_id == shift.shift_id
    assert len(checklist.tasks) == 3

    with pytest.raises(NotFoundError):
        tasks.current_tasks(employee_id=people["employee"], today=date(2026, 3, 11))

    world.shifts.set_active(shift.shift_id, is_active=False)
    with pytest.raises(NotFoundError):
        tasks.current_tasks(employee_id=people["employee"], today=DAY)


def test_add_task(world, people, shift, tasks):
    task = tasks.add_task(
        actor_id=people["employee"],
        current_role=Role.EMPLOYEE,
        shift_id=shift.shift_id,
        name="Restock snacks",
        category="cleaning",
    )
    assert task.category == TaskCategory.CLEANING
    assert not task.is_completed

    with pytest.raises(AuthorizationError):
        tasks.add_task(
            actor_id=people["other_employee"],
            current_role=Role.EMPLOYEE,
            shift_id=shift.shift_id,
            name="x",
            category="cleaning",
        )
    with pytest.raises(ValidationError):
        tasks.add_task(
            actor_id=people["supervisor"],
            current_role=Role.SUPERVISOR,
            shift_id=shift.shift_id,
            name="x",
            category="laundry",
        )
    with pytest.raises(NotFoundError):
        tasks.add_task(
            actor_id=people["supervisor"], current_role=Role.SUPERVISOR, shift_id=999, name="x", category="cleaning"
        )


def test_list_for_shift_visibility(people, shift, tasks):
    assert len(tasks.list_for_shift(actor_id=people["supervisor"], current_role=Role.SUPERVISOR, shift_id=shift.shift_id)) == 3
    with pytest.raises(AuthorizationError):
        tasks.list_for_shift(actor_id=people["other_employee"], current_role=Role.EMPLOYEE, shift_id=shift.shift_id)


def test_templates(world):
    templates = world.container.template_service

    t = templates.create_template(current_role=Role.SUPERVISOR, name="Dust shelves", category="cleaning")
    assert t.is_default is False

    assert [x.name for x in templates.list_templates(category="cleaning")] == ["Dust shelves"]
    assert templates.list_templates(category="game_updates") == []

    flipped = templates.set_default(current_role=Role.SUPERVISOR, template_id=t.template_id, is_default=True)
    assert flipped.is_default
    assert world.templates.list_defaults() == [flipped]

    with pytest.raises(AuthorizationError):
        templates.create_template(current_role=Role.EMPLOYEE, name="x", category="cleaning")
    with pytest.raises(NotFoundError):
        templates.set_default(current_role=Role.SUPERVISOR, template_id=999, is_default=True)


def test_non_numeric_ids_are_validation_errors(people, shift, tasks):
    with pytest.raises(ValidationError):
        tasks.toggle_task(actor_id=people["employee"], task_id="abc", is_completed=True)
    with pytest.raises(ValidationError):
        tasks.add_task(
            actor_id=people["supervisor"], current_role=Role.SUPERVISOR, shift_id="x", name="x", category="cleaning"
        )


def test_supervisor_lookup_failure_keeps_completion(world, people, shift, tasks, monkeypatch):
    def broken(role):
        raise RuntimeError("users table unavailable")

    monkeypatch.setattr(world.users, "list_by_role", broken)
    task = first_task(world, shift)

    done = tasks.toggle_task(actor_id=people["employee"], task_id=task.task_id, is_completed=True)

    assert done.is_completed
    assert world.tasks.get_by_id(task.task_id).is_completed
