from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_role, current_user_id, json_body, json_view, pick, roles_required
from ..container import Container
from ..core.enums import Role

_SHIFT_FIELDS = {
    "employeeId": "employee_id",
    "roomId": "room_id",
    "date": "shift_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "isActive": "is_active",
}


def _expansion_dict(expansion) -> dict:
    return {
        "tasks": [t.to_dict() for t in expansion.tasks],
        "failedTemplates": [t.to_dict() for t in expansion.failed_templates],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    @roles_required(Role.EMPLOYEE, Role.SUPERVISOR)
    @json_view
    def api_shifts():
        shifts = container.shift_service.list_shifts(actor_id=current_user_id(), current_role=current_role())
        return jsonify([s.to_dict() for s in shifts])

    @app.route("/api/shifts", methods=["POST"], endpoint="api_create_shift")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_create_shift():
        data = json_body()
        created = container.shift_service.create_shift(
            current_role=current_role(),
            employee_id=data.get("employeeId"),
            room_id=data.get("roomId"),
            shift_date=data.get("date"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
        )
        body = created.shift.to_dict()
        body.update(_expansion_dict(created.expansion))
        return jsonify(body), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="api_shift")
    @roles_required(Role.EMPLOYEE, Role.SUPERVISOR)
    @json_view
    def api_shift(shift_id: int):
        shift = container.shift_service.get_shift(
            actor_id=current_user_id(), current_role=current_role(), shift_id=shift_id
        )
        return jsonify(shift.to_dict())

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="api_update_shift")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_update_shift(shift_id: int):
        changes = pick(json_body(), _SHIFT_FIELDS)
        shift = container.shift_service.update_shift(current_role=current_role(), shift_id=shift_id, **changes)
        return jsonify(shift.to_dict())

    @app.route("/api/shifts/<int:shift_id>/deactivate", methods=["POST"], endpoint="api_deactivate_shift")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_deactivate_shift(shift_id: int):
        shift = container.shift_service.deactivate(current_role=current_role(), shift_id=shift_id)
        return jsonify(shift.to_dict())

    @app.route("/api/shifts/<int:shift_id>/tasks/retry", methods=["POST"], endpoint="api_retry_shift_tasks")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_retry_shift_tasks(shift_id: int):
        result = container.shift_service.retry_task_expansion(current_role=current_role(), shift_id=shift_id)
        return jsonify(_expansion_dict(result))
