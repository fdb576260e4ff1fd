from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_role, current_user_id, json_body, json_view, login_required, roles_required
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/api/tasks/current", methods=["GET"], endpoint="api_current_tasks")
    @roles_required(Role.EMPLOYEE)
    @json_view
    def api_current_tasks():
        checklist = container.task_service.current_tasks(employee_id=current_user_id())
        return jsonify({"shift": checklist.shift.to_dict(), "tasks": [t.to_dict() for t in checklist.tasks]})

    @app.route("/api/shifts/<int:shift_id>/tasks", methods=["GET"], endpoint="api_shift_tasks")
    @login_required
    @json_view
    def api_shift_tasks(shift_id: int):
        tasks = container.task_service.list_for_shift(
            actor_id=current_user_id(), current_role=current_role(), shift_id=shift_id
        )
        return jsonify([t.to_dict() for t in tasks])

    @app.route("/api/checklist", methods=["POST"], endpoint="api_checklist")
    @roles_required(Role.EMPLOYEE)
    @json_view
    def api_checklist():
        data = json_body()
        task = container.task_service.toggle_task(
            actor_id=current_user_id(),
            task_id=data.get("taskId"),
            is_completed=data.get("isCompleted"),
        )
        return jsonify(task.to_dict())

    @app.route("/api/tasks", methods=["POST"], endpoint="api_create_task")
    @roles_required(Role.EMPLOYEE, Role.SUPERVISOR)
    @json_view
    def api_create_task():
        data = json_body()
        task = container.task_service.add_task(
            actor_id=current_user_id(),
            current_role=current_role(),
            shift_id=data.get("shiftId") or 0,
            name=data.get("name", ""),
            category=data.get("category"),
        )
        return jsonify(task.to_dict()), 201

    @app.route("/api/task-templates", methods=["GET"], endpoint="api_task_templates")
    @login_required
    @json_view
    def api_task_templates():
        templates = container.template_service.list_templates(category=request.args.get("category"))
        return jsonify([t.to_dict() for t in templates])

    @app.route("/api/task-templates", methods=["POST"], endpoint="api_create_task_template")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_create_task_template():
        data = json_body()
        template = container.template_service.create_template(
            current_role=current_role(),
            name=data.get("name", ""),
            category=data.get("category"),
            is_default=data.get("isDefault", False),
        )
        return jsonify(template.to_dict()), 201

    @app.route("/api/task-templates/<int:template_id>/default", methods=["PUT"], endpoint="api_task_template_default")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_task_template_default(template_id: int):
        data = json_body()
        template = container.template_service.set_default(
            current_role=current_role(),
            template_id=template_id,
            is_default=data.get("isDefault"),
        )
        return jsonify(template.to_dict())
