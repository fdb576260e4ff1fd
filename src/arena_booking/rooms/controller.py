from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_role, json_body, json_view, login_required, pick, roles_required
from ..container import Container
from ..core.enums import Role

_ROOM_FIELDS = {
    "name": "name",
    "capacity": "capacity",
    "hourlyRate": "hourly_rate",
    "equipment": "equipment",
    "description": "description",
    "isActive": "is_active",
}


def _optional_number(name: str, cast):
    raw = (request.args.get(name) or "").strip()
    return cast(raw) if raw else None


def register(app: Flask, container: Container) -> None:
    @app.route("/api/rooms", methods=["GET"], endpoint="api_rooms")
    @json_view
    def api_rooms():
        args = request.args
        if any(args.get(k) for k in ("equipment", "minCapacity", "minRate", "maxRate")):
            try:
                rooms = container.room_service.filter_rooms(
                    equipment=args.get("equipment"),
                    min_capacity=_optional_number("minCapacity", int),
                    min_rate=_optional_number("minRate", float),
                    max_rate=_optional_number("maxRate", float),
                )
            except ValueError:
                return jsonify({"success": False, "message": "Invalid filter value"}), 400
        else:
            include_inactive = args.get("includeInactive") == "1" and session.get("role") == Role.SUPERVISOR.value
            rooms = container.room_service.list_rooms(include_inactive=include_inactive)
        return jsonify([r.to_dict() for r in rooms])

    @app.route("/api/rooms/equipment", methods=["GET"], endpoint="api_room_equipment")
    @json_view
    def api_room_equipment():
        return jsonify(container.room_service.equipment_options())

    @app.route("/api/rooms/<int:room_id>", methods=["GET"], endpoint="api_room")
    @json_view
    def api_room(room_id: int):
        return jsonify(container.room_service.get(room_id).to_dict())

    @app.route("/api/rooms/<int:room_id>/availability", methods=["GET"], endpoint="api_room_availability")
    @login_required
    @json_view
    def api_room_availability(room_id: int):
        day = parse_iso_date(request.args.get("date", ""))
        slots = container.booking_service.availability(room_id=room_id, day=day)
        return jsonify([s.to_dict() for s in slots])

    @app.route("/api/rooms", methods=["POST"], endpoint="api_create_room")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_create_room():
        data = json_body()
        room = container.room_service.create(
            current_role=current_role(),
            name=data.get("name", ""),
            capacity=data.get("capacity"),
            hourly_rate=data.get("hourlyRate"),
            equipment=data.get("equipment"),
            description=data.get("description"),
        )
        return jsonify(room.to_dict()), 201

    @app.route("/api/rooms/<int:room_id>", methods=["PUT"], endpoint="api_update_room")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_update_room(room_id: int):
        changes = pick(json_body(), _ROOM_FIELDS)
        room = container.room_service.update(current_role=current_role(), room_id=room_id, **changes)
        return jsonify(room.to_dict())

    @app.route("/api/rooms/<int:room_id>/deactivate", methods=["POST"], endpoint="api_deactivate_room")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_deactivate_room(room_id: int):
        room = container.room_service.deactivate(current_role=current_role(), room_id=room_id)
        return jsonify(room.to_dict())
