from __future__ import annotations

from flask import Flask, jsonify, send_file

from ..common.http import current_role, current_user_id, json_body, json_view, login_required, roles_required
from ..container import Container
from ..core.enums import Role
from .qr import render_png


def register(app: Flask, container: Container) -> None:
    @app.route("/api/bookings", methods=["GET"], endpoint="api_bookings")
    @login_required
    @json_view
    def api_bookings():
        bookings = container.booking_service.list_bookings(actor_id=current_user_id(), current_role=current_role())
        return jsonify([b.to_dict() for b in bookings])

    @app.route("/api/bookings", methods=["POST"], endpoint="api_create_booking")
    @login_required
    @json_view
    def api_create_booking():
        data = json_body()
        if data.get("roomId") in (None, ""):
            return jsonify({"success": False, "message": "Room is required"}), 400
        booking = container.booking_service.create_booking(
            user_id=current_user_id(),
            room_id=data.get("roomId"),
            start_time=data.get("startTime"),
            end_time=data.get("endTime"),
        )
        return jsonify(booking.to_dict()), 201

    @app.route("/api/bookings/<int:booking_id>", methods=["GET"], endpoint="api_booking")
    @login_required
    @json_view
    def api_booking(booking_id: int):
        booking = container.booking_service.get_booking(
            actor_id=current_user_id(), current_role=current_role(), booking_id=booking_id
        )
        return jsonify(booking.to_dict())

    @app.route("/api/bookings/<int:booking_id>/status", methods=["PUT"], endpoint="api_booking_status")
    @roles_required(Role.PLAYER, Role.SUPERVISOR)
    @json_view
    def api_booking_status(booking_id: int):
        data = json_body()
        booking = container.booking_service.update_status(
            actor_id=current_user_id(),
            current_role=current_role(),
            booking_id=booking_id,
            new_status=data.get("status"),
        )
        return jsonify(booking.to_dict())

    @app.route("/api/bookings/<int:booking_id>/qr.png", methods=["GET"], endpoint="api_booking_qr")
    @login_required
    @json_view
    def api_booking_qr(booking_id: int):
        token = container.booking_service.qr_token(
            actor_id=current_user_id(), current_role=current_role(), booking_id=booking_id
        )
        return send_file(render_png(token), mimetype="image/png")
