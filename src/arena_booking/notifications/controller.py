from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user_id, json_view, login_required
from ..container import Container
from ..core.constants import DEFAULT_NOTIFICATION_LIMIT


def register(app: Flask, container: Container) -> None:
    @app.route("/api/notifications", methods=["GET"], endpoint="api_notifications")
    @login_required
    @json_view
    def api_notifications():
        limit = request.args.get("limit", DEFAULT_NOTIFICATION_LIMIT, type=int)
        notifications = container.notification_service.list_for_user(current_user_id(), limit=limit)
        return jsonify([n.to_dict() for n in notifications])

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="api_notifications_unread")
    @login_required
    @json_view
    def api_notifications_unread():
        return jsonify({"count": container.notification_service.unread_count(current_user_id())})

    @app.route("/api/notifications/<int:notification_id>/read", methods=["PUT"], endpoint="api_notification_read")
    @login_required
    @json_view
    def api_notification_read(notification_id: int):
        notification = container.notification_service.mark_read(
            actor_id=current_user_id(), notification_id=notification_id
        )
        return jsonify(notification.to_dict())
