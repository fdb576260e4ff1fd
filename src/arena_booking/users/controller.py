from __future__ import annotations

import logging
from datetime import timedelta

from flask import Flask, jsonify, session

from ..common.http import current_role, current_user_id, json_body, json_view, login_required, roles_required
from ..container import Container
from ..core.enums import Role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/register", methods=["POST"], endpoint="api_register")
    @json_view
    def api_register():
        data = json_body()
        user = container.auth_service.register(
            username=data.get("username", ""),
            password=data.get("password", ""),
            email=data.get("email", ""),
            full_name=data.get("fullName", ""),
            role=data.get("role") or Role.PLAYER,
            phone=data.get("phone"),
        )
        return jsonify(user.public_dict()), 201

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    @json_view
    def api_login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("rememberMe"))
        app.permanent_session_lifetime = timedelta(days=int(app.config.get("SESSION_DAYS", 7)))

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        logger.info("User %s logged in", s_user.user_id)
        return jsonify(container.user_service.get(s_user.user_id).public_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def api_logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/current-user", methods=["GET"], endpoint="api_current_user")
    @login_required
    @json_view
    def api_current_user():
        return jsonify(container.user_service.get(current_user_id()).public_dict())

    @app.route("/api/employees", methods=["GET"], endpoint="api_employees")
    @roles_required(Role.SUPERVISOR)
    @json_view
    def api_employees():
        employees = container.user_service.list_employees(current_role=current_role())
        return jsonify([u.public_dict() for u in employees])
