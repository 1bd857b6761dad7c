from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.exceptions import AuthenticationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or request.form
        username = payload.get("username", "")
        password = payload.get("password", "")

        try:
            s_user = container.auth_service.authenticate(username, password)
        except AuthenticationError as e:
            return jsonify(message=str(e)), 401

        session.permanent = bool(payload.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify(user_id=s_user.user_id, full_name=s_user.full_name, role=s_user.role.value)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return "", 204
