from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.http import render
from ..core.constants import SESSION_TOKEN_KEY
from ..container import Container

logger = logging.getLogger(__name__)

USER_PRIVATE_FIELDS = ("password_hash",)


def register(app: Flask, container: Container) -> None:
    guard = container.guard

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        user = container.auth_service.authenticate(request.get_json(silent=True))

        previous = session.get(SESSION_TOKEN_KEY)
        if previous:
            container.sessions.destroy(previous)
        session.clear()
        session[SESSION_TOKEN_KEY] = container.sessions.create(user.id)

        logger.info("user #%s logged in", user.id)
        return jsonify({"user": render(user, exclude=USER_PRIVATE_FIELDS)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        container.sessions.destroy(session.get(SESSION_TOKEN_KEY))
        session.clear()
        return jsonify({"message": "Logged out successfully"})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @guard.login_required
    def me():
        return jsonify({"user": render(guard.current_user(), exclude=USER_PRIVATE_FIELDS)})
